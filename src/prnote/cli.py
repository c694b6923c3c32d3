from __future__ import annotations

import sys
from collections.abc import Callable
from datetime import date
from pathlib import Path
from typing import Any

import click
from dotenv import load_dotenv
from rich.console import Console
from rich.markup import escape
from rich.progress import Progress, SpinnerColumn, TextColumn

from .client import GitHubClient
from .config import DEFAULT_COMMITS, DEFAULT_HOST, DEFAULT_TITLE_TEMPLATE, Target
from .errors import PrNoteError, RenderError, UpsertError
from .grouping import classify
from .models import ClassifiedPullRequest, GroupMode, QueryResponse
from .render import format_json, render_note
from .resolver import resolve

_stderr = Console(stderr=True)


def _target_options(func: Callable[..., Any]) -> Callable[..., Any]:
    options = [
        click.option("--host", envvar="GITHUB_HOST", default=DEFAULT_HOST, show_default=True,
                     help="GitHub API host (GitHub Enterprise hosts use /api/graphql)."),
        click.option("--owner", envvar="REPO_OWNER", required=True, help="Repository owner."),
        click.option("--repo", envvar="REPO_NAME", required=True, help="Repository name."),
        click.option("--base", envvar="BASE_BRANCH", required=True,
                     help="Base branch the tracking pull request targets."),
        click.option("--head", envvar="HEAD_BRANCH", required=True,
                     help="Head branch holding the unmerged commits."),
        click.option("--token", envvar=["GITHUB_API_TOKEN", "GITHUB_TOKEN"], default=None,
                     show_envvar=True, help="GitHub API token."),
        click.option(
            "--commits",
            envvar="COMMITS",
            type=click.IntRange(min=1),
            default=DEFAULT_COMMITS,
            show_default=True,
            help="Maximum number of unmerged commits to inspect.",
        ),
        click.option(
            "--group-by",
            envvar="GROUP_BY",
            type=click.Choice([GroupMode.LABEL.value, GroupMode.TITLE.value]),
            default=None,
            help="Group pull requests by label or by leading [tag] in the title.",
        ),
    ]
    for option in reversed(options):
        func = option(func)
    return func


def _require_token(token: str | None) -> str:
    if not token:
        _stderr.print("[red]Error:[/red] GITHUB_API_TOKEN (or GITHUB_TOKEN) is not set.")
        sys.exit(1)
    return token


def _fetch(client: GitHubClient, target: Target, commits: int) -> QueryResponse:
    with Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        console=_stderr,
        transient=True,
    ) as progress:
        progress.add_task(f"Comparing {escape(str(target))}…", total=None)
        return client.fetch_unmerged_commits(
            target.owner, target.repo, target.base, target.head, commits
        )


def _resolve_and_classify(
    response: QueryResponse, target: Target, group_by: str | None
) -> list[ClassifiedPullRequest]:
    """Resolve and classify, exiting early when there is nothing to render."""
    prs = resolve(response)

    for message in response.error_messages:
        _stderr.print(f"[yellow]Warning:[/yellow] GitHub reported an error: {escape(message)}")

    if not prs:
        if response.errors:
            _stderr.print(
                f"[yellow]Warning:[/yellow] Query for {escape(str(target))} returned errors and no usable data."
            )
            sys.exit(1)
        _stderr.print(f"[green]No unmerged pull requests found for {escape(str(target))}.[/green]")
        sys.exit(0)

    mode = GroupMode(group_by) if group_by else GroupMode.NONE
    return classify(prs, mode)


@click.group()
def cli() -> None:
    """prnote — keep a release pull request listing every unmerged pull request."""
    load_dotenv()


@cli.command()
@_target_options
@click.option(
    "--template-path",
    envvar="TEMPLATE_PATH",
    type=click.Path(path_type=Path, dir_okay=False),
    default=None,
    help="Jinja2 template for the pull request body (defaults to the bundled template).",
)
@click.option(
    "--title",
    "title_template",
    envvar="PR_TITLE",
    default=DEFAULT_TITLE_TEMPLATE,
    show_default=True,
    help="Jinja2 template for the pull request title.",
)
@click.option(
    "--dry-run",
    envvar="DRY_RUN",
    is_flag=True,
    default=False,
    help="Print the note without creating or updating a pull request.",
)
def publish(
    host: str,
    owner: str,
    repo: str,
    base: str,
    head: str,
    token: str | None,
    commits: int,
    group_by: str | None,
    template_path: Path | None,
    title_template: str,
    dry_run: bool,
) -> None:
    """Create or update the BASE <- HEAD pull request with a note of unmerged pull requests."""
    token = _require_token(token)
    target = Target(owner=owner, repo=repo, base=base, head=head)

    try:
        with GitHubClient(token, host=host) as client:
            response = _fetch(client, target, commits)
            prs = _resolve_and_classify(response, target, group_by)

            try:
                note = render_note(
                    prs,
                    template_path=template_path,
                    title_template=title_template,
                    date=date.today().isoformat(),
                    owner=owner,
                    repo=repo,
                    base=base,
                    head=head,
                )
            except RenderError as exc:
                _stderr.print(f"[red]Error:[/red] {escape(str(exc))}")
                sys.exit(1)

            click.echo(note.title)
            click.echo()
            click.echo(note.body)

            if dry_run:
                _stderr.print(f"[green]Dry run: {len(prs)} PRs, no pull request was changed.[/green]")
                return

            try:
                result = client.upsert_pull_request(owner, repo, base, head, note.title, note.body)
            except UpsertError as exc:
                _stderr.print(f"[red]Error:[/red] Could not create or update the pull request: {escape(str(exc))}")
                sys.exit(1)
    except PrNoteError as exc:
        _stderr.print(f"[red]Error:[/red] {escape(str(exc))}")
        sys.exit(1)

    _stderr.print(f"[green]{result.action.capitalize()} pull request #{result.number}: {result.url}[/green]")


@cli.command(name="list")
@_target_options
@click.option(
    "--output",
    "output_path",
    type=click.Path(path_type=Path),
    default=None,
    help="Write output to a file instead of stdout.",
)
def list_prs(
    host: str,
    owner: str,
    repo: str,
    base: str,
    head: str,
    token: str | None,
    commits: int,
    group_by: str | None,
    output_path: Path | None,
) -> None:
    """Print the unmerged pull requests between BASE and HEAD as JSON."""
    token = _require_token(token)
    target = Target(owner=owner, repo=repo, base=base, head=head)

    try:
        with GitHubClient(token, host=host) as client:
            response = _fetch(client, target, commits)
    except PrNoteError as exc:
        _stderr.print(f"[red]Error:[/red] {escape(str(exc))}")
        sys.exit(1)

    prs = _resolve_and_classify(response, target, group_by)
    output = format_json(prs)

    if output_path is not None:
        output_path.write_text(output, encoding="utf-8")
        _stderr.print(f"[green]Wrote {len(prs)} PRs to {output_path}[/green]")
    else:
        click.echo(output)
