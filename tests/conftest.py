"""Shared factories and fixtures for the test suite."""
from __future__ import annotations

import pytest

from prnote.models import ClassifiedPullRequest, PullRequest, QueryResponse

# ---------------------------------------------------------------------------
# GraphQL node factories — return raw dicts that mirror API responses
# ---------------------------------------------------------------------------


def pr_ref_node(
    number: int = 1,
    title: str = "Fix bug",
    body: str | None = "Fixes the bug",
    author: str | None = "alice",
    labels: list[str] | None = None,
) -> dict:
    return {
        "number": number,
        "title": title,
        "body": body,
        "author": {"login": author} if author else None,
        "labels": {"nodes": [{"name": lbl} for lbl in (labels or [])]},
    }


def commit_node(oid: str = "abc123", pr_nodes: list[dict | None] | None = None) -> dict:
    return {
        "oid": oid,
        "associatedPullRequests": {"nodes": pr_nodes if pr_nodes is not None else []},
    }


def unmerged_commits_data(commit_nodes: list[dict | None]) -> dict:
    return {
        "repository": {
            "ref": {
                "compare": {
                    "commits": {"nodes": commit_nodes},
                }
            }
        }
    }


def unmerged_commits_body(commit_nodes: list[dict | None]) -> dict:
    return {"data": unmerged_commits_data(commit_nodes)}


def query_response(commit_nodes: list[dict | None], errors: list[dict] | None = None) -> QueryResponse:
    return QueryResponse(data=unmerged_commits_data(commit_nodes), errors=errors or [])


def pull_node(number: int = 7, url: str | None = None) -> dict:
    """A REST pull request object, trimmed to the fields prnote reads."""
    return {
        "number": number,
        "html_url": url or f"https://github.com/owner/repo/pull/{number}",
        "state": "open",
    }


# ---------------------------------------------------------------------------
# Model object factories — construct typed model instances
# ---------------------------------------------------------------------------


def make_pull_request(
    number: int = 1,
    title: str = "Fix bug",
    body: str = "Fixes the bug",
    author: str = "alice",
    labels: list[str] | None = None,
) -> PullRequest:
    return PullRequest(
        number=number,
        title=title,
        body=body,
        author=author,
        labels=labels or [],
    )


def make_classified(
    number: int = 1,
    title: str = "Fix bug",
    body: str = "Fixes the bug",
    author: str = "alice",
    labels: list[str] | None = None,
    group: str = "ungrouped",
) -> ClassifiedPullRequest:
    return ClassifiedPullRequest(
        number=number,
        title=title,
        body=body,
        author=author,
        labels=labels or [],
        group=group,
    )


# ---------------------------------------------------------------------------
# Autouse fixtures
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def no_dotenv(mocker):
    """Prevent tests from loading a real .env file."""
    mocker.patch("prnote.cli.load_dotenv")
