"""
Note rendering: feeds classified pull requests into Jinja2 templates.
"""
from __future__ import annotations

import dataclasses
import json
from pathlib import Path
from typing import Any

from jinja2 import Environment, FileSystemLoader, StrictUndefined, TemplateError, TemplateNotFound

from .config import DEFAULT_TEMPLATE_PATH, DEFAULT_TITLE_TEMPLATE
from .errors import RenderError
from .models import ClassifiedPullRequest, Note


def _template_env(template_dir: Path) -> Environment:
    return Environment(
        loader=FileSystemLoader(str(template_dir)),
        autoescape=False,
        trim_blocks=True,
        lstrip_blocks=True,
        undefined=StrictUndefined,
    )


def pr_view(prs: list[ClassifiedPullRequest]) -> list[dict[str, Any]]:
    return [dataclasses.asdict(pr) for pr in prs]


def group_view(view: list[dict[str, Any]]) -> dict[str, list[dict[str, Any]]]:
    groups: dict[str, list[dict[str, Any]]] = {}
    for pr in view:
        groups.setdefault(pr["group"], []).append(pr)
    return groups


def render_note(
    prs: list[ClassifiedPullRequest],
    template_path: Path | str | None = None,
    title_template: str = DEFAULT_TITLE_TEMPLATE,
    **context: Any,
) -> Note:
    """Render the tracking pull request's title and body.

    The body template sees ``prs`` (one dict per pull request), ``groups``
    (group key -> pull requests, first-seen order) and every extra keyword in
    ``context``. The title template sees the same values.
    """
    path = Path(template_path) if template_path is not None else DEFAULT_TEMPLATE_PATH
    view = pr_view(prs)
    values = {"prs": view, "groups": group_view(view), **context}

    env = _template_env(path.parent)
    try:
        body_template = env.get_template(path.name)
        title_source = env.from_string(title_template)
    except TemplateNotFound as exc:
        raise RenderError(f"Template not found: {path}") from exc
    except TemplateError as exc:
        raise RenderError(f"Failed to parse template {path}: {exc}") from exc
    except (OSError, UnicodeDecodeError) as exc:
        raise RenderError(f"Could not read template {path}: {exc}") from exc

    # Any exception raised by a template expression is a render failure
    try:
        body = body_template.render(**values)
        title = title_source.render(**values)
    except Exception as exc:
        raise RenderError(f"Failed to render template {path}: {exc}") from exc

    return Note(title=title.strip(), body=body)


def format_json(prs: list[ClassifiedPullRequest]) -> str:
    return json.dumps(pr_view(prs), indent=2)
