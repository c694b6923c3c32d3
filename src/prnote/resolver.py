"""Turn a branch-comparison response into the pull requests it mentions."""
from __future__ import annotations

from collections.abc import Iterator, Mapping
from typing import Any

from .models import PullRequest, QueryResponse

UNKNOWN_AUTHOR = "unknown"


def _dig(node: Any, *keys: str) -> Any:
    """Follow ``keys`` into nested mappings, returning None at the first absent level."""
    for key in keys:
        if not isinstance(node, Mapping):
            return None
        node = node.get(key)
    return node


def _nodes(node: Any, *keys: str) -> list[Any]:
    nodes = _dig(node, *keys, "nodes")
    if not isinstance(nodes, list):
        return []
    return [n for n in nodes if n is not None]


def _iter_pr_nodes(data: Any) -> Iterator[Mapping[str, Any]]:
    for commit in _nodes(data, "repository", "ref", "compare", "commits"):
        for pr in _nodes(commit, "associatedPullRequests"):
            if isinstance(pr, Mapping):
                yield pr


def _parse_pull_request(node: Mapping[str, Any]) -> PullRequest:
    return PullRequest(
        number=node["number"],
        title=node.get("title") or "",
        body=node.get("body") or "",
        author=_dig(node, "author", "login") or UNKNOWN_AUTHOR,
        labels=[lbl["name"] for lbl in _nodes(node, "labels") if _dig(lbl, "name")],
    )


def resolve(response: QueryResponse | None) -> list[PullRequest]:
    """Return the unique pull requests behind the unmerged commits, in first-seen order.

    A missing response, or one without a data payload, yields an empty list.
    Callers check ``response.errors`` to tell that apart from a comparison
    that genuinely has nothing unmerged.
    """
    if response is None or response.data is None:
        return []

    seen: dict[int, PullRequest] = {}
    for node in _iter_pr_nodes(response.data):
        number = node.get("number")
        if number is None or number in seen:
            continue
        seen[number] = _parse_pull_request(node)
    return list(seen.values())
