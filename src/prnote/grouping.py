from __future__ import annotations

import re
from collections.abc import Iterable

from .models import ClassifiedPullRequest, GroupMode, PullRequest

UNGROUPED = "ungrouped"
OTHERS = "others"
GROUP_SEPARATOR = " / "

# Leading run of bracket tags, e.g. "[docs][ci]" in "[docs][ci] Fix build".
# Nothing, not even whitespace, may sit between two groups of the run.
_LEADING_TAGS = re.compile(r"^\s*(?:\[[^\[\]]+\])+")
_TAG = re.compile(r"\[([^\[\]]+)\]")


def title_tags(title: str) -> list[str]:
    match = _LEADING_TAGS.match(title)
    if match is None:
        return []
    return _TAG.findall(match.group(0))


def group_for(pr: PullRequest, mode: GroupMode) -> str:
    if mode is GroupMode.LABEL:
        return GROUP_SEPARATOR.join(pr.labels) if pr.labels else OTHERS
    if mode is GroupMode.TITLE:
        tags = sorted(title_tags(pr.title))
        return GROUP_SEPARATOR.join(tags) if tags else OTHERS
    return UNGROUPED


def classify(prs: Iterable[PullRequest], mode: GroupMode = GroupMode.NONE) -> list[ClassifiedPullRequest]:
    return [
        ClassifiedPullRequest(
            number=pr.number,
            title=pr.title,
            body=pr.body,
            author=pr.author,
            labels=list(pr.labels),
            group=group_for(pr, mode),
        )
        for pr in prs
    ]
