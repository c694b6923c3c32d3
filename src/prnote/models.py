from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class GroupMode(str, Enum):
    NONE = "none"
    LABEL = "label"
    TITLE = "title"


@dataclass(frozen=True)
class QueryResponse:
    data: dict[str, Any] | None
    errors: list[dict[str, Any]] = field(default_factory=list)

    @property
    def error_messages(self) -> list[str]:
        return [err.get("message", "Unknown GraphQL error") for err in self.errors]


@dataclass(frozen=True)
class PullRequest:
    number: int
    title: str
    body: str
    author: str
    labels: list[str]


@dataclass(frozen=True)
class ClassifiedPullRequest:
    number: int
    title: str
    body: str
    author: str
    labels: list[str]
    group: str


@dataclass(frozen=True)
class Note:
    title: str
    body: str


@dataclass(frozen=True)
class UpsertResult:
    action: str
    number: int
    url: str
