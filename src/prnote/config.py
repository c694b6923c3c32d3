from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

DEFAULT_HOST = "api.github.com"
DEFAULT_COMMITS = 100
DEFAULT_TITLE_TEMPLATE = "Release {{ date }}"
DEFAULT_TEMPLATE_PATH = Path(__file__).parent / "templates" / "note.md.j2"


def normalize_host(host: str) -> str:
    host = host.strip()
    for scheme in ("https://", "http://"):
        if host.startswith(scheme):
            host = host[len(scheme):]
    return host.rstrip("/")


def graphql_url(host: str) -> str:
    host = normalize_host(host)
    if host == DEFAULT_HOST:
        return f"https://{host}/graphql"
    return f"https://{host}/api/graphql"


def rest_url(host: str) -> str:
    host = normalize_host(host)
    if host == DEFAULT_HOST:
        return f"https://{host}"
    return f"https://{host}/api/v3"


@dataclass(frozen=True)
class Target:
    """The repository and branch pair a note is generated for."""

    owner: str
    repo: str
    base: str
    head: str

    def __str__(self) -> str:
        return f"{self.owner}/{self.repo} ({self.base}...{self.head})"
