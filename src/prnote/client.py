from __future__ import annotations

from typing import Any

import httpx

from .config import DEFAULT_COMMITS, DEFAULT_HOST, graphql_url, rest_url
from .errors import ApiError, AuthError, NetworkError, UpsertError
from .models import QueryResponse, UpsertResult
from .queries import UNMERGED_COMMITS_QUERY


class GitHubClient:
    def __init__(self, token: str, host: str = DEFAULT_HOST) -> None:
        self._graphql_url = graphql_url(host)
        self._rest_url = rest_url(host)
        self._client = httpx.Client(
            headers={
                "Authorization": f"Bearer {token}",
                "Accept": "application/vnd.github+json",
                "X-GitHub-Api-Version": "2022-11-28",
                "User-Agent": "prnote",
            },
            timeout=httpx.Timeout(30.0),
        )

    def __enter__(self) -> GitHubClient:
        return self

    def __exit__(self, *args: Any) -> None:
        self._client.close()

    def _request(self, method: str, url: str, **kwargs: Any) -> Any:
        try:
            response = self._client.request(method, url, **kwargs)
        except httpx.RequestError as exc:
            raise NetworkError(str(exc)) from exc

        if response.status_code == 401:
            raise AuthError("GitHub token is invalid or missing required scopes.")
        if not response.is_success:
            raise ApiError(
                f"GitHub API returned HTTP {response.status_code}: {response.text}",
                status_code=response.status_code,
            )

        try:
            return response.json()
        except ValueError as exc:
            raise ApiError(f"GitHub API returned invalid JSON from {url}") from exc

    def execute(self, query: str, variables: dict[str, Any] | None = None) -> QueryResponse:
        payload: dict[str, Any] = {"query": query}
        if variables:
            payload["variables"] = variables

        body = self._request("POST", self._graphql_url, json=payload)
        if not isinstance(body, dict):
            raise ApiError("GitHub GraphQL API returned an unexpected payload.")
        return QueryResponse(data=body.get("data"), errors=body.get("errors") or [])

    def fetch_unmerged_commits(
        self,
        owner: str,
        repo: str,
        base: str,
        head: str,
        commits: int = DEFAULT_COMMITS,
    ) -> QueryResponse:
        return self.execute(
            UNMERGED_COMMITS_QUERY,
            {"owner": owner, "repo": repo, "base": base, "head": head, "commits": commits},
        )

    def find_open_pull_request(
        self, owner: str, repo: str, base: str, head: str
    ) -> dict[str, Any] | None:
        pulls = self._request(
            "GET",
            f"{self._rest_url}/repos/{owner}/{repo}/pulls",
            params={"head": f"{owner}:{head}", "base": base, "state": "open"},
        )
        return pulls[0] if pulls else None

    def create_pull_request(
        self, owner: str, repo: str, base: str, head: str, title: str, body: str
    ) -> dict[str, Any]:
        return self._request(
            "POST",
            f"{self._rest_url}/repos/{owner}/{repo}/pulls",
            json={"title": title, "head": head, "base": base, "body": body},
        )

    def update_pull_request(
        self, owner: str, repo: str, number: int, title: str, body: str
    ) -> dict[str, Any]:
        return self._request(
            "PATCH",
            f"{self._rest_url}/repos/{owner}/{repo}/pulls/{number}",
            json={"title": title, "body": body, "state": "open"},
        )

    def upsert_pull_request(
        self, owner: str, repo: str, base: str, head: str, title: str, body: str
    ) -> UpsertResult:
        """Update the open head -> base pull request, or create one if there is none."""
        try:
            existing = self.find_open_pull_request(owner, repo, base, head)
            if existing is not None:
                pr = self.update_pull_request(owner, repo, existing["number"], title, body)
                action = "updated"
            else:
                pr = self.create_pull_request(owner, repo, base, head, title, body)
                action = "created"
        except ApiError as exc:
            raise UpsertError(str(exc), status_code=exc.status_code) from exc
        except NetworkError as exc:
            raise UpsertError(str(exc)) from exc

        return UpsertResult(action=action, number=pr["number"], url=pr["html_url"])
