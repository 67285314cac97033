"""Async read-only GitHub REST/GraphQL client using httpx."""

from __future__ import annotations

from typing import Any

import httpx

from gitcord.errors import GitHubError
from gitcord.utils.logging import get_logger

log = get_logger(__name__)

DEFAULT_API_URL = "https://api.github.com"
API_VERSION = "2022-11-28"

CONTRIBUTIONS_QUERY = """
query($login: String!) {
  user(login: $login) {
    contributionsCollection {
      totalCommitContributions
      totalIssueContributions
      totalPullRequestContributions
      totalPullRequestReviewContributions
    }
  }
}
"""


def parse_repo(value: str) -> tuple[str, str]:
    """Split ``owner/repo``. Raises ValueError on anything else."""
    owner, sep, repo = value.strip().partition("/")
    if not sep or not owner or not repo or "/" in repo:
        raise ValueError(f"Repository must be in owner/repo format, got {value!r}")
    return owner, repo


class GitHubClient:
    """Thin wrapper over the endpoints the slash commands need."""

    def __init__(
        self,
        token: str = "",
        base_url: str = DEFAULT_API_URL,
        transport: httpx.AsyncBaseTransport | None = None,
        timeout: float = 30,
    ) -> None:
        headers = {
            "Accept": "application/vnd.github+json",
            "X-GitHub-Api-Version": API_VERSION,
            "User-Agent": "gitcord",
        }
        if token:
            headers["Authorization"] = f"Bearer {token}"
        self._http = httpx.AsyncClient(
            base_url=base_url.rstrip("/"),
            headers=headers,
            timeout=timeout,
            transport=transport,
        )

    async def close(self) -> None:
        await self._http.aclose()

    # ------------------------------------------------------------------
    # Transport
    # ------------------------------------------------------------------

    async def _request(self, method: str, path: str, **kwargs: Any) -> httpx.Response:
        try:
            resp = await self._http.request(method, path, **kwargs)
        except httpx.HTTPError as exc:
            log.error("github_request_error", method=method, path=path, error=str(exc))
            raise GitHubError(f"GitHub request failed: {exc}") from exc

        if resp.is_error:
            message = resp.reason_phrase
            try:
                body = resp.json()
            except ValueError:
                body = None
            if isinstance(body, dict):
                message = body.get("message", message)
            log.warning("github_api_error", method=method, path=path, status=resp.status_code)
            raise GitHubError(f"GitHub API error {resp.status_code}: {message}", resp.status_code)
        return resp

    async def _get(self, path: str, **params: Any) -> Any:
        resp = await self._request("GET", path, params=params or None)
        # 204 for empty repositories
        if not resp.content:
            return None
        return resp.json()

    # ------------------------------------------------------------------
    # Repositories
    # ------------------------------------------------------------------

    async def get_repo(self, owner: str, repo: str) -> dict[str, Any]:
        return await self._get(f"/repos/{owner}/{repo}")

    async def list_contributors(self, owner: str, repo: str) -> list[dict[str, Any]]:
        return await self._get(f"/repos/{owner}/{repo}/contributors") or []

    async def list_languages(self, owner: str, repo: str) -> dict[str, int]:
        return await self._get(f"/repos/{owner}/{repo}/languages") or {}

    # ------------------------------------------------------------------
    # Users
    # ------------------------------------------------------------------

    async def get_user(self, username: str) -> dict[str, Any]:
        return await self._get(f"/users/{username}")

    async def list_user_repos(
        self, username: str, sort: str = "updated", per_page: int = 5
    ) -> list[dict[str, Any]]:
        return await self._get(f"/users/{username}/repos", sort=sort, per_page=per_page)

    async def get_contributions(self, username: str) -> dict[str, Any] | None:
        """Contribution totals via GraphQL, or None if the user is unknown."""
        data = await self.graphql(CONTRIBUTIONS_QUERY, login=username)
        user = data.get("user") or {}
        return user.get("contributionsCollection")

    # ------------------------------------------------------------------
    # Pull requests
    # ------------------------------------------------------------------

    async def list_pulls(
        self, owner: str, repo: str, state: str = "open"
    ) -> list[dict[str, Any]]:
        return await self._get(f"/repos/{owner}/{repo}/pulls", state=state)

    async def get_pull(self, owner: str, repo: str, number: int) -> dict[str, Any]:
        return await self._get(f"/repos/{owner}/{repo}/pulls/{number}")

    # ------------------------------------------------------------------
    # Search / markdown
    # ------------------------------------------------------------------

    async def search_code(self, query: str, per_page: int = 10) -> dict[str, Any]:
        return await self._get("/search/code", q=query, per_page=per_page)

    async def search_repos(self, query: str, per_page: int = 10) -> dict[str, Any]:
        return await self._get("/search/repositories", q=query, per_page=per_page)

    async def render_markdown(self, text: str, mode: str = "gfm") -> str:
        resp = await self._request("POST", "/markdown", json={"text": text, "mode": mode})
        return resp.text

    # ------------------------------------------------------------------
    # GraphQL
    # ------------------------------------------------------------------

    async def graphql(self, query: str, **variables: Any) -> dict[str, Any]:
        resp = await self._request(
            "POST", "/graphql", json={"query": query, "variables": variables}
        )
        body = resp.json()
        if body.get("errors"):
            first = body["errors"][0].get("message", "unknown error")
            raise GitHubError(f"GraphQL error: {first}")
        return body.get("data") or {}
