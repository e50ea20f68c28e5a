"""tools/github/client.py

Minimal GitHub REST client for posting benchmark comments.

Only two endpoints are used:

  POST /repos/{owner}/{repo}/issues/{number}/comments   (pull request thread)
  POST /repos/{owner}/{repo}/commits/{sha}/comments     (commit thread)

Both return the created comment; we only keep its id.
"""

from __future__ import annotations

from typing import Any, Dict, Optional

import requests

DEFAULT_API_URL = "https://api.github.com"
DEFAULT_TIMEOUT_SECONDS = 30

# 404 shows up instead of 403 when the token cannot even see the repository.
AUTH_STATUS_CODES = frozenset({401, 403, 404})


class GitHubApiError(RuntimeError):
    """Any failure talking to the GitHub API."""

    def __init__(self, message: str, *, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class GitHubAuthError(GitHubApiError):
    """The token is not allowed to perform the request (e.g. fork runs)."""


def split_repository(repository: str) -> tuple[str, str]:
    """``"owner/repo"`` -> ``("owner", "repo")``."""
    owner, sep, repo = (repository or "").strip().partition("/")
    if not sep or not owner or not repo or "/" in repo:
        raise ValueError(f"Expected 'owner/repo', got {repository!r}")
    return owner, repo


class GitHubClient:
    def __init__(
        self,
        token: Optional[str],
        *,
        api_url: str = DEFAULT_API_URL,
        timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.token = token
        self.api_url = (api_url or DEFAULT_API_URL).rstrip("/")
        self.timeout_seconds = timeout_seconds
        self.session = session or requests.Session()

    def _headers(self) -> Dict[str, str]:
        headers = {
            "Accept": "application/vnd.github+json",
            "X-GitHub-Api-Version": "2022-11-28",
        }
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        return headers

    def _post(self, path: str, payload: Dict[str, Any]) -> Dict[str, Any]:
        url = f"{self.api_url}{path}"
        try:
            resp = self.session.post(
                url, json=payload, headers=self._headers(), timeout=self.timeout_seconds
            )
        except requests.RequestException as e:
            raise GitHubApiError(f"POST {url} failed: {e}") from e

        if resp.status_code in AUTH_STATUS_CODES:
            raise GitHubAuthError(
                f"HttpError: {resp.status_code} {_message(resp)}", status_code=resp.status_code
            )
        if not resp.ok:
            raise GitHubApiError(
                f"HttpError: {resp.status_code} {_message(resp)}", status_code=resp.status_code
            )
        try:
            data = resp.json()
        except ValueError as e:
            raise GitHubApiError(f"POST {url} returned invalid JSON") from e
        return data if isinstance(data, dict) else {}

    def create_issue_comment(self, owner: str, repo: str, issue_number: int, body: str) -> int:
        data = self._post(f"/repos/{owner}/{repo}/issues/{int(issue_number)}/comments", {"body": body})
        return _comment_id(data)

    def create_commit_comment(self, owner: str, repo: str, commit_sha: str, body: str) -> int:
        data = self._post(f"/repos/{owner}/{repo}/commits/{commit_sha}/comments", {"body": body})
        return _comment_id(data)


def _message(resp: requests.Response) -> str:
    try:
        data = resp.json()
    except ValueError:
        return resp.text[:200]
    if isinstance(data, dict) and data.get("message"):
        return str(data["message"])
    return resp.text[:200]


def _comment_id(data: Dict[str, Any]) -> int:
    try:
        return int(data["id"])
    except (KeyError, TypeError, ValueError) as e:
        raise GitHubApiError("Comment created but response has no id") from e
