from __future__ import annotations

import json
import re
from dataclasses import dataclass
from typing import Any
from urllib.error import HTTPError, URLError
from urllib.parse import urlencode
from urllib.request import Request, urlopen

from iconpipe.config import DEFAULT_GITHUB_API_BASE

_REMOTE_RE = re.compile(r"github\.com[/:]([^/]+)/([^/]+?)(?:\.git)?/?$")


class GitHubError(RuntimeError):
    pass


@dataclass(frozen=True)
class RepoInfo:
    owner: str
    repo: str


def parse_repo_info(remote_url: str) -> RepoInfo:
    m = _REMOTE_RE.search((remote_url or "").strip())
    if not m:
        raise ValueError(f"Remote is not a GitHub repository: {remote_url}")
    return RepoInfo(owner=m.group(1), repo=m.group(2))


def new_release_url(repo: RepoInfo, *, tag: str, title: str, body: str) -> str:
    """Pre-filled "draft a new release" page, used when no token is available."""
    query = urlencode({"tag": tag, "title": title, "body": body})
    return f"https://github.com/{repo.owner}/{repo.repo}/releases/new?{query}"


class GitHubClient:
    def __init__(self, *, api_base: str = DEFAULT_GITHUB_API_BASE, token: str = "", timeout: float = 30) -> None:
        self.api_base = api_base.rstrip("/")
        self.token = token
        self.timeout = timeout

    def _request(self, method: str, path: str, payload: dict[str, Any] | None = None) -> dict[str, Any]:
        headers = {
            "Accept": "application/vnd.github+json",
            "User-Agent": "iconpipe-release",
        }
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        data = None
        if payload is not None:
            headers["Content-Type"] = "application/json"
            data = json.dumps(payload).encode("utf-8")

        req = Request(f"{self.api_base}{path}", data=data, headers=headers, method=method)
        try:
            with urlopen(req, timeout=self.timeout) as resp:  # nosec - GitHub API call
                raw = resp.read().decode("utf-8", errors="replace")
        except HTTPError as e:
            body = e.read().decode("utf-8", errors="replace") if hasattr(e, "read") else ""
            raise GitHubError(f"GitHub request failed: HTTP {e.code} {body[:400]}") from e
        except URLError as e:
            raise GitHubError(f"GitHub request failed: {e}") from e

        obj = json.loads(raw)
        if not isinstance(obj, dict):
            raise GitHubError("GitHub response was not a JSON object")
        return obj

    def latest_commit_sha(self, repo: RepoInfo, branch: str) -> str:
        data = self._request("GET", f"/repos/{repo.owner}/{repo.repo}/commits/{branch}?per_page=1")
        sha = str(data.get("sha") or "").strip()
        if not sha:
            raise GitHubError("GitHub response missing commit sha")
        return sha

    def create_release(self, repo: RepoInfo, *, tag: str, name: str, body: str) -> dict[str, Any]:
        return self._request(
            "POST",
            f"/repos/{repo.owner}/{repo.repo}/releases",
            {"tag_name": tag, "name": name, "body": body},
        )
