"""Host de código fuente: GitHub.

- La rama se resuelve con la API REST (`/repos/<owner>/<repo>/branches/<branch>`).
- Los ficheros se leen del contenido raw en el commit exacto, nunca de la rama,
  para que revisión y contenido coincidan.

Estos accesos están en adapters porque son I/O puro (HTTP).
"""

from __future__ import annotations

from typing import Any
from urllib.parse import quote

import httpx

from adapters.http_client import build_async_client, github_api_headers
from core.config import AppSettings
from core.domain.errors import FetchError, ResolutionError


def _segment(value: str) -> str:
    return quote(value, safe="")


class GitHubSourceHost:
    """Implementa `SourceHost` contra github.com."""

    def __init__(
        self,
        settings: AppSettings | None = None,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._settings = settings or AppSettings()
        self._transport = transport

    def branch_url(self, owner: str, repo: str, branch: str) -> str:
        base = self._settings.github_api_url.rstrip("/")
        return f"{base}/repos/{_segment(owner)}/{_segment(repo)}/branches/{_segment(branch)}"

    def raw_url(self, owner: str, repo: str, commit_sha: str, path: str) -> str:
        base = self._settings.github_raw_url.rstrip("/")
        return f"{base}/{_segment(owner)}/{_segment(repo)}/{_segment(commit_sha)}/{quote(path, safe='/')}"

    async def resolve_branch_revision(self, owner: str, repo: str, branch: str) -> str:
        url = self.branch_url(owner, repo, branch)
        headers = github_api_headers(self._settings)
        try:
            async with build_async_client(self._settings, extra_headers=headers, transport=self._transport) as client:
                resp = await client.get(url)
        except httpx.HTTPError as exc:
            raise ResolutionError(owner=owner, repo=repo, branch=branch, reason=str(exc)) from exc

        if resp.status_code != 200:
            raise ResolutionError(
                owner=owner,
                repo=repo,
                branch=branch,
                status_code=resp.status_code,
                reason=resp.reason_phrase,
            )

        sha = _commit_sha(resp)
        if sha is None:
            raise ResolutionError(owner=owner, repo=repo, branch=branch, reason="response has no commit sha")
        return sha

    async def fetch_file_at_revision(self, owner: str, repo: str, commit_sha: str, path: str) -> str:
        url = self.raw_url(owner, repo, commit_sha, path)
        try:
            async with build_async_client(self._settings, transport=self._transport) as client:
                resp = await client.get(url)
        except httpx.HTTPError as exc:
            raise FetchError.for_file(path, None, str(exc)) from exc

        if resp.status_code != 200:
            raise FetchError.for_file(path, resp.status_code, resp.reason_phrase)
        return resp.text


def _commit_sha(resp: httpx.Response) -> str | None:
    try:
        data: Any = resp.json()
    except ValueError:
        return None
    if not isinstance(data, dict):
        return None
    commit = data.get("commit")
    if not isinstance(commit, dict):
        return None
    sha = commit.get("sha")
    if isinstance(sha, str) and sha:
        return sha
    return None
