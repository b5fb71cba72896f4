"""Raw file content adapter — implements the ContentReader port."""

from __future__ import annotations

import httpx

from repo_exporter.infrastructure.http_support import checked_get

_GITLAB_API_MARKER = "/api/v4/projects/"
_GITHUB_RAW_ACCEPT = "application/vnd.github.v3.raw"


class RawContentClient:
    """Fetches raw text from either provider.

    Auth headers are chosen per URL: GitLab API URLs take a bearer token,
    everything else is treated as a GitHub API URL and asks for the raw
    media type.
    """

    def __init__(
        self, client: httpx.AsyncClient, user_agent: str = "repo-exporter/1.0"
    ) -> None:
        self._client = client
        self._user_agent = user_agent

    async def fetch_raw(self, url: str, token: str | None) -> str:
        resp = await checked_get(self._client, url, self.headers_for(url, token))
        return resp.text

    def headers_for(self, url: str, token: str | None) -> dict[str, str]:
        headers = {"User-Agent": self._user_agent}
        if _GITLAB_API_MARKER in url:
            if token:
                headers["Authorization"] = f"Bearer {token}"
        else:
            headers["Accept"] = _GITHUB_RAW_ACCEPT
            if token:
                headers["Authorization"] = f"token {token}"
        return headers
