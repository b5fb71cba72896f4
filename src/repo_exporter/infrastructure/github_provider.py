"""GitHub REST API adapter — implements the ProviderStrategy port."""

from __future__ import annotations

import asyncio
import logging
from typing import Any
from urllib.parse import quote

import httpx

from repo_exporter.domain.entities import ReferenceListing, TreeEntry
from repo_exporter.domain.exceptions import TransportError
from repo_exporter.domain.value_objects import ResolvedLocation
from repo_exporter.infrastructure.http_support import checked_get, entry_kind, read_json

logger = logging.getLogger(__name__)

_GITHUB_API = "https://api.github.com"
_JSON_ACCEPT = "application/vnd.github+json"
_OBJECT_ACCEPT = "application/vnd.github.object+json"


class GitHubProvider:
    """Concrete ProviderStrategy backed by the GitHub v3 REST API.

    Trees are listed in two steps: the sub-path is first resolved to the
    sha of its tree object, then that tree is fetched recursively.
    """

    def __init__(
        self,
        client: httpx.AsyncClient,
        owner: str,
        repo: str,
        *,
        api_url: str = _GITHUB_API,
        user_agent: str = "repo-exporter/1.0",
    ) -> None:
        self._client = client
        self._repo_api = f"{api_url.rstrip('/')}/repos/{owner}/{repo}"
        self._user_agent = user_agent

    async def list_references(self, token: str | None) -> ReferenceListing:
        """GET git/matching-refs/{heads,tags}/ concurrently → ReferenceListing."""
        heads, tags = await asyncio.gather(
            self._api_get("/git/matching-refs/heads/", token),
            self._api_get("/git/matching-refs/tags/", token),
        )
        return ReferenceListing(
            branches=[_short_ref(item["ref"]) for item in heads],
            tags=[_short_ref(item["ref"]) for item in tags],
        )

    async def resolve_location(
        self, location: ResolvedLocation, token: str | None
    ) -> str:
        """GET contents/{path}?ref={ref} → sha of the addressed object."""
        params = {"ref": location.ref} if location.ref else None
        data = await self._api_get(
            f"/contents/{quote(location.subpath, safe='/')}",
            token,
            params=params,
            accept=_OBJECT_ACCEPT,
        )
        sha = data.get("sha") if isinstance(data, dict) else None
        if not sha:
            raise TransportError(
                f"GitHub returned no content handle for '{location.subpath or '/'}'"
            )
        return sha

    async def list_tree(
        self, location: ResolvedLocation, token: str | None
    ) -> list[TreeEntry]:
        """GET git/trees/{sha}?recursive=1 → [TreeEntry]."""
        sha = await self.resolve_location(location, token)
        data = await self._api_get(
            f"/git/trees/{sha}", token, params={"recursive": "1"}
        )
        if data.get("truncated"):
            logger.warning(
                "GitHub truncated the tree for %s at '%s'; listing is incomplete",
                self._repo_api,
                location.subpath or "/",
            )

        # Rows are relative to the resolved sub-tree.
        prefix = f"{location.subpath}/" if location.subpath else ""
        entries: list[TreeEntry] = []
        for item in data.get("tree", []):
            path = prefix + item["path"]
            entries.append(
                TreeEntry(
                    path=path,
                    kind=entry_kind(item.get("type"), path),
                    content_url=item.get("url") or self.raw_content_url(path, location.ref),
                    handle=item.get("sha"),
                    size=item.get("size"),
                )
            )
        return entries

    def raw_content_url(self, path: str, ref: str) -> str:
        url = f"{self._repo_api}/contents/{quote(path, safe='/')}"
        if ref:
            url += f"?ref={quote(ref, safe='')}"
        return url

    async def _api_get(
        self,
        endpoint: str,
        token: str | None,
        params: dict[str, str] | None = None,
        accept: str = _JSON_ACCEPT,
    ) -> Any:
        headers = {"Accept": accept, "User-Agent": self._user_agent}
        if token:
            headers["Authorization"] = f"token {token}"
        resp = await checked_get(
            self._client, f"{self._repo_api}{endpoint}", headers, params
        )
        return read_json(resp)


def _short_ref(full_ref: str) -> str:
    """``refs/heads/feature/x`` → ``feature/x``."""
    return "/".join(full_ref.split("/")[2:])
