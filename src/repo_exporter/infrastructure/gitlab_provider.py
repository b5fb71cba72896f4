"""GitLab REST API (v4) adapter — implements the ProviderStrategy port."""

from __future__ import annotations

import asyncio
import logging
from typing import Any
from urllib.parse import quote

import httpx

from repo_exporter.domain.entities import ReferenceListing, TreeEntry
from repo_exporter.domain.value_objects import ResolvedLocation
from repo_exporter.infrastructure.http_support import checked_get, entry_kind, read_json

logger = logging.getLogger(__name__)


class GitLabProvider:
    """Concrete ProviderStrategy for any GitLab instance.

    The project is addressed by its URL-encoded ``owner/repo`` path; trees
    are listed in a single call parameterised by ref and path.
    """

    def __init__(
        self,
        client: httpx.AsyncClient,
        host: str,
        owner: str,
        repo: str,
        *,
        scheme: str = "https",
        page_size: int = 100,
        user_agent: str = "repo-exporter/1.0",
    ) -> None:
        self._client = client
        project = quote(f"{owner}/{repo}", safe="")
        self._project_api = f"{scheme}://{host}/api/v4/projects/{project}"
        self._page_size = page_size
        self._user_agent = user_agent

    async def list_references(self, token: str | None) -> ReferenceListing:
        """GET repository/{branches,tags} concurrently → ReferenceListing (first page only)."""
        params = {"per_page": str(self._page_size)}
        branches, tags = await asyncio.gather(
            self._api_get("/repository/branches", token, params=params),
            self._api_get("/repository/tags", token, params=params),
        )
        return ReferenceListing(
            branches=[item["name"] for item in branches],
            tags=[item["name"] for item in tags],
        )

    async def resolve_location(
        self, location: ResolvedLocation, token: str | None
    ) -> None:
        """GitLab lists trees by ref and path directly; there is no handle."""
        return None

    async def list_tree(
        self, location: ResolvedLocation, token: str | None
    ) -> list[TreeEntry]:
        """GET repository/tree?recursive=true → [TreeEntry] (first page only)."""
        params = {"recursive": "true", "per_page": str(self._page_size)}
        if location.ref:
            params["ref"] = location.ref
        if location.subpath:
            params["path"] = location.subpath

        data = await self._api_get("/repository/tree", token, params=params)
        if len(data) >= self._page_size:
            logger.warning(
                "GitLab tree for %s hit the page size (%d); listing may be incomplete",
                self._project_api,
                self._page_size,
            )

        entries: list[TreeEntry] = []
        for item in data:
            path = self._root_relative(item["path"], location.subpath)
            entries.append(
                TreeEntry(
                    path=path,
                    kind=entry_kind(item.get("type"), path),
                    content_url=self.raw_content_url(path, location.ref),
                    handle=item.get("id"),
                )
            )
        return entries

    def raw_content_url(self, path: str, ref: str) -> str:
        url = f"{self._project_api}/repository/files/{quote(path, safe='')}/raw"
        if ref:
            url += f"?ref={quote(ref, safe='')}"
        return url

    @staticmethod
    def _root_relative(path: str, subpath: str) -> str:
        # GitLab normally reports full paths already.
        if not subpath or path.startswith(f"{subpath}/"):
            return path
        return f"{subpath}/{path}"

    async def _api_get(
        self,
        endpoint: str,
        token: str | None,
        params: dict[str, str] | None = None,
    ) -> Any:
        headers = {"User-Agent": self._user_agent}
        if token:
            headers["Authorization"] = f"Bearer {token}"
        resp = await checked_get(
            self._client, f"{self._project_api}{endpoint}", headers, params
        )
        return read_json(resp)
