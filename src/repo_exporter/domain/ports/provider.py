"""Port: hosting provider — defined by the domain, implemented by infrastructure."""

from __future__ import annotations

from typing import Protocol

from repo_exporter.domain.entities import ReferenceListing, TreeEntry
from repo_exporter.domain.value_objects import ResolvedLocation


class ProviderStrategy(Protocol):
    """Abstract contract for one provider's REST dialect, bound to one repository."""

    async def list_references(self, token: str | None) -> ReferenceListing:
        """Return all branch and tag names (both listings must succeed)."""
        ...

    async def resolve_location(
        self, location: ResolvedLocation, token: str | None
    ) -> str | None:
        """Return an opaque handle addressing the sub-tree, or ``None`` when
        the provider lists trees by ref and path directly."""
        ...

    async def list_tree(
        self, location: ResolvedLocation, token: str | None
    ) -> list[TreeEntry]:
        """Return the flat recursive tree below ``location`` (repo-root-relative paths)."""
        ...

    def raw_content_url(self, path: str, ref: str) -> str:
        """Return the URL serving the raw content of ``path`` at ``ref``."""
        ...
