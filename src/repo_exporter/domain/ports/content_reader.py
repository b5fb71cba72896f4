"""Port: raw content reader — defined by the domain, implemented by infrastructure."""

from __future__ import annotations

from typing import Protocol


class ContentReader(Protocol):
    """Abstract contract for retrieving one file's raw text."""

    async def fetch_raw(self, url: str, token: str | None) -> str:
        """Return the decoded text served at ``url``."""
        ...
