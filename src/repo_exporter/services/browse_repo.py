"""Browse-repository use case — URL to flat tree.

Depends only on the :class:`ProviderStrategy` port; the interface layer
injects a factory that picks the concrete provider for a parsed URL.
"""

from __future__ import annotations

import logging
from typing import Callable

from repo_exporter.domain.entities import BrowseResult
from repo_exporter.domain.ports.provider import ProviderStrategy
from repo_exporter.domain.value_objects import RepoReference, ResolvedLocation
from repo_exporter.services.reference_resolver import resolve

logger = logging.getLogger(__name__)

ProviderFactory = Callable[[RepoReference], ProviderStrategy]


class BrowseRepoUseCase:
    """Orchestrates locate → resolve → list tree.

    Parameters
    ----------
    provider_factory:
        Returns the provider strategy for a parsed repository URL. Called
        exactly once per :meth:`execute`.
    """

    def __init__(self, provider_factory: ProviderFactory) -> None:
        self._provider_factory = provider_factory

    async def execute(self, repo_url: str, token: str | None = None) -> BrowseResult:
        """Parse ``repo_url`` and return its tree at the referenced location."""
        reference = RepoReference.from_string(repo_url)
        logger.info(
            "Browsing %s on %s (%s)",
            reference.full_name,
            reference.host,
            reference.provider.value,
        )

        provider = self._provider_factory(reference)

        location = ResolvedLocation()
        if reference.raw_suffix:
            listing = await provider.list_references(token)
            location = resolve(reference.raw_suffix, listing.branches, listing.tags)
            logger.info(
                "Resolved '%s' to ref=%r subpath=%r",
                reference.raw_suffix,
                location.ref,
                location.subpath,
            )

        entries = await provider.list_tree(location, token)
        logger.info("Listed %d entries from %s", len(entries), reference.full_name)

        return BrowseResult(reference=reference, location=location, entries=entries)
