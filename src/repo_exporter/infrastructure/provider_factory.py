"""Pick the concrete provider strategy for a parsed repository URL."""

from __future__ import annotations

import httpx

from repo_exporter.domain.ports.provider import ProviderStrategy
from repo_exporter.domain.value_objects import Provider, RepoReference
from repo_exporter.infrastructure.config import Settings
from repo_exporter.infrastructure.github_provider import GitHubProvider
from repo_exporter.infrastructure.gitlab_provider import GitLabProvider


def build_provider(
    reference: RepoReference, client: httpx.AsyncClient, settings: Settings
) -> ProviderStrategy:
    """Return the strategy bound to ``reference``'s repository."""
    if reference.provider == Provider.GITHUB:
        return GitHubProvider(
            client,
            reference.owner,
            reference.repo,
            api_url=settings.github_api_url,
            user_agent=settings.user_agent,
        )
    return GitLabProvider(
        client,
        reference.host,
        reference.owner,
        reference.repo,
        scheme=settings.gitlab_scheme,
        page_size=settings.gitlab_tree_page_size,
        user_agent=settings.user_agent,
    )
