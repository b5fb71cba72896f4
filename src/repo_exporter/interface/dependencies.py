"""FastAPI dependency injection wiring."""

from __future__ import annotations

from functools import lru_cache
from typing import Iterable
from urllib.parse import urlsplit

import httpx
from pydantic import SecretStr

from repo_exporter.domain.exceptions import InvalidRepoUrlError
from repo_exporter.domain.ports.provider import ProviderStrategy
from repo_exporter.domain.value_objects import Provider, RepoReference
from repo_exporter.infrastructure.config import Settings, get_settings
from repo_exporter.infrastructure.http_support import build_http_client
from repo_exporter.infrastructure.provider_factory import build_provider
from repo_exporter.infrastructure.raw_content_client import RawContentClient
from repo_exporter.services.browse_repo import BrowseRepoUseCase
from repo_exporter.services.export_selection import ExportSelectionUseCase

_http_client: httpx.AsyncClient | None = None


async def startup() -> None:
    """Initialise shared resources — called from the lifespan context manager."""
    global _http_client  # noqa: PLW0603

    settings = get_settings()
    _http_client = build_http_client(settings.http_timeout)


async def shutdown() -> None:
    """Release shared resources."""
    global _http_client  # noqa: PLW0603

    if _http_client:
        await _http_client.aclose()
        _http_client = None


@lru_cache(maxsize=1)
def _settings() -> Settings:
    return get_settings()


def get_listing_limit() -> int:
    return _settings().listing_limit


# ── Credentials ─────────────────────────────────────────────────────────────


def _origin(url: str) -> str:
    parts = urlsplit(url)
    return f"{parts.scheme}://{parts.netloc}".lower()


def _fallback_secret(target_urls: Iterable[str]) -> SecretStr | None:
    """Pick the configured token whose provider owns *every* target URL."""
    settings = _settings()
    origins = {_origin(url) for url in target_urls}
    if not origins:
        return None

    if origins == {_origin(settings.github_api_url)}:
        return settings.github_token

    gitlab_origins = {
        _origin(f"{settings.gitlab_scheme}://{host}") for host in settings.gitlab_hosts
    }
    if origins <= gitlab_origins:
        return settings.gitlab_token

    return None


def resolve_token(token: SecretStr | None, target_urls: Iterable[str]) -> str | None:
    """Request token first; a configured token only when all targets are trusted."""
    secret = token or _fallback_secret(target_urls)
    return secret.get_secret_value() if secret else None


def browse_targets(repo_url: str) -> list[str]:
    """API origin(s) a browse of ``repo_url`` will talk to."""
    try:
        reference = RepoReference.from_string(repo_url)
    except InvalidRepoUrlError:
        return []
    settings = _settings()
    if reference.provider == Provider.GITHUB:
        return [settings.github_api_url]
    return [f"{settings.gitlab_scheme}://{reference.host}"]


# ── Use cases ───────────────────────────────────────────────────────────────


def get_browse_use_case() -> BrowseRepoUseCase:
    """Build the browse use case around the shared HTTP client."""
    settings = _settings()
    client = _http_client
    assert client is not None, "startup() was not called"

    def factory(reference: RepoReference) -> ProviderStrategy:
        return build_provider(reference, client, settings)

    return BrowseRepoUseCase(provider_factory=factory)


def get_export_use_case() -> ExportSelectionUseCase:
    """Build the export use case around the shared HTTP client."""
    settings = _settings()
    assert _http_client is not None, "startup() was not called"

    return ExportSelectionUseCase(
        reader=RawContentClient(_http_client, user_agent=settings.user_agent),
        text_filename=settings.text_filename,
        archive_filename=settings.archive_filename,
    )
