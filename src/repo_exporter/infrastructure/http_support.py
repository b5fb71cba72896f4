"""Shared request helpers for the provider adapters."""

from __future__ import annotations

import logging
from typing import Any

import httpx

from repo_exporter.domain.entities import EntryKind
from repo_exporter.domain.exceptions import TransportError
from repo_exporter.services.error_classifier import classify

logger = logging.getLogger(__name__)


def build_http_client(
    timeout: float, transport: httpx.AsyncBaseTransport | None = None
) -> httpx.AsyncClient:
    """Return the client shared by all provider calls.

    Redirects are followed: GitHub answers 301 for renamed or transferred
    repositories. httpx drops ``Authorization`` when a redirect changes origin.
    """
    return httpx.AsyncClient(
        timeout=httpx.Timeout(timeout), follow_redirects=True, transport=transport
    )


async def checked_get(
    client: httpx.AsyncClient,
    url: str,
    headers: dict[str, str],
    params: dict[str, str] | None = None,
) -> httpx.Response:
    """Perform a GET request and translate failures into domain errors."""
    logger.debug("GET %s params=%s", url, params)
    try:
        resp = await client.get(url, headers=headers, params=params)
    except httpx.HTTPError as exc:
        raise TransportError(f"Network error fetching {url}: {exc}") from exc

    if resp.is_success:
        return resp

    raise classify(
        resp.status_code,
        resp.headers.get("x-ratelimit-remaining"),
        reset=resp.headers.get("x-ratelimit-reset"),
        url=url,
    )


def read_json(resp: httpx.Response) -> Any:
    """Decode a JSON body, reporting garbage as a transport fault."""
    try:
        return resp.json()
    except ValueError as exc:
        raise TransportError(
            f"Provider returned invalid JSON for {resp.request.url}",
            status_code=resp.status_code,
        ) from exc


def entry_kind(value: str | None, path: str) -> EntryKind:
    """Map a provider item type onto :class:`EntryKind`; a missing type is a blob."""
    try:
        return EntryKind(value or "blob")
    except ValueError as exc:
        raise TransportError(
            f"Provider reported unknown entry type {value!r} for '{path}'"
        ) from exc
