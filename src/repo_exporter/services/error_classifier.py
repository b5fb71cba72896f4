"""Error classifier — map a failed provider response to a domain error."""

from __future__ import annotations

from datetime import datetime, timezone

from repo_exporter.domain.exceptions import (
    NotFoundError,
    RateLimitedError,
    RepoExporterError,
    TransportError,
)


def classify(
    status_code: int,
    remaining: str | None,
    *,
    reset: str | None = None,
    url: str | None = None,
) -> RepoExporterError:
    """Return (not raise) the domain error for a non-success response.

    ``remaining`` is the raw ``x-ratelimit-remaining`` header value, ``reset``
    the raw ``x-ratelimit-reset`` epoch used only to enrich the message.
    """
    if status_code == 403 and remaining == "0":
        return RateLimitedError(
            f"API rate limit exceeded. Resets at {_format_reset(reset)}. "
            "Please try again later or provide a valid access token "
            "to increase your rate limit."
        )

    if status_code == 404:
        return NotFoundError(
            "Repository, branch, or path not found. Please check that the URL, "
            "branch/tag, and path are correct and accessible."
        )

    target = f" for {url}" if url else ""
    return TransportError(
        f"Failed to fetch repository data{target}. Status: {status_code}. "
        "Please check your input and try again.",
        status_code=status_code,
    )


def _format_reset(reset: str | None) -> str:
    if not reset:
        return "unknown"
    try:
        return datetime.fromtimestamp(int(reset), tz=timezone.utc).strftime(
            "%Y-%m-%d %H:%M:%S UTC"
        )
    except (ValueError, OSError, OverflowError):
        return reset
