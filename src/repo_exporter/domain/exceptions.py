"""Domain exception hierarchy.

Each exception maps to a specific HTTP status code at the interface layer.
Inner layers raise these; the outermost error-handler translates them.
"""

from __future__ import annotations


class RepoExporterError(Exception):
    """Base exception for the entire application."""


# ── Input validation ────────────────────────────────────────────────────────


class InvalidRepoUrlError(RepoExporterError):
    """The supplied URL matches neither the GitHub nor the GitLab shape."""


class EmptySelectionError(RepoExporterError):
    """An export was requested with zero selected files."""


# ── Provider errors ─────────────────────────────────────────────────────────


class NotFoundError(RepoExporterError):
    """The repository, ref or path does not exist (404)."""


class RateLimitedError(RepoExporterError):
    """Provider quota exhausted (403 with a zero remaining-quota header)."""


class TransportError(RepoExporterError):
    """Any other provider or network fault.

    ``status_code`` is ``None`` when the request never produced a response.
    """

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code
