"""Exception handlers — translate domain errors into the error envelope.

Every failure path returns ``{"status": "error", "code": ..., "message": ...}``
where ``code`` names the error category so a client can pick a remedy
(fix the URL, supply a token, check the ref) without parsing the message.
"""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from repo_exporter.domain.exceptions import (
    EmptySelectionError,
    InvalidRepoUrlError,
    NotFoundError,
    RateLimitedError,
    RepoExporterError,
    TransportError,
)

logger = logging.getLogger(__name__)

# exception type → (HTTP status, category code)
_DOMAIN_ERRORS: dict[type[RepoExporterError], tuple[int, str]] = {
    InvalidRepoUrlError: (422, "invalid_url"),
    EmptySelectionError: (422, "empty_selection"),
    NotFoundError: (404, "not_found"),
    RateLimitedError: (429, "rate_limited"),
    TransportError: (502, "transport_error"),
}


def _error_json(status_code: int, code: str, message: str, **extra: object) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"status": "error", "code": code, "message": message, **extra},
    )


async def _domain_handler(request: Request, exc: Exception) -> JSONResponse:
    status_code, code = _DOMAIN_ERRORS.get(type(exc), (500, "error"))
    logger.warning("%s on %s: %s", type(exc).__name__, request.url.path, exc)
    if isinstance(exc, TransportError):
        return _error_json(
            status_code, code, str(exc), provider_status=exc.status_code
        )
    return _error_json(status_code, code, str(exc))


def register_error_handlers(app: FastAPI) -> None:
    """Attach exception handlers to the FastAPI application."""

    for exc_type in _DOMAIN_ERRORS:
        app.add_exception_handler(exc_type, _domain_handler)

    @app.exception_handler(RequestValidationError)
    async def validation_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        messages = []
        for err in exc.errors():
            loc = " → ".join(str(p) for p in err.get("loc", []))
            messages.append(f"{loc}: {err.get('msg', 'validation error')}")
        return _error_json(422, "invalid_request", "; ".join(messages))

    @app.exception_handler(Exception)
    async def generic_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Unhandled exception on %s", request.url.path)
        return _error_json(
            500, "internal_error", "An unexpected error occurred. Please try again later."
        )
