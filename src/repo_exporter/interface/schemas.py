"""Pydantic request / response DTOs for the API boundary."""

from __future__ import annotations

from pydantic import BaseModel, Field, SecretStr, field_validator


class TreeRequest(BaseModel):
    """Request body for ``POST /tree``."""

    repo_url: str
    token: SecretStr | None = None

    @field_validator("repo_url")
    @classmethod
    def _must_not_be_blank(cls, v: str) -> str:
        stripped = v.strip()
        if not stripped:
            msg = "repo_url must not be empty."
            raise ValueError(msg)
        return stripped


class TreeEntryOut(BaseModel):
    path: str
    kind: str
    url: str
    handle: str | None = None
    size: int | None = None


class TreeResponse(BaseModel):
    """Successful response from ``POST /tree``."""

    provider: str
    host: str
    owner: str
    repo: str
    ref: str
    subpath: str
    entries: list[TreeEntryOut]
    listing: str


class FileSelection(BaseModel):
    path: str
    url: str


class ExportRequest(BaseModel):
    """Request body for ``POST /export/text`` and ``POST /export/archive``."""

    # Emptiness is a domain error, reported by the use case.
    files: list[FileSelection] = Field(default_factory=list)
    token: SecretStr | None = None


class ErrorResponse(BaseModel):
    """Standard error envelope returned on all failure paths."""

    status: str = "error"
    code: str
    message: str
    provider_status: int | None = None
