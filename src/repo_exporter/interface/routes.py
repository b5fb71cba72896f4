"""API routes — thin controllers that delegate to the use cases."""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends
from fastapi.responses import Response

from repo_exporter.domain.entities import ExportArtifact, ExportFormat, SelectedFile
from repo_exporter.interface.dependencies import (
    get_browse_use_case,
    get_export_use_case,
    browse_targets,
    get_listing_limit,
    resolve_token,
)
from repo_exporter.interface.schemas import (
    ErrorResponse,
    ExportRequest,
    TreeEntryOut,
    TreeRequest,
    TreeResponse,
)
from repo_exporter.services.browse_repo import BrowseRepoUseCase
from repo_exporter.services.export_formatter import render_tree
from repo_exporter.services.export_selection import ExportSelectionUseCase

router = APIRouter()

_PROVIDER_ERRORS: dict[int | str, dict[str, Any]] = {
    404: {"model": ErrorResponse, "description": "Repository, branch or path not found"},
    429: {"model": ErrorResponse, "description": "Provider API rate limit exceeded"},
    502: {"model": ErrorResponse, "description": "Provider or network failure"},
}


@router.post(
    "/tree",
    response_model=TreeResponse,
    responses={422: {"description": "Invalid repository URL"}, **_PROVIDER_ERRORS},
)
async def tree(
    body: TreeRequest,
    use_case: BrowseRepoUseCase = Depends(get_browse_use_case),
    listing_limit: int = Depends(get_listing_limit),
) -> TreeResponse:
    """List the files of a GitHub or GitLab repository location."""
    token = resolve_token(body.token, browse_targets(body.repo_url))
    result = await use_case.execute(body.repo_url, token)
    return TreeResponse(
        provider=result.reference.provider.value,
        host=result.reference.host,
        owner=result.reference.owner,
        repo=result.reference.repo,
        ref=result.location.ref,
        subpath=result.location.subpath,
        entries=[
            TreeEntryOut(
                path=e.path,
                kind=e.kind.value,
                url=e.content_url,
                handle=e.handle,
                size=e.size,
            )
            for e in result.entries
        ],
        listing=render_tree(result.entries, limit=listing_limit),
    )


@router.post(
    "/export/text",
    response_class=Response,
    responses={422: {"description": "No files selected"}, **_PROVIDER_ERRORS},
)
async def export_text(
    body: ExportRequest,
    use_case: ExportSelectionUseCase = Depends(get_export_use_case),
) -> Response:
    """Concatenate the selected files into one annotated text document."""
    artifact = await use_case.execute(
        _selection(body), ExportFormat.TEXT, _export_token(body)
    )
    return _download(artifact, "text/plain; charset=utf-8")


@router.post(
    "/export/archive",
    response_class=Response,
    responses={422: {"description": "No files selected"}, **_PROVIDER_ERRORS},
)
async def export_archive(
    body: ExportRequest,
    use_case: ExportSelectionUseCase = Depends(get_export_use_case),
) -> Response:
    """Pack the selected files into a zip archive."""
    artifact = await use_case.execute(
        _selection(body), ExportFormat.ARCHIVE, _export_token(body)
    )
    return _download(artifact, "application/zip")


def _selection(body: ExportRequest) -> list[SelectedFile]:
    return [SelectedFile(path=f.path, content_url=f.url) for f in body.files]


def _export_token(body: ExportRequest) -> str | None:
    return resolve_token(body.token, [f.url for f in body.files])


def _download(artifact: ExportArtifact, media_type: str) -> Response:
    return Response(
        content=artifact.payload,
        media_type=media_type,
        headers={
            "Content-Disposition": f'attachment; filename="{artifact.filename}"',
            "X-File-Count": str(artifact.file_count),
        },
    )
