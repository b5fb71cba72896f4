"""Export-selection use case — selected files to text document or zip archive."""

from __future__ import annotations

import logging
from typing import Sequence

from repo_exporter.domain.entities import ExportArtifact, ExportFormat, SelectedFile
from repo_exporter.domain.ports.content_reader import ContentReader
from repo_exporter.services.content_fetcher import fetch_all
from repo_exporter.services.export_formatter import to_archive, to_text

logger = logging.getLogger(__name__)


class ExportSelectionUseCase:
    """Fetches the selected files and formats them.

    Parameters
    ----------
    reader:
        Adapter that retrieves raw file content.
    text_filename / archive_filename:
        Suggested download names attached to the artifact.
    """

    def __init__(
        self,
        reader: ContentReader,
        text_filename: str = "prompt.txt",
        archive_filename: str = "partial_repo.zip",
    ) -> None:
        self._reader = reader
        self._filenames = {
            ExportFormat.TEXT: text_filename,
            ExportFormat.ARCHIVE: archive_filename,
        }

    async def execute(
        self,
        selection: Sequence[SelectedFile],
        export_format: ExportFormat,
        token: str | None = None,
    ) -> ExportArtifact:
        """Fetch ``selection`` in order and build the requested artifact."""
        files = await fetch_all(selection, token, self._reader)

        if export_format == ExportFormat.ARCHIVE:
            payload: str | bytes = to_archive(files)
        else:
            payload = to_text(files)

        logger.info("Exported %d file(s) as %s", len(files), export_format.value)
        return ExportArtifact(
            format=export_format,
            payload=payload,
            file_count=len(files),
            filename=self._filenames[export_format],
        )
