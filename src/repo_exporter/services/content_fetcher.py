"""Content fetcher — retrieve the text of every selected file.

Retrieval is sequential and all-or-nothing: files are fetched one at a
time in selection order and the first failure aborts the batch.
"""

from __future__ import annotations

import logging
from typing import Sequence

from repo_exporter.domain.entities import FetchedFile, SelectedFile
from repo_exporter.domain.exceptions import EmptySelectionError
from repo_exporter.domain.ports.content_reader import ContentReader

logger = logging.getLogger(__name__)


async def fetch_all(
    entries: Sequence[SelectedFile],
    token: str | None,
    reader: ContentReader,
) -> list[FetchedFile]:
    """Fetch every entry, preserving input order."""
    if not entries:
        raise EmptySelectionError(
            "No files selected. Please select at least one file from the "
            "directory structure."
        )

    fetched: list[FetchedFile] = []
    for entry in entries:
        logger.debug("Fetching %s", entry.path)
        text = await reader.fetch_raw(entry.content_url, token)
        fetched.append(
            FetchedFile(path=entry.path, content_url=entry.content_url, text=text)
        )

    logger.info("Fetched %d file(s)", len(fetched))
    return fetched
