"""Export formatter — turn fetched files into a text document or a zip archive.

Everything here is pure and synchronous; no network access.

Text document layout, one section per file::

    ---
    File: "src/app.py"
    Length: 42
    ---

    <42 characters of content>

Each section ends with a blank line. ``Length`` counts characters of the
content, so a section boundary never depends on what the content contains.
The path is a JSON string, so any path (newlines included) round-trips.
"""

from __future__ import annotations

import io
import json
import re
import zipfile
from typing import Sequence

from repo_exporter.domain.entities import EntryKind, FetchedFile, TreeEntry

_SEPARATOR = "---"
_SECTION_TRAILER = "\n\n"
_HEADER_RE = re.compile(
    r"---\nFile: (?P<path>\"(?:[^\"\\\n]|\\.)*\")\nLength: (?P<length>\d+)\n---\n\n"
)


def to_text(files: Sequence[FetchedFile]) -> str:
    """Concatenate all files into one annotated document, in input order."""
    sections: list[str] = []
    for f in files:
        path = json.dumps(f.path, ensure_ascii=False)
        sections.append(
            f"{_SEPARATOR}\nFile: {path}\nLength: {len(f.text)}\n{_SEPARATOR}\n\n"
            f"{f.text}{_SECTION_TRAILER}"
        )
    return "".join(sections)


def parse_text(document: str) -> list[tuple[str, str]]:
    """Split a document produced by :func:`to_text` back into ``(path, text)`` pairs."""
    pairs: list[tuple[str, str]] = []
    pos = 0
    while pos < len(document):
        match = _HEADER_RE.match(document, pos)
        if not match:
            raise ValueError(f"Malformed section header at offset {pos}")
        path = json.loads(match["path"])
        start = match.end()
        end = start + int(match["length"])
        if document[end : end + len(_SECTION_TRAILER)] != _SECTION_TRAILER:
            raise ValueError(f"Malformed section body for {path!r}")
        pairs.append((path, document[start:end]))
        pos = end + len(_SECTION_TRAILER)
    return pairs


def to_archive(files: Sequence[FetchedFile]) -> bytes:
    """Store every file in a zip archive under its relative path."""
    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, "w", compression=zipfile.ZIP_DEFLATED) as archive:
        for f in files:
            path = f.path[1:] if f.path.startswith("/") else f.path
            archive.writestr(path, f.text.encode("utf-8"))
    return buffer.getvalue()


def render_tree(entries: Sequence[TreeEntry], limit: int | None = None) -> str:
    """Render tree entries as a flat listing; directories end with ``/``."""
    lines = [
        f"{entry.path}/" if entry.kind == EntryKind.TREE else entry.path
        for entry in entries
    ]
    if limit is not None and len(lines) > limit:
        hidden = len(lines) - limit
        lines = lines[:limit]
        lines.append(f"… and {hidden} more entries")
    return "\n".join(lines)
