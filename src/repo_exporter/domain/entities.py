"""Domain entities — pure data structures with no external dependencies."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from repo_exporter.domain.value_objects import RepoReference, ResolvedLocation


class EntryKind(str, Enum):
    """Item type of a tree row, as reported by the provider."""

    TREE = "tree"
    BLOB = "blob"
    COMMIT = "commit"  # submodule


class ExportFormat(str, Enum):
    TEXT = "text"
    ARCHIVE = "archive"


@dataclass(frozen=True, slots=True)
class ReferenceListing:
    """Branch and tag names of one repository, in provider order."""

    branches: list[str] = field(default_factory=list)
    tags: list[str] = field(default_factory=list)


@dataclass(frozen=True, slots=True)
class TreeEntry:
    """A single row of a flat recursive tree listing."""

    path: str
    kind: EntryKind
    content_url: str
    handle: str | None = None
    size: int | None = None


@dataclass(frozen=True, slots=True)
class SelectedFile:
    """A caller-chosen entry to export."""

    path: str
    content_url: str


@dataclass(frozen=True, slots=True)
class FetchedFile:
    """A selected file together with its retrieved text."""

    path: str
    content_url: str
    text: str


@dataclass(frozen=True, slots=True)
class BrowseResult:
    """Everything the caller needs to display a repository tree."""

    reference: RepoReference
    location: ResolvedLocation
    entries: list[TreeEntry]


@dataclass(frozen=True, slots=True)
class ExportArtifact:
    """The final export: a text document or a zip archive."""

    format: ExportFormat
    payload: str | bytes
    file_count: int
    filename: str
