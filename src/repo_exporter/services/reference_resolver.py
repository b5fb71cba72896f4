"""Reference resolver — split a URL suffix into (ref, sub-path).

A suffix such as ``release-1/src/app`` cannot be split by syntax alone:
the ref may itself contain slashes. The split is decided against the
repository's live branch and tag names, preferring the longest name that
matches on a segment boundary.
"""

from __future__ import annotations

from typing import Iterable

from repo_exporter.domain.value_objects import ResolvedLocation


def resolve(
    raw_suffix: str,
    branches: Iterable[str],
    tags: Iterable[str],
) -> ResolvedLocation:
    """Resolve ``raw_suffix`` against the known ref names."""
    if not raw_suffix:
        return ResolvedLocation()

    best: str | None = None
    for candidate in {*branches, *tags}:
        if not candidate:
            continue
        if raw_suffix == candidate or raw_suffix.startswith(candidate + "/"):
            if best is None or len(candidate) > len(best):
                best = candidate

    if best is None:
        # Unknown ref; a bad guess surfaces later as NotFoundError.
        return ResolvedLocation(ref=raw_suffix, subpath="")

    return ResolvedLocation(ref=best, subpath=raw_suffix[len(best) + 1 :])
