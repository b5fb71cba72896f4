"""Value objects — self-validating domain primitives."""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum

from repo_exporter.domain.exceptions import InvalidRepoUrlError

_GITHUB_URL_RE = re.compile(
    r"^https://github\.com/(?P<owner>[^/]+)/(?P<repo>[^/]+)(?:/tree/(?P<suffix>.+))?$"
)
_GITLAB_URL_RE = re.compile(
    r"^https://(?P<host>[^/]+)/(?P<owner>[^/]+)/(?P<repo>[^/]+)(?:/-/tree/(?P<suffix>.+))?$"
)

_ACCEPTED_FORMS = (
    "https://github.com/owner/repo, "
    "https://github.com/owner/repo/tree/branch/path, "
    "https://gitlab.example.com/owner/repo, or "
    "https://gitlab.example.com/owner/repo/-/tree/branch/path"
)


class Provider(str, Enum):
    """Supported hosting backends."""

    GITHUB = "github"
    GITLAB = "gitlab"


@dataclass(frozen=True, slots=True)
class RepoReference:
    """Parsed repository URL.

    ``raw_suffix`` is everything after ``/tree/`` (GitHub) or ``/-/tree/``
    (GitLab): a ref and an optional sub-path that cannot be told apart
    without the repository's branch and tag names.
    """

    provider: Provider
    host: str
    owner: str
    repo: str
    raw_suffix: str
    raw: str

    @classmethod
    def from_string(cls, url: str) -> RepoReference:
        """Parse and validate a raw URL string."""
        url = url.strip()
        if url.endswith("/"):
            url = url[:-1]

        match = _GITHUB_URL_RE.match(url)
        if match:
            return cls(
                provider=Provider.GITHUB,
                host="github.com",
                owner=match["owner"],
                repo=match["repo"],
                raw_suffix=match["suffix"] or "",
                raw=url,
            )

        match = _GITLAB_URL_RE.match(url)
        if match:
            return cls(
                provider=Provider.GITLAB,
                host=match["host"],
                owner=match["owner"],
                repo=match["repo"],
                raw_suffix=match["suffix"] or "",
                raw=url,
            )

        raise InvalidRepoUrlError(
            f"Invalid repository URL: '{url}'. "
            f"Please ensure the URL is in one of these formats: {_ACCEPTED_FORMS}"
        )

    @property
    def full_name(self) -> str:
        return f"{self.owner}/{self.repo}"


@dataclass(frozen=True, slots=True)
class ResolvedLocation:
    """A ref and a sub-path inside the repository.

    An empty ``ref`` means the provider's default branch; an empty
    ``subpath`` means the repository root.
    """

    ref: str = ""
    subpath: str = ""
