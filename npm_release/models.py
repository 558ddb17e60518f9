"""Data models for npm-release.

These Pydantic models represent the core data structures used throughout
the release hooks. Manifest models validate package.json and lerna.json at
the point they are read, so the rest of the code never pokes at raw dicts.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .versions import parse_version


def _check_version(value: str) -> str:
    try:
        parse_version(value)
    except ValueError as exc:
        raise ValueError(f"{value!r} is not a semantic version") from exc
    return value


class RepositoryMode(str, Enum):
    """How the repository is laid out. Detected once per run."""

    SINGLE = "single"
    WORKSPACE = "workspace"


class Author(BaseModel):
    """A package author, in npm's structured form."""

    name: str | None = None
    email: str | None = None
    url: str | None = None


class RepositoryField(BaseModel):
    """The object form of package.json's ``repository`` field."""

    model_config = ConfigDict(extra="ignore")

    url: str
    type: str | None = None


class Manifest(BaseModel):
    """The parts of a package.json we care about.

    Attributes:
        name: Package name, possibly scoped ("@scope/name").
        version: Semantic version string, absent for unversioned packages.
        private: Private packages are never published.
        author: Either npm's "Name <email> (url)" string or a structured record.
        repository: Either a shorthand/URL string or a ``{url, type}`` record.
    """

    model_config = ConfigDict(extra="ignore")

    name: str
    version: str | None = None
    private: bool = False
    author: str | Author | None = None
    repository: str | RepositoryField | None = None

    @field_validator("version")
    @classmethod
    def validate_version(cls, v: str | None) -> str | None:
        return v if v is None else _check_version(v)


class WorkspaceMarker(BaseModel):
    """The parts of lerna.json we care about.

    Attributes:
        version: Shared baseline version for coordinated releases.
        packages: Globs (relative to the root) locating sub-packages.
    """

    model_config = ConfigDict(extra="ignore")

    version: str
    packages: list[str] = Field(default_factory=lambda: ["packages/*"])

    @field_validator("version")
    @classmethod
    def validate_version(cls, v: str) -> str:
        return _check_version(v)


class Package(BaseModel):
    """A single package in the workspace.

    Attributes:
        name: Unique package name within the workspace.
        version: Version from the package's manifest, if any.
        private: Whether the package is excluded from publishing.
        path: Relative path from the repository root to the package directory.
    """

    name: str
    version: str | None = None
    private: bool = False
    path: str


class Commit(BaseModel):
    """A commit headed for the changelog.

    Commits are immutable. The packages a commit touched are computed
    separately and kept in a ``{hash: frozenset}`` mapping.
    """

    model_config = ConfigDict(frozen=True)

    hash: str
    subject: str = ""


class RepositoryInfo(BaseModel):
    """Owner and name of the hosted repository."""

    owner: str
    repo: str
