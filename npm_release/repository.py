"""Hosted repository lookup from package.json's ``repository`` field.

Accepts the forms npm documents:

- ``"owner/repo"`` and ``"github:owner/repo"`` shorthands
- ``"https://github.com/owner/repo.git"`` and ``git+https://`` URLs
- ``"git@github.com:owner/repo.git"`` SSH URLs
- ``{"type": "git", "url": <any of the URLs above>}``
"""

from __future__ import annotations

import re
from pathlib import Path

from .manifest import read_root_manifest
from .models import RepositoryField, RepositoryInfo
from .shell import info

_SHORTHAND_RE = re.compile(r"^(?:github:)?(?P<owner>[\w.-]+)/(?P<repo>[\w.-]+)$")
_URL_RE = re.compile(
    r"^(?:git\+)?(?:https?|ssh|git)://(?:[^@/]+@)?[^/]+/(?P<owner>[\w.-]+)/(?P<repo>[\w.-]+?)(?:\.git)?/?$"
)
_SCP_RE = re.compile(r"^[^@]+@[^:]+:(?P<owner>[\w.-]+)/(?P<repo>[\w.-]+?)(?:\.git)?$")


def parse_repository(value: str | RepositoryField) -> RepositoryInfo | None:
    """Extract owner and repo name, or None if the form is unrecognised."""
    text = value.url if isinstance(value, RepositoryField) else value
    text = text.strip()
    for pattern in (_SHORTHAND_RE, _URL_RE, _SCP_RE):
        match = pattern.match(text)
        if match:
            return RepositoryInfo(owner=match["owner"], repo=match["repo"])
    return None


def get_repository(root: Path) -> RepositoryInfo | None:
    """Return the repository declared in the root package.json, if any."""
    info("Getting repository information from package.json")
    manifest = read_root_manifest(root)
    if manifest is None or manifest.repository is None:
        return None
    return parse_repository(manifest.repository)
