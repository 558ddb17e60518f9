"""Package author lookup."""

from __future__ import annotations

import re
from pathlib import Path

from .manifest import read_root_manifest
from .models import Author
from .shell import info

# npm's person string: "Name <email> (url)", every part optional.
_PERSON_RE = re.compile(
    r"^(?P<name>[^<(]+?)?[ \t]*(?:<(?P<email>[^>(]+?)>)?[ \t]*(?:\((?P<url>[^)]+?)\)|$)"
)


def parse_author(text: str) -> Author:
    """Parse an npm person string.

    Examples:
        "Jane Doe <jane@example.com> (https://jane.dev)"
        → Author(name="Jane Doe", email="jane@example.com", url="https://jane.dev")
        "Jane Doe" → Author(name="Jane Doe")
    """
    match = _PERSON_RE.match(text.strip())
    if not match:
        return Author(name=text.strip() or None)
    return Author(**match.groupdict())


def get_author(root: Path) -> Author | None:
    """Return the author declared in the root package.json, if any."""
    info("Getting author information from package.json")
    manifest = read_root_manifest(root)
    if manifest is None or not manifest.author:
        return None
    if isinstance(manifest.author, str):
        return parse_author(manifest.author)
    return manifest.author
