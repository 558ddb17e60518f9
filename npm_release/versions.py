"""Version parsing and comparison utilities.

Handles conversion between version strings and semver objects, with
special handling for the loose strings npm tolerates (e.g., "v1.0" → "1.0.0").
"""

from __future__ import annotations

import re
from collections.abc import Iterable
from typing import TYPE_CHECKING

import semver

if TYPE_CHECKING:
    from .models import Package

# Accumulator for the released-package search. Not a real package version.
LOWEST_VERSION = "0.0.0"

_SUFFIX_RE = re.compile(r"[-+]")


def parse_version(version_str: str) -> semver.Version:
    """Parse a version string into a semver.Version object.

    Strips a leading "v" or "=" and pads an incomplete core with zeros:
    - "1" → "1.0.0"
    - "v1.2" → "1.2.0"
    - "1.2.3-beta.1" → "1.2.3-beta.1"

    Raises:
        ValueError: If the string is not a semantic version.
    """
    text = version_str.strip().lstrip("v=")
    match = _SUFFIX_RE.search(text)
    core, suffix = (text[: match.start()], text[match.start() :]) if match else (text, "")
    parts = core.split(".")
    # Pad with zeros to ensure we have at least 3 parts
    while len(parts) < 3:
        parts.append("0")
    return semver.Version.parse(".".join(parts[:3]) + suffix)


def is_greater(left: str, right: str) -> bool:
    """Return True if ``left`` is strictly greater than ``right``."""
    return parse_version(left) > parse_version(right)


def greater_release(local: str, published: str) -> str:
    """Pick the newer of a local and a published version.

    Both must already be normalized the same way. The local version wins
    only if strictly greater; on a tie the published version is returned.
    """
    return local if is_greater(local, published) else published


def select_released_package(packages: Iterable[Package]) -> Package | None:
    """Pick the public, versioned package with the greatest version.

    Private and unversioned packages are ignored. When several packages
    share the greatest version, the last one wins.

    Returns:
        The released package, or None if no package is eligible.
    """
    greatest_version = LOWEST_VERSION
    released: Package | None = None
    for pkg in packages:
        if pkg.private or not pkg.version:
            continue
        if not is_greater(greatest_version, pkg.version):
            greatest_version = pkg.version
            released = pkg
    return released
