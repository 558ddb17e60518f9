"""Commit → package attribution.

A commit touches a package if it changed any file under that package's
directory in the workspace packages folder. Scoped packages live one level
deeper (``packages/@scope/name/...``).

Each commit is looked up independently, so a whole changelog's worth of
commits is fanned out concurrently and gathered into a hash-keyed mapping.
"""

from __future__ import annotations

import asyncio
from collections.abc import Iterable, Sequence
from pathlib import Path

from .models import Commit
from .shell import agit, debug

SCOPE_MARKER = "@"


async def changed_files(sha: str, root: Path) -> list[str]:
    """List files changed by ``sha`` relative to its first parent."""
    # core.quotePath=false keeps non-ASCII paths unescaped and unquoted
    output = await agit(
        "-c",
        "core.quotePath=false",
        "show",
        "--first-parent",
        sha,
        "--name-only",
        "--pretty=",
        cwd=root,
    )
    return [line for line in output.splitlines() if line]


def packages_from_paths(
    paths: Iterable[str], packages_dir: str = "packages"
) -> frozenset[str]:
    """Map changed file paths to the workspace packages they belong to.

    Examples:
        "packages/foo/src/a.ts" → "foo"
        "packages/@bar/baz/b.ts" → "@bar/baz"
        "docs/readme.md", "packages/README.md" → nothing
    """
    packages: set[str] = set()
    for path in paths:
        parts = path.split("/")
        # Needs at least packages/<name>/<file>
        if parts[0] != packages_dir or len(parts) < 3:
            continue
        if len(parts) > 3 and parts[1].startswith(SCOPE_MARKER):
            packages.add(f"{parts[1]}/{parts[2]}")
        else:
            packages.add(parts[1])
    return frozenset(packages)


async def changed_packages(
    sha: str, root: Path, *, packages_dir: str = "packages"
) -> frozenset[str]:
    """Return the set of packages touched by commit ``sha``."""
    packages = packages_from_paths(await changed_files(sha, root), packages_dir)
    if packages:
        debug(f"Changed packages for {sha}: {', '.join(sorted(packages))}")
    return packages


async def map_commits(
    commits: Sequence[Commit], root: Path, *, packages_dir: str = "packages"
) -> dict[str, frozenset[str]]:
    """Look up the touched packages of every commit concurrently.

    Returns:
        Map of commit hash → packages it touched. Complete before it is
        returned, so callers can partition without further synchronization.
    """
    hashes = list(dict.fromkeys(c.hash for c in commits))
    results = await asyncio.gather(
        *(changed_packages(h, root, packages_dir=packages_dir) for h in hashes)
    )
    return dict(zip(hashes, results))
