"""Previous-release resolution.

The previous version is the baseline the next release is computed from. It
is whichever is newer: what the repository says it is at, or what the
registry says was last published. Before comparing, both go through the
same caller-supplied ``normalize`` step (typically adding a tag prefix).

In a workspace the repository-side value is lerna.json's shared version,
and the registry is asked about the sub-package most likely to have been
released last: the public package with the greatest version.
"""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

from .config import ReleaseConfig
from .errors import RegistryError
from .manifest import discover_packages, read_marker, read_root_manifest
from .models import RepositoryMode
from .registry import latest_published_version
from .shell import debug, info
from .versions import LOWEST_VERSION, greater_release, select_released_package

Normalize = Callable[[str], str]


async def _published_version(
    name: str, root: Path, normalize: Normalize, config: ReleaseConfig
) -> str:
    try:
        return normalize(await latest_published_version(name, root))
    except RegistryError:
        if not config.allow_unpublished:
            raise
        info(f"{name} is not published yet, treating it as {LOWEST_VERSION}")
        return normalize(LOWEST_VERSION)


async def resolve_previous_version(
    root: Path,
    mode: RepositoryMode,
    normalize: Normalize,
    *,
    config: ReleaseConfig | None = None,
) -> str:
    """Compute the version of the previous release.

    Args:
        root: Repository root.
        mode: Repository layout, as returned by detect_mode().
        normalize: Applied identically to local and published versions
                   before they are compared.
        config: Release settings; defaults are used when omitted.

    Returns:
        The previous version, or "" for a single-package repository
        without a package.json.

    Raises:
        ManifestError: If a manifest or the workspace marker is unreadable.
        RegistryError: If the registry lookup fails and unpublished
            packages are not allowed.
    """
    config = config or ReleaseConfig()

    if mode is RepositoryMode.WORKSPACE:
        debug("Using the workspace to calculate the previous release")
        marker = read_marker(root, config.marker_file)
        baseline = normalize(marker.version)
        released = select_released_package(discover_packages(root, marker))

        if released is None:
            previous = baseline
        else:
            debug(f"Latest released package: {released.name} {released.version}")
            published = await _published_version(released.name, root, normalize, config)
            previous = greater_release(baseline, published)
    else:
        manifest = read_root_manifest(root)
        if manifest is None or not manifest.version:
            debug("No versioned package.json, no previous version")
            return ""

        debug("Using package.json to calculate the previous release")
        local = normalize(manifest.version)
        published = await _published_version(manifest.name, root, normalize, config)
        previous = greater_release(local, published)

    info(f"Previous version: {previous}")
    return previous
