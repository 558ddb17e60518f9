"""package.json and lerna.json reading.

Every manifest is validated into a model as soon as it is read, so a
malformed file fails here with a ManifestError rather than deep inside the
version logic.
"""

from __future__ import annotations

import glob
import json
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from .errors import ManifestError
from .models import Manifest, Package, RepositoryMode, WorkspaceMarker
from .shell import debug

MANIFEST_FILE = "package.json"


def load_json(path: Path) -> dict[str, Any]:
    """Read a JSON file that must hold an object at the top level."""
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except OSError as exc:
        raise ManifestError(f"Failed to read {path}: {exc}") from exc
    except json.JSONDecodeError as exc:
        raise ManifestError(f"Failed to parse {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise ManifestError(f"{path} is not a JSON object")
    return data


def load_manifest(path: Path) -> Manifest:
    """Load and validate a package.json."""
    try:
        return Manifest.model_validate(load_json(path))
    except ValidationError as exc:
        raise ManifestError(f"Invalid manifest {path}:\n{exc}") from exc


def read_root_manifest(root: Path) -> Manifest | None:
    """Load the root package.json, or None if the repository has none."""
    path = root / MANIFEST_FILE
    if not path.exists():
        return None
    return load_manifest(path)


def read_marker(root: Path, marker_file: str = "lerna.json") -> WorkspaceMarker:
    """Load and validate the workspace marker file."""
    path = root / marker_file
    try:
        return WorkspaceMarker.model_validate(load_json(path))
    except ValidationError as exc:
        raise ManifestError(f"Invalid workspace marker {path}:\n{exc}") from exc


def detect_mode(root: Path, marker_file: str = "lerna.json") -> RepositoryMode:
    """A repository is a workspace iff the marker file sits at its root."""
    if (root / marker_file).exists():
        return RepositoryMode.WORKSPACE
    return RepositoryMode.SINGLE


def discover_packages(root: Path, marker: WorkspaceMarker) -> list[Package]:
    """Find every sub-package matched by the marker's package globs.

    Directories without a package.json are skipped. Packages come back in
    glob order, sorted within each glob for deterministic output.

    Raises:
        ManifestError: If a manifest is malformed or two packages share a name.
    """
    member_dirs: list[Path] = []
    for pattern in marker.packages:
        # Glob relative to root so special characters in root stay literal
        for match in sorted(glob.glob(pattern, root_dir=root)):
            p = root / match
            if (p / MANIFEST_FILE).exists() and p not in member_dirs:
                member_dirs.append(p)

    packages: list[Package] = []
    seen: dict[str, str] = {}
    for d in member_dirs:
        manifest = load_manifest(d / MANIFEST_FILE)
        rel = d.relative_to(root).as_posix()
        if manifest.name in seen:
            raise ManifestError(
                f"Duplicate package name {manifest.name!r} in {seen[manifest.name]} and {rel}"
            )
        seen[manifest.name] = rel
        packages.append(
            Package(
                name=manifest.name,
                version=manifest.version,
                private=manifest.private,
                path=rel,
            )
        )
        debug(f"{manifest.name} {manifest.version or '<unversioned>'} ({rel})")

    return packages
