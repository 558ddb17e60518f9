"""Configuration for npm-release.

Settings live in an optional ``.npm-release.toml`` at the repository root::

    [tool.npm-release]
    packages-dir = "packages"
    marker-file = "lerna.json"
    remote = "origin"
    skip-ci = "[skip ci]"
    allow-unpublished = false

Uses tomlkit for parsing, like the rest of our TOML handling. A missing
file means every setting takes its default.
"""

from __future__ import annotations

from pathlib import Path

import tomlkit
from pydantic import BaseModel, ConfigDict, Field, ValidationError
from tomlkit.exceptions import TOMLKitError

from .errors import ManifestError

CONFIG_FILE = ".npm-release.toml"


class ReleaseConfig(BaseModel):
    """Validated ``[tool.npm-release]`` settings.

    Attributes:
        packages_dir: Top-level directory holding workspace packages. Only
                      paths under it are attributed to a package.
        marker_file: File whose presence at the root marks a workspace.
        remote: Remote that single-package releases push to.
        skip_ci: Marker appended to release commit messages.
        allow_unpublished: Treat a package missing from the registry as
                           version 0.0.0 instead of failing.
    """

    model_config = ConfigDict(extra="forbid", populate_by_name=True, frozen=True)

    packages_dir: str = Field(default="packages", alias="packages-dir")
    marker_file: str = Field(default="lerna.json", alias="marker-file")
    remote: str = "origin"
    skip_ci: str = Field(default="[skip ci]", alias="skip-ci")
    allow_unpublished: bool = Field(default=False, alias="allow-unpublished")


def load_config(root: Path) -> ReleaseConfig:
    """Load settings from ``<root>/.npm-release.toml``.

    Raises:
        ManifestError: If the file exists but is not valid TOML or contains
            unknown or ill-typed settings.
    """
    path = root / CONFIG_FILE
    if not path.exists():
        return ReleaseConfig()

    try:
        doc = tomlkit.parse(path.read_text())
    except TOMLKitError as exc:
        raise ManifestError(f"Failed to parse {path}: {exc}") from exc

    table = doc.get("tool", {}).get("npm-release", {})
    try:
        return ReleaseConfig.model_validate(table.unwrap() if table else {})
    except ValidationError as exc:
        raise ManifestError(f"Invalid settings in {path}:\n{exc}") from exc
