"""Shared test fixtures."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import pytest


def write_json(path: Path, data: dict[str, Any]) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(data, indent=2))
    return path


@pytest.fixture
def single_repo(tmp_path: Path) -> Path:
    """A single-package repository."""
    write_json(
        tmp_path / "package.json",
        {
            "name": "my-lib",
            "version": "1.2.0",
            "author": "Jane Doe <jane@example.com> (https://jane.dev)",
            "repository": "https://github.com/acme/my-lib.git",
        },
    )
    return tmp_path


@pytest.fixture
def workspace_repo(tmp_path: Path) -> Path:
    """A lerna workspace with public, private and scoped packages."""
    write_json(
        tmp_path / "lerna.json",
        {"version": "2.0.0", "packages": ["packages/*", "packages/@*/*"]},
    )
    write_json(tmp_path / "package.json", {"name": "root", "private": True})
    write_json(
        tmp_path / "packages" / "foo" / "package.json",
        {"name": "foo", "version": "2.0.0"},
    )
    write_json(
        tmp_path / "packages" / "@bar" / "baz" / "package.json",
        {"name": "@bar/baz", "version": "2.1.0"},
    )
    write_json(
        tmp_path / "packages" / "internal" / "package.json",
        {"name": "internal", "version": "9.0.0", "private": True},
    )
    return tmp_path
