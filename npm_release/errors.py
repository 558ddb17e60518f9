"""Exceptions raised by npm-release.

Library code raises these; the CLI turns them into a fatal() exit.
"""

from __future__ import annotations


class ReleaseError(Exception):
    """Base class for npm-release errors."""


class ManifestError(ReleaseError):
    """A package.json, lerna.json or config file is missing or malformed."""


class RegistryError(ReleaseError):
    """The registry could not report a published version for a package."""

    def __init__(self, package: str, detail: str = "") -> None:
        self.package = package
        message = f"Could not find a published version of {package} in the registry"
        if detail:
            message += f": {detail}"
        super().__init__(message)
