"""npm registry lookups.

Asks the npm CLI rather than the registry's HTTP API so that whatever
registry and credentials the repository's .npmrc configures are honored.
"""

from __future__ import annotations

import subprocess
from pathlib import Path

from .errors import RegistryError
from .shell import anpm, debug


async def latest_published_version(name: str, root: Path) -> str:
    """Return the latest version of ``name`` published to the registry.

    Runs ``npm view <name> version``.

    Raises:
        RegistryError: If npm fails (e.g., the package was never published)
            or reports no version.
    """
    try:
        version = await anpm("view", name, "version", cwd=root)
    except subprocess.CalledProcessError as exc:
        raise RegistryError(name, (exc.stderr or "").strip()) from exc

    if not version:
        raise RegistryError(name, "npm reported no version")

    debug(f"Registry has {name}@{version}")
    return version
