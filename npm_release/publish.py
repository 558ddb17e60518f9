"""Release dispatch: publish the new version to npm.

Workspaces are published in one ``lerna publish`` with every package forced,
so interdependent packages never end up half-released. Single packages are
bumped with ``npm version``, published, and the bump commit and tag pushed.

Every command runs with check=True: the first failure raises
CalledProcessError and the remaining steps are skipped. Steps that already
ran are left as they are.
"""

from __future__ import annotations

from pathlib import Path

from .config import ReleaseConfig
from .models import RepositoryMode
from .shell import agit, arun, step


async def publish_workspace(root: Path, version: str, config: ReleaseConfig) -> None:
    """Publish every workspace package at ``version`` via lerna."""
    step(f"Publishing workspace at {version}")
    await arun(
        "npx",
        "lerna",
        "publish",
        "--yes",
        "--force-publish=*",
        version,
        "-m",
        f"%v {config.skip_ci}",
        cwd=root,
    )


async def publish_single(root: Path, version: str, config: ReleaseConfig) -> None:
    """Bump package.json to ``version`` and publish it."""
    step(f"Publishing {version}")
    await arun(
        "npm",
        "version",
        version,
        "-m",
        f"Bump version to: %s {config.skip_ci}",
        cwd=root,
    )
    await arun("npm", "publish", cwd=root)


async def push_tags(root: Path, config: ReleaseConfig) -> None:
    """Push the current branch with its tags to the upstream remote."""
    branch = await agit("rev-parse", "--abbrev-ref", "HEAD", cwd=root)
    step(f"Pushing {branch} and tags to {config.remote}")
    await agit(
        "push", "--follow-tags", "--set-upstream", config.remote, branch, cwd=root
    )


async def publish(
    root: Path,
    mode: RepositoryMode,
    version: str,
    *,
    config: ReleaseConfig | None = None,
) -> None:
    """Run the release procedure for the repository's mode.

    Raises:
        subprocess.CalledProcessError: From the first command that fails.
    """
    config = config or ReleaseConfig()

    if mode is RepositoryMode.WORKSPACE:
        await publish_workspace(root, version, config)
    else:
        await publish_single(root, version, config)
        await push_tags(root, config)
