"""Hook registry and the npm plugin that taps it.

The release tool that drives a release owns a ``Hooks`` registry and calls
named hooks at fixed points. ``NpmPlugin.apply()`` registers this package's
implementations under those names::

    hooks = Hooks()
    NpmPlugin(Path.cwd()).apply(hooks)
    previous = await hooks.call("getPreviousVersion", lambda v: f"v{v}")
"""

from __future__ import annotations

import asyncio
import inspect
from collections.abc import Callable, Sequence
from pathlib import Path
from typing import Any

from .author import get_author
from .changelog import RenderLine, render_changelog_section
from .changes import map_commits
from .config import ReleaseConfig, load_config
from .manifest import detect_mode
from .models import Author, Commit, RepositoryInfo, RepositoryMode
from .publish import publish
from .repository import get_repository
from .resolver import Normalize, resolve_previous_version
from .shell import info

HOOK_NAMES = (
    "getAuthor",
    "getPreviousVersion",
    "getRepository",
    "renderChangelogLine",
    "publish",
)


class Hooks:
    """Named-callback registry.

    Callbacks run in the order they were tapped. ``call()`` returns the
    first non-None result and skips the remaining callbacks.
    """

    def __init__(self, names: Sequence[str] = HOOK_NAMES) -> None:
        self._taps: dict[str, list[tuple[str, Callable[..., Any]]]] = {
            name: [] for name in names
        }

    def tap(self, hook: str, plugin: str, fn: Callable[..., Any]) -> None:
        """Register ``fn`` under ``hook`` on behalf of ``plugin``.

        Raises:
            KeyError: If ``hook`` is not a known hook name.
        """
        if hook not in self._taps:
            raise KeyError(f"Unknown hook: {hook}")
        self._taps[hook].append((plugin, fn))

    def plugins(self, hook: str) -> list[str]:
        """Names of the plugins tapped into ``hook``, in call order."""
        return [plugin for plugin, _ in self._taps[hook]]

    async def call(self, hook: str, *args: Any) -> Any:
        """Invoke the callbacks for ``hook`` until one returns a value."""
        for _, fn in self._taps[hook]:
            result = fn(*args)
            if inspect.isawaitable(result):
                result = await result
            if result is not None:
                return result
        return None


class NpmPlugin:
    """Release hooks for npm packages and lerna workspaces."""

    name = "NPM"

    def __init__(self, root: Path, config: ReleaseConfig | None = None) -> None:
        self.root = root
        self.config = config or load_config(root)
        self.mode = RepositoryMode.SINGLE

    def apply(self, hooks: Hooks) -> None:
        """Detect the repository mode and tap every hook."""
        self.mode = detect_mode(self.root, self.config.marker_file)
        info(f"{self.name}: {self.mode.value} repository at {self.root}")

        hooks.tap("getAuthor", self.name, self.get_author)
        hooks.tap("getPreviousVersion", self.name, self.get_previous_version)
        hooks.tap("getRepository", self.name, self.get_repository)
        hooks.tap("renderChangelogLine", self.name, self.render_changelog_line)
        hooks.tap("publish", self.name, self.publish)

    async def get_author(self) -> Author | None:
        return await asyncio.to_thread(get_author, self.root)

    async def get_previous_version(self, normalize: Normalize) -> str:
        return await resolve_previous_version(
            self.root, self.mode, normalize, config=self.config
        )

    async def get_repository(self) -> RepositoryInfo | None:
        return await asyncio.to_thread(get_repository, self.root)

    async def render_changelog_line(
        self, commits: Sequence[Commit], render_line: RenderLine
    ) -> list[str] | None:
        """Group changelog lines by package; workspaces only."""
        if self.mode is not RepositoryMode.WORKSPACE:
            return None
        affected = await map_commits(
            commits, self.root, packages_dir=self.config.packages_dir
        )
        return render_changelog_section(commits, affected, render_line)

    async def publish(self, version: str) -> None:
        await publish(self.root, self.mode, version, config=self.config)
