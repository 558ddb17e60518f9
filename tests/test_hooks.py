"""Tests for npm_release.hooks."""

from __future__ import annotations

from pathlib import Path
from unittest.mock import AsyncMock, patch

import pytest

from npm_release.config import ReleaseConfig
from npm_release.hooks import HOOK_NAMES, Hooks, NpmPlugin
from npm_release.models import Author, Commit, RepositoryInfo, RepositoryMode


class TestHooks:
    def test_unknown_hook(self) -> None:
        hooks = Hooks()
        with pytest.raises(KeyError):
            hooks.tap("noSuchHook", "test", lambda: None)

    @pytest.mark.asyncio
    async def test_first_result_wins(self) -> None:
        hooks = Hooks()
        calls: list[str] = []

        def first() -> None:
            calls.append("first")

        async def second() -> str:
            calls.append("second")
            return "from second"

        def third() -> str:
            calls.append("third")
            return "from third"

        hooks.tap("getAuthor", "a", first)
        hooks.tap("getAuthor", "b", second)
        hooks.tap("getAuthor", "c", third)

        assert await hooks.call("getAuthor") == "from second"
        assert calls == ["first", "second"]
        assert hooks.plugins("getAuthor") == ["a", "b", "c"]

    @pytest.mark.asyncio
    async def test_passes_arguments(self) -> None:
        hooks = Hooks()
        hooks.tap("getPreviousVersion", "t", lambda normalize: normalize("1.0.0"))

        assert await hooks.call("getPreviousVersion", lambda v: f"v{v}") == "v1.0.0"

    @pytest.mark.asyncio
    async def test_no_taps(self) -> None:
        assert await Hooks().call("publish", "1.0.0") is None


class TestNpmPlugin:
    def test_taps_every_hook(self, single_repo: Path) -> None:
        hooks = Hooks()
        NpmPlugin(single_repo).apply(hooks)

        for name in HOOK_NAMES:
            assert hooks.plugins(name) == ["NPM"]

    def test_detects_mode_on_apply(self, workspace_repo: Path) -> None:
        plugin = NpmPlugin(workspace_repo)
        plugin.apply(Hooks())
        assert plugin.mode is RepositoryMode.WORKSPACE

    @pytest.mark.asyncio
    async def test_author_and_repository(self, single_repo: Path) -> None:
        hooks = Hooks()
        NpmPlugin(single_repo).apply(hooks)

        author = await hooks.call("getAuthor")
        repository = await hooks.call("getRepository")

        assert author == Author(
            name="Jane Doe", email="jane@example.com", url="https://jane.dev"
        )
        assert repository == RepositoryInfo(owner="acme", repo="my-lib")

    @pytest.mark.asyncio
    @patch("npm_release.resolver.latest_published_version", new_callable=AsyncMock)
    async def test_previous_version(
        self, mock_latest: AsyncMock, single_repo: Path
    ) -> None:
        mock_latest.return_value = "1.5.0"
        hooks = Hooks()
        NpmPlugin(single_repo).apply(hooks)

        assert await hooks.call("getPreviousVersion", lambda v: v) == "1.5.0"

    @pytest.mark.asyncio
    @patch("npm_release.changes.agit", new_callable=AsyncMock)
    async def test_changelog_single_repo_is_absent(
        self, mock_agit: AsyncMock, single_repo: Path
    ) -> None:
        hooks = Hooks()
        NpmPlugin(single_repo).apply(hooks)

        result = await hooks.call(
            "renderChangelogLine", [Commit(hash="c1")], lambda c: c.hash
        )

        assert result is None
        mock_agit.assert_not_awaited()

    @pytest.mark.asyncio
    @patch("npm_release.changes.agit", new_callable=AsyncMock)
    async def test_changelog_workspace(
        self, mock_agit: AsyncMock, workspace_repo: Path
    ) -> None:
        files = {"c1": "packages/foo/a.ts", "c2": "README.md", "c3": "libs/x/y.ts"}
        mock_agit.side_effect = lambda *args, cwd: files[args[4]]
        hooks = Hooks()
        NpmPlugin(workspace_repo, ReleaseConfig()).apply(hooks)
        commits = [Commit(hash=h, subject=f"change {h}") for h in ("c1", "c2", "c3")]

        result = await hooks.call(
            "renderChangelogLine", commits, lambda c: f"- {c.subject}"
        )

        assert result == ["- change c2", "- change c3", "- `foo`", "  - change c1"]

    @pytest.mark.asyncio
    @patch("npm_release.hooks.publish", new_callable=AsyncMock)
    async def test_publish_dispatches_with_mode(
        self, mock_publish: AsyncMock, workspace_repo: Path
    ) -> None:
        config = ReleaseConfig()
        hooks = Hooks()
        NpmPlugin(workspace_repo, config).apply(hooks)

        await hooks.call("publish", "2.1.0")

        mock_publish.assert_awaited_once_with(
            workspace_repo, RepositoryMode.WORKSPACE, "2.1.0", config=config
        )
