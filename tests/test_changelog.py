"""Tests for npm_release.changelog."""

from __future__ import annotations

from npm_release.changelog import (
    MONOREPO_KEY,
    bucket_key,
    partition_packages,
    render_changelog_section,
)
from npm_release.models import Commit


def _render(commit: Commit) -> str:
    return f"- {commit.subject}"


class TestBucketKey:
    def test_empty_is_monorepo(self) -> None:
        assert bucket_key(frozenset()) == MONOREPO_KEY

    def test_single_package(self) -> None:
        assert bucket_key({"foo"}) == "`foo`"

    def test_sorted_and_quoted(self) -> None:
        assert bucket_key({"foo", "@bar/baz"}) == "`@bar/baz`, `foo`"

    def test_order_independent(self) -> None:
        assert bucket_key(["b", "a"]) == bucket_key(["a", "b"])


class TestPartitionPackages:
    def test_groups_by_affected_set(self) -> None:
        commits = [
            Commit(hash="1", subject="one"),
            Commit(hash="2", subject="two"),
            Commit(hash="3", subject="three"),
            Commit(hash="4", subject="four"),
        ]
        affected = {
            "1": frozenset({"foo"}),
            "2": frozenset({"@bar/baz"}),
            "3": frozenset({"foo"}),
            "4": frozenset(),
        }

        buckets = partition_packages(commits, affected, _render)

        assert buckets == {
            "`foo`": ["- one", "- three"],
            "`@bar/baz`": ["- two"],
            "monorepo": ["- four"],
        }
        assert list(buckets) == ["`foo`", "`@bar/baz`", "monorepo"]

    def test_same_set_same_bucket(self) -> None:
        commits = [Commit(hash="1", subject="one"), Commit(hash="2", subject="two")]
        affected = {"1": ["a", "b"], "2": ["b", "a"]}

        buckets = partition_packages(commits, affected, _render)

        assert buckets == {"`a`, `b`": ["- one", "- two"]}

    def test_unmapped_commit_is_monorepo(self) -> None:
        buckets = partition_packages([Commit(hash="x", subject="x")], {}, _render)
        assert buckets == {"monorepo": ["- x"]}


class TestRenderChangelogSection:
    def test_packages_get_headers(self) -> None:
        commits = [
            Commit(hash="1", subject="fix foo"),
            Commit(hash="2", subject="fix baz"),
        ]
        affected = {"1": frozenset({"foo"}), "2": frozenset({"@bar/baz"})}

        section = render_changelog_section(commits, affected, _render)

        assert section == [
            "- `foo`",
            "  - fix foo",
            "- `@bar/baz`",
            "  - fix baz",
        ]

    def test_monorepo_lines_come_first_unprefixed(self) -> None:
        commits = [
            Commit(hash="1", subject="fix foo"),
            Commit(hash="2", subject="update ci"),
            Commit(hash="3", subject="more foo"),
        ]
        affected = {
            "1": frozenset({"foo"}),
            "2": frozenset(),
            "3": frozenset({"foo"}),
        }

        section = render_changelog_section(commits, affected, _render)

        assert section == [
            "- update ci",
            "- `foo`",
            "  - fix foo",
            "  - more foo",
        ]

    def test_only_monorepo_commits_is_absent(self) -> None:
        commits = [Commit(hash="1", subject="a"), Commit(hash="2", subject="b")]
        affected = {"1": frozenset(), "2": frozenset()}

        assert render_changelog_section(commits, affected, _render) is None

    def test_no_commits_is_absent(self) -> None:
        assert render_changelog_section([], {}, _render) is None

    def test_single_package_bucket_is_shown(self) -> None:
        commits = [Commit(hash="1", subject="a")]
        section = render_changelog_section(commits, {"1": {"foo"}}, _render)
        assert section == ["- `foo`", "  - a"]

    def test_idempotent(self) -> None:
        commits = [
            Commit(hash="1", subject="a"),
            Commit(hash="2", subject="b"),
        ]
        affected = {"1": frozenset({"foo"}), "2": frozenset()}

        first = render_changelog_section(commits, affected, _render)
        second = render_changelog_section(commits, affected, _render)

        assert first == second
