"""Changelog partitioning by package.

Groups changelog lines by the set of packages each commit touched so that a
workspace release reads as one section per package (or package combination):

    - Repo-wide change (abc1234)
    - `foo`
      - Fix foo parsing (def5678)
    - `@bar/baz`, `foo`
      - Share helper between foo and baz (9876fed)

Line rendering is injected by the caller; this module only decides grouping
and layout.
"""

from __future__ import annotations

from collections.abc import Callable, Collection, Mapping, Sequence

from .models import Commit

MONOREPO_KEY = "monorepo"

RenderLine = Callable[[Commit], str]


def bucket_key(affected: Collection[str]) -> str:
    """Name the bucket for a set of packages.

    The key depends only on the set's contents: names are sorted, each
    wrapped in backticks and joined with ", ". No packages → "monorepo".
    """
    if not affected:
        return MONOREPO_KEY
    return ", ".join(f"`{name}`" for name in sorted(affected))


def partition_packages(
    commits: Sequence[Commit],
    affected: Mapping[str, Collection[str]],
    render_line: RenderLine,
) -> dict[str, list[str]]:
    """Render each commit and file the line under its bucket.

    Buckets keep first-appearance order and lines keep commit order within
    a bucket. Commits missing from ``affected`` count as repo-wide.
    """
    buckets: dict[str, list[str]] = {}
    for commit in commits:
        key = bucket_key(affected.get(commit.hash, ()))
        buckets.setdefault(key, []).append(render_line(commit))
    return buckets


def render_changelog_section(
    commits: Sequence[Commit],
    affected: Mapping[str, Collection[str]],
    render_line: RenderLine,
) -> list[str] | None:
    """Lay out a changelog section grouped by package.

    Repo-wide lines come first without a header. Every other bucket gets a
    ``- <key>`` header with its lines indented beneath it.

    Returns:
        The section's lines, or None when there is nothing package-specific
        to show (no commits, or only repo-wide ones). Callers fall back to
        an ungrouped rendering in that case.
    """
    buckets = partition_packages(commits, affected, render_line)
    if not buckets or list(buckets) == [MONOREPO_KEY]:
        return None

    section: list[str] = list(buckets.pop(MONOREPO_KEY, []))
    for key, lines in buckets.items():
        section.append(f"- {key}")
        section.extend(f"  {line}" for line in lines)
    return section
