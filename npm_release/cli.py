"""CLI entry point for npm-release."""

from __future__ import annotations

import argparse
import asyncio
import subprocess
from importlib.metadata import version as pkg_version
from pathlib import Path

from npm_release.changelog import render_changelog_section
from npm_release.changes import changed_packages, map_commits
from npm_release.config import load_config
from npm_release.errors import ReleaseError
from npm_release.manifest import detect_mode
from npm_release.models import Commit, RepositoryMode
from npm_release.publish import publish
from npm_release.resolver import Normalize, resolve_previous_version
from npm_release.shell import fatal, git, set_verbosity

__version__ = pkg_version("npm-release")


def _prefixer(prefix: str) -> Normalize:
    def normalize(version: str) -> str:
        return version if version.startswith(prefix) else f"{prefix}{version}"

    return normalize


def render_line(commit: Commit) -> str:
    """Default changelog line: ``- <subject> (<short sha>)``."""
    return f"- {commit.subject} ({commit.hash[:7]})"


def list_commits(root: Path, start: str, end: str) -> list[Commit]:
    """Commits reachable from ``end`` but not ``start``, newest first."""
    output = git("log", "--format=%H%x09%s", f"{start}..{end}", cwd=root)
    commits: list[Commit] = []
    for line in output.splitlines():
        sha, _, subject = line.partition("\t")
        commits.append(Commit(hash=sha, subject=subject))
    return commits


def cmd_mode(args: argparse.Namespace) -> None:
    """Print whether the repository is a single package or a workspace."""
    config = load_config(args.root)
    print(detect_mode(args.root, config.marker_file).value)


def cmd_previous_version(args: argparse.Namespace) -> None:
    """Print the version of the previous release."""
    config = load_config(args.root)
    mode = detect_mode(args.root, config.marker_file)
    previous = asyncio.run(
        resolve_previous_version(args.root, mode, _prefixer(args.prefix), config=config)
    )
    print(previous)


def cmd_changed_packages(args: argparse.Namespace) -> None:
    """Print the packages a commit touched, one per line."""
    config = load_config(args.root)
    packages = asyncio.run(
        changed_packages(args.sha, args.root, packages_dir=config.packages_dir)
    )
    for name in sorted(packages):
        print(name)


def cmd_changelog(args: argparse.Namespace) -> None:
    """Print changelog lines for a commit range, grouped by package."""
    config = load_config(args.root)
    commits = list_commits(args.root, args.start, args.end)
    section = None
    if detect_mode(args.root, config.marker_file) is RepositoryMode.WORKSPACE:
        affected = asyncio.run(
            map_commits(commits, args.root, packages_dir=config.packages_dir)
        )
        section = render_changelog_section(commits, affected, render_line)
    if section is None:
        section = [render_line(c) for c in commits]
    print("\n".join(section))


def cmd_publish(args: argparse.Namespace) -> None:
    """Publish the given version."""
    config = load_config(args.root)
    mode = detect_mode(args.root, config.marker_file)
    asyncio.run(publish(args.root, mode, args.version, config=config))


def cli(argv: list[str] | None = None) -> None:
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        prog="npm-release",
        description="Release hooks for npm packages and lerna workspaces.",
    )
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}"
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="Show progress (-v) or diagnostics (-vv).",
    )
    parser.add_argument(
        "--root",
        type=Path,
        default=Path.cwd(),
        help="Repository root. (default: current directory)",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    mode_parser = subparsers.add_parser(
        "mode", help="Print 'single' or 'workspace' for the repository."
    )
    mode_parser.set_defaults(func=cmd_mode)

    prev_parser = subparsers.add_parser(
        "previous-version", help="Print the version of the previous release."
    )
    prev_parser.add_argument(
        "--prefix",
        default="",
        help="Tag prefix added to versions before comparing (e.g., v).",
    )
    prev_parser.set_defaults(func=cmd_previous_version)

    changed_parser = subparsers.add_parser(
        "changed-packages", help="Print the packages a commit touched."
    )
    changed_parser.add_argument("sha", help="Commit to inspect.")
    changed_parser.set_defaults(func=cmd_changed_packages)

    changelog_parser = subparsers.add_parser(
        "changelog", help="Print changelog lines grouped by package."
    )
    changelog_parser.add_argument("start", help="Exclusive start of the range.")
    changelog_parser.add_argument(
        "end", nargs="?", default="HEAD", help="Inclusive end. (default: %(default)s)"
    )
    changelog_parser.set_defaults(func=cmd_changelog)

    publish_parser = subparsers.add_parser(
        "publish", help="Publish the repository at VERSION."
    )
    publish_parser.add_argument("version", help="Version to release.")
    publish_parser.set_defaults(func=cmd_publish)

    args = parser.parse_args(argv)
    set_verbosity(args.verbose)
    try:
        args.func(args)
    except (ReleaseError, subprocess.CalledProcessError) as exc:
        fatal(str(exc))
