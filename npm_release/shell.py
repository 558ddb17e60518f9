"""Shell, git and npm utilities.

Provides simple wrappers around subprocess calls for running shell commands,
git and npm operations, plus output formatting helpers. Each command helper
has an ``a``-prefixed twin that runs it on a worker thread so callers on the
event loop can fan out without blocking.
"""

from __future__ import annotations

import asyncio
import subprocess
import sys
from pathlib import Path

_verbosity = 0


def set_verbosity(level: int) -> None:
    """Set how chatty info()/debug() are (0 = quiet, 1 = -v, 2 = -vv)."""
    global _verbosity
    _verbosity = level


def git(*args: str, cwd: Path | None = None, check: bool = True) -> str:
    """Run a git command and return stdout.

    Args:
        *args: Arguments to pass to git (e.g., "status", "--short").
        cwd: Repository root to run in. Defaults to the process cwd.
        check: If True (default), raise on non-zero exit. Set to False
               for commands that may legitimately fail (e.g., tag lookup).

    Returns:
        Stripped stdout from the git command.
    """
    result = subprocess.run(
        ["git", *args], cwd=cwd, capture_output=True, text=True, check=check
    )
    return result.stdout.strip()


def npm(*args: str, cwd: Path | None = None, check: bool = True) -> str:
    """Run an npm command and return stripped stdout."""
    result = subprocess.run(
        ["npm", *args], cwd=cwd, capture_output=True, text=True, check=check
    )
    return result.stdout.strip()


def run(
    *args: str, cwd: Path | None = None, check: bool = True
) -> subprocess.CompletedProcess[bytes]:
    """Run an arbitrary shell command.

    Unlike git(), this doesn't capture output - it streams directly to
    the terminal so users can see publish progress, etc.

    Args:
        *args: Command and arguments (e.g., "npm", "publish").
        cwd: Directory to run in. Defaults to the process cwd.
        check: If True (default), raise on non-zero exit.

    Returns:
        CompletedProcess with returncode for checking success.
    """
    return subprocess.run(args, cwd=cwd, check=check)


async def agit(*args: str, cwd: Path | None = None, check: bool = True) -> str:
    """Async git(); the subprocess runs in a worker thread."""
    return await asyncio.to_thread(git, *args, cwd=cwd, check=check)


async def anpm(*args: str, cwd: Path | None = None, check: bool = True) -> str:
    """Async npm()."""
    return await asyncio.to_thread(npm, *args, cwd=cwd, check=check)


async def arun(
    *args: str, cwd: Path | None = None, check: bool = True
) -> subprocess.CompletedProcess[bytes]:
    """Async run()."""
    return await asyncio.to_thread(run, *args, cwd=cwd, check=check)


def step(msg: str) -> None:
    """Print a visually distinct step header.

    Used to separate major phases of a release in terminal output.
    """
    print(f"\n{'─' * 60}\n{msg}\n{'─' * 60}")


def info(msg: str) -> None:
    """Print a progress message when running with -v or more."""
    if _verbosity >= 1:
        print(f"  {msg}")


def debug(msg: str) -> None:
    """Print a diagnostic message when running with -vv."""
    if _verbosity >= 2:
        print(f"  {msg}")


def fatal(msg: str) -> None:
    """Print an error message and exit with code 1.

    Use for unrecoverable errors that should halt the release.
    """
    print(f"ERROR: {msg}", file=sys.stderr)
    sys.exit(1)
