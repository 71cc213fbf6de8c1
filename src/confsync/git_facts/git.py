# git.py
# Small, focused wrapper around the Git CLI.
# This module centralizes all Git interactions so the resolver
# never needs to call subprocess("git ...") directly.

from __future__ import annotations

import subprocess
from typing import List, Optional


def _git(args: list[str], cwd: Optional[str] = None) -> str:
    """
    Execute a git command and return its stdout as a clean string.

    This is the single low-level entry point for all Git operations in this file.
    Every other function builds on top of this to ensure:
    - consistent invocation of git
    - consistent text output (not bytes)
    - minimal parsing logic duplicated elsewhere

    Args:
        args: List of git arguments (e.g. ["diff", "--name-only", "a..b"])
        cwd: Optional working directory in which to run the git command.

    Returns:
        Stdout from the git command with surrounding whitespace removed.

    Raises:
        subprocess.CalledProcessError: git exited non-zero.
        FileNotFoundError: git is not installed.
    """
    # stderr is captured so a failing diff does not spill into the CI log;
    # the resolver reports the failure as a warning instead.
    out = subprocess.run(
        ["git", *args],
        cwd=cwd,
        text=True,
        encoding="utf-8",
        capture_output=True,
        check=True,
    )
    return out.stdout.strip()


def split_lines(output: str) -> List[str]:
    """
    Turn newline-delimited git output into a list of paths.

    Each entry is trimmed and empty entries are dropped, so "" -> [].
    """
    return [line.strip() for line in output.strip().split("\n") if line.strip()]


def range_diff(base: str, head: str, cwd: Optional[str] = None) -> List[str]:
    """
    Return files changed between two revisions (two-dot range).

    Args:
        base: The older revision.
        head: The newer revision.

    Returns:
        List of repository-relative paths.
    """
    return split_lines(_git(["diff", "--name-only", f"{base}..{head}"], cwd=cwd))


def symmetric_diff(base: str, head: str, cwd: Optional[str] = None) -> List[str]:
    """
    Return files changed on `head` since it diverged from `base`.

    This is the three-dot form, so changes that landed on `base` after the
    branch point are not reported. It needs the merge-base to be present,
    which a shallow checkout often does not have.
    """
    return split_lines(_git(["diff", "--name-only", f"{base}...{head}"], cwd=cwd))


def list_tree(rev: str = "HEAD", cwd: Optional[str] = None) -> List[str]:
    """
    Return every tracked path at `rev`.

    Used when there is no previous revision to diff against.
    """
    # `ls-tree -r --name-only` walks the whole tree of the commit,
    # independent of the working tree / index state.
    return split_lines(_git(["ls-tree", "-r", "--name-only", rev], cwd=cwd))


def has_parent(rev: str = "HEAD", cwd: Optional[str] = None) -> bool:
    """
    Check whether `rev` has at least one parent commit.

    Raises if `rev` itself does not resolve (e.g. not a git repository),
    so callers can tell "first commit" apart from "no repository".

    Reads the raw commit object rather than the commit graph: in a shallow
    clone the boundary commit still records its parent there, while
    `rev-list --parents` shows it as a root. Diffing against that missing
    parent then fails, which is what callers want.
    """
    raw = _git(["cat-file", "commit", rev], cwd=cwd)

    # Header lines run up to the first blank line; the message follows.
    header = raw.split("\n\n", 1)[0]
    return any(line.startswith("parent ") for line in header.splitlines())
