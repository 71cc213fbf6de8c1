# resolver.py
from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Callable, List, Optional, Tuple

from .event import ChangeEvent, load_event
from .git_facts import git
from .model import RevisionFacts
from .settings import ZERO_SHA
from .ui.console import Console, get_console


@dataclass
class ResolveContext:
    facts: RevisionFacts
    console: Console
    event: Optional[ChangeEvent] = None


Strategy = Callable[[ResolveContext], Optional[List[str]]]


def _load_event(facts: RevisionFacts, console: Console) -> Optional[ChangeEvent]:
    """Missing payload is normal (local runs); a broken one is a warning."""
    path = facts.event_path
    if not path or not os.path.exists(path):
        console.print_debug(f"No event payload at {path!r}")
        return None
    try:
        return load_event(path)
    except Exception as e:
        console.print_warning(f"Failed to parse event payload: {e}")
        return None


# ----------------------------------------------------------------------
# Strategies, in priority order
# ----------------------------------------------------------------------

def _event_commits(ctx: ResolveContext) -> Optional[List[str]]:
    if ctx.event is None or ctx.event.commits is None:
        return None
    paths = ctx.event.changed_paths()
    if paths:
        ctx.console.print_info("Using event commit list for changed files")
    return paths


def _pull_request(ctx: ResolveContext) -> Optional[List[str]]:
    if ctx.event is None or ctx.event.pull_request is None:
        return None
    pr = ctx.event.pull_request
    ctx.console.print_info("Pull request detected, using git diff with base branch")
    return git.symmetric_diff(pr.base.sha, pr.head.sha, cwd=ctx.facts.repo_dir)


def _previous_commit(ctx: ResolveContext) -> Optional[List[str]]:
    cwd = ctx.facts.repo_dir
    if git.has_parent("HEAD", cwd=cwd):
        ctx.console.print_info("Using git diff with previous commit")
        return git.range_diff("HEAD~1", "HEAD", cwd=cwd)

    # First commit: nothing to diff against, so everything is new.
    ctx.console.print_info("No previous commit, treating all tracked files as changed")
    return git.list_tree("HEAD", cwd=cwd)


def _environment_range(ctx: ResolveContext) -> Optional[List[str]]:
    before, after = ctx.facts.before, ctx.facts.after
    if not before or not after or before == ZERO_SHA:
        return None
    ctx.console.print_info("Using environment revisions for diff")
    return git.range_diff(before, after, cwd=ctx.facts.repo_dir)


STRATEGIES: Tuple[Tuple[str, Strategy], ...] = (
    ("event-commits", _event_commits),
    ("pull-request", _pull_request),
    ("previous-commit", _previous_commit),
    ("environment-range", _environment_range),
)


# ----------------------------------------------------------------------
# Public API
# ----------------------------------------------------------------------

def resolve_changed_files(
    facts: RevisionFacts,
    console: Optional[Console] = None,
    strategies: Tuple[Tuple[str, Strategy], ...] = STRATEGIES,
) -> List[str]:
    """
    Work out which repository paths changed in the triggering event.

    Strategies are tried in order; the first one returning at least one
    path wins. A strategy that raises is reported as a warning and the next
    one is tried. Never raises: when everything fails the result is [].
    """
    console = console or get_console()
    ctx = ResolveContext(facts=facts, console=console, event=_load_event(facts, console))

    for name, strategy in strategies:
        try:
            found = strategy(ctx)
        except Exception as e:
            console.print_warning(f"{name} detection failed: {_reason(e)}")
            continue

        # dedupe, drop blanks, keep first-seen order
        paths = list(dict.fromkeys(p.strip() for p in found or [] if p and p.strip()))
        if paths:
            console.print_debug(f"{name} found {len(paths)} changed file(s)")
            return paths
        console.print_debug(f"{name} found nothing")

    console.print_warning("All change detection methods failed, assuming no changes")
    return []


def _reason(exc: Exception) -> str:
    # git's own message is more useful than "returned non-zero exit status 128"
    stderr = getattr(exc, "stderr", None)
    if isinstance(stderr, str) and stderr.strip():
        return stderr.strip().splitlines()[-1]
    return str(exc)
