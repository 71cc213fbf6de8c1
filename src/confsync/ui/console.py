"""Console output formatting utilities for confsync."""

from __future__ import annotations

import os
import sys
from typing import Optional, TextIO

from confsync.settings import ANNOTATIONS_ENV, MASK


class Console:
    """
    Centralized console output.

    Every line goes through `_emit`, which replaces registered secret values
    with a mask before anything reaches stdout/stderr.
    """

    def __init__(self, debug: bool = False, annotations: Optional[bool] = None):
        """
        Initialize console formatter.

        Args:
            debug: If True, show detailed output including stack traces
            annotations: Emit GitHub workflow commands for warnings/errors.
                Defaults to on when running inside GitHub Actions.
        """
        self.debug = debug
        if annotations is None:
            annotations = os.environ.get(ANNOTATIONS_ENV) == "true"
        self.annotations = annotations
        self._secrets: set[str] = set()

    def register_secret(self, value: Optional[str]) -> None:
        """Mask `value` in every line printed from now on."""
        if value:
            self._secrets.add(value)

    def scrub(self, text: str) -> str:
        # Longest first so a secret containing another is masked whole.
        for secret in sorted(self._secrets, key=len, reverse=True):
            text = text.replace(secret, MASK)
        return text

    def _emit(self, text: str, stream: Optional[TextIO] = None) -> None:
        print(self.scrub(text), file=stream or sys.stdout)

    def print_header(self, title: str) -> None:
        """Print a section header."""
        self._emit(f"\n{title}")
        self._emit("-" * len(title))

    def print_run_started(
        self,
        service: str,
        config_path: str,
        remote_dir: str,
        ssh: str,
    ) -> None:
        """Print run start information."""
        self._emit("\nSYNC STARTED")
        self._emit(f"Service: {service}")
        self._emit(f"Config path: {config_path}")
        self._emit(f"Remote project directory: {remote_dir}")
        self._emit(f"SSH: {ssh}")
        self._emit("")

    def print_command(self, command: str) -> None:
        """Print the command about to be executed."""
        self._emit(f"Executing: {command}")

    def print_info(self, message: str) -> None:
        """Print informational message."""
        self._emit(message)

    def print_warning(self, message: str) -> None:
        if self.annotations:
            self._emit(f"::warning::{message}")
        else:
            self._emit(f"WARNING: {message}", sys.stderr)

    def print_error(
        self,
        title: str,
        message: str,
        details: Optional[list[str]] = None,
        suggestion: Optional[str] = None,
    ) -> None:
        """
        Print structured error message.

        Args:
            title: Error title
            message: Main error message
            details: Optional list of detail lines
            suggestion: Optional suggestion for user
        """
        if self.annotations:
            self._emit(f"::error::{title}: {message}")
        else:
            self._emit(f"\nERROR: {title}", sys.stderr)
            self._emit(message, sys.stderr)
        if details:
            for detail in details:
                self._emit(f"  {detail}", sys.stderr)
        if suggestion:
            self._emit(f"\n{suggestion}", sys.stderr)

    def print_exception(self, exc: BaseException) -> None:
        """Print exception, with full traceback only in debug mode."""
        if self.debug:
            import traceback
            self._emit("".join(traceback.format_exception(exc)), sys.stderr)
        else:
            self._emit(f"Error: {exc}", sys.stderr)

    def print_debug(self, message: str) -> None:
        """Print debug message (only if debug mode enabled)."""
        if self.debug:
            self._emit(f"[DEBUG] {message}", sys.stderr)


# Global console instance (will be initialized by CLI)
_console: Optional[Console] = None


def get_console() -> Console:
    """Get the global console instance."""
    global _console
    if _console is None:
        _console = Console()
    return _console


def set_console(console: Console) -> None:
    """Set the global console instance."""
    global _console
    _console = console
