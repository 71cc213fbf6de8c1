# errors.py
from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class SyncError(Exception):
    """
    Structured error with enough context for:
      - clean CLI output
      - debugging a CI run without full tracebacks
    """
    kind: str
    message: str
    details: dict = field(default_factory=dict)

    def __str__(self) -> str:
        lines = [f"{self.kind}: {self.message}"]
        for k, v in self.details.items():
            lines.append(f"{k}={v}")
        return "\n".join(lines)


class ConfigError(SyncError):
    """The invocation is malformed (missing config root or service directory)."""

    def __init__(self, message: str, **details):
        super().__init__(kind="config", message=message, details=details)


class ManifestError(SyncError):
    """The service directory could not be walked."""

    def __init__(self, message: str, **details):
        super().__init__(kind="manifest", message=message, details=details)


class TransferError(SyncError):
    """The remote copy failed: auth, connectivity, remote path, missing tools."""

    def __init__(self, message: str, **details):
        super().__init__(kind="transfer", message=message, details=details)
