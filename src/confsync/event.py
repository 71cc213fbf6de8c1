# event.py
from __future__ import annotations

from pathlib import Path
from typing import List, Optional

from pydantic import BaseModel, ConfigDict

# -------------------- Schemas --------------------
# Only the parts of the webhook payload we read. Everything else is ignored.


class CommitRecord(BaseModel):
    model_config = ConfigDict(extra="ignore")

    added: Optional[List[str]] = None
    modified: Optional[List[str]] = None
    removed: Optional[List[str]] = None

    def paths(self) -> List[str]:
        return [*(self.added or []), *(self.modified or []), *(self.removed or [])]


class RevisionRef(BaseModel):
    model_config = ConfigDict(extra="ignore")

    sha: str


class PullRequest(BaseModel):
    model_config = ConfigDict(extra="ignore")

    base: RevisionRef
    head: RevisionRef


class ChangeEvent(BaseModel):
    """A push (commit list) or pull request event."""
    model_config = ConfigDict(extra="ignore", frozen=True)

    commits: Optional[List[CommitRecord]] = None
    pull_request: Optional[PullRequest] = None

    def changed_paths(self) -> List[str]:
        """Union of added/modified/removed across all commits, first-seen order."""
        seen: dict[str, None] = {}
        for commit in self.commits or []:
            for path in commit.paths():
                seen.setdefault(path, None)
        return list(seen)


def load_event(path: str | Path) -> ChangeEvent:
    """
    Parse the event payload file.

    Raises:
        OSError: file cannot be read
        pydantic.ValidationError: not JSON, or the wrong shape
    """
    return ChangeEvent.model_validate_json(Path(path).read_text(encoding="utf-8"))
