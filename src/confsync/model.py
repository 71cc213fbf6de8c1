# model.py
from __future__ import annotations

import os
import posixpath
from dataclasses import dataclass, field
from typing import Optional


@dataclass(frozen=True)
class ServiceDescriptor:
    """
    Which configuration subdirectory belongs to which deployable service.

    `config_dir/service_name` must exist locally; the remote host mirrors the
    same relative layout under `remote_project_dir`.
    """
    service_name: str
    config_dir: str
    remote_project_dir: str

    @property
    def local_path(self) -> str:
        # Normalized like a path join ("./services/" + "api" -> "services/api")
        # so it lines up with the repo-relative paths git reports.
        return os.path.normpath(os.path.join(self.config_dir, self.service_name))

    @property
    def remote_path(self) -> str:
        # config_dir is appended as given, even when absolute.
        joined = "/".join([self.remote_project_dir, self.config_dir, self.service_name])
        return posixpath.normpath(joined)


@dataclass(frozen=True)
class RemoteTarget:
    """SSH destination. The password never shows up in repr()."""
    host: str
    user: str
    port: int
    password: str = field(repr=False)

    @property
    def destination(self) -> str:
        return f"{self.user}@{self.host}"


@dataclass(frozen=True)
class RevisionFacts:
    """What the CI environment tells us about the triggering event."""
    event_path: Optional[str] = None
    before: Optional[str] = None
    after: Optional[str] = None
    repo_dir: str = "."
