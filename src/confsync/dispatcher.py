# dispatcher.py
from __future__ import annotations

import os
from typing import Iterable, List, Optional

from .errors import ConfigError, ManifestError, TransferError
from .model import RemoteTarget, ServiceDescriptor
from .transport import copy_directory
from .ui.console import Console, get_console

SYNCED = "synced"
SKIPPED_NO_CHANGES = "skipped(no changes)"
SKIPPED_EMPTY = "skipped(empty)"


def preflight(service: ServiceDescriptor, console: Optional[Console] = None) -> None:
    """
    Fail fast on a malformed invocation, before any git or network work.

    Raises:
        ConfigError: config root or the service's subdirectory is missing.
    """
    console = console or get_console()
    if not os.path.isdir(service.config_dir):
        raise ConfigError(
            f"Config directory does not exist: {service.config_dir}",
            config_dir=service.config_dir,
        )
    if not os.path.isdir(service.local_path):
        raise ConfigError(
            f"Service configuration directory does not exist: {service.local_path}",
            service=service.service_name,
        )
    console.print_info(f"Found configuration directory for service: {service.local_path}")


def gate_check(changed_files: Iterable[str], service: ServiceDescriptor) -> bool:
    # Plain string prefix: "services/api" also matches "services/api-v2/...".
    prefix = service.local_path
    return any(path.startswith(prefix) for path in changed_files)


def list_files(directory: str) -> List[str]:
    """
    Every file below `directory`, recursively.

    Raises:
        ManifestError: the directory (or a subdirectory) cannot be read.
    """
    def _fail(err: OSError) -> None:
        raise ManifestError(f"Cannot read {err.filename}: {err.strerror}", directory=directory)

    if not os.path.isdir(directory):
        raise ManifestError(f"Not a directory: {directory}", directory=directory)

    files: List[str] = []
    # Symlinked directories are followed; scp copies through them too.
    for root, _dirs, names in os.walk(directory, onerror=_fail, followlinks=True):
        files.extend(os.path.join(root, name) for name in sorted(names))
    return files


def maybe_sync(
    changed_files: Iterable[str],
    service: ServiceDescriptor,
    remote: RemoteTarget,
    console: Optional[Console] = None,
) -> str:
    """
    Copy the service's config directory to the remote host if it changed.

    Returns one of SYNCED, SKIPPED_NO_CHANGES, SKIPPED_EMPTY.

    Raises:
        ManifestError: the service directory cannot be walked.
        TransferError: the copy failed. Reported here, then re-raised.
    """
    console = console or get_console()
    name = service.service_name

    if not gate_check(changed_files, service):
        console.print_info(f"No changes detected in {name} configuration. Exiting.")
        return SKIPPED_NO_CHANGES

    console.print_info(f"Changes detected in {name} configuration. Proceeding with update...")
    console.print_info(f"Copying configuration folder for {name}...")

    # Walked fresh: the tree may differ from what the change set describes.
    files = list_files(service.local_path)
    if not files:
        console.print_warning(f"No files found in {service.local_path}")
        return SKIPPED_EMPTY
    console.print_info(f"Found {len(files)} files in configuration folder")

    try:
        copy_directory(service.local_path, service.remote_path, remote, console=console)
    except TransferError as e:
        console.print_error(
            "Failed to copy configuration folder",
            e.message,
            details=[f"{k}={v}" for k, v in e.details.items()],
        )
        raise

    console.print_info(f"Successfully copied configuration folder for {name}")
    return SYNCED
