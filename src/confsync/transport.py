# transport.py
from __future__ import annotations

import os
import shlex
import subprocess
from contextlib import contextmanager
from typing import Dict, Iterator, List, Optional

from .errors import TransferError
from .model import RemoteTarget
from .settings import SECRET_ENV, SSH_OPTIONS
from .ui.console import Console, get_console


@contextmanager
def scoped_secret_env(name: str, value: str) -> Iterator[Dict[str, str]]:
    """
    Yield a copy of the process environment with one secret added.

    os.environ is never touched, so only the child process handed this
    mapping sees the secret. The mapping is emptied on exit.
    """
    env = os.environ.copy()
    env[name] = value
    try:
        yield env
    finally:
        env.clear()


def build_scp_command(source_dir: str, remote_dir: str, remote: RemoteTarget) -> List[str]:
    """
    scp argv that copies the *contents* of source_dir into remote_dir.

    The trailing "/." on the source keeps scp from nesting the directory one
    level deeper. The password is read by `sshpass -e` from the environment
    and is never part of argv.
    """
    return [
        "sshpass", "-e",
        "scp", "-r", *SSH_OPTIONS,
        "-P", str(remote.port),
        f"{source_dir}/.",
        f"{remote.destination}:{remote_dir}/",
    ]


def copy_directory(
    source_dir: str,
    remote_dir: str,
    remote: RemoteTarget,
    console: Optional[Console] = None,
) -> None:
    """
    Recursively copy source_dir to remote_dir on the remote host.

    Raises:
        TransferError: scp failed or sshpass/scp is not installed.
    """
    console = console or get_console()
    cmd = build_scp_command(source_dir, remote_dir, remote)
    console.print_command(shlex.join(cmd))

    with scoped_secret_env(SECRET_ENV, remote.password) as env:
        try:
            proc = subprocess.run(
                cmd,
                env=env,
                text=True,
                capture_output=True,
            )
        except FileNotFoundError as e:
            raise TransferError(
                f"{cmd[0]} not found",
                hint="Install sshpass and an OpenSSH client on the runner.",
                error=str(e),
            ) from e

    if proc.returncode != 0:
        raise TransferError(
            f"scp to {remote.destination}:{remote_dir} failed",
            exit_code=proc.returncode,
            stderr=(proc.stderr or "").strip()[-4000:],
        )
