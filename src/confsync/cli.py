# cli.py
from __future__ import annotations

import sys

import click

from confsync.dispatcher import maybe_sync, preflight
from confsync.errors import SyncError, TransferError
from confsync.model import RemoteTarget, RevisionFacts, ServiceDescriptor
from confsync.resolver import resolve_changed_files
from confsync.settings import ENV_PREFIX, EVENT_AFTER_ENV, EVENT_BEFORE_ENV, EVENT_PATH_ENV
from confsync.ui.console import Console, get_console, set_console


def _env(name: str) -> str:
    return f"{ENV_PREFIX}{name}"


def revision_options(fn):
    """Options describing where to look for "what changed"."""
    options = [
        click.option("--event-path", envvar=EVENT_PATH_ENV, default=None,
                     help="Path to the CI event payload (JSON)"),
        click.option("--before", envvar=EVENT_BEFORE_ENV, default=None,
                     help="Revision before the push"),
        click.option("--after", envvar=EVENT_AFTER_ENV, default=None,
                     help="Revision after the push"),
        click.option("--repo-dir", default=".", show_default=True,
                     type=click.Path(file_okay=False), help="Git checkout to inspect"),
    ]
    for option in reversed(options):
        fn = option(fn)
    return fn


@click.group()
@click.option(
    "--debug",
    is_flag=True,
    default=False,
    help="Enable debug mode (show stack traces and detailed output)",
)
@click.pass_context
def cli(ctx, debug):
    """confsync: push a service's config directory to its host when it changes."""
    console = Console(debug=debug)
    set_console(console)
    ctx.ensure_object(dict)
    ctx.obj["debug"] = debug


@cli.command()
@click.option("--service-name", required=True, envvar=_env("SERVICE_NAME"),
              help="Service subdirectory under --config-dir")
@click.option("--config-dir", required=True, envvar=_env("CONFIG_DIR"),
              help="Local directory holding one subdirectory per service")
@click.option("--remote-project-dir", required=True, envvar=_env("REMOTE_PROJECT_DIR"),
              help="Project root on the remote host")
@click.option("--ssh-host", required=True, envvar=_env("SSH_HOST"))
@click.option("--ssh-user", required=True, envvar=_env("SSH_USER"))
@click.option("--ssh-port", required=True, envvar=_env("SSH_PORT"), type=click.IntRange(1, 65535))
@click.option("--ssh-password", required=True, envvar=_env("SSH_PASSWORD"), show_envvar=True,
              help="SSH password (prefer the environment variable)")
@revision_options
def sync(service_name, config_dir, remote_project_dir, ssh_host, ssh_user, ssh_port,
         ssh_password, event_path, before, after, repo_dir):
    """Copy the service's config to the remote host if it changed."""
    console = get_console()
    console.register_secret(ssh_password)

    service = ServiceDescriptor(
        service_name=service_name,
        config_dir=config_dir,
        remote_project_dir=remote_project_dir,
    )
    remote = RemoteTarget(host=ssh_host, user=ssh_user, port=ssh_port, password=ssh_password)
    facts = RevisionFacts(event_path=event_path, before=before, after=after, repo_dir=repo_dir)

    console.print_run_started(
        service=service_name,
        config_path=config_dir,
        remote_dir=remote_project_dir,
        ssh=f"{remote.destination}:{ssh_port}",
    )

    try:
        preflight(service, console=console)
        changed = resolve_changed_files(facts, console=console)
        console.print_debug(f"Changed files: {changed}")
        maybe_sync(changed, service, remote, console=console)
    except TransferError:
        # already reported by the dispatcher
        sys.exit(1)
    except SyncError as e:
        console.print_error(f"{e.kind} error", e.message,
                            details=[f"{k}={v}" for k, v in e.details.items()] or None)
        sys.exit(1)
    except KeyboardInterrupt:
        console.print_info("\nInterrupted by user")
        sys.exit(130)
    except Exception as e:
        console.print_exception(e)
        sys.exit(1)


@cli.command()
@revision_options
def changes(event_path, before, after, repo_dir):
    """Print the files the current event changed, one per line."""
    console = get_console()
    facts = RevisionFacts(event_path=event_path, before=before, after=after, repo_dir=repo_dir)
    files = resolve_changed_files(facts, console=console)

    console.print_header(f"CHANGED FILES ({len(files)})")
    for path in files:
        console.print_info(path)


if __name__ == "__main__":
    cli()
