# topmark:header:start
#
#   project      : Cowardly
#   file         : backups.py
#   file_relpath : src/cowardly/cli/commands/backups.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Cowardly backup and reset commands."""

from __future__ import annotations

import click

from cowardly.cli.cmd_common import domain_errors, ensure_installed, get_console, get_session


@click.command(name="reset", help="Remove every Brave preference set by Cowardly or by you.")
@click.option("--yes", "-y", is_flag=True, help="Do not ask for confirmation.")
@click.pass_context
def reset_command(ctx: click.Context, yes: bool) -> None:
    """Back up, then clear the user preferences and the managed policy."""
    session = get_session(ctx)
    console = get_console(ctx)
    with domain_errors():
        ensure_installed(ctx, session, refuse_running=True)
    if not yes:
        click.confirm(
            f"Reset all {session.target.display_name} preferences?", abort=True, default=False
        )
    with domain_errors():
        backup = session.backup_before_change()
        result = session.reset()
    if backup is not None:
        console.print(f"Backed up preferences to {backup}")
    console.success("User preferences cleared.")
    if not result.had_managed:
        console.print("No managed preferences were present.")
    elif result.managed_removed:
        console.success("Managed preferences removed.")
    else:
        console.warn(
            "Managed preferences were NOT removed (administrator access was not granted); "
            "enforced settings still apply."
        )


@click.command(name="backups", help="List preference backups, oldest first.")
@click.pass_context
def backups_command(ctx: click.Context) -> None:
    """Print backup file names."""
    session = get_session(ctx)
    console = get_console(ctx)
    with domain_errors():
        paths = session.list_backups()
    if not paths:
        console.print(f"No backups in {session.backups.backup_dir}")
        return
    for path in paths:
        console.print(path.name)


@click.command(name="restore", help="Restore the user preferences from backup NAME.")
@click.argument("name")
@click.pass_context
def restore_command(ctx: click.Context, name: str) -> None:
    """Copy a backup over the user preferences."""
    session = get_session(ctx)
    console = get_console(ctx)
    with domain_errors():
        ensure_installed(ctx, session, refuse_running=True)
        path = session.restore_backup(name)
    console.success(f"Restored user preferences from {path.name}")


@click.command(name="delete-backup", help="Delete backup NAME.")
@click.argument("name")
@click.pass_context
def delete_backup_command(ctx: click.Context, name: str) -> None:
    """Remove one backup file."""
    session = get_session(ctx)
    console = get_console(ctx)
    with domain_errors():
        path = session.delete_backup(name)
    console.success(f"Deleted {path.name}")
