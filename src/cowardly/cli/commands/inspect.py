# topmark:header:start
#
#   project      : Cowardly
#   file         : inspect.py
#   file_relpath : src/cowardly/cli/commands/inspect.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Cowardly read-only commands: dry runs, diffs, drift, the settings view and export.

``diff`` and ``drift`` exit with ``WOULD_CHANGE`` (2) when at least one
effective value differs, so scripts can test for pending changes.
"""

from __future__ import annotations

from pathlib import Path

import click

from cowardly.cli.cmd_common import domain_errors, get_console, get_session
from cowardly.cli.errors import CowardlyNotFoundError
from cowardly.compose.engine import describe_dry_run, render_diff
from cowardly.constants import PRIVACY_GUIDES_ID, PRIVACY_GUIDES_URL, VALUE_NOT_SET
from cowardly.core.exit_codes import ExitCode
from cowardly.presets.loader import load_all, load_privacy_supplement
from cowardly.state.desired import describe_provenance

_TARGET_HELP = "TARGET is a preset id, 'custom', 'privacy-guides' or 'privacy-guides:BASE'."


@click.command(name="dry-run", help=f"Show what applying TARGET would write. {_TARGET_HELP}")
@click.argument("target", required=False, default="quick")
@click.pass_context
def dry_run_command(ctx: click.Context, target: str) -> None:
    """Describe a bundle without writing anything."""
    session = get_session(ctx, touches_store=False)
    console = get_console(ctx)
    with domain_errors():
        provenance, bundle = session.resolve_bundle(target)
    for line in describe_dry_run(bundle, title=describe_provenance(provenance)):
        console.print(line)


@click.command(name="diff", help=f"Show settings TARGET would change. {_TARGET_HELP}")
@click.argument("target")
@click.pass_context
def diff_command(ctx: click.Context, target: str) -> None:
    """Compare a bundle with the effective values."""
    session = get_session(ctx)
    console = get_console(ctx)
    with domain_errors():
        entries = session.diff(target)
    if not entries:
        console.success(f"No changes: {target} is already in effect.")
        return
    console.print(f"{len(entries)} setting(s) would change:")
    for line in render_diff(entries, color=console.enable_color):
        console.print(line)
    ctx.exit(ExitCode.WOULD_CHANGE)


@click.command(name="drift", help="Show settings that no longer match the saved desired state.")
@click.pass_context
def drift_command(ctx: click.Context) -> None:
    """Compare the saved desired state with the effective values."""
    session = get_session(ctx)
    console = get_console(ctx)
    with domain_errors():
        report = session.drift()
    if report is None:
        raise CowardlyNotFoundError(
            f"No desired state saved at {session.desired.path}; apply something first."
        )
    label = describe_provenance(report.state.provenance)
    if not report.drifted:
        console.success(f"No drift: {label} is in effect.")
        return
    console.warn(f"{len(report.entries)} setting(s) drifted from {label}:")
    for line in render_diff(report.entries, color=console.enable_color):
        console.print(line)
    console.print("Run 'cowardly reapply' to restore them.")
    ctx.exit(ExitCode.WOULD_CHANGE)


@click.command(name="current", help="Show the effective value of well-known settings.")
@click.pass_context
def current_command(ctx: click.Context) -> None:
    """Print the settings view."""
    session = get_session(ctx)
    console = get_console(ctx)
    with domain_errors():
        status = session.status()
        rows = session.current()
    version = status.version or "unknown version"
    console.print(console.styled(f"{session.target.display_name} ({version})", bold=True))
    if status.managed:
        console.print(f"Managed preferences: {session.target.managed_plist}")
    for row in rows:
        value = row.value if row.value is not None else VALUE_NOT_SET
        suffix = " (enforced)" if row.enforced else ""
        console.print(f"  {row.key:<42} {value}{suffix}")


@click.command(name="export", help="Write the current effective settings to a TOML bundle file.")
@click.argument("path", type=click.Path(path_type=Path, dir_okay=False))
@click.pass_context
def export_command(ctx: click.Context, path: Path) -> None:
    """Export the current effective values."""
    session = get_session(ctx)
    console = get_console(ctx)
    with domain_errors():
        bundle = session.export(path)
    console.success(f"Exported {len(bundle)} setting(s) to {path}")


@click.command(name="presets", help="List the built-in presets.")
@click.pass_context
def presets_command(ctx: click.Context) -> None:
    """Print the preset catalog and the privacy supplement."""
    console = get_console(ctx)
    with domain_errors():
        catalog = load_all()
        supplement = load_privacy_supplement()
    for preset in catalog:
        label = console.styled(f"{preset.id:<16}", bold=True)
        console.print(f"{label} {preset.name} ({len(preset.settings)})")
        if preset.description:
            console.print(f"    {preset.description}")
    console.print(
        f"{console.styled(f'{PRIVACY_GUIDES_ID:<16}', bold=True)} Privacy Guides "
        f"(+{len(supplement.settings)} on top of a base)"
    )
    console.print(f"    {supplement.description or PRIVACY_GUIDES_URL}")
