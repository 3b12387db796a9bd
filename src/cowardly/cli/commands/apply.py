# topmark:header:start
#
#   project      : Cowardly
#   file         : apply.py
#   file_relpath : src/cowardly/cli/commands/apply.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Cowardly apply commands.

Every command here snapshots the user preferences first, applies a bundle
(enforced when the administrator prompt is accepted, else to the user
preferences) and saves it as the desired state for ``reapply`` and
``drift``.
"""

from __future__ import annotations

from pathlib import Path

import click

from cowardly.cli.cmd_common import (
    domain_errors,
    ensure_installed,
    get_console,
    get_session,
    report_apply,
)
from cowardly.cli.errors import CowardlyUsageError
from cowardly.constants import PRIVACY_GUIDES_BASE_PRESET_ID, PRIVACY_GUIDES_URL
from cowardly.presets.custom import custom_settings_by_category


@click.command(name="apply", help="Apply a preset (default: quick).")
@click.argument("preset_id", required=False, default="quick", metavar="[ID]")
@click.pass_context
def apply_command(ctx: click.Context, preset_id: str) -> None:
    """Apply the preset ``preset_id``."""
    session = get_session(ctx)
    with domain_errors():
        ensure_installed(ctx, session)
        outcome = session.apply_preset(preset_id)
    report_apply(ctx, outcome)


@click.command(
    name="privacy-guides",
    help=(
        "Apply the Privacy Guides recommendations on top of BASE "
        f"(a preset id or 'custom'; default: the saved base, else {PRIVACY_GUIDES_BASE_PRESET_ID})."
    ),
)
@click.argument("base", required=False, default=None)
@click.pass_context
def privacy_guides_command(ctx: click.Context, base: str | None) -> None:
    """Apply the privacy supplement on top of a base."""
    session = get_session(ctx)
    console = get_console(ctx)
    with domain_errors():
        ensure_installed(ctx, session)
        outcome = session.apply_privacy_guides(base)
    report_apply(ctx, outcome)
    console.print(f"Recommendations: {PRIVACY_GUIDES_URL}")


@click.command(name="apply-file", help="Apply the settings in a TOML bundle file.")
@click.argument("path", type=click.Path(path_type=Path, dir_okay=False))
@click.pass_context
def apply_file_command(ctx: click.Context, path: Path) -> None:
    """Apply a bundle file."""
    session = get_session(ctx)
    with domain_errors():
        ensure_installed(ctx, session)
        outcome = session.apply_file(path)
    report_apply(ctx, outcome)


def _print_custom_menu(ctx: click.Context) -> None:
    console = get_console(ctx)
    for category, entries in custom_settings_by_category().items():
        console.print(console.styled(category, bold=True))
        for entry in entries:
            console.print(f"  {entry.key:<42} {entry.verb} {entry.label}")


@click.command(name="custom", help="Apply a hand-picked set of settings by key.")
@click.argument("keys", nargs=-1)
@click.option("--list", "list_only", is_flag=True, help="List the settings that can be picked.")
@click.pass_context
def custom_command(ctx: click.Context, keys: tuple[str, ...], list_only: bool) -> None:
    """Apply the chosen custom settings."""
    if list_only:
        _print_custom_menu(ctx)
        return
    if not keys:
        raise CowardlyUsageError("Pick at least one KEY (see 'cowardly custom --list').")
    session = get_session(ctx)
    with domain_errors():
        ensure_installed(ctx, session)
        outcome = session.apply_custom(keys)
    report_apply(ctx, outcome)


@click.command(name="reapply", help="Apply the saved desired state again.")
@click.pass_context
def reapply_command(ctx: click.Context) -> None:
    """Re-apply the saved desired state (used by the login hook)."""
    session = get_session(ctx)
    with domain_errors():
        ensure_installed(ctx, session)
        outcome = session.reapply()
    report_apply(ctx, outcome)
