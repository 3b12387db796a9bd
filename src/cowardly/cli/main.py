# topmark:header:start
#
#   project      : Cowardly
#   file         : main.py
#   file_relpath : src/cowardly/cli/main.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Cowardly command-line entry point.

Group-level options are initialized once and placed into ``ctx.obj``:
the console, the verbosity level, and the Brave channel (``--beta``). The
`cowardly.api.Session` itself is created lazily by the first command that
needs it, so ``version`` and ``presets`` work on any platform.
"""

from __future__ import annotations

import click

from cowardly.cli.commands.apply import (
    apply_command,
    apply_file_command,
    custom_command,
    privacy_guides_command,
    reapply_command,
)
from cowardly.cli.commands.backups import (
    backups_command,
    delete_backup_command,
    reset_command,
    restore_command,
)
from cowardly.cli.commands.inspect import (
    current_command,
    diff_command,
    drift_command,
    dry_run_command,
    export_command,
    presets_command,
)
from cowardly.cli.commands.login_hook import install_login_hook_command
from cowardly.cli.commands.version import version_command
from cowardly.cli.console import ClickConsole
from cowardly.cli.options import (
    ColorMode,
    common_color_options,
    common_verbose_options,
    resolve_color_mode,
    resolve_verbosity,
    target_options,
)
from cowardly.config.logging import get_logger, resolve_env_log_level, setup_logging

logger = get_logger(__name__)


def init_common_state(
    ctx: click.Context,
    *,
    verbose: int,
    quiet: int,
    color_mode: ColorMode | None,
    no_color: bool,
    beta: bool,
) -> None:
    """Initialize shared state (verbosity, color, channel) on the Click context."""
    ctx.obj = ctx.obj or {}

    ctx.obj["verbosity_level"] = resolve_verbosity(verbose, quiet)

    # Internal logging is configured from the environment only.
    level_env = resolve_env_log_level()
    ctx.obj["log_level"] = level_env
    setup_logging(level=level_env)

    effective_color_mode = ColorMode.NEVER if no_color else (color_mode or ColorMode.AUTO)
    enable_color = resolve_color_mode(cli_mode=effective_color_mode)
    ctx.obj["color_enabled"] = enable_color
    ctx.color = enable_color

    ctx.obj["beta"] = beta
    ctx.obj["console"] = ClickConsole(enable_color=enable_color)


@click.group(
    cls=click.Group,
    context_settings={"help_option_names": ["-h", "--help"]},
    invoke_without_command=True,
    help="Cowardly: debloat and harden Brave Browser on macOS.",
)
@common_verbose_options
@common_color_options
@target_options
@click.pass_context
def cli(
    ctx: click.Context,
    verbose: int,
    quiet: int,
    color_mode: ColorMode | None,
    no_color: bool,
    beta: bool,
) -> None:
    """Entry point for the Cowardly CLI."""
    init_common_state(
        ctx,
        verbose=verbose,
        quiet=quiet,
        color_mode=ColorMode(color_mode) if color_mode else None,
        no_color=no_color,
        beta=beta,
    )
    if ctx.invoked_subcommand is None:
        console: ClickConsole = ctx.obj["console"]
        console.print("Hint: use 'cowardly apply quick' to apply the Quick Debloat preset.")
        console.print()
        console.print(ctx.get_help())


cli.add_command(version_command)

cli.add_command(presets_command)

cli.add_command(apply_command)
cli.add_command(privacy_guides_command)
cli.add_command(apply_file_command)
cli.add_command(custom_command)
cli.add_command(reapply_command)

cli.add_command(dry_run_command)
cli.add_command(diff_command)
cli.add_command(drift_command)
cli.add_command(current_command)
cli.add_command(export_command)

cli.add_command(reset_command)
cli.add_command(backups_command)
cli.add_command(restore_command)
cli.add_command(delete_backup_command)

cli.add_command(install_login_hook_command)

if __name__ == "__main__":
    cli()
