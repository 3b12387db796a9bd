# topmark:header:start
#
#   project      : Cowardly
#   file         : login_hook.py
#   file_relpath : src/cowardly/cli/commands/login_hook.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Cowardly `install-login-hook` command."""

from __future__ import annotations

import click

from cowardly.api.login_hook import install_login_hook
from cowardly.cli.cmd_common import domain_errors, get_console
from cowardly.config.paths import UserPaths


@click.command(
    name="install-login-hook",
    help="Install a LaunchAgent that runs 'cowardly reapply' at every login.",
)
@click.pass_context
def install_login_hook_command(ctx: click.Context) -> None:
    """Write ``~/Library/LaunchAgents/com.cowardly.reapply.plist``."""
    console = get_console(ctx)
    paths: UserPaths = ctx.obj.get("paths") or UserPaths.for_current_user()
    beta = bool(ctx.obj.get("beta"))
    with domain_errors():
        dest = install_login_hook(paths, beta=beta)
    reapply = "cowardly --beta reapply" if beta else "cowardly reapply"
    console.success(f"Installed Launch Agent at {dest}")
    console.print(
        f"'{reapply}' will run at login; approve the administrator prompt to keep "
        "settings enforced."
    )
    console.print(f"To remove: rm '{dest}'")
