# topmark:header:start
#
#   project      : Cowardly
#   file         : version.py
#   file_relpath : src/cowardly/cli/commands/version.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Cowardly `version` command.

Prints the current Cowardly version as installed in the active Python environment.
"""

from __future__ import annotations

import logging

import click

from cowardly.cli.cmd_common import get_console, get_effective_verbosity
from cowardly.constants import COWARDLY_VERSION


@click.command(
    name="version",
    help="Show the current version of Cowardly.",
)
@click.pass_context
def version_command(ctx: click.Context) -> None:
    """Show the current version of Cowardly."""
    console = get_console(ctx)
    vlevel = get_effective_verbosity(ctx)
    if vlevel <= logging.INFO:  # -v
        console.print(console.styled("Cowardly version:", bold=True, underline=True))
        console.print(f"    {console.styled(COWARDLY_VERSION, bold=True)}")
    else:
        console.print(console.styled(COWARDLY_VERSION, bold=True))
