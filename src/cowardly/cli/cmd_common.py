# topmark:header:start
#
#   project      : Cowardly
#   file         : cmd_common.py
#   file_relpath : src/cowardly/cli/cmd_common.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Common command utilities for Click-based commands.

This module holds small helpers used by multiple commands: fetching the
console and the `Session` from the Click context, translating domain errors
into CLI errors, Brave installation guards and outcome reporting.
"""

from __future__ import annotations

import contextlib
import logging
from typing import TYPE_CHECKING

import click

from cowardly.api.session import Session
from cowardly.cli.errors import CowardlyUnavailableError, from_domain_error
from cowardly.config.logging import CowardlyLogger, get_logger
from cowardly.core.errors import CowardlyError
from cowardly.state.desired import describe_provenance
from cowardly.store.target import Variant

if TYPE_CHECKING:
    from collections.abc import Iterator

    from cowardly.api.types import ApplyOutcome
    from cowardly.cli.console import ClickConsole

logger: CowardlyLogger = get_logger(__name__)


def get_console(ctx: click.Context) -> ClickConsole:
    """Return the console stored on the context by the group."""
    console: ClickConsole = ctx.obj["console"]
    return console


def get_effective_verbosity(ctx: click.Context) -> int:
    """Return the program-output verbosity level (logging-style, lower is louder)."""
    return int(ctx.obj.get("verbosity_level", 0))


@contextlib.contextmanager
def domain_errors() -> Iterator[None]:
    """Translate domain and filesystem errors into CLI errors with exit codes."""
    try:
        yield
    except (CowardlyError, OSError) as exc:
        logger.debug("Command failed", exc_info=True)
        raise from_domain_error(exc) from exc


def get_session(ctx: click.Context, *, touches_store: bool = True) -> Session:
    """Return the session for this invocation, creating it on first use.

    A session placed in ``ctx.obj["session"]`` beforehand (tests, embedding)
    is used as is. Commands that only resolve bundles pass
    ``touches_store=False`` so they also run off macOS.
    """
    session: Session | None = ctx.obj.get("session")
    if session is None:
        variant = Variant.BETA if ctx.obj.get("beta") else Variant.STABLE
        with domain_errors():
            session = Session.for_system(
                variant, ctx.obj.get("paths"), check_platform=touches_store
            )
        ctx.obj["session"] = session
    return session


def ensure_installed(ctx: click.Context, session: Session, *, refuse_running: bool = False) -> None:
    """Fail if Brave is not installed; warn (or fail) if it is running.

    Raises:
        CowardlyUnavailableError: If Brave is missing, or running and
            ``refuse_running`` is set.
    """
    console = get_console(ctx)
    name = session.target.display_name
    if not session.store.is_target_installed():
        raise CowardlyUnavailableError(f"{name} is not installed at {session.target.app_path}")
    if session.store.is_target_running():
        if refuse_running:
            raise CowardlyUnavailableError(f"{name} is running; quit it first")
        console.warn(f"{name} is running; restart it for the changes to take effect.")


def report_apply(ctx: click.Context, outcome: ApplyOutcome) -> None:
    """Print the result of an apply operation.

    With ``-q`` only the warnings are printed.
    """
    console = get_console(ctx)
    vlevel = get_effective_verbosity(ctx)
    quiet = vlevel >= logging.ERROR
    label = describe_provenance(outcome.provenance)
    if outcome.backup_path is not None and not quiet:
        console.print(f"Backed up preferences to {outcome.backup_path}")
    if outcome.enforced:
        if not quiet:
            console.success(f"Applied {label}: {len(outcome.bundle)} setting(s), enforced.")
    else:
        if not quiet:
            console.success(
                f"Applied {label}: {len(outcome.bundle)} setting(s) to user preferences."
            )
        console.warn("Administrator access was not granted; Brave may let these be changed.")
    if vlevel <= logging.INFO:
        for setting in outcome.bundle:
            console.print(f"  {setting.key} = {setting.display()}")
    if outcome.state_note:
        console.warn(f"Note: {outcome.state_note}")
