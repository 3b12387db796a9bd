# topmark:header:start
#
#   project      : Cowardly
#   file         : errors.py
#   file_relpath : src/cowardly/cli/errors.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Exceptions for the Cowardly CLI.

Usage:
    Raise these exceptions in CLI commands to signal errors with standardized
    messages and exit codes. Domain errors from `cowardly.core.errors` are
    translated by `from_domain_error`.

Styling:
    Exceptions prefer the project console if available (see `show()`); if no
    console is present in the Click context, they fall back to Click's default
    styling.
"""

from __future__ import annotations

from typing import IO, Any

import click

from cowardly.core.errors import (
    AggregateLoadError,
    CowardlyError,
    NotFoundError,
    StoreError,
    UnsupportedPlatformError,
    ValidationError,
)
from cowardly.core.exit_codes import ExitCode


class CowardlyCliError(click.ClickException):
    """Base class for all Cowardly CLI errors."""

    exit_code = ExitCode.FAILURE

    def format_message(self) -> str:  # pragma: no cover - trivial
        """Return the plain error message text (colorized in `show()`)."""
        return str(getattr(self, "message", ""))

    def show(self, file: IO[Any] | None = None) -> None:  # pragma: no cover - Click prints errors
        """Display the error using the project console if available."""
        ctx = click.get_current_context(silent=True)
        if ctx is not None and isinstance(getattr(ctx, "obj", None), dict):
            console = ctx.obj.get("console")
            if console is not None:
                console.error(f"Error: {self.format_message()}")
                return
        super().show(file)


class CowardlyUsageError(CowardlyCliError):
    """Error for command-line invocation errors (invalid flags/args)."""

    exit_code = ExitCode.USAGE_ERROR


class CowardlyDataError(CowardlyCliError):
    """Error for invalid keys, values, types or malformed documents."""

    exit_code = ExitCode.DATA_ERROR


class CowardlyNotFoundError(CowardlyCliError):
    """Error when a preset, backup, file or saved state does not exist."""

    exit_code = ExitCode.NOT_FOUND


class CowardlyUnavailableError(CowardlyCliError):
    """Error when Brave is missing or busy, or the platform is unsupported."""

    exit_code = ExitCode.UNAVAILABLE


class CowardlyIOError(CowardlyCliError):
    """Error for preference store and filesystem failures."""

    exit_code = ExitCode.IO_ERROR


class CowardlyPermissionDeniedError(CowardlyCliError):
    """Error for insufficient permissions (read/write)."""

    exit_code = ExitCode.PERMISSION_DENIED


class CowardlyConfigError(CowardlyCliError):
    """Error when the built-in preset definitions fail to load."""

    exit_code = ExitCode.CONFIG_ERROR


def from_domain_error(exc: CowardlyError | OSError) -> CowardlyCliError:
    """Map a domain or filesystem error onto the CLI error with the right exit code."""
    message = str(exc)
    if isinstance(exc, AggregateLoadError):
        return CowardlyConfigError(message)
    if isinstance(exc, ValidationError):
        return CowardlyDataError(message)
    if isinstance(exc, NotFoundError):
        return CowardlyNotFoundError(message)
    if isinstance(exc, UnsupportedPlatformError):
        return CowardlyUnavailableError(message)
    if isinstance(exc, StoreError):
        return CowardlyIOError(message)
    if isinstance(exc, PermissionError):
        return CowardlyPermissionDeniedError(message)
    if isinstance(exc, FileNotFoundError):
        return CowardlyNotFoundError(message)
    if isinstance(exc, OSError):
        return CowardlyIOError(message)
    return CowardlyCliError(message)
