# topmark:header:start
#
#   project      : Cowardly
#   file         : elevation.py
#   file_relpath : src/cowardly/store/elevation.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Privileged file operations for the managed policy layer.

Writing or removing ``/Library/Managed Preferences/<domain>.plist`` needs
administrator rights. The production `OsascriptElevator` asks for them with
the standard macOS authentication dialog (password or Touch ID) through
AppleScript's ``do shell script ... with administrator privileges``.

Only file paths are ever interpolated into the shell command, each one
shell-quoted; setting keys and values travel inside the property list file
itself. Declining the dialog and any other failure raise the same
`ElevationError`.
"""

from __future__ import annotations

import shlex
from typing import TYPE_CHECKING, Protocol

from cowardly.config.logging import CowardlyLogger, get_logger
from cowardly.constants import ELEVATION_TIMEOUT
from cowardly.core.errors import ElevationError
from cowardly.store.runner import SubprocessRunner

if TYPE_CHECKING:
    from pathlib import Path

    from cowardly.store.runner import CommandRunner

logger: CowardlyLogger = get_logger(__name__)


class Elevator(Protocol):
    """Performs file operations that require administrator privileges."""

    def install_file(self, src: Path, dst: Path) -> None:
        """Copy ``src`` to ``dst`` as a root-owned, world-readable file.

        Raises:
            ElevationError: If the operator declined or the operation failed.
        """
        ...

    def remove_file(self, dst: Path) -> None:
        """Remove ``dst``.

        Raises:
            ElevationError: If the operator declined or the operation failed.
        """
        ...


def escape_for_applescript(text: str) -> str:
    """Escape ``text`` for use inside a double-quoted AppleScript string."""
    return text.replace("\\", "\\\\").replace('"', '\\"')


def build_admin_script(shell_command: str) -> str:
    """Wrap a shell command in an AppleScript admin-privileges invocation."""
    return (
        f'do shell script "{escape_for_applescript(shell_command)}" with administrator privileges'
    )


class OsascriptElevator:
    """`Elevator` that prompts through ``osascript``.

    Args:
        runner (CommandRunner | None): Command runner; defaults to `SubprocessRunner`.
        timeout (float): Seconds to wait for the operator to answer the dialog.
    """

    def __init__(self, runner: CommandRunner | None = None, timeout: float = ELEVATION_TIMEOUT):
        self._runner: CommandRunner = runner or SubprocessRunner()
        self._timeout = timeout

    def install_file(self, src: Path, dst: Path) -> None:
        """Copy ``src`` over ``dst`` with ``root:wheel`` ownership and mode 644."""
        target = shlex.quote(str(dst))
        command = " && ".join(
            [
                f"mkdir -p {shlex.quote(str(dst.parent))}",
                f"cp {shlex.quote(str(src))} {target}",
                f"chown root:wheel {target}",
                f"chmod 644 {target}",
            ]
        )
        self._run_privileged(command, action=f"install {dst}")

    def remove_file(self, dst: Path) -> None:
        """Remove ``dst`` (no error if it is already gone)."""
        self._run_privileged(f"rm -f {shlex.quote(str(dst))}", action=f"remove {dst}")

    def _run_privileged(self, shell_command: str, *, action: str) -> None:
        logger.debug("Requesting administrator privileges to %s", action)
        result = self._runner.run(
            ["osascript", "-e", build_admin_script(shell_command)],
            timeout=self._timeout,
        )
        if not result.ok:
            logger.info("Privileged %s failed: %s", action, result.output or result.returncode)
            raise ElevationError(f"{action}: {result.output or f'exit {result.returncode}'}")
