# topmark:header:start
#
#   project      : Cowardly
#   file         : runner.py
#   file_relpath : src/cowardly/store/runner.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Bounded subprocess execution.

Every external command Cowardly runs (``defaults``, ``pgrep``, ``osascript``)
goes through a `CommandRunner` with an explicit timeout. A timeout or a
missing executable is reported as a failed `CommandResult`, not raised, so
callers decide what failure means for them.
"""

from __future__ import annotations

import subprocess
from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol

from cowardly.config.logging import CowardlyLogger, get_logger

if TYPE_CHECKING:
    from collections.abc import Sequence

logger: CowardlyLogger = get_logger(__name__)


@dataclass(frozen=True)
class CommandResult:
    """Outcome of one external command."""

    returncode: int
    stdout: str = ""
    stderr: str = ""
    timed_out: bool = False

    @property
    def ok(self) -> bool:
        """True if the command exited with status 0."""
        return self.returncode == 0 and not self.timed_out

    @property
    def output(self) -> str:
        """Combined, stripped stdout and stderr (for error messages)."""
        return "\n".join(part for part in (self.stdout.strip(), self.stderr.strip()) if part)


class CommandRunner(Protocol):
    """Runs an argument vector with a timeout."""

    def run(self, argv: Sequence[str], *, timeout: float) -> CommandResult:
        """Run ``argv`` and return its result."""
        ...


class SubprocessRunner:
    """`CommandRunner` backed by `subprocess.run`."""

    def run(self, argv: Sequence[str], *, timeout: float) -> CommandResult:
        """Run ``argv``, capturing text output, bounded by ``timeout`` seconds."""
        logger.trace("run %s (timeout=%ss)", list(argv), timeout)
        try:
            proc = subprocess.run(
                list(argv),
                capture_output=True,
                text=True,
                timeout=timeout,
                check=False,
            )
        except subprocess.TimeoutExpired:
            logger.warning("%s timed out after %ss", argv[0], timeout)
            return CommandResult(
                returncode=-1, stderr=f"timed out after {timeout}s", timed_out=True
            )
        except FileNotFoundError as exc:
            logger.debug("Executable not found: %s", exc)
            return CommandResult(returncode=127, stderr=str(exc))
        return CommandResult(returncode=proc.returncode, stdout=proc.stdout, stderr=proc.stderr)
