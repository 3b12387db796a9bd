# topmark:header:start
#
#   project      : Cowardly
#   file         : types.py
#   file_relpath : src/cowardly/api/types.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Result types returned by `cowardly.api.Session`."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pathlib import Path

    from cowardly.compose.engine import DiffEntry
    from cowardly.model.bundle import Bundle
    from cowardly.state.desired import DesiredState, Provenance


@dataclass(frozen=True)
class ApplyOutcome:
    """Result of one apply operation.

    Attributes:
        provenance (Provenance): What was applied.
        bundle (Bundle): The resolved settings that were written.
        enforced (bool): True if written to the managed layer, False if the
            user layer was used instead.
        backup_path (Path | None): The backup taken first, if any.
        state_note (str | None): Set when the desired state could not be saved;
            the settings themselves were applied.
    """

    provenance: Provenance
    bundle: Bundle
    enforced: bool
    backup_path: Path | None = None
    state_note: str | None = None


@dataclass(frozen=True)
class DriftReport:
    """Effective values that no longer match the saved desired state.

    Attributes:
        state (DesiredState): The saved desired state.
        entries (list[DiffEntry]): Settings whose effective value differs.
    """

    state: DesiredState
    entries: list[DiffEntry] = field(default_factory=list)

    @property
    def drifted(self) -> bool:
        """True if any setting differs."""
        return bool(self.entries)


@dataclass(frozen=True)
class CurrentValue:
    """One row of the current-settings view.

    Attributes:
        key (str): Policy name.
        value (str | None): Effective value, None if unset.
        enforced (bool): True if the value comes from the managed layer.
    """

    key: str
    value: str | None
    enforced: bool


@dataclass(frozen=True)
class TargetStatus:
    """Installation and runtime facts about the Brave target.

    Attributes:
        installed (bool): The application bundle exists.
        running (bool): A Brave process is running.
        version (str): Brave's short version string, "" if unknown.
        managed (bool): A managed policy document exists.
    """

    installed: bool
    running: bool
    version: str
    managed: bool
