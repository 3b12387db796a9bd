# topmark:header:start
#
#   project      : Cowardly
#   file         : __init__.py
#   file_relpath : src/cowardly/state/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Desired state and the backup/restore/reset lifecycle."""

from __future__ import annotations

from cowardly.state.backups import BackupManager, ResetResult
from cowardly.state.desired import (
    CustomApplied,
    DesiredState,
    DesiredStateStore,
    FileApplied,
    PresetApplied,
    PrivacyGuidesApplied,
    Provenance,
    describe_provenance,
)

__all__: list[str] = [
    "BackupManager",
    "CustomApplied",
    "DesiredState",
    "DesiredStateStore",
    "FileApplied",
    "PresetApplied",
    "PrivacyGuidesApplied",
    "Provenance",
    "ResetResult",
    "describe_provenance",
]
