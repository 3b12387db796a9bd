# topmark:header:start
#
#   project      : Cowardly
#   file         : backups.py
#   file_relpath : src/cowardly/state/backups.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Backup/Restore/Reset Manager.

Backups are raw copies of Brave's user-layer preference document
(``~/Library/Preferences/<domain>.plist``), named
``<YYYY-MM-DDTHH-MM-SS>-user.plist`` so that name order is time order.
Backups are never deleted automatically.
"""

from __future__ import annotations

import shutil
from dataclasses import dataclass
from datetime import datetime, timedelta
from pathlib import Path
from typing import TYPE_CHECKING

from cowardly.config.logging import CowardlyLogger, get_logger
from cowardly.constants import BACKUP_SUFFIX, BACKUP_TIMESTAMP_FORMAT
from cowardly.core.errors import BackupNotFoundError, ElevationError, SourceNotFoundError

if TYPE_CHECKING:
    from collections.abc import Callable

    from cowardly.config.paths import UserPaths
    from cowardly.store.preferences import PreferenceStore

logger: CowardlyLogger = get_logger(__name__)


@dataclass(frozen=True)
class ResetResult:
    """Outcome of `BackupManager.reset`.

    Attributes:
        had_managed (bool): A managed document existed, so removal was attempted
            (and the operator was prompted).
        managed_removed (bool): The managed document was removed.
    """

    had_managed: bool
    managed_removed: bool


class BackupManager:
    """Snapshots, restores and resets one target's user layer.

    Args:
        paths (UserPaths): Per-user locations.
        domain (str): The target's defaults domain.
        clock (Callable[[], datetime]): Source of the backup timestamp.
    """

    def __init__(
        self,
        paths: UserPaths,
        domain: str,
        *,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        self.backup_dir = paths.backup_dir
        self.source = paths.user_plist(domain)
        self._clock = clock

    def _next_path(self) -> Path:
        stamp = self._clock().replace(microsecond=0)
        candidate = self.backup_dir / f"{stamp.strftime(BACKUP_TIMESTAMP_FORMAT)}{BACKUP_SUFFIX}"
        while candidate.exists():
            stamp += timedelta(seconds=1)
            candidate = (
                self.backup_dir / f"{stamp.strftime(BACKUP_TIMESTAMP_FORMAT)}{BACKUP_SUFFIX}"
            )
        return candidate

    def backup(self) -> Path:
        """Copy the user-layer document into the backup directory (mode 0600).

        Returns:
            Path: The new backup file.

        Raises:
            SourceNotFoundError: If there is no user-layer document yet.
            OSError: If the copy failed.
        """
        if not self.source.is_file():
            raise SourceNotFoundError(f"no preferences file at {self.source}")
        self.backup_dir.mkdir(parents=True, exist_ok=True)
        dest = self._next_path()
        shutil.copyfile(self.source, dest)
        dest.chmod(0o600)
        logger.info("Backed up %s to %s", self.source, dest)
        return dest

    def list(self) -> list[Path]:
        """Return backup files sorted by name (oldest first)."""
        if not self.backup_dir.is_dir():
            return []
        return sorted(
            (
                p
                for p in self.backup_dir.iterdir()
                if p.is_file() and p.name.endswith(BACKUP_SUFFIX)
            ),
            key=lambda p: p.name,
        )

    def resolve(self, name: str) -> Path:
        """Return the backup matching a full path or a file name.

        A bare name is looked up in the backup directory; a name without the
        ``-user.plist`` suffix also matches.

        Raises:
            BackupNotFoundError: If no such backup exists.
        """
        direct = Path(name).expanduser()
        if direct.is_absolute() or direct.parent != Path("."):
            if direct.is_file():
                return direct
            raise BackupNotFoundError(f"backup not found: {name}")
        for candidate in (name, f"{name}{BACKUP_SUFFIX}"):
            path = self.backup_dir / candidate
            if path.is_file():
                return path
        raise BackupNotFoundError(f"backup not found: {name}")

    def restore(self, path: Path) -> None:
        """Copy a backup over the live user-layer document.

        The managed layer is not touched. Brave should not be running.

        Raises:
            BackupNotFoundError: If ``path`` does not exist.
            OSError: If the copy failed.
        """
        if not path.is_file():
            raise BackupNotFoundError(f"backup not found: {path}")
        self.source.parent.mkdir(parents=True, exist_ok=True)
        shutil.copyfile(path, self.source)
        logger.info("Restored %s from %s", self.source, path)

    def delete(self, path: Path) -> None:
        """Remove a backup file.

        Raises:
            BackupNotFoundError: If ``path`` does not exist.
        """
        try:
            path.unlink()
        except FileNotFoundError as exc:
            raise BackupNotFoundError(f"backup not found: {path}") from exc
        logger.info("Deleted backup %s", path)

    def reset(self, store: PreferenceStore) -> ResetResult:
        """Clear the user layer, then try to remove the managed document.

        Removal is only attempted (and the operator only prompted) when a
        managed document exists.

        Raises:
            StoreWriteError: If clearing the user layer failed.
        """
        store.reset_user()
        if not store.managed_layer_exists():
            return ResetResult(had_managed=False, managed_removed=False)
        try:
            removed = store.reset_managed_elevated()
        except ElevationError as exc:
            logger.info("Managed preferences left in place: %s", exc)
            return ResetResult(had_managed=True, managed_removed=False)
        return ResetResult(had_managed=True, managed_removed=removed)
