# topmark:header:start
#
#   project      : Cowardly
#   file         : test_backups.py
#   file_relpath : tests/state/test_backups.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Tests for `cowardly.state.backups.BackupManager`."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from cowardly.core.errors import BackupNotFoundError, SourceNotFoundError
from cowardly.model.setting import Setting, SettingKind
from cowardly.state.backups import BackupManager, ResetResult
from cowardly.store.preferences import PreferenceStore
from tests.fakes import PlistDefaults, ScriptedElevator, write_plist

if TYPE_CHECKING:
    from cowardly.store.target import Target

TOR_ON = Setting("TorDisabled", True, SettingKind.BOOL)
TOR_OFF = Setting("TorDisabled", False, SettingKind.BOOL)


def test_backup_without_preferences(backups: BackupManager) -> None:
    with pytest.raises(SourceNotFoundError):
        backups.backup()
    assert backups.list() == []


def test_backup_copies_user_document(backups: BackupManager, store: PreferenceStore) -> None:
    store.write_user(TOR_ON)

    path = backups.backup()

    assert path.name == "2025-01-02T03-04-05-user.plist"
    assert path.read_bytes() == backups.source.read_bytes()
    assert path.stat().st_mode & 0o777 == 0o600


def test_same_second_backups_do_not_collide(
    backups: BackupManager, store: PreferenceStore
) -> None:
    store.write_user(TOR_ON)
    first = backups.backup()
    second = backups.backup()

    assert second.name == "2025-01-02T03-04-06-user.plist"
    assert backups.list() == [first, second]


def test_restore_round_trip(backups: BackupManager, store: PreferenceStore) -> None:
    store.write_user(TOR_ON)
    path = backups.backup()
    store.write_user(TOR_OFF)
    assert store.read_user("TorDisabled") == "0"

    backups.restore(path)

    assert store.read_user("TorDisabled") == "1"


def test_resolve_by_name_stem_or_path(backups: BackupManager, store: PreferenceStore) -> None:
    store.write_user(TOR_ON)
    path = backups.backup()

    assert backups.resolve(path.name) == path
    assert backups.resolve("2025-01-02T03-04-05") == path
    assert backups.resolve(str(path)) == path
    with pytest.raises(BackupNotFoundError):
        backups.resolve("1999-01-01T00-00-00")
    with pytest.raises(BackupNotFoundError):
        backups.resolve(str(path.parent / "elsewhere.plist"))


def test_delete(backups: BackupManager, store: PreferenceStore) -> None:
    store.write_user(TOR_ON)
    path = backups.backup()

    backups.delete(path)

    assert backups.list() == []
    with pytest.raises(BackupNotFoundError):
        backups.delete(path)
    with pytest.raises(BackupNotFoundError):
        backups.restore(path)


def test_reset_without_managed_never_prompts(
    backups: BackupManager, store: PreferenceStore, elevator: ScriptedElevator
) -> None:
    store.write_user(TOR_ON)

    assert backups.reset(store) == ResetResult(had_managed=False, managed_removed=False)
    assert elevator.calls == 0
    assert store.read_user("TorDisabled") is None


def test_reset_declined_keeps_managed(
    backups: BackupManager, store: PreferenceStore, target: Target
) -> None:
    write_plist(target.managed_plist, {"TorDisabled": True})

    assert backups.reset(store) == ResetResult(had_managed=True, managed_removed=False)
    assert target.managed_plist.is_file()


def test_reset_accepted_removes_managed(
    backups: BackupManager, target: Target, backend: PlistDefaults
) -> None:
    write_plist(target.managed_plist, {"TorDisabled": True})
    store = PreferenceStore(target, backend=backend, elevator=ScriptedElevator(accept=True))

    assert backups.reset(store) == ResetResult(had_managed=True, managed_removed=True)
    assert not target.managed_plist.exists()
