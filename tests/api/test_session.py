# topmark:header:start
#
#   project      : Cowardly
#   file         : test_session.py
#   file_relpath : tests/api/test_session.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""End-to-end tests for `cowardly.api.Session` over the fakes."""

from __future__ import annotations

import sys
from typing import TYPE_CHECKING

import pytest

from cowardly.api.session import Session
from cowardly.api.types import CurrentValue, TargetStatus
from cowardly.compose.engine import DiffEntry, merge
from cowardly.core.errors import (
    NoCustomBaseError,
    NotFoundError,
    PresetNotFoundError,
    UnsupportedPlatformError,
    ValidationError,
)
from cowardly.model.bundle import Bundle
from cowardly.model.setting import Setting, SettingKind
from cowardly.presets.files import load_bundle_file, write_bundle_file
from cowardly.state.desired import (
    CustomApplied,
    DesiredState,
    DesiredStateStore,
    FileApplied,
    PresetApplied,
    PrivacyGuidesApplied,
)
from tests.fakes import BALANCED, PRIVACY, QUICK, write_plist

if TYPE_CHECKING:
    from pathlib import Path

    from cowardly.config.paths import UserPaths
    from cowardly.presets.model import PresetCatalog, Supplement
    from cowardly.state.backups import BackupManager
    from cowardly.store.preferences import PreferenceStore
    from cowardly.store.target import Target


def test_status(session: Session) -> None:
    assert session.status() == TargetStatus(
        installed=True, running=False, version="1.80.115", managed=False
    )


def test_for_system_requires_macos(monkeypatch: pytest.MonkeyPatch, paths: UserPaths) -> None:
    monkeypatch.setattr(sys, "platform", "linux")
    with pytest.raises(UnsupportedPlatformError):
        Session.for_system(paths=paths)


def test_apply_preset_then_diff_is_empty(session: Session) -> None:
    outcome = session.apply_preset("quick")

    assert outcome.provenance == PresetApplied("quick")
    assert outcome.bundle == QUICK
    assert not outcome.enforced
    assert outcome.backup_path is None
    assert outcome.state_note is None
    assert session.diff("quick") == []
    assert session.saved() == DesiredState(PresetApplied("quick"), QUICK)


def test_second_apply_backs_up_first(session: Session) -> None:
    session.apply_preset("quick")
    outcome = session.apply_preset("balanced")

    assert outcome.backup_path is not None
    assert outcome.backup_path.is_file()
    assert session.list_backups() == [outcome.backup_path]


def test_failed_backup_does_not_block_apply(session: Session, backups: BackupManager) -> None:
    session.apply_preset("quick")
    backups.backup_dir.parent.mkdir(parents=True, exist_ok=True)
    backups.backup_dir.write_text("not a directory")

    outcome = session.apply_preset("balanced")

    assert outcome.backup_path is None
    assert outcome.state_note is None
    assert session.saved() == DesiredState(PresetApplied("balanced"), BALANCED)
    assert session.diff("balanced") == []


def test_unknown_preset(session: Session) -> None:
    with pytest.raises(PresetNotFoundError):
        session.apply_preset("nope")
    assert session.saved() is None


def test_empty_bundle_is_rejected(session: Session) -> None:
    with pytest.raises(ValidationError):
        session.apply(CustomApplied(), Bundle())


def test_diff_before_apply(session: Session) -> None:
    assert session.diff("balanced") == [
        DiffEntry("BraveWalletDisabled", "(not set)", "1"),
        DiffEntry("DnsOverHttpsMode", "(not set)", "secure"),
    ]


# --- Privacy supplement -----------------------------------------------------


def test_privacy_guides_defaults_to_quick(session: Session) -> None:
    outcome = session.apply_privacy_guides()

    assert outcome.provenance == PrivacyGuidesApplied("quick")
    assert outcome.bundle == merge(QUICK, PRIVACY)
    assert session.saved() == DesiredState(PrivacyGuidesApplied("quick"), merge(QUICK, PRIVACY))


def test_privacy_guides_reuses_saved_preset(session: Session) -> None:
    session.apply_preset("balanced")
    outcome = session.apply_privacy_guides()
    assert outcome.provenance == PrivacyGuidesApplied("balanced")


def test_privacy_guides_over_saved_custom(session: Session) -> None:
    session.apply_custom(["TorDisabled"])
    assert session.privacy_base() == "custom"

    outcome = session.apply_privacy_guides()

    assert outcome.provenance == PrivacyGuidesApplied("custom")
    assert outcome.bundle.keys()[0] == "TorDisabled"
    # the saved result still serves as the custom base
    assert session.custom_fallback() == outcome.bundle


def test_privacy_guides_custom_without_saved_custom(session: Session) -> None:
    session.apply_preset("quick")
    with pytest.raises(NoCustomBaseError):
        session.apply_privacy_guides("custom")


def test_resolve_bundle_names(session: Session) -> None:
    assert session.resolve_bundle("balanced") == (PresetApplied("balanced"), BALANCED)
    assert session.resolve_bundle("privacy-guides:balanced") == (
        PrivacyGuidesApplied("balanced"),
        merge(BALANCED, PRIVACY),
    )
    with pytest.raises(NoCustomBaseError):
        session.resolve_bundle("custom")


# --- Files, custom, reapply and drift ---------------------------------------


def test_apply_file(session: Session, tmp_path: Path) -> None:
    path = tmp_path / "mine.toml"
    write_bundle_file(path, BALANCED)

    outcome = session.apply_file(path)

    assert outcome.provenance == FileApplied(str(path.resolve()))
    assert session.diff("balanced") == []


def test_apply_missing_file(session: Session, tmp_path: Path) -> None:
    with pytest.raises(NotFoundError):
        session.apply_file(tmp_path / "absent.toml")


def test_apply_custom(session: Session) -> None:
    outcome = session.apply_custom(["SyncDisabled", "BrowserSignin"])
    assert outcome.provenance == CustomApplied()
    assert outcome.bundle.keys() == ["BrowserSignin", "SyncDisabled"]
    assert session.resolve_bundle("custom") == (CustomApplied(), outcome.bundle)


def test_reapply_without_saved_state(session: Session) -> None:
    with pytest.raises(NotFoundError):
        session.reapply()
    assert session.drift() is None


def test_drift_then_reapply(session: Session, store: PreferenceStore) -> None:
    session.apply_preset("quick")
    store.write_user(Setting("BraveRewardsDisabled", False, SettingKind.BOOL))

    report = session.drift()
    assert report is not None
    assert report.drifted
    assert report.entries == [DiffEntry("BraveRewardsDisabled", "0", "1")]

    outcome = session.reapply()
    assert outcome.provenance == PresetApplied("quick")
    report = session.drift()
    assert report is not None
    assert not report.drifted


def test_state_note_when_desired_state_cannot_be_saved(
    store: PreferenceStore,
    backups: BackupManager,
    catalog: PresetCatalog,
    supplement: Supplement,
    tmp_path: Path,
) -> None:
    blocker = tmp_path / "blocker"
    blocker.write_text("", encoding="utf-8")
    desired = DesiredStateStore(blocker / "cowardly.toml", catalog=lambda: catalog)
    session = Session(
        store, desired, backups, catalog=lambda: catalog, supplement=lambda: supplement
    )

    outcome = session.apply_preset("quick")

    assert outcome.state_note is not None
    assert "desired state not saved" in outcome.state_note
    assert store.read_user("BraveRewardsDisabled") == "1"


# --- Views and export -------------------------------------------------------


def test_current_marks_enforced_values(session: Session, target: Target) -> None:
    session.apply_preset("quick")
    write_plist(target.managed_plist, {"TorDisabled": True})

    rows = session.current(["BraveRewardsDisabled", "TorDisabled", "SyncDisabled"])

    assert rows == [
        CurrentValue("BraveRewardsDisabled", "1", enforced=False),
        CurrentValue("TorDisabled", "1", enforced=True),
        CurrentValue("SyncDisabled", None, enforced=False),
    ]


def test_export_writes_effective_values(session: Session, tmp_path: Path) -> None:
    session.apply_preset("balanced")
    path = tmp_path / "export.toml"

    exported = session.export(path)

    assert load_bundle_file(path) == exported
    assert exported.get("BraveWalletDisabled") == Setting(
        "BraveWalletDisabled", True, SettingKind.BOOL
    )
    assert exported.get("DnsOverHttpsMode") == Setting(
        "DnsOverHttpsMode", "secure", SettingKind.STRING
    )
    assert "TorDisabled" not in exported


# --- Backups ----------------------------------------------------------------


def test_restore_and_delete_backup(session: Session, store: PreferenceStore) -> None:
    session.apply_preset("quick")
    backup = session.backup_before_change()
    assert backup is not None
    store.write_user(Setting("BraveRewardsDisabled", False, SettingKind.BOOL))

    assert session.restore_backup(backup.name) == backup
    assert store.read_user("BraveRewardsDisabled") == "1"

    assert session.delete_backup(backup.name) == backup
    assert session.list_backups() == []
    with pytest.raises(NotFoundError):
        session.resolve_backup(backup.name)


def test_reset(session: Session, store: PreferenceStore) -> None:
    session.apply_preset("quick")
    result = session.reset()
    assert not result.had_managed
    assert store.read_user("BraveRewardsDisabled") is None
