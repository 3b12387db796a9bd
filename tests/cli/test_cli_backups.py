# topmark:header:start
#
#   project      : Cowardly
#   file         : test_cli_backups.py
#   file_relpath : tests/cli/test_cli_backups.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""CLI tests for reset, backups, restore and delete-backup."""

from __future__ import annotations

from typing import TYPE_CHECKING

from cowardly.core.exit_codes import ExitCode
from cowardly.model.setting import Setting, SettingKind
from tests.fakes import write_plist

if TYPE_CHECKING:
    from collections.abc import Callable

    from click.testing import Result

    from cowardly.store.preferences import PreferenceStore
    from cowardly.store.target import Target
    from tests.fakes import ScriptedElevator, ScriptedRunner


def test_reset_without_managed(
    run_cli: Callable[..., Result], store: PreferenceStore, elevator: ScriptedElevator
) -> None:
    run_cli(["apply", "quick"])
    elevator.install_calls = 0

    result = run_cli(["reset", "--yes"])

    assert result.exit_code == ExitCode.SUCCESS, result.output
    assert "Backed up preferences to " in result.output
    assert "User preferences cleared." in result.output
    assert "No managed preferences were present." in result.output
    assert elevator.calls == 0
    assert store.read_user("BraveRewardsDisabled") is None


def test_reset_declined_keeps_managed(run_cli: Callable[..., Result], target: Target) -> None:
    write_plist(target.managed_plist, {"TorDisabled": True})

    result = run_cli(["reset", "-y"])

    assert result.exit_code == ExitCode.SUCCESS, result.output
    assert "Managed preferences were NOT removed" in result.output
    assert target.managed_plist.is_file()


def test_reset_asks_first(run_cli: Callable[..., Result], store: PreferenceStore) -> None:
    store.write_user(Setting("TorDisabled", True, SettingKind.BOOL))

    result = run_cli(["reset"], input_text="n\n")

    assert result.exit_code == 1
    assert store.read_user("TorDisabled") == "1"


def test_reset_refuses_while_running(
    run_cli: Callable[..., Result], runner: ScriptedRunner
) -> None:
    runner.running = True

    result = run_cli(["reset", "--yes"])

    assert result.exit_code == ExitCode.UNAVAILABLE
    assert "quit it first" in result.output


def test_backups_listing(run_cli: Callable[..., Result]) -> None:
    assert "No backups in " in run_cli(["backups"]).output

    run_cli(["apply", "quick"])
    run_cli(["apply", "balanced"])
    result = run_cli(["backups"])

    assert result.exit_code == ExitCode.SUCCESS
    assert result.output.splitlines() == ["2025-01-02T03-04-05-user.plist"]


def test_restore_and_delete(run_cli: Callable[..., Result], store: PreferenceStore) -> None:
    run_cli(["apply", "quick"])
    run_cli(["apply", "balanced"])

    result = run_cli(["restore", "2025-01-02T03-04-05"])

    assert result.exit_code == ExitCode.SUCCESS, result.output
    assert "Restored user preferences from 2025-01-02T03-04-05-user.plist" in result.output
    assert store.read_user("BraveWalletDisabled") is None
    assert store.read_user("BraveRewardsDisabled") == "1"

    result = run_cli(["delete-backup", "2025-01-02T03-04-05-user.plist"])
    assert result.exit_code == ExitCode.SUCCESS
    assert "Deleted 2025-01-02T03-04-05-user.plist" in result.output


def test_restore_unknown_backup(run_cli: Callable[..., Result]) -> None:
    result = run_cli(["restore", "nope"])

    assert result.exit_code == ExitCode.NOT_FOUND
    assert "backup not found: nope" in result.output
