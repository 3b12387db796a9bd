# topmark:header:start
#
#   project      : Cowardly
#   file         : test_cli_inspect.py
#   file_relpath : tests/cli/test_cli_inspect.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""CLI tests for dry runs, diffs, drift, the settings view and export."""

from __future__ import annotations

import sys
from typing import TYPE_CHECKING

import pytest
from click.testing import CliRunner

from cowardly.cli.main import cli
from cowardly.core.exit_codes import ExitCode
from cowardly.model.setting import Setting, SettingKind
from cowardly.presets.files import load_bundle_file
from tests.fakes import write_plist

if TYPE_CHECKING:
    from collections.abc import Callable
    from pathlib import Path

    from click.testing import Result

    from cowardly.config.paths import UserPaths
    from cowardly.store.preferences import PreferenceStore
    from cowardly.store.target import Target


def test_dry_run_writes_nothing(run_cli: Callable[..., Result], store: PreferenceStore) -> None:
    result = run_cli(["dry-run", "balanced"])

    assert result.exit_code == ExitCode.SUCCESS, result.output
    assert result.output.splitlines() == [
        "Dry run: preset balanced (2 setting(s), nothing written)",
        "  BraveWalletDisabled = true  (bool)",
        '  DnsOverHttpsMode = "secure"  (string)',
    ]
    assert store.read_user("BraveWalletDisabled") is None


def test_dry_run_privacy_guides_with_base(run_cli: Callable[..., Result]) -> None:
    result = run_cli(["dry-run", "privacy-guides:balanced"])

    assert result.exit_code == ExitCode.SUCCESS, result.output
    assert "Dry run: privacy-guides (base: balanced) (4 setting(s)" in result.output


def test_diff_reports_pending_changes(run_cli: Callable[..., Result]) -> None:
    result = run_cli(["diff", "balanced"])

    assert result.exit_code == ExitCode.WOULD_CHANGE
    assert "2 setting(s) would change:" in result.output
    assert "  BraveWalletDisabled: (not set) -> 1" in result.output


def test_diff_after_apply_is_clean(run_cli: Callable[..., Result]) -> None:
    run_cli(["apply", "balanced"])
    result = run_cli(["diff", "balanced"])

    assert result.exit_code == ExitCode.SUCCESS
    assert "No changes: balanced is already in effect." in result.output


def test_diff_unknown_target(run_cli: Callable[..., Result]) -> None:
    assert run_cli(["diff", "nope"]).exit_code == ExitCode.NOT_FOUND


def test_drift_without_saved_state(run_cli: Callable[..., Result]) -> None:
    result = run_cli(["drift"])

    assert result.exit_code == ExitCode.NOT_FOUND
    assert "No desired state saved" in result.output


def test_drift(run_cli: Callable[..., Result], store: PreferenceStore) -> None:
    run_cli(["apply", "quick"])
    assert "No drift: preset quick is in effect." in run_cli(["drift"]).output

    store.write_user(Setting("MetricsReportingEnabled", True, SettingKind.BOOL))
    result = run_cli(["drift"])

    assert result.exit_code == ExitCode.WOULD_CHANGE
    assert "1 setting(s) drifted from preset quick:" in result.output
    assert "  MetricsReportingEnabled: 1 -> 0" in result.output


def test_current(run_cli: Callable[..., Result], target: Target) -> None:
    run_cli(["apply", "quick"])
    write_plist(target.managed_plist, {"TorDisabled": True})

    result = run_cli(["current"])

    assert result.exit_code == ExitCode.SUCCESS, result.output
    lines = result.output.splitlines()
    assert lines[0] == "Brave Browser (1.80.115)"
    assert lines[1].startswith("Managed preferences: ")
    assert any(line.split() == ["BraveRewardsDisabled", "1"] for line in lines)
    assert any(line.split() == ["TorDisabled", "1", "(enforced)"] for line in lines)
    assert any(line.split() == ["SyncDisabled", "(not", "set)"] for line in lines)


def test_export(run_cli: Callable[..., Result], tmp_path: Path) -> None:
    run_cli(["apply", "quick"])
    path = tmp_path / "out.toml"

    result = run_cli(["export", str(path)])

    assert result.exit_code == ExitCode.SUCCESS, result.output
    assert f"Exported 2 setting(s) to {path}" in result.output
    assert load_bundle_file(path).keys() == ["MetricsReportingEnabled", "BraveRewardsDisabled"]


def test_presets(run_cli: Callable[..., Result]) -> None:
    result = run_cli(["presets"])

    assert result.exit_code == ExitCode.SUCCESS, result.output
    for preset_id in ("quick", "max-privacy", "balanced", "performance", "privacy-guides"):
        assert preset_id in result.output


def test_dry_run_off_macos(monkeypatch: pytest.MonkeyPatch, paths: UserPaths) -> None:
    monkeypatch.setattr(sys, "platform", "linux")

    result = CliRunner().invoke(cli, ["--no-color", "dry-run", "quick"], obj={"paths": paths})

    assert result.exit_code == ExitCode.SUCCESS, result.output
    assert result.output.startswith("Dry run: preset quick (")
    assert "BraveRewardsDisabled = true  (bool)" in result.output


def test_diff_off_macos_is_unavailable(monkeypatch: pytest.MonkeyPatch, paths: UserPaths) -> None:
    monkeypatch.setattr(sys, "platform", "linux")

    result = CliRunner().invoke(cli, ["--no-color", "diff", "quick"], obj={"paths": paths})

    assert result.exit_code == ExitCode.UNAVAILABLE
    assert "only be managed on macOS" in result.output
