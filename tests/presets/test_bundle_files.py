# topmark:header:start
#
#   project      : Cowardly
#   file         : test_bundle_files.py
#   file_relpath : tests/presets/test_bundle_files.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Tests for reading and writing bundle files."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from cowardly.core.errors import DocumentError, NotFoundError
from cowardly.model.bundle import Bundle
from cowardly.model.setting import Setting, SettingKind
from cowardly.presets.files import load_bundle_file, write_bundle_file

if TYPE_CHECKING:
    from pathlib import Path


def test_write_then_load(tmp_path: Path) -> None:
    bundle = Bundle(
        [
            Setting("DnsOverHttpsMode", "secure", SettingKind.STRING),
            Setting("IncognitoModeAvailability", 1, SettingKind.INTEGER),
            Setting("TorDisabled", False, SettingKind.BOOL),
        ]
    )
    path = tmp_path / "mine.toml"

    write_bundle_file(path, bundle)

    assert "[[settings]]" in path.read_text(encoding="utf-8")
    assert load_bundle_file(path) == bundle


def test_missing_file(tmp_path: Path) -> None:
    with pytest.raises(NotFoundError):
        load_bundle_file(tmp_path / "absent.toml")


def test_invalid_rows_are_listed(tmp_path: Path) -> None:
    path = tmp_path / "bad.toml"
    path.write_text(
        '[[settings]]\nkey = "1st"\nvalue = true\ntype = "bool"\n\n'
        '[[settings]]\nkey = "Ok"\nvalue = "x"\ntype = "integer"\n',
        encoding="utf-8",
    )
    with pytest.raises(DocumentError) as excinfo:
        load_bundle_file(path)
    message = str(excinfo.value)
    assert "'1st'" in message
    assert "cannot convert" in message


def test_not_toml(tmp_path: Path) -> None:
    path = tmp_path / "bad.toml"
    path.write_text("[[settings]\n", encoding="utf-8")
    with pytest.raises(DocumentError, match="invalid TOML"):
        load_bundle_file(path)


def test_empty_file_is_empty_bundle(tmp_path: Path) -> None:
    path = tmp_path / "empty.toml"
    path.write_text("", encoding="utf-8")
    assert load_bundle_file(path) == Bundle()


def test_unwritable_destination(tmp_path: Path) -> None:
    with pytest.raises(DocumentError, match="cannot write"):
        write_bundle_file(tmp_path / "missing-dir" / "x.toml", Bundle())
