# topmark:header:start
#
#   project      : Cowardly
#   file         : test_custom_menu.py
#   file_relpath : tests/presets/test_custom_menu.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Tests for the custom settings menu and the export key space."""

from __future__ import annotations

import pytest

from cowardly.core.errors import ValidationError
from cowardly.presets.custom import (
    CATEGORY_ORDER,
    CUSTOM_SETTINGS,
    VIEW_KEYS,
    custom_bundle,
    custom_settings_by_category,
    export_keys,
    find_custom_setting,
)


def test_menu_keys_are_unique() -> None:
    keys = [entry.key for entry in CUSTOM_SETTINGS]
    assert len(keys) == len(set(keys))


def test_grouped_in_category_order() -> None:
    grouped = custom_settings_by_category()
    assert list(grouped) == list(CATEGORY_ORDER)
    assert sum(len(entries) for entries in grouped.values()) == len(CUSTOM_SETTINGS)


def test_find_custom_setting() -> None:
    entry = find_custom_setting("WebRtcIPHandling")
    assert entry is not None
    assert entry.to_setting().value == "disable_non_proxied_udp"
    assert find_custom_setting("NotAPolicy") is None


def test_custom_bundle_uses_menu_order() -> None:
    bundle = custom_bundle(["TorDisabled", "MetricsReportingEnabled", "TorDisabled"])
    assert bundle.keys() == ["MetricsReportingEnabled", "TorDisabled"]
    assert bundle.get("TorDisabled").value is True  # type: ignore[union-attr]


def test_custom_bundle_rejects_unknown_keys() -> None:
    with pytest.raises(ValidationError, match="NotAPolicy"):
        custom_bundle(["TorDisabled", "NotAPolicy"])


def test_export_keys_order_and_dedup() -> None:
    keys = export_keys(["TorDisabled", "ExtraPolicy", "ExtraPolicy"])
    assert keys[: len(VIEW_KEYS)] == list(VIEW_KEYS)
    assert keys[-1] == "ExtraPolicy"
    assert len(keys) == len(set(keys))
    assert keys.count("TorDisabled") == 1
