# topmark:header:start
#
#   project      : Cowardly
#   file         : test_merge.py
#   file_relpath : tests/compose/test_merge.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Property tests for `cowardly.compose.engine.merge`."""

from __future__ import annotations

from hypothesis import given

from cowardly.compose.engine import merge
from cowardly.model.bundle import Bundle
from cowardly.model.setting import Setting, SettingKind
from tests.strategies_cowardly import bundles


@given(bundles(), bundles())
def test_overlay_wins(base: Bundle, overlay: Bundle) -> None:
    merged = merge(base, overlay)
    for setting in overlay:
        assert merged.get(setting.key) == setting


@given(bundles(), bundles())
def test_key_set_is_union(base: Bundle, overlay: Bundle) -> None:
    merged = merge(base, overlay)
    assert set(merged.keys()) == set(base.keys()) | set(overlay.keys())


@given(bundles(), bundles())
def test_base_order_then_overlay_only_keys(base: Bundle, overlay: Bundle) -> None:
    merged = merge(base, overlay)
    extra = [k for k in overlay.keys() if k not in base]
    assert merged.keys() == base.keys() + extra


@given(bundles(), bundles())
def test_idempotent(base: Bundle, overlay: Bundle) -> None:
    once = merge(base, overlay)
    assert merge(once, overlay) == once


@given(bundles())
def test_empty_sides(bundle: Bundle) -> None:
    assert merge(bundle, Bundle()) == bundle
    assert merge(Bundle(), bundle) == bundle


def test_overlapping_key_keeps_base_position() -> None:
    a = Setting("AKey", True, SettingKind.BOOL)
    b = Setting("BKey", 1, SettingKind.INTEGER)
    b2 = Setting("BKey", 2, SettingKind.INTEGER)
    c = Setting("CKey", "c", SettingKind.STRING)
    assert merge(Bundle([a, b]), Bundle([c, b2])) == Bundle([a, b2, c])
