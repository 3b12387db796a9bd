# topmark:header:start
#
#   project      : Cowardly
#   file         : test_privacy_layer.py
#   file_relpath : tests/compose/test_privacy_layer.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Tests for composing the privacy supplement on top of a base."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from cowardly.compose.engine import compose_privacy_layer, merge
from cowardly.core.errors import NoCustomBaseError, PresetNotFoundError
from cowardly.model.bundle import Bundle
from cowardly.model.setting import Setting, SettingKind
from tests.fakes import PRIVACY, QUICK

if TYPE_CHECKING:
    from cowardly.presets.model import PresetCatalog, Supplement


def test_preset_base(catalog: PresetCatalog, supplement: Supplement) -> None:
    bundle = compose_privacy_layer("quick", catalog, Bundle(), supplement)
    assert bundle == merge(QUICK, PRIVACY)
    assert bundle.keys() == [
        "BraveRewardsDisabled",
        "MetricsReportingEnabled",
        "DefaultBraveFingerprintingV2Setting",
    ]


def test_custom_base(catalog: PresetCatalog, supplement: Supplement) -> None:
    custom = Bundle([Setting("TorDisabled", True, SettingKind.BOOL)])
    bundle = compose_privacy_layer("custom", catalog, custom, supplement)
    assert bundle.keys()[0] == "TorDisabled"
    assert len(bundle) == 1 + len(PRIVACY)


def test_custom_base_without_saved_settings(
    catalog: PresetCatalog, supplement: Supplement
) -> None:
    with pytest.raises(NoCustomBaseError):
        compose_privacy_layer("custom", catalog, Bundle(), supplement)


def test_unknown_base(catalog: PresetCatalog, supplement: Supplement) -> None:
    with pytest.raises(PresetNotFoundError):
        compose_privacy_layer("nope", catalog, Bundle(), supplement)


def test_defaults_to_builtin_supplement(catalog: PresetCatalog) -> None:
    bundle = compose_privacy_layer("balanced", catalog, Bundle())
    assert "BraveP3AEnabled" in bundle
    assert bundle.keys()[:2] == ["BraveWalletDisabled", "DnsOverHttpsMode"]
