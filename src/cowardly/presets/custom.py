# topmark:header:start
#
#   project      : Cowardly
#   file         : custom.py
#   file_relpath : src/cowardly/presets/custom.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Well-known Brave policy settings.

`CUSTOM_SETTINGS` is the menu the operator picks from to build a custom
bundle: each entry carries the value applied when the entry is chosen.
`VIEW_KEYS` is the fixed list the settings view shows. Export walks
`export_keys`, which is `VIEW_KEYS`, then every custom-setting key, then any
extra keys, without duplicates.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Final

from cowardly.core.errors import ValidationError
from cowardly.model.bundle import Bundle
from cowardly.model.setting import Setting, SettingKind

if TYPE_CHECKING:
    from collections.abc import Iterable

    from cowardly.model.setting import SettingValue


@dataclass(frozen=True)
class CustomSetting:
    """One toggleable policy in the custom menu.

    Attributes:
        key (str): Policy name.
        label (str): Display label.
        value (bool | int | str): Value applied when the entry is chosen.
        kind (SettingKind): Value kind.
        category (str): Menu category.
        verb (str): What choosing it does ("Disable", "Enable", "Force").
    """

    key: str
    label: str
    value: SettingValue
    kind: SettingKind
    category: str
    verb: str = "Disable"

    def to_setting(self) -> Setting:
        """Return the setting this entry applies."""
        return Setting(key=self.key, value=self.value, kind=self.kind)


TELEMETRY: Final[str] = "Telemetry & Privacy"
PRIVACY_SECURITY: Final[str] = "Privacy & Security"
BRAVE_FEATURES: Final[str] = "Brave Features"
PERFORMANCE: Final[str] = "Performance & Bloat"

CATEGORY_ORDER: Final[tuple[str, ...]] = (TELEMETRY, PRIVACY_SECURITY, BRAVE_FEATURES, PERFORMANCE)

_B = SettingKind.BOOL
_I = SettingKind.INTEGER
_S = SettingKind.STRING

CUSTOM_SETTINGS: Final[tuple[CustomSetting, ...]] = (
    CustomSetting("MetricsReportingEnabled", "Metrics Reporting", False, _B, TELEMETRY),
    CustomSetting(
        "SafeBrowsingExtendedReportingEnabled",
        "Safe Browsing Extended Reporting",
        False,
        _B,
        TELEMETRY,
    ),
    CustomSetting(
        "UrlKeyedAnonymizedDataCollectionEnabled", "URL Data Collection", False, _B, TELEMETRY
    ),
    CustomSetting("FeedbackSurveysEnabled", "Feedback Surveys", False, _B, TELEMETRY),
    CustomSetting("SafeBrowsingProtectionLevel", "Safe Browsing", 0, _I, PRIVACY_SECURITY),
    CustomSetting("AutofillAddressEnabled", "Autofill (Addresses)", False, _B, PRIVACY_SECURITY),
    CustomSetting(
        "AutofillCreditCardEnabled", "Autofill (Credit Cards)", False, _B, PRIVACY_SECURITY
    ),
    CustomSetting("PasswordManagerEnabled", "Password Manager", False, _B, PRIVACY_SECURITY),
    CustomSetting("BrowserSignin", "Browser Sign-in", 0, _I, PRIVACY_SECURITY),
    CustomSetting(
        "WebRtcIPHandling", "WebRTC IP Leak", "disable_non_proxied_udp", _S, PRIVACY_SECURITY
    ),
    CustomSetting("QuicAllowed", "QUIC Protocol", False, _B, PRIVACY_SECURITY),
    CustomSetting(
        "BlockThirdPartyCookies", "Block Third Party Cookies", True, _B, PRIVACY_SECURITY, "Enable"
    ),
    CustomSetting("EnableDoNotTrack", "Do Not Track", True, _B, PRIVACY_SECURITY, "Enable"),
    CustomSetting(
        "ForceGoogleSafeSearch", "Google SafeSearch", True, _B, PRIVACY_SECURITY, "Force"
    ),
    CustomSetting("IPFSEnabled", "IPFS", False, _B, PRIVACY_SECURITY),
    CustomSetting("IncognitoModeAvailability", "Incognito Mode", 1, _I, PRIVACY_SECURITY),
    CustomSetting("BraveRewardsDisabled", "Brave Rewards", True, _B, BRAVE_FEATURES),
    CustomSetting("BraveWalletDisabled", "Brave Wallet", True, _B, BRAVE_FEATURES),
    CustomSetting("BraveVPNDisabled", "Brave VPN", True, _B, BRAVE_FEATURES),
    CustomSetting("BraveAIChatEnabled", "Brave AI Chat", False, _B, BRAVE_FEATURES),
    CustomSetting("TorDisabled", "Tor", True, _B, BRAVE_FEATURES),
    CustomSetting("SyncDisabled", "Sync", True, _B, BRAVE_FEATURES),
    CustomSetting("BackgroundModeEnabled", "Background Mode", False, _B, PERFORMANCE),
    CustomSetting("MediaRecommendationsEnabled", "Media Recommendations", False, _B, PERFORMANCE),
    CustomSetting("ShoppingListEnabled", "Shopping List", False, _B, PERFORMANCE),
    CustomSetting(
        "AlwaysOpenPdfExternally", "Always Open PDF Externally", True, _B, PERFORMANCE, "Enable"
    ),
    CustomSetting("TranslateEnabled", "Translate", False, _B, PERFORMANCE),
    CustomSetting("SpellcheckEnabled", "Spellcheck", False, _B, PERFORMANCE),
    CustomSetting("PromotionsEnabled", "Promotions", False, _B, PERFORMANCE),
    CustomSetting("SearchSuggestEnabled", "Search Suggestions", False, _B, PERFORMANCE),
    CustomSetting("PrintingEnabled", "Printing", False, _B, PERFORMANCE),
    CustomSetting(
        "DefaultBrowserSettingEnabled", "Default Browser Prompt", False, _B, PERFORMANCE
    ),
    CustomSetting("DeveloperToolsDisabled", "Developer Tools", True, _B, PERFORMANCE),
)

VIEW_KEYS: Final[tuple[str, ...]] = (
    "MetricsReportingEnabled",
    "SafeBrowsingExtendedReportingEnabled",
    "UrlKeyedAnonymizedDataCollectionEnabled",
    "FeedbackSurveysEnabled",
    "BraveRewardsDisabled",
    "BraveWalletDisabled",
    "BraveVPNDisabled",
    "BraveAIChatEnabled",
    "TorDisabled",
    "SyncDisabled",
    "ShoppingListEnabled",
    "AlwaysOpenPdfExternally",
    "TranslateEnabled",
    "SpellcheckEnabled",
    "PromotionsEnabled",
    "DnsOverHttpsMode",
)


def custom_settings_by_category() -> dict[str, list[CustomSetting]]:
    """Group `CUSTOM_SETTINGS` by category, categories in `CATEGORY_ORDER`."""
    grouped: dict[str, list[CustomSetting]] = {cat: [] for cat in CATEGORY_ORDER}
    for entry in CUSTOM_SETTINGS:
        grouped.setdefault(entry.category, []).append(entry)
    return grouped


def find_custom_setting(key: str) -> CustomSetting | None:
    """Return the custom menu entry for ``key`` or None."""
    for entry in CUSTOM_SETTINGS:
        if entry.key == key:
            return entry
    return None


def custom_bundle(keys: Iterable[str]) -> Bundle:
    """Build a bundle from chosen custom-menu keys, in menu display order.

    Raises:
        ValidationError: If a key is not in the custom menu.
    """
    chosen = list(dict.fromkeys(keys))
    unknown = [k for k in chosen if find_custom_setting(k) is None]
    if unknown:
        raise ValidationError(f"not a custom setting: {', '.join(unknown)}")
    wanted = set(chosen)
    ordered = [
        entry.to_setting()
        for entries in custom_settings_by_category().values()
        for entry in entries
        if entry.key in wanted
    ]
    return Bundle(ordered)


def export_keys(extra: Iterable[str] = ()) -> list[str]:
    """Return the export key space: view keys, custom keys, then ``extra``, deduplicated."""
    keys: list[str] = list(VIEW_KEYS)
    keys.extend(entry.key for entry in CUSTOM_SETTINGS)
    keys.extend(extra)
    return list(dict.fromkeys(keys))
