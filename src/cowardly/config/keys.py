# topmark:header:start
#
#   project      : Cowardly
#   file         : keys.py
#   file_relpath : src/cowardly/config/keys.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Canonical TOML table and key names for Cowardly documents.

Centralizing the names keeps the preset loader, the bundle file reader/writer
and the desired-state store in agreement. Keys defined here are the external
document format: renaming or removing one is a breaking change, and the
legacy desired-state names must stay readable forever.
"""

from __future__ import annotations

from typing import Final


class Toml:
    """Table names and keys used in Cowardly TOML documents."""

    # One setting row: [[settings]] key / value / type
    SECTION_SETTINGS: Final[str] = "settings"

    KEY_KEY: Final[str] = "key"
    KEY_VALUE: Final[str] = "value"
    KEY_TYPE: Final[str] = "type"

    # Preset definition (presets/data/*.toml)
    KEY_ID: Final[str] = "id"
    KEY_NAME: Final[str] = "name"
    KEY_DESCRIPTION: Final[str] = "description"
    KEY_URL: Final[str] = "url"

    # Desired state, current schema:
    #   [preset.<id>] / [[preset.<id>.settings]]
    #   [supplement.<name>] / [[supplement.<name>.settings]]
    #   apply_file = "..." / [[settings]]
    SECTION_PRESET: Final[str] = "preset"
    SECTION_SUPPLEMENT: Final[str] = "supplement"
    KEY_APPLY_FILE: Final[str] = "apply_file"

    # Desired state, legacy schema:
    #   preset = "<id>", base_preset = "<id>", [[supplement]], [[settings]]
    KEY_BASE_PRESET: Final[str] = "base_preset"

    # Supplement names accepted on read; the first one is written.
    SUPPLEMENT_NAMES: Final[tuple[str, ...]] = ("privacy_guides", "privacy-guides")
