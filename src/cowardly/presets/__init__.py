# topmark:header:start
#
#   project      : Cowardly
#   file         : __init__.py
#   file_relpath : src/cowardly/presets/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Preset Catalog: built-in presets, the Privacy Guides supplement, bundle files."""

from __future__ import annotations

from cowardly.presets.loader import (
    load_all,
    load_all_or_empty,
    load_from_directory,
    load_privacy_supplement,
)
from cowardly.presets.model import Preset, PresetCatalog, Supplement

__all__: list[str] = [
    "Preset",
    "PresetCatalog",
    "Supplement",
    "load_all",
    "load_all_or_empty",
    "load_from_directory",
    "load_privacy_supplement",
]
