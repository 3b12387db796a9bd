# topmark:header:start
#
#   project      : Cowardly
#   file         : __init__.py
#   file_relpath : src/cowardly/model/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Setting model: typed settings and ordered bundles."""

from __future__ import annotations

from cowardly.model.bundle import Bundle
from cowardly.model.setting import Setting, SettingKind, SettingValue

__all__: list[str] = ["Bundle", "Setting", "SettingKind", "SettingValue"]
