# topmark:header:start
#
#   project      : Cowardly
#   file         : __init__.py
#   file_relpath : src/cowardly/store/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Preference Store Adapter: the user and managed layers of one Brave target."""

from __future__ import annotations

from cowardly.store.preferences import ApplyResult, PreferenceStore
from cowardly.store.target import Target, Variant

__all__: list[str] = ["ApplyResult", "PreferenceStore", "Target", "Variant"]
