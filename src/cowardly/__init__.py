# topmark:header:start
#
#   project      : Cowardly
#   file         : __init__.py
#   file_relpath : src/cowardly/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Cowardly package.

Cowardly manages a small set of typed Brave Browser policy settings on macOS.
It applies curated presets (optionally layered with the Privacy Guides
supplement), records the desired state for later re-application and drift
checks, and keeps timestamped backups of the user preferences so every change
can be undone.
"""

from __future__ import annotations
