# topmark:header:start
#
#   project      : Cowardly
#   file         : __init__.py
#   file_relpath : src/cowardly/compose/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Composition Engine: merge bundles and diff them against the store."""

from __future__ import annotations

from cowardly.compose.engine import (
    DiffEntry,
    compose_privacy_layer,
    describe_dry_run,
    diff,
    merge,
    render_diff,
)

__all__: list[str] = [
    "DiffEntry",
    "compose_privacy_layer",
    "describe_dry_run",
    "diff",
    "merge",
    "render_diff",
]
