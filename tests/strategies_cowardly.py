# topmark:header:start
#
#   project      : Cowardly
#   file         : strategies_cowardly.py
#   file_relpath : tests/strategies_cowardly.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

# pyright: strict

"""Hypothesis strategies for Cowardly settings and bundles.

Keys follow the policy naming convention; values are drawn to match their
kind, with integers kept inside the 64-bit range the store accepts.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from hypothesis import strategies as st

from cowardly.model.bundle import Bundle
from cowardly.model.setting import Setting, SettingKind

Draw = Callable[[st.SearchStrategy[Any]], Any]

INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1

policy_keys: st.SearchStrategy[str] = st.from_regex(r"[A-Za-z][A-Za-z0-9]{0,24}", fullmatch=True)

string_values: st.SearchStrategy[str] = st.text(
    alphabet=st.characters(blacklist_categories=("Cs", "Cc")), max_size=40
)


@st.composite
def settings(draw: Draw, key: str | None = None) -> Setting:
    """Draw one valid setting (optionally with a fixed key)."""
    k: str = key if key is not None else draw(policy_keys)
    kind: SettingKind = draw(st.sampled_from(list(SettingKind)))
    if kind is SettingKind.BOOL:
        value: Any = draw(st.booleans())
    elif kind is SettingKind.INTEGER:
        value = draw(st.integers(min_value=INT64_MIN, max_value=INT64_MAX))
    else:
        value = draw(string_values)
    return Setting(key=k, value=value, kind=kind)


@st.composite
def bundles(draw: Draw, max_size: int = 8, exclude: frozenset[str] = frozenset()) -> Bundle:
    """Draw a bundle with unique keys, none of them in ``exclude``."""
    keys: list[str] = draw(
        st.lists(
            policy_keys.filter(lambda k: k not in exclude),
            unique=True,
            max_size=max_size,
        )
    )
    return Bundle([draw(settings(key=k)) for k in keys])
