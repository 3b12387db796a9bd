# topmark:header:start
#
#   project      : Cowardly
#   file         : bundle.py
#   file_relpath : src/cowardly/model/bundle.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Ordered, key-unique collections of settings.

Insertion order is part of a bundle's identity: it is the declaration (or
merge) order and drives display, diffs and the serialized documents. Lookup
is by key.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, overload

from cowardly.core.errors import DuplicateKeyError
from cowardly.model.setting import Setting

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator, Mapping


class Bundle:
    """Immutable ordered sequence of settings with unique keys.

    Args:
        settings (Iterable[Setting]): Settings in declaration order.

    Raises:
        DuplicateKeyError: If two settings share a key.
    """

    __slots__ = ("_by_key", "_settings")

    def __init__(self, settings: Iterable[Setting] = ()) -> None:
        ordered: tuple[Setting, ...] = tuple(settings)
        by_key: dict[str, Setting] = {}
        for setting in ordered:
            if setting.key in by_key:
                raise DuplicateKeyError(setting.key)
            by_key[setting.key] = setting
        self._settings = ordered
        self._by_key = by_key

    @classmethod
    def from_rows(cls, rows: Iterable[Mapping[str, object]]) -> Bundle:
        """Build a bundle from ``{key, value, type}`` rows (validating each)."""
        return cls(Setting.from_row(row) for row in rows)

    def to_rows(self) -> list[dict[str, object]]:
        """Serialize every setting to a ``{key, value, type}`` row, in order."""
        return [s.to_row() for s in self._settings]

    def keys(self) -> list[str]:
        """Return the keys in bundle order."""
        return [s.key for s in self._settings]

    def get(self, key: str) -> Setting | None:
        """Return the setting for ``key`` or None."""
        return self._by_key.get(key)

    def __contains__(self, key: object) -> bool:
        return key in self._by_key

    def __iter__(self) -> Iterator[Setting]:
        return iter(self._settings)

    def __len__(self) -> int:
        return len(self._settings)

    def __bool__(self) -> bool:
        return bool(self._settings)

    @overload
    def __getitem__(self, index: int) -> Setting: ...
    @overload
    def __getitem__(self, index: slice) -> tuple[Setting, ...]: ...
    def __getitem__(self, index: int | slice) -> Setting | tuple[Setting, ...]:
        return self._settings[index]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Bundle):
            return NotImplemented
        return self._settings == other._settings

    def __hash__(self) -> int:
        return hash(self._settings)

    def __repr__(self) -> str:
        inner = ", ".join(f"{s.key}={s.value!r}" for s in self._settings)
        return f"Bundle([{inner}])"
