# topmark:header:start
#
#   project      : Cowardly
#   file         : setting.py
#   file_relpath : src/cowardly/model/setting.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Typed policy settings.

A `Setting` is an immutable ``(key, value, kind)`` triple. The declared kind
doubles as a runtime assertion: construction fails unless the value's Python
type matches it, so a `Setting` that exists is always safe to serialize.

Coercion from declarative data (`Setting.from_raw`):

- ``bool``: literal booleans, or the case-insensitive strings
  ``true/1/yes`` and ``false/0/no/""``.
- ``integer``: integers (64-bit range), floats (truncated toward zero) and
  numeric string tokens. Booleans are rejected.
- ``string``: strings only.
"""

from __future__ import annotations

import math
import re
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Final, TypeAlias

from cowardly.config.keys import Toml
from cowardly.core.errors import InvalidKeyError, TypeConversionError, UnknownTypeError

if TYPE_CHECKING:
    from collections.abc import Mapping

SettingValue: TypeAlias = "bool | int | str"

# Chromium/Brave policy names: PascalCase letters and digits.
POLICY_KEY_RE: Final[re.Pattern[str]] = re.compile(r"^[A-Za-z][A-Za-z0-9]*$")

_INT_TOKEN_RE: Final[re.Pattern[str]] = re.compile(r"^[+-]?[0-9]+$")
_FLOAT_TOKEN_RE: Final[re.Pattern[str]] = re.compile(
    r"^[+-]?([0-9]+\.[0-9]*|\.[0-9]+)([eE][+-]?[0-9]+)?$"
)

_INT64_MIN: Final[int] = -(2**63)
_INT64_MAX: Final[int] = 2**63 - 1

_TRUE_STRINGS: Final[frozenset[str]] = frozenset({"true", "1", "yes"})
_FALSE_STRINGS: Final[frozenset[str]] = frozenset({"false", "0", "no", ""})


class SettingKind(str, Enum):
    """Value kind of a setting; the enum value is the canonical type tag."""

    BOOL = "bool"
    INTEGER = "integer"
    STRING = "string"

    @classmethod
    def parse(cls, tag: object) -> SettingKind:
        """Return the kind for a declared type tag.

        Accepts ``bool``/``boolean``, ``integer``/``int`` and ``string``,
        case-insensitively.

        Raises:
            UnknownTypeError: If the tag is not recognized.
        """
        if isinstance(tag, SettingKind):
            return tag
        if not isinstance(tag, str):
            raise UnknownTypeError(tag)
        kind = _KIND_ALIASES.get(tag.strip().lower())
        if kind is None:
            raise UnknownTypeError(tag)
        return kind


_KIND_ALIASES: Final[dict[str, SettingKind]] = {
    "bool": SettingKind.BOOL,
    "boolean": SettingKind.BOOL,
    "integer": SettingKind.INTEGER,
    "int": SettingKind.INTEGER,
    "string": SettingKind.STRING,
}


def is_valid_key(key: object) -> bool:
    """Return True if ``key`` is a syntactically valid policy name."""
    return isinstance(key, str) and POLICY_KEY_RE.fullmatch(key) is not None


def to_bool(raw: object) -> bool:
    """Coerce ``raw`` to a bool or raise `TypeConversionError`."""
    if isinstance(raw, bool):
        return raw
    if isinstance(raw, str):
        lowered = raw.strip().lower()
        if lowered in _TRUE_STRINGS:
            return True
        if lowered in _FALSE_STRINGS:
            return False
    raise TypeConversionError(raw, SettingKind.BOOL.value)


def to_int(raw: object) -> int:
    """Coerce ``raw`` to a 64-bit integer or raise `TypeConversionError`."""
    value: int | None = None
    if isinstance(raw, bool):
        value = None
    elif isinstance(raw, int):
        value = raw
    elif isinstance(raw, float):
        value = math.trunc(raw) if math.isfinite(raw) else None
    elif isinstance(raw, str):
        token = raw.strip()
        if _INT_TOKEN_RE.match(token):
            value = int(token)
        elif _FLOAT_TOKEN_RE.match(token):
            value = math.trunc(float(token))
    if value is None or not _INT64_MIN <= value <= _INT64_MAX:
        raise TypeConversionError(raw, SettingKind.INTEGER.value)
    return value


def to_str(raw: object) -> str:
    """Return ``raw`` if it is a string, else raise `TypeConversionError`."""
    if isinstance(raw, str):
        return raw
    raise TypeConversionError(raw, SettingKind.STRING.value)


_COERCERS: Final = {
    SettingKind.BOOL: to_bool,
    SettingKind.INTEGER: to_int,
    SettingKind.STRING: to_str,
}


def _matches_kind(value: object, kind: SettingKind) -> bool:
    if kind is SettingKind.BOOL:
        return isinstance(value, bool)
    if kind is SettingKind.INTEGER:
        return isinstance(value, int) and not isinstance(value, bool)
    return isinstance(value, str)


@dataclass(frozen=True)
class Setting:
    """One policy key with its typed value.

    Attributes:
        key (str): Policy name, e.g. ``BraveRewardsDisabled``.
        value (bool | int | str): The value; its type matches ``kind``.
        kind (SettingKind): Declared value kind.

    Raises:
        InvalidKeyError: If ``key`` is not a valid policy name.
        TypeConversionError: If ``value`` does not match ``kind``.
    """

    key: str
    value: SettingValue
    kind: SettingKind

    def __post_init__(self) -> None:
        if not is_valid_key(self.key):
            raise InvalidKeyError(str(self.key))
        if not _matches_kind(self.value, self.kind):
            raise TypeConversionError(self.value, self.kind.value)

    @classmethod
    def from_raw(cls, key: object, raw: object, declared_type: object) -> Setting:
        """Construct and validate a setting from declarative data.

        Args:
            key (object): Raw key; must be a valid policy name.
            raw (object): Raw value as found in a document.
            declared_type (object): Type tag (``bool``, ``integer``, ``string`` or alias).

        Returns:
            Setting: The validated, coerced setting.

        Raises:
            InvalidKeyError: If the key is missing or malformed.
            UnknownTypeError: If the type tag is not recognized.
            TypeConversionError: If the value cannot be coerced to the declared kind.
        """
        if not is_valid_key(key):
            raise InvalidKeyError("" if key is None else str(key))
        kind = SettingKind.parse(declared_type)
        return cls(key=str(key), value=_COERCERS[kind](raw), kind=kind)

    @classmethod
    def from_row(cls, row: Mapping[str, object]) -> Setting:
        """Deserialize a ``{key, value, type}`` row (see `to_row`)."""
        return cls.from_raw(row.get(Toml.KEY_KEY), row.get(Toml.KEY_VALUE), row.get(Toml.KEY_TYPE))

    @classmethod
    def from_read_back(cls, key: str, raw: str) -> Setting:
        """Infer a setting from a raw value read back from the preference store.

        ``1/true/yes`` and ``0/false/no`` become booleans, integer tokens
        become integers and everything else is kept as a string.
        """
        text = raw.strip()
        lowered = text.lower()
        if lowered in _TRUE_STRINGS:
            return cls(key=key, value=True, kind=SettingKind.BOOL)
        if lowered in _FALSE_STRINGS - {""}:
            return cls(key=key, value=False, kind=SettingKind.BOOL)
        if _INT_TOKEN_RE.match(text):
            try:
                return cls(key=key, value=to_int(text), kind=SettingKind.INTEGER)
            except TypeConversionError:
                pass  # out of 64-bit range: keep the text
        return cls(key=key, value=text, kind=SettingKind.STRING)

    def to_row(self) -> dict[str, object]:
        """Serialize to a ``{key, value, type}`` row for TOML documents."""
        return {
            Toml.KEY_KEY: self.key,
            Toml.KEY_VALUE: self.value,
            Toml.KEY_TYPE: self.kind.value,
        }

    def as_triple(self) -> tuple[str, SettingValue, str]:
        """Return ``(key, value, type_tag)``."""
        return self.key, self.value, self.kind.value

    def normalized(self) -> str:
        """Return the comparison form used by diffs (bools as ``1``/``0``)."""
        if self.kind is SettingKind.BOOL:
            return "1" if self.value else "0"
        return str(self.value)

    def display(self) -> str:
        """Return the human-readable form used by dry runs."""
        if self.kind is SettingKind.BOOL:
            return "true" if self.value else "false"
        if self.kind is SettingKind.STRING:
            escaped = str(self.value).replace("\\", "\\\\").replace('"', '\\"')
            return f'"{escaped}"'
        return str(self.value)
