# topmark:header:start
#
#   project      : Cowardly
#   file         : errors.py
#   file_relpath : src/cowardly/core/errors.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Domain exceptions for Cowardly.

The hierarchy mirrors how the operator is expected to react:

- `ValidationError`: the input (a key, a value, a document) is wrong. Nothing
  was written. Fix the input and try again.
- `NotFoundError`: a preset, backup or document that was asked for does not
  exist.
- `StoreError`: talking to the preference store failed. A failed multi-key
  write to the user layer may have left earlier keys written; there is no
  rollback across keys.

`ElevationError` is special: the apply path catches it and falls back to the
user layer, so it normally never reaches the operator.

These exceptions know nothing about Click; the CLI maps them onto exit codes
in `cowardly.cli.errors`.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Sequence


class CowardlyError(Exception):
    """Base class for all Cowardly domain errors."""


# --- Validation -------------------------------------------------------------


class ValidationError(CowardlyError):
    """Input failed validation; nothing was applied."""


class InvalidKeyError(ValidationError):
    """A setting key does not match the policy naming convention."""

    def __init__(self, key: str) -> None:
        super().__init__(f"key {key!r} must match [A-Za-z][A-Za-z0-9]* (policy name)")
        self.key = key


class UnknownTypeError(ValidationError):
    """A declared type tag is not one of bool, integer or string."""

    def __init__(self, type_tag: object) -> None:
        super().__init__(f"unknown type {type_tag!r}")
        self.type_tag = type_tag


class TypeConversionError(ValidationError):
    """A raw value cannot be coerced to its declared kind."""

    def __init__(self, value: object, kind: str) -> None:
        super().__init__(f"cannot convert {type(value).__name__} {value!r} to {kind}")
        self.value = value
        self.kind = kind


class DuplicateKeyError(ValidationError):
    """A bundle declares the same key more than once."""

    def __init__(self, key: str) -> None:
        super().__init__(f"duplicate key {key!r}")
        self.key = key


class DocumentError(ValidationError):
    """A declarative document is unreadable or has the wrong shape."""


class AggregateLoadError(ValidationError):
    """One or more preset definitions failed to load.

    Attributes:
        problems (tuple[str, ...]): One message per malformed definition item.
    """

    def __init__(self, problems: Sequence[str]) -> None:
        self.problems: tuple[str, ...] = tuple(problems)
        summary = "; ".join(self.problems)
        super().__init__(f"{len(self.problems)} preset definition problem(s): {summary}")


# --- Not found --------------------------------------------------------------


class NotFoundError(CowardlyError):
    """Something that was asked for does not exist."""


class PresetNotFoundError(NotFoundError):
    """No preset with the requested id exists in the catalog."""

    def __init__(self, preset_id: str) -> None:
        super().__init__(f"preset {preset_id!r} not found")
        self.preset_id = preset_id


class NoCustomBaseError(NotFoundError):
    """The custom base was requested but no custom settings have been saved."""

    def __init__(self) -> None:
        super().__init__("no custom settings saved to use as base")


class BackupNotFoundError(NotFoundError):
    """The requested backup file does not exist."""


class SourceNotFoundError(NotFoundError):
    """The user preference document does not exist yet, so there is nothing to back up."""


# --- Store ------------------------------------------------------------------


class StoreError(CowardlyError):
    """A preference store primitive failed."""


class StoreWriteError(StoreError):
    """Writing, deleting or resetting a key failed for reasons other than elevation."""


class ElevationError(StoreError):
    """The privileged operation was declined by the operator or failed.

    Declining the prompt and a broken privilege system are deliberately not
    told apart: both lead to the same fallback.
    """


class UnsupportedPlatformError(StoreError):
    """The preference store is only available on macOS."""
