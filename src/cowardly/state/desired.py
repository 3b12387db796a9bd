# topmark:header:start
#
#   project      : Cowardly
#   file         : desired.py
#   file_relpath : src/cowardly/state/desired.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Desired-State Store: the last bundle the operator asked for, with provenance.

The document lives at ``~/.config/cowardly/cowardly.toml`` and is replaced
wholesale on every write. Two on-disk schemas are understood.

Current schema (always written)::

    # PresetApplied / CustomApplied (id "custom")
    [preset.quick]
    [[preset.quick.settings]]
    key = "BraveRewardsDisabled"
    value = true
    type = "bool"

    # PrivacyGuidesApplied: a preset block plus the supplement block
    [supplement.privacy_guides]
    [[supplement.privacy_guides.settings]]
    ...

    # FileApplied
    apply_file = "/path/to/bundle.toml"
    [[settings]]
    ...

Legacy schema (read only)::

    preset = "privacy-guides"
    base_preset = "quick"
    [[supplement]]
    key = "..."
    [[settings]]
    ...

Detection is by shape: a string ``preset`` or a ``supplement`` array marks the
legacy schema; anything else is read as the current schema. A document whose
shape matches neither is a `DocumentError`. A document that matches but holds
no settings reads as absent.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, TypeAlias, cast

from cowardly.compose.engine import merge
from cowardly.config.io import load_toml_file, write_toml_file
from cowardly.config.keys import Toml
from cowardly.config.logging import CowardlyLogger, get_logger
from cowardly.constants import (
    CUSTOM_PRESET_ID,
    PRIVACY_GUIDES_BASE_PRESET_ID,
    PRIVACY_GUIDES_ID,
)
from cowardly.core.errors import DocumentError, StoreWriteError
from cowardly.model.bundle import Bundle
from cowardly.presets.loader import bundle_from_rows, load_all_or_empty, load_privacy_supplement

if TYPE_CHECKING:
    from collections.abc import Callable
    from pathlib import Path

    from cowardly.presets.model import PresetCatalog, Supplement

logger: CowardlyLogger = get_logger(__name__)


@dataclass(frozen=True)
class PresetApplied:
    """A catalog preset was applied."""

    preset_id: str


@dataclass(frozen=True)
class PrivacyGuidesApplied:
    """The privacy supplement was applied on top of a base (a preset id or ``custom``)."""

    base_preset_id: str


@dataclass(frozen=True)
class FileApplied:
    """A bundle file was applied."""

    path: str


@dataclass(frozen=True)
class CustomApplied:
    """A hand-picked set of custom settings was applied."""


Provenance: TypeAlias = "PresetApplied | PrivacyGuidesApplied | FileApplied | CustomApplied"


def describe_provenance(provenance: Provenance) -> str:
    """Return a short human-readable label for ``provenance``."""
    if isinstance(provenance, PresetApplied):
        return f"preset {provenance.preset_id}"
    if isinstance(provenance, PrivacyGuidesApplied):
        return f"{PRIVACY_GUIDES_ID} (base: {provenance.base_preset_id})"
    if isinstance(provenance, FileApplied):
        return f"file {provenance.path}"
    return CUSTOM_PRESET_ID


@dataclass(frozen=True)
class DesiredState:
    """What the operator last asked to be true.

    Attributes:
        provenance (Provenance): Which apply path produced the settings.
        settings (Bundle): The fully resolved bundle that was applied.
    """

    provenance: Provenance
    settings: Bundle

    def custom_fallback(self) -> Bundle:
        """Return the saved bundle if it can serve as the ``custom`` base, else empty."""
        if isinstance(self.provenance, CustomApplied):
            return self.settings
        if (
            isinstance(self.provenance, PrivacyGuidesApplied)
            and self.provenance.base_preset_id == CUSTOM_PRESET_ID
        ):
            return self.settings
        return Bundle()


def _table(value: object, what: str, source: str) -> dict[str, Any]:
    if not isinstance(value, dict):
        raise DocumentError(f"{source}: '{what}' must be a table")
    return cast("dict[str, Any]", value)


class DesiredStateStore:
    """Reads and writes the desired-state document.

    Args:
        path (Path): Document location.
        catalog (Callable[[], PresetCatalog]): Returns the catalog used to
            re-resolve legacy base presets and to validate saved ids.
        supplement (Callable[[], Supplement]): Returns the privacy supplement
            written next to a privacy-guides base.
    """

    def __init__(
        self,
        path: Path,
        *,
        catalog: Callable[[], PresetCatalog] = load_all_or_empty,
        supplement: Callable[[], Supplement] = load_privacy_supplement,
    ) -> None:
        self.path = path
        self._catalog = catalog
        self._supplement = supplement

    # --- Write ----------------------------------------------------------------

    def to_document(
        self,
        provenance: Provenance,
        bundle: Bundle,
        *,
        supplement: Supplement | None = None,
    ) -> dict[str, Any]:
        """Return the current-schema document for ``provenance`` and ``bundle``."""
        rows = bundle.to_rows()
        if isinstance(provenance, FileApplied):
            return {Toml.KEY_APPLY_FILE: provenance.path, Toml.SECTION_SETTINGS: rows}
        if isinstance(provenance, PresetApplied):
            preset_id = provenance.preset_id
        elif isinstance(provenance, PrivacyGuidesApplied):
            preset_id = provenance.base_preset_id
        else:
            preset_id = CUSTOM_PRESET_ID
        doc: dict[str, Any] = {
            Toml.SECTION_PRESET: {preset_id: {Toml.SECTION_SETTINGS: rows}},
        }
        if isinstance(provenance, PrivacyGuidesApplied):
            overlay = supplement if supplement is not None else self._supplement()
            doc[Toml.SECTION_SUPPLEMENT] = {
                Toml.SUPPLEMENT_NAMES[0]: {Toml.SECTION_SETTINGS: overlay.settings.to_rows()}
            }
        return doc

    def write(
        self,
        provenance: Provenance,
        bundle: Bundle,
        *,
        supplement: Supplement | None = None,
    ) -> None:
        """Replace the document with ``bundle`` and its provenance.

        For `PrivacyGuidesApplied`, ``bundle`` is the merged result and is
        stored as the base block; the supplement block is merged on top again
        on read, which leaves the merged bundle unchanged.

        Raises:
            StoreWriteError: If the document cannot be written.
        """
        doc = self.to_document(provenance, bundle, supplement=supplement)
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            write_toml_file(self.path, doc)
        except OSError as exc:
            raise StoreWriteError(f"save desired state to {self.path}: {exc}") from exc
        logger.info(
            "Saved desired state (%s, %d settings) to %s",
            describe_provenance(provenance),
            len(bundle),
            self.path,
        )

    # --- Read -----------------------------------------------------------------

    def read(self) -> DesiredState | None:
        """Return the saved desired state, or None if absent or empty.

        Raises:
            DocumentError: If the document is unreadable, not TOML, or matches
                neither schema, or holds invalid settings.
            PresetNotFoundError: If a legacy privacy-guides document names a
                base preset the catalog does not have.
        """
        try:
            data = load_toml_file(self.path)
        except FileNotFoundError:
            logger.debug("No desired state at %s", self.path)
            return None
        if not data:
            return None
        state = self.parse(data, str(self.path))
        if state is None or not state.settings:
            return None
        return state

    def parse(self, data: dict[str, Any], source: str) -> DesiredState | None:
        """Parse a desired-state document, trying the current schema first."""
        preset: object = data.get(Toml.SECTION_PRESET)
        supplement: object = data.get(Toml.SECTION_SUPPLEMENT)
        if isinstance(preset, str) or isinstance(supplement, list):
            return self._parse_legacy(data, source)
        has_current_shape = (
            preset is not None
            or Toml.KEY_APPLY_FILE in data
            or Toml.SECTION_SETTINGS in data
        )
        if not has_current_shape:
            raise DocumentError(
                f"{source}: not a desired-state document (keys: {', '.join(sorted(data))})"
            )
        return self._parse_current(data, source)

    def _parse_current(self, data: dict[str, Any], source: str) -> DesiredState | None:
        preset: object = data.get(Toml.SECTION_PRESET)
        if preset is not None:
            for preset_id, block in _table(preset, Toml.SECTION_PRESET, source).items():
                rows = _table(block, f"preset.{preset_id}", source).get(Toml.SECTION_SETTINGS)
                base = bundle_from_rows(rows, f"{source}: preset.{preset_id}")
                if not base:
                    continue
                overlay = self._saved_supplement(data, source)
                if overlay:
                    return DesiredState(PrivacyGuidesApplied(preset_id), merge(base, overlay))
                if preset_id == CUSTOM_PRESET_ID:
                    return DesiredState(CustomApplied(), base)
                return DesiredState(PresetApplied(preset_id), base)

        settings = bundle_from_rows(data.get(Toml.SECTION_SETTINGS), source)
        apply_file: object = data.get(Toml.KEY_APPLY_FILE)
        if apply_file is not None and not isinstance(apply_file, str):
            raise DocumentError(f"{source}: '{Toml.KEY_APPLY_FILE}' must be a string")
        if apply_file and settings:
            return DesiredState(FileApplied(apply_file), settings)
        if settings:
            # older custom format: bare settings list
            return DesiredState(CustomApplied(), settings)
        return None

    def _saved_supplement(self, data: dict[str, Any], source: str) -> Bundle:
        supplement: object = data.get(Toml.SECTION_SUPPLEMENT)
        if supplement is None:
            return Bundle()
        blocks = _table(supplement, Toml.SECTION_SUPPLEMENT, source)
        for name in Toml.SUPPLEMENT_NAMES:
            if name not in blocks:
                continue
            rows = _table(blocks[name], f"supplement.{name}", source).get(Toml.SECTION_SETTINGS)
            overlay = bundle_from_rows(rows, f"{source}: supplement.{name}")
            if overlay:
                return overlay
        return Bundle()

    def _parse_legacy(self, data: dict[str, Any], source: str) -> DesiredState | None:
        preset: object = data.get(Toml.SECTION_PRESET, "")
        base_preset: object = data.get(Toml.KEY_BASE_PRESET, "")
        apply_file: object = data.get(Toml.KEY_APPLY_FILE, "")
        for name, value in (
            (Toml.SECTION_PRESET, preset),
            (Toml.KEY_BASE_PRESET, base_preset),
            (Toml.KEY_APPLY_FILE, apply_file),
        ):
            if not isinstance(value, str):
                raise DocumentError(f"{source}: legacy '{name}' must be a string")
        preset_id = cast("str", preset)
        base_id = cast("str", base_preset)
        supplement = bundle_from_rows(data.get(Toml.SECTION_SUPPLEMENT), f"{source}: supplement")
        settings = bundle_from_rows(data.get(Toml.SECTION_SETTINGS), source)
        logger.debug("Reading legacy desired-state document %s", source)

        if preset_id == PRIVACY_GUIDES_ID:
            if base_id and supplement:
                base = self._catalog().require(base_id).settings
                return DesiredState(PrivacyGuidesApplied(base_id), merge(base, supplement))
            if settings:
                return DesiredState(
                    PrivacyGuidesApplied(base_id or PRIVACY_GUIDES_BASE_PRESET_ID), settings
                )
            return None
        if not settings:
            return None
        if apply_file:
            return DesiredState(FileApplied(cast("str", apply_file)), settings)
        if preset_id and preset_id != CUSTOM_PRESET_ID:
            return DesiredState(PresetApplied(preset_id), settings)
        return DesiredState(CustomApplied(), settings)

    # --- Queries --------------------------------------------------------------

    def resolve_supplement_base_from_saved(self) -> str | None:
        """Return the base to reuse for the privacy supplement, or None.

        - privacy-guides with a base that is ``custom`` or a known preset: that base;
        - custom with saved settings: ``custom``;
        - a known preset: its id;
        - anything else (including a file apply): None.
        """
        state = self.read()
        if state is None:
            return None
        provenance = state.provenance
        catalog = self._catalog()
        if isinstance(provenance, PrivacyGuidesApplied):
            base = provenance.base_preset_id
            if base == CUSTOM_PRESET_ID or catalog.has_id(base):
                return base
            return None
        if isinstance(provenance, CustomApplied):
            return CUSTOM_PRESET_ID if state.settings else None
        if isinstance(provenance, PresetApplied) and catalog.has_id(provenance.preset_id):
            return provenance.preset_id
        return None
