# topmark:header:start
#
#   project      : Cowardly
#   file         : model.py
#   file_relpath : src/cowardly/presets/model.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Preset and supplement value types, and the catalog that holds them."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from cowardly.core.errors import PresetNotFoundError

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator

    from cowardly.model.bundle import Bundle


@dataclass(frozen=True)
class Preset:
    """A named, described bundle shipped with Cowardly.

    Attributes:
        id (str): Stable identifier used on the command line and in saved state.
        name (str): Display name.
        description (str): One-line description.
        settings (Bundle): The settings the preset applies.
    """

    id: str
    name: str
    description: str
    settings: Bundle


@dataclass(frozen=True)
class Supplement:
    """A bundle meant to be merged on top of a base bundle.

    Attributes:
        name (str): Well-known name (e.g. ``privacy_guides``).
        description (str): One-line description.
        url (str): Where the recommendations come from.
        settings (Bundle): The overlay settings.
    """

    name: str
    description: str
    url: str
    settings: Bundle


class PresetCatalog:
    """Ordered, id-unique collection of presets.

    Order is the definition source's order (file name sort for the built-in
    presets) and is what the operator sees.
    """

    __slots__ = ("_by_id", "_presets")

    def __init__(self, presets: Iterable[Preset] = ()) -> None:
        self._presets: tuple[Preset, ...] = tuple(presets)
        self._by_id: dict[str, Preset] = {p.id: p for p in self._presets}

    def find_by_id(self, preset_id: str) -> Preset | None:
        """Return the preset with ``preset_id`` or None."""
        return self._by_id.get(preset_id)

    def require(self, preset_id: str) -> Preset:
        """Return the preset with ``preset_id``.

        Raises:
            PresetNotFoundError: If no such preset exists.
        """
        preset = self._by_id.get(preset_id)
        if preset is None:
            raise PresetNotFoundError(preset_id)
        return preset

    def has_id(self, preset_id: str) -> bool:
        """True if the catalog contains ``preset_id``."""
        return preset_id in self._by_id

    def ids(self) -> list[str]:
        """Return preset ids in catalog order."""
        return [p.id for p in self._presets]

    def __iter__(self) -> Iterator[Preset]:
        return iter(self._presets)

    def __len__(self) -> int:
        return len(self._presets)
