# topmark:header:start
#
#   project      : Cowardly
#   file         : engine.py
#   file_relpath : src/cowardly/compose/engine.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Merge bundles and compare them with the preference store.

Merge order is a contract, not an implementation detail: the result lists
every base key in base order (taking the overlay's setting where both
define a key), then the overlay-only keys in overlay order. Dry runs, diffs
and the desired-state document all show settings in that order.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol

from yachalk import chalk

from cowardly.config.logging import CowardlyLogger, get_logger
from cowardly.constants import CUSTOM_PRESET_ID, VALUE_NOT_SET
from cowardly.core.errors import NoCustomBaseError
from cowardly.model.bundle import Bundle
from cowardly.presets.loader import load_privacy_supplement

if TYPE_CHECKING:
    from collections.abc import Iterable

    from cowardly.presets.model import PresetCatalog, Supplement

logger: CowardlyLogger = get_logger(__name__)


class EffectiveReader(Protocol):
    """Anything that can report the effective value of a key."""

    def read_effective(self, key: str) -> str | None:
        """Return the effective raw value of ``key`` or None if unset."""
        ...


@dataclass(frozen=True)
class DiffEntry:
    """One key whose effective value differs from the bundle.

    Attributes:
        key (str): Policy name.
        current (str): Normalized current value, or ``(not set)``.
        new (str): Normalized value the bundle would write.
    """

    key: str
    current: str
    new: str


def merge(base: Bundle, overlay: Bundle) -> Bundle:
    """Return ``base`` with ``overlay`` layered on top.

    Overlapping keys keep their position in ``base`` and take the overlay's
    setting; overlay-only keys follow in overlay order.
    """
    merged = [overlay.get(s.key) or s for s in base]
    merged.extend(s for s in overlay if s.key not in base)
    return Bundle(merged)


def diff(bundle: Bundle, store: EffectiveReader) -> list[DiffEntry]:
    """Return the settings of ``bundle`` whose effective value would change.

    Values compare in normalized form (bools as ``1``/``0``), in bundle order.
    """
    entries: list[DiffEntry] = []
    for setting in bundle:
        current = store.read_effective(setting.key)
        new = setting.normalized()
        if current is not None and current.strip() == new:
            continue
        entries.append(
            DiffEntry(
                key=setting.key,
                current=VALUE_NOT_SET if current is None else current.strip(),
                new=new,
            )
        )
    logger.debug("Diff: %d of %d setting(s) differ", len(entries), len(bundle))
    return entries


def compose_privacy_layer(
    base_preset_id: str,
    catalog: PresetCatalog,
    custom_fallback: Bundle,
    supplement: Supplement | None = None,
) -> Bundle:
    """Merge the privacy supplement on top of a base bundle.

    Args:
        base_preset_id (str): A catalog preset id, or ``custom`` to use ``custom_fallback``.
        catalog (PresetCatalog): Presets to resolve the base from.
        custom_fallback (Bundle): The saved custom bundle.
        supplement (Supplement | None): Overlay; defaults to the built-in privacy supplement.

    Returns:
        Bundle: ``merge(base, supplement.settings)``.

    Raises:
        NoCustomBaseError: If the base is ``custom`` and ``custom_fallback`` is empty.
        PresetNotFoundError: If the base id is not in the catalog.
    """
    if base_preset_id == CUSTOM_PRESET_ID:
        if not custom_fallback:
            raise NoCustomBaseError()
        base = custom_fallback
    else:
        base = catalog.require(base_preset_id).settings
    overlay = supplement if supplement is not None else load_privacy_supplement()
    return merge(base, overlay.settings)


def describe_dry_run(bundle: Bundle, *, title: str = "") -> list[str]:
    """Return the lines describing what applying ``bundle`` would write."""
    header = f"Dry run: {title}" if title else "Dry run"
    lines = [f"{header} ({len(bundle)} setting(s), nothing written)"]
    lines.extend(f"  {s.key} = {s.display()}  ({s.kind.value})" for s in bundle)
    return lines


def render_diff(entries: Iterable[DiffEntry], *, color: bool = False) -> list[str]:
    """Return ``  key: current -> new`` lines."""
    lines: list[str] = []
    for entry in entries:
        current = entry.current
        new = entry.new
        if color:
            current = chalk.red(current)
            new = chalk.green(new)
        lines.append(f"  {entry.key}: {current} -> {new}")
    return lines
