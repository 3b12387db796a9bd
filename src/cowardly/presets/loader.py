# topmark:header:start
#
#   project      : Cowardly
#   file         : loader.py
#   file_relpath : src/cowardly/presets/loader.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Load preset and supplement definitions.

Each preset is one TOML document::

    id = "quick"
    name = "Quick Debloat"
    description = "..."

    [[settings]]
    key = "BraveRewardsDisabled"
    value = true
    type = "bool"

The built-in definitions ship as package data under ``cowardly/presets/data``
and are ordered by file name (``01-quick.toml``, ``02-max-privacy.toml``, ...).
Loading validates every document and reports *all* problems at once through
`AggregateLoadError`.

The built-in catalog is read once per process and cached; there is no
invalidation because package data does not change while running. Callers
that must fail loudly at startup use `load_all`; callers that can live
without presets use `load_all_or_empty`.
"""

from __future__ import annotations

import functools
from importlib.resources import files
from typing import TYPE_CHECKING, Any, cast

from cowardly.config.io import parse_toml
from cowardly.config.keys import Toml
from cowardly.config.logging import CowardlyLogger, get_logger
from cowardly.constants import (
    DEFINITION_SUFFIX,
    PRESETS_DATA_DIR,
    PRESETS_PACKAGE,
    PRIVACY_GUIDES_SUPPLEMENT,
    SUPPLEMENTS_DATA_DIR,
)
from cowardly.core.errors import AggregateLoadError, DocumentError, ValidationError
from cowardly.model.bundle import Bundle
from cowardly.model.setting import Setting
from cowardly.presets.model import Preset, PresetCatalog, Supplement

if TYPE_CHECKING:
    import sys

    if sys.version_info < (3, 14):
        # Python <=3.13
        from importlib.abc import Traversable
    else:
        # Python 3.14+: Traversable moved here
        from importlib.resources.abc import Traversable

logger: CowardlyLogger = get_logger(__name__)


def collect_bundle(rows: object, source: str, problems: list[str]) -> Bundle | None:
    """Validate setting rows, appending one message per bad row to ``problems``.

    Args:
        rows (object): The ``settings`` value of a document (a list of tables).
        source (str): Name used in messages.
        problems (list[str]): Accumulator for problem messages.

    Returns:
        Bundle | None: The bundle, or None if any row was invalid.
    """
    if rows is None:
        return Bundle()
    if not isinstance(rows, list):
        problems.append(f"{source}: '{Toml.SECTION_SETTINGS}' must be an array of tables")
        return None
    settings: list[Setting] = []
    seen: set[str] = set()
    ok = True
    for i, row in enumerate(cast("list[Any]", rows)):
        if not isinstance(row, dict):
            problems.append(f"{source}: setting {i}: not a table")
            ok = False
            continue
        key: object = cast("dict[str, Any]", row).get(Toml.KEY_KEY)
        try:
            setting = Setting.from_row(cast("dict[str, Any]", row))
        except ValidationError as exc:
            problems.append(f"{source}: setting {i} {key!r}: {exc}")
            ok = False
            continue
        if setting.key in seen:
            problems.append(f"{source}: setting {i} {key!r}: duplicate key")
            ok = False
            continue
        seen.add(setting.key)
        settings.append(setting)
    return Bundle(settings) if ok else None


def bundle_from_rows(rows: object, source: str) -> Bundle:
    """Validate setting rows into a bundle.

    Raises:
        DocumentError: Listing every invalid row.
    """
    problems: list[str] = []
    bundle = collect_bundle(rows, source, problems)
    if bundle is None:
        raise DocumentError("; ".join(problems))
    return bundle


def _definition_files(directory: Traversable) -> list[Traversable]:
    entries = [
        e for e in directory.iterdir() if e.is_file() and e.name.endswith(DEFINITION_SUFFIX)
    ]
    return sorted(entries, key=lambda e: e.name)


def _text_field(data: dict[str, Any], key: str, source: str, problems: list[str]) -> str:
    value: Any = data.get(key, "")
    if not isinstance(value, str):
        problems.append(f"{source}: '{key}' must be a string")
        return ""
    return value


def load_from_directory(directory: Traversable) -> PresetCatalog:
    """Load every ``*.toml`` preset definition in ``directory``, in file name order.

    Args:
        directory (Traversable): A package resource directory or a `pathlib.Path`.

    Returns:
        PresetCatalog: The validated catalog (possibly empty).

    Raises:
        AggregateLoadError: Summarizing every malformed definition (unreadable
            file, invalid TOML, missing or duplicate id, bad key, unknown type,
            unconvertible value, duplicate key).
    """
    problems: list[str] = []
    try:
        entries = _definition_files(directory)
    except OSError as exc:
        raise AggregateLoadError([f"read dir {directory}: {exc}"]) from exc

    presets: list[Preset] = []
    seen_ids: dict[str, str] = {}
    for entry in entries:
        source = entry.name
        try:
            data = parse_toml(entry.read_text(encoding="utf-8"), source)
        except (OSError, UnicodeDecodeError) as exc:
            problems.append(f"{source}: cannot read: {exc}")
            continue
        except DocumentError as exc:
            problems.append(str(exc))
            continue

        preset_id = _text_field(data, Toml.KEY_ID, source, problems)
        name = _text_field(data, Toml.KEY_NAME, source, problems)
        description = _text_field(data, Toml.KEY_DESCRIPTION, source, problems)
        if not preset_id:
            problems.append(f"{source}: missing '{Toml.KEY_ID}'")
        elif preset_id in seen_ids:
            problems.append(f"{source}: duplicate id {preset_id!r} (also in {seen_ids[preset_id]})")
        else:
            seen_ids[preset_id] = source

        bundle = collect_bundle(data.get(Toml.SECTION_SETTINGS), source, problems)
        if bundle is None or not preset_id or seen_ids.get(preset_id) != source:
            continue
        presets.append(
            Preset(id=preset_id, name=name or preset_id, description=description, settings=bundle)
        )
        logger.debug("Loaded preset %r (%d settings) from %s", preset_id, len(bundle), source)

    if problems:
        raise AggregateLoadError(problems)
    return PresetCatalog(presets)


def load_supplement(resource: Traversable, name: str) -> Supplement:
    """Load one supplement definition.

    Raises:
        AggregateLoadError: If the document is unreadable or malformed.
    """
    problems: list[str] = []
    source = resource.name
    try:
        data = parse_toml(resource.read_text(encoding="utf-8"), source)
    except (OSError, UnicodeDecodeError) as exc:
        raise AggregateLoadError([f"{source}: cannot read: {exc}"]) from exc
    except DocumentError as exc:
        raise AggregateLoadError([str(exc)]) from exc
    description = _text_field(data, Toml.KEY_DESCRIPTION, source, problems)
    url = _text_field(data, Toml.KEY_URL, source, problems)
    bundle = collect_bundle(data.get(Toml.SECTION_SETTINGS), source, problems)
    if problems or bundle is None:
        raise AggregateLoadError(problems)
    return Supplement(name=name, description=description, url=url, settings=bundle)


def _builtin_dir(sub: str) -> Traversable:
    return files(PRESETS_PACKAGE).joinpath(sub)


@functools.cache
def load_all() -> PresetCatalog:
    """Return the built-in preset catalog (loaded once, then cached).

    Raises:
        AggregateLoadError: If any built-in definition is malformed.
    """
    catalog = load_from_directory(_builtin_dir(PRESETS_DATA_DIR))
    logger.info("Loaded %d built-in preset(s): %s", len(catalog), ", ".join(catalog.ids()))
    return catalog


def load_all_or_empty() -> PresetCatalog:
    """Return the built-in catalog, or an empty one (logged) if it fails to load."""
    try:
        return load_all()
    except AggregateLoadError as exc:
        logger.error("Presets failed to load: %s", exc)
        return PresetCatalog()


@functools.cache
def load_privacy_supplement() -> Supplement:
    """Return the built-in Privacy Guides supplement (loaded once, then cached).

    Raises:
        AggregateLoadError: If the definition is malformed.
    """
    resource = _builtin_dir(SUPPLEMENTS_DATA_DIR).joinpath(
        f"{PRIVACY_GUIDES_SUPPLEMENT.replace('_', '-')}{DEFINITION_SUFFIX}"
    )
    return load_supplement(resource, PRIVACY_GUIDES_SUPPLEMENT)
