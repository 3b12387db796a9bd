# topmark:header:start
#
#   project      : Cowardly
#   file         : io.py
#   file_relpath : src/cowardly/config/io.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Load and render TOML documents.

Parsing is done with `tomlkit` and returned as plain `dict` structures;
rendering goes the other way. TOML has no `null` value, so `None` entries are
stripped during rendering.

Unlike a best-effort config loader, every reader here raises
`DocumentError` on failure: presets, bundle files and the desired-state
document are all inputs whose problems must reach the operator.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any, TypeAlias, cast

import tomlkit
from tomlkit.exceptions import ParseError as TomlkitParseError

from cowardly.config.logging import CowardlyLogger, get_logger
from cowardly.core.errors import DocumentError

if TYPE_CHECKING:
    from pathlib import Path

TomlTable: TypeAlias = "dict[str, Any]"

logger: CowardlyLogger = get_logger(__name__)


def parse_toml(text: str, source: str) -> TomlTable:
    """Parse TOML text into a plain dict.

    Args:
        text (str): TOML document text.
        source (str): Name used in error messages (usually a path).

    Returns:
        TomlTable: The unwrapped document.

    Raises:
        DocumentError: If the text is not valid TOML.
    """
    try:
        doc: tomlkit.TOMLDocument = tomlkit.parse(text)
    except TomlkitParseError as exc:
        raise DocumentError(f"{source}: invalid TOML: {exc}") from exc
    data_any: Any = doc.unwrap()
    return cast("TomlTable", data_any) if isinstance(data_any, dict) else {}


def load_toml_file(path: Path) -> TomlTable:
    """Read and parse a TOML file (UTF-8).

    Raises:
        FileNotFoundError: If ``path`` does not exist.
        DocumentError: If the file cannot be read or is not valid TOML.
    """
    try:
        text: str = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        raise
    except (OSError, UnicodeDecodeError) as exc:
        raise DocumentError(f"{path}: cannot read: {exc}") from exc
    logger.debug("Loaded TOML from %s", path)
    return parse_toml(text, str(path))


def _strip_none_for_toml(value: object) -> object:
    """Remove TOML-incompatible `None` from mappings/lists."""
    if isinstance(value, Mapping):
        out: dict[str, object] = {}
        m: Mapping[object, object] = cast("Mapping[object, object]", value)
        for k_any, v_any in m.items():
            if v_any is None:
                logger.debug("Ignoring `None` entry in Mapping for key %s", k_any)
                continue
            out[str(k_any)] = _strip_none_for_toml(v_any)
        return out

    if isinstance(value, list):
        seq: list[object] = cast("list[object]", value)
        return [_strip_none_for_toml(v) for v in seq if v is not None]

    return value


def to_toml(data: TomlTable) -> str:
    """Serialize a mapping to a TOML string.

    Lists of tables are rendered as arrays of tables (``[[settings]]``).
    """
    cleaned: Any = _strip_none_for_toml(data)
    return cast("str", cast("Any", tomlkit).dumps(cast("Mapping[str, Any]", cleaned)))


def write_toml_file(path: Path, data: TomlTable) -> None:
    """Render ``data`` and write it to ``path`` (mode 0600), replacing any content.

    Raises:
        OSError: If the file cannot be written.
    """
    text = to_toml(data)
    path.write_text(text, encoding="utf-8")
    path.chmod(0o600)
    logger.debug("Wrote TOML to %s (%d bytes)", path, len(text))
