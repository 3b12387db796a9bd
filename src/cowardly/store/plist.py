# topmark:header:start
#
#   project      : Cowardly
#   file         : plist.py
#   file_relpath : src/cowardly/store/plist.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Property list helpers for the managed layer and app metadata.

Values read from a property list are normalized to the text ``defaults
read`` prints, so managed-layer and user-layer reads compare equal:
booleans become ``1``/``0``, numbers their decimal form.
"""

from __future__ import annotations

import plistlib
from typing import TYPE_CHECKING, Any

from cowardly.config.logging import CowardlyLogger, get_logger

if TYPE_CHECKING:
    from pathlib import Path

    from cowardly.model.bundle import Bundle

logger: CowardlyLogger = get_logger(__name__)


def render_plist(bundle: Bundle) -> bytes:
    """Render a bundle as one XML property list document, in bundle order."""
    payload: dict[str, Any] = {s.key: s.value for s in bundle}
    return plistlib.dumps(payload, fmt=plistlib.FMT_XML, sort_keys=False)


def read_plist(path: Path) -> dict[str, Any] | None:
    """Load a property list dictionary, or None if missing or unreadable."""
    try:
        with path.open("rb") as fh:
            data: Any = plistlib.load(fh)
    except FileNotFoundError:
        return None
    except (OSError, plistlib.InvalidFileException, ValueError) as exc:
        logger.warning("Cannot read property list %s: %s", path, exc)
        return None
    if not isinstance(data, dict):
        logger.warning("Property list %s is not a dictionary", path)
        return None
    return data


def display_value(value: object) -> str:
    """Return the ``defaults read`` text form of a property list value."""
    if isinstance(value, bool):
        return "1" if value else "0"
    return str(value)
