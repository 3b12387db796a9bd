# topmark:header:start
#
#   project      : Cowardly
#   file         : files.py
#   file_relpath : src/cowardly/presets/files.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Bundle files: arbitrary settings documents for import and export.

A bundle file holds only a settings list::

    [[settings]]
    key = "MetricsReportingEnabled"
    value = false
    type = "bool"
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from cowardly.config.io import load_toml_file, write_toml_file
from cowardly.config.keys import Toml
from cowardly.config.logging import CowardlyLogger, get_logger
from cowardly.core.errors import DocumentError, NotFoundError
from cowardly.presets.loader import bundle_from_rows

if TYPE_CHECKING:
    from pathlib import Path

    from cowardly.model.bundle import Bundle

logger: CowardlyLogger = get_logger(__name__)


def load_bundle_file(path: Path) -> Bundle:
    """Read a bundle file.

    Raises:
        NotFoundError: If ``path`` does not exist.
        DocumentError: If the file is unreadable, not TOML, or holds invalid settings.
    """
    try:
        data = load_toml_file(path)
    except FileNotFoundError as exc:
        raise NotFoundError(f"file not found: {path}") from exc
    bundle = bundle_from_rows(data.get(Toml.SECTION_SETTINGS), str(path))
    logger.debug("Loaded %d setting(s) from %s", len(bundle), path)
    return bundle


def write_bundle_file(path: Path, bundle: Bundle) -> None:
    """Write ``bundle`` to ``path`` in bundle-file format.

    Raises:
        DocumentError: If the file cannot be written.
    """
    try:
        write_toml_file(path, {Toml.SECTION_SETTINGS: bundle.to_rows()})
    except OSError as exc:
        raise DocumentError(f"{path}: cannot write: {exc}") from exc
