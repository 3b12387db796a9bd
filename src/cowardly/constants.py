# topmark:header:start
#
#   project      : Cowardly
#   file         : constants.py
#   file_relpath : src/cowardly/constants.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Cowardly Constants."""

from __future__ import annotations

from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as get_version
from typing import Final

try:
    COWARDLY_VERSION: str = get_version("cowardly")
except PackageNotFoundError:  # running from a source checkout
    COWARDLY_VERSION = "0.0.0.dev0"

APP_NAME: Final[str] = "cowardly"

# Package resources holding the declarative preset and supplement documents.
PRESETS_PACKAGE: Final[str] = "cowardly.presets"
PRESETS_DATA_DIR: Final[str] = "data"
SUPPLEMENTS_DATA_DIR: Final[str] = "supplements"
DEFINITION_SUFFIX: Final[str] = ".toml"

# Desired-state document (under the per-user config directory).
DESIRED_STATE_FILE_NAME: Final[str] = "cowardly.toml"

# Backups are named `<timestamp><BACKUP_SUFFIX>`; the timestamp sorts lexicographically.
BACKUP_TIMESTAMP_FORMAT: Final[str] = "%Y-%m-%dT%H-%M-%S"
BACKUP_SUFFIX: Final[str] = "-user.plist"

# Preset ids with a special meaning.
CUSTOM_PRESET_ID: Final[str] = "custom"
PRIVACY_GUIDES_ID: Final[str] = "privacy-guides"
PRIVACY_GUIDES_SUPPLEMENT: Final[str] = "privacy_guides"
PRIVACY_GUIDES_BASE_PRESET_ID: Final[str] = "quick"
PRIVACY_GUIDES_URL: Final[str] = "https://www.privacyguides.org/en/desktop-browsers/#brave"

# Subprocess timeouts (seconds). Elevation may wait on a human at a password prompt.
DEFAULTS_TIMEOUT: Final[float] = 30.0
ELEVATION_TIMEOUT: Final[float] = 90.0

LOGIN_HOOK_LABEL: Final[str] = "com.cowardly.reapply"
LOGIN_HOOK_LOG_NAME: Final[str] = "reapply.log"

VALUE_NOT_SET: Final[str] = "(not set)"
