# topmark:header:start
#
#   project      : Cowardly
#   file         : paths.py
#   file_relpath : src/cowardly/config/paths.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Per-user file locations.

`UserPaths` is a plain value derived from a home directory, so tests and
alternative front ends can point every Cowardly document somewhere else by
constructing it with a different ``home``. Nothing here performs I/O except
`UserPaths.ensure_config_dir`.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from cowardly.config.logging import CowardlyLogger, get_logger
from cowardly.constants import APP_NAME, DESIRED_STATE_FILE_NAME

logger: CowardlyLogger = get_logger(__name__)


@dataclass(frozen=True)
class UserPaths:
    """Locations of Cowardly's per-user documents.

    Attributes:
        home (Path): The user's home directory all other paths derive from.
    """

    home: Path

    @classmethod
    def for_current_user(cls) -> UserPaths:
        """Return paths rooted at the invoking user's home directory."""
        return cls(home=Path.home())

    @property
    def config_dir(self) -> Path:
        """``~/.config/cowardly``."""
        return self.home / ".config" / APP_NAME

    @property
    def desired_state_file(self) -> Path:
        """``~/.config/cowardly/cowardly.toml``."""
        return self.config_dir / DESIRED_STATE_FILE_NAME

    @property
    def backup_dir(self) -> Path:
        """``~/Library/Application Support/cowardly/backups``."""
        return self.home / "Library" / "Application Support" / APP_NAME / "backups"

    @property
    def preferences_dir(self) -> Path:
        """``~/Library/Preferences``."""
        return self.home / "Library" / "Preferences"

    @property
    def launch_agents_dir(self) -> Path:
        """``~/Library/LaunchAgents``."""
        return self.home / "Library" / "LaunchAgents"

    def user_plist(self, domain: str) -> Path:
        """Return the user-layer preference document for a defaults domain."""
        return self.preferences_dir / f"{domain}.plist"

    def ensure_config_dir(self) -> Path:
        """Create the config directory if needed and return it."""
        self.config_dir.mkdir(parents=True, exist_ok=True)
        logger.debug("Config directory: %s", self.config_dir)
        return self.config_dir
