# topmark:header:start
#
#   project      : Cowardly
#   file         : target.py
#   file_relpath : src/cowardly/store/target.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Brave release channel targets.

The channel (stable or beta) is an explicit value handed to every
`cowardly.store.preferences.PreferenceStore`, never a process-wide toggle, so
one process can drive both channels side by side.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Final

MANAGED_PREFERENCES_DIR: Final[Path] = Path("/Library/Managed Preferences")
APPLICATIONS_DIR: Final[Path] = Path("/Applications")


class Variant(str, Enum):
    """Brave release channel."""

    STABLE = "stable"
    BETA = "beta"


@dataclass(frozen=True)
class Target:
    """Everything that identifies one Brave installation's preference domain.

    Attributes:
        variant (Variant): Release channel.
        domain (str): macOS defaults domain of the user layer.
        managed_plist (Path): Managed (enforced) policy document.
        app_path (Path): Application bundle.
        process_name (str): Process name matched by the running probe.
    """

    variant: Variant
    domain: str
    managed_plist: Path
    app_path: Path
    process_name: str

    @classmethod
    def for_variant(cls, variant: Variant = Variant.STABLE) -> Target:
        """Return the standard locations for a release channel."""
        if variant is Variant.BETA:
            domain = "com.brave.Browser.beta"
            app_name = "Brave Browser Beta"
        else:
            domain = "com.brave.Browser"
            app_name = "Brave Browser"
        return cls(
            variant=variant,
            domain=domain,
            managed_plist=MANAGED_PREFERENCES_DIR / f"{domain}.plist",
            app_path=APPLICATIONS_DIR / f"{app_name}.app",
            process_name=app_name,
        )

    @property
    def display_name(self) -> str:
        """Human-readable application name."""
        return self.process_name

    @property
    def info_plist(self) -> Path:
        """The application bundle's ``Info.plist``."""
        return self.app_path / "Contents" / "Info.plist"
