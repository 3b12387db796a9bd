# topmark:header:start
#
#   project      : Cowardly
#   file         : preferences.py
#   file_relpath : src/cowardly/store/preferences.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""The Preference Store Adapter.

A `PreferenceStore` exposes the two preference layers of one Brave target:

- the **user layer**, Brave's ordinary preferences written with ``defaults``;
- the **managed layer**, a root-owned policy document Brave treats as
  mandatory. Writing or removing it needs administrator rights.

For any key the *effective* value is the managed value when the managed
document sets that key, else the user value, else unset. Every "current
value" read (diffs, export, the settings view) goes through
`PreferenceStore.read_effective`.
"""

from __future__ import annotations

import tempfile
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

from cowardly.config.logging import CowardlyLogger, get_logger
from cowardly.constants import DEFAULTS_TIMEOUT
from cowardly.core.errors import ElevationError, StoreWriteError
from cowardly.model.setting import Setting
from cowardly.store.defaults import DefaultsBackend
from cowardly.store.elevation import OsascriptElevator
from cowardly.store.plist import display_value, read_plist, render_plist
from cowardly.store.runner import SubprocessRunner

if TYPE_CHECKING:
    from cowardly.model.bundle import Bundle
    from cowardly.store.defaults import PreferenceBackend
    from cowardly.store.elevation import Elevator
    from cowardly.store.runner import CommandRunner
    from cowardly.store.target import Target

logger: CowardlyLogger = get_logger(__name__)


@dataclass(frozen=True)
class ApplyResult:
    """Outcome of `PreferenceStore.apply_bundle`.

    Attributes:
        enforced (bool): True if the bundle landed in the managed layer.
    """

    enforced: bool


class PreferenceStore:
    """Read/write access to one Brave target's user and managed layers.

    Args:
        target (Target): The Brave channel to operate on.
        backend (PreferenceBackend | None): User-layer primitives; defaults to
            `DefaultsBackend`.
        elevator (Elevator | None): Privileged file operations; defaults to
            `OsascriptElevator`.
        runner (CommandRunner | None): Runner for the process probe.
    """

    def __init__(
        self,
        target: Target,
        *,
        backend: PreferenceBackend | None = None,
        elevator: Elevator | None = None,
        runner: CommandRunner | None = None,
    ) -> None:
        self.target = target
        self._runner: CommandRunner = runner or SubprocessRunner()
        self._backend: PreferenceBackend = backend or DefaultsBackend(self._runner)
        self._elevator: Elevator = elevator or OsascriptElevator(self._runner)

    # --- Reads --------------------------------------------------------------

    def read_user(self, key: str) -> str | None:
        """Return the user-layer value of ``key`` or None if unset."""
        return self._backend.read(self.target.domain, key)

    def read_managed(self, key: str) -> str | None:
        """Return the managed-layer value of ``key`` or None if unset."""
        if not self.managed_layer_exists():
            return None
        data = read_plist(self.target.managed_plist)
        if data is None or key not in data:
            return None
        return display_value(data[key])

    def read_effective(self, key: str) -> str | None:
        """Return the value Brave honors: managed if set, else user, else None."""
        managed = self.read_managed(key)
        if managed is not None:
            return managed
        return self.read_user(key)

    def read_current(self, key: str) -> Setting | None:
        """Return the effective value as an inferred `Setting` (for export)."""
        raw = self.read_effective(key)
        if raw is None:
            return None
        return Setting.from_read_back(key, raw)

    # --- Writes -------------------------------------------------------------

    def write_user(self, setting: Setting) -> None:
        """Write one setting to the user layer.

        Raises:
            StoreWriteError: If the write primitive failed.
        """
        self._backend.write(self.target.domain, setting)

    def write_user_all(self, bundle: Bundle) -> None:
        """Write every setting to the user layer, stopping at the first failure.

        Keys written before the failure stay written.

        Raises:
            StoreWriteError: On the first failed write.
        """
        for setting in bundle:
            self.write_user(setting)

    def write_managed_elevated(self, bundle: Bundle) -> None:
        """Replace the managed document with ``bundle`` as a single file.

        The document is rendered to a private temporary file first, then
        copied into place by the elevator, so a declined or failed prompt
        leaves the previous managed document untouched.

        Raises:
            ElevationError: If the operator declined or the privileged copy failed.
            StoreWriteError: If the temporary document could not be written.
        """
        payload = render_plist(bundle)
        try:
            with tempfile.TemporaryDirectory(prefix="cowardly") as tmp:
                src = Path(tmp) / self.target.managed_plist.name
                src.write_bytes(payload)
                src.chmod(0o600)
                self._elevator.install_file(src, self.target.managed_plist)
        except OSError as exc:
            raise StoreWriteError(f"write temporary policy document: {exc}") from exc
        logger.info("Installed %d setting(s) to %s", len(bundle), self.target.managed_plist)

    def apply_bundle(self, bundle: Bundle) -> ApplyResult:
        """Apply ``bundle``, enforced if possible, else to the user layer.

        The elevated attempt always comes first. Any elevation failure,
        declined or otherwise, falls back to writing each setting to the user
        layer.

        Raises:
            StoreWriteError: If the user-layer fallback failed; earlier keys may
                already be written.
        """
        try:
            self.write_managed_elevated(bundle)
        except (ElevationError, StoreWriteError) as exc:
            logger.info("Managed write unavailable (%s); falling back to user preferences", exc)
        else:
            return ApplyResult(enforced=True)
        self.write_user_all(bundle)
        return ApplyResult(enforced=False)

    def delete_user(self, key: str) -> None:
        """Delete ``key`` from the user layer; a missing key is not an error."""
        self._backend.delete(self.target.domain, key)

    def reset_user(self) -> None:
        """Clear the whole user layer; an already-empty layer is success.

        Raises:
            StoreWriteError: If the domain could not be deleted.
        """
        self._backend.delete_domain(self.target.domain)

    def reset_managed_elevated(self) -> bool:
        """Remove the managed document.

        Returns:
            bool: False if there was no managed document (no prompt shown),
                True if it was removed.

        Raises:
            ElevationError: If the prompt was declined or removal failed; the
                managed layer is left intact.
        """
        if not self.managed_layer_exists():
            return False
        self._elevator.remove_file(self.target.managed_plist)
        logger.info("Removed %s", self.target.managed_plist)
        return True

    # --- Probes -------------------------------------------------------------

    def managed_layer_exists(self) -> bool:
        """True if the managed policy document is present."""
        return self.target.managed_plist.is_file()

    def is_target_installed(self) -> bool:
        """True if the Brave application bundle exists."""
        return self.target.app_path.is_dir()

    def is_target_running(self) -> bool:
        """True if a Brave process with the target's exact name is running."""
        result = self._runner.run(
            ["pgrep", "-x", self.target.process_name], timeout=DEFAULTS_TIMEOUT
        )
        return result.ok

    def target_version(self) -> str:
        """Return Brave's ``CFBundleShortVersionString`` or "" if unknown."""
        data = read_plist(self.target.info_plist)
        if data is None:
            return ""
        version = data.get("CFBundleShortVersionString", "")
        return version.strip() if isinstance(version, str) else ""
