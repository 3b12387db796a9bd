# topmark:header:start
#
#   project      : Cowardly
#   file         : session.py
#   file_relpath : src/cowardly/api/session.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Orchestration of every apply, inspect and backup operation.

A `Session` binds the collaborators for one Brave target and runs the
apply flow:

1. snapshot the user layer (best effort: a missing document or a failed copy
   is logged and the apply goes ahead);
2. resolve the bundle (preset, privacy composition, file or custom picks);
3. write it, enforced if the operator accepts the elevation prompt, else to
   the user layer;
4. save it as the desired state. A failure here is reported as a note on the
   outcome, since the settings were applied.
"""

from __future__ import annotations

import sys
from typing import TYPE_CHECKING

from cowardly.api.types import ApplyOutcome, CurrentValue, DriftReport, TargetStatus
from cowardly.compose.engine import compose_privacy_layer, diff
from cowardly.config.logging import CowardlyLogger, get_logger
from cowardly.config.paths import UserPaths
from cowardly.constants import (
    CUSTOM_PRESET_ID,
    PRIVACY_GUIDES_BASE_PRESET_ID,
    PRIVACY_GUIDES_ID,
)
from cowardly.core.errors import (
    NoCustomBaseError,
    NotFoundError,
    SourceNotFoundError,
    StoreWriteError,
    UnsupportedPlatformError,
    ValidationError,
)
from cowardly.model.bundle import Bundle
from cowardly.presets.custom import VIEW_KEYS, custom_bundle, export_keys
from cowardly.presets.files import load_bundle_file, write_bundle_file
from cowardly.presets.loader import load_all, load_privacy_supplement
from cowardly.state.backups import BackupManager
from cowardly.state.desired import (
    CustomApplied,
    DesiredStateStore,
    FileApplied,
    PresetApplied,
    PrivacyGuidesApplied,
)
from cowardly.store.preferences import PreferenceStore
from cowardly.store.target import Target, Variant

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable
    from pathlib import Path

    from cowardly.compose.engine import DiffEntry
    from cowardly.presets.model import PresetCatalog, Supplement
    from cowardly.state.backups import ResetResult
    from cowardly.state.desired import DesiredState, Provenance

logger: CowardlyLogger = get_logger(__name__)


class Session:
    """Operations on one Brave target.

    Args:
        store (PreferenceStore): The target's preference layers.
        desired (DesiredStateStore): The desired-state document.
        backups (BackupManager): The target's backups.
        catalog (Callable[[], PresetCatalog]): Returns the preset catalog.
        supplement (Callable[[], Supplement]): Returns the privacy supplement.
    """

    def __init__(
        self,
        store: PreferenceStore,
        desired: DesiredStateStore,
        backups: BackupManager,
        *,
        catalog: Callable[[], PresetCatalog] = load_all,
        supplement: Callable[[], Supplement] = load_privacy_supplement,
    ) -> None:
        self.store = store
        self.desired = desired
        self.backups = backups
        self._catalog = catalog
        self._supplement = supplement

    @classmethod
    def for_system(
        cls,
        variant: Variant = Variant.STABLE,
        paths: UserPaths | None = None,
        *,
        check_platform: bool = True,
    ) -> Session:
        """Return a session wired to the real macOS preference system.

        With ``check_platform=False`` the session can be built anywhere; only
        bundle resolution and the desired-state document are then usable.

        Raises:
            UnsupportedPlatformError: If not running on macOS and
                ``check_platform`` is set.
        """
        if check_platform and sys.platform != "darwin":
            raise UnsupportedPlatformError(
                f"Brave preferences can only be managed on macOS (this is {sys.platform})"
            )
        paths = paths or UserPaths.for_current_user()
        target = Target.for_variant(variant)
        return cls(
            PreferenceStore(target),
            DesiredStateStore(paths.desired_state_file, catalog=load_all),
            BackupManager(paths, target.domain),
        )

    @property
    def target(self) -> Target:
        """The Brave target this session operates on."""
        return self.store.target

    def catalog(self) -> PresetCatalog:
        """Return the preset catalog."""
        return self._catalog()

    def status(self) -> TargetStatus:
        """Probe the target's installation and runtime state."""
        return TargetStatus(
            installed=self.store.is_target_installed(),
            running=self.store.is_target_running(),
            version=self.store.target_version(),
            managed=self.store.managed_layer_exists(),
        )

    def saved(self) -> DesiredState | None:
        """Return the saved desired state, or None."""
        return self.desired.read()

    def custom_fallback(self) -> Bundle:
        """Return the saved custom bundle, or an empty bundle."""
        state = self.saved()
        return state.custom_fallback() if state is not None else Bundle()

    # --- Resolution -------------------------------------------------------------

    def privacy_base(self, base: str | None = None) -> str:
        """Return the base for the privacy supplement: explicit, saved, else ``quick``."""
        if base:
            return base
        saved = self.desired.resolve_supplement_base_from_saved()
        return saved or PRIVACY_GUIDES_BASE_PRESET_ID

    def compose_privacy(self, base: str | None = None) -> tuple[Provenance, Bundle]:
        """Resolve the privacy supplement on top of ``base``."""
        base_id = self.privacy_base(base)
        custom = self.custom_fallback() if base_id == CUSTOM_PRESET_ID else Bundle()
        bundle = compose_privacy_layer(base_id, self.catalog(), custom, self._supplement())
        return PrivacyGuidesApplied(base_id), bundle

    def resolve_bundle(self, name: str) -> tuple[Provenance, Bundle]:
        """Resolve a target name to its provenance and bundle.

        ``name`` is a preset id, ``custom`` (the saved custom bundle),
        ``privacy-guides`` or ``privacy-guides:<base>``.

        Raises:
            PresetNotFoundError: If a preset id is unknown.
            NoCustomBaseError: If ``custom`` is requested but none is saved.
        """
        head, _, base = name.partition(":")
        if head == PRIVACY_GUIDES_ID:
            return self.compose_privacy(base or None)
        if name == CUSTOM_PRESET_ID:
            custom = self.custom_fallback()
            if not custom:
                raise NoCustomBaseError()
            return CustomApplied(), custom
        preset = self.catalog().require(name)
        return PresetApplied(preset.id), preset.settings

    # --- Apply ------------------------------------------------------------------

    def backup_before_change(self) -> Path | None:
        """Snapshot the user layer; return None if nothing was backed up."""
        try:
            return self.backups.backup()
        except SourceNotFoundError as exc:
            logger.info("No backup taken: %s", exc)
        except OSError as exc:
            logger.warning("Backup failed, continuing: %s", exc)
        return None

    def apply(
        self,
        provenance: Provenance,
        bundle: Bundle,
        *,
        supplement: Supplement | None = None,
    ) -> ApplyOutcome:
        """Back up, write ``bundle``, then save it as the desired state.

        Raises:
            ValidationError: If ``bundle`` is empty.
            StoreWriteError: If the user-layer fallback failed.
        """
        if not bundle:
            raise ValidationError("no settings to apply")
        backup_path = self.backup_before_change()
        result = self.store.apply_bundle(bundle)
        note: str | None = None
        try:
            self.desired.write(provenance, bundle, supplement=supplement)
        except StoreWriteError as exc:
            logger.warning("Desired state not saved: %s", exc)
            note = f"settings applied, but desired state not saved: {exc}"
        return ApplyOutcome(
            provenance=provenance,
            bundle=bundle,
            enforced=result.enforced,
            backup_path=backup_path,
            state_note=note,
        )

    def apply_preset(self, preset_id: str) -> ApplyOutcome:
        """Apply a catalog preset."""
        preset = self.catalog().require(preset_id)
        return self.apply(PresetApplied(preset.id), preset.settings)

    def apply_privacy_guides(self, base: str | None = None) -> ApplyOutcome:
        """Apply the privacy supplement on top of ``base`` (or the saved/default base)."""
        provenance, bundle = self.compose_privacy(base)
        return self.apply(provenance, bundle, supplement=self._supplement())

    def apply_file(self, path: Path) -> ApplyOutcome:
        """Apply a bundle file.

        Raises:
            NotFoundError: If the file does not exist.
            DocumentError: If the file is not a valid bundle.
        """
        bundle = load_bundle_file(path)
        return self.apply(FileApplied(str(path.expanduser().resolve())), bundle)

    def apply_custom(self, keys: Iterable[str]) -> ApplyOutcome:
        """Apply the chosen custom-menu settings."""
        return self.apply(CustomApplied(), custom_bundle(keys))

    def reapply(self) -> ApplyOutcome:
        """Apply the saved desired state again.

        Raises:
            NotFoundError: If no desired state is saved.
        """
        state = self.saved()
        if state is None:
            raise NotFoundError(f"no desired state saved at {self.desired.path}")
        return self.apply(state.provenance, state.settings)

    # --- Inspect ----------------------------------------------------------------

    def diff(self, name: str) -> list[DiffEntry]:
        """Return what applying ``name`` would change."""
        _, bundle = self.resolve_bundle(name)
        return diff(bundle, self.store)

    def drift(self) -> DriftReport | None:
        """Compare the saved desired state with the effective values.

        Returns:
            DriftReport | None: None if no desired state is saved.
        """
        state = self.saved()
        if state is None:
            return None
        return DriftReport(state=state, entries=diff(state.settings, self.store))

    def current(self, keys: Iterable[str] = VIEW_KEYS) -> list[CurrentValue]:
        """Return the effective value of each key, and whether it is enforced."""
        rows: list[CurrentValue] = []
        for key in keys:
            managed = self.store.read_managed(key)
            value = managed if managed is not None else self.store.read_user(key)
            rows.append(CurrentValue(key=key, value=value, enforced=managed is not None))
        return rows

    def export(self, path: Path) -> Bundle:
        """Write the current effective values of the export key space to ``path``.

        The key space is the view keys, the custom-menu keys, then every key
        declared by a preset or the saved desired state. Unset keys are skipped.
        """
        extra: list[str] = [key for preset in self.catalog() for key in preset.settings.keys()]
        state = self.saved()
        if state is not None:
            extra.extend(state.settings.keys())
        settings = [
            current
            for current in (self.store.read_current(key) for key in export_keys(extra))
            if current is not None
        ]
        bundle = Bundle(settings)
        write_bundle_file(path, bundle)
        logger.info("Exported %d setting(s) to %s", len(bundle), path)
        return bundle

    # --- Backups and reset --------------------------------------------------------

    def reset(self) -> ResetResult:
        """Clear the user layer and try to remove the managed layer."""
        return self.backups.reset(self.store)

    def list_backups(self) -> list[Path]:
        """Return backups, oldest first."""
        return self.backups.list()

    def resolve_backup(self, name: str) -> Path:
        """Return the backup for a path or file name."""
        return self.backups.resolve(name)

    def restore_backup(self, name: str) -> Path:
        """Restore the named backup over the user layer and return its path."""
        path = self.resolve_backup(name)
        self.backups.restore(path)
        return path

    def delete_backup(self, name: str) -> Path:
        """Delete the named backup and return its path."""
        path = self.resolve_backup(name)
        self.backups.delete(path)
        return path
