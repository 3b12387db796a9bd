# topmark:header:start
#
#   project      : Cowardly
#   file         : conftest.py
#   file_relpath : tests/conftest.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Pytest configuration for the Cowardly test suite.

Every test runs against a temporary home directory and temporary "system"
locations (managed preferences, /Applications), with the macOS collaborators
replaced by the fakes in `tests.fakes`. Nothing here touches the real
preference system, so the suite runs on any platform.

Default wiring: Brave installed and not running, the administrator prompt
declined, no managed document, an empty user layer, and a two-preset catalog
(``quick`` and ``balanced``) plus a small privacy supplement.
"""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING, Any

import pytest
from click.testing import CliRunner

from cowardly.api.session import Session
from cowardly.cli.main import cli
from cowardly.config import logging
from cowardly.config.logging import LOG_LEVEL_ENV_VAR
from cowardly.config.paths import UserPaths
from cowardly.presets.model import Preset, PresetCatalog, Supplement
from cowardly.state.backups import BackupManager
from cowardly.state.desired import DesiredStateStore
from cowardly.store.preferences import PreferenceStore
from tests.fakes import (
    BALANCED,
    PRIVACY,
    QUICK,
    FixedClock,
    PlistDefaults,
    ScriptedElevator,
    ScriptedRunner,
    make_target,
)

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence
    from pathlib import Path

    from click.testing import Result

    from cowardly.store.target import Target


@pytest.fixture(autouse=True)
def silence_cowardly_logging(monkeypatch: pytest.MonkeyPatch) -> None:
    """Ensure Cowardly's runtime log level is not forced via env during tests."""
    monkeypatch.delenv(LOG_LEVEL_ENV_VAR, raising=False)


@pytest.hookimpl(tryfirst=True)
def pytest_configure(config: pytest.Config) -> None:  # pylint: disable=unused-argument
    """Log at TRACE level so failures come with the full story."""
    logging.setup_logging(level=logging.TRACE_LEVEL)


@pytest.fixture
def catalog() -> PresetCatalog:
    """Two presets: ``quick`` and ``balanced``."""
    return PresetCatalog(
        [
            Preset(id="quick", name="Quick Debloat", description="", settings=QUICK),
            Preset(id="balanced", name="Balanced", description="", settings=BALANCED),
        ]
    )


@pytest.fixture
def supplement() -> Supplement:
    """A small privacy supplement overlapping ``quick`` on one key."""
    return Supplement(name="privacy_guides", description="", url="", settings=PRIVACY)


@pytest.fixture
def paths(tmp_path: Path) -> UserPaths:
    """Per-user locations under a temporary home."""
    home = tmp_path / "home"
    home.mkdir()
    return UserPaths(home=home)


@pytest.fixture
def target(tmp_path: Path) -> Target:
    """An installed Brave target whose system paths live under ``tmp_path/system``."""
    return make_target(tmp_path / "system")


@pytest.fixture
def backend(paths: UserPaths) -> PlistDefaults:
    """User layer stored in the temporary home's Preferences directory."""
    return PlistDefaults(paths)


@pytest.fixture
def elevator() -> ScriptedElevator:
    """Administrator prompt that is declined."""
    return ScriptedElevator(accept=False)


@pytest.fixture
def runner() -> ScriptedRunner:
    """Process probe reporting Brave as not running."""
    return ScriptedRunner(running=False)


@pytest.fixture
def store(
    target: Target, backend: PlistDefaults, elevator: ScriptedElevator, runner: ScriptedRunner
) -> PreferenceStore:
    """Preference store wired to the fakes."""
    return PreferenceStore(target, backend=backend, elevator=elevator, runner=runner)


@pytest.fixture
def desired(
    paths: UserPaths, catalog: PresetCatalog, supplement: Supplement
) -> DesiredStateStore:
    """Desired-state store using the test catalog and supplement."""
    return DesiredStateStore(
        paths.desired_state_file, catalog=lambda: catalog, supplement=lambda: supplement
    )


@pytest.fixture
def clock() -> FixedClock:
    """Backup clock frozen at 2025-01-02 03:04:05."""
    return FixedClock(datetime(2025, 1, 2, 3, 4, 5))


@pytest.fixture
def backups(paths: UserPaths, target: Target, clock: FixedClock) -> BackupManager:
    """Backup manager for the test target."""
    return BackupManager(paths, target.domain, clock=clock)


@pytest.fixture
def session(
    store: PreferenceStore,
    desired: DesiredStateStore,
    backups: BackupManager,
    catalog: PresetCatalog,
    supplement: Supplement,
) -> Session:
    """A session over the fakes."""
    return Session(
        store, desired, backups, catalog=lambda: catalog, supplement=lambda: supplement
    )


@pytest.fixture
def run_cli(session: Session, paths: UserPaths) -> Callable[..., Result]:
    """Return a helper invoking the CLI with the test session injected.

    The helper takes the argument vector and optional standard input text; color
    is always disabled so output can be matched literally.
    """

    def _run(argv: Sequence[str], *, input_text: str | None = None) -> Result:
        obj: dict[str, Any] = {"session": session, "paths": paths}
        return CliRunner().invoke(cli, ["--no-color", *argv], input=input_text, obj=obj)

    return _run
