# topmark:header:start
#
#   project      : Cowardly
#   file         : defaults.py
#   file_relpath : src/cowardly/store/defaults.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""User-layer primitives on top of the macOS ``defaults`` command.

Reads that fail for any reason (missing key, missing domain, timeout) mean
"unset". Writes and deletes that fail raise `StoreWriteError`, except that
deleting something which does not exist is not an error.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Final, Protocol

from cowardly.config.logging import CowardlyLogger, get_logger
from cowardly.constants import DEFAULTS_TIMEOUT
from cowardly.core.errors import StoreWriteError
from cowardly.model.setting import SettingKind
from cowardly.store.runner import SubprocessRunner

if TYPE_CHECKING:
    from cowardly.model.setting import Setting
    from cowardly.store.runner import CommandRunner

logger: CowardlyLogger = get_logger(__name__)

_DOMAIN_MISSING: Final[str] = "domain does not exist"

_TYPE_FLAGS: Final[dict[SettingKind, str]] = {
    SettingKind.BOOL: "-bool",
    SettingKind.INTEGER: "-integer",
    SettingKind.STRING: "-string",
}


class PreferenceBackend(Protocol):
    """Read/write/delete primitives for one preference domain's user layer."""

    def read(self, domain: str, key: str) -> str | None:
        """Return the raw text value of ``key`` or None if unset."""
        ...

    def write(self, domain: str, setting: Setting) -> None:
        """Write one setting."""
        ...

    def delete(self, domain: str, key: str) -> None:
        """Delete one key; missing keys are ignored."""
        ...

    def delete_domain(self, domain: str) -> None:
        """Delete every key of ``domain``; a missing domain is ignored."""
        ...


def write_arguments(domain: str, setting: Setting) -> list[str]:
    """Return the ``defaults write`` argument vector for a setting."""
    if setting.kind is SettingKind.BOOL:
        text = "true" if setting.value else "false"
    else:
        text = str(setting.value)
    return ["defaults", "write", domain, setting.key, _TYPE_FLAGS[setting.kind], text]


class DefaultsBackend:
    """`PreferenceBackend` that shells out to ``defaults``.

    Args:
        runner (CommandRunner | None): Command runner; defaults to `SubprocessRunner`.
        timeout (float): Per-command timeout in seconds.
    """

    def __init__(self, runner: CommandRunner | None = None, timeout: float = DEFAULTS_TIMEOUT):
        self._runner: CommandRunner = runner or SubprocessRunner()
        self._timeout = timeout

    def read(self, domain: str, key: str) -> str | None:
        result = self._runner.run(["defaults", "read", domain, key], timeout=self._timeout)
        if not result.ok:
            logger.trace("defaults read %s %s: unset (%s)", domain, key, result.output)
            return None
        return result.stdout.strip()

    def write(self, domain: str, setting: Setting) -> None:
        result = self._runner.run(write_arguments(domain, setting), timeout=self._timeout)
        if not result.ok:
            raise StoreWriteError(f"defaults write {setting.key}: {result.output}")
        logger.debug("Wrote %s=%r to %s", setting.key, setting.value, domain)

    def delete(self, domain: str, key: str) -> None:
        result = self._runner.run(["defaults", "delete", domain, key], timeout=self._timeout)
        if not result.ok:
            logger.debug("defaults delete %s %s ignored: %s", domain, key, result.output)

    def delete_domain(self, domain: str) -> None:
        result = self._runner.run(["defaults", "delete", domain], timeout=self._timeout)
        if result.ok:
            return
        if _DOMAIN_MISSING in result.output:
            logger.debug("Domain %s already empty", domain)
            return
        raise StoreWriteError(f"defaults delete {domain}: {result.output}")
