# topmark:header:start
#
#   project      : Cowardly
#   file         : login_hook.py
#   file_relpath : src/cowardly/api/login_hook.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""LaunchAgent that runs ``cowardly reapply`` at login.

Re-applying at login puts back settings that something else (an MDM
profile, Brave itself) reverted since the last session.
"""

from __future__ import annotations

import plistlib
import sys
from typing import TYPE_CHECKING, Any

from cowardly.config.logging import CowardlyLogger, get_logger
from cowardly.constants import LOGIN_HOOK_LABEL, LOGIN_HOOK_LOG_NAME

if TYPE_CHECKING:
    from collections.abc import Sequence
    from pathlib import Path

    from cowardly.config.paths import UserPaths

logger: CowardlyLogger = get_logger(__name__)


def default_program() -> list[str]:
    """Return the command that starts this installation of Cowardly."""
    return [sys.executable, "-m", "cowardly"]


def login_hook_path(paths: UserPaths) -> Path:
    """Return the LaunchAgent file location."""
    return paths.launch_agents_dir / f"{LOGIN_HOOK_LABEL}.plist"


def build_login_hook(paths: UserPaths, program: Sequence[str], *, beta: bool) -> dict[str, Any]:
    """Return the LaunchAgent definition running ``reapply`` at load."""
    args = list(program)
    if beta:
        args.append("--beta")
    args.append("reapply")
    log_file = str(paths.config_dir / LOGIN_HOOK_LOG_NAME)
    return {
        "Label": LOGIN_HOOK_LABEL,
        "ProgramArguments": args,
        "RunAtLoad": True,
        "StandardErrorPath": log_file,
        "StandardOutPath": log_file,
    }


def install_login_hook(
    paths: UserPaths, *, beta: bool, program: Sequence[str] | None = None
) -> Path:
    """Write the LaunchAgent and return its path.

    Raises:
        OSError: If a directory or the file cannot be written.
    """
    paths.ensure_config_dir()
    dest = login_hook_path(paths)
    dest.parent.mkdir(parents=True, exist_ok=True)
    definition = build_login_hook(paths, program or default_program(), beta=beta)
    dest.write_bytes(plistlib.dumps(definition, fmt=plistlib.FMT_XML))
    dest.chmod(0o644)
    logger.info("Installed login hook %s", dest)
    return dest
