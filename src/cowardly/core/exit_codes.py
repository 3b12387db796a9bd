# topmark:header:start
#
#   project      : Cowardly
#   file         : exit_codes.py
#   file_relpath : src/cowardly/core/exit_codes.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Exit codes for the Cowardly CLI.

Cowardly aligns with the BSD `sysexits` convention where practical, so that other tooling
can interpret failures consistently. The one deliberate divergence is `WOULD_CHANGE=2`,
which `diff` and `drift` use to signal that the store does not match the requested
settings. Click's own usage errors also exit with 2; they print a "Usage:" line.
"""

from enum import IntEnum


class ExitCode(IntEnum):
    """Standardized exit codes for the Cowardly CLI.

    Attributes:
        SUCCESS: Successful execution with no errors.
        FAILURE: Generic failure (non-specific error).
        WOULD_CHANGE: `diff`/`drift` found keys whose effective value differs.
        USAGE_ERROR: Command-line invocation error. Mirrors BSD ``EX_USAGE (64)``.
        DATA_ERROR: Invalid key, value, type or malformed document. Mirrors BSD
            ``EX_DATAERR (65)``.
        NOT_FOUND: Unknown preset, missing backup or file. Mirrors BSD ``EX_NOINPUT (66)``.
        UNAVAILABLE: Brave not installed, Brave running during reset, or unsupported
            platform. Mirrors BSD ``EX_UNAVAILABLE (69)``.
        IO_ERROR: The preference store or the filesystem failed. Mirrors BSD
            ``EX_IOERR (74)``.
        PERMISSION_DENIED: Insufficient permissions. Mirrors BSD ``EX_NOPERM (77)``.
        CONFIG_ERROR: Preset definitions failed to load. Mirrors BSD ``EX_CONFIG (78)``.
        UNEXPECTED_ERROR: Unhandled/unknown error (last-resort).
    """

    SUCCESS = 0
    FAILURE = 1
    WOULD_CHANGE = 2  # deliberate divergence from sysexits; see class docstring

    # sysexits-aligned values for better interoperability
    USAGE_ERROR = 64  # EX_USAGE
    DATA_ERROR = 65  # EX_DATAERR
    NOT_FOUND = 66  # EX_NOINPUT
    UNAVAILABLE = 69  # EX_UNAVAILABLE
    IO_ERROR = 74  # EX_IOERR
    PERMISSION_DENIED = 77  # EX_NOPERM
    CONFIG_ERROR = 78  # EX_CONFIG

    UNEXPECTED_ERROR = 255
