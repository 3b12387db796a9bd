# topmark:header:start
#
#   project      : Cowardly
#   file         : __main__.py
#   file_relpath : src/cowardly/__main__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Module entry point for running Cowardly via ``python -m cowardly``.

It delegates directly to :func:`cowardly.cli.main.cli`, ensuring a single,
authoritative CLI entry point regardless of how Cowardly is launched.

Examples:
    Show what the Quick Debloat preset would change::

        python -m cowardly diff quick
"""

from __future__ import annotations

from cowardly.cli.main import cli

if __name__ == "__main__":
    # We call the Click group directly
    cli()
