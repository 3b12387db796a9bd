# topmark:header:start
#
#   project      : Cowardly
#   file         : __init__.py
#   file_relpath : src/cowardly/cli/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Click command-line interface for Cowardly.

The entry point is `cowardly.cli.main.cli`, exposed as the ``cowardly``
console script and as ``python -m cowardly``.
"""
