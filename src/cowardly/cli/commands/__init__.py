# topmark:header:start
#
#   project      : Cowardly
#   file         : __init__.py
#   file_relpath : src/cowardly/cli/commands/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Cowardly CLI commands."""
