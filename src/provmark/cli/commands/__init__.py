# topmark:header:start
#
#   project      : ProvMark
#   file         : __init__.py
#   file_relpath : src/provmark/cli/commands/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""ProvMark CLI subcommands."""
