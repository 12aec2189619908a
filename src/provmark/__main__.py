# topmark:header:start
#
#   project      : ProvMark
#   file         : __main__.py
#   file_relpath : src/provmark/__main__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Allow running ProvMark with ``python -m provmark``."""

from provmark.cli.main import cli

if __name__ == "__main__":
    cli()
