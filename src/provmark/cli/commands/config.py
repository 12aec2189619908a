# topmark:header:start
#
#   project      : ProvMark
#   file         : config.py
#   file_relpath : src/provmark/cli/commands/config.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""ProvMark `config` command.

Dumps the effective configuration (defaults, config file and CLI overrides
merged) as a ``provmark.toml`` document.
"""

from __future__ import annotations

import click

from provmark.cli.cmd_common import get_config, get_console


@click.command(
    name="config",
    help="Show the effective configuration as TOML.",
)
def config_command() -> None:
    """Dump the effective configuration."""
    ctx = click.get_current_context()
    get_console(ctx).emit(get_config(ctx).to_toml(), nl=False)
