# topmark:header:start
#
#   project      : ProvMark
#   file         : version.py
#   file_relpath : src/provmark/cli/commands/version.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""ProvMark `version` command.

Prints the current ProvMark version as installed in the active Python environment.
"""

from __future__ import annotations

import json

import click

from provmark.cli.cmd_common import get_console, get_effective_verbosity
from provmark.constants import PROVMARK_VERSION


@click.command(
    name="version",
    help="Show the current version of ProvMark.",
)
@click.option(
    "--json",
    "as_json",
    is_flag=True,
    default=False,
    help="Print the version as a JSON object.",
)
def version_command(*, as_json: bool = False) -> None:
    """Show the current version of ProvMark.

    Args:
        as_json (bool): Emit ``{"version": ...}`` instead of plain text.
    """
    ctx = click.get_current_context()
    console = get_console(ctx)

    if as_json:
        console.emit(json.dumps({"version": PROVMARK_VERSION}))
    elif get_effective_verbosity(ctx) > 0:
        console.print(console.styled("ProvMark version:", bold=True, underline=True))
        console.print(f"    {console.styled(PROVMARK_VERSION, bold=True)}")
    else:
        console.print(console.styled(PROVMARK_VERSION, bold=True))
