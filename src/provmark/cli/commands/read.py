# topmark:header:start
#
#   project      : ProvMark
#   file         : read.py
#   file_relpath : src/provmark/cli/commands/read.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""ProvMark `read` command.

Extracts the manifest store of a document. Without ``--output`` the store is
printed as base64 on stdout; with it the raw bytes are written to a file.
"""

from __future__ import annotations

import base64
from pathlib import Path

import click

from provmark.cli.cmd_common import get_config, get_console, resolve_backend
from provmark.cli.errors import translate_errors
from provmark.cli.options import path_argument
from provmark.utils.file import atomic_write_bytes


@click.command(
    name="read",
    help="Extract the C2PA manifest store of an HTML document.",
)
@path_argument
@click.option(
    "-o",
    "--output",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Write the raw manifest bytes to this file instead of printing base64.",
)
def read_command(*, path: Path, output: Path | None) -> None:
    """Extract the manifest store of ``path``.

    Args:
        path (Path): HTML document.
        output (Path | None): Destination for the raw manifest bytes.
    """
    ctx = click.get_current_context()
    console = get_console(ctx)
    backend = resolve_backend(ctx, path)

    with translate_errors(path):
        payload: bytes = backend.read_manifest_file(path)

    if output is None:
        console.emit(base64.b64encode(payload).decode("ascii"))
        return

    with translate_errors(output):
        atomic_write_bytes(output, payload, prefix=get_config(ctx).temp_prefix)
    console.report(output, f"wrote {len(payload)} manifest bytes from {path}")
