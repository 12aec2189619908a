# topmark:header:start
#
#   project      : ProvMark
#   file         : strip.py
#   file_relpath : src/provmark/cli/commands/strip.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""ProvMark `strip` command.

Removes the manifest of an HTML document: the inline manifest element, or the
sidecar companion file (the reference element stays in the document).

Exit codes:
    - 0: nothing to remove, or removed with ``--apply``.
    - 2: dry run and a manifest would be removed.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from provmark.cli.cmd_common import (
    get_config,
    get_console,
    read_document_text,
    resolve_backend,
)
from provmark.cli.errors import translate_errors
from provmark.cli.exit_codes import ExitCode
from provmark.cli.options import apply_and_diff_options, path_argument
from provmark.utils.diff import unified_diff

if TYPE_CHECKING:
    from pathlib import Path


@click.command(
    name="strip",
    help="Remove the C2PA manifest from an HTML document.",
)
@path_argument
@apply_and_diff_options
def strip_command(*, path: Path, apply_changes: bool, show_diff: bool) -> None:
    """Remove the manifest of ``path``.

    Args:
        path (Path): HTML document.
        apply_changes (bool): Write changes instead of a dry run.
        show_diff (bool): Print a unified diff of the document change.
    """
    ctx = click.get_current_context()
    console = get_console(ctx)
    backend = resolve_backend(ctx, path)

    with translate_errors(path):
        present: bool = backend.has_manifest(path)

    if not present:
        console.report(path, "no manifest to remove")
        return

    if show_diff:
        before: str = read_document_text(path, get_config(ctx))
        console.diff(unified_diff(before, backend.stripped_text(before), str(path)))

    if not apply_changes:
        console.report(path, "would remove manifest; run with --apply to write")
        ctx.exit(ExitCode.WOULD_CHANGE)

    with translate_errors(path):
        backend.remove_manifest_file(path)
    console.report(path, "manifest removed", fg="green")
