# topmark:header:start
#
#   project      : ProvMark
#   file         : embed.py
#   file_relpath : src/provmark/cli/commands/embed.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""ProvMark `embed` command.

Embeds a manifest store in an HTML document using the configured strategy.

By default the command is a dry run: it reports what would change and exits
with ``WOULD_CHANGE`` (2). With ``--apply`` the document (and, for the sidecar
strategy, the companion file) is replaced atomically.
"""

from __future__ import annotations

from pathlib import Path

import click

from provmark.cli.cmd_common import (
    get_config,
    get_console,
    read_document_text,
    resolve_backend,
)
from provmark.cli.errors import ProvmarkUsageError, translate_errors
from provmark.cli.exit_codes import ExitCode
from provmark.cli.options import apply_and_diff_options, path_argument
from provmark.utils.diff import unified_diff


@click.command(
    name="embed",
    help="Embed a C2PA manifest store in an HTML document.",
)
@path_argument
@click.option(
    "-m",
    "--manifest",
    "manifest_path",
    required=True,
    type=click.Path(dir_okay=False, path_type=Path),
    help="File holding the manifest store bytes.",
)
@apply_and_diff_options
def embed_command(
    *,
    path: Path,
    manifest_path: Path,
    apply_changes: bool,
    show_diff: bool,
) -> None:
    """Embed the manifest store read from ``manifest_path`` into ``path``.

    Args:
        path (Path): HTML document.
        manifest_path (Path): Manifest store file.
        apply_changes (bool): Write changes instead of a dry run.
        show_diff (bool): Print a unified diff of the document change.
    """
    ctx = click.get_current_context()
    console = get_console(ctx)
    config = get_config(ctx)
    backend = resolve_backend(ctx, path)

    with translate_errors(manifest_path):
        payload: bytes = manifest_path.read_bytes()
    if not payload:
        raise ProvmarkUsageError(f"{manifest_path}: manifest store is empty")

    before: str = read_document_text(path, config)
    with translate_errors(path):
        after: str = backend.updated_text(before, payload, document_path=path)
        changed: bool = backend.would_change(path, payload)

    if show_diff:
        console.diff(unified_diff(before, after, str(path)))

    if not changed:
        console.report(path, "manifest already up to date")
        return

    summary: str = f"{len(payload)}-byte manifest ({config.strategy.value})"
    if not apply_changes:
        console.report(path, f"would embed {summary}; run with --apply to write")
        ctx.exit(ExitCode.WOULD_CHANGE)

    with translate_errors(path):
        backend.save_manifest(path, payload)
    console.report(path, f"embedded {summary}", fg="green")
