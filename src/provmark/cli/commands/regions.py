# topmark:header:start
#
#   project      : ProvMark
#   file         : regions.py
#   file_relpath : src/provmark/cli/commands/regions.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""ProvMark `regions` command.

Prints the byte ranges a data-hash stage must include and exclude. For the
inline strategy, a document without a manifest is measured on a copy padded
with the configured placeholder manifest; the document itself is not changed.
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING

import click

from provmark.cli.cmd_common import get_config, get_console, read_document_text, resolve_backend
from provmark.cli.errors import ProvmarkUnsupportedError, translate_errors
from provmark.cli.options import path_argument
from provmark.core.types import Strategy
from provmark.embedding.regions import with_placeholder
from provmark.utils.digest import digest_included

if TYPE_CHECKING:
    from pathlib import Path

    from provmark.core.types import HashRegion


@click.command(
    name="regions",
    help="Show the hash regions of an HTML document.",
)
@path_argument
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["text", "json"], case_sensitive=False),
    default="text",
    show_default=True,
    help="Output format.",
)
@click.option(
    "--digest",
    "with_digest",
    is_flag=True,
    default=False,
    help="Also print the SHA-256 over the included regions (inline strategy only).",
)
def regions_command(*, path: Path, output_format: str, with_digest: bool) -> None:
    """Print the hash regions of ``path``.

    Args:
        path (Path): HTML document.
        output_format (str): ``text`` or ``json``.
        with_digest (bool): Also compute the digest over included regions.
    """
    ctx = click.get_current_context()
    console = get_console(ctx)
    config = get_config(ctx)
    backend = resolve_backend(ctx, path)

    with translate_errors(path):
        regions: list[HashRegion] = backend.hash_regions_file(path)

    digest: str | None = None
    if with_digest:
        if config.strategy is not Strategy.INLINE:
            raise ProvmarkUnsupportedError("--digest is only available for the inline strategy")
        text: str = read_document_text(path, config)
        with translate_errors(path):
            padded: str = with_placeholder(text, config.placeholder)
            digest = digest_included(padded.encode(config.encoding), regions)

    if output_format.lower() == "json":
        payload: dict[str, object] = {
            "path": str(path),
            "strategy": config.strategy.value,
            "regions": [r.to_dict() for r in regions],
        }
        if digest is not None:
            payload["sha256"] = digest
        console.emit(json.dumps(payload, indent=2))
        return

    for region in regions:
        label: str = region.kind.value.upper()
        line: str = f"{region.offset:>10} {region.length:>10}  {label}"
        console.emit(console.styled(line, fg="yellow") if label == "EXCLUDED" else line)
    if digest is not None:
        console.emit(f"sha256: {digest}")
