# topmark:header:start
#
#   project      : ProvMark
#   file         : cmd_common.py
#   file_relpath : src/provmark/cli/cmd_common.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Common command utilities for Click-based commands.

This module holds small, focused helpers used by multiple CLI commands.
They avoid policy (exit code rules, messages) and only encapsulate plumbing
such as retrieving shared state and selecting the backend for a document.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import click

from provmark.backends import backend_for
from provmark.cli.console import ClickConsole
from provmark.cli.errors import translate_errors
from provmark.config.logging import get_logger
from provmark.config.model import Config
from provmark.core.types import Strategy

if TYPE_CHECKING:
    from pathlib import Path

    from provmark.backends.base import ManifestBackend

logger = get_logger(__name__)


def get_console(ctx: click.Context) -> ClickConsole:
    """Return the console stored on the group context (or a plain one)."""
    obj: dict[str, Any] = ctx.ensure_object(dict)
    console = obj.get("console")
    if console is None:
        console = ClickConsole(enable_color=False)
        obj["console"] = console
    return console


def get_config(ctx: click.Context) -> Config:
    """Return the effective configuration resolved by the group callback."""
    cfg = ctx.ensure_object(dict).get("config")
    return cfg if isinstance(cfg, Config) else Config.from_defaults()


def get_effective_verbosity(ctx: click.Context) -> int:
    """Return the program-output verbosity for this command (0 when unset)."""
    return int(ctx.ensure_object(dict).get("verbosity_level", 0))


def resolve_backend(ctx: click.Context, path: Path) -> ManifestBackend:
    """Select the backend configured for this run and check it handles ``path``.

    Raises:
        ProvmarkUnsupportedError: If ``path`` is not an HTML document.
    """
    config: Config = get_config(ctx)
    kwargs: dict[str, Any] = {"config": config}
    if config.strategy is Strategy.SIDECAR:
        kwargs["document_path"] = path
    with translate_errors(path):
        backend: ManifestBackend = backend_for(path.suffix or path.name, config.strategy, **kwargs)
    logger.debug("Selected %r for %s", backend, path)
    return backend


def read_document_text(path: Path, config: Config) -> str:
    """Read and decode the document at ``path`` (errors become CLI errors)."""
    with translate_errors(path):
        return path.read_bytes().decode(config.encoding)
