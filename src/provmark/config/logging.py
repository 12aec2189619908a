# topmark:header:start
#
#   project      : ProvMark
#   file         : logging.py
#   file_relpath : src/provmark/config/logging.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Diagnostic logging for ProvMark.

Diagnostics and program output never share a stream: manifests, JSON and diffs
go to stdout through `provmark.cli.console.ClickConsole`, log records go to
stderr. Logging is silent (CRITICAL) unless ``PROVMARK_LOG_LEVEL`` is set.

Levels, from most to least verbose:
    - ``TRACE``: byte-level detail (regex matches, offsets, stream copies).
    - ``DEBUG``: one line per scan, embed, strip or config decision.
    - ``INFO`` and above: noteworthy events and problems.
"""

from __future__ import annotations

import logging
import os
import sys
from typing import TYPE_CHECKING, Final, TextIO, cast

from yachalk import chalk

if TYPE_CHECKING:
    from collections.abc import Callable, Mapping

TRACE_LEVEL: Final[int] = logging.DEBUG - 5

LOG_LEVEL_ENV_VAR: Final[str] = "PROVMARK_LOG_LEVEL"

DEFAULT_LOG_LEVEL: Final[int] = logging.CRITICAL

LOG_FORMAT: Final[str] = "[%(levelname)s] %(message)s"
DEBUG_LOG_FORMAT: Final[str] = "[%(levelname)s] [%(name)s:%(lineno)d] %(message)s"

logging.addLevelName(TRACE_LEVEL, "TRACE")


class ProvmarkLogger(logging.Logger):
    """Logger with a TRACE level below DEBUG for byte-level diagnostics."""

    def trace(
        self,
        msg: object,
        *args: object,
        extra: Mapping[str, object] | None = None,
    ) -> None:
        """Log ``msg % args`` with severity TRACE."""
        if self.isEnabledFor(TRACE_LEVEL):
            self._log(TRACE_LEVEL, msg, args, extra=extra, stacklevel=2)


logging.setLoggerClass(ProvmarkLogger)


# Highest matching threshold wins; anything below TRACE is dimmed.
_LEVEL_STYLES: Final[tuple[tuple[int, Callable[[str], str]], ...]] = (
    (logging.CRITICAL, chalk.red_bright),
    (logging.ERROR, chalk.red),
    (logging.WARNING, chalk.yellow),
    (logging.INFO, chalk.green),
    (logging.DEBUG, chalk.gray),
    (TRACE_LEVEL, chalk.blue),
)


class ChalkFormatter(logging.Formatter):
    """Formatter that colors each record by severity with `yachalk`."""

    def format(self, record: logging.LogRecord) -> str:
        """Return the formatted record, colored by ``record.levelno``."""
        message: str = super().format(record)
        for threshold, style in _LEVEL_STYLES:
            if record.levelno >= threshold:
                return style(message)
        return chalk.dim(message)


def parse_log_level(value: str) -> int | None:
    """Translate a level name (``"trace"``, ``"WARN"``) or number (``"10"``) to a level.

    Args:
        value (str): Raw level text.

    Returns:
        int | None: The numeric level, or None when ``value`` is not a known level.
    """
    text: str = value.strip().upper()
    if text.isdigit():
        return int(text)
    if text in ("WARN", "FATAL"):
        text = "WARNING" if text == "WARN" else "CRITICAL"
    level = logging.getLevelName(text)
    return level if isinstance(level, int) else None


def resolve_env_log_level() -> int | None:
    """Return the level requested through ``PROVMARK_LOG_LEVEL``, or None if unset or invalid."""
    value: str | None = os.environ.get(LOG_LEVEL_ENV_VAR)
    if not value:
        return None
    return parse_log_level(value)


def setup_logging(
    level: int | None = None,
    *,
    color: bool = True,
    stream: TextIO | None = None,
) -> None:
    """Route all ProvMark diagnostics to a single stderr handler.

    Args:
        level (int | None): Root level; when None, ``PROVMARK_LOG_LEVEL`` is consulted
            and `DEFAULT_LOG_LEVEL` applies if it is unset.
        color (bool): Color records with `ChalkFormatter` (disabled by ``--no-color``).
        stream (TextIO | None): Destination (default: current `sys.stderr`).
    """
    if level is None:
        level = resolve_env_log_level() or DEFAULT_LOG_LEVEL

    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    # Replace, never stack: the CLI group configures logging on every invocation.
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    fmt: str = LOG_FORMAT if level >= logging.INFO else DEBUG_LOG_FORMAT
    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setFormatter(ChalkFormatter(fmt) if color else logging.Formatter(fmt))
    root_logger.addHandler(handler)


def get_logger(name: str) -> ProvmarkLogger:
    """Return the `ProvmarkLogger` called ``name``."""
    return cast("ProvmarkLogger", logging.getLogger(name))
