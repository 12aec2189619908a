# topmark:header:start
#
#   project      : ProvMark
#   file         : console.py
#   file_relpath : src/provmark/cli/console.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Console for user-facing program output.

Program output is split in two kinds:

- **data** (`emit`): base64 manifests, JSON, TOML, diffs. Always written, also
  with ``--quiet``, because scripts consume it.
- **status** (`report`): one ``PATH: message`` line per processed document,
  suppressed with ``--quiet``.

Diagnostics go through `logging` (see `provmark.config.logging`), never here.
"""

from __future__ import annotations

import sys
from typing import TYPE_CHECKING, Any, TextIO

import click

from provmark.utils.diff import render_patch

if TYPE_CHECKING:
    from pathlib import Path


class ClickConsole:
    """Program-output console, independent from the logger.

    Args:
        enable_color (bool): If True, enables ANSI color codes in the output.
        verbosity (int): Program-output verbosity; negative means quiet.
        out (TextIO | None): Stream for standard output (default: current `sys.stdout`).
        err (TextIO | None): Stream for error output (default: current `sys.stderr`).
    """

    def __init__(
        self,
        *,
        enable_color: bool = True,
        verbosity: int = 0,
        out: TextIO | None = None,
        err: TextIO | None = None,
    ) -> None:
        self.enable_color = enable_color
        self.verbosity = verbosity
        self.out = out
        self.err = err

    @property
    def quiet(self) -> bool:
        """True when status lines are suppressed."""
        return self.verbosity < 0

    def print(self, text: str = "", *, nl: bool = True) -> None:
        """Write a message to stdout."""
        click.echo(text, nl=nl, file=self.out or sys.stdout, color=self.enable_color)

    def emit(self, data: str, *, nl: bool = True) -> None:
        """Write command data to stdout, regardless of verbosity."""
        self.print(data, nl=nl)

    def report(self, path: Path | str, message: str, *, fg: str | None = None) -> None:
        """Write a ``PATH: message`` status line unless quiet.

        Args:
            path (Path | str): Document the status refers to.
            message (str): Status text.
            fg (str | None): Optional foreground color for the whole line.
        """
        if self.quiet:
            return
        line: str = f"{path}: {message}"
        self.print(self.styled(line, fg=fg) if fg else line)

    def diff(self, patch: str) -> None:
        """Write a unified diff preview, colorized when color is enabled."""
        if patch:
            self.emit(render_patch(patch, color=self.enable_color), nl=False)

    def warn(self, text: str, *, nl: bool = True) -> None:
        """Write a warning message to stderr."""
        click.secho(
            text, nl=nl, file=self.err or sys.stderr, color=self.enable_color, fg="yellow"
        )

    def error(self, text: str, *, nl: bool = True) -> None:
        """Write an error message to stderr."""
        click.secho(
            text, nl=nl, file=self.err or sys.stderr, color=self.enable_color, fg="bright_red"
        )

    def styled(self, text: str, **style_kwargs: Any) -> str:
        """Return ``text`` styled with `click.style`, or unchanged when color is disabled."""
        if not self.enable_color:
            return text
        return click.style(text, **style_kwargs)
