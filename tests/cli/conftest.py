# topmark:header:start
#
#   project      : ProvMark
#   file         : conftest.py
#   file_relpath : tests/cli/conftest.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""CLI test helpers for running ProvMark in a controlled working directory.

`run_cli_in()` changes the process working directory to the given directory
before invoking the Click CLI, so config discovery only sees files created by
the test and relative paths resolve against it.
"""

from __future__ import annotations

import os
from typing import TYPE_CHECKING, Sequence

from click.testing import CliRunner, Result

from provmark.cli.exit_codes import ExitCode
from provmark.cli.main import cli

if TYPE_CHECKING:
    from pathlib import Path


def run_cli_in(cwd: Path, argv: Sequence[str]) -> Result:
    """Invoke the CLI with ``cwd`` as the working directory.

    Color output is always disabled so assertions can match plain text.

    Args:
        cwd (Path): Directory used as the CWD for the command invocation.
        argv (Sequence[str]): CLI argument vector, e.g. ``["read", "page.html"]``.

    Returns:
        Result: The `click.testing.Result` produced by `CliRunner.invoke`.

    Example:
        ```python
        res = run_cli_in(tmp_path, ["embed", "page.html", "-m", "store.c2pa", "--apply"])
        assert res.exit_code == ExitCode.SUCCESS
        ```
    """
    runner = CliRunner()
    previous: str = os.getcwd()
    try:
        os.chdir(cwd)
        return runner.invoke(cli, ["--no-color", *argv])
    finally:
        os.chdir(previous)


def assert_SUCCESS(result: Result) -> None:
    """Assert that the command exited successfully (code 0)."""
    assert result.exit_code == ExitCode.SUCCESS, result.output


def assert_WOULD_CHANGE(result: Result) -> None:
    """Assert that the command exited with WOULD_CHANGE (code 2)."""
    # WOULD_CHANGE is a *normal* outcome; do not assert on exception.
    assert result.exit_code == ExitCode.WOULD_CHANGE, result.output
