# topmark:header:start
#
#   file         : options.py
#   file_relpath : src/provmark/cli/options.py
#   project      : ProvMark
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Common CLI option utilities.

This module centralizes reusable options (verbosity, apply/diff) and their
resolution logic, so commands and groups can stay thin.
"""

from __future__ import annotations

from pathlib import Path
from typing import Callable, ParamSpec, TypeVar

import click

from provmark.cli.errors import ProvmarkUsageError

P = ParamSpec("P")
R = TypeVar("R")

# Program-output verbosity (independent from internal logging).
QUIET: int = -1
NORMAL: int = 0
VERBOSE: int = 1


def resolve_verbosity(verbose_count: int, quiet_count: int) -> int:
    """Resolve program-output verbosity from ``-v``/``-q`` counts.

    Args:
        verbose_count: Number of times the verbose flag (-v) is passed.
        quiet_count: Number of times the quiet flag (-q) is passed.

    Returns:
        ``QUIET``, ``NORMAL`` or the number of ``-v`` flags.

    Raises:
        ProvmarkUsageError: If both verbose and quiet flags are used simultaneously.
    """
    if verbose_count > 0 and quiet_count > 0:
        raise ProvmarkUsageError("The '--verbose' and '--quiet' options are mutually exclusive.")
    if quiet_count > 0:
        return QUIET
    return verbose_count


def common_verbose_options(f: Callable[P, R]) -> Callable[P, R]:
    """Add -v/--verbose and -q/--quiet counting options to a command."""
    f = click.option(
        "-v",
        "--verbose",
        count=True,
        help="Increase verbosity. Specify up to twice for more detail.",
    )(f)
    f = click.option(
        "-q",
        "--quiet",
        count=True,
        help="Suppress output.",
    )(f)
    return f


def apply_and_diff_options(f: Callable[P, R]) -> Callable[P, R]:
    """Add --apply and --diff options to a mutating command."""
    f = click.option(
        "--diff",
        "show_diff",
        is_flag=True,
        default=False,
        help="Show a unified diff of the document change.",
    )(f)
    f = click.option(
        "--apply",
        "apply_changes",
        is_flag=True,
        default=False,
        help="Write changes (default is a dry run that exits 2 when changes would be made).",
    )(f)
    return f


def path_argument(f: Callable[P, R]) -> Callable[P, R]:
    """Add the positional HTML document ``PATH`` argument."""
    return click.argument(
        "path",
        type=click.Path(dir_okay=False, path_type=Path),
    )(f)
