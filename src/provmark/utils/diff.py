# topmark:header:start
#
#   file         : diff.py
#   file_relpath : src/provmark/utils/diff.py
#   project      : ProvMark
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Unified diff generation and colorized rendering for CLI previews."""

from __future__ import annotations

import difflib
from typing import Sequence

from yachalk import chalk

DIFF_MAX_LINE_WIDTH: int = 160


def unified_diff(before: str, after: str, path: str) -> str:
    """Return a unified diff between two document images.

    Args:
        before (str): Current document text.
        after (str): Updated document text.
        path (str): Path shown in the diff headers.

    Returns:
        str: The diff text, or an empty string when both images are equal.
    """
    return "".join(
        difflib.unified_diff(
            before.splitlines(keepends=True),
            after.splitlines(keepends=True),
            fromfile=f"{path} (current)",
            tofile=f"{path} (updated)",
            n=3,
        )
    )


def shorten_line(line: str, max_width: int = DIFF_MAX_LINE_WIDTH) -> str:
    """Cut ``line`` to ``max_width`` characters and note how much was dropped.

    Base64 manifest bodies put whole manifest stores on a single diff line.
    A ``max_width`` of zero or less disables shortening.
    """
    if max_width <= 0 or len(line) <= max_width:
        return line
    return f"{line[:max_width]}... [{len(line) - max_width} more chars]"


def _style_line(line: str) -> str:
    if line.startswith(("--- ", "+++ ")):
        return chalk.bold(line)
    match line[:1]:
        case "@":
            return chalk.cyan(line)
        case "-":
            return chalk.red(line)
        case "+":
            return chalk.green(line)
        case _:
            return chalk.gray(line)


def render_patch(
    patch: Sequence[str] | str,
    *,
    max_width: int = DIFF_MAX_LINE_WIDTH,
    color: bool = True,
) -> str:
    """Render a unified diff for terminal preview.

    Args:
        patch: A unified diff as **either** a list/sequence of lines **or** a single
            multiline string.
        max_width: Longest line shown in full; see `shorten_line`.
        color: Color removals, additions, hunk and file headers with `yachalk`.

    Returns:
        The preview, one newline-terminated line per diff line.
    """
    lines: list[str] = patch.splitlines() if isinstance(patch, str) else list(patch)
    rendered: list[str] = []
    for line in lines:
        text: str = shorten_line(line.rstrip("\r\n"), max_width)
        rendered.append(_style_line(text) if color else text)
    return "".join(f"{text}\n" for text in rendered)
