# topmark:header:start
#
#   project      : ProvMark
#   file         : patterns.py
#   file_relpath : src/provmark/markers/patterns.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Compiled marker syntax shared by the scanner and the embedders.

Read patterns are tolerant (quotes, case, whitespace); the tags ProvMark writes
are canonical and always matched by the read patterns.

Patterns:
    - `MANIFEST_TAG_CAPTURE`: inline manifest element, group ``body`` is the
      raw element body.
    - `MANIFEST_TAG_FULL`: the same element plus the whitespace around it, used
      for replacement and removal.
    - `HEAD_OPEN`: ``<head ...>`` opening tag (does not match ``<header>``).
    - `BODY_CLOSE`: ``</body>`` including the whitespace before it.
    - `LINK_TAG`: any ``<link ...>`` element; the relation is checked with an
      exact substring test (`LINK_REL_ATTR`).
    - `HREF_ATTR`: ``href`` attribute value, group ``href``.
"""

from __future__ import annotations

import re
from typing import Final

from provmark.constants import C2PA_LINK_REL, C2PA_SCRIPT_TYPE

_TYPE_ATTR: Final[str] = r"""\btype\s*=\s*["']""" + re.escape(C2PA_SCRIPT_TYPE) + r"""["']"""

_MANIFEST_TAG: Final[str] = (
    r"<script\b[^>]*?" + _TYPE_ATTR + r"[^>]*>(?P<body>.*?)</script\s*>"
)

# Whitespace before a tag, entered only at the first character of a run.
# May match empty, e.g. right after a previous match consumed the run.
_LEADING_SPACE: Final[str] = r"(?:(?<!\s)\s+)?"

MANIFEST_TAG_CAPTURE: Final[re.Pattern[str]] = re.compile(
    _MANIFEST_TAG, re.IGNORECASE | re.DOTALL
)

MANIFEST_TAG_FULL: Final[re.Pattern[str]] = re.compile(
    _LEADING_SPACE + _MANIFEST_TAG + r"\s*", re.IGNORECASE | re.DOTALL
)

HEAD_OPEN: Final[re.Pattern[str]] = re.compile(r"<head\b[^>]*>", re.IGNORECASE)

BODY_CLOSE: Final[re.Pattern[str]] = re.compile(
    _LEADING_SPACE + r"(?P<tag></body\s*>)", re.IGNORECASE
)

LINK_TAG: Final[re.Pattern[str]] = re.compile(r"<link\b[^>]*>", re.IGNORECASE | re.DOTALL)

# Exact, case-sensitive relation attribute of the sidecar reference.
LINK_REL_ATTR: Final[str] = f'rel="{C2PA_LINK_REL}"'

HREF_ATTR: Final[re.Pattern[str]] = re.compile(
    r"""\bhref\s*=\s*(?P<quote>["'])(?P<href>.*?)(?P=quote)""", re.IGNORECASE | re.DOTALL
)
