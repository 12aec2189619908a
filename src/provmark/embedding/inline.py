# topmark:header:start
#
#   project      : ProvMark
#   file         : inline.py
#   file_relpath : src/provmark/embedding/inline.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Inline embedder/remover for ``<script type="application/c2pa-manifest">``.

Every function takes document text and returns new document text; nothing is
edited in place and no state is kept between calls.

Placement when embedding:
    1. Replace the first existing manifest element (any body), including the
       whitespace around it.
    2. Else insert right before the first ``</body>``, dropping the whitespace
       that preceded it so repeated embeddings do not accumulate blank lines.
    3. Else append after the right-trimmed document (malformed documents).
"""

from __future__ import annotations

import base64
from typing import TYPE_CHECKING

from provmark.config.logging import get_logger
from provmark.constants import C2PA_SCRIPT_TYPE
from provmark.markers.patterns import MANIFEST_TAG_FULL
from provmark.markers.scanner import find_body_close, find_manifest_tag

if TYPE_CHECKING:
    import re

    from provmark.config.logging import ProvmarkLogger

logger: ProvmarkLogger = get_logger(__name__)


def encode_payload(payload: bytes) -> str:
    """Return the standard, padded base64 text of ``payload``."""
    return base64.b64encode(payload).decode("ascii")


def build_manifest_tag(payload: bytes) -> str:
    """Return the canonical inline manifest element for ``payload``.

    Args:
        payload (bytes): Opaque manifest store bytes.

    Returns:
        str: ``<script type="application/c2pa-manifest">BASE64</script>``.
    """
    return f'<script type="{C2PA_SCRIPT_TYPE}">{encode_payload(payload)}</script>'


def has_manifest_tag(text: str) -> bool:
    """Return True if ``text`` contains an inline manifest element (any body)."""
    return find_manifest_tag(text) is not None


def embed(text: str, payload: bytes) -> str:
    """Return ``text`` with ``payload`` embedded as an inline manifest.

    Args:
        text (str): Decoded document text.
        payload (bytes): Manifest store bytes.

    Returns:
        str: The updated document text.
    """
    manifest_tag: str = build_manifest_tag(payload)

    # Callables keep re.sub from interpreting backslashes in the replacement.
    if has_manifest_tag(text):
        logger.debug("inline.embed: replacing existing manifest element")
        return MANIFEST_TAG_FULL.sub(lambda _m: manifest_tag, text, count=1)

    body_close: re.Match[str] | None = find_body_close(text)
    if body_close is not None:
        logger.debug("inline.embed: inserting before </body> at char %d", body_close.start("tag"))
        return text[: body_close.start()] + manifest_tag + text[body_close.start("tag") :]

    logger.warning("inline.embed: no </body> found; appending manifest at end of document")
    return text.rstrip() + manifest_tag


def remove(text: str) -> str:
    """Return ``text`` without any inline manifest element.

    Whitespace around each removed element is removed with it. A document
    without a manifest is returned unchanged.
    """
    cleaned, count = MANIFEST_TAG_FULL.subn("", text)
    logger.debug("inline.remove: removed %d manifest element(s)", count)
    return cleaned
