# topmark:header:start
#
#   project      : ProvMark
#   file         : scanner.py
#   file_relpath : src/provmark/markers/scanner.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Marker scanner: locate manifests, references and insertion points in HTML.

The scanner is pure text search. It never edits the document; it reports
what it found as a `ScanResult` whose `Marker` carries **byte** offsets in
the encoded document.

Inline scan order:
    1. The first ``<script type="application/c2pa-manifest">`` element. A
       non-empty body is base64-decoded; a body that does not decode raises
       `MalformedPayloadError` rather than returning an empty result.
    2. Otherwise the end of the ``<head ...>`` opening tag, as an insertion point.
    3. Otherwise no marker at all (callers fall back to end-of-document).

Reference scan:
    The first ``<link>`` element whose attributes contain the exact
    ``rel="c2pa-manifest"`` substring. The whole document is searched in a
    single pass, so a tag that is split across lines is still found.
"""

from __future__ import annotations

import base64
import html
from typing import TYPE_CHECKING

from provmark.config.logging import get_logger
from provmark.constants import DEFAULT_ENCODING
from provmark.core.errors import MalformedPayloadError, ManifestNotFoundError
from provmark.core.types import Marker, MarkerKind, ScanResult
from provmark.markers.patterns import (
    BODY_CLOSE,
    HEAD_OPEN,
    HREF_ATTR,
    LINK_REL_ATTR,
    LINK_TAG,
    MANIFEST_TAG_CAPTURE,
)

if TYPE_CHECKING:
    import re

    from provmark.config.logging import ProvmarkLogger

logger: ProvmarkLogger = get_logger(__name__)


def byte_offset(text: str, index: int, encoding: str = DEFAULT_ENCODING) -> int:
    """Return the byte offset of character ``index`` once ``text`` is encoded.

    Args:
        text (str): Decoded document text.
        index (int): Character index into ``text``.
        encoding (str): Text encoding of the document.

    Returns:
        int: Number of bytes that precede ``index`` in the encoded document.
    """
    return len(text[:index].encode(encoding))


def _span_marker(kind: MarkerKind, text: str, start: int, end: int, encoding: str) -> Marker:
    # Both ends go through byte_offset so a byte-order mark is counted once, in the offset.
    offset: int = byte_offset(text, start, encoding)
    return Marker(kind=kind, offset=offset, length=byte_offset(text, end, encoding) - offset)


def decode_payload(encoded: str) -> bytes:
    """Strictly decode a base64 manifest body.

    Args:
        encoded (str): Base64 text with surrounding whitespace already stripped.

    Returns:
        bytes: The decoded manifest.

    Raises:
        MalformedPayloadError: If ``encoded`` is not valid base64.
    """
    try:
        return base64.b64decode(encoded, validate=True)
    except ValueError as exc:
        # binascii.Error for bad alphabet/padding, ValueError for non-ASCII text
        raise MalformedPayloadError(f"HTML manifest bad base64 encoding: {exc}") from exc


def find_manifest_tag(text: str) -> re.Match[str] | None:
    """Return the first inline manifest element (any body, including empty)."""
    return MANIFEST_TAG_CAPTURE.search(text)


def find_head_open(text: str) -> re.Match[str] | None:
    """Return the first ``<head ...>`` opening tag."""
    return HEAD_OPEN.search(text)


def find_body_close(text: str) -> re.Match[str] | None:
    """Return the first ``</body>`` tag together with the whitespace before it."""
    return BODY_CLOSE.search(text)


def find_reference_tag(text: str) -> re.Match[str] | None:
    """Return the first ``<link>`` element carrying the sidecar relation."""
    for match in LINK_TAG.finditer(text):
        if LINK_REL_ATTR in match.group(0):
            return match
    return None


def scan_inline(text: str, *, encoding: str = DEFAULT_ENCODING) -> ScanResult:
    """Locate an inline manifest, or where one should be inserted.

    Args:
        text (str): Decoded document text.
        encoding (str): Text encoding used to compute byte offsets.

    Returns:
        ScanResult: ``payload`` with an ``INLINE_TAG`` marker bounding the base64 body,
            or no payload with an ``INSERTION_POINT`` after ``<head>``, or neither.

    Raises:
        MalformedPayloadError: If the manifest body is present but not valid base64.
    """
    tag: re.Match[str] | None = find_manifest_tag(text)
    if tag is not None:
        logger.trace("scan.inline: manifest element spans chars [%d, %d)", tag.start(), tag.end())
        raw: str = tag.group("body")
        encoded: str = raw.strip()
        if encoded:
            start: int = tag.start("body") + (len(raw) - len(raw.lstrip()))
            payload: bytes = decode_payload(encoded)
            marker = _span_marker(
                MarkerKind.INLINE_TAG, text, start, start + len(encoded), encoding
            )
            logger.debug(
                "scan.inline: manifest at byte %d (%d b64 bytes, %d payload bytes)",
                marker.offset,
                marker.length,
                len(payload),
            )
            return ScanResult(payload=payload, marker=marker)
        logger.debug("scan.inline: empty manifest element at char %d", tag.start())

    head: re.Match[str] | None = find_head_open(text)
    if head is not None:
        marker = Marker(
            kind=MarkerKind.INSERTION_POINT,
            offset=byte_offset(text, head.end(), encoding),
        )
        logger.debug("scan.inline: no manifest; insertion point after <head> at %d", marker.offset)
        return ScanResult(payload=None, marker=marker)

    logger.debug("scan.inline: no manifest and no <head>")
    return ScanResult(payload=None, marker=None)


def scan_reference(text: str, *, encoding: str = DEFAULT_ENCODING) -> ScanResult:
    """Locate the sidecar reference element and extract its target.

    The payload is never populated: it is fetched by opening the referenced file.

    Args:
        text (str): Decoded document text.
        encoding (str): Text encoding used to compute byte offsets.

    Returns:
        ScanResult: ``href`` and a ``LINK_TAG`` marker over the raw attribute value,
            or an empty result when no usable reference exists.
    """
    tag: re.Match[str] | None = find_reference_tag(text)
    if tag is None:
        logger.debug("scan.reference: no reference element")
        return ScanResult(payload=None, marker=None)

    href: re.Match[str] | None = HREF_ATTR.search(tag.group(0))
    if href is None or not href.group("href").strip():
        logger.warning("scan.reference: reference element without href: %r", tag.group(0))
        return ScanResult(payload=None, marker=None)

    logger.trace("scan.reference: reference element %r", tag.group(0))
    start: int = tag.start() + href.start("href")
    raw: str = href.group("href")
    marker = _span_marker(MarkerKind.LINK_TAG, text, start, start + len(raw), encoding)
    target: str = html.unescape(raw.strip())
    logger.debug("scan.reference: href=%r at byte %d", target, marker.offset)
    return ScanResult(payload=None, marker=marker, href=target)


def read_inline_payload(text: str, *, encoding: str = DEFAULT_ENCODING) -> bytes:
    """Return the inline manifest of ``text``.

    Raises:
        ManifestNotFoundError: If there is no inline manifest with a non-empty payload.
        MalformedPayloadError: If the manifest body is not valid base64.
    """
    result: ScanResult = scan_inline(text, encoding=encoding)
    if not result.payload:
        raise ManifestNotFoundError()
    return result.payload
