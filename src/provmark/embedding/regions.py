# topmark:header:start
#
#   project      : ProvMark
#   file         : regions.py
#   file_relpath : src/provmark/embedding/regions.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Hash region calculator for inline manifests.

A data-hash stage must authenticate the document while excluding exactly the
manifest bytes. The position of those bytes is only known once a manifest
element exists, so a document without one is first padded with a placeholder
manifest (`with_placeholder`). Padding happens on a disposable copy: the
caller's document is never changed.

Regions are computed against the padded copy. Included bytes are identical in
the padded copy and in the final document (only the excluded body differs in
length), so a digest over the included regions does not depend on the final
payload size. See `provmark.utils.digest.digest_included`.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from provmark.config.logging import get_logger
from provmark.constants import DEFAULT_ENCODING, PLACEHOLDER_MANIFEST
from provmark.core.errors import ManifestNotFoundError
from provmark.core.types import HashRegion, MarkerKind, RegionKind
from provmark.embedding import inline
from provmark.markers.scanner import scan_inline

if TYPE_CHECKING:
    from collections.abc import Iterable

    from provmark.config.logging import ProvmarkLogger
    from provmark.core.types import ScanResult

logger: ProvmarkLogger = get_logger(__name__)


def with_placeholder(text: str, placeholder: bytes = PLACEHOLDER_MANIFEST) -> str:
    """Return a disposable copy of ``text`` that is guaranteed to carry a manifest.

    When ``text`` already holds a non-empty inline manifest it is returned as-is.

    Args:
        text (str): Decoded document text.
        placeholder (bytes): Non-empty stand-in payload.

    Returns:
        str: Text with a manifest element present.

    Raises:
        ValueError: If ``placeholder`` is empty.
    """
    if not placeholder:
        raise ValueError("placeholder manifest must not be empty")
    if scan_inline(text).payload:
        return text
    logger.debug("regions: no manifest present; embedding %d-byte placeholder", len(placeholder))
    return inline.embed(text, placeholder)


def inline_hash_regions(
    text: str,
    *,
    encoding: str = DEFAULT_ENCODING,
    placeholder: bytes = PLACEHOLDER_MANIFEST,
) -> list[HashRegion]:
    """Return the regions a data hash must include and exclude.

    Args:
        text (str): Decoded document text.
        encoding (str): Text encoding of the document.
        placeholder (bytes): Stand-in payload used when ``text`` has no manifest.

    Returns:
        list[HashRegion]: ``[0, off)`` included, ``[off, off+len)`` excluded and
            ``[off+len, total)`` included, in document order.

    Raises:
        ManifestNotFoundError: If no manifest could be located even after padding.
        MalformedPayloadError: If an existing manifest body is not valid base64.
    """
    padded: str = with_placeholder(text, placeholder)
    result: ScanResult = scan_inline(padded, encoding=encoding)
    if result.payload is None or result.marker is None:
        raise ManifestNotFoundError("manifest element not found after placeholder insertion")
    if result.marker.kind is not MarkerKind.INLINE_TAG:
        raise ManifestNotFoundError(f"unexpected marker kind {result.marker.kind.value}")

    total: int = len(padded.encode(encoding))
    start: int = result.marker.offset
    end: int = result.marker.end

    regions: list[HashRegion] = [
        HashRegion(offset=0, length=start, kind=RegionKind.INCLUDED),
        HashRegion(offset=start, length=end - start, kind=RegionKind.EXCLUDED),
        HashRegion(offset=end, length=max(total - end, 0), kind=RegionKind.INCLUDED),
    ]
    logger.debug("regions: %s (total=%d)", regions, total)
    return regions


def validate_partition(regions: Iterable[HashRegion], total: int) -> None:
    """Check that ``regions`` cover ``[0, total)`` exactly once, in order.

    Args:
        regions (Iterable[HashRegion]): Regions in document order.
        total (int): Byte length of the document the regions describe.

    Raises:
        ValueError: On a gap, an overlap, a negative length, or incomplete coverage.
    """
    cursor: int = 0
    for region in regions:
        if region.length < 0:
            raise ValueError(f"negative region length: {region}")
        if region.offset != cursor:
            kind = "gap" if region.offset > cursor else "overlap"
            raise ValueError(f"{kind} at byte {cursor}: next region starts at {region.offset}")
        cursor = region.end
    if cursor != total:
        raise ValueError(f"regions cover {cursor} bytes, document has {total}")


def included_regions(regions: Iterable[HashRegion]) -> list[HashRegion]:
    """Return the regions a data hash must cover."""
    return [r for r in regions if r.kind is RegionKind.INCLUDED]


def excluded_regions(regions: Iterable[HashRegion]) -> list[HashRegion]:
    """Return the regions a data hash must skip."""
    return [r for r in regions if r.kind is RegionKind.EXCLUDED]
