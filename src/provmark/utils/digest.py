# topmark:header:start
#
#   file         : digest.py
#   file_relpath : src/provmark/utils/digest.py
#   project      : ProvMark
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Content digests over hash regions."""

from __future__ import annotations

import hashlib
from typing import TYPE_CHECKING

from provmark.core.types import RegionKind

if TYPE_CHECKING:
    from collections.abc import Iterable

    from provmark.core.types import HashRegion


def digest_included(
    data: bytes,
    regions: Iterable[HashRegion],
    algorithm: str = "sha256",
) -> str:
    """Return the hex digest of the bytes covered by INCLUDED regions.

    Args:
        data (bytes): Encoded document the regions describe.
        regions (Iterable[HashRegion]): Regions in document order.
        algorithm (str): Any algorithm name accepted by `hashlib.new`.

    Returns:
        str: Hex digest.

    Raises:
        ValueError: If a region lies outside ``data`` or the algorithm is unknown.
    """
    hasher = hashlib.new(algorithm)
    for region in regions:
        if region.kind is not RegionKind.INCLUDED:
            continue
        if region.offset < 0 or region.end > len(data):
            raise ValueError(f"region {region} lies outside {len(data)}-byte document")
        hasher.update(data[region.offset : region.end])
    return hasher.hexdigest()
