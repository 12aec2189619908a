# topmark:header:start
#
#   project      : ProvMark
#   file         : types.py
#   file_relpath : src/provmark/core/types.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Value types for markers, hash regions and embedding strategies.

All offsets and lengths are **byte** positions in the encoded document, so
they can be handed unchanged to a downstream hashing stage.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import NamedTuple


class Strategy(str, Enum):
    """Embedding strategy, one per registered backend."""

    INLINE = "inline"
    SIDECAR = "sidecar"

    @classmethod
    def parse(cls, value: str | Strategy) -> Strategy:
        """Return the strategy named ``value`` (case-insensitive).

        Args:
            value (str | Strategy): Strategy name or member.

        Returns:
            Strategy: The matching member.

        Raises:
            ValueError: If ``value`` names no strategy.
        """
        if isinstance(value, Strategy):
            return value
        try:
            return cls(value.strip().lower())
        except ValueError:
            names = ", ".join(m.value for m in cls)
            raise ValueError(f"unknown strategy {value!r} (expected one of: {names})") from None


class MarkerKind(Enum):
    """What a located `Marker` denotes."""

    INLINE_TAG = "inline_tag"
    LINK_TAG = "link_tag"
    INSERTION_POINT = "insertion_point"


@dataclass(frozen=True)
class Marker:
    """A located (or hypothetical) position in a document.

    Attributes:
        kind (MarkerKind): What the marker denotes.
        offset (int): Byte offset. For ``INLINE_TAG`` the start of the base64 body,
            for ``LINK_TAG`` the start of the ``href`` value, for
            ``INSERTION_POINT`` the position where new content goes.
        length (int): Byte length of the bounded text; always 0 for ``INSERTION_POINT``.
    """

    kind: MarkerKind
    offset: int
    length: int = 0

    @property
    def end(self) -> int:
        """Return the byte offset just past the marker."""
        return self.offset + self.length


class RegionKind(Enum):
    """Classification of a hash region."""

    EXCLUDED = "excluded"
    INCLUDED = "included"


@dataclass(frozen=True)
class HashRegion:
    """A byte range classified for inclusion in or exclusion from a content hash."""

    offset: int
    length: int
    kind: RegionKind

    @property
    def end(self) -> int:
        """Return the byte offset just past the region."""
        return self.offset + self.length

    def to_dict(self) -> dict[str, int | str]:
        """Return a JSON-friendly representation."""
        return {"offset": self.offset, "length": self.length, "kind": self.kind.value}


class ScanResult(NamedTuple):
    """Outcome of scanning a document for a manifest.

    Attributes:
        payload (bytes | None): Decoded manifest, or ``None`` when absent.
        marker (Marker | None): The manifest marker, an insertion point, or ``None``.
        href (str | None): Sidecar reference target (sidecar scans only).
    """

    payload: bytes | None
    marker: Marker | None
    href: str | None = None
