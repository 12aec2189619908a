# topmark:header:start
#
#   project      : ProvMark
#   file         : test_scanner.py
#   file_relpath : tests/markers/test_scanner.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Unit tests for the marker scanner.

Covers inline manifest detection (attribute order, quoting, case, whitespace),
insertion points, byte offsets on non-ASCII documents, malformed payloads, and
sidecar reference lookup.
"""

from __future__ import annotations

import pytest

from provmark.core.errors import MalformedPayloadError, ManifestNotFoundError
from provmark.core.types import MarkerKind, ScanResult
from provmark.markers.scanner import (
    byte_offset,
    decode_payload,
    read_inline_payload,
    scan_inline,
    scan_reference,
)

EMBEDDED: str = (
    '<html><head></head><body><script type="application/c2pa-manifest">QUI=</script>'
    "</body></html>"
)


def test_scan_inline_finds_payload_and_offset() -> None:
    """The marker bounds exactly the base64 body of the manifest element."""
    result: ScanResult = scan_inline(EMBEDDED)

    assert result.payload == b"AB"
    assert result.marker is not None
    assert result.marker.kind is MarkerKind.INLINE_TAG
    assert result.marker.offset == EMBEDDED.index("QUI=")
    assert result.marker.length == 4


@pytest.mark.parametrize(
    "tag",
    [
        "<script type='application/c2pa-manifest'>QUI=</script>",
        '<SCRIPT TYPE="application/c2pa-manifest">QUI=</SCRIPT>',
        '<script id="c2pa" type = "application/c2pa-manifest" defer>QUI=</script >',
        '<script\ntype="application/c2pa-manifest"\n>\n   QUI=\n</script>',
    ],
)
def test_scan_inline_tolerates_tag_variants(tag: str) -> None:
    """Quoting, case, extra attributes and whitespace do not hide the manifest."""
    text: str = f"<html><head></head><body>{tag}</body></html>"
    result: ScanResult = scan_inline(text)

    assert result.payload == b"AB"
    assert result.marker is not None
    assert result.marker.offset == text.index("QUI=")
    assert result.marker.length == 4


def test_scan_inline_ignores_other_script_types() -> None:
    """Ordinary scripts are not manifests."""
    text: str = (
        '<html><head></head><body><script type="text/javascript">QUI=</script></body></html>'
    )
    result: ScanResult = scan_inline(text)

    assert result.payload is None
    assert result.marker is not None
    assert result.marker.kind is MarkerKind.INSERTION_POINT


def test_scan_inline_offsets_are_bytes_for_non_ascii() -> None:
    """Offsets count encoded bytes, not characters."""
    text: str = (
        "<html><head><title>Ünïcödé €</title></head><body>"
        '<script type="application/c2pa-manifest">QUI=</script></body></html>'
    )
    result: ScanResult = scan_inline(text)

    assert result.marker is not None
    assert result.marker.offset == text.encode("utf-8").index(b"QUI=")
    assert result.marker.offset > text.index("QUI=")


def test_scan_inline_offsets_follow_the_encoding() -> None:
    """Offsets are computed with the configured encoding."""
    text: str = (
        "<html><head><title>é</title></head><body>"
        '<script type="application/c2pa-manifest">QUI=</script></body></html>'
    )
    result: ScanResult = scan_inline(text, encoding="utf-16-le")

    assert result.marker is not None
    assert result.marker.offset == text.encode("utf-16-le").index("QUI=".encode("utf-16-le"))
    assert result.marker.length == 8


@pytest.mark.parametrize("encoding", ["utf-8-sig", "utf-16"])
def test_marker_lengths_exclude_byte_order_mark(encoding: str) -> None:
    """The byte-order mark counts once, in the offset, never in a marker length."""
    bom_size: int = len("".encode(encoding))
    data: bytes = EMBEDDED.encode(encoding)
    inline_result: ScanResult = scan_inline(EMBEDDED, encoding=encoding)
    linked: str = '<head><link rel="c2pa-manifest" href="a.c2pa"></head>'
    reference: ScanResult = scan_reference(linked, encoding=encoding)

    assert inline_result.marker is not None
    assert inline_result.marker.offset == data.index("QUI=".encode(encoding)[bom_size:])
    assert inline_result.marker.length == len("QUI=".encode(encoding)) - bom_size
    assert reference.marker is not None
    assert reference.marker.length == len("a.c2pa".encode(encoding)) - bom_size


def test_scan_inline_insertion_point_after_head() -> None:
    """Without a manifest, the marker is the end of the ``<head>`` opening tag."""
    text: str = '<html><head lang="en"><title>x</title></head><body></body></html>'
    result: ScanResult = scan_inline(text)

    assert result.payload is None
    assert result.marker is not None
    assert result.marker.kind is MarkerKind.INSERTION_POINT
    assert result.marker.offset == len('<html><head lang="en">')
    assert result.marker.length == 0


def test_scan_inline_header_element_is_not_head() -> None:
    """``<header>`` must not be mistaken for ``<head>``."""
    result: ScanResult = scan_inline("<html><body><header>x</header></body></html>")

    assert result == ScanResult(payload=None, marker=None)


def test_scan_inline_without_head_or_manifest() -> None:
    """A fragment with neither manifest nor head yields an empty result."""
    assert scan_inline("<p>plain fragment</p>") == ScanResult(payload=None, marker=None)


def test_scan_inline_empty_body_counts_as_absent() -> None:
    """An empty manifest element is reported like a missing one."""
    text: str = (
        '<html><head></head><body><script type="application/c2pa-manifest">  </script>'
        "</body></html>"
    )
    result: ScanResult = scan_inline(text)

    assert result.payload is None
    assert result.marker is not None
    assert result.marker.kind is MarkerKind.INSERTION_POINT


def test_scan_inline_first_manifest_wins() -> None:
    """Only the first manifest element is reported."""
    text: str = (
        '<script type="application/c2pa-manifest">QUI=</script>'
        '<script type="application/c2pa-manifest">Q0Q=</script>'
    )
    assert scan_inline(text).payload == b"AB"


@pytest.mark.parametrize("body", ["not*base64!", "QUI", "QU I=", "Ωmega"])
def test_scan_inline_malformed_payload_raises(body: str) -> None:
    """A body that is not strict base64 is an error, not an empty result."""
    text: str = f'<script type="application/c2pa-manifest">{body}</script>'

    with pytest.raises(MalformedPayloadError):
        scan_inline(text)


def test_decode_payload_rejects_non_ascii() -> None:
    """Non-ASCII base64 text surfaces as a malformed payload."""
    with pytest.raises(MalformedPayloadError):
        decode_payload("QUI=é")


def test_read_inline_payload_requires_manifest() -> None:
    """Reading a document without manifest raises ``ManifestNotFoundError``."""
    with pytest.raises(ManifestNotFoundError):
        read_inline_payload("<html><head></head><body></body></html>")


def test_byte_offset_counts_multibyte_prefix() -> None:
    """``byte_offset`` measures the encoded prefix."""
    assert byte_offset("€abc", 1) == 3
    assert byte_offset("€abc", 1, "utf-16-le") == 2
    assert byte_offset("abc", 3) == 3


def test_scan_reference_finds_href() -> None:
    """The reference marker bounds the ``href`` value."""
    text: str = (
        '<html><head>\n<link rel="c2pa-manifest" href="page.html.c2pa">\n</head></html>'
    )
    result: ScanResult = scan_reference(text)

    assert result.href == "page.html.c2pa"
    assert result.payload is None
    assert result.marker is not None
    assert result.marker.kind is MarkerKind.LINK_TAG
    assert result.marker.offset == text.index("page.html.c2pa")
    assert result.marker.length == len("page.html.c2pa")


def test_scan_reference_tag_split_across_lines() -> None:
    """A reference element spread over several lines is still found."""
    text: str = '<head>\n<link\n  href="a.c2pa"\n  rel="c2pa-manifest"\n>\n</head>'

    assert scan_reference(text).href == "a.c2pa"


def test_scan_reference_unescapes_entities() -> None:
    """Character references in ``href`` are decoded."""
    text: str = '<link rel="c2pa-manifest" href="a&amp;b.html.c2pa">'

    assert scan_reference(text).href == "a&b.html.c2pa"


@pytest.mark.parametrize(
    "text",
    [
        '<link rel="stylesheet" href="style.css">',
        "<link rel='c2pa-manifest' href='x.c2pa'>",
        '<link rel="c2pa-manifest">',
        '<link rel="c2pa-manifest" href="  ">',
        "<html><head></head></html>",
    ],
)
def test_scan_reference_absent(text: str) -> None:
    """Only the exact ``rel="c2pa-manifest"`` relation with an href counts."""
    assert scan_reference(text) == ScanResult(payload=None, marker=None)
