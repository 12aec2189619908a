# topmark:header:start
#
#   project      : ProvMark
#   file         : test_inline_embed.py
#   file_relpath : tests/embedding/test_inline_embed.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Inline embedder/remover: placement, replacement and whitespace handling."""

from __future__ import annotations

from provmark.embedding import inline
from provmark.markers.scanner import scan_inline
from tests.html_samples import MINIMAL_HTML, PAGE_HTML, TAG_AB


def count_manifests(text: str) -> int:
    """Return the number of manifest elements in ``text``."""
    return text.count('type="application/c2pa-manifest"')


def test_build_manifest_tag_is_canonical() -> None:
    """The written element uses padded standard base64."""
    assert inline.build_manifest_tag(b"AB") == TAG_AB
    assert inline.encode_payload(b"\xff\xfe\xfd") == "//79"


def test_embed_minimal_document() -> None:
    """The manifest lands right before ``</body>``."""
    result: str = inline.embed(MINIMAL_HTML, b"AB")

    assert result == f"<html><head></head><body>{TAG_AB}</body></html>"


def test_embed_drops_whitespace_before_body_close() -> None:
    """Whitespace before ``</body>`` is consumed so blank lines do not pile up."""
    text: str = "<html><body>\n  <p>x</p>\n  \n</body></html>"

    assert inline.embed(text, b"AB") == f"<html><body>\n  <p>x</p>{TAG_AB}</body></html>"


def test_embed_keeps_original_body_close_spelling() -> None:
    """The closing tag is preserved as written."""
    text: str = "<HTML><BODY>x</BODY ></HTML>"

    assert inline.embed(text, b"AB") == f"<HTML><BODY>x{TAG_AB}</BODY ></HTML>"


def test_embed_replaces_existing_manifest() -> None:
    """An existing manifest (and surrounding whitespace) is replaced, not duplicated."""
    first: str = inline.embed(PAGE_HTML, b"first payload")
    second: str = inline.embed(first, b"second payload")

    assert count_manifests(second) == 1
    assert scan_inline(second).payload == b"second payload"


def test_embed_replaces_empty_manifest_element() -> None:
    """An empty manifest element is replaced in place."""
    text: str = (
        '<html><head></head><body>\n<script type="application/c2pa-manifest"></script>\n'
        "</body></html>"
    )
    result: str = inline.embed(text, b"AB")

    assert result == f"<html><head></head><body>{TAG_AB}</body></html>"


def test_embed_same_payload_twice_is_stable() -> None:
    """Embedding the same payload again does not change the document."""
    once: str = inline.embed(PAGE_HTML, b"payload")

    assert inline.embed(once, b"payload") == once


def test_embed_without_body_appends() -> None:
    """Documents without ``</body>`` get the element appended after trimming."""
    text: str = "<p>fragment</p>\n\n"
    result: str = inline.embed(text, b"AB")

    assert result == f"<p>fragment</p>{TAG_AB}"
    assert scan_inline(result).payload == b"AB"


def test_embed_handles_backslashes_in_document() -> None:
    """Document text is never interpreted as a regex replacement template."""
    text: str = (
        '<body>\\1 \\g<0><script type="application/c2pa-manifest">QUI=</script></body>'
    )
    result: str = inline.embed(text, b"CD")

    assert result.startswith("<body>\\1 \\g<0>")
    assert scan_inline(result).payload == b"CD"


def test_remove_deletes_manifest_and_surrounding_whitespace() -> None:
    """Removal leaves no manifest and no stray whitespace behind."""
    text: str = f"<html><body>\n  <p>x</p>\n  {TAG_AB}\n</body></html>"
    result: str = inline.remove(text)

    assert result == "<html><body>\n  <p>x</p></body></html>"
    assert not inline.has_manifest_tag(result)


def test_remove_every_manifest_element() -> None:
    """All manifest elements are removed, not just the first."""
    text: str = f"<body>{TAG_AB}<p>x</p>{TAG_AB}</body>"

    assert inline.remove(text) == "<body><p>x</p></body>"


def test_remove_without_manifest_is_identity() -> None:
    """A document without manifest is returned unchanged."""
    assert inline.remove(PAGE_HTML) == PAGE_HTML


def test_embed_then_remove_restores_minimal_document() -> None:
    """Embedding into a tight document and removing again restores it exactly."""
    assert inline.remove(inline.embed(MINIMAL_HTML, b"AB")) == MINIMAL_HTML


def test_remove_manifest_elements_separated_by_whitespace() -> None:
    """An element directly after a removed one's trailing whitespace is removed too."""
    text: str = f"<body>{TAG_AB}  \n  {TAG_AB}\n</body>"

    assert inline.remove(text) == "<body></body>"


def test_embed_and_remove_with_long_whitespace_runs() -> None:
    """Long whitespace runs that precede no tag are searched in linear time."""
    spaces: str = " " * 200_000
    text: str = f"<html><body>{spaces}x</body></html>"

    embedded: str = inline.embed(text, b"AB")
    assert embedded == f"<html><body>{spaces}x{TAG_AB}</body></html>"
    assert inline.remove(embedded) == text
    assert inline.remove(f"<body>{spaces}x{spaces}{TAG_AB}{spaces}</body>") == (
        f"<body>{spaces}x</body>"
    )
