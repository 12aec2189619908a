# topmark:header:start
#
#   project      : ProvMark
#   file         : test_sidecar_manager.py
#   file_relpath : tests/embedding/test_sidecar_manager.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Sidecar reference manager: companion files and ``<link>`` references."""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING

import pytest

from provmark.core.errors import ManifestNotFoundError
from provmark.core.types import HashRegion, RegionKind
from provmark.embedding import sidecar
from provmark.markers.scanner import scan_reference
from tests.html_samples import MINIMAL_HTML, PAGE_HTML

if TYPE_CHECKING:
    from pathlib import Path

REFERENCE: str = '<link rel="c2pa-manifest" href="page.html.c2pa">'


def test_sidecar_path_keeps_extension(tmp_path: Path) -> None:
    """The suffix is appended to the full file name."""
    assert sidecar.sidecar_path(tmp_path / "page.html") == tmp_path / "page.html.c2pa"
    assert sidecar.sidecar_path("site/index.htm").name == "index.htm.c2pa"


def test_build_reference_tag_escapes_href() -> None:
    """Special characters in the target are attribute-escaped."""
    assert sidecar.build_reference_tag('a"b&c.c2pa') == (
        '<link rel="c2pa-manifest" href="a&quot;b&amp;c.c2pa">'
    )


def test_insert_reference_after_head() -> None:
    """The reference goes on its own line right after ``<head>``."""
    result: str = sidecar.insert_reference(MINIMAL_HTML, "page.html.c2pa")

    assert result == f"<html><head>\n{REFERENCE}</head><body></body></html>"


def test_insert_reference_keeps_crlf() -> None:
    """The inserted line break follows the document's newline style."""
    text: str = "<html>\r\n<head>\r\n</head>\r\n</html>\r\n"

    assert sidecar.insert_reference(text, "page.html.c2pa") == (
        f"<html>\r\n<head>\r\n{REFERENCE}\r\n</head>\r\n</html>\r\n"
    )


def test_insert_reference_without_head_prepends() -> None:
    """Documents without a head section get the reference at the top."""
    assert sidecar.insert_reference("<p>x</p>\n", "page.html.c2pa") == f"{REFERENCE}\n<p>x</p>\n"


def test_insert_reference_replaces_existing() -> None:
    """An existing reference is replaced, never duplicated."""
    text: str = '<head>\n<link href="old.c2pa" rel="c2pa-manifest" />\n</head>'
    result: str = sidecar.insert_reference(text, "page.html.c2pa")

    assert result == f"<head>\n{REFERENCE}\n</head>"
    assert sidecar.insert_reference(result, "page.html.c2pa") == result


def test_write_creates_sidecar_and_reference(write_html: Callable[..., Path]) -> None:
    """Writing stores the payload verbatim and adds exactly one reference."""
    doc: Path = write_html(PAGE_HTML)

    target: Path = sidecar.write(doc, b"\x00manifest\xff")

    assert target == doc.with_name("page.html.c2pa")
    assert target.read_bytes() == b"\x00manifest\xff"
    text: str = doc.read_text("utf-8")
    assert text.count('rel="c2pa-manifest"') == 1
    assert scan_reference(text).href == "page.html.c2pa"


def test_write_twice_overwrites_sidecar(write_html: Callable[..., Path]) -> None:
    """A second write replaces the companion content and keeps one reference."""
    doc: Path = write_html(PAGE_HTML)
    sidecar.write(doc, b"a much longer first payload")
    after_first: str = doc.read_text("utf-8")

    sidecar.write(doc, b"short")

    assert sidecar.sidecar_path(doc).read_bytes() == b"short"
    assert doc.read_text("utf-8") == after_first


def test_read_returns_sidecar_content(write_html: Callable[..., Path]) -> None:
    """Reading follows the reference relative to the document directory."""
    doc: Path = write_html(PAGE_HTML)
    sidecar.write(doc, b"store")

    assert sidecar.read(doc.read_text("utf-8"), doc.parent) == b"store"


def test_read_without_reference_raises(tmp_path: Path) -> None:
    """A document without reference has no manifest."""
    with pytest.raises(ManifestNotFoundError):
        sidecar.read(PAGE_HTML, tmp_path)


def test_read_missing_sidecar_raises(tmp_path: Path) -> None:
    """A dangling reference is reported as a missing manifest."""
    text: str = sidecar.insert_reference(PAGE_HTML, "page.html.c2pa")

    with pytest.raises(ManifestNotFoundError):
        sidecar.read(text, tmp_path)


def test_read_empty_sidecar_raises(tmp_path: Path) -> None:
    """An empty companion file does not count as a manifest."""
    (tmp_path / "page.html.c2pa").write_bytes(b"")
    text: str = sidecar.insert_reference(PAGE_HTML, "page.html.c2pa")

    with pytest.raises(ManifestNotFoundError):
        sidecar.read(text, tmp_path)


@pytest.mark.parametrize("href", ["https://example.com/m.c2pa", "data:application/c2pa,AA"])
def test_resolve_reference_rejects_remote_targets(tmp_path: Path, href: str) -> None:
    """Only local, relative targets are resolved."""
    with pytest.raises(ManifestNotFoundError):
        sidecar.resolve_reference(href, tmp_path)


def test_remove_deletes_sidecar_only(write_html: Callable[..., Path]) -> None:
    """Removal deletes the companion file and leaves the reference in place."""
    doc: Path = write_html(PAGE_HTML)
    sidecar.write(doc, b"store")
    text: str = doc.read_text("utf-8")

    assert sidecar.remove(text, doc.parent) is True
    assert not sidecar.sidecar_path(doc).exists()
    assert doc.read_text("utf-8") == text
    assert sidecar.remove(text, doc.parent) is False


def test_remove_without_reference_is_noop(tmp_path: Path) -> None:
    """Nothing to remove is not an error."""
    assert sidecar.remove(PAGE_HTML, tmp_path) is False


def test_hash_regions_cover_sidecar(write_html: Callable[..., Path]) -> None:
    """The single excluded region spans the whole companion file."""
    doc: Path = write_html(PAGE_HTML)
    sidecar.write(doc, b"0123456789")

    regions: list[HashRegion] = sidecar.hash_regions(doc.read_text("utf-8"), doc.parent)

    assert regions == [HashRegion(offset=0, length=10, kind=RegionKind.EXCLUDED)]


def test_hash_regions_missing_sidecar_raises(tmp_path: Path) -> None:
    """Hash regions need an existing companion file."""
    text: str = sidecar.insert_reference(PAGE_HTML, "page.html.c2pa")

    with pytest.raises(ManifestNotFoundError):
        sidecar.hash_regions(text, tmp_path)
