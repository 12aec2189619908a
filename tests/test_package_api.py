# topmark:header:start
#
#   project      : ProvMark
#   file         : test_package_api.py
#   file_relpath : tests/test_package_api.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""The names re-exported by the top-level ``provmark`` package."""

from __future__ import annotations

from typing import TYPE_CHECKING

import provmark
from tests.html_samples import PAGE_HTML

if TYPE_CHECKING:
    from collections.abc import Callable
    from pathlib import Path


def test_all_names_resolve() -> None:
    """Every name listed in ``__all__`` is importable from the package."""
    for name in provmark.__all__:
        assert getattr(provmark, name) is not None, name


def test_inline_workflow_through_package() -> None:
    """Embed, scan and measure an inline manifest using only top-level names."""
    text: str = provmark.inline.embed(PAGE_HTML, b"manifest")

    result: provmark.ScanResult = provmark.scan_inline(text)
    assert result.payload == b"manifest"
    assert provmark.read_inline_payload(text) == b"manifest"

    regions: list[provmark.HashRegion] = provmark.inline_hash_regions(text)
    assert [r.kind for r in regions].count(provmark.RegionKind.EXCLUDED) == 1


def test_sidecar_backend_through_package(write_html: Callable[..., Path]) -> None:
    """`get_backend` returns a working backend for the sidecar strategy."""
    path: Path = write_html()
    backend = provmark.get_backend(provmark.Strategy.SIDECAR)

    backend.save_manifest(path, b"manifest")

    assert backend.read_manifest_file(path) == b"manifest"
    assert (path.parent / "page.html.c2pa").read_bytes() == b"manifest"


def test_errors_share_a_base_class() -> None:
    """Library errors can be caught with `ProvmarkError`."""
    for error in (
        provmark.ConfigError,
        provmark.MalformedPayloadError,
        provmark.ManifestNotFoundError,
        provmark.UnsupportedOperationError,
    ):
        assert issubclass(error, provmark.ProvmarkError)
