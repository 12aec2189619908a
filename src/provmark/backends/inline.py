# topmark:header:start
#
#   project      : ProvMark
#   file         : inline.py
#   file_relpath : src/provmark/backends/inline.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Inline backend: the manifest is embedded as base64 inside the document."""

from __future__ import annotations

import io
from pathlib import Path
from typing import TYPE_CHECKING, BinaryIO

from provmark.backends.base import BackendBase
from provmark.backends.registry import register_backend
from provmark.config.logging import get_logger
from provmark.core.types import Strategy
from provmark.embedding import inline
from provmark.embedding.regions import inline_hash_regions
from provmark.markers.scanner import read_inline_payload, scan_inline
from provmark.utils.file import atomic_write_bytes, replace_stream

if TYPE_CHECKING:
    from provmark.config.logging import ProvmarkLogger
    from provmark.core.types import HashRegion, ScanResult

logger: ProvmarkLogger = get_logger(__name__)


@register_backend(Strategy.INLINE)
class InlineBackend(BackendBase):
    """Embed manifests in a ``<script type="application/c2pa-manifest">`` element."""

    strategy = Strategy.INLINE

    def locate(self, stream: BinaryIO) -> ScanResult:
        """Scan for the inline manifest or an insertion point."""
        return scan_inline(self._read_text(stream), encoding=self.encoding)

    def read_manifest(self, stream: BinaryIO) -> bytes:
        """Return the decoded inline manifest.

        Raises:
            ManifestNotFoundError: If the document has no non-empty manifest.
            MalformedPayloadError: If the manifest body is not valid base64.
        """
        return read_inline_payload(self._read_text(stream), encoding=self.encoding)

    def write_manifest(self, src: BinaryIO, dst: BinaryIO, payload: bytes) -> None:
        """Write the document in ``src`` with ``payload`` embedded to ``dst``."""
        updated: str = inline.embed(self._read_text(src), payload)
        replace_stream(dst, updated.encode(self.encoding))

    def remove_manifest(self, src: BinaryIO, dst: BinaryIO) -> bool:
        """Write the document without inline manifest elements to ``dst``.

        Returns:
            bool: True if a manifest element was removed.
        """
        text: str = self._read_text(src)
        cleaned: str = inline.remove(text)
        replace_stream(dst, cleaned.encode(self.encoding))
        return cleaned != text

    def hash_regions(self, stream: BinaryIO) -> list[HashRegion]:
        """Return the three inline hash regions (see `provmark.embedding.regions`)."""
        return inline_hash_regions(
            self._read_text(stream),
            encoding=self.encoding,
            placeholder=self.config.placeholder,
        )

    def updated_text(self, text: str, payload: bytes, *, document_path: Path) -> str:
        """Return ``text`` with ``payload`` embedded inline."""
        return inline.embed(text, payload)

    def stripped_text(self, text: str) -> str:
        """Return ``text`` without inline manifest elements."""
        return inline.remove(text)

    def would_change(self, path: Path, payload: bytes) -> bool:
        """Return True if embedding ``payload`` would alter the document at ``path``."""
        text: str = self._read_path_text(path)
        return inline.embed(text, payload) != text

    def has_manifest(self, path: Path) -> bool:
        """Return True if the document at ``path`` has an inline manifest element."""
        return inline.has_manifest_tag(self._read_path_text(path))

    def read_manifest_file(self, path: Path) -> bytes:
        """Return the inline manifest of the document at ``path``."""
        with Path(path).open("rb") as fh:
            return self.read_manifest(fh)

    def save_manifest(self, path: Path, payload: bytes) -> None:
        """Embed ``payload`` in the document at ``path`` and replace it atomically."""
        out = io.BytesIO()
        with Path(path).open("rb") as fh:
            self.write_manifest(fh, out, payload)
        atomic_write_bytes(Path(path), out.getvalue(), prefix=self.config.temp_prefix)
        logger.info("inline: embedded %d-byte manifest in %s", len(payload), path)

    def remove_manifest_file(self, path: Path) -> bool:
        """Remove inline manifests from the document at ``path``.

        The file is only rewritten when something was removed.

        Returns:
            bool: True if a manifest element was removed.
        """
        out = io.BytesIO()
        with Path(path).open("rb") as fh:
            changed: bool = self.remove_manifest(fh, out)
        if changed:
            atomic_write_bytes(Path(path), out.getvalue(), prefix=self.config.temp_prefix)
            logger.info("inline: removed manifest from %s", path)
        return changed

    def hash_regions_file(self, path: Path) -> list[HashRegion]:
        """Return the hash regions of the document at ``path``."""
        with Path(path).open("rb") as fh:
            return self.hash_regions(fh)
