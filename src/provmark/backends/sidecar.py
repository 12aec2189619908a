# topmark:header:start
#
#   project      : ProvMark
#   file         : sidecar.py
#   file_relpath : src/provmark/backends/sidecar.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Sidecar backend: the manifest lives in a companion ``.c2pa`` file.

Stream operations cannot derive file locations from a stream, so the backend
is constructed with the context it needs:

- ``base_dir``: directory against which references are resolved when reading,
  removing or hashing from a stream (default: the working directory);
- ``document_path``: the document a stream-level write belongs to; without
  it, `write_manifest` raises `UnsupportedOperationError`.

Path operations derive both from the path they are given.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, BinaryIO

from provmark.backends.base import BackendBase
from provmark.backends.registry import register_backend
from provmark.config.logging import get_logger
from provmark.core.errors import ManifestNotFoundError, UnsupportedOperationError
from provmark.core.types import Strategy
from provmark.embedding import sidecar
from provmark.markers.scanner import scan_reference
from provmark.utils.file import read_bytes, replace_stream

if TYPE_CHECKING:
    from provmark.config.logging import ProvmarkLogger
    from provmark.config.model import Config
    from provmark.core.types import HashRegion, ScanResult

logger: ProvmarkLogger = get_logger(__name__)


@register_backend(Strategy.SIDECAR)
class SidecarBackend(BackendBase):
    """Store manifests in ``<document>.c2pa`` and reference them with a ``<link>`` element.

    Args:
        config (Config | None): Effective configuration; defaults when ``None``.
        base_dir (Path | None): Directory for resolving references from streams.
        document_path (Path | None): Document that stream-level writes belong to.
    """

    strategy = Strategy.SIDECAR

    def __init__(
        self,
        config: Config | None = None,
        *,
        base_dir: Path | None = None,
        document_path: Path | None = None,
    ) -> None:
        super().__init__(config)
        self.document_path: Path | None = Path(document_path) if document_path else None
        if base_dir is not None:
            self.base_dir: Path = Path(base_dir)
        elif self.document_path is not None:
            self.base_dir = self.document_path.parent
        else:
            self.base_dir = Path.cwd()

    def locate(self, stream: BinaryIO) -> ScanResult:
        """Scan for the reference element (the payload is not loaded)."""
        return scan_reference(self._read_text(stream), encoding=self.encoding)

    def read_manifest(self, stream: BinaryIO) -> bytes:
        """Return the companion file referenced by the document in ``stream``.

        Raises:
            ManifestNotFoundError: If there is no reference or the file cannot be opened.
        """
        return sidecar.read(self._read_text(stream), self.base_dir, encoding=self.encoding)

    def write_manifest(self, src: BinaryIO, dst: BinaryIO, payload: bytes) -> None:
        """Write ``payload`` to the companion file and the referencing document to ``dst``.

        Raises:
            UnsupportedOperationError: If the backend has no ``document_path``.
        """
        if self.document_path is None:
            raise UnsupportedOperationError(
                "sidecar stream writes need a document path to name the companion file"
            )
        text: str = self._read_text(src)
        target: Path = sidecar.write_sidecar(
            self.document_path, payload, temp_prefix=self.config.temp_prefix
        )
        replace_stream(dst, sidecar.insert_reference(text, target.name).encode(self.encoding))

    def remove_manifest(self, src: BinaryIO, dst: BinaryIO) -> bool:
        """Delete the referenced companion file and copy the document unchanged to ``dst``.

        Returns:
            bool: True if a companion file was deleted.
        """
        data: bytes = read_bytes(src)
        removed: bool = sidecar.remove(
            data.decode(self.encoding), self.base_dir, encoding=self.encoding
        )
        replace_stream(dst, data)
        return removed

    def hash_regions(self, stream: BinaryIO) -> list[HashRegion]:
        """Return one region spanning the whole companion file."""
        return sidecar.hash_regions(self._read_text(stream), self.base_dir, encoding=self.encoding)

    def updated_text(self, text: str, payload: bytes, *, document_path: Path) -> str:
        """Return ``text`` carrying the reference to the companion file of ``document_path``."""
        return sidecar.insert_reference(text, sidecar.sidecar_path(document_path).name)

    def stripped_text(self, text: str) -> str:
        """Return ``text`` unchanged: removal only deletes the companion file."""
        return text

    def would_change(self, path: Path, payload: bytes) -> bool:
        """Return True if the reference or the companion file content would change."""
        text: str = self._read_path_text(path)
        if self.updated_text(text, payload, document_path=Path(path)) != text:
            return True
        target: Path = sidecar.sidecar_path(path)
        return not target.is_file() or target.read_bytes() != payload

    def has_manifest(self, path: Path) -> bool:
        """Return True if the document at ``path`` references an existing companion file."""
        try:
            target: Path = sidecar.locate(
                self._read_path_text(path), Path(path).parent, encoding=self.encoding
            )
        except ManifestNotFoundError:
            return False
        return target.is_file()

    def read_manifest_file(self, path: Path) -> bytes:
        """Return the companion file referenced by the document at ``path``."""
        return sidecar.read(self._read_path_text(path), Path(path).parent, encoding=self.encoding)

    def save_manifest(self, path: Path, payload: bytes) -> None:
        """Write the companion file and reference it from the document at ``path``."""
        sidecar.write(
            path,
            payload,
            encoding=self.encoding,
            temp_prefix=self.config.temp_prefix,
        )

    def remove_manifest_file(self, path: Path) -> bool:
        """Delete the companion file referenced by the document at ``path``.

        Returns:
            bool: True if a companion file was deleted.
        """
        removed: bool = sidecar.remove(
            self._read_path_text(path), Path(path).parent, encoding=self.encoding
        )
        if removed:
            logger.info("sidecar: removed companion manifest of %s", path)
        return removed

    def hash_regions_file(self, path: Path) -> list[HashRegion]:
        """Return one region spanning the companion file of the document at ``path``."""
        return sidecar.hash_regions(
            self._read_path_text(path), Path(path).parent, encoding=self.encoding
        )
