# topmark:header:start
#
#   project      : ProvMark
#   file         : base.py
#   file_relpath : src/provmark/backends/base.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Backend interface shared by the inline and sidecar strategies.

A backend implements one capability set (locate, read, write, remove,
hash regions) in two forms:

- **stream** operations work on binary file objects (``seek``/``read``/
  ``write``/``truncate``) and never touch the filesystem themselves, except
  for the sidecar companion file;
- **path** operations open the asset, run the stream operation, and replace
  the asset atomically (temp file + ``os.replace``), so a failure leaves the
  original untouched.

I/O errors from streams and files propagate unchanged as `OSError`.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, BinaryIO, ClassVar, Protocol, runtime_checkable

from provmark.config.logging import get_logger
from provmark.config.model import Config
from provmark.constants import SUPPORTED_EXTENSIONS, SUPPORTED_TYPES
from provmark.utils.file import read_bytes

if TYPE_CHECKING:
    from provmark.config.logging import ProvmarkLogger
    from provmark.core.types import HashRegion, ScanResult, Strategy

logger: ProvmarkLogger = get_logger(__name__)


@runtime_checkable
class ManifestBackend(Protocol):
    """Capability set implemented by every embedding strategy."""

    strategy: ClassVar[Strategy]

    def supports(self, asset_type: str) -> bool:
        """Return True if ``asset_type`` (extension, name or MIME type) is handled."""
        ...

    def locate(self, stream: BinaryIO) -> ScanResult:
        """Scan ``stream`` for the manifest marker without loading the payload file."""
        ...

    def read_manifest(self, stream: BinaryIO) -> bytes:
        """Return the manifest stored for the document in ``stream``."""
        ...

    def write_manifest(self, src: BinaryIO, dst: BinaryIO, payload: bytes) -> None:
        """Write the document in ``src`` with ``payload`` embedded to ``dst``."""
        ...

    def remove_manifest(self, src: BinaryIO, dst: BinaryIO) -> bool:
        """Write the document in ``src`` without its manifest to ``dst``."""
        ...

    def hash_regions(self, stream: BinaryIO) -> list[HashRegion]:
        """Return the regions a data hash must include and exclude."""
        ...

    def updated_text(self, text: str, payload: bytes, *, document_path: Path) -> str:
        """Return the document text as it would read after embedding ``payload``."""
        ...

    def stripped_text(self, text: str) -> str:
        """Return the document text as it would read after removing the manifest."""
        ...

    def would_change(self, path: Path, payload: bytes) -> bool:
        """Return True if embedding ``payload`` in ``path`` would change anything."""
        ...

    def has_manifest(self, path: Path) -> bool:
        """Return True if removing the manifest of ``path`` would change anything."""
        ...

    def read_manifest_file(self, path: Path) -> bytes:
        """Path form of `read_manifest`."""
        ...

    def save_manifest(self, path: Path, payload: bytes) -> None:
        """Embed ``payload`` in the asset at ``path``, replacing it atomically."""
        ...

    def remove_manifest_file(self, path: Path) -> bool:
        """Remove the manifest of the asset at ``path``; absent manifests are a no-op."""
        ...

    def hash_regions_file(self, path: Path) -> list[HashRegion]:
        """Path form of `hash_regions`."""
        ...


class BackendBase:
    """Configuration and text-decoding helpers shared by the concrete backends.

    Args:
        config (Config | None): Effective configuration; defaults when ``None``.
    """

    strategy: ClassVar[Strategy]

    def __init__(self, config: Config | None = None) -> None:
        self.config: Config = config or Config.from_defaults()

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(strategy={self.strategy.value!r})"

    @property
    def encoding(self) -> str:
        """Text encoding of documents handled by this backend."""
        return self.config.encoding

    @property
    def supported_types(self) -> tuple[str, ...]:
        """Asset type names and MIME types handled by this backend."""
        return SUPPORTED_TYPES

    def supports(self, asset_type: str) -> bool:
        """Return True if ``asset_type`` is an HTML name, MIME type or extension."""
        value: str = asset_type.strip().lower()
        if value in SUPPORTED_TYPES:
            return True
        if not value.startswith("."):
            value = "." + value
        return value in SUPPORTED_EXTENSIONS

    def _read_text(self, stream: BinaryIO) -> str:
        return read_bytes(stream).decode(self.encoding)

    def _read_path_text(self, path: Path) -> str:
        with Path(path).open("rb") as fh:
            return self._read_text(fh)
