# topmark:header:start
#
#   project      : ProvMark
#   file         : sidecar.py
#   file_relpath : src/provmark/embedding/sidecar.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Sidecar reference manager.

With the sidecar strategy the manifest store lives in a companion file named
after the document (``page.html`` -> ``page.html.c2pa``). The document only
carries a reference element in its head section::

    <link rel="c2pa-manifest" href="page.html.c2pa">

References are resolved relative to the directory holding the document.
Removing a manifest deletes the companion file and leaves the reference
element in place.
"""

from __future__ import annotations

import html
from pathlib import Path
from typing import TYPE_CHECKING

from provmark.config.logging import get_logger
from provmark.constants import (
    C2PA_LINK_REL,
    DEFAULT_ENCODING,
    SIDECAR_SUFFIX,
    TEMP_FILE_PREFIX,
)
from provmark.core.errors import ManifestNotFoundError
from provmark.core.types import HashRegion, RegionKind
from provmark.markers.scanner import find_head_open, find_reference_tag, scan_reference
from provmark.utils.file import atomic_write_bytes, remove_file

if TYPE_CHECKING:
    import re

    from provmark.config.logging import ProvmarkLogger
    from provmark.core.types import ScanResult

logger: ProvmarkLogger = get_logger(__name__)


def sidecar_path(document_path: Path | str) -> Path:
    """Return the companion file path for ``document_path``.

    The suffix is appended to the full file name, so the original extension is kept.
    """
    doc = Path(document_path)
    return doc.with_name(doc.name + SIDECAR_SUFFIX)


def build_reference_tag(href: str) -> str:
    """Return the canonical reference element pointing at ``href``."""
    return f'<link rel="{C2PA_LINK_REL}" href="{html.escape(href, quote=True)}">'


def _newline_style(text: str) -> str:
    if "\r\n" in text:
        return "\r\n"
    if "\r" in text and "\n" not in text:
        return "\r"
    return "\n"


def insert_reference(text: str, href: str) -> str:
    """Return ``text`` carrying exactly one reference element for ``href``.

    An existing reference element is replaced in place. Otherwise the element is
    inserted on its own line right after the ``<head>`` opening tag, or, when the
    document has no head section, prepended at the very top.

    Args:
        text (str): Decoded document text.
        href (str): Reference target, relative to the document's directory.

    Returns:
        str: Updated document text.
    """
    tag: str = build_reference_tag(href)
    nl: str = _newline_style(text)

    existing: re.Match[str] | None = find_reference_tag(text)
    if existing is not None:
        logger.debug("sidecar.reference: replacing existing reference %r", existing.group(0))
        return text[: existing.start()] + tag + text[existing.end() :]

    head: re.Match[str] | None = find_head_open(text)
    if head is not None:
        logger.debug("sidecar.reference: inserting after <head> at char %d", head.end())
        return text[: head.end()] + nl + tag + text[head.end() :]

    logger.warning("sidecar.reference: no <head> found; prepending reference to document")
    return tag + nl + text


def resolve_reference(href: str, base_dir: Path | str) -> Path:
    """Return the filesystem path of a reference target.

    Raises:
        ManifestNotFoundError: If ``href`` is a URL rather than a relative path.
    """
    if "://" in href or href.startswith("data:"):
        raise ManifestNotFoundError(f"remote sidecar references are not supported: {href}")
    return Path(base_dir) / href


def write_sidecar(
    document_path: Path | str,
    payload: bytes,
    *,
    temp_prefix: str = TEMP_FILE_PREFIX,
) -> Path:
    """Write ``payload`` verbatim to the companion file of ``document_path``.

    Any existing companion file is fully overwritten.

    Returns:
        Path: The companion file path.
    """
    target: Path = sidecar_path(document_path)
    atomic_write_bytes(target, payload, prefix=temp_prefix)
    logger.info("sidecar: wrote %d bytes to %s", len(payload), target)
    return target


def write(
    document_path: Path | str,
    payload: bytes,
    *,
    encoding: str = DEFAULT_ENCODING,
    temp_prefix: str = TEMP_FILE_PREFIX,
) -> Path:
    """Store ``payload`` next to the document and reference it from the document.

    Args:
        document_path (Path | str): HTML document to update.
        payload (bytes): Manifest store bytes.
        encoding (str): Text encoding of the document.
        temp_prefix (str): Prefix of temporary files used for atomic replacement.

    Returns:
        Path: The companion file path.
    """
    doc = Path(document_path)
    text: str = doc.read_bytes().decode(encoding)
    target: Path = write_sidecar(doc, payload, temp_prefix=temp_prefix)
    updated: str = insert_reference(text, target.name)
    if updated != text:
        atomic_write_bytes(doc, updated.encode(encoding), prefix=temp_prefix)
    return target


def locate(text: str, base_dir: Path | str, *, encoding: str = DEFAULT_ENCODING) -> Path:
    """Return the companion file path referenced by ``text``.

    Raises:
        ManifestNotFoundError: If ``text`` has no usable reference element.
    """
    result: ScanResult = scan_reference(text, encoding=encoding)
    if result.href is None:
        raise ManifestNotFoundError("no sidecar reference in document")
    return resolve_reference(result.href, base_dir)


def read(text: str, base_dir: Path | str, *, encoding: str = DEFAULT_ENCODING) -> bytes:
    """Return the full content of the companion file referenced by ``text``.

    Raises:
        ManifestNotFoundError: If there is no reference, or the referenced file
            cannot be opened or is empty.
    """
    path: Path = locate(text, base_dir, encoding=encoding)
    try:
        data: bytes = path.read_bytes()
    except OSError as exc:
        raise ManifestNotFoundError(f"cannot open sidecar manifest {path}: {exc}") from exc
    if not data:
        raise ManifestNotFoundError(f"sidecar manifest {path} is empty")
    logger.debug("sidecar: read %d bytes from %s", len(data), path)
    return data


def remove(text: str, base_dir: Path | str, *, encoding: str = DEFAULT_ENCODING) -> bool:
    """Delete the companion file referenced by ``text``, if any.

    The reference element itself is left untouched.

    Returns:
        bool: True if a file was deleted; False when there was nothing to delete.
    """
    try:
        path: Path = locate(text, base_dir, encoding=encoding)
    except ManifestNotFoundError:
        logger.debug("sidecar.remove: no reference; nothing to remove")
        return False
    return remove_file(path)


def hash_regions(
    text: str, base_dir: Path | str, *, encoding: str = DEFAULT_ENCODING
) -> list[HashRegion]:
    """Return the single region covering the whole companion file.

    Raises:
        ManifestNotFoundError: If there is no reference or the file does not exist.
    """
    path: Path = locate(text, base_dir, encoding=encoding)
    if not path.is_file():
        raise ManifestNotFoundError(f"sidecar manifest {path} does not exist")
    size: int = path.stat().st_size
    return [HashRegion(offset=0, length=size, kind=RegionKind.EXCLUDED)]
