# topmark:header:start
#
#   file         : file.py
#   file_relpath : src/provmark/utils/file.py
#   project      : ProvMark
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""File and stream helpers for ProvMark.

Mutations of persistent assets always go through `atomic_write_bytes`: the new
content is written to a temporary file in the target's directory and then moved
over the target with `os.replace`, so readers never observe a partial document.
"""

from __future__ import annotations

import os
import tempfile
from pathlib import Path
from typing import BinaryIO

from provmark.config.logging import get_logger
from provmark.constants import TEMP_FILE_PREFIX

logger = get_logger(__name__)


def read_bytes(stream: BinaryIO) -> bytes:
    """Rewind ``stream`` and return its full content."""
    stream.seek(0)
    return stream.read()


def replace_stream(stream: BinaryIO, data: bytes) -> int:
    """Rewind ``stream``, overwrite it with ``data`` and drop any trailing bytes.

    Args:
        stream (BinaryIO): Writable, seekable output stream.
        data (bytes): New content.

    Returns:
        int: Number of bytes written.
    """
    stream.seek(0)
    written: int = stream.write(data)
    stream.truncate()
    stream.flush()
    logger.trace("replace_stream: wrote %d bytes", written)
    return written


def atomic_write_bytes(path: Path, data: bytes, *, prefix: str = TEMP_FILE_PREFIX) -> int:
    """Replace the file at ``path`` with ``data`` atomically.

    The temporary file is created next to ``path`` so the final rename never
    crosses a filesystem boundary. On failure the temporary file is deleted and
    ``path`` keeps its previous content. Permission bits of an existing target
    are carried over.

    Args:
        path (Path): Destination file.
        data (bytes): Full new content.
        prefix (str): Prefix of the temporary file name.

    Returns:
        int: Number of bytes written.

    Raises:
        OSError: If the temporary file cannot be written or moved into place.
    """
    target: Path = Path(path)
    tmp = tempfile.NamedTemporaryFile(prefix=prefix, dir=target.parent, delete=False)
    tmp_path = Path(tmp.name)
    try:
        with tmp:
            tmp.write(data)
            tmp.flush()
            os.fsync(tmp.fileno())
        if target.exists():
            os.chmod(tmp_path, target.stat().st_mode & 0o7777)
        os.replace(tmp_path, target)
    except BaseException:
        tmp_path.unlink(missing_ok=True)
        raise
    logger.debug("atomic write: %d bytes to %s", len(data), target)
    return len(data)


def remove_file(path: Path) -> bool:
    """Delete ``path`` if it exists.

    Returns:
        bool: True if a file was removed, False if there was nothing to remove.
    """
    try:
        Path(path).unlink()
    except FileNotFoundError:
        logger.debug("remove_file: %s already absent", path)
        return False
    logger.debug("remove_file: removed %s", path)
    return True
