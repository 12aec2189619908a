# topmark:header:start
#
#   project      : ProvMark
#   file         : errors.py
#   file_relpath : src/provmark/core/errors.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Exceptions raised by the ProvMark core.

I/O failures are not wrapped: they surface as the `OSError` raised by the
underlying stream or file. Text decoding failures surface as
`UnicodeDecodeError`. The CLI maps all of these to exit codes (see
`provmark.cli.errors`).
"""

from __future__ import annotations


class ProvmarkError(Exception):
    """Base class for all ProvMark core errors."""


class ManifestNotFoundError(ProvmarkError):
    """No manifest marker, no sidecar reference, or the referenced file is missing."""

    def __init__(self, message: str = "no C2PA manifest found") -> None:
        super().__init__(message)


class MalformedPayloadError(ProvmarkError):
    """A manifest marker is present but its body is not valid base64."""


class UnsupportedOperationError(ProvmarkError):
    """The requested backend, asset type or capability is not available."""


class ConfigError(ProvmarkError):
    """Configuration file is unreadable, malformed, or holds invalid values."""
