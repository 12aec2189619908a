# topmark:header:start
#
#   project      : ProvMark
#   file         : errors.py
#   file_relpath : src/provmark/cli/errors.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Exceptions for ProvMark CLI.

Usage:
    Commands run core operations inside `translate_errors`, which converts core
    exceptions and `OSError`s into the `ProvmarkCliError` subclass carrying the
    matching exit code.

Styling:
    Exceptions prefer the project console if available (see `show()`); if no console
    is present in the Click context, they fall back to Click's default styling.
"""

from __future__ import annotations

from contextlib import contextmanager
from typing import IO, TYPE_CHECKING, Any

import click

from provmark.cli.exit_codes import ExitCode
from provmark.core.errors import (
    ConfigError,
    MalformedPayloadError,
    ManifestNotFoundError,
    UnsupportedOperationError,
)

if TYPE_CHECKING:
    from collections.abc import Iterator
    from pathlib import Path


class ProvmarkCliError(click.ClickException):
    """Base class for all ProvMark CLI errors."""

    exit_code = ExitCode.FAILURE

    def format_message(self) -> str:  # pragma: no cover - trivial
        """Return the plain error message text (colorized in `show()`)."""
        return str(getattr(self, "message", ""))

    def show(self, file: IO[Any] | None = None) -> None:  # pragma: no cover - Click prints errors
        """Display the error using the project console if available."""
        ctx = click.get_current_context(silent=True)
        console = ctx.obj.get("console") if ctx is not None and isinstance(ctx.obj, dict) else None
        if console is not None:
            console.error(console.styled(f"Error: {self.format_message()}", fg="bright_red"))
            return
        super().show(file)


class ProvmarkUsageError(ProvmarkCliError):
    """Error for command-line invocation errors (invalid flags/args)."""

    exit_code = ExitCode.USAGE_ERROR


class ProvmarkConfigError(ProvmarkCliError):
    """Error for configuration errors (missing/invalid/malformed config)."""

    exit_code = ExitCode.CONFIG_ERROR


class ProvmarkFileNotFoundError(ProvmarkCliError):
    """Error when input path does not exist."""

    exit_code = ExitCode.FILE_NOT_FOUND


class ProvmarkPermissionDeniedError(ProvmarkCliError):
    """Error for insufficient permissions (read/write)."""

    exit_code = ExitCode.PERMISSION_DENIED


class ProvmarkIOError(ProvmarkCliError):
    """Error for I/O errors reading/writing files."""

    exit_code = ExitCode.IO_ERROR


class ProvmarkEncodingError(ProvmarkCliError):
    """Error for text decoding/encoding errors (e.g., UnicodeDecodeError)."""

    exit_code = ExitCode.ENCODING_ERROR


class ProvmarkUnsupportedError(ProvmarkCliError):
    """Error for unsupported asset types or backend capabilities."""

    exit_code = ExitCode.UNSUPPORTED_FILE_TYPE


class ProvmarkManifestNotFoundError(ProvmarkCliError):
    """Error when the document carries no manifest."""

    exit_code = ExitCode.MANIFEST_NOT_FOUND


class ProvmarkMalformedPayloadError(ProvmarkCliError):
    """Error when a manifest marker holds an undecodable body."""

    exit_code = ExitCode.MALFORMED_PAYLOAD


@contextmanager
def translate_errors(path: Path | None = None) -> Iterator[None]:
    """Convert core exceptions raised in the block into CLI errors.

    Args:
        path (Path | None): Asset being processed, used as message prefix.

    Raises:
        ProvmarkCliError: The subclass matching the original exception.
    """
    prefix: str = f"{path}: " if path is not None else ""
    try:
        yield
    except ManifestNotFoundError as exc:
        raise ProvmarkManifestNotFoundError(f"{prefix}{exc}") from exc
    except MalformedPayloadError as exc:
        raise ProvmarkMalformedPayloadError(f"{prefix}{exc}") from exc
    except UnsupportedOperationError as exc:
        raise ProvmarkUnsupportedError(f"{prefix}{exc}") from exc
    except ConfigError as exc:
        raise ProvmarkConfigError(str(exc)) from exc
    except UnicodeError as exc:
        raise ProvmarkEncodingError(f"{prefix}{exc}") from exc
    except FileNotFoundError as exc:
        raise ProvmarkFileNotFoundError(f"{prefix}{exc.strerror or exc}") from exc
    except PermissionError as exc:
        raise ProvmarkPermissionDeniedError(f"{prefix}{exc.strerror or exc}") from exc
    except OSError as exc:
        raise ProvmarkIOError(f"{prefix}{exc}") from exc
