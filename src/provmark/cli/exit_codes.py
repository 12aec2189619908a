# topmark:header:start
#
#   file         : exit_codes.py
#   file_relpath : src/provmark/cli/exit_codes.py
#   project      : ProvMark
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Standardized exit codes used by the ProvMark CLI.

ProvMark aligns with the BSD `sysexits` convention where practical, so that other
tooling can interpret failures consistently. ``WOULD_CHANGE=2`` signals a dry-run
where changes would be made; Click's own usage errors also exit with 2, so tests
must assert ``result.exception is None`` to tell them apart.
"""

from enum import IntEnum


class ExitCode(IntEnum):
    """Standardized exit codes for ProvMark CLI.

    Attributes:
        SUCCESS: Successful execution with no errors.
        FAILURE: Generic failure (non-specific error).
        WOULD_CHANGE: Dry-run: changes would be made if ``--apply`` were set.
        MANIFEST_NOT_FOUND: The document carries no manifest (or its sidecar is missing).
        MALFORMED_PAYLOAD: A manifest marker is present but its body does not decode.
        USAGE_ERROR: Command-line invocation error. Mirrors BSD ``EX_USAGE (64)``.
        ENCODING_ERROR: Text decoding/encoding error. Mirrors BSD ``EX_DATAERR (65)``.
        FILE_NOT_FOUND: Input path does not exist. Mirrors BSD ``EX_NOINPUT (66)``.
        UNSUPPORTED_FILE_TYPE: Unsupported asset type or backend capability.
            Mirrors BSD ``EX_UNAVAILABLE (69)``.
        IO_ERROR: I/O error reading/writing a file. Mirrors BSD ``EX_IOERR (74)``.
        PERMISSION_DENIED: Insufficient permissions. Mirrors BSD ``EX_NOPERM (77)``.
        CONFIG_ERROR: Configuration error. Mirrors BSD ``EX_CONFIG (78)``.
    """

    SUCCESS = 0
    FAILURE = 1
    WOULD_CHANGE = 2
    MANIFEST_NOT_FOUND = 3
    MALFORMED_PAYLOAD = 4

    USAGE_ERROR = 64  # EX_USAGE
    ENCODING_ERROR = 65  # EX_DATAERR
    FILE_NOT_FOUND = 66  # EX_NOINPUT
    UNSUPPORTED_FILE_TYPE = 69  # EX_UNAVAILABLE
    IO_ERROR = 74  # EX_IOERR
    PERMISSION_DENIED = 77  # EX_NOPERM
    CONFIG_ERROR = 78  # EX_CONFIG
