# topmark:header:start
#
#   project      : ProvMark
#   file         : constants.py
#   file_relpath : src/provmark/constants.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""ProvMark Constants."""

from __future__ import annotations

from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as get_version

try:
    PROVMARK_VERSION: str = get_version("provmark")
except PackageNotFoundError:  # running from a source checkout
    PROVMARK_VERSION = "0.0.0"

# Content type carried by the inline manifest element.
C2PA_SCRIPT_TYPE: str = "application/c2pa-manifest"

# Relation name of the sidecar reference element.
C2PA_LINK_REL: str = "c2pa-manifest"

# Appended to the full document file name (``page.html`` -> ``page.html.c2pa``).
SIDECAR_SUFFIX: str = ".c2pa"

# Embedded to obtain a stable marker offset when no manifest exists yet.
PLACEHOLDER_MANIFEST: bytes = b"placeholder manifest"

TEMP_FILE_PREFIX: str = "c2pa_temp"

DEFAULT_ENCODING: str = "utf-8"

SUPPORTED_TYPES: tuple[str, ...] = ("html", "text/html")
SUPPORTED_EXTENSIONS: tuple[str, ...] = (".html", ".htm")

PROVMARK_CONFIG_NAME: str = "provmark.toml"
PYPROJECT_TOML_NAME: str = "pyproject.toml"
