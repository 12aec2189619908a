# topmark:header:start
#
#   project      : ProvMark
#   file         : __init__.py
#   file_relpath : src/provmark/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""ProvMark package.

ProvMark embeds, extracts and removes C2PA provenance manifests in HTML
documents. It supports an inline strategy (base64 inside a ``<script>``
element) and a sidecar strategy (a companion ``.c2pa`` file referenced by a
``<link>`` element), and computes the byte ranges a data-hash stage must
exclude. Both a Click CLI and a small typed API are provided:

```python
import provmark

text = provmark.inline.embed(html, manifest_bytes)
assert provmark.scan_inline(text).payload == manifest_bytes
regions = provmark.inline_hash_regions(text)

backend = provmark.get_backend("sidecar")
backend.save_manifest(path, manifest_bytes)
```
"""

from __future__ import annotations

from provmark.backends.registry import backend_for, get_backend
from provmark.config.model import Config, load_config
from provmark.constants import PROVMARK_VERSION as __version__
from provmark.core.errors import (
    ConfigError,
    MalformedPayloadError,
    ManifestNotFoundError,
    ProvmarkError,
    UnsupportedOperationError,
)
from provmark.core.types import HashRegion, Marker, MarkerKind, RegionKind, ScanResult, Strategy
from provmark.embedding import inline, sidecar
from provmark.embedding.regions import inline_hash_regions
from provmark.markers.scanner import read_inline_payload, scan_inline, scan_reference

__all__ = [
    "Config",
    "ConfigError",
    "HashRegion",
    "MalformedPayloadError",
    "ManifestNotFoundError",
    "Marker",
    "MarkerKind",
    "ProvmarkError",
    "RegionKind",
    "ScanResult",
    "Strategy",
    "UnsupportedOperationError",
    "__version__",
    "backend_for",
    "get_backend",
    "inline",
    "inline_hash_regions",
    "load_config",
    "read_inline_payload",
    "scan_inline",
    "scan_reference",
    "sidecar",
]
