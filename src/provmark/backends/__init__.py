# topmark:header:start
#
#   project      : ProvMark
#   file         : __init__.py
#   file_relpath : src/provmark/backends/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Manifest backends (inline and sidecar) and their registry."""

from __future__ import annotations

from provmark.backends.registry import backend_for, get_backend, register_all_backends

__all__ = ["backend_for", "get_backend", "register_all_backends"]
