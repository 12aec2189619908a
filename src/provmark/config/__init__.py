# topmark:header:start
#
#   project      : ProvMark
#   file         : __init__.py
#   file_relpath : src/provmark/config/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Configuration and logging for ProvMark.

Public entry points:
    - `Config`: frozen, effective configuration.
    - `load_config`: resolve defaults, discovered files and overrides.
"""

from __future__ import annotations

from provmark.config.model import Config, load_config

__all__ = ["Config", "load_config"]
