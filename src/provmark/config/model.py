# topmark:header:start
#
#   project      : ProvMark
#   file         : model.py
#   file_relpath : src/provmark/config/model.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""ProvMark configuration model and TOML loading.

Resolution order (lowest to highest precedence):
    1. Runtime defaults (`Config.from_defaults`).
    2. A discovered config file: the nearest ``provmark.toml`` (``[provmark]``
       table) or ``pyproject.toml`` with a ``[tool.provmark]`` table, searching
       from the working directory upwards.
    3. An explicit config file (``--config``), which disables discovery.
    4. Keyword overrides (CLI options); ``None`` means "not set".

Example ``provmark.toml``:

    ```toml
    [provmark]
    strategy = "sidecar"
    encoding = "utf-8"
    placeholder = "placeholder manifest"
    temp_prefix = "c2pa_temp"
    ```

Parsing is done with `tomlkit`; any problem raises `ConfigError`.
"""

from __future__ import annotations

import codecs
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import TYPE_CHECKING, Any

import tomlkit
from tomlkit.exceptions import ParseError as TomlkitParseError

from provmark.config.logging import get_logger
from provmark.constants import (
    DEFAULT_ENCODING,
    PLACEHOLDER_MANIFEST,
    PROVMARK_CONFIG_NAME,
    PYPROJECT_TOML_NAME,
    TEMP_FILE_PREFIX,
)
from provmark.core.errors import ConfigError
from provmark.core.types import Strategy

if TYPE_CHECKING:
    from collections.abc import Mapping

    from provmark.config.logging import ProvmarkLogger

logger: ProvmarkLogger = get_logger(__name__)

SECTION: str = "provmark"


@dataclass(frozen=True)
class Config:
    """Effective, immutable ProvMark configuration.

    Attributes:
        strategy (Strategy): Embedding backend to use.
        encoding (str): Text encoding of HTML documents.
        placeholder (bytes): Stand-in manifest used to compute hash regions.
        temp_prefix (str): Prefix of temporary files used for atomic replacement.
        source (Path | None): Config file the values were read from, if any.
    """

    strategy: Strategy = Strategy.INLINE
    encoding: str = DEFAULT_ENCODING
    placeholder: bytes = PLACEHOLDER_MANIFEST
    temp_prefix: str = TEMP_FILE_PREFIX
    source: Path | None = None

    @classmethod
    def from_defaults(cls) -> Config:
        """Return the runtime defaults."""
        return cls()

    @classmethod
    def from_mapping(
        cls,
        data: Mapping[str, Any],
        *,
        base: Config | None = None,
        source: Path | None = None,
    ) -> Config:
        """Layer the values of a ``[provmark]`` table over ``base``.

        Args:
            data (Mapping[str, Any]): Table contents.
            base (Config | None): Configuration to layer on; defaults when ``None``.
            source (Path | None): File the table came from (for messages).

        Returns:
            Config: The merged configuration.

        Raises:
            ConfigError: If a value has the wrong type or is invalid.
        """
        cfg: Config = base or cls.from_defaults()
        where: str = f" in {source}" if source else ""
        known: set[str] = {f.name for f in fields(cls)} - {"source"}
        for key in data:
            if key not in known:
                logger.warning("Ignoring unknown config key %r%s", key, where)

        overrides: dict[str, Any] = {}
        if "strategy" in data:
            overrides["strategy"] = _parse_strategy(data["strategy"], where)
        if "encoding" in data:
            overrides["encoding"] = _parse_encoding(data["encoding"], where)
        if "placeholder" in data:
            overrides["placeholder"] = _parse_placeholder(data["placeholder"], where)
        if "temp_prefix" in data:
            overrides["temp_prefix"] = _parse_temp_prefix(data["temp_prefix"], where)
        if source is not None:
            overrides["source"] = source
        return replace(cfg, **overrides)

    def with_overrides(
        self,
        *,
        strategy: Strategy | str | None = None,
        encoding: str | None = None,
    ) -> Config:
        """Return a copy with explicitly set overrides applied."""
        overrides: dict[str, Any] = {}
        if strategy is not None:
            overrides["strategy"] = _parse_strategy(strategy, "")
        if encoding is not None:
            overrides["encoding"] = _parse_encoding(encoding, "")
        return replace(self, **overrides) if overrides else self

    def to_dict(self) -> dict[str, str]:
        """Return the TOML-compatible ``[provmark]`` table."""
        return {
            "strategy": self.strategy.value,
            "encoding": self.encoding,
            "placeholder": self.placeholder.decode("utf-8", errors="backslashreplace"),
            "temp_prefix": self.temp_prefix,
        }

    def to_toml(self) -> str:
        """Render the effective configuration as a ``provmark.toml`` document."""
        doc = tomlkit.document()
        if self.source is not None:
            doc.add(tomlkit.comment(f"Loaded from {self.source}"))
        table = tomlkit.table()
        for key, value in self.to_dict().items():
            table.add(key, value)
        doc.add(SECTION, table)
        return tomlkit.dumps(doc)


def _parse_strategy(value: object, where: str) -> Strategy:
    if not isinstance(value, (str, Strategy)):
        raise ConfigError(f"'strategy' must be a string{where}")
    try:
        return Strategy.parse(value)
    except ValueError as exc:
        raise ConfigError(f"{exc}{where}") from exc


def _parse_encoding(value: object, where: str) -> str:
    if not isinstance(value, str) or not value.strip():
        raise ConfigError(f"'encoding' must be a non-empty string{where}")
    try:
        return codecs.lookup(value.strip()).name
    except LookupError as exc:
        raise ConfigError(f"unknown encoding {value!r}{where}") from exc


def _parse_placeholder(value: object, where: str) -> bytes:
    if not isinstance(value, str) or not value:
        raise ConfigError(f"'placeholder' must be a non-empty string{where}")
    return value.encode("utf-8")


def _parse_temp_prefix(value: object, where: str) -> str:
    if not isinstance(value, str) or not value or "/" in value or "\\" in value:
        raise ConfigError(f"'temp_prefix' must be a plain, non-empty file name prefix{where}")
    return value


def load_toml_file(path: Path) -> dict[str, Any]:
    """Parse a TOML file into plain Python values.

    Raises:
        ConfigError: If the file cannot be read or is not valid TOML.
    """
    try:
        text: str = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigError(f"cannot read config file {path}: {exc}") from exc
    try:
        return tomlkit.parse(text).unwrap()
    except TomlkitParseError as exc:
        raise ConfigError(f"invalid TOML in {path}: {exc}") from exc


def extract_section(doc: Mapping[str, Any], path: Path) -> dict[str, Any] | None:
    """Return the ProvMark table of a parsed config file, if present.

    ``pyproject.toml`` files use ``[tool.provmark]``; any other file uses ``[provmark]``.

    Raises:
        ConfigError: If the table exists but is not a table.
    """
    if path.name == PYPROJECT_TOML_NAME:
        tool = doc.get("tool", {})
        section = tool.get(SECTION) if isinstance(tool, dict) else None
    else:
        section = doc.get(SECTION)
    if section is None:
        return None
    if not isinstance(section, dict):
        raise ConfigError(f"[{SECTION}] in {path} must be a table")
    return section


def discover_config(start: Path | None = None) -> Path | None:
    """Return the nearest config file at or above ``start``.

    In each directory ``provmark.toml`` wins over ``pyproject.toml``; a
    ``pyproject.toml`` only counts when it has a ``[tool.provmark]`` table.
    """
    here: Path = (start or Path.cwd()).resolve()
    for directory in (here, *here.parents):
        candidate: Path = directory / PROVMARK_CONFIG_NAME
        if candidate.is_file():
            return candidate
        pyproject: Path = directory / PYPROJECT_TOML_NAME
        if pyproject.is_file() and extract_section(load_toml_file(pyproject), pyproject):
            return pyproject
    return None


def load_config(
    config_path: Path | None = None,
    *,
    start: Path | None = None,
    discover: bool = True,
    strategy: Strategy | str | None = None,
    encoding: str | None = None,
) -> Config:
    """Resolve the effective configuration.

    Args:
        config_path (Path | None): Explicit config file; disables discovery.
        start (Path | None): Directory where discovery starts (default: CWD).
        discover (bool): Whether to look for config files when ``config_path`` is None.
        strategy (Strategy | str | None): Override for ``strategy``.
        encoding (str | None): Override for ``encoding``.

    Returns:
        Config: The effective configuration.

    Raises:
        ConfigError: If a config file is missing, malformed, or holds invalid values.
    """
    cfg: Config = Config.from_defaults()

    path: Path | None = config_path
    if path is None and discover:
        path = discover_config(start)
    if path is not None:
        if not path.is_file():
            raise ConfigError(f"config file not found: {path}")
        section = extract_section(load_toml_file(path), path)
        if section is None:
            logger.info("No [%s] table in %s; using defaults", SECTION, path)
        else:
            logger.debug("Loading configuration from %s", path)
            cfg = Config.from_mapping(section, base=cfg, source=path)

    return cfg.with_overrides(strategy=strategy, encoding=encoding)
