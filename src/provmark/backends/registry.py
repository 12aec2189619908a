# topmark:header:start
#
#   project      : ProvMark
#   file         : registry.py
#   file_relpath : src/provmark/backends/registry.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Registry of manifest backends, keyed by embedding strategy.

Backends register themselves with the `register_backend` class decorator when
their module is imported. `register_all_backends` imports every module of the
`provmark.backends` package so lookups see the built-in backends.
"""

from __future__ import annotations

import importlib
import pkgutil
from pathlib import Path
from typing import TYPE_CHECKING, Any

from provmark.config.logging import get_logger
from provmark.core.errors import UnsupportedOperationError
from provmark.core.types import Strategy

if TYPE_CHECKING:
    from collections.abc import Callable

    from provmark.backends.base import BackendBase, ManifestBackend
    from provmark.config.logging import ProvmarkLogger

logger: ProvmarkLogger = get_logger(__name__)


_registry: dict[Strategy, type[BackendBase]] = {}


def register_backend(
    strategy: Strategy,
) -> Callable[[type[BackendBase]], type[BackendBase]]:
    """Class decorator to register a backend for ``strategy``.

    Args:
        strategy (Strategy): Strategy the backend implements.

    Returns:
        Callable[[type[BackendBase]], type[BackendBase]]: The registering decorator.

    Raises:
        ValueError: If another class is already registered for ``strategy``.
    """

    def decorator(cls: type[BackendBase]) -> type[BackendBase]:
        current = _registry.get(strategy)
        if current is not None and current is not cls:
            raise ValueError(f"Strategy '{strategy.value}' already has a registered backend.")
        logger.debug("Registering backend %s for strategy: %s", cls.__name__, strategy.value)
        _registry[strategy] = cls
        return cls

    return decorator


def register_all_backends() -> None:
    """Import all backend modules of the `provmark.backends` package."""
    package: str = __name__.rsplit(".", 1)[0]
    package_dir = Path(__file__).parent
    for module_info in pkgutil.iter_modules([str(package_dir)]):
        if not module_info.ispkg:
            importlib.import_module(f"{package}.{module_info.name}")


def get_backend_registry() -> dict[Strategy, type[BackendBase]]:
    """Return the registry of strategies to backend classes."""
    if not _registry:
        register_all_backends()
    return _registry


def get_backend(strategy: Strategy | str, **kwargs: Any) -> ManifestBackend:
    """Instantiate the backend registered for ``strategy``.

    Args:
        strategy (Strategy | str): Strategy member or name.
        **kwargs (Any): Forwarded to the backend constructor (``config``, ...).

    Returns:
        ManifestBackend: A new backend instance.

    Raises:
        UnsupportedOperationError: If no backend is registered for ``strategy``.
    """
    try:
        key: Strategy = Strategy.parse(strategy)
    except ValueError as exc:
        raise UnsupportedOperationError(str(exc)) from exc
    cls = get_backend_registry().get(key)
    if cls is None:
        raise UnsupportedOperationError(f"no backend registered for strategy '{key.value}'")
    return cls(**kwargs)


def backend_for(asset_type: str, strategy: Strategy | str, **kwargs: Any) -> ManifestBackend:
    """Return a backend for ``strategy`` after checking it handles ``asset_type``.

    Args:
        asset_type (str): Extension (``.html``), type name (``html``) or MIME type.
        strategy (Strategy | str): Strategy member or name.
        **kwargs (Any): Forwarded to the backend constructor.

    Returns:
        ManifestBackend: A new backend instance.

    Raises:
        UnsupportedOperationError: If the strategy or asset type is not supported.
    """
    backend: ManifestBackend = get_backend(strategy, **kwargs)
    if not backend.supports(asset_type):
        raise UnsupportedOperationError(f"unsupported asset type: {asset_type!r}")
    return backend
