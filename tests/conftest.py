# topmark:header:start
#
#   project      : ProvMark
#   file         : conftest.py
#   file_relpath : tests/conftest.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Pytest configuration for the ProvMark test suite.

This file sets up global fixtures and customizes the logging configuration for test runs,
ensuring consistent and verbose logging output during testing.
"""

from __future__ import annotations

from collections.abc import Callable, Iterator
from typing import TYPE_CHECKING

import pytest

from provmark.config import logging
from tests.html_samples import PAGE_HTML

if TYPE_CHECKING:
    from pathlib import Path


@pytest.fixture(autouse=True)
def silence_provmark_logging(monkeypatch: pytest.MonkeyPatch) -> None:
    """Ensure ProvMark's runtime log level is not forced via env during tests.

    Args:
        monkeypatch (pytest.MonkeyPatch): Pytest monkeypatch fixture used to manipulate
            environment variables.
    """
    monkeypatch.delenv(logging.LOG_LEVEL_ENV_VAR, raising=False)


@pytest.hookimpl(tryfirst=True)
def pytest_configure(config: pytest.Config) -> None:  # pylint: disable=unused-argument
    """Set the logging level to TRACE for all tests.

    Args:
        config (pytest.Config): The pytest configuration object.
    """
    logging.setup_logging(level=logging.TRACE_LEVEL)


@pytest.fixture
def isolation(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Run a test in an isolated working directory without config files.

    Args:
        tmp_path (Path): The pytest-provided temporary directory for the test.
        monkeypatch (pytest.MonkeyPatch): Fixture to change the working directory.

    Returns:
        Path: The isolated working directory.
    """
    cwd: Path = tmp_path / "proj"
    cwd.mkdir()
    monkeypatch.chdir(cwd)
    return cwd


@pytest.fixture
def write_html(tmp_path: Path) -> Callable[..., Path]:
    """Return a factory writing an HTML document into ``tmp_path``.

    Args:
        tmp_path (Path): The pytest-provided temporary directory for the test.

    Returns:
        Callable[..., Path]: ``factory(text, name="page.html") -> Path``.
    """

    def _write(text: str = PAGE_HTML, name: str = "page.html") -> Path:
        path: Path = tmp_path / name
        path.write_bytes(text.encode("utf-8"))
        return path

    return _write


@pytest.fixture
def restore_logging() -> Iterator[None]:
    """Reinstate the suite-wide TRACE logging after a test reconfigured it."""
    yield
    logging.setup_logging(level=logging.TRACE_LEVEL)
