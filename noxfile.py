# topmark:header:start
#
#   project      : ProvMark
#   file         : noxfile.py
#   file_relpath : noxfile.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""ProvMark project automation via Nox.

Sessions:
  - `qa`: Per-Python session that runs pytest and pyright.
  - `property_test`: Long-running property tests (opt-in).
  - `package_check`: Build sdist/wheel and validate metadata (twine).

Common invocations:
  - `nox -s qa` (runs for all configured Python versions)
  - `nox -s property_test`
"""

from __future__ import annotations

import sys
import warnings
from pathlib import Path
from typing import TYPE_CHECKING, Any, cast

import nox

if TYPE_CHECKING:
    from collections.abc import Callable

if sys.version_info >= (3, 11):
    import tomllib

    _toml_loads = cast("Callable[[str], dict[str, Any]]", tomllib.loads)  # type: ignore[assignment]
else:
    import toml

    _toml_loads = cast("Callable[[str], dict[str, Any]]", toml.loads)  # type: ignore[assignment]

CURRENT_PYTHON_VERSION: str = f"{sys.version_info[0]}.{sys.version_info[1]}"


def get_supported_pythons() -> list[str]:
    """Resolve supported Python versions from `pyproject.toml` classifiers.

    Returns:
        list[str]: Supported versions like ["3.10", "3.11", ...], sorted.
    """
    path: Path = Path(__file__).parent / "pyproject.toml"
    try:
        doc: dict[str, Any] = _toml_loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError):
        doc = {}

    classifiers: list[str] = doc.get("project", {}).get("classifiers", [])
    prefix = "Programming Language :: Python :: "
    versions: set[str] = set()
    for c in classifiers:
        v: str = c.removeprefix(prefix).strip() if c.startswith(prefix) else ""
        parts: list[str] = v.split(".")
        if len(parts) == 2 and all(p.isdigit() for p in parts):
            versions.add(f"{int(parts[0])}.{int(parts[1])}")

    if not versions:
        warnings.warn(
            f"No Python versions found in classifiers. Falling back to Python {CURRENT_PYTHON_VERSION}.",
            RuntimeWarning,
            stacklevel=2,
        )
        return [CURRENT_PYTHON_VERSION]
    return sorted(versions, key=lambda s: tuple(int(p) for p in s.split(".")))


# Resolve versions once at startup
PYTHONS: list[str] = get_supported_pythons()

nox.options.sessions = ["qa"]


@nox.session(python=PYTHONS)
def qa(session: nox.Session) -> None:
    """Run tests + pyright (per Python version)."""
    session.log("Supported Python versions: " + ", ".join(PYTHONS))

    session.install("-e", ".[test,dev]")

    # We add *session.posargs to the end of the command
    session.run("pytest", "-q", "tests", "-m", "not hypothesis_slow", *session.posargs)

    py_ver = session.python
    if not isinstance(py_ver, str) or not py_ver:
        raise RuntimeError(f"Unexpected session.python value: {py_ver!r}")

    session.run("pyright", "--pythonversion", py_ver)


@nox.session(python=CURRENT_PYTHON_VERSION)
def property_test(session: nox.Session) -> None:
    """Run the long-running property tests (developer only)."""
    session.install("-e", ".[test]")

    session.run("pytest", "-vv", "-m", "hypothesis_slow", "tests")


@nox.session(python=CURRENT_PYTHON_VERSION)
def package_check(session: nox.Session) -> None:
    """Build sdist/wheel and validate package metadata."""
    session.install("build", "twine")
    session.run("python", "-m", "build", "--outdir", "dist")
    session.run("twine", "check", "dist/*")
