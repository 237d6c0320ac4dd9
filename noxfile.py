"""Automated quality sessions for linfit."""

from __future__ import annotations

import os
import re
from collections.abc import Iterable

import nox

DEFAULT_PYTHON_VERSIONS = ("3.12",)


def _parse_python_versions(
    value: str | None, default: Iterable[str] = DEFAULT_PYTHON_VERSIONS
) -> list[str]:
    """Return a list of Python versions from a comma/space separated string."""

    if value is None:
        return list(default)

    parts = [fragment.strip() for fragment in re.split(r"[,\s]+", value) if fragment.strip()]
    return parts or list(default)


def get_python_versions() -> list[str]:
    """Resolve the Python versions to use for Nox sessions."""

    return _parse_python_versions(os.environ.get("LINFIT_NOX_PYTHON"))


PYTHON_VERSIONS = get_python_versions()
SOURCE_DIRECTORIES = ("linfit", "config", "tests", "train.py", "noxfile.py")

nox.options.sessions = ("lint", "typecheck", "tests")
nox.options.reuse_existing_virtualenvs = True


def install_project(session: nox.Session, *extra: str) -> None:
    """Install the project with its test and development extras."""
    session.install("--upgrade", "pip")
    session.install("-e", ".[test,dev]")
    if extra:
        session.install(*extra)


@nox.session(python=PYTHON_VERSIONS)
def lint(session: nox.Session) -> None:
    """Run formatting and static analysis checks."""
    install_project(session)
    session.run("ruff", "check", *SOURCE_DIRECTORIES)
    session.run("black", "--check", *SOURCE_DIRECTORIES)


@nox.session(python=PYTHON_VERSIONS)
def typecheck(session: nox.Session) -> None:
    """Run type checking with mypy."""
    install_project(session)
    session.run("mypy", "linfit", "config")


@nox.session(python=PYTHON_VERSIONS)
def tests(session: nox.Session) -> None:
    """Run the unit test suite."""
    install_project(session)
    session.run("pytest", "--cov=linfit", "--cov=config", "--cov-report=xml", *session.posargs)


@nox.session(python=PYTHON_VERSIONS)
def build(session: nox.Session) -> None:
    """Build the project wheel and source distribution."""
    install_project(session, "build")
    session.run("python", "-m", "build")
