"""Nox sessions orchestrating the tactical console test suites."""

from __future__ import annotations

from pathlib import Path
from typing import Iterable

import nox


PYTHON_VERSIONS = ["3.11"]
PROJECT_ROOT = Path(__file__).parent

nox.options.sessions = [
    "tests(unit_api)",
    "tests(unit_device)",
    "tests(unit_logging)",
    "tests(integration)",
]


def _install_test_requirements(session: nox.Session) -> None:
    """Install the project and its test extra inside the session environment."""

    session.install("-e", ".[test]")


def _run_suite(session: nox.Session, suite: str, targets: Iterable[str]) -> None:
    _install_test_requirements(session)

    data_file = PROJECT_ROOT / f".coverage.{suite}"
    env = {"COVERAGE_FILE": str(data_file)}

    session.log("Running %s suite: %s", suite, " ".join(targets))
    session.run("coverage", "run", "-m", "pytest", *targets, *session.posargs, env=env)
    session.run("coverage", "report", "-m", env=env)


@nox.session(python=PYTHON_VERSIONS, reuse_venv=True, name="tests(unit_api)")
def tests_unit_api(session: nox.Session) -> None:
    """Dispatcher, HTTP handlers, bootstrap and configuration."""

    _run_suite(session, "api", ["tests/unit/api", "tests/unit/test_server_config.py"])


@nox.session(python=PYTHON_VERSIONS, reuse_venv=True, name="tests(unit_device)")
def tests_unit_device(session: nox.Session) -> None:
    """Status/telemetry simulation and static asset resolution."""

    _run_suite(session, "device", ["tests/unit/device", "tests/unit/assets"])


@nox.session(python=PYTHON_VERSIONS, reuse_venv=True, name="tests(unit_logging)")
def tests_unit_logging(session: nox.Session) -> None:
    """Structured logging library."""

    _run_suite(session, "logging", ["tests/unit/logging"])


@nox.session(python=PYTHON_VERSIONS, reuse_venv=True, name="tests(integration)")
def tests_integration(session: nox.Session) -> None:
    """End-to-end scenarios on the real clock."""

    _run_suite(session, "integration", ["tests/integration"])
