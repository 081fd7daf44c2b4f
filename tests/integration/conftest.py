"""Fixtures for end-to-end tests on the real clock."""

from __future__ import annotations

from pathlib import Path

import pytest

from apps.console.main import create_app


def pytest_collection_modifyitems(config, items):  # pragma: no cover - Pytest hook
    here = Path(__file__).parent
    for item in items:
        if here in item.path.parents:
            item.add_marker(pytest.mark.integration)


@pytest.fixture
def live_client(server_config):
    app = create_app(server_config)
    app.config.update(TESTING=True)
    with app.test_client() as client:
        yield client
