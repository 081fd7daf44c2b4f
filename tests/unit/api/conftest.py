"""Fixtures for the console HTTP layer."""

from __future__ import annotations

import dataclasses
from typing import Any, Callable

import pytest
from flask import Flask

from apps.console.main import create_app

from tests.utils.flask_client_factory import flask_test_client


@pytest.fixture
def create_console_app(server_config, mock_clock, seeded_jitter) -> Callable[..., Flask]:
    """Build the console app on the mock clock; keyword args override config fields."""

    def _factory(**config_overrides: Any) -> Flask:
        cfg = dataclasses.replace(server_config, **config_overrides)
        app = create_app(cfg, clock=mock_clock, jitter=seeded_jitter)
        app.config.update(TESTING=True)
        return app

    return _factory


@pytest.fixture
def console_app(create_console_app) -> Flask:
    return create_console_app()


@pytest.fixture
def api_client(create_console_app):
    with flask_test_client(create_console_app) as (_app, client):
        yield client
