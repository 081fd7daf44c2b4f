"""Shared pytest fixtures for the tactical console test suite."""

from __future__ import annotations

import os
import random
from pathlib import Path

import pytest

# Structured logs go to the in-memory sink; short flush keeps app teardown fast.
os.environ.setdefault("LOG_SINKS", "memory")
os.environ.setdefault("LOG_FLUSH_MS", "10")
os.environ.setdefault("CONSOLE_ENV", "test")

from app_platform.config.config import ServerConfig  # noqa: E402
from application.device import Jitter, ServerContext  # noqa: E402

from tests.mock_interfaces import MockClock  # noqa: E402


INDEX_HTML = """<!DOCTYPE html>
<html lang="en">
  <head>
    <meta charset="utf-8" />
    <title>Tactical Console</title>
    <link rel="stylesheet" href="/assets/index.css" />
  </head>
  <body>
    <div id="root"></div>
    <script type="module" src="/assets/index.js"></script>
  </body>
</html>
"""

BUNDLED_FILES = {
    "index.html": INDEX_HTML,
    "assets/index.js": "console.log('tactical console');\n",
    "assets/main.js": "export const boot = () => {};\n",
    "assets/index.css": "body { background: #000; }\n",
    "assets/manifest.json": '{"name": "Tactical Console"}\n',
    "logo.svg": '<svg xmlns="http://www.w3.org/2000/svg"></svg>\n',
    "images/map.png": "\x89PNG",
    "images/photo.jpg": "JPEG",
    "images/photo.jpeg": "JPEG",
    "firmware.bin": "\x00\x01\x02",
    "README": "plain",
}


def _write_bundle(root: Path) -> Path:
    for relative, content in BUNDLED_FILES.items():
        target = root / relative
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(content, encoding="utf-8")
    return root


@pytest.fixture
def asset_root(tmp_path) -> Path:
    """A built UI bundle under ``tmp_path/dist`` with a secret file beside it."""

    (tmp_path / "secret.txt").write_text("do not serve", encoding="utf-8")
    return _write_bundle(tmp_path / "dist")


@pytest.fixture
def mock_clock() -> MockClock:
    return MockClock()


@pytest.fixture
def server_context(mock_clock) -> ServerContext:
    return ServerContext.start(mock_clock)


@pytest.fixture
def seeded_jitter() -> Jitter:
    """Reproducible noise for telemetry assertions."""

    return Jitter(random.Random(1234))


@pytest.fixture
def server_config(asset_root) -> ServerConfig:
    return ServerConfig(asset_root=str(asset_root), env="test")
