#!/usr/bin/env python3
"""
Tactical Console: Flask composition root.

Responsibilities:
- Build the start-time context and the simulated device sources (bootstrap)
- Register the device API and the bundled-UI catch-all (router)
- Apply CORS, security headers, structured request logging, error handlers

In the device build this is the only server process: every asset is served
locally and the API answers from sensors instead of the simulation.
"""

from __future__ import annotations

import logging
from typing import Optional

from flask import Flask
from flask_cors import CORS

from app_platform.config.config import ServerConfig
from app_platform.errors.api import register_error_handlers
from application.device import Jitter
from apps.console.bootstrap import RUNTIME_KEY, build_runtime, load_server_config
from apps.console.http.device_routes import API_ROUTES
from apps.console.http.middleware import add_security_headers
from apps.console.http.router import register_routes
from console_logging import configure as configure_structured_logging, flush_loggers, get_logger as get_structured_logger
from console_logging.flask_ext import register_flask_context
from interfaces import Clock


logger = get_structured_logger("console.main")


def create_app(
    config: Optional[ServerConfig] = None,
    *,
    clock: Optional[Clock] = None,
    jitter: Optional[Jitter] = None,
) -> Flask:
    """Construct the console Flask application.

    ``clock`` and ``jitter`` are injection points for tests; production uses
    the system clock and an unseeded (or ``TELEMETRY_SEED``-seeded) generator.
    """

    cfg = config or load_server_config()

    logging.basicConfig(level=logging.INFO)
    configure_structured_logging(service="console", env=cfg.env)

    # No implicit /static route: the asset root owns every non-API path
    app = Flask(__name__, static_folder=None)
    CORS(app, resources={r"/api/*": {"origins": list(cfg.cors_origins)}})
    register_flask_context(app, service="console")

    app.config[RUNTIME_KEY] = build_runtime(cfg, clock=clock, jitter=jitter)

    app.after_request(add_security_headers)
    register_error_handlers(app)
    register_routes(app)

    return app


def main() -> None:
    cfg = load_server_config()
    app = create_app(cfg)

    logger.info("Server running", extra={"url": f"http://localhost:{cfg.port}"})
    logger.info("API endpoints", extra={"endpoints": [f"GET {path}" for path in API_ROUTES]})

    try:
        app.run(host=cfg.host, port=cfg.port, debug=False, threaded=True)
    finally:
        app.config[RUNTIME_KEY].close()
        flush_loggers()


if __name__ == '__main__':
    main()
