"""Central route registration for the console app.

API blueprint first, static UI second: exact API paths always win over the
catch-all asset route. Methods outside the registered set are answered by the
same path dispatch instead of a 405.
"""

from __future__ import annotations

from flask import Flask, request
from werkzeug.exceptions import MethodNotAllowed

from console_logging import get_logger as get_structured_logger

from apps.console.bootstrap import get_runtime
from apps.console.http import routes as http_routes

from .device_routes import API_ROUTES, device_bp
from .ui_routes import ui_bp


def dispatch_path(path: str):
    """Exact API lookup, then the asset root."""

    view = API_ROUTES.get(path)
    if view is not None:
        return view()
    return http_routes.static_asset(get_runtime().assets, path)


def register_routes(app: Flask) -> None:
    """Register the routes for the console."""

    logger = get_structured_logger("console.http.router")

    app.register_blueprint(device_bp)
    logger.debug("Registered device blueprint", extra={"routes": sorted(API_ROUTES)})

    app.register_blueprint(ui_bp)
    logger.debug("Registered UI blueprint")

    @app.errorhandler(MethodNotAllowed)
    def _unregistered_method(_e):
        logger.debug("Dispatching unregistered method", extra={"method": request.method, "path": request.path})
        try:
            return dispatch_path(request.path)
        except Exception as exc:
            # 404s and handler failures go through the normal error handlers
            return app.handle_user_exception(exc)
