"""Device status and telemetry endpoints.

The route table is fixed at import: exact paths only, every method accepted.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Callable, Mapping

from flask import Blueprint

from console_logging import get_logger as get_structured_logger

from apps.console.bootstrap import get_runtime
from apps.console.http import routes as http_routes


# Registered on every rule; any other method is routed by the 405 fallback in router.py
ALL_METHODS = ("GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS")

device_bp = Blueprint("device", __name__)

logger = get_structured_logger("console.http.device")


def get_status():
    return http_routes.device_status(get_runtime().status_source)


def get_telemetry():
    runtime = get_runtime()
    logger.debug(
        "Canonical telemetry route invoked",
        extra={"variant": runtime.config.telemetry_variant},
    )
    return http_routes.device_telemetry(runtime.telemetry)


def get_orientation():
    return http_routes.device_telemetry(get_runtime().telemetry_sources["orientation"])


def get_position():
    return http_routes.device_telemetry(get_runtime().telemetry_sources["position"])


API_ROUTES: Mapping[str, Callable] = MappingProxyType({
    "/api/status": get_status,
    "/api/telemetry": get_telemetry,
    "/api/telemetry/orientation": get_orientation,
    "/api/telemetry/position": get_position,
})

for _path, _view in API_ROUTES.items():
    device_bp.add_url_rule(_path, view_func=_view, methods=list(ALL_METHODS))
