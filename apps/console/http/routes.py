"""Route handlers for the console server."""

from __future__ import annotations

from typing import Any, Dict, Tuple

from flask import abort, jsonify, send_file

from application.assets import StaticAssetResolver
from console_logging import get_logger as get_structured_logger
from interfaces import StatusSource, TelemetrySource

status_logger = get_structured_logger("console.http.routes.status")
telemetry_logger = get_structured_logger("console.http.routes.telemetry")
asset_logger = get_structured_logger("console.http.routes.assets")


def _no_cache_json(payload: Dict[str, Any]) -> Tuple[Any, int]:
    response = jsonify(payload)
    response.headers['Cache-Control'] = 'no-cache'

    return response, 200


def device_status(source: StatusSource) -> Tuple[Any, int]:
    """Current device status snapshot."""

    snapshot = source.snapshot()
    status_logger.debug(
        "Status snapshot served",
        extra={"uptime_seconds": snapshot.uptime_seconds, "recording": snapshot.recording},
    )

    return _no_cache_json(snapshot.to_dict())


def device_telemetry(source: TelemetrySource) -> Tuple[Any, int]:
    """One telemetry sample from ``source``."""

    snapshot = source.snapshot()
    telemetry_logger.debug(
        "Telemetry snapshot served",
        extra={"variant": source.variant, "timestamp": snapshot.timestamp},
    )

    return _no_cache_json(snapshot.to_dict())


def static_asset(resolver: StaticAssetResolver, url_path: str):
    """Stream a bundled asset, or 404 when it cannot be resolved or read."""

    asset = resolver.open(url_path)
    if asset is None:
        abort(404)

    content_type = asset.entry.content_type
    try:
        response = send_file(
            asset.stream,
            mimetype=content_type,
            conditional=True,
            etag=False,
            last_modified=asset.mtime,
        )
    except (OSError, ValueError) as exc:
        asset.close()
        asset_logger.warning(
            "Asset streaming failed",
            extra={"path": url_path, "error": type(exc).__name__},
        )
        abort(404)

    # Werkzeug appends a charset to +xml types; the table value is authoritative
    response.headers['Content-Type'] = content_type
    if response.status_code == 200:
        response.content_length = asset.size
    elif response.status_code == 304:
        # Werkzeug drops the body on a conditional hit without closing it
        asset.close()

    return response
