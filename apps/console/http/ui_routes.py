"""Bundled UI: everything that is not an API route is looked up in the asset root."""

from __future__ import annotations

from flask import Blueprint, request

from apps.console.bootstrap import get_runtime
from apps.console.http import routes as http_routes
from apps.console.http.device_routes import ALL_METHODS


ui_bp = Blueprint("ui", __name__)


@ui_bp.route("/", methods=list(ALL_METHODS))
@ui_bp.route("/<path:_asset_path>", methods=list(ALL_METHODS))
def asset(_asset_path: str = ""):
    # request.path keeps the original URL path, leading slash included
    return http_routes.static_asset(get_runtime().assets, request.path)
