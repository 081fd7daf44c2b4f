"""Central error responses and Flask error handler registration.

Not-found is answered in plain text for every path (unknown route, missing
asset, unreadable asset). Unexpected exceptions become a 500: JSON on
``/api/*`` so the frontend can parse it, plain text elsewhere.
"""

from __future__ import annotations

from typing import Any, Dict, Tuple

from flask import Response, jsonify, request
from werkzeug.exceptions import HTTPException

from console_logging import get_logger as get_structured_logger


logger = get_structured_logger("api.errors")

ERRORS: Dict[str, int] = {
    'NOT_FOUND': 404,
    'INTERNAL_ERROR': 500,
}

_TEXT_BODIES: Dict[int, str] = {
    404: 'Not Found',
    500: 'Internal Server Error',
}


def make_error(message: str, code: str) -> Tuple[Any, int]:
    """JSON error body for API callers."""

    status = ERRORS.get(code, 500)
    return jsonify({'error': message, 'code': code}), status


def make_text_error(status: int) -> Response:
    """Plain-text error body for everything that is not an API payload."""

    body = _TEXT_BODIES.get(status, 'Error')
    return Response(body, status=status, mimetype='text/plain')


def _is_api_path() -> bool:
    path = getattr(request, 'path', '') or ''
    return path == '/api' or path.startswith('/api/')


def register_error_handlers(app) -> None:
    """Register error handlers."""

    @app.errorhandler(404)
    def _h_404(_e):
        """Unmatched route or missing asset."""

        return make_text_error(404)

    @app.errorhandler(Exception)
    def _h_exc(e: Exception):
        """Keep the server alive: convert anything unexpected into a response."""

        if isinstance(e, HTTPException):
            return e

        logger.exception(
            "Unhandled request error",
            extra={"path": request.path, "method": request.method},
        )

        if _is_api_path():
            return make_error('Internal server error', 'INTERNAL_ERROR')

        return make_text_error(500)
