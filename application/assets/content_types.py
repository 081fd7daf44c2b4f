"""Fixed extension to MIME type table for bundled assets."""

from __future__ import annotations

from typing import Tuple


DEFAULT_CONTENT_TYPE = "application/octet-stream"

# Ordered; matching is case-sensitive and the first suffix that matches wins.
CONTENT_TYPES: Tuple[Tuple[str, str], ...] = (
    (".html", "text/html; charset=utf-8"),
    (".js", "application/javascript; charset=utf-8"),
    (".css", "text/css; charset=utf-8"),
    (".json", "application/json; charset=utf-8"),
    (".svg", "image/svg+xml"),
    (".png", "image/png"),
    (".jpg", "image/jpeg"),
    (".jpeg", "image/jpeg"),
)


def content_type_for(path: str) -> str:
    """Return the Content-Type header value for ``path``."""

    for suffix, content_type in CONTENT_TYPES:
        if path.endswith(suffix):
            return content_type
    return DEFAULT_CONTENT_TYPE
