"""Flask request hooks: correlation ids, W3C traceparent, one access line per request."""

from __future__ import annotations

import re
import time
import uuid
from dataclasses import dataclass
from typing import Any, Optional

from flask import Flask, Response, g, request

from .config import get_settings
from .logger import get_logger, pop_context, push_context


_TRACEPARENT = re.compile(r"^[0-9a-f]{2}-(?P<trace>[0-9a-f]{32})-(?P<span>[0-9a-f]{16})-[0-9a-f]{2}$")


@dataclass
class _RequestState:
    rid: str
    trace_id: str
    span_id: str
    started: float
    token: Any = None

    @property
    def traceparent(self) -> str:
        return f"00-{self.trace_id}-{self.span_id}-01"

    def elapsed_ms(self) -> float:
        return round((time.perf_counter() - self.started) * 1000.0, 3)

    def release_context(self) -> None:
        if self.token is not None:
            pop_context(self.token)
            self.token = None


def parse_traceparent(header: Optional[str]) -> tuple[str, str]:
    """Return ``(trace_id, span_id)`` from ``header``, minting fresh ids when it is absent or malformed."""

    match = _TRACEPARENT.match((header or "").strip().lower())
    if match:
        return match.group("trace"), match.group("span")
    return uuid.uuid4().hex, uuid.uuid4().hex[:16]


def _client_ip() -> Optional[str]:
    forwarded = request.headers.get("X-Forwarded-For", "")
    return forwarded.split(",")[0].strip() or request.remote_addr


def register_flask_context(app: Flask, *, service: str | None = None) -> None:
    """Attach before/after/teardown hooks to ``app``."""

    settings = get_settings()
    logger = get_logger(f"{service or settings.service}.http")
    rid_header = settings.request_id_header
    trace_header = settings.traceparent_header

    def _state() -> Optional[_RequestState]:
        return g.get("_console_logging")

    @app.before_request
    def _bind_request() -> None:
        if request.path.startswith(settings.exclude_routes):
            return

        trace_id, span_id = parse_traceparent(request.headers.get(trace_header))
        state = _RequestState(
            rid=(request.headers.get(rid_header) or "").strip() or uuid.uuid4().hex[:16],
            trace_id=trace_id,
            span_id=span_id,
            started=time.perf_counter(),
        )
        state.token = push_context(
            rid=state.rid,
            trace_id=trace_id,
            span_id=span_id,
            method=request.method,
            path=request.path,
            ip=_client_ip(),
        )
        g._console_logging = state

    @app.after_request
    def _log_request(response: Response) -> Response:
        state = _state()
        if state is None:
            return response

        logger.info(
            "http_request",
            route=request.url_rule.rule if request.url_rule else request.path,
            method=request.method,
            status=response.status_code,
            lat_ms=state.elapsed_ms(),
            rid=state.rid,
            context={
                "user_agent": request.headers.get("User-Agent"),
                **{name: request.headers.get(name) for name in settings.capture_headers},
            },
        )
        response.headers.setdefault(rid_header, state.rid)
        response.headers.setdefault(trace_header, state.traceparent)
        state.release_context()
        return response

    @app.teardown_request
    def _unbind_request(exc: Optional[BaseException]) -> None:
        state = _state()
        if state is None:
            return

        state.release_context()
        if exc is not None:
            logger.error(
                "http_exception",
                route=request.path,
                method=request.method,
                status=getattr(exc, "code", 500) or 500,
                lat_ms=state.elapsed_ms(),
                rid=state.rid,
                context={"exception": type(exc).__name__, "detail": str(exc)},
            )
