"""Runtime settings for console_logging, read from ``LOG_*`` variables."""

from __future__ import annotations

import os
import threading
from dataclasses import dataclass, field, replace
from typing import Any, Mapping


_TRUTHY = frozenset({"1", "true", "yes", "on"})


class _EnvReader:
    """Typed accessors over an environment mapping; bad values use the default."""

    def __init__(self, source: Mapping[str, str]) -> None:
        self._source = source

    def text(self, name: str, default: str) -> str:
        return self._source.get(name, default)

    def flag(self, name: str, default: bool) -> bool:
        raw = self._source.get(name)
        return default if raw is None else raw.strip().lower() in _TRUTHY

    def number(self, name: str, default: int) -> int:
        try:
            return int(self._source[name])
        except (KeyError, TypeError, ValueError):
            return default

    def items(self, name: str, default: tuple[str, ...] = ()) -> tuple[str, ...]:
        raw = self._source.get(name)
        if not raw:
            return default
        return tuple(part.strip() for part in raw.split(",") if part.strip())


@dataclass(frozen=True)
class RedactionSettings:
    """Which record keys get masked, and how long a string field may be."""

    enabled: bool = True
    denylist: tuple[str, ...] = ("authorization", "cookie", "set-cookie", "token")
    max_field_length: int = 1024
    truncate_suffix: str = "..."


@dataclass(frozen=True)
class LoggingSettings:
    service: str = "tactical-console"
    env: str = "local"
    level: str = "INFO"
    queue_size: int = 4096
    batch_size: int = 64
    flush_interval_ms: int = 200
    flush_timeout_ms: int = 2000
    worker_threads: int = 1
    retry_initial_backoff_ms: int = 50
    retry_max_backoff_ms: int = 1000
    sinks: tuple[str, ...] = ("stdout",)
    default_context: Mapping[str, Any] = field(default_factory=dict)
    capture_headers: tuple[str, ...] = ()
    exclude_routes: tuple[str, ...] = ()
    request_id_header: str = "X-Request-Id"
    traceparent_header: str = "traceparent"
    payload_limit_bytes: int = 8192
    redaction: RedactionSettings = field(default_factory=RedactionSettings)

    def with_overrides(self, **kwargs: Any) -> "LoggingSettings":
        return replace(self, **kwargs)


_SETTINGS_LOCK = threading.RLock()
_SETTINGS: LoggingSettings | None = None


def load_settings(env: Mapping[str, str] | None = None) -> LoggingSettings:
    read = _EnvReader(env if env is not None else os.environ)
    base = LoggingSettings()
    redaction = base.redaction

    return LoggingSettings(
        service=read.text("LOG_SERVICE_NAME", base.service),
        env=read.text("LOG_ENV", base.env),
        level=read.text("LOG_LEVEL", base.level).upper(),
        queue_size=read.number("LOG_QUEUE_SIZE", base.queue_size),
        batch_size=read.number("LOG_BATCH_SIZE", base.batch_size),
        flush_interval_ms=read.number("LOG_FLUSH_MS", base.flush_interval_ms),
        flush_timeout_ms=read.number("LOG_FLUSH_TIMEOUT_MS", base.flush_timeout_ms),
        worker_threads=max(1, read.number("LOG_ASYNC_WORKERS", base.worker_threads)),
        retry_initial_backoff_ms=read.number("LOG_RETRY_INITIAL_MS", base.retry_initial_backoff_ms),
        retry_max_backoff_ms=read.number("LOG_RETRY_MAX_MS", base.retry_max_backoff_ms),
        sinks=read.items("LOG_SINKS", base.sinks),
        capture_headers=read.items("LOG_CAPTURE_HEADERS"),
        exclude_routes=read.items("LOG_EXCLUDE_ROUTES"),
        request_id_header=read.text("LOG_REQUEST_ID_HEADER", base.request_id_header),
        traceparent_header=read.text("LOG_TRACE_HEADER", base.traceparent_header),
        payload_limit_bytes=read.number("LOG_PAYLOAD_LIMIT_BYTES", base.payload_limit_bytes),
        redaction=RedactionSettings(
            enabled=read.flag("LOG_REDACTION_ENABLED", redaction.enabled),
            denylist=read.items("LOG_REDACTION_DENYLIST", redaction.denylist),
            max_field_length=read.number("LOG_REDACTION_TRUNCATE_LENGTH", redaction.max_field_length),
            truncate_suffix=read.text("LOG_REDACTION_TRUNCATE_SUFFIX", redaction.truncate_suffix),
        ),
    )


def configure_settings(
    settings: LoggingSettings | None = None, **overrides: Any
) -> LoggingSettings:
    global _SETTINGS

    with _SETTINGS_LOCK:
        resolved = settings or load_settings()
        _SETTINGS = resolved.with_overrides(**overrides) if overrides else resolved
        return _SETTINGS


def get_settings() -> LoggingSettings:
    with _SETTINGS_LOCK:
        return _SETTINGS if _SETTINGS is not None else configure_settings()
