"""Structured logging facade.

``get_logger(name)`` hands out lightweight ``StructuredLogger`` objects bound
to a process-wide ``LoggerManager``. The manager owns the queue, dispatcher,
sinks and redactor; reconfiguring it swaps all of them at once, so loggers
created at import time keep working across ``configure()`` calls.
"""

from __future__ import annotations

import json
import sys
import traceback
from contextlib import contextmanager
from contextvars import ContextVar, Token
from threading import RLock
from typing import Any, Callable, Dict, Mapping, Optional

from .config import LoggingSettings, get_settings
from .dispatcher import Dispatcher, Sink
from .metrics import reset_metrics
from .queue import RingBufferQueue
from .redaction import RedactorRegistry, build_registry
from .schema import build_log_record
from .sinks.memory import InMemorySink
from .sinks.stdout import StdoutSink


_CONTEXT: ContextVar[Mapping[str, Any]] = ContextVar("console_logging_context", default={})

LEVELS: Mapping[str, int] = {"DEBUG": 10, "INFO": 20, "WARNING": 30, "ERROR": 40, "CRITICAL": 50}

SINK_FACTORIES: Dict[str, Callable[[], Sink]] = {
    "stdout": StdoutSink,
    "memory": InMemorySink,
}


def _exception_fields() -> Dict[str, str]:
    exc_type, exc, tb = sys.exc_info()
    if exc_type is None:
        return {}
    return {
        "exception": exc_type.__name__,
        "traceback": "".join(traceback.format_exception(exc_type, exc, tb)),
    }


class StructuredLogger:
    """Named logger. Keyword arguments (and stdlib-style ``extra=``) become
    top-level record fields; ``context=`` merges into the record context."""

    def __init__(self, name: str, manager: "LoggerManager") -> None:
        self._name = name
        self._manager = manager

    @property
    def name(self) -> str:
        return self._name

    def debug(self, message: str, **fields: Any) -> None:
        self.log("DEBUG", message, **fields)

    def info(self, message: str, **fields: Any) -> None:
        self.log("INFO", message, **fields)

    def warning(self, message: str, **fields: Any) -> None:
        self.log("WARNING", message, **fields)

    def error(self, message: str, **fields: Any) -> None:
        self.log("ERROR", message, **fields)

    def critical(self, message: str, **fields: Any) -> None:
        self.log("CRITICAL", message, **fields)

    def exception(self, message: str, **fields: Any) -> None:
        fields.setdefault("exc_info", True)
        self.log("ERROR", message, **fields)

    def log(self, level: str, message: str, **fields: Any) -> None:
        manager = self._manager
        if not manager.enabled_for(level):
            return

        extra = fields.pop("extra", None) or {}
        call_context = fields.pop("context", None) or {}
        want_exc = fields.pop("exc_info", False)

        payload = {**extra, **fields}
        if want_exc:
            payload.update(_exception_fields())

        context = {**manager.base_context, **_CONTEXT.get(), **call_context}
        manager.publish(
            build_log_record(
                level=level,
                message=message,
                settings=manager.settings,
                component=self._name,
                context=context,
                **payload,
            )
        )


class LoggerManager:
    """Owns the queue, dispatcher and sinks behind every StructuredLogger."""

    def __init__(self) -> None:
        self._lock = RLock()
        self._loggers: Dict[str, StructuredLogger] = {}
        self._settings: LoggingSettings | None = None
        self._dispatcher: Dispatcher | None = None
        self._queue: RingBufferQueue | None = None
        self._base_context: Dict[str, Any] = {}
        self._redactor: Optional[RedactorRegistry] = None

    def configure(self, settings: LoggingSettings) -> None:
        with self._lock:
            self._shutdown_dispatcher()

            names = [name.strip().lower() for name in settings.sinks]
            sinks = [SINK_FACTORIES[name]() for name in names if name in SINK_FACTORIES]

            self._settings = settings
            self._queue = RingBufferQueue(settings.queue_size, on_drop=self._handle_drop)
            self._dispatcher = Dispatcher(
                self._queue,
                sinks or [StdoutSink()],
                batch_size=settings.batch_size,
                flush_interval_ms=settings.flush_interval_ms,
                flush_timeout_ms=settings.flush_timeout_ms,
                worker_threads=settings.worker_threads,
                retry_initial_ms=settings.retry_initial_backoff_ms,
                retry_max_ms=settings.retry_max_backoff_ms,
            )
            self._base_context = dict(settings.default_context)
            self._redactor = build_registry(settings.redaction)

            reset_metrics()

    def _ensure_configured(self) -> None:
        if self._dispatcher is None or self._settings is None:
            self.configure(get_settings())

    @property
    def dispatcher(self) -> Dispatcher:
        self._ensure_configured()
        return self._dispatcher  # type: ignore[return-value]

    @property
    def settings(self) -> LoggingSettings:
        self._ensure_configured()
        return self._settings  # type: ignore[return-value]

    @property
    def base_context(self) -> Mapping[str, Any]:
        return dict(self._base_context)

    @property
    def redactor(self) -> Optional[RedactorRegistry]:
        return self._redactor

    def enabled_for(self, level: str) -> bool:
        threshold = LEVELS.get(self.settings.level, LEVELS["INFO"])
        return LEVELS.get(level, LEVELS["INFO"]) >= threshold

    def publish(self, record: Mapping[str, Any]) -> None:
        redactor = self._redactor
        self.dispatcher.submit(redactor.apply(record) if redactor else dict(record))

    def get_logger(self, name: str) -> StructuredLogger:
        with self._lock:
            return self._loggers.setdefault(name, StructuredLogger(name, self))

    def flush(self) -> None:
        if self._dispatcher is not None:
            self._dispatcher.flush()

    def reset(self) -> None:
        with self._lock:
            self._shutdown_dispatcher()
            self._settings = None
            self._queue = None
            self._base_context = {}
            self._redactor = None

    def memory_records(self) -> list:
        dispatcher = self._dispatcher
        if dispatcher is None:
            return []
        for sink in dispatcher._snapshot_sinks():
            if isinstance(sink, InMemorySink):
                return list(sink.records)
        return []

    def _shutdown_dispatcher(self) -> None:
        dispatcher, self._dispatcher = self._dispatcher, None
        if dispatcher is not None:
            dispatcher.stop()

    def _handle_drop(self, dropped: Mapping[str, object]) -> None:
        dispatcher, queue, settings = self._dispatcher, self._queue, self._settings
        if dispatcher is None or queue is None or settings is None:
            return

        notice = build_log_record(
            level="WARNING",
            message="log_drop",
            settings=settings,
            component="logging.queue",
            context={**self._base_context, "drop": queue.drop_metadata(dropped)},
        )
        dispatcher.emit_immediate(notice)


_MANAGER = LoggerManager()


def configure_manager(settings: LoggingSettings) -> None:
    _MANAGER.configure(settings)


def get_logger(name: str) -> StructuredLogger:
    return _MANAGER.get_logger(name)


def flush_loggers() -> None:
    _MANAGER.flush()


def reset_loggers() -> None:
    _MANAGER.reset()


def dump_memory_sink() -> str:
    """JSON dump of the in-memory sink (``[]`` when none is configured)."""

    return json.dumps(_MANAGER.memory_records(), indent=2, default=str)


@contextmanager
def logger_context(**context: Any):
    """Bind ``context`` to every record logged inside the block."""

    token = push_context(**context)
    try:
        yield
    finally:
        pop_context(token)


def push_context(**context: Any) -> Token:
    return _CONTEXT.set({**_CONTEXT.get(), **context})


def pop_context(token: Token) -> None:
    _CONTEXT.reset(token)


def get_context() -> Mapping[str, Any]:
    return dict(_CONTEXT.get())

