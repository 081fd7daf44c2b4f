"""Fixtures for logging library unit tests."""

from __future__ import annotations

from pathlib import Path
from typing import Iterable, List, Mapping

import pytest

from console_logging.config import load_settings
from console_logging.dispatcher import Sink
from console_logging.logger import LoggerManager, reset_loggers
from console_logging.metrics import record_drop, record_flush, reset_metrics, set_queue_depth
from console_logging.queue import RingBufferQueue
from console_logging.sinks.memory import InMemorySink


class _InlineDispatcher:
    """Delivers on the calling thread; same surface as the threaded Dispatcher."""

    def __init__(self, queue: RingBufferQueue, sinks: Iterable[Sink], **_options: object) -> None:
        self._queue = queue
        self._sinks: List[Sink] = list(sinks)

    def submit(self, record: Mapping[str, object]) -> None:
        evicted = self._queue.put(record)
        if evicted is not None:
            record_drop(str(evicted.get("level", "INFO")))
        self.flush()

    def emit_immediate(self, record: Mapping[str, object]) -> None:
        for sink in self._sinks:
            sink.emit(record)

    def flush(self) -> None:
        batch = self._queue.drain(self._queue.size())
        for record in batch:
            self.emit_immediate(record)
        if batch:
            record_flush(0.0, len(batch))
        set_queue_depth(self._queue.size())

    def stop(self) -> None:
        self.flush()

    def register_sink(self, sink: Sink) -> None:
        self._sinks.append(sink)

    def _snapshot_sinks(self) -> List[Sink]:
        return list(self._sinks)


def pytest_collection_modifyitems(config, items):  # pragma: no cover - Pytest hook
    """Tag every test in this directory with the `logging` marker."""

    here = Path(__file__).parent
    for item in items:
        if here in item.path.parents:
            item.add_marker(pytest.mark.logging)


@pytest.fixture(autouse=True)
def _reset_logging_state():
    """Reset logging globals (manager + metrics) around each test."""

    reset_loggers()
    reset_metrics()
    yield
    reset_metrics()
    reset_loggers()


@pytest.fixture
def logging_settings():
    """Deterministic logging settings wired to the in-memory sink."""

    return load_settings(
        {
            "LOG_SERVICE_NAME": "logging-unit-tests",
            "LOG_ENV": "test",
            "LOG_LEVEL": "DEBUG",
            "LOG_SINKS": "memory",
            "LOG_QUEUE_SIZE": "8",
            "LOG_BATCH_SIZE": "4",
            "LOG_ASYNC_WORKERS": "1",
            "LOG_FLUSH_MS": "0",
            "LOG_FLUSH_TIMEOUT_MS": "50",
            "LOG_RETRY_INITIAL_MS": "1",
            "LOG_RETRY_MAX_MS": "1",
        }
    )


@pytest.fixture
def logger_manager(monkeypatch, logging_settings):
    """Test-scoped logger manager delivering records synchronously."""

    import console_logging.config as config_module
    import console_logging.logger as logger_module

    monkeypatch.setattr(logger_module, "Dispatcher", _InlineDispatcher)

    manager = LoggerManager()
    monkeypatch.setattr(logger_module, "_MANAGER", manager)
    monkeypatch.setattr(config_module, "_SETTINGS", logging_settings, raising=False)

    manager.configure(logging_settings)

    yield manager

    manager.reset()


@pytest.fixture
def memory_sink(logger_manager) -> InMemorySink:
    """The in-memory sink created during configuration."""

    for sink in logger_manager.dispatcher._snapshot_sinks():
        if isinstance(sink, InMemorySink):
            return sink

    pytest.fail("Expected an InMemorySink to be registered during configuration")
