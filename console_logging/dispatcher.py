"""Background delivery of queued records to the configured sinks."""

from __future__ import annotations

import sys
import threading
import time
from dataclasses import dataclass
from typing import Iterable, Iterator, List, Mapping, Protocol

from .metrics import record_drop, record_flush, record_retry, set_queue_depth
from .queue import RingBufferQueue


class Sink(Protocol):
    def emit(self, record: Mapping[str, object]) -> None:  # pragma: no cover - protocol
        ...


@dataclass(frozen=True)
class RetryPolicy:
    """Exponential backoff for a failing sink, bounded by a total budget."""

    initial_s: float
    max_s: float
    budget_s: float

    def delays(self) -> Iterator[float]:
        spent = 0.0
        delay = self.initial_s
        while spent + delay <= self.budget_s:
            yield delay
            spent += delay
            delay = min(delay * 2, self.max_s)


class Dispatcher:
    """Worker threads drain the queue in batches and fan records out to sinks."""

    def __init__(
        self,
        queue: RingBufferQueue,
        sinks: Iterable[Sink],
        *,
        batch_size: int,
        flush_interval_ms: int,
        flush_timeout_ms: int,
        worker_threads: int,
        retry_initial_ms: int,
        retry_max_ms: int,
    ) -> None:
        self._queue = queue
        self._sinks: List[Sink] = list(sinks)
        self._sinks_lock = threading.Lock()
        self._batch_size = max(1, batch_size)
        self._poll_s = flush_interval_ms / 1000.0
        self._flush_budget_s = flush_timeout_ms / 1000.0
        self._retry = RetryPolicy(
            initial_s=retry_initial_ms / 1000.0,
            max_s=max(retry_initial_ms, retry_max_ms) / 1000.0,
            budget_s=self._flush_budget_s,
        )
        self._stopping = threading.Event()
        self._workers = [
            threading.Thread(target=self._run, name=f"console-log-dispatcher-{i}", daemon=True)
            for i in range(max(1, worker_threads))
        ]
        for worker in self._workers:
            worker.start()

    def register_sink(self, sink: Sink) -> None:
        with self._sinks_lock:
            self._sinks.append(sink)

    def submit(self, record: Mapping[str, object]) -> None:
        evicted = self._queue.put(record)
        if evicted is not None:
            record_drop(str(evicted.get("level", "INFO")))

    def emit_immediate(self, record: Mapping[str, object]) -> None:
        """Deliver ``record`` on the calling thread, skipping the queue."""

        for sink in self._snapshot_sinks():
            self._deliver(sink, record)

    def flush(self) -> None:
        """Drain whatever is buffered, giving up after the flush budget."""

        give_up_at = time.monotonic() + self._flush_budget_s
        while time.monotonic() < give_up_at and self._drain_once():
            pass

    def stop(self) -> None:
        self._stopping.set()
        for worker in self._workers:
            worker.join(timeout=1.0)
        self.flush()

    def _run(self) -> None:
        while not self._stopping.is_set():
            if self._queue.wait(self._poll_s):
                self._drain_once()

    def _drain_once(self) -> bool:
        batch = self._queue.drain(self._batch_size)
        if not batch:
            return False

        started = time.perf_counter()
        sinks = self._snapshot_sinks()
        for record in batch:
            for sink in sinks:
                self._deliver(sink, record)

        record_flush((time.perf_counter() - started) * 1000.0, len(batch))
        set_queue_depth(self._queue.size())
        return True

    def _snapshot_sinks(self) -> List[Sink]:
        with self._sinks_lock:
            return list(self._sinks)

    def _deliver(self, sink: Sink, record: Mapping[str, object]) -> None:
        try:
            sink.emit(record)
            return
        except Exception:  # sink failures must not kill the worker
            record_retry()

        for delay in self._retry.delays():
            time.sleep(delay)
            try:
                sink.emit(record)
                return
            except Exception:
                record_retry()

        print(f"console_logging: dropped record after retries ({type(sink).__name__})", file=sys.stderr)
