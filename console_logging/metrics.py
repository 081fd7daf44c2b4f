"""Process-local counters describing logging health (drops, retries, truncation)."""

from __future__ import annotations

import copy
import threading
from collections import Counter
from dataclasses import dataclass, field


@dataclass
class RuntimeMetrics:
    dropped_total: int = 0
    dropped_levels: Counter = field(default_factory=Counter)
    retries_total: int = 0
    flush_total: int = 0
    last_flush_duration_ms: float = 0.0
    queue_depth: int = 0
    redacted_total: int = 0
    payload_truncations: Counter = field(default_factory=Counter)


_LOCK = threading.Lock()
_METRICS = RuntimeMetrics()


def record_drop(level: str) -> None:
    with _LOCK:
        _METRICS.dropped_total += 1
        _METRICS.dropped_levels[level] += 1


def record_retry() -> None:
    with _LOCK:
        _METRICS.retries_total += 1


def record_flush(duration_ms: float, batch_size: int) -> None:
    """Count ``batch_size`` delivered records and remember how long the batch took."""

    with _LOCK:
        _METRICS.flush_total += batch_size
        _METRICS.last_flush_duration_ms = duration_ms


def set_queue_depth(depth: int) -> None:
    with _LOCK:
        _METRICS.queue_depth = depth


def record_redaction(count: int) -> None:
    if count > 0:
        with _LOCK:
            _METRICS.redacted_total += count


def record_payload_truncation(kind: str) -> None:
    with _LOCK:
        _METRICS.payload_truncations[kind] += 1


def reset_metrics() -> None:
    global _METRICS

    with _LOCK:
        _METRICS = RuntimeMetrics()


def get_metrics() -> RuntimeMetrics:
    """Detached snapshot; mutating it does not touch the live counters."""

    with _LOCK:
        return copy.deepcopy(_METRICS)
