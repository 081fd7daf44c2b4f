"""Process start-time context shared read-only by the device providers."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from interfaces.clock import Clock, SystemClock


@dataclass(frozen=True)
class ServerContext:
    """Reference instant captured once when the application is built.

    Uptime is measured on the clock's monotonic axis so it never goes
    backwards; ``now_ms`` stays on the wall axis for payload timestamps.
    """

    clock: Clock
    started_at_ms: int
    started_mono_ms: int

    @classmethod
    def start(cls, clock: Optional[Clock] = None) -> "ServerContext":
        clock = clock or SystemClock()
        return cls(
            clock=clock,
            started_at_ms=clock.now_ms(),
            started_mono_ms=clock.monotonic_ms(),
        )

    def now_ms(self) -> int:
        return self.clock.now_ms()

    def elapsed_ms(self) -> int:
        return self.clock.elapsed_ms(self.started_mono_ms)

    def elapsed_seconds(self) -> float:
        return self.elapsed_ms() / 1000.0

    def uptime_seconds(self) -> int:
        return self.elapsed_ms() // 1000
