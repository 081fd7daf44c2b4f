# interfaces/clock.py
# Clock abstraction shared by the device simulation and its live replacements

import time


class Clock:
    """Abstract interface for timing operations."""

    def now_ms(self) -> int:
        """Return wall-clock time in epoch milliseconds."""
        raise NotImplementedError

    def monotonic_ms(self) -> int:
        """Return a monotonic reading in milliseconds (arbitrary origin)."""
        raise NotImplementedError

    def elapsed_ms(self, start_ms: int) -> int:
        """Return monotonic time elapsed since start_ms, never negative."""
        return max(0, self.monotonic_ms() - start_ms)


class SystemClock(Clock):
    """Clock backed by the host's wall and monotonic timers."""

    def now_ms(self) -> int:
        return int(time.time() * 1000)

    def monotonic_ms(self) -> int:
        return int(time.monotonic() * 1000)
