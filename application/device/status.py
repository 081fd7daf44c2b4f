"""
Simulated device status (migrated from the firmware stub).

On real hardware the identity comes from flash, uptime from the OS and the
recording flag from the camera service; swap in another ``StatusSource``
and the response shape stays the same.
"""

from __future__ import annotations

from interfaces.sensor import StatusSource

from .context import ServerContext
from .models import StatusSnapshot


DEFAULT_DEVICE_ID = "ESP32-CAM-001"
DEFAULT_VERSION = "1.0.0"
RECORDING_HALF_PERIOD_S = 30


def recording_state(uptime_seconds: int, half_period_s: int = RECORDING_HALF_PERIOD_S) -> bool:
    """Square wave: recording for the first half-period, idle for the next."""
    return (uptime_seconds // half_period_s) % 2 == 0


class SimulatedStatusProvider(StatusSource):
    def __init__(
        self,
        context: ServerContext,
        *,
        device_id: str = DEFAULT_DEVICE_ID,
        version: str = DEFAULT_VERSION,
        recording_half_period_s: int = RECORDING_HALF_PERIOD_S,
    ):
        if recording_half_period_s <= 0:
            raise ValueError("recording_half_period_s must be positive")
        self._context = context
        self.device_id = device_id
        self.version = version
        self.recording_half_period_s = recording_half_period_s

    def snapshot(self) -> StatusSnapshot:
        uptime = self._context.uptime_seconds()
        return StatusSnapshot(
            device_id=self.device_id,
            uptime_seconds=uptime,
            version=self.version,
            recording=recording_state(uptime, self.recording_half_period_s),
        )
