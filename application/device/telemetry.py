"""Simulated sensor telemetry.

Two schemas exist for the same device: the IMU orientation block reported by
the MPU-6050 build, and the GPS position fix. Both are formula-driven from the
elapsed time in the ``ServerContext``; the orientation variant adds bounded
jitter from an injectable ``random.Random`` so tests can seed it.
"""

from __future__ import annotations

import math
import random
import threading
from typing import Dict, Optional

from interfaces.sensor import TelemetrySource

from .context import ServerContext
from .models import OrientationReading, OrientationSnapshot, PositionSnapshot, Vector3


ORIENTATION = "orientation"
POSITION = "position"
TELEMETRY_VARIANTS = (ORIENTATION, POSITION)

BASE_LAT = 33.4484
BASE_LON = -112.0740


def round_half_up(value: float, digits: int = 0) -> float:
    """Round like the firmware does (ties toward +inf), not banker's rounding."""

    scale = 10 ** digits
    return math.floor(value * scale + 0.5) / scale


class Jitter:
    """Thread-safe uniform noise in ``[-amplitude/2, amplitude/2)``."""

    def __init__(self, rng: Optional[random.Random] = None, *, amplitude: float = 0.5) -> None:
        self._rng = rng or random.Random()
        self._amplitude = amplitude
        self._lock = threading.Lock()

    @classmethod
    def seeded(cls, seed: Optional[int]) -> "Jitter":
        return cls(random.Random(seed))

    @property
    def bound(self) -> float:
        return self._amplitude / 2

    def __call__(self) -> float:
        with self._lock:
            sample = self._rng.random()
        return (sample - 0.5) * self._amplitude


class OrientationTelemetryProvider(TelemetrySource):
    """IMU pitch/roll wobble with derived accel, gyro and die temperature."""

    variant = ORIENTATION

    def __init__(self, context: ServerContext, jitter: Optional[Jitter] = None):
        self._context = context
        self._noise = jitter or Jitter()

    def snapshot(self) -> OrientationSnapshot:
        elapsed = self._context.elapsed_seconds()
        noise = self._noise

        pitch = math.sin(elapsed / 3) * 15 + noise()
        roll = math.cos(elapsed / 4) * 10 + noise()

        pitch_rad = math.radians(pitch)
        roll_rad = math.radians(roll)

        # Unit gravity split across the tilted axes
        accel = Vector3(
            x=round_half_up(math.sin(pitch_rad), 3),
            y=round_half_up(math.sin(roll_rad) * math.cos(pitch_rad), 3),
            z=round_half_up(math.cos(roll_rad) * math.cos(pitch_rad), 3),
        )
        # Derivatives of the pitch/roll waves plus independent jitter
        gyro = Vector3(
            x=round_half_up(math.cos(elapsed / 3) * 5 + noise() * 2, 2),
            y=round_half_up(-math.sin(elapsed / 4) * 2.5 + noise() * 2, 2),
            z=round_half_up(noise() * 3, 2),
        )

        reading = OrientationReading(
            available=True,
            pitch=round_half_up(pitch, 2),
            roll=round_half_up(roll, 2),
            accel=accel,
            gyro=gyro,
            temp=round_half_up(25 + math.sin(elapsed / 60) * 2, 1),
        )
        return OrientationSnapshot(orientation=reading, timestamp=self._context.now_ms())


class PositionTelemetryProvider(TelemetrySource):
    """Small circle around a fixed base coordinate; no jitter."""

    variant = POSITION

    def __init__(
        self,
        context: ServerContext,
        *,
        base_lat: float = BASE_LAT,
        base_lon: float = BASE_LON,
    ):
        self._context = context
        self.base_lat = base_lat
        self.base_lon = base_lon

    def snapshot(self) -> PositionSnapshot:
        elapsed = self._context.elapsed_seconds()

        lat = round_half_up(self.base_lat + 0.001 * math.sin(elapsed / 10), 6)
        lon = round_half_up(self.base_lon + 0.001 * math.cos(elapsed / 10), 6)
        speed = int(round_half_up(abs(80 * math.sin(elapsed / 5)) + 20))
        heading = int(round_half_up(2 * elapsed)) % 360

        return PositionSnapshot(
            lat=lat,
            lon=lon,
            speed_kph=speed,
            heading_deg=heading,
            timestamp=self._context.now_ms(),
        )


def build_telemetry_sources(
    context: ServerContext, jitter: Optional[Jitter] = None
) -> Dict[str, TelemetrySource]:
    """Return one simulated source per supported variant, keyed by variant."""

    return {
        ORIENTATION: OrientationTelemetryProvider(context, jitter),
        POSITION: PositionTelemetryProvider(context),
    }
