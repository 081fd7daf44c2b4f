"""Device status and telemetry simulation."""

from .context import ServerContext
from .models import (
    OrientationReading,
    OrientationSnapshot,
    PositionSnapshot,
    StatusSnapshot,
    TelemetrySnapshot,
    Vector3,
)
from .status import SimulatedStatusProvider, recording_state
from .telemetry import (
    TELEMETRY_VARIANTS,
    Jitter,
    OrientationTelemetryProvider,
    PositionTelemetryProvider,
    build_telemetry_sources,
    round_half_up,
)

__all__ = [
    "ServerContext",
    "StatusSnapshot",
    "Vector3",
    "OrientationReading",
    "OrientationSnapshot",
    "PositionSnapshot",
    "TelemetrySnapshot",
    "SimulatedStatusProvider",
    "recording_state",
    "TELEMETRY_VARIANTS",
    "Jitter",
    "OrientationTelemetryProvider",
    "PositionTelemetryProvider",
    "build_telemetry_sources",
    "round_half_up",
]
