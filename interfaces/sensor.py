# interfaces/sensor.py
# Abstract device data sources; simulations and live drivers both implement these

from typing import TYPE_CHECKING

if TYPE_CHECKING:  # pragma: no cover
    from application.device.models import StatusSnapshot, TelemetrySnapshot


class StatusSource:
    """Abstract interface for device status reads."""

    def snapshot(self) -> "StatusSnapshot":
        """Return the current status. Must be non-blocking."""
        raise NotImplementedError

    def close(self) -> None:
        """Clean up resources."""
        pass


class TelemetrySource:
    """Abstract interface for sensor telemetry reads."""

    # Schema tag reported in logs and used to pick the canonical route
    variant: str = ""

    def snapshot(self) -> "TelemetrySnapshot":
        """Return one telemetry sample. Must be non-blocking."""
        raise NotImplementedError

    def close(self) -> None:
        """Clean up resources."""
        pass
