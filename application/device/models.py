"""Wire models for the device status and telemetry endpoints.

Field names are snake_case in Python; ``to_dict`` produces the camelCase
shape the frontend (and the eventual firmware) expects. Live hardware reads
must keep producing exactly these shapes.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Union


@dataclass(frozen=True)
class StatusSnapshot:
    device_id: str
    uptime_seconds: int
    version: str
    recording: bool

    def __post_init__(self):
        if self.uptime_seconds < 0:
            raise ValueError("uptime_seconds must be >= 0")

    def to_dict(self) -> Dict[str, Any]:
        return {
            "deviceId": self.device_id,
            "uptimeSeconds": self.uptime_seconds,
            "version": self.version,
            "recording": self.recording,
        }


@dataclass(frozen=True)
class Vector3:
    x: float
    y: float
    z: float

    def to_dict(self) -> Dict[str, float]:
        return {"x": self.x, "y": self.y, "z": self.z}


@dataclass(frozen=True)
class OrientationReading:
    """IMU sample: angles in degrees, accel in g, gyro in deg/s, temp in °C."""

    available: bool
    pitch: float
    roll: float
    accel: Vector3
    gyro: Vector3
    temp: float

    def to_dict(self) -> Dict[str, Any]:
        return {
            "available": self.available,
            "pitch": self.pitch,
            "roll": self.roll,
            "accel": self.accel.to_dict(),
            "gyro": self.gyro.to_dict(),
            "temp": self.temp,
        }


@dataclass(frozen=True)
class OrientationSnapshot:
    orientation: OrientationReading
    timestamp: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            "orientation": self.orientation.to_dict(),
            "timestamp": self.timestamp,
        }


@dataclass(frozen=True)
class PositionSnapshot:
    """GPS fix. Heading is half-open: 360 is reported as 0."""

    lat: float
    lon: float
    speed_kph: int
    heading_deg: int
    timestamp: int

    def __post_init__(self):
        if not -90.0 <= self.lat <= 90.0:
            raise ValueError(f"lat out of range: {self.lat}")
        if not -180.0 <= self.lon <= 180.0:
            raise ValueError(f"lon out of range: {self.lon}")
        if self.speed_kph < 0:
            raise ValueError(f"speed_kph must be >= 0: {self.speed_kph}")
        if not 0 <= self.heading_deg < 360:
            raise ValueError(f"heading_deg out of range: {self.heading_deg}")

    def to_dict(self) -> Dict[str, Any]:
        return {
            "lat": self.lat,
            "lon": self.lon,
            "speedKph": self.speed_kph,
            "headingDeg": self.heading_deg,
            "timestamp": self.timestamp,
        }


TelemetrySnapshot = Union[OrientationSnapshot, PositionSnapshot]
