# interfaces/__init__.py
# Abstract interfaces for the device abstraction layer

from .clock import Clock, SystemClock
from .sensor import StatusSource, TelemetrySource

__all__ = ['Clock', 'SystemClock', 'StatusSource', 'TelemetrySource']
