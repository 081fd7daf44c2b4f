"""Server configuration loaded from the process environment."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Mapping, Optional

logger = logging.getLogger(__name__)


TELEMETRY_VARIANTS = ("orientation", "position")


def _get_int_env(
    env: Mapping[str, str],
    name: str,
    default: int,
    *,
    min_value: int | None = None,
    max_value: int | None = None,
) -> int:
    raw = env.get(name)
    if raw is None or not raw.strip():
        return default
    try:
        val = int(raw)
        if min_value is not None and val < min_value:
            raise ValueError(f"{name} must be >= {min_value}")
        if max_value is not None and val > max_value:
            raise ValueError(f"{name} must be <= {max_value}")
        return val
    except ValueError as exc:
        logger.warning(f"Invalid integer for {name}: {exc}; using default {default}")
        return default


def _get_optional_int_env(env: Mapping[str, str], name: str) -> Optional[int]:
    raw = (env.get(name) or "").strip()
    if not raw:
        return None
    try:
        return int(raw)
    except ValueError:
        logger.warning(f"Invalid integer for {name}: {raw!r}; ignoring")
        return None


def _get_choice_env(env: Mapping[str, str], name: str, default: str, choices: tuple[str, ...]) -> str:
    value = (env.get(name) or default).strip().lower()
    if value not in choices:
        logger.warning(f"Invalid value for {name}: {value!r}; expected one of {choices}, using {default}")
        return default
    return value


def _get_csv_env(env: Mapping[str, str], name: str, default: tuple[str, ...]) -> tuple[str, ...]:
    raw = env.get(name)
    if raw is None:
        return default
    parts = tuple(part.strip() for part in raw.split(",") if part.strip())
    return parts or default


@dataclass(frozen=True)
class ServerConfig:
    """Top-level configuration for the console service.

    Defaults match the device build: port 3000, assets from ``dist/``,
    orientation telemetry at ``/api/telemetry``.
    """

    port: int = 3000
    host: str = "0.0.0.0"
    asset_root: str = "dist"
    device_id: str = "ESP32-CAM-001"
    firmware_version: str = "1.0.0"
    recording_toggle_seconds: int = 30
    telemetry_variant: str = "orientation"
    telemetry_seed: Optional[int] = None
    cors_origins: tuple[str, ...] = ("*",)
    env: str = "local"

    @classmethod
    def from_env(cls, env: Mapping[str, str] | None = None) -> "ServerConfig":
        source = env if env is not None else os.environ
        defaults = cls()

        return cls(
            port=_get_int_env(source, "PORT", defaults.port, min_value=1, max_value=65535),
            host=(source.get("HOST") or defaults.host).strip(),
            asset_root=(source.get("ASSET_ROOT") or defaults.asset_root).strip(),
            device_id=(source.get("DEVICE_ID") or defaults.device_id).strip(),
            firmware_version=(source.get("FIRMWARE_VERSION") or defaults.firmware_version).strip(),
            recording_toggle_seconds=_get_int_env(
                source, "RECORDING_TOGGLE_SECONDS", defaults.recording_toggle_seconds, min_value=1
            ),
            telemetry_variant=_get_choice_env(
                source, "TELEMETRY_VARIANT", defaults.telemetry_variant, TELEMETRY_VARIANTS
            ),
            telemetry_seed=_get_optional_int_env(source, "TELEMETRY_SEED"),
            cors_origins=_get_csv_env(source, "CORS_ORIGINS", defaults.cors_origins),
            env=(source.get("CONSOLE_ENV") or defaults.env).strip(),
        )


def get_server_config() -> ServerConfig:
    return ServerConfig.from_env()
