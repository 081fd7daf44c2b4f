"""Console application bootstrap wiring.

Builds the start-time context once and hands it to every provider. Live
hardware integrations replace the simulated sources here; nothing downstream
needs to change.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping, Optional

from flask import Flask, current_app

from app_platform.config.config import ServerConfig, get_server_config
from application.assets import StaticAssetResolver
from application.device import (
    Jitter,
    ServerContext,
    SimulatedStatusProvider,
    build_telemetry_sources,
)
from console_logging import get_logger as get_structured_logger
from interfaces import Clock, StatusSource, TelemetrySource


logger = get_structured_logger("console.bootstrap")

RUNTIME_KEY = "console_runtime"


@dataclass(slots=True)
class ConsoleRuntime:
    """Everything a request handler may read. Built once, never mutated."""

    config: ServerConfig
    context: ServerContext
    status_source: StatusSource
    telemetry_sources: Mapping[str, TelemetrySource]
    assets: StaticAssetResolver

    @property
    def telemetry(self) -> TelemetrySource:
        """The source served at ``/api/telemetry``."""

        return self.telemetry_sources[self.config.telemetry_variant]

    def close(self) -> None:
        """Release every device source; one failing close does not skip the rest."""

        sources = [("status", self.status_source), *self.telemetry_sources.items()]
        for name, source in sources:
            try:
                source.close()
            except Exception:
                logger.exception("Device source close failed", extra={"source": name})


def load_server_config() -> ServerConfig:
    return get_server_config()


def build_runtime(
    cfg: ServerConfig,
    *,
    clock: Optional[Clock] = None,
    jitter: Optional[Jitter] = None,
) -> ConsoleRuntime:
    context = ServerContext.start(clock)

    status_source = SimulatedStatusProvider(
        context,
        device_id=cfg.device_id,
        version=cfg.firmware_version,
        recording_half_period_s=cfg.recording_toggle_seconds,
    )
    telemetry_sources = build_telemetry_sources(context, jitter or Jitter.seeded(cfg.telemetry_seed))

    assets = StaticAssetResolver(cfg.asset_root)
    if not assets.is_available():
        logger.warning(
            "Asset root missing; static requests will return 404",
            extra={"asset_root": assets.root},
        )

    logger.info(
        "Console runtime constructed",
        extra={
            "device_id": cfg.device_id,
            "telemetry_variant": cfg.telemetry_variant,
            "seeded": cfg.telemetry_seed is not None,
            "asset_root": assets.root,
        },
    )

    return ConsoleRuntime(
        config=cfg,
        context=context,
        status_source=status_source,
        telemetry_sources=telemetry_sources,
        assets=assets,
    )


def get_runtime(app: Optional[Flask] = None) -> ConsoleRuntime:
    """Return the runtime attached to ``app`` (defaults to the current app)."""

    target = app or current_app
    return target.config[RUNTIME_KEY]
