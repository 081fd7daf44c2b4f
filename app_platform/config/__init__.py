"""Configuration utilities and loaders."""

from .config import TELEMETRY_VARIANTS, ServerConfig, get_server_config

__all__ = [
    "TELEMETRY_VARIANTS",
    "ServerConfig",
    "get_server_config",
]
