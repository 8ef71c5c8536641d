"""Configuration package for the tutorials API."""

from tutorials.config.app_config import (
    AppConfig,
    ConfigError,
    DatabaseConfig,
    ServerConfig,
    clear_config_cache,
    load_app_config,
)
from tutorials.config.log_setup import configure_logging

__all__ = [
    "AppConfig",
    "ConfigError",
    "DatabaseConfig",
    "ServerConfig",
    "clear_config_cache",
    "load_app_config",
    "configure_logging",
]
