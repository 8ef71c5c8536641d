"""Application configuration loader.

Loads configuration from built-in defaults, an optional YAML file
(config/tutorials.yaml, or the path in TUTORIALS_CONFIG) and finally the
process environment, which always wins.

Usage:
    from tutorials.config.app_config import load_app_config

    config = load_app_config()
    uri = config.database.build_uri()
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any
from urllib.parse import quote_plus, urlsplit, urlunsplit

import structlog
import yaml

logger = structlog.get_logger(__name__)

# Config file path (relative to project root)
CONFIG_FILE = Path("config/tutorials.yaml")
CONFIG_FILE_ENV = "TUTORIALS_CONFIG"

_TRUE_VALUES = {"1", "true", "yes", "on"}


class ConfigError(Exception):
    """Raised when the configuration cannot produce a usable setting."""


def mask_password(uri: str) -> str:
    """Replace the password in a connection string's userinfo with ****."""
    parts = urlsplit(uri)
    userinfo, at, hosts = parts.netloc.rpartition("@")
    if not at or ":" not in userinfo:
        return uri
    user = userinfo.split(":", 1)[0]
    return urlunsplit(parts._replace(netloc=f"{user}:****@{hosts}"))


@dataclass
class DatabaseConfig:
    """Connection settings for the document database."""

    user: str | None = None
    password: str | None = None
    name: str | None = None
    host: str | None = None
    port: int | None = 27017
    srv: bool = False
    uri: str | None = None
    collection: str = "tutorials"
    timeout_ms: int = 5000

    def missing(self) -> list[str]:
        """Return the environment names of required settings that are unset."""
        required = {
            "DB_USER": self.user,
            "DB_PASSWORD": self.password,
            "DB_NAME": self.name,
            "DB_HOST": self.host,
        }
        return [env for env, value in required.items() if not value]

    def build_uri(self) -> str:
        """Build the MongoDB connection string.

        Raises:
            ConfigError: If neither a full URI nor all connection parts are set.
        """
        if self.uri:
            return self.uri

        missing = self.missing()
        if missing:
            raise ConfigError(
                f"Missing database settings: {', '.join(missing)}"
            )

        credentials = f"{quote_plus(self.user)}:{quote_plus(self.password)}"
        if self.srv:
            # Seed-list addresses must not carry a port
            scheme, address = "mongodb+srv", self.host
        else:
            scheme = "mongodb"
            address = f"{self.host}:{self.port}" if self.port else self.host

        return (
            f"{scheme}://{credentials}@{address}/{self.name}"
            "?retryWrites=true&w=majority"
        )

    def masked_uri(self) -> str:
        """Connection string safe to print (password hidden)."""
        try:
            uri = self.build_uri()
        except ConfigError:
            return "<incomplete>"
        return mask_password(uri)


@dataclass
class ServerConfig:
    """HTTP server settings."""

    host: str = "127.0.0.1"
    port: int = 8080
    cors_origins: list[str] = field(default_factory=lambda: ["*"])
    log_level: str = "info"


@dataclass
class AppConfig:
    """Application-wide configuration."""

    database: DatabaseConfig = field(default_factory=DatabaseConfig)
    server: ServerConfig = field(default_factory=ServerConfig)


# Module-level cache
_cached_config: AppConfig | None = None


def _get_defaults() -> dict[str, Any]:
    """Get default configuration values."""
    return {
        "database": {
            "port": 27017,
            "srv": False,
            "collection": "tutorials",
            "timeout_ms": 5000,
        },
        "server": {
            "host": "127.0.0.1",
            "port": 8080,
            "cors_origins": ["*"],
            "log_level": "info",
        },
    }


def _config_file() -> Path:
    override = os.environ.get(CONFIG_FILE_ENV)
    return Path(override) if override else CONFIG_FILE


def _merge(base: dict[str, Any], overrides: dict[str, Any]) -> dict[str, Any]:
    """Merge one level of nested sections."""
    result = {section: dict(values) for section, values in base.items()}
    for section, values in (overrides or {}).items():
        if isinstance(values, dict):
            result.setdefault(section, {}).update(values)
    return result


def _apply_environment(data: dict[str, Any], environ: dict[str, str]) -> dict[str, Any]:
    """Overlay environment variables on top of file/default values."""
    database = data.setdefault("database", {})
    server = data.setdefault("server", {})

    env_map = {
        "DB_USER": (database, "user"),
        "DB_PASSWORD": (database, "password"),
        "DB_NAME": (database, "name"),
        "DB_HOST": (database, "host"),
        "DB_PORT": (database, "port"),
        "DB_SRV": (database, "srv"),
        "DB_URI": (database, "uri"),
        "DB_COLLECTION": (database, "collection"),
        "DB_TIMEOUT_MS": (database, "timeout_ms"),
        "HOST": (server, "host"),
        "PORT": (server, "port"),
        "CORS_ORIGINS": (server, "cors_origins"),
        "LOG_LEVEL": (server, "log_level"),
    }
    for env, (section, key) in env_map.items():
        value = environ.get(env)
        if value is not None and value != "":
            section[key] = value

    return data


def _as_int(value: Any, name: str) -> int | None:
    if value is None or value == "":
        return None
    try:
        return int(value)
    except (TypeError, ValueError) as e:
        raise ConfigError(f"{name} must be an integer, got {value!r}") from e


def _as_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() in _TRUE_VALUES


def _as_list(value: Any) -> list[str]:
    if isinstance(value, str):
        return [item.strip() for item in value.split(",") if item.strip()]
    return [str(item) for item in value or []]


def _parse_config(data: dict[str, Any]) -> AppConfig:
    """Parse configuration dictionary into AppConfig object."""
    db = data.get("database", {})
    database = DatabaseConfig(
        user=db.get("user"),
        password=db.get("password"),
        name=db.get("name"),
        host=db.get("host"),
        port=_as_int(db.get("port"), "database.port"),
        srv=_as_bool(db.get("srv", False)),
        uri=db.get("uri"),
        collection=db.get("collection") or "tutorials",
        timeout_ms=_as_int(db.get("timeout_ms"), "database.timeout_ms") or 5000,
    )

    srv = data.get("server", {})
    server = ServerConfig(
        host=srv.get("host", "127.0.0.1"),
        port=_as_int(srv.get("port"), "server.port") or 8080,
        cors_origins=_as_list(srv.get("cors_origins", ["*"])) or ["*"],
        log_level=str(srv.get("log_level", "info")).lower(),
    )

    return AppConfig(database=database, server=server)


def load_app_config(
    force_reload: bool = False,
    environ: dict[str, str] | None = None,
) -> AppConfig:
    """Load application config from defaults, YAML file and environment.

    Args:
        force_reload: If True, ignore cached config and reload.
        environ: Environment mapping to read. Defaults to os.environ.

    Returns:
        AppConfig object with all settings.

    Raises:
        ConfigError: If a numeric setting cannot be parsed.
    """
    global _cached_config

    if _cached_config is not None and not force_reload:
        return _cached_config

    data = _get_defaults()

    config_file = _config_file()
    if config_file.exists():
        logger.debug("loading_app_config", source=str(config_file))
        file_data = yaml.safe_load(config_file.read_text(encoding="utf-8")) or {}
        data = _merge(data, file_data)
    else:
        logger.debug("using_default_config")

    data = _apply_environment(data, dict(os.environ if environ is None else environ))

    _cached_config = _parse_config(data)
    return _cached_config


def clear_config_cache() -> None:
    """Clear the configuration cache.

    Useful for testing or when the environment changes at runtime.
    """
    global _cached_config
    _cached_config = None
