"""MongoDB connection management.

The gateway is opened once at startup and handed to the application; there
is no module-level connection. Opening either returns a gateway that has
answered a ping or raises DatabaseConnectionError, and the caller decides
whether that is fatal.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import structlog
from motor.motor_asyncio import AsyncIOMotorClient
from pymongo.errors import ConfigurationError, PyMongoError

from tutorials.config.app_config import ConfigError, DatabaseConfig

logger = structlog.get_logger(__name__)


class DatabaseConnectionError(Exception):
    """Raised when the database cannot be reached at startup."""


@dataclass
class DatabaseGateway:
    """Owns the database client and exposes the tutorials collection."""

    client: Any
    database_name: str
    collection_name: str = "tutorials"

    @property
    def collection(self) -> Any:
        return self.client[self.database_name][self.collection_name]

    async def ping(self) -> bool:
        """Return True if the server answers a ping."""
        try:
            await self.client.admin.command("ping")
        except PyMongoError as e:
            logger.warning("database.ping_failed", error=str(e))
            return False
        return True

    def close(self) -> None:
        self.client.close()
        logger.info("database.closed", database=self.database_name)


def _database_name(config: DatabaseConfig, client: Any) -> str:
    if config.name:
        return config.name
    try:
        return client.get_default_database().name
    except ConfigurationError as e:
        raise ConfigError("Missing database settings: DB_NAME") from e


async def open_gateway(config: DatabaseConfig) -> DatabaseGateway:
    """Connect to the database and verify it is reachable.

    Args:
        config: Database settings.

    Returns:
        Connected DatabaseGateway.

    Raises:
        ConfigError: If the connection settings are incomplete.
        DatabaseConnectionError: If the server cannot be reached.
    """
    uri = config.build_uri()
    client = AsyncIOMotorClient(uri, serverSelectionTimeoutMS=config.timeout_ms)
    try:
        database_name = _database_name(config, client)
    except ConfigError:
        client.close()
        raise
    gateway = DatabaseGateway(
        client=client,
        database_name=database_name,
        collection_name=config.collection,
    )

    try:
        await client.admin.command("ping")
    except PyMongoError as e:
        client.close()
        logger.error(
            "database.connect_failed",
            uri=config.masked_uri(),
            error=str(e),
        )
        raise DatabaseConnectionError(f"Cannot connect to the database: {e}") from e

    logger.info(
        "database.connected",
        database=gateway.database_name,
        collection=gateway.collection_name,
    )
    return gateway
