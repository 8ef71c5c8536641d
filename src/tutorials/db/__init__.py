"""Database module for MongoDB persistence.

Provides:
- Connection management (DatabaseGateway, open_gateway)
- Repository for the tutorials collection
"""

from tutorials.db.database import DatabaseConnectionError, DatabaseGateway, open_gateway
from tutorials.db.tutorials_repository import InvalidTutorialId, TutorialsRepository

__all__ = [
    "DatabaseConnectionError",
    "DatabaseGateway",
    "open_gateway",
    "InvalidTutorialId",
    "TutorialsRepository",
]
