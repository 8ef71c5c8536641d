"""Repository for the tutorials collection.

Provides CRUD operations over an async MongoDB collection. Values passed in
are expected to be validated already (see tutorials.core.tutorial).
"""

from __future__ import annotations

import re
from typing import Any

import structlog
from bson import ObjectId
from bson.errors import InvalidId
from pymongo import ReturnDocument

from tutorials.core.tutorial import TUTORIAL_FIELDS, Tutorial

logger = structlog.get_logger(__name__)

# Only public fields leave the database (the _id is always included)
PROJECTION = {name: 1 for name in TUTORIAL_FIELDS}


class InvalidTutorialId(ValueError):
    """Raised when an id is not a valid ObjectId."""

    def __init__(self, tutorial_id: str):
        self.tutorial_id = tutorial_id
        super().__init__(f"'{tutorial_id}' is not a valid tutorial id")


def to_object_id(tutorial_id: str) -> ObjectId:
    """Convert a path id into an ObjectId.

    Raises:
        InvalidTutorialId: If the id is malformed.
    """
    try:
        return ObjectId(tutorial_id)
    except (InvalidId, TypeError) as e:
        raise InvalidTutorialId(tutorial_id) from e


def title_filter(title: str | None) -> dict[str, Any]:
    """Build a case-insensitive substring filter on title."""
    if not title:
        return {}
    return {"title": {"$regex": re.escape(title), "$options": "i"}}


class TutorialsRepository:
    """CRUD access to tutorial documents."""

    def __init__(self, collection: Any):
        self.collection = collection

    async def _find(self, query: dict[str, Any]) -> list[Tutorial]:
        cursor = self.collection.find(query, PROJECTION)
        documents = await cursor.to_list(length=None)
        return [Tutorial.from_document(doc) for doc in documents]

    async def create(self, values: dict[str, Any]) -> str:
        """Insert a tutorial and return its new id."""
        result = await self.collection.insert_one(dict(values))
        tutorial_id = str(result.inserted_id)
        logger.info("tutorial.created", tutorial_id=tutorial_id)
        return tutorial_id

    async def list_all(self, title: str | None = None) -> list[Tutorial]:
        """List tutorials, optionally filtered by a title substring."""
        return await self._find(title_filter(title))

    async def list_published(self) -> list[Tutorial]:
        return await self._find({"published": True})

    async def get(self, tutorial_id: str) -> Tutorial | None:
        document = await self.collection.find_one(
            {"_id": to_object_id(tutorial_id)}, PROJECTION
        )
        if document is None:
            return None
        return Tutorial.from_document(document)

    async def update(self, tutorial_id: str, values: dict[str, Any]) -> bool:
        """Set the given fields on a tutorial.

        Returns:
            True if a tutorial with that id existed.
        """
        document = await self.collection.find_one_and_update(
            {"_id": to_object_id(tutorial_id)},
            {"$set": dict(values)},
            projection=PROJECTION,
            return_document=ReturnDocument.AFTER,
        )
        updated = document is not None
        logger.info("tutorial.updated", tutorial_id=tutorial_id, found=updated)
        return updated

    async def delete(self, tutorial_id: str) -> bool:
        """Remove a tutorial. Returns True if one was removed."""
        document = await self.collection.find_one_and_delete(
            {"_id": to_object_id(tutorial_id)}
        )
        deleted = document is not None
        logger.info("tutorial.deleted", tutorial_id=tutorial_id, found=deleted)
        return deleted

    async def count(self) -> int:
        return await self.collection.count_documents({})
