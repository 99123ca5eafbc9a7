"""
Insight document storage.

Handles insight storage, retrieval and the per-user wipe used by
full-replace generation.
"""

import logging
from datetime import datetime, timezone
from typing import Any, Dict, List

from motor.motor_asyncio import AsyncIOMotorDatabase

from serenspace.repositories.base import InsightRepository, to_object_id

logger = logging.getLogger(__name__)


class MongoInsightRepository(InsightRepository):
    """
    Stores generated insights in the `insights` collection.
    """

    def __init__(self, db: AsyncIOMotorDatabase):
        """
        Initialize MongoInsightRepository.

        Args:
            db: MongoDB database connection
        """
        self._db = db
        self._insights_collection = db["insights"]

    async def list_for_user(self, user_id: str) -> List[Dict[str, Any]]:
        """
        Get all insights for a user.

        Expired insights are returned too; expiresAt is advisory.

        Returns:
            List of insight dicts sorted by createdAt descending
        """
        cursor = self._insights_collection.find({"userId": user_id})
        cursor = cursor.sort("createdAt", -1)

        insights = await cursor.to_list(length=None)
        return [self._format_insight(i) for i in insights]

    async def delete_all_for_user(self, user_id: str) -> int:
        result = await self._insights_collection.delete_many({"userId": user_id})
        logger.debug(f"Deleted {result.deleted_count} insights for user {user_id}")
        return result.deleted_count

    async def insert(self, insight: Dict[str, Any]) -> Dict[str, Any]:
        insight_doc = dict(insight)

        result = await self._insights_collection.insert_one(insight_doc)
        insight_doc["_id"] = result.inserted_id

        return self._format_insight(insight_doc)

    async def mark_read(self, insight_id: str, owner_id: str) -> bool:
        """
        Mark an insight as read.

        Args:
            insight_id: Insight document ID
            owner_id: Caller uid (ownership check)

        Returns:
            True if an owned insight matched
        """
        object_id = to_object_id(insight_id)
        if object_id is None:
            return False

        result = await self._insights_collection.update_one(
            {"_id": object_id, "userId": owner_id},
            {"$set": {"isRead": True, "updatedAt": datetime.now(timezone.utc)}},
        )
        return result.matched_count == 1

    def _format_insight(self, insight: Dict[str, Any]) -> Dict[str, Any]:
        """Format insight for response."""
        return {
            "id": str(insight["_id"]),
            "userId": insight["userId"],
            "type": insight.get("type"),
            "title": insight.get("title"),
            "description": insight.get("description"),
            "data": insight.get("data", {}),
            "isRead": insight.get("isRead", False),
            "createdAt": insight.get("createdAt"),
            "expiresAt": insight.get("expiresAt"),
        }
