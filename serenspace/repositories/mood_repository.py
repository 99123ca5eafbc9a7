"""
MongoDB-backed mood entry storage.

Pure CRUD - statistics live in MoodAggregator.
"""

import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo import ReturnDocument

from serenspace.repositories.base import MoodRepository, to_object_id

logger = logging.getLogger(__name__)


class MongoMoodRepository(MoodRepository):
    """
    Stores mood check-ins in the `moods` collection.
    """

    def __init__(self, db: AsyncIOMotorDatabase):
        """
        Initialize MongoMoodRepository.

        Args:
            db: MongoDB database connection
        """
        self._db = db
        self._moods_collection = db["moods"]

    async def create(
        self,
        user_id: str,
        score: int,
        emotion: str,
        note: str = "",
        tags: Optional[List[str]] = None,
    ) -> Dict[str, Any]:
        """
        Insert a new mood entry.

        Args:
            user_id: Firebase uid of the owner
            score: 1-10 mood score (already validated)
            emotion: Emotion value (already validated)
            note: Optional free text
            tags: Optional labels

        Returns:
            Formatted mood entry including its id
        """
        now = datetime.now(timezone.utc)

        mood_doc = {
            "userId": user_id,
            "score": score,
            "emotion": emotion,
            "note": note or "",
            "tags": tags or [],
            "createdAt": now,
            "updatedAt": now,
        }

        result = await self._moods_collection.insert_one(mood_doc)
        mood_doc["_id"] = result.inserted_id

        logger.info(f"Mood entry {result.inserted_id} created for user {user_id}")
        return self._format_mood(mood_doc)

    async def get_owned(self, mood_id: str, owner_id: str) -> Optional[Dict[str, Any]]:
        object_id = to_object_id(mood_id)
        if object_id is None:
            return None

        doc = await self._moods_collection.find_one({"_id": object_id, "userId": owner_id})
        return self._format_mood(doc) if doc else None

    async def list_since(self, user_id: str, since: datetime) -> List[Dict[str, Any]]:
        """
        Get entries created within a window.

        Args:
            user_id: Owner uid
            since: Inclusive lower bound on createdAt

        Returns:
            List of entries sorted by createdAt descending
        """
        cursor = self._moods_collection.find({
            "userId": user_id,
            "createdAt": {"$gte": since},
        })
        cursor = cursor.sort("createdAt", -1)

        docs = await cursor.to_list(length=None)
        return [self._format_mood(d) for d in docs]

    async def list_all(self, user_id: str) -> List[Dict[str, Any]]:
        cursor = self._moods_collection.find({"userId": user_id})
        docs = await cursor.to_list(length=None)
        return [self._format_mood(d) for d in docs]

    async def list_recent(self, user_id: str, limit: int) -> List[Dict[str, Any]]:
        cursor = self._moods_collection.find({"userId": user_id})
        cursor = cursor.sort("createdAt", -1)
        cursor = cursor.limit(limit)

        docs = await cursor.to_list(length=limit)
        return [self._format_mood(d) for d in docs]

    async def update_owned(
        self,
        mood_id: str,
        owner_id: str,
        fields: Dict[str, Any],
    ) -> Optional[Dict[str, Any]]:
        """
        Update score/emotion/note/tags of an owned entry.

        Returns:
            Updated entry, or None if it doesn't exist or isn't owned
        """
        object_id = to_object_id(mood_id)
        if object_id is None:
            return None

        updates = {**fields, "updatedAt": datetime.now(timezone.utc)}

        result = await self._moods_collection.find_one_and_update(
            {"_id": object_id, "userId": owner_id},
            {"$set": updates},
            return_document=ReturnDocument.AFTER,
        )

        if not result:
            return None

        logger.info(f"Mood entry {mood_id} updated by user {owner_id}")
        return self._format_mood(result)

    async def delete_owned(self, mood_id: str, owner_id: str) -> bool:
        object_id = to_object_id(mood_id)
        if object_id is None:
            return False

        result = await self._moods_collection.delete_one({"_id": object_id, "userId": owner_id})

        if result.deleted_count:
            logger.info(f"Mood entry {mood_id} deleted by user {owner_id}")
        return result.deleted_count == 1

    def _format_mood(self, mood: Dict[str, Any]) -> Dict[str, Any]:
        """Format mood document for response."""
        return {
            "id": str(mood["_id"]),
            "userId": mood["userId"],
            "score": mood.get("score"),
            "emotion": mood.get("emotion"),
            "note": mood.get("note", ""),
            "tags": mood.get("tags", []),
            "createdAt": mood.get("createdAt"),
            "updatedAt": mood.get("updatedAt"),
        }
