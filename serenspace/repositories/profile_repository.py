"""
User profile storage (streak counters).

The profile document is keyed by the Firebase uid.
"""

import logging
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from motor.motor_asyncio import AsyncIOMotorDatabase

from serenspace.repositories.base import ProfileRepository

logger = logging.getLogger(__name__)


class MongoProfileRepository(ProfileRepository):
    """
    Stores user profiles in the `users` collection with `_id` = uid.
    """

    def __init__(self, db: AsyncIOMotorDatabase):
        """
        Initialize MongoProfileRepository.

        Args:
            db: MongoDB database connection
        """
        self._db = db
        self._users_collection = db["users"]

    async def get(self, uid: str) -> Optional[Dict[str, Any]]:
        doc = await self._users_collection.find_one({"_id": uid})
        return self._format_profile(doc) if doc else None

    async def ensure(self, uid: str, display_name: Optional[str] = None) -> None:
        """
        Create the profile on first sight.

        $setOnInsert leaves an existing profile's counters alone.
        """
        now = datetime.now(timezone.utc)

        result = await self._users_collection.update_one(
            {"_id": uid},
            {
                "$setOnInsert": {
                    "displayName": display_name,
                    "streakDays": 0,
                    "longestStreak": 0,
                    "totalCheckIns": 0,
                    "lastCheckIn": None,
                    "createdAt": now,
                    "updatedAt": now,
                }
            },
            upsert=True,
        )

        if result.upserted_id is not None:
            logger.info(f"Created profile for user {uid}")

    async def compare_and_set_check_in(
        self,
        uid: str,
        expected_last_check_in: Optional[datetime],
        streak_days: int,
        now: datetime,
    ) -> bool:
        result = await self._users_collection.update_one(
            {"_id": uid, "lastCheckIn": expected_last_check_in},
            {
                "$set": {
                    "streakDays": streak_days,
                    "lastCheckIn": now,
                    "updatedAt": now,
                },
            },
        )
        return result.modified_count == 1

    async def increment_check_ins(self, uid: str) -> None:
        await self._users_collection.update_one(
            {"_id": uid},
            {"$inc": {"totalCheckIns": 1}},
        )

    def _format_profile(self, profile: Dict[str, Any]) -> Dict[str, Any]:
        """Format profile document for response."""
        return {
            "uid": profile["_id"],
            "displayName": profile.get("displayName"),
            "streakDays": profile.get("streakDays", 0),
            "longestStreak": profile.get("longestStreak", 0),
            "totalCheckIns": profile.get("totalCheckIns", 0),
            "lastCheckIn": profile.get("lastCheckIn"),
        }
