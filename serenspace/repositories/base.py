"""
Abstract repository interfaces for per-user records.

MoodAggregator and StreakTracker depend only on these contracts, so the
Motor-backed implementations can be swapped for in-memory fakes. Every
mutating method takes the expected owner and refuses to touch records
owned by someone else.
"""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Any, Dict, List, Optional

from bson import ObjectId
from bson.errors import InvalidId


def to_object_id(value: str) -> Optional[ObjectId]:
    """Parse a client-supplied id, returning None when it is malformed."""
    # ObjectId(None) would mint a new id
    if not value:
        return None
    try:
        return ObjectId(value)
    except (InvalidId, TypeError):
        return None


class MoodRepository(ABC):
    """Storage contract for MoodEntry records."""

    @abstractmethod
    async def create(
        self,
        user_id: str,
        score: int,
        emotion: str,
        note: str = "",
        tags: Optional[List[str]] = None,
    ) -> Dict[str, Any]:
        """Insert a new entry and return it with its assigned id."""
        pass

    @abstractmethod
    async def get_owned(self, mood_id: str, owner_id: str) -> Optional[Dict[str, Any]]:
        """Return the entry if it exists and belongs to owner_id."""
        pass

    @abstractmethod
    async def list_since(self, user_id: str, since: datetime) -> List[Dict[str, Any]]:
        """Entries created at or after `since`, newest first."""
        pass

    @abstractmethod
    async def list_all(self, user_id: str) -> List[Dict[str, Any]]:
        """Every entry of the user, unordered."""
        pass

    @abstractmethod
    async def list_recent(self, user_id: str, limit: int) -> List[Dict[str, Any]]:
        """Up to `limit` most recent entries, newest first."""
        pass

    @abstractmethod
    async def update_owned(
        self,
        mood_id: str,
        owner_id: str,
        fields: Dict[str, Any],
    ) -> Optional[Dict[str, Any]]:
        """Apply fields and refresh updatedAt; None if missing or not owned."""
        pass

    @abstractmethod
    async def delete_owned(self, mood_id: str, owner_id: str) -> bool:
        """Delete the entry; False if missing or not owned."""
        pass


class InsightRepository(ABC):
    """Storage contract for Insight records."""

    @abstractmethod
    async def list_for_user(self, user_id: str) -> List[Dict[str, Any]]:
        """Insights of the user, newest first."""
        pass

    @abstractmethod
    async def delete_all_for_user(self, user_id: str) -> int:
        """Remove every insight of the user in one multi-delete."""
        pass

    @abstractmethod
    async def insert(self, insight: Dict[str, Any]) -> Dict[str, Any]:
        """Insert one insight and return it with its assigned id."""
        pass

    @abstractmethod
    async def mark_read(self, insight_id: str, owner_id: str) -> bool:
        """Set isRead; False if missing or not owned."""
        pass


class ProfileRepository(ABC):
    """Storage contract for the per-user profile document."""

    @abstractmethod
    async def get(self, uid: str) -> Optional[Dict[str, Any]]:
        """Return the profile or None."""
        pass

    @abstractmethod
    async def ensure(self, uid: str, display_name: Optional[str] = None) -> None:
        """Create the profile with zeroed counters unless it already exists."""
        pass

    @abstractmethod
    async def compare_and_set_check_in(
        self,
        uid: str,
        expected_last_check_in: Optional[datetime],
        streak_days: int,
        now: datetime,
    ) -> bool:
        """
        Move the streak forward if lastCheckIn still equals the value read.

        Sets streakDays and lastCheckIn. Returns False when another writer
        got there first, in which case nothing is changed.
        """
        pass

    @abstractmethod
    async def increment_check_ins(self, uid: str) -> None:
        """Atomically add one to totalCheckIns, whatever the streak state."""
        pass
