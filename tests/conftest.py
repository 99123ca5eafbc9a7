"""Shared test fixtures for SerenSpace backend tests."""

import asyncio
import itertools
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional
from unittest.mock import AsyncMock, MagicMock

import pytest
from bson import ObjectId

from serenspace.repositories.base import (
    MoodRepository,
    InsightRepository,
    ProfileRepository,
)


# ─────────────────────────────────────────────────────────────────
# In-memory repositories
# ─────────────────────────────────────────────────────────────────

_ids = itertools.count(1)


def _next_id() -> str:
    return f"id{next(_ids)}"


class InMemoryMoodRepository(MoodRepository):
    def __init__(self):
        self.moods: List[Dict[str, Any]] = []

    async def create(self, user_id, score, emotion, note="", tags=None):
        now = datetime.now(timezone.utc)
        mood = {
            "id": _next_id(),
            "userId": user_id,
            "score": score,
            "emotion": emotion,
            "note": note,
            "tags": tags or [],
            "createdAt": now,
            "updatedAt": now,
        }
        self.moods.append(mood)
        return dict(mood)

    async def get_owned(self, mood_id, owner_id):
        for mood in self.moods:
            if mood["id"] == mood_id and mood["userId"] == owner_id:
                return dict(mood)
        return None

    async def list_since(self, user_id, since):
        found = [m for m in self.moods if m["userId"] == user_id and m["createdAt"] >= since]
        return sorted(found, key=lambda m: m["createdAt"], reverse=True)

    async def list_all(self, user_id):
        return [dict(m) for m in self.moods if m["userId"] == user_id]

    async def list_recent(self, user_id, limit):
        found = sorted(
            (m for m in self.moods if m["userId"] == user_id),
            key=lambda m: m["createdAt"],
            reverse=True,
        )
        return found[:limit]

    async def update_owned(self, mood_id, owner_id, fields):
        for mood in self.moods:
            if mood["id"] == mood_id and mood["userId"] == owner_id:
                mood.update(fields)
                mood["updatedAt"] = datetime.now(timezone.utc)
                return dict(mood)
        return None

    async def delete_owned(self, mood_id, owner_id):
        before = len(self.moods)
        self.moods = [
            m for m in self.moods
            if not (m["id"] == mood_id and m["userId"] == owner_id)
        ]
        return len(self.moods) < before


class InMemoryInsightRepository(InsightRepository):
    def __init__(self):
        self.insights: List[Dict[str, Any]] = []

    async def list_for_user(self, user_id):
        found = [dict(i) for i in self.insights if i["userId"] == user_id]
        return sorted(found, key=lambda i: i["createdAt"], reverse=True)

    async def delete_all_for_user(self, user_id):
        before = len(self.insights)
        self.insights = [i for i in self.insights if i["userId"] != user_id]
        return before - len(self.insights)

    async def insert(self, insight):
        saved = {**insight, "id": _next_id()}
        self.insights.append(saved)
        return dict(saved)

    async def mark_read(self, insight_id, owner_id):
        for insight in self.insights:
            if insight["id"] == insight_id and insight["userId"] == owner_id:
                insight["isRead"] = True
                return True
        return False


class InMemoryProfileRepository(ProfileRepository):
    def __init__(self):
        self.profiles: Dict[str, Dict[str, Any]] = {}
        # Hand control back to the loop on every read so concurrent
        # check-ins interleave between read and write
        self.yield_on_read = False

    async def get(self, uid):
        if self.yield_on_read:
            await asyncio.sleep(0)
        profile = self.profiles.get(uid)
        return dict(profile) if profile else None

    async def ensure(self, uid, display_name=None):
        self.profiles.setdefault(uid, {
            "uid": uid,
            "displayName": display_name,
            "streakDays": 0,
            "longestStreak": 0,
            "totalCheckIns": 0,
            "lastCheckIn": None,
        })

    async def compare_and_set_check_in(self, uid, expected_last_check_in, streak_days, now):
        profile = self.profiles.get(uid)
        if profile is None or profile["lastCheckIn"] != expected_last_check_in:
            return False
        profile["streakDays"] = streak_days
        profile["lastCheckIn"] = now
        return True

    async def increment_check_ins(self, uid):
        if uid in self.profiles:
            self.profiles[uid]["totalCheckIns"] += 1

    def seed(
        self,
        uid: str,
        streak_days: int = 0,
        last_check_in: Optional[datetime] = None,
        total_check_ins: int = 0,
        longest_streak: int = 0,
    ) -> None:
        self.profiles[uid] = {
            "uid": uid,
            "displayName": None,
            "streakDays": streak_days,
            "longestStreak": longest_streak,
            "totalCheckIns": total_check_ins,
            "lastCheckIn": last_check_in,
        }


# ─────────────────────────────────────────────────────────────────
# Fixtures
# ─────────────────────────────────────────────────────────────────

@pytest.fixture
def sample_user_id():
    return "firebase-uid-alice"


@pytest.fixture
def other_user_id():
    return "firebase-uid-bob"


@pytest.fixture
def mood_repository():
    return InMemoryMoodRepository()


@pytest.fixture
def insight_repository():
    return InMemoryInsightRepository()


@pytest.fixture
def profile_repository():
    return InMemoryProfileRepository()


@pytest.fixture
def mock_collection():
    collection = AsyncMock()
    # Motor's find() returns a cursor synchronously (not a coroutine),
    # so use MagicMock for it. Async methods like find_one, insert_one,
    # update_one etc. stay as AsyncMock.
    collection.find = MagicMock()
    return collection


@pytest.fixture
def mock_db(mock_collection):
    db = MagicMock()
    db.__getitem__ = MagicMock(return_value=mock_collection)
    return db


@pytest.fixture
def mock_cursor():
    """Chainable Motor cursor whose to_list() result is set per test."""
    cursor = MagicMock()
    cursor.sort = MagicMock(return_value=cursor)
    cursor.limit = MagicMock(return_value=cursor)
    cursor.to_list = AsyncMock(return_value=[])
    return cursor


@pytest.fixture
def sample_mood_doc(sample_user_id):
    now = datetime.now(timezone.utc)
    return {
        "_id": ObjectId(),
        "userId": sample_user_id,
        "score": 7,
        "emotion": "calm",
        "note": "Walked by the river",
        "tags": ["outdoors"],
        "createdAt": now,
        "updatedAt": now,
    }
