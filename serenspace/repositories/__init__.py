"""
Record storage for moods, insights and profiles.
"""

from serenspace.repositories.base import (
    MoodRepository,
    InsightRepository,
    ProfileRepository,
    to_object_id,
)
from serenspace.repositories.mood_repository import MongoMoodRepository
from serenspace.repositories.insight_repository import MongoInsightRepository
from serenspace.repositories.profile_repository import MongoProfileRepository

__all__ = [
    "MoodRepository",
    "InsightRepository",
    "ProfileRepository",
    "to_object_id",
    "MongoMoodRepository",
    "MongoInsightRepository",
    "MongoProfileRepository",
]
