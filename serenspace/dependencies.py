"""
FastAPI dependencies for the SerenSpace application.

Provides dependency injection for all services.
"""

from datetime import timedelta
from typing import Any, Dict, Optional

from fastapi import Depends
from motor.motor_asyncio import AsyncIOMotorDatabase

from common.auth import AuthProvider, FirebaseAuth, create_auth_dependency
from serenspace.config import settings

from serenspace.repositories import (
    MoodRepository,
    InsightRepository,
    ProfileRepository,
    MongoMoodRepository,
    MongoInsightRepository,
    MongoProfileRepository,
)
from serenspace.services.mood.mood_aggregator import MoodAggregator
from serenspace.services.profile.streak_tracker import StreakTracker
from serenspace.services.community.post_service import PostService
from serenspace.services.tools.tool_service import ToolService


# ─────────────────────────────────────────────────────────────────
# Global service instances
# ─────────────────────────────────────────────────────────────────

# Auth
_auth_provider: Optional[AuthProvider] = None

# Repositories
_mood_repository: Optional[MoodRepository] = None
_insight_repository: Optional[InsightRepository] = None
_profile_repository: Optional[ProfileRepository] = None

# Mood
_mood_aggregator: Optional[MoodAggregator] = None
_streak_tracker: Optional[StreakTracker] = None

# Community
_post_service: Optional[PostService] = None

# Tools
_tool_service: Optional[ToolService] = None


# ─────────────────────────────────────────────────────────────────
# Initialization functions
# ─────────────────────────────────────────────────────────────────

def init_auth_services(
    firebase_credentials_path: Optional[str] = None,
    firebase_project_id: Optional[str] = None,
    auth_provider: Optional[AuthProvider] = None,
) -> None:
    """
    Initialize the token verifier.

    Args:
        firebase_credentials_path: Service account file for Firebase
        firebase_project_id: Firebase project id
        auth_provider: Pre-built provider (skips Firebase setup)
    """
    global _auth_provider

    _auth_provider = auth_provider or FirebaseAuth(
        credentials_path=firebase_credentials_path,
        project_id=firebase_project_id,
    )


def init_mood_services(db: AsyncIOMotorDatabase) -> None:
    """
    Initialize repositories, aggregator and streak tracker.

    Args:
        db: MongoDB database connection
    """
    global _mood_repository, _insight_repository, _profile_repository
    global _mood_aggregator, _streak_tracker

    _mood_repository = MongoMoodRepository(db)
    _insight_repository = MongoInsightRepository(db)
    _profile_repository = MongoProfileRepository(db)

    _mood_aggregator = MoodAggregator(
        mood_repository=_mood_repository,
        insight_repository=_insight_repository,
        source_limit=settings.INSIGHT_SOURCE_LIMIT,
        insight_ttl=timedelta(days=settings.INSIGHT_TTL_DAYS),
    )
    _streak_tracker = StreakTracker(
        profile_repository=_profile_repository,
        max_retries=settings.STREAK_MAX_RETRIES,
    )


def init_community_services(db: AsyncIOMotorDatabase) -> None:
    global _post_service, _tool_service

    _post_service = PostService(
        db,
        feed_limit=settings.FEED_LIMIT,
        max_content_length=settings.MAX_POST_LENGTH,
    )
    _tool_service = ToolService(db)


def init_all_services(
    db: AsyncIOMotorDatabase,
    firebase_credentials_path: Optional[str] = None,
    firebase_project_id: Optional[str] = None,
    auth_provider: Optional[AuthProvider] = None,
) -> None:
    """
    Initialize every service. Called once at application startup.

    Args:
        db: Main MongoDB database
        firebase_credentials_path: Service account file for Firebase
        firebase_project_id: Firebase project id
        auth_provider: Pre-built provider (skips Firebase setup)
    """
    init_auth_services(
        firebase_credentials_path=firebase_credentials_path,
        firebase_project_id=firebase_project_id,
        auth_provider=auth_provider,
    )
    init_mood_services(db)
    init_community_services(db)


# ─────────────────────────────────────────────────────────────────
# Auth getters
# ─────────────────────────────────────────────────────────────────

def get_auth_provider() -> AuthProvider:
    """Get auth provider instance."""
    if _auth_provider is None:
        raise RuntimeError("Auth services not initialized. Call init_auth_services first.")
    return _auth_provider


_get_current_user = create_auth_dependency(lambda: get_auth_provider())


async def require_auth(user: Dict[str, Any] = Depends(_get_current_user)) -> Dict[str, Any]:
    """Dependency that requires a verified Firebase identity."""
    return user


# ─────────────────────────────────────────────────────────────────
# Mood getters
# ─────────────────────────────────────────────────────────────────

def get_mood_repository() -> MoodRepository:
    """Get mood repository instance."""
    if _mood_repository is None:
        raise RuntimeError("Mood services not initialized. Call init_mood_services first.")
    return _mood_repository


def get_insight_repository() -> InsightRepository:
    """Get insight repository instance."""
    if _insight_repository is None:
        raise RuntimeError("Mood services not initialized. Call init_mood_services first.")
    return _insight_repository


def get_profile_repository() -> ProfileRepository:
    """Get profile repository instance."""
    if _profile_repository is None:
        raise RuntimeError("Mood services not initialized. Call init_mood_services first.")
    return _profile_repository


def get_mood_aggregator() -> MoodAggregator:
    """Get mood aggregator instance."""
    if _mood_aggregator is None:
        raise RuntimeError("Mood services not initialized. Call init_mood_services first.")
    return _mood_aggregator


def get_streak_tracker() -> StreakTracker:
    """Get streak tracker instance."""
    if _streak_tracker is None:
        raise RuntimeError("Mood services not initialized. Call init_mood_services first.")
    return _streak_tracker


# ─────────────────────────────────────────────────────────────────
# Community getters
# ─────────────────────────────────────────────────────────────────

def get_post_service() -> PostService:
    """Get post service instance."""
    if _post_service is None:
        raise RuntimeError("Community services not initialized.")
    return _post_service


def get_tool_service() -> ToolService:
    """Get tool service instance."""
    if _tool_service is None:
        raise RuntimeError("Community services not initialized.")
    return _tool_service
