"""
FastAPI router for mood check-in endpoints.

Provides endpoints for check-ins, history and statistics.
"""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Query

from common.utils import success_response, list_response
from serenspace.config import settings
from serenspace.dependencies import (
    require_auth,
    get_mood_repository,
    get_profile_repository,
    get_streak_tracker,
    get_mood_aggregator,
)
from serenspace.repositories.base import MoodRepository, ProfileRepository
from serenspace.services.mood.mood_aggregator import MoodAggregator
from serenspace.services.profile.streak_tracker import StreakTracker
from serenspace.schemas.mood import CreateMoodRequest, UpdateMoodRequest
from serenspace.pipelines import mood as pipelines

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/moods", tags=["moods"])


@router.post("", status_code=201)
async def create_mood(
    body: CreateMoodRequest,
    user: Annotated[dict, Depends(require_auth)],
    mood_repository: Annotated[MoodRepository, Depends(get_mood_repository)],
    profile_repository: Annotated[ProfileRepository, Depends(get_profile_repository)],
    streak_tracker: Annotated[StreakTracker, Depends(get_streak_tracker)],
):
    """
    Record a mood check-in.

    Also updates the caller's streak; a streak failure never fails the check-in.
    """
    mood = await pipelines.create_mood_pipeline(
        mood_repository=mood_repository,
        profile_repository=profile_repository,
        streak_tracker=streak_tracker,
        user_id=user["uid"],
        score=body.score,
        emotion=body.emotion,
        note=body.note,
        tags=body.tags,
        display_name=user.get("name"),
    )

    return success_response(mood, message="Mood entry created successfully")


@router.get("")
async def list_moods(
    user: Annotated[dict, Depends(require_auth)],
    mood_repository: Annotated[MoodRepository, Depends(get_mood_repository)],
    days: int = Query(settings.MOOD_HISTORY_DEFAULT_DAYS, ge=1, le=3650),
):
    """Get mood history for the last N days, newest first."""
    moods = await pipelines.list_moods_pipeline(
        mood_repository=mood_repository,
        user_id=user["uid"],
        since_days=days,
    )
    return list_response(moods)


@router.get("/stats")
async def get_stats(
    user: Annotated[dict, Depends(require_auth)],
    mood_aggregator: Annotated[MoodAggregator, Depends(get_mood_aggregator)],
):
    """Get average score, top emotion and trend across all check-ins."""
    stats = await pipelines.get_stats_pipeline(
        mood_aggregator=mood_aggregator,
        user_id=user["uid"],
    )
    return success_response(stats)


@router.get("/{mood_id}")
async def get_mood(
    mood_id: str,
    user: Annotated[dict, Depends(require_auth)],
    mood_repository: Annotated[MoodRepository, Depends(get_mood_repository)],
):
    """Get one of the caller's mood entries."""
    mood = await pipelines.get_mood_pipeline(mood_repository, user["uid"], mood_id)
    return success_response(mood)


@router.put("/{mood_id}")
async def update_mood(
    mood_id: str,
    body: UpdateMoodRequest,
    user: Annotated[dict, Depends(require_auth)],
    mood_repository: Annotated[MoodRepository, Depends(get_mood_repository)],
):
    """
    Update one of the caller's mood entries.

    Only provided fields are changed.
    """
    mood = await pipelines.update_mood_pipeline(
        mood_repository=mood_repository,
        user_id=user["uid"],
        mood_id=mood_id,
        updates=body.model_dump(exclude_unset=True),
    )
    return success_response(mood)


@router.delete("/{mood_id}")
async def delete_mood(
    mood_id: str,
    user: Annotated[dict, Depends(require_auth)],
    mood_repository: Annotated[MoodRepository, Depends(get_mood_repository)],
):
    """Delete one of the caller's mood entries."""
    await pipelines.delete_mood_pipeline(mood_repository, user["uid"], mood_id)
    return success_response(message="Mood entry deleted")
