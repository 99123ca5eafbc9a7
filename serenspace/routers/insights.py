"""
FastAPI router for insight endpoints.
"""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends

from common.utils import success_response, list_response
from serenspace.dependencies import require_auth, get_mood_aggregator
from serenspace.services.mood.mood_aggregator import MoodAggregator
from serenspace.pipelines import insights as pipelines

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/insights", tags=["insights"])


@router.post("/generate")
async def generate_insights(
    user: Annotated[dict, Depends(require_auth)],
    mood_aggregator: Annotated[MoodAggregator, Depends(get_mood_aggregator)],
):
    """
    Regenerate insights from recent check-ins.

    Replaces all previous insights; returns an empty list when the caller
    has no check-ins yet.
    """
    insights = await pipelines.generate_insights_pipeline(
        mood_aggregator=mood_aggregator,
        user_id=user["uid"],
    )
    return list_response(insights)


@router.get("")
async def list_insights(
    user: Annotated[dict, Depends(require_auth)],
    mood_aggregator: Annotated[MoodAggregator, Depends(get_mood_aggregator)],
):
    """Get the caller's current insights, newest first."""
    insights = await pipelines.list_insights_pipeline(mood_aggregator, user["uid"])
    return list_response(insights)


@router.put("/{insight_id}/read")
async def mark_insight_read(
    insight_id: str,
    user: Annotated[dict, Depends(require_auth)],
    mood_aggregator: Annotated[MoodAggregator, Depends(get_mood_aggregator)],
):
    """Mark one of the caller's insights as read."""
    result = await pipelines.mark_insight_read_pipeline(
        mood_aggregator=mood_aggregator,
        user_id=user["uid"],
        insight_id=insight_id,
    )
    return success_response(result)
