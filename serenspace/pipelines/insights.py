"""
Insight pipeline functions.

Stateless orchestration logic for insight generation and reads.
"""

import logging
from typing import Any, Dict, List

from serenspace.services.mood.mood_aggregator import MoodAggregator

logger = logging.getLogger(__name__)


async def generate_insights_pipeline(
    mood_aggregator: MoodAggregator,
    user_id: str,
) -> List[Dict[str, Any]]:
    """
    Rebuild the user's insights from their recent check-ins.

    Args:
        mood_aggregator: For statistics and insight storage
        user_id: Current user's uid

    Returns:
        The new insight batch (empty if the user has no check-ins)
    """
    return await mood_aggregator.generate_for_user(user_id)


async def list_insights_pipeline(
    mood_aggregator: MoodAggregator,
    user_id: str,
) -> List[Dict[str, Any]]:
    return await mood_aggregator.list_insights(user_id)


async def mark_insight_read_pipeline(
    mood_aggregator: MoodAggregator,
    user_id: str,
    insight_id: str,
) -> Dict[str, Any]:
    """
    Mark one of the user's insights as read.

    Raises:
        NotFoundException: Insight missing or owned by someone else
    """
    await mood_aggregator.mark_read(insight_id, owner_id=user_id)
    return {"id": insight_id, "isRead": True}
