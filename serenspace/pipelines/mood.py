"""
Mood system pipeline functions.

Stateless orchestration logic for mood check-ins and statistics.
"""

import logging
from datetime import datetime, timezone, timedelta
from typing import Any, Dict, List, Optional

from common.utils.exceptions import NotFoundException, ValidationException
from serenspace.repositories.base import MoodRepository, ProfileRepository
from serenspace.services.mood.mood_aggregator import MoodAggregator
from serenspace.services.mood.mood_validator import MoodValidator
from serenspace.services.profile.streak_tracker import StreakTracker

logger = logging.getLogger(__name__)


async def create_mood_pipeline(
    mood_repository: MoodRepository,
    profile_repository: ProfileRepository,
    streak_tracker: StreakTracker,
    user_id: str,
    score: Any,
    emotion: Optional[str],
    note: Optional[str] = None,
    tags: Optional[List[str]] = None,
    display_name: Optional[str] = None,
) -> Dict[str, Any]:
    """
    Orchestrates the check-in flow.

    Args:
        mood_repository: For mood persistence
        profile_repository: For creating the profile on first check-in
        streak_tracker: For streak bookkeeping
        user_id: Current user's uid
        score: 1-10 mood score
        emotion: Emotion value
        note: Optional note
        tags: Optional labels
        display_name: Name stored on a newly created profile

    Returns:
        The created mood entry

    Raises:
        ValidationException: Invalid fields (nothing is written)
    """
    is_valid, error, code = MoodValidator.validate_new_entry({
        "score": score,
        "emotion": emotion,
        "note": note,
        "tags": tags,
    })
    if not is_valid:
        raise ValidationException(message=error, code=code)

    mood = await mood_repository.create(
        user_id=user_id,
        score=score,
        emotion=emotion,
        note=note.strip() if note else "",
        tags=MoodValidator.normalize_tags(tags),
    )

    # The entry is the source of truth; the streak is derived, best-effort state
    try:
        await profile_repository.ensure(user_id, display_name=display_name)
        await streak_tracker.record_check_in(user_id)
    except Exception as e:
        logger.warning(f"Streak update failed for user {user_id}: {e}")

    return mood


async def list_moods_pipeline(
    mood_repository: MoodRepository,
    user_id: str,
    since_days: int = 30,
) -> List[Dict[str, Any]]:
    """
    Get mood history within a day window.

    Args:
        mood_repository: For data retrieval
        user_id: Current user's uid
        since_days: Look-back window in days

    Returns:
        Entries newest first
    """
    since = datetime.now(timezone.utc) - timedelta(days=since_days)
    return await mood_repository.list_since(user_id, since)


async def get_stats_pipeline(
    mood_aggregator: MoodAggregator,
    user_id: str,
) -> Dict[str, Any]:
    return await mood_aggregator.get_stats(user_id)


async def get_mood_pipeline(
    mood_repository: MoodRepository,
    user_id: str,
    mood_id: str,
) -> Dict[str, Any]:
    mood = await mood_repository.get_owned(mood_id, user_id)
    if not mood:
        raise NotFoundException(message="Mood entry not found", code="MOOD_NOT_FOUND")
    return mood


async def update_mood_pipeline(
    mood_repository: MoodRepository,
    user_id: str,
    mood_id: str,
    updates: Dict[str, Any],
) -> Dict[str, Any]:
    """
    Update the editable fields of an owned entry.

    Args:
        mood_repository: For data persistence
        user_id: Current user's uid
        mood_id: Entry to edit
        updates: Subset of score/emotion/note/tags

    Returns:
        Updated entry

    Raises:
        ValidationException: Invalid field values
        NotFoundException: Entry missing or owned by someone else
    """
    fields = {
        k: v for k, v in updates.items()
        if k in ("score", "emotion", "note", "tags")
    }

    is_valid, error, code = MoodValidator.validate_update(fields)
    if not is_valid:
        raise ValidationException(message=error, code=code)

    if "note" in fields:
        fields["note"] = (fields["note"] or "").strip()
    if "tags" in fields:
        fields["tags"] = MoodValidator.normalize_tags(fields["tags"])

    if not fields:
        return await get_mood_pipeline(mood_repository, user_id, mood_id)

    mood = await mood_repository.update_owned(mood_id, user_id, fields)
    if not mood:
        raise NotFoundException(message="Mood entry not found", code="MOOD_NOT_FOUND")
    return mood


async def delete_mood_pipeline(
    mood_repository: MoodRepository,
    user_id: str,
    mood_id: str,
) -> None:
    deleted = await mood_repository.delete_owned(mood_id, user_id)
    if not deleted:
        raise NotFoundException(message="Mood entry not found", code="MOOD_NOT_FOUND")
