"""
Check-in streak tracking.

Keeps streakDays, totalCheckIns and lastCheckIn on the user profile up to
date after every check-in.
"""

import logging
from datetime import datetime, timezone, timedelta
from typing import Any, Dict, Optional

from serenspace.repositories.base import ProfileRepository

logger = logging.getLogger(__name__)

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


class StreakTracker:
    """
    Per-user streak state machine driven by check-ins.

    Rules:
        - less than 2 days since the last check-in: streak + 1
          (a second check-in on the same day also counts)
        - 2 days or more, or never checked in: streak restarts at 1
        - totalCheckIns always grows by exactly 1
        - longestStreak is left as stored
    """

    CONTINUATION_WINDOW = timedelta(days=2)
    MAX_RETRIES = 3

    def __init__(self, profile_repository: ProfileRepository, max_retries: int = MAX_RETRIES):
        """
        Initialize StreakTracker.

        Args:
            profile_repository: Profile storage with compare-and-swap support
            max_retries: Attempts before giving up on a contended update
        """
        self._profile_repository = profile_repository
        self._max_retries = max_retries

    @classmethod
    def next_streak(
        cls,
        current_streak: int,
        last_check_in: Optional[datetime],
        now: datetime,
    ) -> int:
        """
        Streak value after a check-in at `now`.

        Args:
            current_streak: streakDays before this check-in
            last_check_in: Previous check-in time (None if never)
            now: Time of this check-in

        Returns:
            New streakDays
        """
        elapsed = _as_utc(now) - _as_utc(last_check_in or _EPOCH)

        if elapsed < cls.CONTINUATION_WINDOW:
            return (current_streak or 0) + 1
        return 1

    async def record_check_in(
        self,
        user_id: str,
        now: Optional[datetime] = None,
    ) -> Optional[Dict[str, Any]]:
        """
        Apply one check-in to the user's profile.

        Args:
            user_id: Profile uid
            now: Check-in time (defaults to current UTC time)

        Returns:
            dict with streakDays and lastCheckIn, or None when the profile
            doesn't exist or every attempt lost a race

        Algorithm:
            1. Read the profile
            2. On the first read, increment totalCheckIns unconditionally
            3. Compute the next streak from lastCheckIn
            4. Write it only if lastCheckIn is unchanged; otherwise retry from 1
        """
        now = now or datetime.now(timezone.utc)

        for attempt in range(1, self._max_retries + 1):
            profile = await self._profile_repository.get(user_id)
            if profile is None:
                logger.debug(f"No profile for user {user_id}; streak not updated")
                return None

            # Counted once per check-in, even if every streak write loses a race
            if attempt == 1:
                await self._profile_repository.increment_check_ins(user_id)

            last_check_in = profile.get("lastCheckIn")
            streak = self.next_streak(profile.get("streakDays", 0), last_check_in, now)

            applied = await self._profile_repository.compare_and_set_check_in(
                user_id,
                expected_last_check_in=last_check_in,
                streak_days=streak,
                now=now,
            )
            if applied:
                logger.info(f"Streak for user {user_id} is now {streak}")
                return {"streakDays": streak, "lastCheckIn": now}

            logger.debug(f"Concurrent check-in for user {user_id}, retry {attempt}")

        logger.warning(
            f"Gave up updating streak for user {user_id} after {self._max_retries} attempts"
        )
        return None


def _as_utc(value: datetime) -> datetime:
    """Treat naive datetimes from the store as UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value
