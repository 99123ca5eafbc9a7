"""
Mood statistics and insight generation.

Turns a user's mood entries into summary statistics and a fixed batch of
three insights. Insights are a full-replace snapshot: each generation
deletes every earlier insight of the user before writing the new batch.
"""

import logging
from collections import Counter
from datetime import datetime, timezone, timedelta
from decimal import Decimal, ROUND_HALF_UP
from typing import Any, Dict, Iterable, List, Optional

from common.utils.exceptions import NotFoundException
from serenspace.repositories.base import MoodRepository, InsightRepository
from serenspace.schemas.insight import InsightType, MoodTrend
from serenspace.schemas.mood import Emotion

logger = logging.getLogger(__name__)

EMOTION_ORDER = [e.value for e in Emotion]


def round_half_up(value: Decimal) -> float:
    """Round to one decimal place, halves away from zero."""
    return float(value.quantize(Decimal("0.1"), rounding=ROUND_HALF_UP))


class MoodAggregator:
    """
    Computes mood statistics and (re)builds a user's insight batch.
    """

    INSIGHT_SOURCE_LIMIT = 50
    INSIGHT_TTL = timedelta(days=7)

    SUGGESTION_TEXT = "Try a 5-minute breathing or grounding exercise"

    def __init__(
        self,
        mood_repository: MoodRepository,
        insight_repository: InsightRepository,
        source_limit: int = INSIGHT_SOURCE_LIMIT,
        insight_ttl: timedelta = INSIGHT_TTL,
    ):
        """
        Initialize MoodAggregator.

        Args:
            mood_repository: Read access to mood entries
            insight_repository: Insight storage
            source_limit: Most recent entries used for generation
            insight_ttl: Advisory lifetime stamped into expiresAt
        """
        self._mood_repository = mood_repository
        self._insight_repository = insight_repository
        self._source_limit = source_limit
        self._insight_ttl = insight_ttl

    # ─────────────────────────────────────────────────────────────
    # Statistics
    # ─────────────────────────────────────────────────────────────

    @classmethod
    def compute_stats(cls, entries: List[Dict[str, Any]]) -> Dict[str, Any]:
        """
        Summarize a list of mood entries.

        Args:
            entries: Mood entry dicts (only score and emotion are read)

        Returns:
            dict with keys:
                - averageScore: float (mean, one decimal, half-up; 0 when empty)
                - totalEntries: int
                - topEmotion: str or None
                - trend: always "stable" (no time-series analysis yet)
        """
        if not entries:
            return {
                "averageScore": 0,
                "totalEntries": 0,
                "topEmotion": None,
                "trend": MoodTrend.STABLE.value,
            }

        return {
            "averageScore": cls.average_score(entries),
            "totalEntries": len(entries),
            "topEmotion": cls.top_emotion(entries),
            "trend": MoodTrend.STABLE.value,
        }

    @staticmethod
    def average_score(entries: List[Dict[str, Any]]) -> float:
        # Exact decimal mean so that e.g. 6.65 rounds to 6.7, not 6.6
        total = sum(Decimal(e["score"]) for e in entries)
        return round_half_up(total / Decimal(len(entries)))

    @staticmethod
    def top_emotion(entries: Iterable[Dict[str, Any]]) -> Optional[str]:
        """
        Most frequent emotion.

        Ties go to the emotion declared first in Emotion; values outside
        the enumeration rank after it, in order of first appearance.
        """
        counts = Counter(e["emotion"] for e in entries)
        if not counts:
            return None

        ranking = EMOTION_ORDER + [e for e in counts if e not in EMOTION_ORDER]
        best = max(counts.values())
        return next(e for e in ranking if counts.get(e) == best)

    async def get_stats(self, user_id: str) -> Dict[str, Any]:
        """Statistics over every stored entry of the user (no time filter)."""
        entries = await self._mood_repository.list_all(user_id)
        return self.compute_stats(entries)

    # ─────────────────────────────────────────────────────────────
    # Insights
    # ─────────────────────────────────────────────────────────────

    def build_insights(
        self,
        user_id: str,
        recent_entries: List[Dict[str, Any]],
        now: Optional[datetime] = None,
    ) -> List[Dict[str, Any]]:
        """
        Build the three insight documents for a non-empty entry list.

        No storage access; generate_insights persists the result.
        """
        now = now or datetime.now(timezone.utc)
        average = self.average_score(recent_entries)
        top = self.top_emotion(recent_entries)

        def _insight(insight_type: InsightType, title: str, description: str, period: str):
            return {
                "userId": user_id,
                "type": insight_type.value,
                "title": title,
                "description": description,
                "data": {
                    "period": period,
                    "averageMood": average,
                    "moodTrend": MoodTrend.STABLE.value,
                    "topEmotions": [top],
                },
                "isRead": False,
                "createdAt": now,
                "expiresAt": now + self._insight_ttl,
            }

        return [
            _insight(
                InsightType.TREND,
                "Mood Summary",
                f"Your average mood score is {average:.1f}",
                "30d",
            ),
            _insight(
                InsightType.PATTERN,
                "Emotion Pattern",
                f"You often feel {top} in recent check-ins",
                "30d",
            ),
            _insight(
                InsightType.SUGGESTION,
                "Try This Today",
                self.SUGGESTION_TEXT,
                "today",
            ),
        ]

    async def generate_insights(
        self,
        user_id: str,
        recent_entries: List[Dict[str, Any]],
    ) -> List[Dict[str, Any]]:
        """
        Replace the user's insights with a freshly computed batch.

        Args:
            user_id: Owner uid
            recent_entries: Most recent entries, newest first

        Returns:
            The saved insights; empty (and nothing deleted) when there are
            no entries

        Side Effects:
            Deletes every earlier insight of the user, then inserts three.
            A failed delete propagates before anything is inserted. A failed
            insert after the delete leaves a partial batch; concurrent
            generations for one user may briefly leave the batch empty.
        """
        if not recent_entries:
            logger.debug(f"No mood entries for user {user_id}; insights left untouched")
            return []

        insights = self.build_insights(user_id, recent_entries)

        deleted = await self._insight_repository.delete_all_for_user(user_id)

        saved = []
        for insight in insights:
            saved.append(await self._insight_repository.insert(insight))

        logger.info(
            f"Generated {len(saved)} insights for user {user_id} "
            f"(replaced {deleted}, from {len(recent_entries)} entries)"
        )
        return saved

    async def generate_for_user(self, user_id: str) -> List[Dict[str, Any]]:
        """Fetch the recent entries of the user and regenerate insights."""
        recent = await self._mood_repository.list_recent(user_id, self._source_limit)
        return await self.generate_insights(user_id, recent)

    async def list_insights(self, user_id: str) -> List[Dict[str, Any]]:
        return await self._insight_repository.list_for_user(user_id)

    async def mark_read(self, insight_id: str, owner_id: str) -> None:
        """
        Mark an insight as read.

        Raises:
            NotFoundException: Insight not found or doesn't belong to owner
        """
        updated = await self._insight_repository.mark_read(insight_id, owner_id)
        if not updated:
            raise NotFoundException(message="Insight not found", code="INSIGHT_NOT_FOUND")
