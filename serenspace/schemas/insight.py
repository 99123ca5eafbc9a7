"""
Insight vocabulary shared by the aggregator and the API.
"""

from enum import Enum


class InsightType(str, Enum):
    TREND = "trend"
    PATTERN = "pattern"
    SUGGESTION = "suggestion"
    MILESTONE = "milestone"
    ALERT = "alert"


class MoodTrend(str, Enum):
    IMPROVING = "improving"
    STABLE = "stable"
    DECLINING = "declining"
