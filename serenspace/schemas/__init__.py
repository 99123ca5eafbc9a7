"""
Request models and enumerations for the SerenSpace API.
"""

from serenspace.schemas.mood import Emotion, CreateMoodRequest, UpdateMoodRequest
from serenspace.schemas.insight import InsightType, MoodTrend
from serenspace.schemas.post import CreatePostRequest, ReportPostRequest
from serenspace.schemas.tool import ToolCategory, ToolDifficulty

__all__ = [
    "Emotion",
    "CreateMoodRequest",
    "UpdateMoodRequest",
    "InsightType",
    "MoodTrend",
    "CreatePostRequest",
    "ReportPostRequest",
    "ToolCategory",
    "ToolDifficulty",
]
