"""
Pydantic models for mood check-in requests.

Score and emotion are left unconstrained here so that MoodValidator can
answer with its own error codes instead of a generic schema error.
"""

from enum import Enum
from typing import Any, List, Optional

from pydantic import BaseModel


class Emotion(str, Enum):
    """Emotions a check-in can record. Declaration order breaks ties in stats."""
    JOYFUL = "joyful"
    HAPPY = "happy"
    CALM = "calm"
    NEUTRAL = "neutral"
    ANXIOUS = "anxious"
    SAD = "sad"
    ANGRY = "angry"
    STRESSED = "stressed"


class CreateMoodRequest(BaseModel):
    """Request body for a new check-in."""
    score: Optional[Any] = None
    emotion: Optional[str] = None
    note: Optional[str] = None
    tags: Optional[List[str]] = None


class UpdateMoodRequest(BaseModel):
    """Partial update of an existing entry; only provided fields change."""
    score: Optional[Any] = None
    emotion: Optional[str] = None
    note: Optional[str] = None
    tags: Optional[List[str]] = None
