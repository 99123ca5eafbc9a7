"""
Mood System

Validates check-ins and turns mood history into statistics and insights.
"""

from serenspace.services.mood.mood_validator import MoodValidator
from serenspace.services.mood.mood_aggregator import MoodAggregator

__all__ = [
    "MoodValidator",
    "MoodAggregator",
]
