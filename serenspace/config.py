"""
SerenSpace application settings.

Extends the base settings with SerenSpace-specific configuration.
"""

from common.config import BaseAppSettings


class Settings(BaseAppSettings):
    """SerenSpace-specific settings."""

    # ==========================================================================
    # Mood Settings
    # ==========================================================================
    # Default look-back window for the mood history endpoint
    MOOD_HISTORY_DEFAULT_DAYS: int = 30

    # ==========================================================================
    # Insight Settings
    # ==========================================================================
    # Most recent entries considered when generating insights
    INSIGHT_SOURCE_LIMIT: int = 50

    # Advisory lifetime stamped into expiresAt
    INSIGHT_TTL_DAYS: int = 7

    # ==========================================================================
    # Streak Settings
    # ==========================================================================
    # Compare-and-swap attempts before a streak update is abandoned
    STREAK_MAX_RETRIES: int = 3

    # ==========================================================================
    # Community Settings
    # ==========================================================================
    FEED_LIMIT: int = 50
    MAX_POST_LENGTH: int = 2000


# Global settings instance
settings = Settings()
