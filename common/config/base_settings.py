"""
Base settings loaded from the environment (and `.env`) with pydantic-settings.

Example:
    from common.config import BaseAppSettings

    class Settings(BaseAppSettings):
        FEED_LIMIT: int = 50

    settings = Settings()
    print(settings.MONGODB_URI)
"""

import logging
from typing import List, Optional
from pydantic_settings import BaseSettings, SettingsConfigDict


class BaseAppSettings(BaseSettings):
    """Connection, identity and server settings shared by every deployment."""

    # ==========================================================================
    # MongoDB
    # ==========================================================================
    MONGODB_URI: str = "mongodb://localhost:27017"
    MONGODB_DATABASE: str = "serenspace"

    # ==========================================================================
    # Firebase (ID token verification)
    # ==========================================================================
    FIREBASE_CREDENTIALS_PATH: Optional[str] = None
    FIREBASE_PROJECT_ID: Optional[str] = None

    # ==========================================================================
    # Server
    # ==========================================================================
    HOST: str = "0.0.0.0"
    PORT: int = 3001
    ENVIRONMENT: str = "development"  # development, staging, production
    LOG_LEVEL: str = "INFO"

    # Comma-separated origins, or "*"
    CORS_ORIGINS: str = "http://localhost:5173"
    CORS_ALLOW_CREDENTIALS: bool = True

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=True,
    )

    def get_cors_origins(self) -> List[str]:
        if self.CORS_ORIGINS.strip() == "*":
            return ["*"]
        return [o.strip() for o in self.CORS_ORIGINS.split(",") if o.strip()]

    def get_log_level(self) -> int:
        """Resolve LOG_LEVEL to a logging level, defaulting to INFO."""
        return getattr(logging, self.LOG_LEVEL.upper(), logging.INFO)

    def is_production(self) -> bool:
        return self.ENVIRONMENT.lower() == "production"

    def is_development(self) -> bool:
        return self.ENVIRONMENT.lower() == "development"
