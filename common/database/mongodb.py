"""
MongoDB client lifecycle (Motor).

Repositories and services receive the AsyncIOMotorDatabase from `db` and
address collections by name; this module only opens, checks and closes
the connection.

Example:
    main_db = MongoDB()
    await main_db.connect("mongodb://localhost:27017", "serenspace")
    moods = main_db.db["moods"]
"""

import logging
from typing import Optional

from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase

logger = logging.getLogger(__name__)


class MongoDB:
    """Owns one Motor client bound to a single database."""

    def __init__(self):
        self._client: Optional[AsyncIOMotorClient] = None
        self._database_name: Optional[str] = None

    async def connect(self, uri: str, database_name: str) -> None:
        """
        Connect and fail fast if the server does not answer a ping.

        Args:
            uri: MongoDB connection string
            database_name: Database holding the SerenSpace collections
        """
        host = uri.split("@")[-1]
        logger.info(f"Connecting to MongoDB at {host} (database: {database_name})")

        # tz_aware so stored timestamps come back as UTC datetimes
        client = AsyncIOMotorClient(uri, tz_aware=True)
        try:
            await client.admin.command("ping")
        except Exception as e:
            logger.error(f"Failed to connect to MongoDB: {e}")
            client.close()
            raise

        self._client = client
        self._database_name = database_name
        logger.info("Connected to MongoDB")

    async def disconnect(self) -> None:
        if self._client:
            self._client.close()
            self._client = None
            logger.info("MongoDB connection closed")

    @property
    def is_connected(self) -> bool:
        return self._client is not None

    @property
    def db(self) -> AsyncIOMotorDatabase:
        """The Motor database handle."""
        if self._client is None:
            raise RuntimeError("Database not connected. Call connect() first.")
        return self._client[self._database_name]
