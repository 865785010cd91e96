"""
MongoDB connection and database client.
"""
import logging
from datetime import timezone

from bson.codec_options import CodecOptions
from motor.motor_asyncio import AsyncIOMotorClient

logger = logging.getLogger(__name__)

POSTS = "posts"
NEW_POSTS = "newposts"
COMMENTS = "comments"
USERS = "users"

# Datetimes come back as UTC-aware values, matching what the repositories write
CODEC_OPTIONS = CodecOptions(tz_aware=True, tzinfo=timezone.utc)


class MongoDB:
    """MongoDB connection manager."""

    def __init__(self, url: str, database_name: str):
        self.url = url
        self.database_name = database_name
        self.client: AsyncIOMotorClient | None = None
        self.database = None

    async def connect(self):
        """Connect to MongoDB and verify the server answers."""
        self.client = AsyncIOMotorClient(
            self.url,
            tz_aware=CODEC_OPTIONS.tz_aware,
            tzinfo=CODEC_OPTIONS.tzinfo,
        )
        try:
            await self.client.admin.command("ping")
        except Exception:
            logger.exception("MongoDB connection error")
            self.client.close()
            self.client = None
            raise
        self.database = self.client[self.database_name]
        logger.info("Connected to MongoDB database %s", self.database_name)

    async def disconnect(self):
        """Disconnect from MongoDB."""
        if self.client:
            self.client.close()
            self.client = None
            self.database = None
            logger.info("Disconnected from MongoDB")

    def get_collection(self, collection_name: str):
        """Get a collection from the database."""
        if self.database is None:
            raise RuntimeError("MongoDB is not connected")
        return self.database[collection_name]
