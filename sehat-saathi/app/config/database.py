"""MongoDB database connection and management."""

from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase
from typing import Optional
from app.config.settings import settings
import logging

logger = logging.getLogger(__name__)


class Database:
    """MongoDB database connection manager."""

    client: Optional[AsyncIOMotorClient] = None
    database: Optional[AsyncIOMotorDatabase] = None

    @classmethod
    async def connect_db(cls):
        """Connect to MongoDB and make sure the query indexes exist."""
        try:
            cls.client = AsyncIOMotorClient(settings.mongodb_uri)
            cls.database = cls.client[settings.mongodb_database]

            # Test connection
            await cls.client.admin.command("ping")
            logger.info(f"Connected to MongoDB: {settings.mongodb_database}")
        except Exception as e:
            logger.error(f"Failed to connect to MongoDB: {e}")
            raise

        await cls.ensure_indexes()

    @classmethod
    async def ensure_indexes(cls):
        db = cls.get_database()
        await db[settings.mongodb_collection_users].create_index(
            "username", unique=True
        )
        await db[settings.mongodb_collection_doctor_questions].create_index("id")
        await db[settings.mongodb_collection_doctor_questions].create_index(
            [("responded_at", -1)]
        )
        await db[settings.mongodb_collection_emergencies].create_index(
            "emergency_id", unique=True
        )
        await db[settings.mongodb_collection_hospital_responses].create_index(
            [("emergency_id", 1), ("created_at", -1)]
        )
        logger.info("MongoDB indexes ensured")

    @classmethod
    async def close_db(cls):
        """Close MongoDB connection."""
        if cls.client:
            cls.client.close()
            logger.info("Closed MongoDB connection")

    @classmethod
    def get_database(cls) -> AsyncIOMotorDatabase:
        """Get database instance."""
        if cls.database is None:
            raise RuntimeError("Database not initialized. Call connect_db() first.")
        return cls.database

    @classmethod
    def get_collection(cls, collection_name: str):
        """Get a collection from the database."""
        db = cls.get_database()
        return db[collection_name]


# Convenience functions
async def get_users_collection():
    """Get users collection."""
    return Database.get_collection(settings.mongodb_collection_users)


async def get_doctor_questions_collection():
    """Get doctor_questions collection."""
    return Database.get_collection(settings.mongodb_collection_doctor_questions)


async def get_emergencies_collection():
    """Get emergencies collection."""
    return Database.get_collection(settings.mongodb_collection_emergencies)


async def get_hospital_responses_collection():
    """Get hospital_responses collection."""
    return Database.get_collection(settings.mongodb_collection_hospital_responses)
