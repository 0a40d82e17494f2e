from motor.motor_asyncio import AsyncIOMotorClient
from dotenv import load_dotenv
import os
from typing import AsyncGenerator
import logging
import asyncio
from pymongo.errors import ConnectionFailure, PyMongoError, ServerSelectionTimeoutError
from crud.exceptions import StoreUnavailable

logger = logging.getLogger('database')

# Load environment variables
load_dotenv()

class Database:
    client = None
    db = None
    MAX_RETRIES = 3
    RETRY_DELAY = 1  # seconds
    COLLECTIONS = ['services', 'bookings']

    @classmethod
    async def connect_db(cls):
        """Create database connection with retries."""
        retries = 0
        last_error = None

        while retries < cls.MAX_RETRIES:
            try:
                mongodb_uri = os.getenv('MONGODB_URI') or os.getenv('MONGODB_URL')
                database_name = os.getenv('DATABASE_NAME', 'servicesDB')

                if not mongodb_uri:
                    raise ValueError("MONGODB_URI environment variable is not set")

                logger.info(f"Attempting to connect to MongoDB (Attempt {retries + 1}/{cls.MAX_RETRIES})")

                cls.client = AsyncIOMotorClient(
                    mongodb_uri,
                    serverSelectionTimeoutMS=5000,
                    connectTimeoutMS=10000,
                    socketTimeoutMS=10000,
                    maxPoolSize=50,
                    retryWrites=True,
                    retryReads=True
                )
                cls.db = cls.client[database_name]

                # Test the connection
                await cls.db.command('ping')

                logger.info(f"Successfully connected to MongoDB database: {database_name}")

                collections = await cls.db.list_collection_names()
                for collection in cls.COLLECTIONS:
                    if collection not in collections:
                        await cls.db.create_collection(collection)
                        logger.info(f"Created collection: {collection}")

                return

            except (ConnectionFailure, ServerSelectionTimeoutError) as e:
                last_error = e
                retries += 1
                if retries < cls.MAX_RETRIES:
                    logger.warning(f"Failed to connect to MongoDB (Attempt {retries}/{cls.MAX_RETRIES}). Retrying in {cls.RETRY_DELAY} seconds...")
                    await asyncio.sleep(cls.RETRY_DELAY)
                continue
            except Exception as e:
                logger.error(f"Unexpected error connecting to MongoDB: {str(e)}")
                raise

        logger.error(f"Failed to connect to MongoDB after {cls.MAX_RETRIES} attempts")
        raise last_error

    @classmethod
    async def close_db(cls):
        """Close database connection."""
        if cls.client is not None:
            cls.client.close()
            cls.client = None
            cls.db = None
            logger.info("MongoDB connection closed.")

    def __init__(self):
        if self.db is None:
            raise StoreUnavailable("Database not initialized. Call connect_db() first.")

        self.services = self.db.services
        self.bookings = self.db.bookings

async def get_db() -> AsyncGenerator[Database, None]:
    """FastAPI dependency for getting database instance."""
    if Database.db is None:
        try:
            await Database.connect_db()
        except (PyMongoError, ValueError) as e:
            raise StoreUnavailable("Database connection failed", str(e)) from e

    yield Database()
