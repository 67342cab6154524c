import logging
from functools import lru_cache

from motor.motor_asyncio import AsyncIOMotorClient

from app.core.config import get_settings

log = logging.getLogger(__name__)


@lru_cache
def get_client() -> AsyncIOMotorClient:
    settings = get_settings()
    log.info("Connecting to MongoDB database %s", settings.mongo_db)
    # tz_aware so request timestamps come back as UTC-aware datetimes
    return AsyncIOMotorClient(settings.mongo_uri, tz_aware=True)


def get_db():
    return get_client()[get_settings().mongo_db]
