# app/db.py
import asyncio
import logging
import time
from typing import Optional
from urllib.parse import urlparse

from beanie import init_beanie
from pymongo import AsyncMongoClient
from pymongo.server_api import ServerApi

from .config import settings
from .models.banner import Banner
from .models.splash_screen import SplashScreen

logger = logging.getLogger(__name__)

DOCUMENT_MODELS = [Banner, SplashScreen]

# Globals (one client + one beanie-init flag per process)
_global_client: Optional[AsyncMongoClient] = None

_beanie_initialized = False
_beanie_lock = asyncio.Lock()
_db_name: Optional[str] = None  # Cache the database name


def _make_client() -> AsyncMongoClient:
    return AsyncMongoClient(
        settings.MONGO_URI,
        serverSelectionTimeoutMS=3000,
        connectTimeoutMS=3000,
        socketTimeoutMS=10000,
        maxPoolSize=10,
        maxIdleTimeMS=30000,
        waitQueueTimeoutMS=3000,
        appname=settings.MONGO_APP_NAME,
        server_api=ServerApi("1"),
        retryWrites=True,
        retryReads=True,
        tz_aware=True,
    )


def get_db_name() -> str:
    global _db_name

    if _db_name is None:
        parsed = urlparse(settings.MONGO_URI)
        _db_name = parsed.path.lstrip("/") or settings.MONGO_DB_NAME
    return _db_name


async def get_db_client() -> AsyncMongoClient:
    """
    Return the process-wide MongoDB client, creating it on first use.
    An existing client is pinged first and replaced if it stopped answering.
    """
    global _global_client

    if _global_client is not None:
        try:
            await _global_client.admin.command("ping")
            return _global_client
        except Exception as e:
            logger.warning(f"[DB] Existing connection unhealthy: {str(e)}")

    try:
        _global_client = _make_client()
        await _global_client.admin.command("ping")
        logger.info("[DB] New connection established")
        return _global_client
    except Exception as e:
        logger.error(f"[DB] Failed to establish connection: {str(e)}")
        raise


async def init_beanie_if_needed() -> None:
    """
    Initialize Beanie once per process. Concurrent first requests wait on
    the lock instead of registering the models twice.
    """
    global _beanie_initialized

    # Fast path - already initialized
    if _beanie_initialized:
        return

    async with _beanie_lock:
        # Double-check after acquiring lock
        if _beanie_initialized:
            return

        start_time = time.time()
        client = await get_db_client()
        db = client.get_database(get_db_name())

        await init_beanie(
            database=db,
            document_models=DOCUMENT_MODELS,
            allow_index_dropping=False,
        )

        _beanie_initialized = True
        elapsed = time.time() - start_time
        logger.info(f"[DB] Beanie models initialized in {elapsed:.2f}s")


async def init_db() -> None:
    await init_beanie_if_needed()


async def close_client() -> None:
    """
    Close and drop the process-global client (useful during cleanup/tests).
    """
    global _global_client, _beanie_initialized, _db_name
    if _global_client is not None:
        await _global_client.close()
    _global_client = None
    _beanie_initialized = False
    _db_name = None
