import os
import uuid

# Settings are read at import time
os.environ.setdefault("MONGO_URI", "mongodb://localhost:27017/marketing_admin_test")
os.environ.setdefault("RECAPTCHA_SECRET_KEY", "test-recaptcha-secret")
os.environ.setdefault("PIPEDRIVE_API_TOKEN", "test-pipedrive-token")

import httpx
import pytest
import pytest_asyncio
from beanie import init_beanie
from pymongo import AsyncMongoClient

from app.db import DOCUMENT_MODELS
from app.dependencies import ensure_db
from app.main import app
from app.models.banner import DEFAULT_COLLECTION_BG, DEFAULT_TEMPLATE
from app.models.enums import BannerSection
from app.models.splash_screen import SPLASH_SCREEN_KEY
from app.services import banner_service, splash_screen_service

from tests.memory_documents import memory_document

# Storage tests run against MONGO_TEST_URI, or a throwaway container when
# the `mongo` extra (testcontainers) and a Docker daemon are available
MONGO_TEST_URI = os.environ.get("MONGO_TEST_URI")
# Set in CI so a missing server fails the run instead of skipping
REQUIRE_MONGO_TESTS = os.environ.get("REQUIRE_MONGO_TESTS") == "1"

BANNER_DEFAULTS = {
    "link": "",
    "section": BannerSection.TOP.value,
    "order": 0,
    "template": DEFAULT_TEMPLATE,
    "collection_title": "",
    "collection_image": "",
    "collection_bg": DEFAULT_COLLECTION_BG,
}
SPLASH_DEFAULTS = {"key": SPLASH_SCREEN_KEY}


async def _db_ready():
    return None


def _mongo_unavailable(reason):
    if REQUIRE_MONGO_TESTS:
        pytest.fail(f"MongoDB required but unavailable: {reason}")
    pytest.skip(reason)


@pytest.fixture(scope="session")
def mongo_uri():
    if MONGO_TEST_URI:
        yield MONGO_TEST_URI
        return

    try:
        from testcontainers.mongodb import MongoDbContainer
    except ImportError:
        _mongo_unavailable("MONGO_TEST_URI not set and testcontainers not installed")

    container = MongoDbContainer("mongo:7.0")
    try:
        container.start()
    except Exception as e:
        _mongo_unavailable(f"could not start a MongoDB container: {e}")
    try:
        yield container.get_connection_url()
    finally:
        container.stop()


@pytest_asyncio.fixture
async def api():
    async with httpx.AsyncClient(transport=httpx.ASGITransport(app=app), base_url="http://test") as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
def routes(api):
    """HTTP client with database initialisation switched off; services are stubbed per test"""
    app.dependency_overrides[ensure_db] = _db_ready
    return api


@pytest.fixture
def memory_banners(monkeypatch):
    """Banner service backed by an in-memory collection"""
    documents = memory_document("MemoryBanner", BANNER_DEFAULTS)
    monkeypatch.setattr(banner_service, "Banner", documents)
    return documents


@pytest.fixture
def memory_splash_screens(monkeypatch):
    """Splash screen service backed by an in-memory collection with a unique key"""
    documents = memory_document("MemorySplashScreen", SPLASH_DEFAULTS, unique=("key",))
    monkeypatch.setattr(splash_screen_service, "SplashScreen", documents)
    return documents


@pytest_asyncio.fixture
async def mongo_db(mongo_uri):
    """Throwaway database with the document models registered"""
    mongo_client = AsyncMongoClient(mongo_uri, tz_aware=True)
    database = mongo_client[f"marketing_admin_test_{uuid.uuid4().hex[:12]}"]
    await init_beanie(database=database, document_models=DOCUMENT_MODELS)
    yield database
    await mongo_client.drop_database(database.name)
    await mongo_client.close()


@pytest_asyncio.fixture
async def client(mongo_db, api):
    app.dependency_overrides[ensure_db] = _db_ready
    yield api
