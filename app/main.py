import logging
from contextlib import asynccontextmanager
from datetime import datetime
from typing import AsyncIterator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .config import settings
from .middleware import ErrorHandlingMiddleware, LoggingMiddleware
from .routers.banner import router as banner_router
from .routers.contact import router as contact_router
from .routers.splash_screen import router as splash_screen_router

logger = logging.getLogger(__name__)


# Lifespan context manager for startup and shutdown events
@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    logger.info("[DB] Initializing database connection...")
    try:
        from .db import init_db
        await init_db()
        logger.info("[DB] Database initialized successfully")
    except Exception as e:
        # ensure_db initializes again on the first request
        logger.warning(f"[DB] Database initialization warning: {str(e)}")

    yield  # App runs here

    from .db import close_client
    await close_client()
    logger.info("[DB] Connection closed")


# Initialize FastAPI app with lifespan
app = FastAPI(
    title="Marketing Admin API",
    description="Banners, splash screen and contact-form relay for the mobile app",
    version="1.0.0",
    lifespan=lifespan,
)

app.add_middleware(ErrorHandlingMiddleware)
app.add_middleware(LoggingMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(banner_router)
app.include_router(splash_screen_router)
app.include_router(contact_router)


# Health check endpoints
@app.get("/")
async def root():
    return {"message": "Marketing Admin API is running!", "status": "healthy"}


@app.get("/health")
async def health_check():
    return {"status": "healthy", "service": "marketing-admin-api"}


@app.get("/api/db-health")
async def db_health_check():
    """Check MongoDB connection health - useful for diagnosing connection issues"""
    try:
        from .db import get_db_client

        start_time = datetime.now()
        client = await get_db_client()
        client_time = (datetime.now() - start_time).total_seconds() * 1000

        ping_start = datetime.now()
        await client.admin.command("ping")
        ping_time = (datetime.now() - ping_start).total_seconds() * 1000

        return {
            "status": "connected",
            "timing": {
                "client_init_ms": round(client_time, 2),
                "ping_ms": round(ping_time, 2),
                "total_ms": round(client_time + ping_time, 2),
            },
            "server_time": datetime.now().isoformat(),
        }
    except Exception as e:
        logger.error(f"[DB] Health check failed: {str(e)}")
        return {
            "status": "error",
            "error": str(e),
            "error_type": type(e).__name__,
            "server_time": datetime.now().isoformat(),
        }
