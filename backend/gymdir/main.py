"""
Gym Directory API - Main FastAPI application.

Gym listings with search, photos and user reviews.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from gymdir.config import get_settings
from gymdir.database import init_db
from gymdir.dependencies import get_photo_store
from gymdir.error_handlers import register_exception_handlers
from gymdir.logging_config import configure_logging

settings = get_settings()
configure_logging(settings)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.
    Runs on startup and shutdown.
    """
    # Startup
    logger.info("Starting %s in %s mode...", settings.app_name, settings.app_env)
    await init_db()
    logger.info("Database initialized.")
    store = get_photo_store()
    logger.info("Photo storage at %s", store.root)

    yield

    # Shutdown
    logger.info("Shutting down...")


app = FastAPI(
    title=settings.app_name,
    description="Gym directory with search and user reviews",
    version="0.1.0",
    lifespan=lifespan,
    docs_url="/docs" if settings.debug else None,
    redoc_url="/redoc" if settings.debug else None,
)

# CORS middleware - allow the web frontend to connect
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
    max_age=3600,
)

register_exception_handlers(app)


@app.get("/")
async def root():
    """Root endpoint - basic health check."""
    return {
        "app": settings.app_name,
        "version": "0.1.0",
        "status": "running",
    }


@app.get("/health")
async def health_check():
    """Health check endpoint for monitoring."""
    return {"status": "healthy"}


# Routers
from gymdir.routers import gyms, photos, reviews  # noqa: E402

app.include_router(gyms.router, prefix="/api/gyms", tags=["Gyms"])
app.include_router(reviews.router, prefix="/api/gyms/{gym_id}/reviews", tags=["Reviews"])
app.include_router(photos.router, prefix="/api/photos", tags=["Photos"])
