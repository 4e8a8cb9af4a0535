"""
Character gallery FastAPI application.

Entry point for the API server and the server-rendered pages.
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from backend import db
from backend.config import settings
from backend.routes import auth_routes
from backend.routes import characters as character_routes
from backend.routes import media as media_routes
from backend.routes import pages as pages_routes
from backend.routes import tags as tag_routes

logging.basicConfig(
    level=settings.LOG_LEVEL.upper(),
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Lifespan context manager for FastAPI application.

    Opens the database pool on startup and closes it on shutdown.
    """
    await db.init_pool()
    logger.info("Gallery started (%s)", settings.ENVIRONMENT)

    yield

    await db.close_pool()
    logger.info("Gallery stopped")


app = FastAPI(
    title="Character Gallery",
    docs_url=None,
    redoc_url=None,
    lifespan=lifespan,
)

# Register routes
app.include_router(auth_routes.router)
app.include_router(character_routes.router)
app.include_router(tag_routes.router)
app.include_router(media_routes.router)
app.include_router(pages_routes.router)


@app.get("/health")
async def health():
    """Health check endpoint for uptime monitoring."""
    return {"status": "ok"}
