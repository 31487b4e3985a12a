"""
Application lifecycle events
Handles startup and shutdown tasks
"""

from fastapi import FastAPI
import logging
from contextlib import asynccontextmanager

from .database import init_db, close_db
from .logging import setup_logging
from .config import settings
from app.services.context import ServiceContext

logger = logging.getLogger(__name__)

@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan manager
    Builds the shared service context and tears it down on shutdown
    """
    setup_logging()
    logger.info(f"Starting {settings.APP_NAME}...")

    await init_db()
    logger.info("Database initialized")

    context = ServiceContext.from_settings(settings)
    app.state.context = context
    logger.info(
        f"Service context ready (cache ttl={settings.CACHE_TTL_SECONDS}s, "
        f"product={settings.PRODUCT_SERVICE_URL}, cart={settings.CART_SERVICE_URL})"
    )

    try:
        yield
    finally:
        logger.info(f"Shutting down {settings.APP_NAME}...")
        await context.aclose()
        await close_db()
        logger.info(f"{settings.APP_NAME} shutdown complete")
