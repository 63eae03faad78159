# slotswap/main.py
"""
SlotSwap API application.

Mounts the slot, swap and health routers under ``/api`` and installs the
unified error envelope handlers.
"""

from contextlib import asynccontextmanager
import logging
from typing import AsyncGenerator

from fastapi import FastAPI

from .core.config import is_running_tests, settings
from .database import init_db
from .errors import register_error_handlers
from .routes import health, slots, swaps

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.log_level, logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)

logger = logging.getLogger(__name__)

API_PREFIX = "/api"


@asynccontextmanager
async def app_lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Handle application startup/shutdown without deprecated events."""
    logger.info(f"{settings.api_title} starting up...")
    logger.info(f"Environment: {settings.environment}")

    if is_running_tests():
        logger.info("Running under pytest; skipping table creation")
    elif settings.should_create_tables:
        init_db()

    yield

    logger.info(f"{settings.api_title} shutting down...")


def create_app() -> FastAPI:
    application = FastAPI(
        title=settings.api_title,
        version=settings.api_version,
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=app_lifespan,
    )
    register_error_handlers(application)

    application.include_router(health.router, prefix=API_PREFIX)
    application.include_router(slots.router, prefix=API_PREFIX)
    application.include_router(swaps.router, prefix=API_PREFIX)
    return application


app = create_app()

__all__ = ["app", "create_app"]
