"""FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from cloud_samples.core.config import settings
from cloud_samples.core.logging import setup_logging
from cloud_samples.routes import health_router, hello_router, objects_router
from cloud_samples.storage.factory import build_storage

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Initialize resources on startup, cleanup on shutdown."""
    setup_logging()

    # Storage helper; building it doesn't touch the network
    if settings.S3_ENDPOINT and settings.S3_ACCESS_KEY and settings.S3_SECRET_KEY:
        app.state.storage = build_storage(settings)
        logger.info("Object storage configured at %s", settings.S3_ENDPOINT)
    else:
        app.state.storage = None

    yield

    app.state.storage = None


app = FastAPI(title=settings.APP_NAME, lifespan=lifespan)

# Register routers
app.include_router(hello_router)
app.include_router(health_router)
app.include_router(objects_router)
