"""FastAPI server for the account service."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from .api import router as api_router
from .config import get_settings
from .logging_config import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan context manager for app startup/shutdown."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_file)
    logger.info("Account service '%s' starting", settings.service_name)

    yield

    logger.info("Account service '%s' stopped", settings.service_name)


app = FastAPI(
    title="User Account Service API",
    description="REST API for customer accounts, addresses and payment cards",
    version="1.0.0",
    lifespan=lifespan,
    docs_url="/api/docs",
    redoc_url="/api/redoc",
)

app.include_router(api_router)
