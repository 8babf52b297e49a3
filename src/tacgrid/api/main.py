"""
Main FastAPI application instance.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from tacgrid import __version__
from tacgrid.api.coordinates import router as coordinates_router
from tacgrid.api.error_handlers import register_error_handlers
from tacgrid.api.grid import router as grid_router
from tacgrid.api.middleware import RequestCorrelationMiddleware
from tacgrid.core.config import settings
from tacgrid.core.logging_config import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """
    Lifespan context manager for FastAPI application.

    Configures logging on startup; JSON logs and a rotating log file are
    used in production.
    """
    log_file = None
    if settings.log_dir is not None:
        log_file = settings.log_dir / "tacgrid.log"

    setup_logging(
        log_level="DEBUG" if settings.environment == "development" else "INFO",
        log_file=log_file,
        json_logs=(settings.environment == "production"),
        enable_console=True,
    )
    logger.info(f"Starting TacGrid API v{__version__} in {settings.environment} mode")

    yield

    logger.info("Shutting down TacGrid API")


app = FastAPI(
    title="TacGrid API",
    description="Coordinate conversion and killbox/keypad grid reference service",
    version=__version__,
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_middleware(RequestCorrelationMiddleware)

register_error_handlers(app)

app.include_router(coordinates_router, prefix=settings.api_v1_prefix)
app.include_router(grid_router, prefix=settings.api_v1_prefix)


@app.get("/")
async def root() -> dict[str, str]:
    """
    Root endpoint returning API information.

    Returns:
        dict[str, str]: API information including name and version.
    """
    return {
        "name": "TacGrid API",
        "version": __version__,
        "description": "Coordinate conversion and tactical grid references",
    }
