"""FastAPI application factory.

Wires the central exception handler, the request pipeline and the common
routers onto one app. Services either use ``create_app`` directly or call
the same three registration steps on their own FastAPI instance.
"""

from __future__ import annotations

import logging
import time
from contextlib import asynccontextmanager

from fastapi import FastAPI

from api_commons.config.settings import CommonsSettings
from api_commons.logging_config import configure_logging
from api_commons.middleware.error_handler import register_error_handlers
from api_commons.middleware.pipeline import build_pipeline
from api_commons.routers.health import create_health_router

logger = logging.getLogger(__name__)


def create_app(settings: CommonsSettings | None = None) -> FastAPI:
    """Create and configure the FastAPI application."""
    settings = settings or CommonsSettings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        configure_logging(settings.log_level)
        logger.info("Starting %s", settings.service_name)
        yield
        logger.info("%s shut down", settings.service_name)

    app = FastAPI(title=settings.service_name, lifespan=lifespan)
    app.state.settings = settings

    register_error_handlers(app)
    app.state.pipeline = build_pipeline(app, settings)
    app.include_router(create_health_router(settings, started_at=time.monotonic()))

    return app


app = create_app()
