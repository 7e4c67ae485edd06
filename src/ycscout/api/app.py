"""FastAPI app for YC Scout: web page and JSON API."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from ycscout import __version__
from ycscout.api.routes import router
from ycscout.api.web import web_router
from ycscout.logging_setup import configure_logging
from ycscout.monitoring.event_bus import EventBus, LoggingSink, jsonl_file_sink
from ycscout.settings import Settings, get_settings

logger = logging.getLogger(__name__)


def create_app(settings: Settings | None = None) -> FastAPI:
    """Build and return the FastAPI application.

    When ``api.validate_credentials`` is set, startup fails with
    ``ConfigurationError`` if the model or browser-host API key is missing.
    """
    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(application: FastAPI) -> AsyncIterator[None]:
        if settings.api.validate_credentials:
            settings.require_credentials()
        logger.info("YC Scout %s starting (env=%s)", __version__, settings.env)
        with jsonl_file_sink(bus, settings.logging.events_jsonl_path):
            yield
        logger.info("YC Scout shutting down")

    application = FastAPI(
        title="YC Scout",
        description="LLM-driven search over the Y Combinator company directory.",
        version=__version__,
        lifespan=lifespan,
    )

    application.add_middleware(
        CORSMiddleware,
        allow_origins=settings.api.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    bus = EventBus()
    bus.add_sink(LoggingSink())
    application.state.event_bus = bus
    application.state.settings = settings

    application.include_router(router)
    application.include_router(web_router)
    return application


def build_default_app() -> FastAPI:
    """App factory for ``uvicorn --factory``; also configures logging."""
    settings = get_settings()
    configure_logging(settings.logging.level, json_format=settings.logging.json_format)
    return create_app(settings)
