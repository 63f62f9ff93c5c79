"""
FastAPI application factory and configuration.

This module creates the FastAPI application instance,
configures routers and lifespan events.
"""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI

from src.adapters.gemini import BackendConfig, GeminiBackend
from src.api.v1 import router as v1_router
from src.config.settings import get_settings
from src.domain.dispatcher import PromptDispatcher
from src.flows import build_registry
from src.flows.actions import ActionService

logger = logging.getLogger(__name__)

# OpenAPI tags for documentation grouping
tags_metadata = [
    {
        "name": "v1",
        "description": "NariCare AI actions v1 - Run health and wellness prompts against Gemini",
    },
]


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    FastAPI lifespan context manager.

    Manages application startup and shutdown:
    - Builds the Gemini backend from settings
    - Wires the dispatcher and action service into app state
    """
    settings = get_settings()
    logging.getLogger("src").setLevel(settings.log_level.upper())

    logger.info("Starting application...")
    if not settings.gemini_api_key:
        logger.warning("GEMINI_API_KEY is not set; relying on the SDK environment lookup")

    backend = GeminiBackend(
        BackendConfig(
            api_key=settings.gemini_api_key,
            model=settings.gemini_model,
            timeout_seconds=settings.backend_timeout_seconds,
            temperature=settings.backend_temperature,
        )
    )
    registry = build_registry()
    dispatcher = PromptDispatcher(backend=backend, registry=registry)

    # Store services in app state for dependency injection
    app.state.dispatcher = dispatcher
    app.state.action_service = ActionService(dispatcher=dispatcher)

    logger.info(
        "Application startup complete (model=%s, use_cases=%d)",
        settings.gemini_model,
        len(registry),
    )

    yield

    logger.info("Shutting down application...")


app = FastAPI(
    title="naricare",
    description="Prompt dispatch service for the NariCare women's health assistant",
    version="0.1.0",
    openapi_tags=tags_metadata,
    lifespan=lifespan,
)

# Include v1 API routes
app.include_router(v1_router, prefix="/v1")


@app.get("/health")
async def health_check() -> dict[str, str]:
    """Liveness check; does not call the generative backend."""
    return {"status": "healthy"}


def run() -> None:
    """Serve the application with uvicorn on the configured host and port."""
    settings = get_settings()
    uvicorn.run(
        "src.api.main:app",
        host=settings.api_host,
        port=settings.api_port,
        log_level=settings.log_level.lower(),
    )
