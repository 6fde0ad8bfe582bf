"""Main FastAPI application for the chat service."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from athey import __version__
from athey.api import api_router, chat_router, health_router
from athey.api.dependencies import get_context_service
from athey.core.config import get_settings
from athey.observability import (
    CorrelationIDMiddleware,
    RequestLoggingMiddleware,
    configure_logging,
    get_logger,
)
from athey.observability.constants import LogEvents

_settings = get_settings()

configure_logging(
    log_level=_settings.log_level,
    log_format=_settings.log_format if not _settings.debug else "console",
    development_mode=_settings.debug,
)
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncIterator[None]:
    """Application lifespan manager."""
    settings = get_settings()
    logger.info(
        LogEvents.SERVICE_STARTED,
        service=settings.service_name,
        model=settings.model_name,
        providers=[key.value for key in settings.context_providers],
        debug=settings.debug,
    )

    missing = settings.missing_credentials()
    if missing:
        logger.warning(LogEvents.SERVICE_CREDENTIALS_MISSING, credentials=missing)

    # Build clients up front so credential problems are logged once, at startup
    get_context_service()

    yield

    logger.info(LogEvents.SERVICE_STOPPED, service=settings.service_name)


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    settings = get_settings()

    app = FastAPI(
        title="Athey Chat",
        description="""
Space and STEM chat backend.

Answers are generated by a language model whose instructions carry a live
snapshot of space data.

## Features

- **Live context**: ISS position, SpaceX launches, ISRO catalogs and NASA APOD, fetched in parallel
- **Best effort**: a slow or failing provider only drops its own section
- **Streaming**: answers stream as Server-Sent Events
- **Sources**: every answer ends with a machine-readable sources block

## Workflow

1. Client sends the conversation history
2. Live data is fetched concurrently under a per-provider deadline
3. The persona policy and the data block form the system instruction
4. The model streams its answer back to the client
        """,
        version=__version__,
        lifespan=lifespan,
        docs_url="/docs" if settings.debug else None,
        redoc_url="/redoc" if settings.debug else None,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Middleware executes in reverse order of addition, so add RequestLogging first
    app.add_middleware(
        RequestLoggingMiddleware,
        exclude_paths={"/health", "/ready", "/docs", "/openapi.json", "/redoc"},
        log_request_headers=settings.log_request_headers,
        log_request_body=settings.log_request_body,
    )
    app.add_middleware(CorrelationIDMiddleware)

    app.include_router(health_router)  # /health, /ready
    app.include_router(api_router)  # /api/v1/chat, /api/v1/chat/stream
    app.include_router(chat_router)  # /api/chat

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "athey.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
    )
