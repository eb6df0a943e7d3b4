"""FastAPI application entry point."""
import logging
from contextlib import asynccontextmanager
from collections.abc import AsyncGenerator

import structlog
from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from classifieds.api.routes import admin, health, listings, publishing, taxonomy
from classifieds.application.interfaces.content_store import ContentStoreError
from classifieds.config import settings
from classifieds.infrastructure.external_services.content_api_client import ContentApiClient

logger = structlog.get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    logger.info("classifieds_api_starting")
    app.state.content_api_client = ContentApiClient()
    yield
    await app.state.content_api_client.aclose()
    logger.info("classifieds_api_stopping")


async def content_store_error_handler(request: Request, exc: Exception) -> JSONResponse:
    status_code = exc.status_code if isinstance(exc, ContentStoreError) else None
    logger.error("content_store_unavailable", path=request.url.path, status_code=status_code)
    return JSONResponse(
        status_code=status.HTTP_502_BAD_GATEWAY,
        content={"detail": "Content store request failed.", "upstream_status": status_code},
    )


def create_app() -> FastAPI:
    level = logging.getLevelName(settings.log_level.upper())
    structlog.configure(wrapper_class=structlog.make_filtering_bound_logger(level))

    app = FastAPI(
        title="Classifieds Directory",
        description="Listing query and ordering engine for a city/category classifieds directory.",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(ContentStoreError, content_store_error_handler)

    app.include_router(health.router)
    app.include_router(listings.router)
    app.include_router(publishing.router)
    app.include_router(taxonomy.router)
    app.include_router(admin.router)

    return app


app = create_app()
