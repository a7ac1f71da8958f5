"""Main application module for the SEO scorer service."""

import logging
from contextlib import asynccontextmanager
from functools import lru_cache
from pathlib import Path
from typing import AsyncGenerator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import HTMLResponse

from seo_scorer.app import telemetry
from seo_scorer.app.api.routes import router
from seo_scorer.app.config import settings
from seo_scorer.app.middleware import RateLimiterMiddleware, SecurityHeadersMiddleware
from seo_scorer.app.prometheus import setup_prometheus
from seo_scorer.app.services.extractor import get_extractor

logging.basicConfig(level=settings.log_level)
logger = logging.getLogger(__name__)

INDEX_PAGE = Path(__file__).parent / "static" / "index.html"


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Manage application lifespan events."""
    await startup_event(app)
    yield
    await shutdown_event(app)


async def startup_event(app: FastAPI) -> None:
    """Perform startup activities."""
    logger.info("Application startup")

    logger.info("Setting up telemetry...")
    telemetry.setup_telemetry(app)

    try:
        logger.info("Initializing topic extractor...")
        app.state.extractor = get_extractor()
    except Exception as e:
        logger.error("Failed to initialize topic extractor: %s", str(e))
        raise

    logger.info("Application startup complete")


async def shutdown_event(app: FastAPI) -> None:
    """Perform shutdown activities."""
    logger.info("Application shutdown")
    telemetry.shutdown_telemetry()


@lru_cache()
def load_index_page() -> str:
    """Read the single-page UI once and cache it."""
    return INDEX_PAGE.read_text(encoding="utf-8")


async def index() -> HTMLResponse:
    """Serve the SEO analyzer page."""
    return HTMLResponse(load_index_page())


def create_app() -> FastAPI:
    """Create and configure the FastAPI application.

    Returns:
        FastAPI: The configured FastAPI application instance.
    """
    api_prefix = f"/api/{settings.API_VERSION}"
    app = FastAPI(
        title=f"SEO Scorer API {settings.API_VERSION}",
        description="Scores text for SEO quality using an external keyword and topic extraction service",
        docs_url=f"{api_prefix}/docs",
        redoc_url=f"{api_prefix}/redoc",
        openapi_url=f"{api_prefix}/openapi.json",
        lifespan=lifespan,
    )

    # Last added runs outermost, so 429 responses also get security headers
    setup_prometheus(app)
    app.add_middleware(RateLimiterMiddleware)
    app.add_middleware(SecurityHeadersMiddleware)
    cors_origins = settings.cors_origins
    app.add_middleware(
        CORSMiddleware,
        allow_origins=cors_origins,
        allow_credentials=len(cors_origins) > 0,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization"],
        max_age=86400,
    )

    app.add_api_route("/", index, include_in_schema=False, response_class=HTMLResponse)
    app.include_router(router, prefix=api_prefix)

    return app


app = create_app()
