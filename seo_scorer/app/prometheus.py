"""Prometheus metrics integration for FastAPI."""

import logging
from typing import Callable

from fastapi import FastAPI
from prometheus_client import (
    CONTENT_TYPE_LATEST,
    REGISTRY,
    Counter,
    Gauge,
    Histogram,
    generate_latest,
)
from starlette.responses import Response

from seo_scorer.app.config import settings

logger = logging.getLogger(__name__)

REQUEST_COUNT = Counter(
    "http_requests_total",
    "Total count of HTTP requests",
    ["method", "endpoint", "status_code"]
)
REQUEST_LATENCY = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency in seconds",
    ["method", "endpoint"]
)
ERROR_COUNT = Counter(
    "http_errors_total",
    "Total count of HTTP errors",
    ["method", "endpoint", "status_code"]
)
ACTIVE_REQUESTS = Gauge(
    "http_active_requests",
    "Number of currently active HTTP requests",
    ["method", "endpoint"]
)
SEO_SCORES = Histogram(
    "seo_scores",
    "Distribution of computed SEO scores",
    buckets=(0, 25, 50, 75, 90, 100),
)
SCORE_CATEGORY_COUNT = Counter(
    "seo_score_category_total",
    "Total count of scored texts per category",
    ["category"]
)
REJECTED_CONTENT_COUNT = Counter(
    "seo_rejected_content_total",
    "Total count of texts rejected as placeholder or low-value content"
)
EXTRACTION_FAILURES = Counter(
    "seo_extraction_failures_total",
    "Total count of failed keyword extraction calls",
    ["reason"]
)


class PrometheusMiddleware:
    """ASGI middleware collecting Prometheus metrics on monitored routes."""

    def __init__(self, app: FastAPI):
        self.app = app
        self.monitored_paths = settings.monitored_paths
        logger.info("Prometheus middleware initialized")

    async def __call__(self, scope, receive, send):
        if scope["type"] != "http":
            return await self.app(scope, receive, send)

        path = scope["path"]
        method = scope["method"]

        if path not in self.monitored_paths:
            return await self.app(scope, receive, send)

        ACTIVE_REQUESTS.labels(method=method, endpoint=path).inc()

        async def send_wrapper(message):
            if message["type"] == "http.response.start":
                status_code = message["status"]
                REQUEST_COUNT.labels(method=method, endpoint=path, status_code=status_code).inc()
                if status_code >= 400:
                    ERROR_COUNT.labels(method=method, endpoint=path, status_code=status_code).inc()

            await send(message)

            if message["type"] == "http.response.body" and not message.get("more_body", False):
                ACTIVE_REQUESTS.labels(method=method, endpoint=path).dec()

        try:
            with REQUEST_LATENCY.labels(method=method, endpoint=path).time():
                await self.app(scope, receive, send_wrapper)
        except Exception as e:
            ACTIVE_REQUESTS.labels(method=method, endpoint=path).dec()
            ERROR_COUNT.labels(method=method, endpoint=path, status_code=500).inc()
            logger.exception("Error in request: %s", str(e))
            raise


def track_score(score: int, category: str) -> None:
    """Record a computed score and its category.

    Args:
        score: The SEO score.
        category: The score category label.
    """
    SEO_SCORES.observe(score)
    SCORE_CATEGORY_COUNT.labels(category=category).inc()


def track_rejected_content() -> None:
    """Increment counter for texts the content filter refused to score."""
    REJECTED_CONTENT_COUNT.inc()


def track_extraction_failure(reason: str) -> None:
    """Increment counter for a failed extraction call.

    Args:
        reason: Short label for the failure class.
    """
    EXTRACTION_FAILURES.labels(reason=reason).inc()


def metrics_endpoint() -> Callable:
    """Create metrics endpoint handler.

    Returns:
        Callable: Starlette endpoint handler function
    """
    async def metrics(request):
        return Response(
            content=generate_latest(REGISTRY),
            media_type=CONTENT_TYPE_LATEST
        )
    return metrics


def setup_prometheus(app: FastAPI) -> None:
    """Set up Prometheus metrics for FastAPI app.

    Args:
        app: FastAPI application instance
    """
    app.add_middleware(PrometheusMiddleware)
    app.add_route(
        f"/api/{settings.API_VERSION}/metrics",
        metrics_endpoint()
    )
    logger.info(
        "Prometheus metrics setup complete. Monitoring paths: %s",
        ", ".join(settings.monitored_paths),
    )
