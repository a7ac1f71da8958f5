"""Test configuration and fixtures."""

from typing import AsyncGenerator
from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from seo_scorer.app.main import create_app
from seo_scorer.app.models import ExtractionResult
from seo_scorer.app.services.extractor import TopicExtractor

SAMPLE_TEXT = (
    "Python is a versatile programming language used for web development, "
    "data analysis, machine learning and automation. Developers value its "
    "readable syntax and the large ecosystem of open source libraries."
)

SAMPLE_EXTRACTION = ExtractionResult(
    keywords={
        "python": 0.42,
        "programming": 0.31,
        "language": 0.18,
        "developers": 0.12,
        "libraries": 0.25,
        "automation": 0.09,
    },
    topics={
        "programming": 0.82,
        "software": 0.61,
        "computer science": 0.45,
    },
)


@pytest.fixture(autouse=True)
def disable_telemetry(monkeypatch: pytest.MonkeyPatch) -> None:
    """Disable OpenTelemetry for all tests.

    Args:
        monkeypatch: pytest's monkeypatch fixture for modifying values.
    """
    from seo_scorer.app import telemetry
    from seo_scorer.app.config import settings

    monkeypatch.setattr(telemetry, "setup_telemetry", MagicMock())
    monkeypatch.setattr(telemetry, "shutdown_telemetry", MagicMock())
    monkeypatch.setattr(settings, "OTEL_ENABLED", False)

    telemetry._tracer_provider = None
    telemetry._span_processors.clear()
    telemetry._is_setup_complete = False


@pytest.fixture
def mock_extractor() -> AsyncMock:
    """Provide a topic extractor that returns SAMPLE_EXTRACTION."""
    extractor = AsyncMock(spec=TopicExtractor)
    extractor.extract.return_value = SAMPLE_EXTRACTION
    return extractor


@pytest.fixture
async def app_with_lifespan() -> AsyncGenerator[FastAPI, None]:
    """Provide a FastAPI app instance with lifespan events executed.

    Yields:
        FastAPI: The application instance.
    """
    app = create_app()

    async with app.router.lifespan_context(app):
        yield app


@pytest.fixture
def client(app_with_lifespan: FastAPI, mock_extractor: AsyncMock) -> TestClient:
    """Create a test client whose extractor never leaves the process.

    Args:
        app_with_lifespan: The FastAPI app instance with lifespan events.
        mock_extractor: The mocked topic extractor.

    Returns:
        TestClient: A configured test client for making requests.
    """
    app_with_lifespan.state.extractor = mock_extractor
    return TestClient(app_with_lifespan)
