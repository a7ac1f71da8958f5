"""Test main application functionality."""

from unittest.mock import Mock, patch

import pytest
from fastapi.testclient import TestClient

from seo_scorer.app import telemetry
from seo_scorer.app.main import create_app, lifespan, load_index_page


def test_create_app_basic_functionality() -> None:
    """create_app returns a versioned FastAPI application."""
    app = create_app()

    assert app.title == "SEO Scorer API v1"
    assert app.docs_url == "/api/v1/docs"
    assert app.openapi_url == "/api/v1/openapi.json"

    with TestClient(app) as test_client:
        assert test_client.get("/api/v1/").status_code == 200
        assert test_client.get("/api/v1/openapi.json").status_code == 200


async def test_lifespan_successful_startup_shutdown() -> None:
    """Startup stores the extractor and shutdown stops telemetry."""
    app = create_app()

    with patch("seo_scorer.app.main.get_extractor") as mock_get_extractor:
        mock_extractor = Mock()
        mock_get_extractor.return_value = mock_extractor

        async with lifespan(app):
            assert app.state.extractor is mock_extractor
            telemetry.setup_telemetry.assert_called_once_with(app)

    telemetry.shutdown_telemetry.assert_called_once()


async def test_lifespan_extractor_initialization_failure() -> None:
    """A failing extractor factory aborts startup."""
    app = create_app()

    with patch("seo_scorer.app.main.get_extractor") as mock_get_extractor:
        mock_get_extractor.side_effect = RuntimeError("Extractor initialization failed")

        with pytest.raises(RuntimeError, match="Extractor initialization failed"):
            async with lifespan(app):
                pass


def test_load_index_page_is_cached() -> None:
    """The UI page is read from disk once."""
    load_index_page.cache_clear()
    page = load_index_page()
    assert page.startswith("<!DOCTYPE html>")
    assert load_index_page() is page
