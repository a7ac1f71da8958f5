"""Tests for the analysis service."""

from unittest.mock import AsyncMock, patch

import pytest

from seo_scorer.app.models import ExtractionResult
from seo_scorer.app.services.analyzer import (
    NO_CONTENT_MESSAGE,
    analyze_with_metrics,
    build_response,
)
from seo_scorer.app.services.extractor import TopicExtractor, TopicNotFoundError

from conftest import SAMPLE_EXTRACTION, SAMPLE_TEXT


def test_build_response_ranks_keywords_and_topic() -> None:
    """Keywords are ordered by weight and the heaviest topic is primary."""
    response = build_response(SAMPLE_TEXT, SAMPLE_EXTRACTION)

    assert response.keywords == [
        "python",
        "programming",
        "libraries",
        "language",
        "developers",
        "automation",
    ]
    assert response.topic == "programming"
    assert response.topic_score == 0.82
    assert response.total_keywords == 6
    assert response.text_length == len(SAMPLE_TEXT)
    assert response.word_count == len(SAMPLE_TEXT.split())
    assert response.message is None


def test_build_response_score_and_category() -> None:
    """The score comes from the calculator and is banded.

    6 keywords over 29 words give a density of 20.69, capped at 20, so
    (40 + 65.6) * 0.9 for a 203 character text * 1.1 for the close second
    topic = 104.544, then 85 + 19.544 * 0.3 = 90.86.
    """
    assert len(SAMPLE_TEXT.split()) == 29
    assert 200 <= len(SAMPLE_TEXT) < 500

    response = build_response(SAMPLE_TEXT, SAMPLE_EXTRACTION)

    assert response.score == 91
    assert response.score_category == "high"
    assert response.tips == []


def test_build_response_ties_keep_upstream_order() -> None:
    """Keywords with equal weights keep the order the service returned."""
    extraction = ExtractionResult(
        keywords={"zeta": 0.5, "alpha": 0.5, "omega": 0.9}, topics={}
    )
    response = build_response(SAMPLE_TEXT, extraction)
    assert response.keywords == ["omega", "zeta", "alpha"]


def test_build_response_without_topics() -> None:
    """Texts without topics fall back to the general topic."""
    extraction = ExtractionResult(keywords={"python": 0.4}, topics={})
    response = build_response(SAMPLE_TEXT, extraction)
    assert response.topic == "general"
    assert response.topic_score == 0.0


def test_build_response_rejects_placeholder_text() -> None:
    """Rejected text gets a zero score with an explanation."""
    text = "Lorem ipsum dolor sit amet, consectetur adipiscing elit."
    with patch("seo_scorer.app.services.analyzer.track_rejected_content") as mock_track:
        response = build_response(text, SAMPLE_EXTRACTION)

    mock_track.assert_called_once()
    assert response.score == 0
    assert response.score_category == "very-low"
    assert response.keywords == []
    assert response.total_keywords == 0
    assert response.topic == "No meaningful content"
    assert response.message == NO_CONTENT_MESSAGE
    assert response.text_length == len(text)


async def test_analyze_with_metrics_trims_and_tracks() -> None:
    """Text is trimmed before extraction and the score is recorded."""
    extractor = AsyncMock(spec=TopicExtractor)
    extractor.extract.return_value = SAMPLE_EXTRACTION

    with patch("seo_scorer.app.services.analyzer.track_score") as mock_track:
        response = await analyze_with_metrics(extractor, f"  \n{SAMPLE_TEXT}\t ")

    extractor.extract.assert_awaited_once_with(SAMPLE_TEXT)
    mock_track.assert_called_once_with(response.score, response.score_category)
    assert response.text_length == len(SAMPLE_TEXT)


async def test_analyze_with_metrics_records_extraction_failure() -> None:
    """Extraction failures are counted and re-raised."""
    extractor = AsyncMock(spec=TopicExtractor)
    extractor.extract.side_effect = TopicNotFoundError("Topic not found or irrelevant.")

    with patch(
        "seo_scorer.app.services.analyzer.track_extraction_failure"
    ) as mock_track:
        with pytest.raises(TopicNotFoundError):
            await analyze_with_metrics(extractor, SAMPLE_TEXT)

    mock_track.assert_called_once_with("topic_not_found")
