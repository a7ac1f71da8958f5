"""Analysis service combining extraction, filtering and scoring."""

import logging

from seo_scorer.app.models import AnalyzeResponse, ExtractionResult
from seo_scorer.app.prometheus import (
    track_extraction_failure,
    track_rejected_content,
    track_score,
)
from seo_scorer.app.services.content_filter import is_meaningful_content
from seo_scorer.app.services.extractor import ExtractionError, TopicExtractor
from seo_scorer.app.services.scoring import (
    calculate_score,
    improvement_tips,
    score_category,
)

logger = logging.getLogger(__name__)

DEFAULT_TOPIC = "general"
NO_CONTENT_TOPIC = "No meaningful content"
NO_CONTENT_MESSAGE = "Text seems to be placeholder or lacks SEO value."


def build_response(text: str, extraction: ExtractionResult) -> AnalyzeResponse:
    """Turn an extraction result into the scored response for a text.

    Args:
        text: The trimmed text that was analysed.
        extraction: Keywords and topics returned for the text.

    Returns:
        AnalyzeResponse with ranked keywords, primary topic and score, or a
        zero-score response carrying an explanation when the text is
        rejected by the content filter.
    """
    text_length = len(text)
    word_count = len(text.split())

    if not is_meaningful_content(text, extraction.keywords):
        track_rejected_content()
        return AnalyzeResponse(
            keywords=[],
            score=0,
            score_category=score_category(0),
            topic=NO_CONTENT_TOPIC,
            text_length=text_length,
            word_count=word_count,
            tips=improvement_tips(0, 0, text_length),
            message=NO_CONTENT_MESSAGE,
        )

    # sorted() is stable, so equal weights keep upstream order
    ranked_keywords = [
        keyword
        for keyword, _ in sorted(
            extraction.keywords.items(), key=lambda item: item[1], reverse=True
        )
    ]
    ranked_topics = sorted(
        extraction.topics.items(), key=lambda item: item[1], reverse=True
    )
    topic, topic_score = ranked_topics[0] if ranked_topics else (DEFAULT_TOPIC, 0.0)

    score = calculate_score(extraction.keywords, extraction.topics, text)
    category = score_category(score)
    track_score(score, category)

    return AnalyzeResponse(
        keywords=ranked_keywords,
        score=score,
        score_category=category,
        topic=topic,
        topic_score=topic_score,
        total_keywords=len(ranked_keywords),
        text_length=text_length,
        word_count=word_count,
        tips=improvement_tips(score, len(ranked_keywords), text_length),
    )


async def analyze_with_metrics(extractor: TopicExtractor, text: str) -> AnalyzeResponse:
    """Scores text for SEO quality and records metrics.

    Args:
        extractor: The TopicExtractor used to fetch keywords and topics.
        text: The text to analyse; surrounding whitespace is ignored.

    Returns:
        AnalyzeResponse for the text.

    Raises:
        ExtractionError: If the extraction service call fails.
    """
    trimmed = text.strip()
    logger.info("Analyzing text of %d characters", len(trimmed))

    try:
        extraction = await extractor.extract(trimmed)
    except ExtractionError as e:
        track_extraction_failure(e.reason)
        raise

    response = build_response(trimmed, extraction)
    logger.info(
        "Scored %d keywords: score=%d category=%s",
        response.total_keywords,
        response.score,
        response.score_category,
    )
    return response
