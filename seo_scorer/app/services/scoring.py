"""SEO score heuristic and its display helpers."""

import math
from typing import Mapping

MAX_KEYWORD_DENSITY = 20
DIMINISHING_RETURNS_THRESHOLD = 85


def calculate_score(
    keywords: Mapping[str, float], topics: Mapping[str, float], text: str
) -> int:
    """Derive a 0-100 SEO score from extracted keywords and topics.

    Args:
        keywords: Keyword to relevance weight mapping from the extraction service.
        topics: Topic to relevance weight mapping from the extraction service.
        text: The analysed text.

    Returns:
        The score as an integer in [0, 100]. Very short texts, texts with fewer
        than five words and texts without keywords score 0.
    """
    keyword_count = len(keywords)
    topic_scores = list(topics.values())
    max_topic_score = max([*topic_scores, 0])
    trimmed = text.strip()
    text_length = len(trimmed)
    word_count = len(trimmed.split())

    if text_length < 20 or keyword_count == 0 or word_count < 5:
        return 0

    # Keywords per 100 words, capped so stuffing is not rewarded
    keyword_density = min((keyword_count / word_count) * 100, MAX_KEYWORD_DENSITY)
    topic_relevance = max_topic_score * 100

    score = (keyword_density * 2) + (topic_relevance * 0.8)

    length_factor = 1.0
    if text_length < 100:
        length_factor = 0.6
    elif text_length < 200:
        length_factor = 0.8
    elif text_length < 500:
        length_factor = 0.9

    keyword_factor = 1.0
    if keyword_count < 3:
        keyword_factor = 0.7
    elif keyword_count < 5:
        keyword_factor = 0.85

    diversity_factor = 1.0
    if len(topic_scores) > 1:
        first, second = sorted(topic_scores, reverse=True)[:2]
        if second > first * 0.7:
            diversity_factor = 1.1

    score = score * length_factor * keyword_factor * diversity_factor

    if score > DIMINISHING_RETURNS_THRESHOLD:
        score = DIMINISHING_RETURNS_THRESHOLD + (score - DIMINISHING_RETURNS_THRESHOLD) * 0.3

    if math.isnan(score):
        return 0

    # Clamp before half-up rounding; round() would use banker's rounding
    return math.floor(min(100.0, max(0.0, score)) + 0.5)


def score_category(score: int) -> str:
    """Band a score into very-low, low, medium or high."""
    if score >= 75:
        return "high"
    if score >= 50:
        return "medium"
    if score >= 25:
        return "low"
    return "very-low"


def improvement_tips(score: int, keyword_count: int, text_length: int) -> list[str]:
    """Suggest edits for texts scoring below 70.

    Args:
        score: The computed SEO score.
        keyword_count: Number of keywords returned to the user.
        text_length: Length of the trimmed text in characters.

    Returns:
        Human-readable hints, empty for well-scoring texts.
    """
    if score >= 70:
        return []

    tips = []
    if score < 30:
        tips.append("Add more relevant keywords to your content")
    if keyword_count < 3:
        tips.append("Include more topic-specific terms")
    if text_length < 100:
        tips.append("Consider expanding your content for better SEO")
    tips.append("Use the suggested keywords above to enhance your content")
    tips.append("Ensure your content matches your intended topic")
    return tips
