"""Heuristic gate rejecting placeholder or degenerate text before scoring."""

from typing import Mapping

PLACEHOLDER_MARKERS = ("lorem ipsum", "sample text", "placeholder")

STOP_WORDS = frozenset(
    {
        "the", "and", "for", "are", "but", "not", "you", "all", "can", "had",
        "her", "was", "one", "our", "out", "day", "get", "has", "him", "his",
        "how", "man", "new", "now", "old", "see", "two", "way", "who", "boy",
        "did", "its", "let", "put", "say", "she", "too", "use",
    }
)


def _is_meaningful_keyword(keyword: str) -> bool:
    return (
        len(keyword) > 2
        and keyword.lower() not in STOP_WORDS
        and not (keyword.isascii() and keyword.isdigit())
    )


def is_meaningful_content(text: str, keywords: Mapping[str, float]) -> bool:
    """Decide whether text carries enough real content to be worth scoring.

    Args:
        text: The analysed text.
        keywords: Keyword to weight mapping from the extraction service.

    Returns:
        False for placeholder copy, very short text, heavily repeated words,
        or when every keyword is a stop word, a number or too short.
    """
    lower_text = text.lower()
    if any(marker in lower_text for marker in PLACEHOLDER_MARKERS):
        return False

    if len(text.strip()) < 10:
        return False

    words = lower_text.split()
    repetition_ratio = len(set(words)) / len(words)
    if repetition_ratio < 0.5 and len(words) > 10:
        return False

    return any(_is_meaningful_keyword(keyword) for keyword in keywords)
