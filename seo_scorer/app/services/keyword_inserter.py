"""Splice a suggested keyword into user text."""


def insert_keyword(text: str, keyword: str) -> str:
    """Append a keyword to the first sentence of the text.

    Sentences are found by splitting on ".", so abbreviations, decimals and
    ellipses also count as breaks. Text that already contains the keyword is
    returned unchanged.

    Args:
        text: The text to edit.
        keyword: The keyword to insert.

    Returns:
        The edited text.
    """
    if keyword in text:
        return text

    sentences = text.split(".")
    if not sentences:
        return f"{keyword}. {text}"

    sentences[0] += f" {keyword}"
    return ".".join(sentences)
