"""Query-relevant preview sentences for search results."""

import re

_SENTENCE_BOUNDARY = re.compile(r"[.!?]+")

DEFAULT_EXCERPT_LENGTH = 200
ELLIPSIS = "..."


def split_sentences(content: str) -> list[str]:
    """Split text on runs of ``.``, ``!`` and ``?``, dropping empty fragments."""
    fragments = (fragment.strip() for fragment in _SENTENCE_BOUNDARY.split(content))
    return [fragment for fragment in fragments if fragment]


def create_excerpt(content: str, query: str, max_length: int = DEFAULT_EXCERPT_LENGTH) -> str:
    """Pick the sentence of ``content`` that mentions the most query terms.

    Every whitespace-separated query term counts here, short ones included.
    A sentence only replaces the current pick when it matches strictly more
    terms, so ties go to the earlier sentence and a body with no matches
    yields its first sentence.

    Args:
        content: Case body text.
        query: Raw search query.
        max_length: Maximum excerpt length, ellipsis included.

    Returns:
        The chosen sentence, truncated with ``...`` when longer than
        ``max_length``; an empty string if ``content`` has no sentences.
    """
    terms = list(dict.fromkeys(query.lower().split()))
    sentences = split_sentences(content)

    best_sentence = sentences[0] if sentences else ""
    best_score = 0

    for sentence in sentences:
        sentence_lower = sentence.lower()
        score = sum(1 for term in terms if term in sentence_lower)
        if score > best_score:
            best_score = score
            best_sentence = sentence

    if len(best_sentence) > max_length:
        if max_length <= len(ELLIPSIS):
            return best_sentence[:max_length]
        best_sentence = best_sentence[: max_length - len(ELLIPSIS)] + ELLIPSIS

    return best_sentence
