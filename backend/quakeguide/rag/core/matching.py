"""Keyword matching shared by retrieval, priority classification and quick actions.

A keyword matches a query when it equals one of the query's whitespace
tokens, or when the lower-cased query contains it as a substring. The
substring rule covers multi-word keywords ("gas leak") and CJK terms
("地震") that whitespace tokenization cannot isolate.
"""

from collections.abc import Iterable

# Substring matches for classification need keywords longer than this
MIN_SUBSTRING_KEYWORD_LENGTH = 2


def tokenize(text: str) -> list[str]:
    """Lower-case and split on whitespace, dropping empty tokens."""
    return text.lower().split()


def query_words(query: str) -> set[str]:
    return set(tokenize(query))


def matches_keywords(
    query: str,
    keywords: Iterable[str],
    min_substring_length: int = MIN_SUBSTRING_KEYWORD_LENGTH,
) -> bool:
    """True if any keyword matches the query as a whole word or a long-enough substring."""
    query_lower = query.lower()
    words = query_words(query)

    for keyword in keywords:
        keyword_lower = keyword.lower()
        if keyword_lower in words:
            return True
        if len(keyword_lower) > min_substring_length and keyword_lower in query_lower:
            return True
    return False


def contains_any(text: str, phrases: Iterable[str]) -> bool:
    """Case-insensitive substring test against a list of phrases."""
    text_lower = text.lower()
    return any(phrase.lower() in text_lower for phrase in phrases)
