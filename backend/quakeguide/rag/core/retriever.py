"""Keyword-weighted retrieval over the knowledge base."""

import logging

from quakeguide.core.config import settings
from quakeguide.rag.models.knowledge import KnowledgeItem, RetrievalResult

from .knowledge_store import KnowledgeStore, get_knowledge_store
from .matching import query_words

logger = logging.getLogger(__name__)

KEYWORD_EXACT_WEIGHT = 10
KEYWORD_SUBSTRING_WEIGHT = 8
TITLE_WEIGHT = 5
CONTENT_WEIGHT = 1


def score_item(item: KnowledgeItem, query_lower: str, words: set[str]) -> int:
    """Relevance of one item for an already lower-cased query.

    Each keyword scores once: whole-word hits beat substring hits.
    Title and content only score when they contain the entire query.
    """
    score = 0
    for keyword in item.keywords:
        keyword_lower = keyword.lower()
        if keyword_lower in words:
            score += KEYWORD_EXACT_WEIGHT
        elif keyword_lower and keyword_lower in query_lower:
            score += KEYWORD_SUBSTRING_WEIGHT

    if query_lower and query_lower in item.title.lower():
        score += TITLE_WEIGHT

    if query_lower and query_lower in item.content.lower():
        score += CONTENT_WEIGHT

    return score


class Retriever:
    """Ranks knowledge items against a free-text query."""

    def __init__(self, store: KnowledgeStore | None = None):
        self.store = store or get_knowledge_store()

    def rank(self, query: str) -> list[RetrievalResult]:
        """Score every item, drop zero scores, sort by score then priority.

        The sort is stable, so items tied on both keep dataset order.
        """
        query_lower = query.lower()
        words = query_words(query)
        if not words:
            return []

        results: list[RetrievalResult] = []
        for item in self.store.all_items():
            score = score_item(item, query_lower, words)
            if score > 0:
                results.append(RetrievalResult(item=item, score=score))

        results.sort(key=lambda r: (-r.score, r.item.priority))
        return results

    def search(self, query: str) -> list[KnowledgeItem]:
        """All matching items, best first."""
        return [r.item for r in self.rank(query)]

    def retrieve(self, query: str, max_results: int | None = None) -> list[KnowledgeItem]:
        """Top matching items, capped at max_results (settings default)."""
        limit = settings.max_results if max_results is None else max_results
        items = self.search(query)[: max(limit, 0)]
        logger.debug("Retrieved %d items for query %r: %s", len(items), query[:100], [i.id for i in items])
        return items
