"""Loads the earthquake knowledge dataset once and serves read-only lookups."""

import json
import logging
from functools import lru_cache
from pathlib import Path

from pydantic import ValidationError

from quakeguide.core.config import settings
from quakeguide.rag.models.knowledge import KnowledgeBase, KnowledgeItem

logger = logging.getLogger(__name__)


class KnowledgeDatasetError(Exception):
    """The knowledge dataset is missing or malformed."""


def load_knowledge_base(path: Path) -> KnowledgeBase:
    """Parse and validate a dataset file.

    Raises:
        KnowledgeDatasetError: file missing, not JSON, or schema mismatch
    """
    try:
        with open(path, "r", encoding="utf-8") as f:
            raw = json.load(f)
    except FileNotFoundError as e:
        raise KnowledgeDatasetError(f"Knowledge dataset not found: {path}") from e
    except json.JSONDecodeError as e:
        raise KnowledgeDatasetError(f"Knowledge dataset is not valid JSON: {path}: {e}") from e

    try:
        base = KnowledgeBase.model_validate(raw)
    except ValidationError as e:
        raise KnowledgeDatasetError(f"Knowledge dataset does not match schema: {path}: {e}") from e

    ids = [item.id for item in base.knowledge]
    duplicates = sorted({i for i in ids if ids.count(i) > 1})
    if duplicates:
        raise KnowledgeDatasetError(f"Duplicate knowledge ids in {path}: {', '.join(duplicates)}")

    return base


class KnowledgeStore:
    """Owns the KnowledgeBase; every accessor is a pure read."""

    def __init__(self, path: Path | None = None, knowledge_base: KnowledgeBase | None = None):
        self.path = path or settings.resolved_knowledge_path
        self._base: KnowledgeBase | None = knowledge_base
        self._by_id: dict[str, KnowledgeItem] = {}
        if knowledge_base is not None:
            self._index(knowledge_base)

    def _index(self, base: KnowledgeBase) -> None:
        self._by_id = {item.id: item for item in base.knowledge}

    def load(self) -> KnowledgeBase:
        """Load the dataset on first call; later calls return the cached base."""
        if self._base is None:
            base = load_knowledge_base(self.path)
            self._index(base)
            self._base = base
            logger.info(
                "Loaded %d knowledge items in %d categories from %s",
                len(base.knowledge),
                len(base.categories),
                self.path,
            )
        return self._base

    @property
    def knowledge_base(self) -> KnowledgeBase:
        return self.load()

    def all_items(self) -> tuple[KnowledgeItem, ...]:
        return self.knowledge_base.knowledge

    def get_item(self, item_id: str) -> KnowledgeItem | None:
        """Look up one item; None when the id is unknown."""
        self.load()
        return self._by_id.get(item_id)

    def items_by_category(self, category: str) -> list[KnowledgeItem]:
        return [item for item in self.all_items() if item.category == category]

    def items_by_priority(self, priority: int) -> list[KnowledgeItem]:
        return [item for item in self.all_items() if item.priority == priority]

    def categories(self) -> dict[str, str]:
        return dict(self.knowledge_base.categories)

    def sources(self) -> list[str]:
        return list(self.knowledge_base.sources)


@lru_cache(maxsize=1)
def get_knowledge_store() -> KnowledgeStore:
    """Get the process-wide KnowledgeStore, loaded."""
    store = KnowledgeStore()
    store.load()
    return store
