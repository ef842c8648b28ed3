"""Tests for KnowledgeStore and dataset loading."""

import json
from unittest.mock import patch

import pytest

from quakeguide.core.config import DEFAULT_KNOWLEDGE_PATH
from quakeguide.rag.core.knowledge_store import (
    KnowledgeDatasetError,
    KnowledgeStore,
    load_knowledge_base,
)


def _write(tmp_path, data):
    path = tmp_path / "kb.json"
    path.write_text(json.dumps(data), encoding="utf-8")
    return path


# ── load_knowledge_base ─────────────────────────────────────────────


class TestLoadKnowledgeBase:
    def test_bundled_dataset_loads(self):
        base = load_knowledge_base(DEFAULT_KNOWLEDGE_PATH)
        assert len(base.knowledge) > 10
        assert base.sources
        # every item's category has a display name
        assert {item.category for item in base.knowledge} <= set(base.categories)

    def test_bundled_ids_unique(self):
        base = load_knowledge_base(DEFAULT_KNOWLEDGE_PATH)
        ids = [item.id for item in base.knowledge]
        assert len(ids) == len(set(ids))

    def test_missing_file(self, tmp_path):
        with pytest.raises(KnowledgeDatasetError, match="not found"):
            load_knowledge_base(tmp_path / "missing.json")

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "kb.json"
        path.write_text("{not json", encoding="utf-8")
        with pytest.raises(KnowledgeDatasetError, match="not valid JSON"):
            load_knowledge_base(path)

    def test_schema_mismatch(self, tmp_path):
        path = _write(tmp_path, {"knowledge": [{"id": "x", "title": "no content"}]})
        with pytest.raises(KnowledgeDatasetError, match="schema"):
            load_knowledge_base(path)

    def test_duplicate_ids(self, tmp_path):
        item = {"id": "dup", "category": "c", "title": "t", "keywords": [], "content": "c", "priority": 1}
        path = _write(tmp_path, {"knowledge": [item, item]})
        with pytest.raises(KnowledgeDatasetError, match="dup"):
            load_knowledge_base(path)

    def test_keywords_become_tuple(self, tmp_path):
        item = {"id": "a", "category": "c", "title": "t", "keywords": ["x", "y"], "content": "c", "priority": 2}
        base = load_knowledge_base(_write(tmp_path, {"knowledge": [item]}))
        assert base.knowledge[0].keywords == ("x", "y")
        assert base.categories == {}
        assert base.sources == ()


# ── KnowledgeStore ──────────────────────────────────────────────────


class TestKnowledgeStore:
    def test_load_only_once(self, tmp_path, knowledge_base):
        path = tmp_path / "kb.json"
        with patch(
            "quakeguide.rag.core.knowledge_store.load_knowledge_base",
            return_value=knowledge_base,
        ) as mock_load:
            store = KnowledgeStore(path=path)
            first = store.load()
            second = store.load()
        assert first is second
        mock_load.assert_called_once_with(path)

    def test_lazy_load_on_access(self, tmp_path, knowledge_base):
        with patch(
            "quakeguide.rag.core.knowledge_store.load_knowledge_base",
            return_value=knowledge_base,
        ) as mock_load:
            store = KnowledgeStore(path=tmp_path / "kb.json")
            mock_load.assert_not_called()
            assert len(store.all_items()) == len(knowledge_base.knowledge)
        mock_load.assert_called_once()

    def test_preloaded_base_never_reads_disk(self, knowledge_base):
        with patch("quakeguide.rag.core.knowledge_store.load_knowledge_base") as mock_load:
            store = KnowledgeStore(knowledge_base=knowledge_base)
            store.load()
            store.get_item("during-001")
        mock_load.assert_not_called()

    def test_get_item_found(self, store):
        item = store.get_item("medical-001")
        assert item is not None
        assert item.title == "Controlling Severe Bleeding"

    def test_get_item_not_found(self, store):
        assert store.get_item("nope") is None

    def test_items_by_category(self, store):
        items = store.items_by_category("medical")
        assert [i.id for i in items] == ["medical-001"]
        assert store.items_by_category("unknown") == []

    def test_items_by_priority_keeps_dataset_order(self, store):
        items = store.items_by_priority(1)
        assert [i.id for i in items] == ["during-001", "medical-001", "after-001"]

    def test_categories_and_sources(self, store):
        assert store.categories()["medical"] == "First Aid"
        assert store.sources() == ["Ready.gov - Earthquakes"]

    def test_categories_returns_copy(self, store):
        store.categories()["medical"] = "changed"
        assert store.categories()["medical"] == "First Aid"

    def test_items_are_immutable(self, store):
        item = store.get_item("during-001")
        with pytest.raises(Exception):
            item.title = "changed"
