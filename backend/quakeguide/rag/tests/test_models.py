"""Tests for RAG and knowledge pydantic models."""

import pytest
from pydantic import ValidationError

from quakeguide.core.llm import TokenUsage
from quakeguide.rag.models.knowledge import KnowledgeBase, KnowledgeItem
from quakeguide.rag.models.rag import (
    EmergencyPriority,
    RagResult,
    RagState,
    RagStatus,
    ValidationResult,
)


class TestKnowledgeItem:
    def test_defaults(self):
        item = KnowledgeItem(id="a", category="c", title="t", content="x")
        assert item.keywords == ()
        assert item.priority == 3

    def test_priority_must_be_positive(self):
        with pytest.raises(ValidationError):
            KnowledgeItem(id="a", category="c", title="t", content="x", priority=0)

    def test_content_required(self):
        with pytest.raises(ValidationError):
            KnowledgeItem(id="a", category="c", title="t")

    def test_hashable(self):
        item = KnowledgeItem(id="a", category="c", title="t", content="x", keywords=["k"])
        assert item in {item}


class TestKnowledgeBase:
    def test_parses_dataset_shape(self):
        base = KnowledgeBase.model_validate(
            {
                "knowledge": [{"id": "a", "category": "c", "title": "t", "content": "x", "priority": 1}],
                "categories": {"c": "Category"},
                "sources": ["FEMA"],
            }
        )
        assert base.knowledge[0].id == "a"
        assert base.sources == ("FEMA",)


class TestEnums:
    def test_priority_values(self):
        assert [p.value for p in EmergencyPriority] == ["critical", "urgent", "important", "normal"]

    def test_status_values(self):
        assert {s.value for s in RagStatus} == {"success", "fallback", "error"}


class TestRagResult:
    def test_minimal(self):
        result = RagResult(query="q", answer="a", status=RagStatus.SUCCESS)
        assert result.emergency_priority == EmergencyPriority.NORMAL
        assert result.quick_actions == []
        assert result.validation is None

    def test_serializes_usage(self):
        result = RagResult(
            query="q",
            answer="a",
            status=RagStatus.SUCCESS,
            usage=TokenUsage(input=3, output=4, model="m"),
            validation=ValidationResult(is_valid=True, confidence=1.0),
        )
        data = result.model_dump(mode="json")
        assert data["usage"] == {"input": 3, "output": 4, "model": "m"}
        assert data["status"] == "success"
        assert data["validation"]["blocked_content"] is None


class TestRagState:
    def test_defaults(self):
        state = RagState(query="q")
        assert state.history == []
        assert state.relevant_knowledge == []
        assert state.status == RagStatus.SUCCESS
        assert state.raw_answer is None
