"""Tests for PromptComposer."""

from conftest import BLEEDING, DROP_COVER

from quakeguide.rag.core.prompt_composer import PromptComposer
from quakeguide.rag.core.prompts import EMERGENCY_REMINDER


class TestPromptComposer:
    def test_no_knowledge_variant(self):
        prompt = PromptComposer().compose("What's the weather today?", [])
        assert '"What\'s the weather today?"' in prompt
        assert "don't have specific knowledge" in prompt
        assert "EARTHQUAKE SURVIVAL KNOWLEDGE" not in prompt

    def test_knowledge_items_numbered_in_order(self):
        prompt = PromptComposer().compose("bleeding after earthquake", [BLEEDING, DROP_COVER])
        first = prompt.index(f"1. {BLEEDING.title}\n{BLEEDING.content}")
        second = prompt.index(f"2. {DROP_COVER.title}\n{DROP_COVER.content}")
        assert first < second

    def test_knowledge_prompt_constraints(self):
        prompt = PromptComposer().compose("what do I do", [DROP_COVER])
        assert prompt.startswith("You are an earthquake survival assistant")
        assert 'USER QUESTION: "what do I do"' in prompt
        assert "ONLY use the earthquake survival knowledge provided above" in prompt
        assert "not found in knowledge base" in prompt
        assert EMERGENCY_REMINDER in prompt
        assert prompt.rstrip().endswith("ANSWER:")

    def test_query_braces_are_literal(self):
        prompt = PromptComposer().compose("what about {curly}", [DROP_COVER])
        assert '"what about {curly}"' in prompt
