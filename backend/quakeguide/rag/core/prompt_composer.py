"""Builds the constrained prompt handed to the generation collaborator."""

from collections.abc import Sequence

from quakeguide.rag.models.knowledge import KnowledgeItem

from .prompts import (
    EMERGENCY_REMINDER,
    KNOWLEDGE_HEADER,
    KNOWLEDGE_INSTRUCTIONS,
    KNOWLEDGE_ITEM,
    NO_KNOWLEDGE_PROMPT,
)


class PromptComposer:
    """Two prompt variants: with retrieved knowledge, or an explicit no-knowledge prompt."""

    def compose(self, query: str, knowledge: Sequence[KnowledgeItem]) -> str:
        if not knowledge:
            return NO_KNOWLEDGE_PROMPT.format(query=query)

        prompt = KNOWLEDGE_HEADER
        for index, item in enumerate(knowledge, start=1):
            prompt += KNOWLEDGE_ITEM.format(index=index, title=item.title, content=item.content)
        prompt += KNOWLEDGE_INSTRUCTIONS.format(query=query, reminder=EMERGENCY_REMINDER)
        return prompt
