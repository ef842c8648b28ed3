"""Node functions for the QuakeGuide RAG agent.

Every node takes the current ``RagState`` plus the shared ``RagComponents``
and returns a partial state update. Only ``generate`` awaits anything.
"""

import logging
from dataclasses import dataclass
from functools import lru_cache

from quakeguide.core.config import Settings, get_settings
from quakeguide.core.llm import (
    GenerationCollaborator,
    GenerationError,
    GenerationRequest,
    generate_with_timeout,
    get_generator,
    to_messages,
)
from quakeguide.rag.core import (
    KnowledgeStore,
    PriorityClassifier,
    PromptComposer,
    QuickActionExtractor,
    ResponseValidator,
    Retriever,
    ValidatorConfig,
    get_knowledge_store,
)
from quakeguide.rag.core.prompts import GENERATION_ERROR_RESPONSE
from quakeguide.rag.models.rag import RagState, RagStatus

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RagComponents:
    """Everything the pipeline needs, built once and shared read-only."""

    store: KnowledgeStore
    retriever: Retriever
    classifier: PriorityClassifier
    extractor: QuickActionExtractor
    composer: PromptComposer
    validator: ResponseValidator
    generator: GenerationCollaborator
    max_results: int = 3
    debug_max_results: int = 5
    history_max_messages: int = 12
    temperature: float = 0.3
    max_tokens: int = 300
    timeout_seconds: float = 60.0

    @classmethod
    def build(
        cls,
        store: KnowledgeStore | None = None,
        generator: GenerationCollaborator | None = None,
        settings: Settings | None = None,
    ) -> "RagComponents":
        settings = settings or get_settings()
        store = store or get_knowledge_store()
        return cls(
            store=store,
            retriever=Retriever(store),
            classifier=PriorityClassifier(),
            extractor=QuickActionExtractor(),
            composer=PromptComposer(),
            validator=ResponseValidator(ValidatorConfig.from_settings(settings)),
            generator=generator or get_generator(),
            max_results=settings.max_results,
            debug_max_results=settings.debug_max_results,
            history_max_messages=settings.history_max_messages,
            temperature=settings.generation_temperature,
            max_tokens=settings.generation_max_tokens,
            timeout_seconds=settings.generation_timeout_seconds,
        )


@lru_cache(maxsize=1)
def get_rag_components() -> RagComponents:
    """Process-wide components built from settings."""
    return RagComponents.build()


def retrieve(state: RagState, components: RagComponents) -> dict:
    """Top knowledge items for the query."""
    items = components.retriever.retrieve(state.query, components.max_results)
    return {"relevant_knowledge": items}


def classify_priority(state: RagState, components: RagComponents) -> dict:
    return {"emergency_priority": components.classifier.classify(state.query)}


def extract_actions(state: RagState, components: RagComponents) -> dict:
    return {"quick_actions": components.extractor.extract(state.query)}


def compose_prompt(state: RagState, components: RagComponents) -> dict:
    """Knowledge-grounded prompt, or the no-knowledge variant."""
    prompt = components.composer.compose(state.query, state.relevant_knowledge)
    return {"contextual_prompt": prompt}


async def generate(state: RagState, components: RagComponents) -> dict:
    """Call the generation collaborator with history plus the composed prompt.

    A GenerationError ends the run with status=error; it is not retried here.
    """
    request = GenerationRequest(
        messages=to_messages(state.history, state.contextual_prompt, components.history_max_messages),
        temperature=components.temperature,
        max_tokens=components.max_tokens,
        documents=[item.content for item in state.relevant_knowledge],
    )

    try:
        response = await generate_with_timeout(
            components.generator, request, components.timeout_seconds
        )
    except GenerationError as e:
        logger.error("Generation failed for query %r: %s", state.query[:100], e)
        return {
            "error": str(e),
            "status": RagStatus.ERROR,
            "answer": GENERATION_ERROR_RESPONSE.format(error=e),
        }

    return {"raw_answer": response.text, "usage": response.usage}


def validate_response(state: RagState, components: RagComponents) -> dict:
    """Check the generated answer; swap in the safe response when it fails."""
    validator = components.validator
    raw_answer = state.raw_answer or ""
    result = validator.validate(state.query, raw_answer, state.relevant_knowledge)

    if result.blocked_content is not None:
        logger.warning(
            "Blocked response (confidence=%.2f) for query %r: %r",
            result.confidence,
            state.query[:100],
            result.blocked_content[:500],
        )

    if not result.is_valid:
        logger.warning("Response validation failed: %s", result.warnings)
        return {
            "validation": result,
            "answer": validator.get_safe_response(state.query, result),
            "status": RagStatus.FALLBACK,
        }

    return {"validation": result, "answer": raw_answer, "status": RagStatus.SUCCESS}


def finalize(state: RagState, components: RagComponents) -> dict:
    """Log a one-line summary of the processed query."""
    validation = state.validation
    logger.info(
        "RAG query: priority=%s knowledge=%d actions=%d status=%s valid=%s confidence=%s",
        state.emergency_priority,
        len(state.relevant_knowledge),
        len(state.quick_actions),
        state.status,
        validation.is_valid if validation else None,
        f"{validation.confidence:.2f}" if validation else None,
    )
    return {}
