"""LangGraph workflow for QuakeGuide RAG.

Flow: retrieve -> classify_priority -> extract_actions -> compose_prompt
      -> generate -> [validate_response ->] finalize -> END

Everything up to compose_prompt is a pure function of the query, so the
priority and quick actions never depend on the generation call.
"""

import inspect
import logging
import time

from langgraph.graph import END, StateGraph

from quakeguide.rag.agent import nodes
from quakeguide.rag.agent.nodes import RagComponents, get_rag_components
from quakeguide.rag.core.prompts import GENERATION_ERROR_RESPONSE
from quakeguide.rag.models.rag import (
    DebugResult,
    EmergencyPriority,
    RAGContext,
    RagResult,
    RagState,
    RagStatus,
)
from quakeguide.schemas.messages import Message

logger = logging.getLogger(__name__)

PRIORITY_BANNERS = {
    EmergencyPriority.CRITICAL: "🚨 CRITICAL: ",
    EmergencyPriority.URGENT: "⚠️ URGENT: ",
}


def _bound_node(node_fn, components: RagComponents, node_latencies: dict):
    """Bind components to a node function and record its execution time."""
    name = node_fn.__name__

    async def wrapper(state):
        start = time.perf_counter()
        result = node_fn(state, components)
        if inspect.isawaitable(result):
            result = await result
        node_latencies[name] = int((time.perf_counter() - start) * 1000)
        return result

    wrapper.__name__ = name
    return wrapper


def should_validate_or_finish(state: RagState) -> str:
    """Skip validation when generation produced nothing."""
    if state.error is not None or state.raw_answer is None:
        return "finish"
    return "validate"


def create_rag_graph(components: RagComponents, node_latencies: dict) -> StateGraph:
    """Build the QA workflow graph with per-node timing."""
    workflow = StateGraph(RagState)

    for node_fn in (
        nodes.retrieve,
        nodes.classify_priority,
        nodes.extract_actions,
        nodes.compose_prompt,
        nodes.generate,
        nodes.validate_response,
        nodes.finalize,
    ):
        workflow.add_node(node_fn.__name__, _bound_node(node_fn, components, node_latencies))

    workflow.set_entry_point("retrieve")

    workflow.add_edge("retrieve", "classify_priority")
    workflow.add_edge("classify_priority", "extract_actions")
    workflow.add_edge("extract_actions", "compose_prompt")
    workflow.add_edge("compose_prompt", "generate")

    workflow.add_conditional_edges(
        "generate",
        should_validate_or_finish,
        {"validate": "validate_response", "finish": "finalize"},
    )
    workflow.add_edge("validate_response", "finalize")
    workflow.add_edge("finalize", END)

    return workflow


def format_display_text(
    answer: str,
    priority: EmergencyPriority,
    quick_actions: list[str],
) -> str:
    """Answer with a priority banner and a numbered quick action list."""
    text = PRIORITY_BANNERS.get(priority, "") + answer
    if quick_actions:
        text += "\n\n**Quick Actions:**\n"
        text += "".join(f"{i}. {action}\n" for i, action in enumerate(quick_actions, start=1))
    return text


def build_context(query: str, components: RagComponents | None = None) -> RAGContext:
    """Retrieval, classification, quick actions and prompt for one query."""
    components = components or get_rag_components()
    relevant = components.retriever.retrieve(query, components.max_results)
    return RAGContext(
        user_query=query,
        relevant_knowledge=relevant,
        contextual_prompt=components.composer.compose(query, relevant),
        emergency_priority=components.classifier.classify(query),
        quick_actions=components.extractor.extract(query),
    )


def debug_query(
    query: str,
    components: RagComponents | None = None,
    max_results: int | None = None,
) -> DebugResult:
    """Show what retrieval and classification make of a query."""
    components = components or get_rag_components()
    limit = max_results if max_results is not None else components.debug_max_results
    return DebugResult(
        search_results=components.retriever.retrieve(query, limit),
        priority=components.classifier.classify(query),
        actions=components.extractor.extract(query),
    )


async def process_query(
    query: str,
    history: list[Message] | None = None,
    components: RagComponents | None = None,
) -> RagResult:
    """Run the full pipeline for one user message.

    Always returns a result: a validated answer, the validator's safe
    fallback, or a "couldn't generate" error message. Cancelling the
    calling task cancels the in-flight generation call.

    Args:
        query: User message
        history: Earlier conversation, oldest first
        components: Shared pipeline components (process-wide by default)

    Raises:
        ValueError: query is empty or whitespace
    """
    if not query or not query.strip():
        raise ValueError("query must not be empty")

    components = components or get_rag_components()
    node_latencies: dict[str, int] = {}
    app = create_rag_graph(components, node_latencies).compile()

    initial_state = RagState(query=query, history=history or [])

    try:
        final_state = await app.ainvoke(initial_state)
    except Exception as e:
        logger.exception("RAG workflow failed for query: %s", query[:100])
        answer = GENERATION_ERROR_RESPONSE.format(error=e)
        return RagResult(
            query=query,
            answer=answer,
            display_text=answer,
            status=RagStatus.ERROR,
        )

    logger.debug("Node latencies (ms): %s", node_latencies)

    priority = final_state.get("emergency_priority", EmergencyPriority.NORMAL)
    quick_actions = final_state.get("quick_actions", [])
    knowledge = final_state.get("relevant_knowledge", [])
    status = final_state.get("status", RagStatus.SUCCESS)
    answer = final_state.get("answer")
    if not answer:
        answer = GENERATION_ERROR_RESPONSE.format(error="empty response")
        status = RagStatus.ERROR
    validation = final_state.get("validation")
    if validation is not None:
        validation = validation.model_copy(update={"blocked_content": None})

    return RagResult(
        query=query,
        answer=answer,
        display_text=format_display_text(answer, priority, quick_actions),
        status=status,
        emergency_priority=priority,
        quick_actions=quick_actions,
        relevant_knowledge_count=len(knowledge),
        knowledge_ids=[item.id for item in knowledge],
        validation=validation,
        usage=final_state.get("usage"),
    )
