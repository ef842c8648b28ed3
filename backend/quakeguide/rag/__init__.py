"""
QuakeGuide RAG Component

Offline-first earthquake survival guidance:
1. Keyword retrieval against a bundled knowledge base
2. Emergency priority and quick actions derived from the query
3. Constrained prompt, generation, and heuristic validation with safe fallbacks
"""

# Core components
from quakeguide.rag.core import (
    KnowledgeDatasetError,
    KnowledgeStore,
    PriorityClassifier,
    PromptComposer,
    QuickActionExtractor,
    ResponseValidator,
    Retriever,
    ValidatorConfig,
    get_knowledge_store,
)

# RAG models
from quakeguide.rag.models import (
    DebugResult,
    EmergencyPriority,
    KnowledgeBase,
    KnowledgeItem,
    RAGContext,
    RagResult,
    RagState,
    RagStatus,
    RetrievalResult,
    ValidationResult,
)

# Pipeline
from quakeguide.rag.agent import (
    RagComponents,
    build_context,
    create_rag_graph,
    debug_query,
    format_display_text,
    get_rag_components,
    process_query,
)

__all__ = [
    # Core
    "KnowledgeStore",
    "KnowledgeDatasetError",
    "get_knowledge_store",
    "Retriever",
    "PriorityClassifier",
    "QuickActionExtractor",
    "PromptComposer",
    "ResponseValidator",
    "ValidatorConfig",
    # Models
    "KnowledgeItem",
    "KnowledgeBase",
    "RetrievalResult",
    "EmergencyPriority",
    "RAGContext",
    "ValidationResult",
    "DebugResult",
    "RagResult",
    "RagState",
    "RagStatus",
    # Pipeline
    "RagComponents",
    "get_rag_components",
    "create_rag_graph",
    "build_context",
    "debug_query",
    "format_display_text",
    "process_query",
]
