"""QuakeGuide RAG agent - query pipeline and debug helpers."""

from .graph import (
    build_context,
    create_rag_graph,
    debug_query,
    format_display_text,
    process_query,
)
from .nodes import RagComponents, get_rag_components

__all__ = [
    "RagComponents",
    "get_rag_components",
    "create_rag_graph",
    "build_context",
    "debug_query",
    "format_display_text",
    "process_query",
]
