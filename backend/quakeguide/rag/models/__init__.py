"""Pydantic models for the QuakeGuide RAG component."""

from .knowledge import KnowledgeBase, KnowledgeItem, RetrievalResult
from .rag import (
    DebugResult,
    EmergencyPriority,
    RAGContext,
    RagResult,
    RagState,
    RagStatus,
    ValidationResult,
)

__all__ = [
    # Knowledge models
    "KnowledgeItem",
    "KnowledgeBase",
    "RetrievalResult",
    # RAG models
    "EmergencyPriority",
    "RAGContext",
    "ValidationResult",
    "DebugResult",
    "RagResult",
    "RagState",
    "RagStatus",
]
