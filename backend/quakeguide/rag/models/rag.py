"""Pydantic models for the QuakeGuide RAG pipeline."""

from enum import StrEnum

from pydantic import BaseModel, Field

from quakeguide.core.llm import TokenUsage
from quakeguide.rag.models.knowledge import KnowledgeItem
from quakeguide.schemas.messages import Message


class RagStatus(StrEnum):
    """Outcome of a processed query."""

    SUCCESS = "success"
    FALLBACK = "fallback"
    ERROR = "error"


class EmergencyPriority(StrEnum):
    """Severity tier of a query, most severe first."""

    CRITICAL = "critical"
    URGENT = "urgent"
    IMPORTANT = "important"
    NORMAL = "normal"


class RAGContext(BaseModel):
    """Everything derived from a query before generation."""

    user_query: str = Field(..., description="Original query")
    relevant_knowledge: list[KnowledgeItem] = Field(
        default_factory=list, description="Ranked knowledge, capped at max_results"
    )
    contextual_prompt: str = Field(..., description="Prompt sent to the generator")
    emergency_priority: EmergencyPriority = Field(default=EmergencyPriority.NORMAL)
    quick_actions: list[str] = Field(default_factory=list)


class ValidationResult(BaseModel):
    """Result of checking a generated answer against the knowledge used."""

    is_valid: bool
    confidence: float = Field(..., description="Starts at 1.0, reduced per failed check")
    warnings: list[str] = Field(default_factory=list)
    blocked_content: str | None = Field(
        default=None, description="Original response when confidence is very low (audit only)"
    )


class DebugResult(BaseModel):
    """Retrieval/classification view of a query without generation."""

    search_results: list[KnowledgeItem] = Field(default_factory=list)
    priority: EmergencyPriority
    actions: list[str] = Field(default_factory=list)


class RagResult(BaseModel):
    """Complete result of processing one user message."""

    query: str = Field(..., description="Original query")
    answer: str = Field(..., description="Validated answer, safe fallback or error text")
    display_text: str = Field(
        default="", description="Answer decorated with priority banner and quick actions"
    )
    status: RagStatus = Field(..., description="Query status")
    emergency_priority: EmergencyPriority = Field(default=EmergencyPriority.NORMAL)
    quick_actions: list[str] = Field(default_factory=list)
    relevant_knowledge_count: int = Field(default=0)
    knowledge_ids: list[str] = Field(default_factory=list)
    validation: ValidationResult | None = Field(
        default=None, description="Validation outcome (blocked content stripped)"
    )
    usage: TokenUsage | None = Field(default=None)


class RagState(BaseModel):
    """State for the QuakeGuide LangGraph workflow."""

    # Input
    query: str
    history: list[Message] = Field(default_factory=list)

    # Retrieval and classification
    relevant_knowledge: list[KnowledgeItem] = Field(default_factory=list)
    emergency_priority: EmergencyPriority = EmergencyPriority.NORMAL
    quick_actions: list[str] = Field(default_factory=list)

    # Prompt
    contextual_prompt: str = ""

    # Generation
    raw_answer: str | None = None
    usage: TokenUsage | None = None
    error: str | None = None

    # Validation
    validation: ValidationResult | None = None

    # Result
    answer: str | None = None
    status: RagStatus = RagStatus.SUCCESS
