"""Pydantic models for the earthquake survival knowledge base."""

from pydantic import BaseModel, ConfigDict, Field


class KnowledgeItem(BaseModel):
    """One fact or procedure in the knowledge base."""

    id: str = Field(..., description="Stable identifier (e.g. eq-during-001)")
    category: str = Field(..., description="Category code (e.g. medical, shelter)")
    title: str = Field(..., description="Short human-readable label")
    keywords: tuple[str, ...] = Field(
        default_factory=tuple, description="Terms that trigger this item"
    )
    content: str = Field(..., description="Advisory text returned to the user")
    priority: int = Field(
        default=3, ge=1, description="1 = shown first among equally scored matches"
    )

    model_config = ConfigDict(frozen=True)


class KnowledgeBase(BaseModel):
    """The full dataset as loaded from disk."""

    knowledge: tuple[KnowledgeItem, ...] = Field(default_factory=tuple)
    categories: dict[str, str] = Field(
        default_factory=dict, description="Category code -> display name"
    )
    sources: tuple[str, ...] = Field(
        default_factory=tuple, description="Citation sources for the dataset"
    )

    model_config = ConfigDict(frozen=True)


class RetrievalResult(BaseModel):
    """A knowledge item paired with its relevance score for one query."""

    item: KnowledgeItem
    score: int = Field(..., description="Weighted keyword/title/content score")
