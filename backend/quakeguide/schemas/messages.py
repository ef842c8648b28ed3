"""Pydantic models for chat messages and chat requests."""

from enum import StrEnum

from pydantic import BaseModel, Field, field_validator


class Role(StrEnum):
    """Author of a chat message."""

    SYSTEM = "system"
    USER = "user"
    ASSISTANT = "assistant"


class Message(BaseModel):
    """A single role-tagged message in a conversation."""
    role: Role
    content: str


class DebugRequest(BaseModel):
    """Request body for POST /chat/debug."""
    message: str = Field(..., description="User query")

    @field_validator("message")
    @classmethod
    def _not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("message must not be blank")
        return value


class ChatRequest(DebugRequest):
    """Request body for POST /chat."""
    history: list[Message] = Field(
        default_factory=list, description="Earlier messages, oldest first"
    )
