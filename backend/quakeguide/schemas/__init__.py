"""Schemas module - Pydantic models for API request/response validation."""

from .messages import ChatRequest, DebugRequest, Message, Role

__all__ = [
    "ChatRequest",
    "DebugRequest",
    "Message",
    "Role",
]
