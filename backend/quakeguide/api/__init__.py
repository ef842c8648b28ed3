"""API module - FastAPI route handlers."""

from . import chat_routes, knowledge_routes

__all__ = ["chat_routes", "knowledge_routes"]
