"""Core module - configuration and generation backends."""

from .config import Settings, get_settings, settings
from .llm import (
    FallbackGenerator,
    GenerationCollaborator,
    GenerationError,
    GenerationRequest,
    GenerationResponse,
    HuggingFaceGenerator,
    OfflineGenerator,
    OpenAIGenerator,
    TokenUsage,
    build_generator,
    get_generator,
)

__all__ = [
    "settings",
    "get_settings",
    "Settings",
    # Generation
    "GenerationCollaborator",
    "GenerationError",
    "GenerationRequest",
    "GenerationResponse",
    "TokenUsage",
    "OpenAIGenerator",
    "HuggingFaceGenerator",
    "OfflineGenerator",
    "FallbackGenerator",
    "build_generator",
    "get_generator",
]
