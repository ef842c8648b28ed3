"""Core retrieval, classification, prompt and validation components."""

from .classifier import PriorityClassifier
from .knowledge_store import KnowledgeDatasetError, KnowledgeStore, get_knowledge_store
from .prompt_composer import PromptComposer
from .quick_actions import QuickActionExtractor
from .retriever import Retriever
from .validator import ResponseValidator, ValidatorConfig

__all__ = [
    "KnowledgeStore",
    "KnowledgeDatasetError",
    "get_knowledge_store",
    "Retriever",
    "PriorityClassifier",
    "QuickActionExtractor",
    "PromptComposer",
    "ResponseValidator",
    "ValidatorConfig",
]
