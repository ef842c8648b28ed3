"""Application configuration using Pydantic Settings."""

from functools import lru_cache
from pathlib import Path

from pydantic_settings import BaseSettings

# .env lives at the project root (one level above backend/)
_ENV_FILE = str(Path(__file__).resolve().parents[3] / ".env")

# Bundled dataset shipped as package data
DEFAULT_KNOWLEDGE_PATH = Path(__file__).resolve().parents[1] / "data" / "earthquake_knowledge.json"


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    app_name: str = "QuakeGuide Backend"
    debug: bool = False
    cors_origins: str = "http://localhost:8081,http://localhost:19006"

    # Knowledge base
    knowledge_path: str = ""
    max_results: int = 3
    debug_max_results: int = 5

    # Generation: openai | huggingface | offline | auto
    generation_provider: str = "auto"

    # OpenAI-compatible endpoint (OpenAI, OpenRouter, Hugging Face router, ...)
    openai_api_key: str = ""
    openai_base_url: str | None = None
    openai_chat_model: str = "gpt-3.5-turbo"

    # Hugging Face text-generation inference
    huggingface_token: str = ""
    huggingface_base_url: str = "https://api-inference.huggingface.co/models"
    huggingface_model: str = "google/gemma-3n-E2B-it"

    generation_temperature: float = 0.3
    generation_max_tokens: int = 300
    generation_timeout_seconds: float = 60.0

    # Six user/assistant turns
    history_max_messages: int = 12

    # Response validation
    # confidence starts at 1.0 and each failed check subtracts its penalty
    grounding_threshold: float = 0.3
    min_grounded_token_length: int = 4
    hedging_penalty: float = 0.2
    grounding_penalty: float = 0.3
    medical_penalty: float = 0.4
    redirect_penalty: float = 0.5
    fantasy_penalty: float = 0.8
    topic_penalty: float = 0.4
    valid_threshold: float = 0.5
    block_threshold: float = 0.3

    model_config = {"env_file": _ENV_FILE, "env_file_encoding": "utf-8", "extra": "ignore"}

    @property
    def resolved_knowledge_path(self) -> Path:
        """Dataset location, falling back to the bundled file."""
        if self.knowledge_path:
            return Path(self.knowledge_path)
        return DEFAULT_KNOWLEDGE_PATH


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


# Convenience access
settings = get_settings()
