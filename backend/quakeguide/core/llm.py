"""Generation collaborators for the QuakeGuide pipeline.

Every backend implements the same ``GenerationCollaborator`` protocol:
an async ``generate(request)`` returning a ``GenerationResponse`` or raising
``GenerationError``. Which one is used is decided once, at composition time,
by ``build_generator``.

Backends:
- OpenAIGenerator: any OpenAI-compatible chat endpoint (OpenAI, OpenRouter,
  the Hugging Face router) through the ``openai`` SDK
- HuggingFaceGenerator: raw text-generation inference over ``httpx``
- OfflineGenerator: no model, answers with the top retrieved knowledge text
- FallbackGenerator: tries a list of backends in order
"""

import asyncio
import logging
import re
from dataclasses import dataclass
from typing import Protocol

import httpx
from openai import APIConnectionError, APIStatusError, APITimeoutError, AsyncOpenAI, OpenAIError
from pydantic import BaseModel, Field

from quakeguide.schemas.messages import Message, Role

from .config import Settings, get_settings

logger = logging.getLogger(__name__)

_STATUS_MESSAGES = {
    401: "Invalid API key, check the generation credentials",
    404: "Model not available, check the model name",
    429: "Too many requests, try again later",
    503: "Service temporarily unavailable, the model is loading",
    504: "Request timed out, try again later",
}


class GenerationError(Exception):
    """The generation collaborator did not produce an answer."""


@dataclass
class TokenUsage:
    """Minimal token usage tracking."""

    input: int = 0
    output: int = 0
    model: str = ""

    def __add__(self, other: "TokenUsage") -> "TokenUsage":
        return TokenUsage(
            input=self.input + other.input,
            output=self.output + other.output,
            model=other.model or self.model,
        )


class GenerationRequest(BaseModel):
    """Input for a generation call."""

    model: str | None = Field(default=None, description="Overrides the backend default")
    messages: list[Message] = Field(..., description="Role-tagged messages, oldest first")
    temperature: float | None = None
    max_tokens: int | None = None
    stop: list[str] | None = None
    documents: list[str] = Field(
        default_factory=list, description="Retrieved knowledge texts, best first"
    )


class GenerationResponse(BaseModel):
    """Output of a generation call."""

    text: str
    model: str = ""
    usage: TokenUsage | None = None


class GenerationCollaborator(Protocol):
    """Anything that turns a list of messages into text."""

    async def generate(self, request: GenerationRequest) -> GenerationResponse: ...


def describe_status(status_code: int) -> str:
    """Readable message for an HTTP failure from a model endpoint."""
    return _STATUS_MESSAGES.get(status_code, f"HTTP {status_code}")


class OpenAIGenerator:
    """OpenAI-compatible chat completion backend with token tracking."""

    def __init__(
        self,
        api_key: str | None = None,
        model: str | None = None,
        base_url: str | None = None,
        temperature: float | None = None,
        max_tokens: int | None = None,
    ):
        settings = get_settings()
        self.api_key = api_key or settings.openai_api_key
        self.model = model or settings.openai_chat_model
        self.base_url = base_url or settings.openai_base_url
        self.temperature = temperature if temperature is not None else settings.generation_temperature
        self.max_tokens = max_tokens or settings.generation_max_tokens
        self._client: AsyncOpenAI | None = None
        self._total_usage: TokenUsage = TokenUsage()

    @property
    def client(self) -> AsyncOpenAI:
        """Lazy-load OpenAI client."""
        if self._client is None:
            self._client = AsyncOpenAI(api_key=self.api_key, base_url=self.base_url)
        return self._client

    @property
    def total_usage(self) -> TokenUsage:
        """Cumulative token usage across all API calls."""
        return self._total_usage

    async def generate(self, request: GenerationRequest) -> GenerationResponse:
        params: dict = {
            "model": request.model or self.model,
            "messages": [m.model_dump(mode="json") for m in request.messages],
            "temperature": request.temperature if request.temperature is not None else self.temperature,
            "max_tokens": request.max_tokens or self.max_tokens,
        }
        if request.stop:
            params["stop"] = request.stop

        try:
            response = await self.client.chat.completions.create(**params)
        except APIStatusError as e:
            raise GenerationError(describe_status(e.status_code)) from e
        except APITimeoutError as e:
            raise GenerationError(describe_status(504)) from e
        except APIConnectionError as e:
            raise GenerationError(f"Could not reach the model endpoint: {e}") from e
        except OpenAIError as e:
            raise GenerationError(f"Online API call failed: {e}") from e

        if not response.choices:
            raise GenerationError("Model returned no choices")
        content = (response.choices[0].message.content or "").strip()
        if not content:
            raise GenerationError("Model returned an empty response")

        usage = None
        if getattr(response, "usage", None):
            usage = TokenUsage(
                input=response.usage.prompt_tokens,
                output=response.usage.completion_tokens,
                model=getattr(response, "model", None) or params["model"],
            )
            self._total_usage = self._total_usage + usage

        return GenerationResponse(text=content, model=params["model"], usage=usage)


class HuggingFaceGenerator:
    """Hugging Face text-generation inference backend.

    The endpoint takes a single prompt string, so the conversation is
    flattened into a ``role: content`` transcript ending with ``assistant:``
    and the reply is whatever follows the last ``assistant:`` marker.
    """

    def __init__(
        self,
        token: str | None = None,
        model: str | None = None,
        base_url: str | None = None,
        temperature: float | None = None,
        max_tokens: int | None = None,
        timeout: float | None = None,
    ):
        settings = get_settings()
        self.token = token or settings.huggingface_token
        self.model = model or settings.huggingface_model
        self.base_url = (base_url or settings.huggingface_base_url).rstrip("/")
        self.temperature = temperature if temperature is not None else settings.generation_temperature
        self.max_tokens = max_tokens or settings.generation_max_tokens
        self.timeout = timeout or settings.generation_timeout_seconds

    def _get_headers(self) -> dict[str, str]:
        """Build request headers with optional token."""
        headers = {"Content-Type": "application/json"}
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        return headers

    @staticmethod
    def build_prompt(messages: list[Message]) -> str:
        """Flatten messages into a transcript the model can continue."""
        conversation = "\n".join(f"{m.role.value}: {m.content}" for m in messages)
        return f"{conversation}\nassistant:"

    @staticmethod
    def extract_reply(generated_text: str) -> str:
        """Return the text after the last ``assistant:`` marker."""
        parts = re.split(r"assistant:\s*", generated_text)
        return parts[-1].strip()

    async def generate(self, request: GenerationRequest) -> GenerationResponse:
        model = request.model or self.model
        payload = {
            "inputs": self.build_prompt(request.messages),
            "parameters": {
                "max_new_tokens": request.max_tokens or self.max_tokens,
                "temperature": request.temperature if request.temperature is not None else self.temperature,
                "do_sample": True,
            },
        }
        if request.stop:
            payload["parameters"]["stop"] = request.stop

        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                response = await client.post(
                    f"{self.base_url}/{model}",
                    headers=self._get_headers(),
                    json=payload,
                )
                response.raise_for_status()
                data = response.json()
        except httpx.HTTPStatusError as e:
            raise GenerationError(describe_status(e.response.status_code)) from e
        except httpx.TimeoutException as e:
            raise GenerationError(describe_status(504)) from e
        except httpx.HTTPError as e:
            raise GenerationError(f"Online API call failed: {e}") from e
        except ValueError as e:
            raise GenerationError("Model endpoint returned invalid JSON") from e

        if isinstance(data, list) and data:
            generated = data[0].get("generated_text", "")
        elif isinstance(data, str):
            generated = data
        else:
            generated = ""

        reply = self.extract_reply(generated)
        if not reply:
            raise GenerationError("Model returned an empty response")
        return GenerationResponse(text=reply, model=model)


class OfflineGenerator:
    """Answers from the knowledge base alone, without a language model."""

    model = "offline-knowledge"

    async def generate(self, request: GenerationRequest) -> GenerationResponse:
        if not request.documents:
            raise GenerationError("No local model available to answer this question")
        return GenerationResponse(text=request.documents[0], model=self.model)


class FallbackGenerator:
    """Tries each backend in order until one produces an answer."""

    def __init__(self, generators: list[GenerationCollaborator]):
        if not generators:
            raise ValueError("FallbackGenerator needs at least one backend")
        self.generators = generators

    async def generate(self, request: GenerationRequest) -> GenerationResponse:
        errors: list[str] = []
        for generator in self.generators:
            try:
                return await generator.generate(request)
            except GenerationError as e:
                logger.warning("%s failed, trying next backend: %s", type(generator).__name__, e)
                errors.append(str(e))
        raise GenerationError("; ".join(errors))


async def generate_with_timeout(
    generator: GenerationCollaborator,
    request: GenerationRequest,
    timeout: float,
) -> GenerationResponse:
    """Run a generation call, turning a timeout into GenerationError.

    Cancellation of the calling task propagates unchanged.
    """
    try:
        return await asyncio.wait_for(generator.generate(request), timeout=timeout)
    except TimeoutError as e:
        raise GenerationError(f"Generation timed out after {timeout:g}s") from e


def _openai_from(settings: Settings) -> OpenAIGenerator:
    return OpenAIGenerator(
        api_key=settings.openai_api_key,
        model=settings.openai_chat_model,
        base_url=settings.openai_base_url,
        temperature=settings.generation_temperature,
        max_tokens=settings.generation_max_tokens,
    )


def _huggingface_from(settings: Settings) -> HuggingFaceGenerator:
    return HuggingFaceGenerator(
        token=settings.huggingface_token,
        model=settings.huggingface_model,
        base_url=settings.huggingface_base_url,
        temperature=settings.generation_temperature,
        max_tokens=settings.generation_max_tokens,
        timeout=settings.generation_timeout_seconds,
    )


def build_generator(settings: Settings | None = None) -> GenerationCollaborator:
    """Select the generation backend from settings."""
    settings = settings or get_settings()
    provider = settings.generation_provider.lower()

    if provider == "openai":
        return _openai_from(settings)
    if provider == "huggingface":
        return _huggingface_from(settings)
    if provider == "offline":
        return OfflineGenerator()
    if provider != "auto":
        raise ValueError(f"Unknown generation provider: {settings.generation_provider}")

    backends: list[GenerationCollaborator] = []
    if settings.openai_api_key:
        backends.append(_openai_from(settings))
    if settings.huggingface_token:
        backends.append(_huggingface_from(settings))
    if not backends:
        logger.info("No generation credentials configured, answering offline")
        return OfflineGenerator()
    if len(backends) == 1:
        return backends[0]
    return FallbackGenerator(backends)


_generator_instance: GenerationCollaborator | None = None


def get_generator() -> GenerationCollaborator:
    """Get or create the process-wide generation backend."""
    global _generator_instance
    if _generator_instance is None:
        _generator_instance = build_generator()
    return _generator_instance


def to_messages(history: list[Message], prompt: str, max_history: int) -> list[Message]:
    """Recent user/assistant history followed by the prompt as a user message."""
    recent = [m for m in history if m.role in (Role.USER, Role.ASSISTANT)]
    if max_history > 0:
        recent = recent[-max_history:]
    else:
        recent = []
    return [*recent, Message(role=Role.USER, content=prompt)]
