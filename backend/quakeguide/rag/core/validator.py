"""Post-hoc validation of generated answers.

Confidence starts at 1.0 and each failed check subtracts its penalty:

1. Hedging language (per matching phrase)
2. Lexical grounding against the knowledge used
3. Medical queries must defer to emergency/professional help
4. Off-topic queries with no knowledge must be redirected
5. Fantasy or fabricated content
6. Earthquake survival vocabulary when knowledge was used

The answer is valid when confidence stays above ``valid_threshold``. Below
``block_threshold`` the original text is kept in ``blocked_content`` for
audit logging only.
"""

from collections.abc import Sequence

from pydantic import BaseModel, Field

from quakeguide.core.config import Settings, get_settings
from quakeguide.rag.models.knowledge import KnowledgeItem
from quakeguide.rag.models.rag import ValidationResult

from .matching import contains_any, tokenize
from .prompts import SAFE_RESPONSE_GENERIC, SAFE_RESPONSE_MEDICAL, SAFE_RESPONSE_REDIRECT

HEDGING_PHRASES = (
    "i think", "i believe", "probably", "maybe", "might be",
    "in my opinion", "generally speaking", "usually",
    "我认为", "我觉得", "可能", "也许", "大概", "一般来说",
)

MEDICAL_KEYWORDS = ("bleeding", "injury", "pain", "unconscious", "broken")

DEFERRAL_TERMS = ("emergency", "professional")

EARTHQUAKE_KEYWORDS = ("earthquake", "shaking", "aftershock", "tremor", "地震")

UNREALISTIC_KEYWORDS = (
    "fly", "rocket", "magic", "teleport", "superhero", "invisible",
    "time travel", "alien", "dragon", "unicorn", "flying carpet",
    "飞行", "魔法", "超级英雄", "时间旅行", "外星人", "龙",
)

SURVIVAL_TOPICS = ("drop", "cover", "hold", "water", "bleeding", "trapped", "aftershock")

WARNING_DEVIATES = "Response content significantly deviates from knowledge base"
WARNING_MEDICAL = "Medical query should recommend professional help"
WARNING_REDIRECT = "Non-earthquake query should be redirected"
WARNING_FANTASY = "Contains unrealistic or fabricated content"
WARNING_OFF_TOPIC = "Response does not contain earthquake survival topics"


class ValidatorConfig(BaseModel):
    """Thresholds and penalty weights for ResponseValidator."""

    grounding_threshold: float = Field(default=0.3, ge=0.0, le=1.0)
    min_grounded_token_length: int = Field(default=4, ge=1)
    hedging_penalty: float = Field(default=0.2, ge=0.0)
    grounding_penalty: float = Field(default=0.3, ge=0.0)
    medical_penalty: float = Field(default=0.4, ge=0.0)
    redirect_penalty: float = Field(default=0.5, ge=0.0)
    fantasy_penalty: float = Field(default=0.8, ge=0.0)
    topic_penalty: float = Field(default=0.4, ge=0.0)
    valid_threshold: float = 0.5
    block_threshold: float = 0.3

    @classmethod
    def from_settings(cls, settings: Settings | None = None) -> "ValidatorConfig":
        settings = settings or get_settings()
        return cls(**{name: getattr(settings, name) for name in cls.model_fields})


def grounding_ratio(response: str, knowledge: Sequence[KnowledgeItem], min_token_length: int = 4) -> float:
    """Fraction of response tokens that are long enough and appear in the knowledge text.

    The denominator counts every response token, short ones included.
    """
    response_tokens = tokenize(response)
    if not response_tokens:
        return 0.0
    knowledge_tokens = set(tokenize(" ".join(item.content for item in knowledge)))
    grounded = sum(
        1 for token in response_tokens
        if len(token) >= min_token_length and token in knowledge_tokens
    )
    return grounded / len(response_tokens)


class ResponseValidator:
    """Heuristic checks on a generated answer, plus the safe fallback."""

    def __init__(self, config: ValidatorConfig | None = None):
        self.config = config or ValidatorConfig.from_settings()

    def validate(
        self,
        query: str,
        response: str,
        used_knowledge: Sequence[KnowledgeItem],
    ) -> ValidationResult:
        cfg = self.config
        warnings: list[str] = []
        confidence = 1.0
        response_lower = response.lower()

        for phrase in HEDGING_PHRASES:
            if phrase in response_lower:
                warnings.append(f'Contains uncertain language: "{phrase}"')
                confidence -= cfg.hedging_penalty

        if used_knowledge:
            ratio = grounding_ratio(response, used_knowledge, cfg.min_grounded_token_length)
            if ratio < cfg.grounding_threshold:
                warnings.append(WARNING_DEVIATES)
                confidence -= cfg.grounding_penalty

        if contains_any(query, MEDICAL_KEYWORDS) and not contains_any(response, DEFERRAL_TERMS):
            warnings.append(WARNING_MEDICAL)
            confidence -= cfg.medical_penalty

        if not used_knowledge and not contains_any(query, EARTHQUAKE_KEYWORDS):
            warnings.append(WARNING_REDIRECT)
            confidence -= cfg.redirect_penalty

        if contains_any(response, UNREALISTIC_KEYWORDS):
            warnings.append(WARNING_FANTASY)
            confidence -= cfg.fantasy_penalty

        if used_knowledge and not contains_any(response, SURVIVAL_TOPICS):
            warnings.append(WARNING_OFF_TOPIC)
            confidence -= cfg.topic_penalty

        confidence = max(0.0, min(1.0, confidence))
        return ValidationResult(
            is_valid=confidence > cfg.valid_threshold,
            confidence=confidence,
            warnings=warnings,
            blocked_content=response if confidence < cfg.block_threshold else None,
        )

    def get_safe_response(self, query: str, validation: ValidationResult) -> str:
        """Canned fallback chosen by the most important warning that fired."""
        lowered = [w.lower() for w in validation.warnings]
        if any("medical" in w for w in lowered):
            return SAFE_RESPONSE_MEDICAL
        if any("redirected" in w or "non-earthquake" in w for w in lowered):
            return SAFE_RESPONSE_REDIRECT
        return SAFE_RESPONSE_GENERIC
