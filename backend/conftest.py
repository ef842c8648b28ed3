"""Shared fixtures: a small knowledge base and a stub generation backend."""

import pytest

from quakeguide.core.config import Settings
from quakeguide.core.llm import GenerationRequest, GenerationResponse, TokenUsage
from quakeguide.rag.agent.nodes import RagComponents
from quakeguide.rag.core.knowledge_store import KnowledgeStore
from quakeguide.rag.models.knowledge import KnowledgeBase, KnowledgeItem


# ── Knowledge base ──────────────────────────────────────────────────


DROP_COVER = KnowledgeItem(
    id="during-001",
    category="during",
    title="Drop, Cover, and Hold On",
    keywords=("earthquake", "shaking", "地震"),
    content=(
        "DROP to your hands and knees, take COVER under a sturdy table "
        "and HOLD ON until the shaking stops."
    ),
    priority=1,
)

BLEEDING = KnowledgeItem(
    id="medical-001",
    category="medical",
    title="Controlling Severe Bleeding",
    keywords=("bleeding", "blood", "wound"),
    content=(
        "Apply firm direct pressure to the wound with a clean cloth. "
        "Call emergency services for severe bleeding."
    ),
    priority=1,
)

WATER = KnowledgeItem(
    id="water-001",
    category="water",
    title="Finding Safe Drinking Water",
    keywords=("water", "drink", "水"),
    content=(
        "The water heater tank and the toilet tank hold safe drinking water "
        "after an earthquake."
    ),
    priority=2,
)

TRAPPED = KnowledgeItem(
    id="trapped-001",
    category="trapped",
    title="If You Are Trapped Under Debris",
    keywords=("trapped", "stuck"),
    content="Stay calm, cover your mouth with cloth and tap on a pipe so rescuers can locate you.",
    priority=2,
)

GAS = KnowledgeItem(
    id="after-001",
    category="after",
    title="Checking for Gas Leaks",
    keywords=("gas leak", "gas"),
    content="If you smell gas, open a window, get everyone out and turn off the main valve.",
    priority=1,
)

SAMPLE_ITEMS = (DROP_COVER, BLEEDING, WATER, TRAPPED, GAS)


@pytest.fixture
def knowledge_base() -> KnowledgeBase:
    return KnowledgeBase(
        knowledge=SAMPLE_ITEMS,
        categories={
            "during": "During the Earthquake",
            "medical": "First Aid",
            "water": "Water",
            "trapped": "Trapped",
            "after": "After the Earthquake",
        },
        sources=("Ready.gov - Earthquakes",),
    )


@pytest.fixture
def store(knowledge_base) -> KnowledgeStore:
    return KnowledgeStore(knowledge_base=knowledge_base)


# ── Generation ──────────────────────────────────────────────────────


class StubGenerator:
    """Generation backend returning a fixed text or raising a fixed error."""

    def __init__(self, text: str = "", error: Exception | None = None):
        self.text = text
        self.error = error
        self.requests: list[GenerationRequest] = []

    async def generate(self, request: GenerationRequest) -> GenerationResponse:
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        return GenerationResponse(
            text=self.text,
            model="stub",
            usage=TokenUsage(input=10, output=5, model="stub"),
        )


@pytest.fixture
def test_settings() -> Settings:
    return Settings(_env_file=None)


@pytest.fixture
def stub_generator() -> StubGenerator:
    return StubGenerator(text=DROP_COVER.content)


@pytest.fixture
def components(store, stub_generator, test_settings) -> RagComponents:
    return RagComponents.build(store=store, generator=stub_generator, settings=test_settings)


@pytest.fixture
def make_generator():
    """Factory for StubGenerator instances."""
    return StubGenerator
