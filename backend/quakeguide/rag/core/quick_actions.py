"""Quick action suggestions for emergency scenarios."""

from typing import NamedTuple

from .matching import matches_keywords


class Scenario(NamedTuple):
    """An emergency scenario: trigger keywords and the actions it suggests."""

    name: str
    keywords: tuple[str, ...]
    actions: tuple[str, ...]


# Presentation order: earthquake, trapped, bleeding, water, aftershock
SCENARIOS: tuple[Scenario, ...] = (
    Scenario(
        name="earthquake",
        keywords=("earthquake", "shaking", "tremor", "quake", "地震", "震动"),
        actions=(
            "DROP, COVER, HOLD ON",
            "Stay where you are until shaking stops",
        ),
    ),
    Scenario(
        name="trapped",
        keywords=("trapped", "stuck", "buried", "pinned", "crushed", "被困", "压住"),
        actions=(
            "Stay calm, conserve energy",
            "Tap on pipes to signal rescuers",
            "Cover mouth to avoid dust",
        ),
    ),
    Scenario(
        name="bleeding",
        keywords=("bleeding", "blood", "cut", "wound", "injury", "流血", "出血", "受伤"),
        actions=(
            "Apply direct pressure with clean cloth",
            "Elevate wound above heart if possible",
            "Do NOT remove embedded objects",
        ),
    ),
    Scenario(
        name="water",
        keywords=("water", "thirsty", "drink", "dehydrated", "水", "口渴", "脱水"),
        actions=(
            "Check water heater tank (turn off power first)",
            "Toilet tank water is usually safe",
            "Ice cubes are a good source",
        ),
    ),
    Scenario(
        name="aftershock",
        keywords=("aftershock", "more shaking", "another quake", "余震"),
        actions=(
            "DROP, COVER, HOLD ON again",
            "Stay away from damaged buildings",
        ),
    ),
)


class QuickActionExtractor:
    """Concatenates the actions of every scenario a query triggers."""

    def __init__(self, scenarios: tuple[Scenario, ...] = SCENARIOS):
        self.scenarios = scenarios

    def matched_scenarios(self, query: str) -> list[str]:
        return [s.name for s in self.scenarios if matches_keywords(query, s.keywords)]

    def extract(self, query: str) -> list[str]:
        actions: list[str] = []
        for scenario in self.scenarios:
            if matches_keywords(query, scenario.keywords):
                actions.extend(scenario.actions)
        return actions
