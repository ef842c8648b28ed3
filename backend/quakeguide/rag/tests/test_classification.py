"""Tests for PriorityClassifier and QuickActionExtractor."""

import pytest

from quakeguide.rag.core.classifier import PRIORITY_KEYWORDS, PriorityClassifier
from quakeguide.rag.core.quick_actions import SCENARIOS, QuickActionExtractor
from quakeguide.rag.models.rag import EmergencyPriority


def _actions(name: str) -> list[str]:
    return next(list(s.actions) for s in SCENARIOS if s.name == name)


# ── PriorityClassifier ──────────────────────────────────────────────


class TestPriorityClassifier:
    @pytest.mark.parametrize(
        "query,expected",
        [
            ("I'm bleeding and need help", EmergencyPriority.CRITICAL),
            ("my friend is unconscious", EmergencyPriority.CRITICAL),
            ("he can't breathe", EmergencyPriority.CRITICAL),
            ("the earthquake just started", EmergencyPriority.URGENT),
            ("I smell a gas leak", EmergencyPriority.URGENT),
            ("建筑倒塌了", EmergencyPriority.URGENT),
            ("I'm trapped in my room", EmergencyPriority.IMPORTANT),
            ("where can I find water", EmergencyPriority.IMPORTANT),
            ("what's the weather today?", EmergencyPriority.NORMAL),
            ("", EmergencyPriority.NORMAL),
        ],
    )
    def test_classify(self, query, expected):
        assert PriorityClassifier().classify(query) == expected

    def test_critical_beats_urgent(self):
        assert PriorityClassifier().classify("bleeding after the earthquake") == EmergencyPriority.CRITICAL

    def test_urgent_beats_important(self):
        assert PriorityClassifier().classify("trapped after the earthquake") == EmergencyPriority.URGENT

    def test_case_insensitive(self):
        assert PriorityClassifier().classify("BLEEDING") == EmergencyPriority.CRITICAL

    def test_families_checked_in_severity_order(self):
        assert list(PRIORITY_KEYWORDS) == [
            EmergencyPriority.CRITICAL,
            EmergencyPriority.URGENT,
            EmergencyPriority.IMPORTANT,
        ]

    def test_custom_families(self):
        classifier = PriorityClassifier({EmergencyPriority.URGENT: ("volcano",)})
        assert classifier.classify("a volcano erupted") == EmergencyPriority.URGENT
        assert classifier.classify("bleeding") == EmergencyPriority.NORMAL


# ── QuickActionExtractor ────────────────────────────────────────────


class TestQuickActionExtractor:
    def test_bleeding_scenario(self):
        actions = QuickActionExtractor().extract("I'm bleeding and need help")
        assert "Apply direct pressure with clean cloth" in actions

    def test_no_scenario(self):
        assert QuickActionExtractor().extract("what's the weather today?") == []

    def test_trapped_then_bleeding(self):
        actions = QuickActionExtractor().extract("I'm bleeding and trapped")
        assert actions == _actions("trapped") + _actions("bleeding")

    def test_fixed_scenario_order(self):
        extractor = QuickActionExtractor()
        query = "aftershock, I need water, earthquake"
        assert extractor.matched_scenarios(query) == ["earthquake", "water", "aftershock"]
        assert extractor.extract(query) == (
            _actions("earthquake") + _actions("water") + _actions("aftershock")
        )

    def test_multi_word_keyword(self):
        assert QuickActionExtractor().matched_scenarios("there was more shaking") == [
            "earthquake",
            "aftershock",
        ]

    def test_cjk_keyword(self):
        assert QuickActionExtractor().matched_scenarios("余震") == ["aftershock"]

    def test_scenario_matches_once(self):
        actions = QuickActionExtractor().extract("bleeding blood wound")
        assert actions == _actions("bleeding")

    def test_returns_new_list(self):
        extractor = QuickActionExtractor()
        extractor.extract("water").append("mutated")
        assert extractor.extract("water") == _actions("water")
