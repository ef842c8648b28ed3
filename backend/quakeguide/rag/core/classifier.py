"""Emergency priority classification of user queries."""

from quakeguide.rag.models.rag import EmergencyPriority

from .matching import matches_keywords

# Checked in this order; the first family that matches wins
PRIORITY_KEYWORDS: dict[EmergencyPriority, tuple[str, ...]] = {
    EmergencyPriority.CRITICAL: (
        "bleeding", "blood", "unconscious", "can't breathe", "not breathing",
        "chest pain", "heart attack", "severe injury", "dying",
        "流血", "出血", "昏迷", "呼吸困难", "心脏病",
    ),
    EmergencyPriority.URGENT: (
        "earthquake", "shaking", "tremor", "building collapse", "gas leak",
        "fire", "smoke", "explosion", "tsunami warning",
        "地震", "震动", "建筑倒塌", "煤气泄漏", "火灾", "海啸",
    ),
    EmergencyPriority.IMPORTANT: (
        "trapped", "stuck", "water", "aftershock", "evacuation",
        "shelter", "food", "injury", "help",
        "被困", "余震", "撤离", "避难", "食物", "受伤",
    ),
}


class PriorityClassifier:
    """Maps a query to critical / urgent / important / normal."""

    def __init__(self, keyword_families: dict[EmergencyPriority, tuple[str, ...]] | None = None):
        self.keyword_families = keyword_families or PRIORITY_KEYWORDS

    def classify(self, query: str) -> EmergencyPriority:
        for priority, keywords in self.keyword_families.items():
            if matches_keywords(query, keywords):
                return priority
        return EmergencyPriority.NORMAL
