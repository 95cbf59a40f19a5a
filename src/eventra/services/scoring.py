"""Scoring service - priority to score mapping and score bands"""
from typing import Optional

from src.eventra.models.lead import Lead, LeadPriority

PRIORITY_SCORES = {
    LeadPriority.HOT.value: 90,
    LeadPriority.WARM.value: 60,
    LeadPriority.COLD.value: 30,
}

SCORE_BAND_HOT = 80
SCORE_BAND_WARM = 50


def priority_to_score(priority: Optional[str]) -> int:
    if not priority:
        return 0
    return PRIORITY_SCORES.get(priority.lower(), 0)


def calculate_score_band(score: int) -> str:
    if score >= SCORE_BAND_HOT:
        return LeadPriority.HOT.value
    elif score >= SCORE_BAND_WARM:
        return LeadPriority.WARM.value
    return LeadPriority.COLD.value


def effective_lead_score(lead: Lead) -> int:
    """Stored score when present, otherwise the score implied by priority."""
    if lead.lead_score is not None:
        return lead.lead_score
    return priority_to_score(lead.priority)
