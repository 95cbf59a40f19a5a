"""Tests for priority and score band mapping"""
from src.eventra.models.lead import Lead
from src.eventra.services.scoring import priority_to_score, calculate_score_band, effective_lead_score


def test_priority_to_score():
    assert priority_to_score("hot") == 90
    assert priority_to_score("WARM") == 60
    assert priority_to_score("cold") == 30
    assert priority_to_score("lukewarm") == 0
    assert priority_to_score(None) == 0


def test_score_band_boundaries():
    assert calculate_score_band(80) == "hot"
    assert calculate_score_band(79) == "warm"
    assert calculate_score_band(50) == "warm"
    assert calculate_score_band(49) == "cold"


def test_effective_score_prefers_explicit_score():
    assert effective_lead_score(Lead(priority="hot", lead_score=42)) == 42
    assert effective_lead_score(Lead(priority="hot")) == 90
