import os
import sys
from decimal import Decimal

import pytest

# Add src to path for internal imports
src_path = os.path.join(os.path.dirname(os.path.dirname(os.path.abspath(__file__))), 'src')
if src_path not in sys.path:
    sys.path.insert(0, src_path)

from team_pricing.engine import Tier, SeatSelection, BillingInterval
from team_pricing.services.recommendation_service import (
    Questionnaire,
    apply_budget_sensitivity,
    move_seats,
    recommend_plan,
    suggest_base_seats,
)


def as_counts(seats):
    return [(s.tier, s.count) for s in seats]


def test_solo_with_insights_gets_executive():
    rec = recommend_plan(Questionnaire(team_size=1, needs_insights=True))
    assert as_counts(rec.suggested_seats) == [(Tier.ELITE, 1)]
    assert rec.breakdown.final_total == rec.breakdown.list_subtotal
    assert "final total" in rec.explanation
    assert [o.label for o in rec.alt_options] == ["Cheaper Option"]


def test_small_team_without_needs_gets_basic():
    rec = recommend_plan(Questionnaire(team_size=2))
    assert as_counts(rec.suggested_seats) == [(Tier.BASIC, 2)]
    assert [o.label for o in rec.alt_options] == ["Higher-Performance Option"]
    premium = rec.alt_options[0]
    assert as_counts(premium.suggested_seats) == [(Tier.ELITE, 1), (Tier.ADVANCED, 1)]


def test_small_team_with_voice_gets_professional():
    seats, reasoning = suggest_base_seats(Questionnaire(team_size=2, needs_voice=True))
    assert as_counts(seats) == [(Tier.ADVANCED, 1)]
    assert "Professional" in reasoning


def test_medium_team_with_insights_mixes_tiers():
    seats, _ = suggest_base_seats(Questionnaire(team_size=6, needs_insights=True))
    assert as_counts(seats) == [(Tier.ELITE, 2), (Tier.ADVANCED, 4)]


def test_medium_team_with_analytics_volume_mixes_tiers():
    seats, _ = suggest_base_seats(Questionnaire(team_size=4, analytics_volume='high'))
    assert as_counts(seats) == [(Tier.ELITE, 2), (Tier.ADVANCED, 2)]


@pytest.mark.parametrize("answers", [
    {"needs_voice": True},
    {"call_volume": "medium"},
    {"media_volume": "high"},
])
def test_medium_team_voice_or_media_gets_professional(answers):
    seats, _ = suggest_base_seats(Questionnaire(team_size=7, **answers))
    assert as_counts(seats) == [(Tier.ADVANCED, 7)]


def test_medium_team_email_only_gets_basic():
    seats, _ = suggest_base_seats(Questionnaire(team_size=8, email_volume='high'))
    assert as_counts(seats) == [(Tier.BASIC, 8)]


def test_large_team_tiered_mix():
    rec = recommend_plan(Questionnaire(team_size=12))
    assert as_counts(rec.suggested_seats) == [(Tier.ELITE, 3), (Tier.ADVANCED, 6), (Tier.BASIC, 3)]
    assert rec.breakdown.total_seats == 12
    assert rec.breakdown.discount_percent == Decimal("0.20")


def test_high_budget_sensitivity_downgrades():
    q = Questionnaire(team_size=6, needs_insights=True, budget_sensitivity='high')
    seats, reasoning = apply_budget_sensitivity(q, *suggest_base_seats(q))
    assert as_counts(seats) == [(Tier.ELITE, 1), (Tier.ADVANCED, 4), (Tier.BASIC, 1)]
    assert "budget sensitivity" in reasoning
    assert "Essentials tier" in reasoning


def test_high_budget_large_team_keeps_team_size():
    rec = recommend_plan(Questionnaire(team_size=12, budget_sensitivity='high'))
    assert as_counts(rec.suggested_seats) == [(Tier.ELITE, 2), (Tier.ADVANCED, 5), (Tier.BASIC, 5)]
    assert rec.breakdown.total_seats == 12


def test_low_budget_with_insights_upgrades_one_seat():
    q = Questionnaire(team_size=4, needs_insights=True, budget_sensitivity='low')
    seats, _ = apply_budget_sensitivity(q, (SeatSelection(Tier.ADVANCED, 4),), "")
    assert as_counts(seats) == [(Tier.ADVANCED, 3), (Tier.ELITE, 1)]


def test_move_seats_returns_new_tuple():
    original = (SeatSelection(Tier.ADVANCED, 3),)
    moved = move_seats(original, Tier.ADVANCED, Tier.BASIC, 1)
    assert as_counts(moved) == [(Tier.ADVANCED, 2), (Tier.BASIC, 1)]
    assert as_counts(original) == [(Tier.ADVANCED, 3)]


def test_yearly_recommendation_prices_yearly():
    rec = recommend_plan(Questionnaire(team_size=1, billing_interval='yearly'))
    assert rec.breakdown.billing_interval is BillingInterval.YEARLY
    assert "per year" in rec.explanation


@pytest.mark.parametrize("kwargs", [
    {"team_size": 0},
    {"team_size": 3, "call_volume": "extreme"},
    {"team_size": 3, "media_volume": "huge"},
    {"team_size": 3, "billing_interval": "weekly"},
])
def test_invalid_questionnaire(kwargs):
    with pytest.raises(ValueError):
        Questionnaire(**kwargs)


def test_to_dict_shape():
    data = recommend_plan(Questionnaire(team_size=3, needs_voice=True)).to_dict()
    assert data["suggested_seats"] == [{"tier": "advanced", "count": 3}]
    assert "final total" in data["pricing"]["explanation"]
    assert data["pricing"]["breakdown"]["total_seats"] == 3
