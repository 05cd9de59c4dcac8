import os
import sys
from decimal import Decimal

import pytest

# Add src to path for internal imports
src_path = os.path.join(os.path.dirname(os.path.dirname(os.path.abspath(__file__))), 'src')
if src_path not in sys.path:
    sys.path.insert(0, src_path)

from team_pricing.engine import (
    PricingEngine,
    Tier,
    SeatSelection,
    describe_team_pricing,
    format_currency,
)


@pytest.fixture(scope="module")
def engine():
    return PricingEngine()


def test_explanation_for_five_seats(engine):
    """3 basic + 2 advanced unlocks the 10% discount."""
    breakdown = engine.calculate_team_pricing([
        SeatSelection(Tier.BASIC, 3),
        SeatSelection(Tier.ADVANCED, 2),
    ])
    text = describe_team_pricing(breakdown)

    assert "5 seat" in text
    assert "10%" in text
    assert "Essentials" in text and "Professional" in text
    assert "final total" in text
    assert text == (
        "Your team has 5 seats: 3 × Essentials ($39.99/user), 2 × Professional ($79.99/user). "
        "The list price before discount is $279.95. "
        "A team discount of 10% saves you $28.00 per month. "
        "Your final total is $251.95 per month."
    )


def test_no_discount_sentence(engine):
    breakdown = engine.calculate_team_pricing([
        SeatSelection(Tier.BASIC, 2),
        SeatSelection(Tier.ADVANCED, 1),
        SeatSelection(Tier.ELITE, 1),
    ])
    text = describe_team_pricing(breakdown)

    assert "No team discount applies yet (add more seats to unlock discounts)." in text
    assert "saves you" not in text
    assert "$289.96" in text


def test_zero_count_tiers_omitted(engine):
    breakdown = engine.calculate_team_pricing([SeatSelection(Tier.ELITE, 20)])
    text = describe_team_pricing(breakdown)

    assert "Executive" in text
    assert "Essentials" not in text
    assert "Professional" not in text
    assert "25%" in text
    assert "$2,599.80" in text


def test_empty_team(engine):
    text = describe_team_pricing(engine.calculate_team_pricing([]))
    assert text.startswith("Your team has 0 seats.")
    assert "final total is $0.00" in text


def test_single_seat_wording(engine):
    text = describe_team_pricing(engine.calculate_team_pricing([SeatSelection(Tier.BASIC, 1)]))
    assert "Your team has 1 seat:" in text


def test_yearly_period(engine):
    breakdown = engine.calculate_team_pricing([SeatSelection(Tier.BASIC, 5)], "yearly")
    text = describe_team_pricing(breakdown)
    assert "per year" in text
    assert "($439.89/user)" in text
    assert "final total" in text


def test_deterministic(engine):
    breakdown = engine.calculate_team_pricing([SeatSelection(Tier.ADVANCED, 12)])
    assert describe_team_pricing(breakdown) == describe_team_pricing(breakdown)


@pytest.mark.parametrize("amount,expected", [
    (Decimal("0"), "$0.00"),
    (Decimal("39.99"), "$39.99"),
    (Decimal("1429.89"), "$1,429.89"),
    (Decimal("27.995"), "$28.00"),
    (Decimal("0.005"), "$0.01"),
])
def test_format_currency(amount, expected):
    assert format_currency(amount) == expected
