"""
Golden test cases for team pricing regression testing.
These tests capture the expected breakdowns for known seat mixes and
should fail if pricing logic or list prices change unexpectedly.
"""
import csv
import os
import sys
from decimal import Decimal

import pytest

# Add src to path for internal imports
src_path = os.path.join(os.path.dirname(os.path.dirname(os.path.abspath(__file__))), 'src')
if src_path not in sys.path:
    sys.path.insert(0, src_path)

from team_pricing.engine import PricingEngine, Tier, SeatSelection


@pytest.fixture(scope="module")
def engine():
    """Create a single engine instance for all tests."""
    return PricingEngine()


def load_golden_cases():
    """Load golden test cases from CSV."""
    cases_path = os.path.join(os.path.dirname(__file__), 'golden_cases.csv')

    if not os.path.exists(cases_path):
        pytest.skip(f"Golden cases file not found: {cases_path}. Run generate_golden_cases.py first.")

    with open(cases_path, 'r', newline='', encoding='utf-8') as f:
        return list(csv.DictReader(f))


@pytest.mark.parametrize("case", load_golden_cases(), ids=lambda c: c['case'])
def test_golden_case(engine, case):
    """Test that a seat mix prices exactly as recorded."""
    seats = [SeatSelection(tier, int(case[tier.value])) for tier in Tier]
    result = engine.calculate_team_pricing(seats, case['billing_interval'])

    assert result.total_seats == int(case['expected_total_seats'])
    assert result.list_subtotal == Decimal(case['expected_list_subtotal']), \
        f"List subtotal mismatch: expected {case['expected_list_subtotal']}, got {result.list_subtotal}"
    assert result.discount_percent == Decimal(case['expected_discount_percent'])
    assert result.discount_amount == Decimal(case['expected_discount_amount']), \
        f"Discount mismatch: expected {case['expected_discount_amount']}, got {result.discount_amount}"
    assert result.final_total == Decimal(case['expected_final_total']), \
        f"Final total mismatch: expected {case['expected_final_total']}, got {result.final_total}"
