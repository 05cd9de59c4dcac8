import os
import sys
from decimal import Decimal

# Add src to path for internal imports
src_path = os.path.join(os.path.dirname(os.path.dirname(os.path.abspath(__file__))), 'src')
if src_path not in sys.path:
    sys.path.insert(0, src_path)

from team_pricing.engine import Tier, SeatSelection
from team_pricing.policy.guardrails import (
    GuardrailContext,
    FeatureUsage,
    derive_feature_usage,
    run_guardrail_checks,
)


def seats(**counts):
    return [SeatSelection(Tier(tier), count) for tier, count in counts.items()]


def check(current, proposed, active_member_count=None):
    usage = derive_feature_usage(current)
    return run_guardrail_checks(GuardrailContext(
        current_seats=current,
        proposed_seats=proposed,
        current_features=usage,
        usage_flags=usage,
        active_member_count=active_member_count,
    ))


def test_derive_feature_usage():
    assert derive_feature_usage(seats(basic=3)) == FeatureUsage()
    advanced = derive_feature_usage(seats(advanced=1))
    assert advanced.has_aloha and advanced.has_studio and not advanced.has_insight
    elite = derive_feature_usage(seats(elite=1))
    assert elite.has_insight and elite.uses_elite_only_features and elite.uses_advanced_only_features


def test_unchanged_configuration_is_allowed():
    result = check(seats(basic=2, advanced=1), seats(basic=2, advanced=1))
    assert result.allowed
    assert result.warnings == []
    assert result.price_change.difference == 0


def test_fewer_seats_than_members_blocks():
    result = check(seats(basic=5), seats(basic=3), active_member_count=4)
    assert not result.allowed
    assert "fewer seats (3) than active team members (4)" in result.blocking_issues[0]


def test_dropping_all_elite_blocks_and_warns():
    result = check(seats(elite=2, advanced=1), seats(advanced=3))
    assert any("Elite-only features" in issue for issue in result.blocking_issues)
    assert any("remove access to the Insight Agent" in w for w in result.warnings)
    assert result.features_lost.count("Insight Agent") == 1
    assert "Advanced analytics & business intelligence" in result.features_lost


def test_reducing_elite_warns():
    result = check(seats(elite=3), seats(elite=1, advanced=2))
    assert result.allowed
    assert any("from 3 to 1 Elite seat(s)" in w for w in result.warnings)
    assert result.features_lost == ["Insight Agent"]


def test_downgrade_to_basic_loses_aloha_and_studio():
    result = check(seats(advanced=2), seats(basic=2))
    assert any("Aloha" in w and "Studio" in w for w in result.warnings)
    assert any("Advanced-only features" in issue for issue in result.blocking_issues)
    assert "Aloha Agent" in result.features_lost
    assert "Studio Agent" in result.features_lost
    # 159.98 → 79.98
    assert any("decrease by 50%" in w for w in result.warnings)


def test_large_increase_warns():
    result = check(seats(basic=1), seats(basic=1, elite=1))
    assert result.allowed
    assert result.price_change.current == Decimal("39.99")
    assert result.price_change.proposed == Decimal("169.98")
    assert any("increase by 325%" in w and "$39.99" in w and "$169.98" in w for w in result.warnings)


def test_removing_all_seats_warns():
    result = check(seats(basic=2), [])
    assert any("removing all seats" in w for w in result.warnings)


def test_from_zero_has_no_percent_change():
    result = check([], seats(basic=1))
    assert result.price_change.percent_change == 0
    assert result.warnings == []


def test_to_dict():
    data = check(seats(basic=5), seats(basic=3), active_member_count=4).to_dict()
    assert data["allowed"] is False
    assert data["price_change"]["current"] == 179.95
    assert data["price_change"]["proposed"] == 119.97
