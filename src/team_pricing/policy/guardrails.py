"""
Subscription Guardrails - flags unsafe or confusing seat changes before they are applied.

Checks run in order and accumulate:
1. Fewer seats than active members (blocking)
2. Dropping all elite seats while using elite-only features (blocking)
3. Reducing elite seats while Insight is enabled (warning)
4. Dropping all advanced/elite seats while Aloha or Studio is enabled (warning)
5. Price increase over 30% (warning)
6. Price decrease over 30% (warning)
7. Removing every seat (warning)
8. Dropping all advanced/elite seats while using advanced-only features (blocking)
"""
from dataclasses import dataclass, field
from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable, Optional, Union

from ..engine.models import Tier, BillingInterval, SeatSelection
from ..engine.pricing_engine import PricingEngine, to_seat_selection
from ..engine.explainer import format_currency

LARGE_PRICE_CHANGE_PERCENT = Decimal("30")


@dataclass(frozen=True)
class FeatureUsage:
    """Agent features available to (and assumed used by) a seat mix."""
    has_insight: bool = False
    has_aloha: bool = False
    has_studio: bool = False
    uses_elite_only_features: bool = False
    uses_advanced_only_features: bool = False


@dataclass
class PriceChange:
    current: Decimal
    proposed: Decimal
    difference: Decimal
    percent_change: Decimal

    def to_dict(self) -> dict:
        return {
            "current": float(self.current),
            "proposed": float(self.proposed),
            "difference": float(self.difference),
            "percent_change": float(self.percent_change),
        }


@dataclass
class GuardrailContext:
    current_seats: list[SeatSelection]
    proposed_seats: list[SeatSelection]
    current_features: FeatureUsage
    usage_flags: FeatureUsage
    active_member_count: Optional[int] = None
    billing_interval: Union[BillingInterval, str] = BillingInterval.MONTHLY


@dataclass
class GuardrailCheckResult:
    """Outcome of a guardrail run."""
    price_change: PriceChange
    blocking_issues: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)
    features_lost: list[str] = field(default_factory=list)

    @property
    def allowed(self) -> bool:
        return not self.blocking_issues

    def add_feature_lost(self, feature: str):
        if feature not in self.features_lost:
            self.features_lost.append(feature)

    def to_dict(self) -> dict:
        return {
            "allowed": self.allowed,
            "blocking_issues": list(self.blocking_issues),
            "warnings": list(self.warnings),
            "price_change": self.price_change.to_dict(),
            "features_lost": list(self.features_lost),
        }


def _whole_percent(value: Decimal) -> int:
    return int(value.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def _count(seats: list[SeatSelection], tier: Tier) -> int:
    return sum(s.count for s in seats if s.tier is tier)


def derive_feature_usage(seats: Iterable) -> FeatureUsage:
    """
    Feature flags implied by a seat mix.

    Seat ownership stands in for usage: an elite seat implies Insight use,
    any advanced or elite seat implies Aloha/Studio use.
    """
    selections = [to_seat_selection(s) for s in seats]
    has_elite = _count(selections, Tier.ELITE) > 0
    has_advanced = _count(selections, Tier.ADVANCED) > 0
    return FeatureUsage(
        has_insight=has_elite,
        has_aloha=has_advanced or has_elite,
        has_studio=has_advanced or has_elite,
        uses_elite_only_features=has_elite,
        uses_advanced_only_features=has_advanced or has_elite,
    )


def run_guardrail_checks(
    context: GuardrailContext,
    engine: Optional[PricingEngine] = None,
) -> GuardrailCheckResult:
    """Run every guardrail check against a proposed seat change."""
    engine = engine or PricingEngine()
    current = [to_seat_selection(s) for s in context.current_seats]
    proposed = [to_seat_selection(s) for s in context.proposed_seats]
    features = context.current_features
    usage = context.usage_flags

    current_total = sum(s.count for s in current)
    proposed_total = sum(s.count for s in proposed)

    current_pricing = engine.calculate_team_pricing(current, context.billing_interval)
    proposed_pricing = engine.calculate_team_pricing(proposed, context.billing_interval)
    difference = proposed_pricing.final_total - current_pricing.final_total
    if current_pricing.final_total > 0:
        percent_change = difference / current_pricing.final_total * 100
    else:
        percent_change = Decimal("0")

    result = GuardrailCheckResult(price_change=PriceChange(
        current=current_pricing.final_total,
        proposed=proposed_pricing.final_total,
        difference=difference,
        percent_change=percent_change,
    ))
    period = current_pricing.billing_interval.period

    # 1. Seats cannot drop below active members
    if context.active_member_count is not None and proposed_total < context.active_member_count:
        result.blocking_issues.append(
            f"You cannot have fewer seats ({proposed_total}) than active team members "
            f"({context.active_member_count}). Remove members first before reducing seat count."
        )

    current_elite = _count(current, Tier.ELITE)
    proposed_elite = _count(proposed, Tier.ELITE)

    # 2. Elite-only features need at least one elite seat
    if current_elite > 0 and proposed_elite == 0 and usage.uses_elite_only_features:
        result.blocking_issues.append(
            "You're using Elite-only features (Insight Agent, advanced analytics). "
            "Remove or migrate these before downgrading all Elite seats."
        )
        result.add_feature_lost("Insight Agent")
        result.add_feature_lost("Advanced analytics & business intelligence")

    # 3. Fewer elite seats means less Insight access
    if current_elite > 0 and proposed_elite < current_elite and features.has_insight:
        if proposed_elite == 0:
            result.warnings.append(
                "Downgrading will remove access to the Insight Agent. "
                "You'll lose historical insights and briefs."
            )
        else:
            result.warnings.append(
                f"Downgrading from {current_elite} to {proposed_elite} Elite seat(s) "
                "will reduce Insight Agent access."
            )
        result.add_feature_lost("Insight Agent")

    current_advanced = _count(current, Tier.ADVANCED)
    proposed_advanced = _count(proposed, Tier.ADVANCED)
    # Elite seats include advanced features
    loses_advanced = (
        (current_advanced > 0 or current_elite > 0)
        and proposed_advanced == 0
        and proposed_elite == 0
    )

    # 4. Aloha/Studio need an advanced or elite seat
    if loses_advanced and (features.has_aloha or features.has_studio):
        result.warnings.append(
            "Downgrading to Basic will remove access to Aloha (AI voice answering) "
            "and Studio (media management)."
        )
        result.add_feature_lost("Aloha Agent")
        result.add_feature_lost("Studio Agent")

    change = result.price_change
    current_str = format_currency(change.current)
    proposed_str = format_currency(change.proposed)

    # 5. Large increase
    if change.percent_change > LARGE_PRICE_CHANGE_PERCENT:
        result.warnings.append(
            f"Your subscription cost will increase by {_whole_percent(change.percent_change)}% "
            f"(from {current_str} to {proposed_str} per {period})."
        )

    # 6. Large decrease
    if change.percent_change < -LARGE_PRICE_CHANGE_PERCENT and change.current > 0:
        result.warnings.append(
            f"Your subscription cost will decrease by {_whole_percent(abs(change.percent_change))}% "
            f"(from {current_str} to {proposed_str} per {period}). "
            "Make sure this aligns with your needs."
        )

    # 7. Removing everything
    if proposed_total == 0 and current_total > 0:
        result.warnings.append(
            "You're removing all seats. Your subscription will be canceled "
            "and you'll lose access to all features."
        )

    # 8. Advanced-only features need an advanced or elite seat
    if loses_advanced and usage.uses_advanced_only_features:
        result.blocking_issues.append(
            "You're using Advanced-only features (Aloha, Studio). "
            "Remove or migrate these before downgrading all Advanced seats."
        )

    return result
