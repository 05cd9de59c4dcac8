"""
Recommendation Service - suggests a seat mix from a team questionnaire.

Every adjustment returns a new tuple of SeatSelection; nothing is mutated
in place, so intermediate suggestions can be compared and priced freely.
"""
import logging
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Optional, Union

from ..engine.models import Tier, BillingInterval, SeatSelection, PricingBreakdown
from ..engine.pricing_engine import PricingEngine
from ..engine.explainer import describe_team_pricing

logger = logging.getLogger(__name__)

VOLUME_LEVELS = ('low', 'medium', 'high')

Seats = tuple[SeatSelection, ...]


def _ceil_div(numerator: int, denominator: int) -> int:
    return -(-numerator // denominator)


@dataclass(frozen=True)
class Questionnaire:
    """Answers from the plan advisor form."""
    team_size: int
    call_volume: str = 'low'
    email_volume: str = 'low'
    media_volume: Optional[str] = None
    analytics_volume: Optional[str] = None
    needs_voice: bool = False
    needs_insights: bool = False
    budget_sensitivity: str = 'medium'
    billing_interval: Union[BillingInterval, str] = BillingInterval.MONTHLY

    def __post_init__(self):
        if isinstance(self.team_size, bool) or not isinstance(self.team_size, int) or self.team_size < 1:
            raise ValueError(f"team_size must be a positive integer, got {self.team_size!r}")
        for name in ('call_volume', 'email_volume', 'budget_sensitivity'):
            if getattr(self, name) not in VOLUME_LEVELS:
                raise ValueError(f"{name} must be one of {', '.join(VOLUME_LEVELS)}")
        for name in ('media_volume', 'analytics_volume'):
            value = getattr(self, name)
            if value is not None and value not in VOLUME_LEVELS:
                raise ValueError(f"{name} must be one of {', '.join(VOLUME_LEVELS)}")
        object.__setattr__(self, 'billing_interval', BillingInterval.parse(self.billing_interval))


@dataclass(frozen=True)
class AlternativeOption:
    label: str
    suggested_seats: Seats
    pros: tuple[str, ...]
    cons: tuple[str, ...]

    def to_dict(self) -> dict:
        return {
            "label": self.label,
            "suggested_seats": [s.to_dict() for s in self.suggested_seats],
            "pros": list(self.pros),
            "cons": list(self.cons),
        }


@dataclass
class Recommendation:
    """Suggested seat mix with its pricing and alternatives."""
    suggested_seats: Seats
    reasoning: str
    breakdown: PricingBreakdown
    explanation: str
    alt_options: list[AlternativeOption] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "suggested_seats": [s.to_dict() for s in self.suggested_seats],
            "reasoning": self.reasoning,
            "alt_options": [o.to_dict() for o in self.alt_options],
            "pricing": {
                "breakdown": self.breakdown.to_dict(),
                "explanation": self.explanation,
            },
        }


def count_of(seats: Seats, tier: Tier) -> int:
    return sum(s.count for s in seats if s.tier is tier)


def drop_empty(seats: Seats) -> Seats:
    return tuple(s for s in seats if s.count > 0)


def move_seats(seats: Seats, from_tier: Tier, to_tier: Tier, count: int) -> Seats:
    """
    Move ``count`` seats between tiers, returning a new tuple.

    Existing entries keep their position; a missing target tier is appended.
    """
    if count <= 0:
        return seats
    moved = []
    target_found = False
    for seat in seats:
        if seat.tier is from_tier:
            moved.append(SeatSelection(seat.tier, seat.count - count))
        elif seat.tier is to_tier:
            moved.append(SeatSelection(seat.tier, seat.count + count))
            target_found = True
        else:
            moved.append(seat)
    if not target_found:
        moved.append(SeatSelection(to_tier, count))
    return tuple(moved)


def suggest_base_seats(q: Questionnaire) -> tuple[Seats, str]:
    """Seat mix from team size and needs, before budget adjustments."""
    n = q.team_size

    if n <= 2:
        if q.needs_insights:
            return (SeatSelection(Tier.ELITE, 1),), (
                f"For a solo operator or small team of {n} with insight needs, we recommend "
                "1 Executive seat. This gives you full access to all agents including the "
                "Insight Agent for business intelligence."
            )
        if q.needs_voice:
            return (SeatSelection(Tier.ADVANCED, 1),), (
                f"For a small team of {n} with AI voice needs, we recommend 1 Professional seat. "
                "This unlocks Aloha for call handling and Studio for media management."
            )
        return (SeatSelection(Tier.BASIC, n),), (
            f"For a small team of {n} focused on email and calendar management, we recommend "
            f"{n} Essentials seat(s). This gives you access to the Sync Agent at an affordable price."
        )

    if n <= 10:
        if q.needs_insights or q.analytics_volume in ('medium', 'high'):
            elite = min(2, _ceil_div(n * 3, 10))
            advanced = n - elite
            return (SeatSelection(Tier.ELITE, elite), SeatSelection(Tier.ADVANCED, advanced)), (
                f"For a team of {n} with high-volume usage and insight needs, we recommend "
                f"{elite} Executive seat(s) for leadership/analytics and {advanced} Professional "
                "seat(s) for team members. This balances cost with full feature access."
            )
        if (q.needs_voice or q.call_volume in ('medium', 'high')
                or q.media_volume in ('medium', 'high')):
            return (SeatSelection(Tier.ADVANCED, n),), (
                f"For a team of {n} with voice or media needs, we recommend {n} Professional "
                "seat(s). This gives everyone access to Aloha for call handling and Studio for "
                "media management."
            )
        return (SeatSelection(Tier.BASIC, n),), (
            f"For a team of {n} focused primarily on email management, we recommend {n} "
            "Essentials seat(s). You can always upgrade individual seats later if needs change."
        )

    elite = min(3, _ceil_div(n, 5))
    advanced = _ceil_div((n - elite) * 3, 5)
    basic = n - elite - advanced
    seats = drop_empty((
        SeatSelection(Tier.ELITE, elite),
        SeatSelection(Tier.ADVANCED, advanced),
        SeatSelection(Tier.BASIC, basic),
    ))
    return seats, (
        f"For a larger team of {n}, we recommend a tiered approach: {elite} Executive seat(s) "
        f"for leadership/analytics, {advanced} Professional seat(s) for core team members, and "
        f"{basic} Essentials seat(s) for occasional users. This optimizes cost while ensuring "
        "the right features for each role."
    )


def apply_budget_sensitivity(q: Questionnaire, seats: Seats, reasoning: str) -> tuple[Seats, str]:
    """Downgrade for tight budgets, upgrade one seat for loose budgets with insight needs."""
    if q.budget_sensitivity == 'high' and seats:
        had_advanced = count_of(seats, Tier.ADVANCED) > 0

        elite = count_of(seats, Tier.ELITE)
        if elite > 0:
            seats = move_seats(seats, Tier.ELITE, Tier.ADVANCED, min(elite, 1))
            reasoning += (
                " We've adjusted for budget sensitivity by prioritizing Professional over "
                "Executive seats where possible."
            )

        advanced = count_of(seats, Tier.ADVANCED)
        if had_advanced and q.team_size > 5 and advanced > 2:
            seats = move_seats(seats, Tier.ADVANCED, Tier.BASIC, advanced * 3 // 10)
            reasoning += " Some seats were adjusted to Essentials tier for cost optimization."

        return drop_empty(seats), reasoning

    if q.budget_sensitivity == 'low' and q.needs_insights:
        if count_of(seats, Tier.ADVANCED) > 0 and count_of(seats, Tier.ELITE) == 0:
            seats = drop_empty(move_seats(seats, Tier.ADVANCED, Tier.ELITE, 1))

    return seats, reasoning


def generate_alternative_options(
    q: Questionnaire,
    primary: Seats,
    engine: PricingEngine,
) -> list[AlternativeOption]:
    """Cheaper and higher-performance alternatives, kept only when meaningfully different in price."""
    options = []
    interval = q.billing_interval
    primary_total = sum(s.count for s in primary)
    primary_price = engine.calculate_team_pricing(primary, interval).final_total

    if count_of(primary, Tier.ELITE) > 0 or count_of(primary, Tier.ADVANCED) > 0:
        cheaper = (SeatSelection(Tier.BASIC, max(1, primary_total * 4 // 5)),)
        cheaper_price = engine.calculate_team_pricing(cheaper, interval).final_total
        if cheaper_price < primary_price * Decimal("0.9"):
            options.append(AlternativeOption(
                label="Cheaper Option",
                suggested_seats=cheaper,
                pros=(
                    "Lower monthly cost",
                    "Access to Sync Agent for email/calendar",
                    "Good starting point for small teams",
                ),
                cons=(
                    "No AI voice answering (Aloha)",
                    "No media management (Studio)",
                    "No business insights (Insight Agent)",
                ),
            ))

    if not q.needs_insights or count_of(primary, Tier.ELITE) == 0:
        premium = drop_empty((
            SeatSelection(Tier.ELITE, max(1, _ceil_div(primary_total, 2))),
            SeatSelection(Tier.ADVANCED, primary_total // 2),
        ))
        premium_price = engine.calculate_team_pricing(premium, interval).final_total
        if premium_price > primary_price * Decimal("1.1"):
            options.append(AlternativeOption(
                label="Higher-Performance Option",
                suggested_seats=premium,
                pros=(
                    "Full access to all agents including Insight",
                    "Advanced analytics and business intelligence",
                    "Best for data-driven teams",
                ),
                cons=(
                    "Higher monthly cost",
                    "May be more than needed for small teams",
                ),
            ))

    return options


def recommend_plan(q: Questionnaire, engine: Optional[PricingEngine] = None) -> Recommendation:
    """Full recommendation: base mix, budget adjustments, pricing and alternatives."""
    engine = engine or PricingEngine()

    seats, reasoning = suggest_base_seats(q)
    seats, reasoning = apply_budget_sensitivity(q, seats, reasoning)

    breakdown = engine.calculate_team_pricing(seats, q.billing_interval)
    logger.info(
        "Recommended %d seats for team of %d (%s)",
        breakdown.total_seats, q.team_size, q.billing_interval.value,
    )

    return Recommendation(
        suggested_seats=seats,
        reasoning=reasoning,
        breakdown=breakdown,
        explanation=describe_team_pricing(breakdown),
        alt_options=generate_alternative_options(q, seats, engine),
    )
