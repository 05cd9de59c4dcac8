"""
Team Pricing Engine - seat mix → list price, volume discount and final total.

Resolution order:
1. Aggregate seat counts per tier (every tier appears, absent tiers count 0)
2. Read unit prices for the billing interval from the tier table
3. Extend count × unit price per tier and sum into the list subtotal
4. Look up the volume discount on total seats across all tiers
5. Round the discount to cents (half up) and subtract it from the list subtotal
"""
import logging
from collections.abc import Mapping
from decimal import Decimal, ROUND_HALF_UP
from typing import Any, Iterable, Optional, Union

from ..config.settings import Settings
from .models import (
    BillingInterval,
    SeatSelection,
    TierLine,
    PricingBreakdown,
    InvalidTierError,
)
from .tier_table import TierTable, DEFAULT_TIER_TABLE, load_tier_table

logger = logging.getLogger(__name__)

CENT = Decimal("0.01")

# (minimum total seats, discount), highest threshold first
TEAM_DISCOUNT_THRESHOLDS: tuple[tuple[int, Decimal], ...] = (
    (20, Decimal("0.25")),
    (10, Decimal("0.20")),
    (5, Decimal("0.10")),
)

MAX_TEAM_DISCOUNT = TEAM_DISCOUNT_THRESHOLDS[0][1]

SeatInput = Union[SeatSelection, Mapping, tuple]


def get_team_discount_percent(total_seats: int) -> Decimal:
    """
    Volume discount for a team size.

    1-4 seats: 0%, 5-9: 10%, 10-19: 20%, 20+: 25%.
    """
    for min_seats, discount in TEAM_DISCOUNT_THRESHOLDS:
        if total_seats >= min_seats:
            return discount
    return Decimal("0")


def round_money(amount: Decimal) -> Decimal:
    """Round to cents, half up."""
    return amount.quantize(CENT, rounding=ROUND_HALF_UP)


def to_seat_selection(seat: Any) -> SeatSelection:
    """Normalize a SeatSelection, ``{tier, count}`` mapping or ``(tier, count)`` pair."""
    if isinstance(seat, SeatSelection):
        return seat
    if isinstance(seat, Mapping):
        return SeatSelection.from_dict(seat)
    if isinstance(seat, (tuple, list)) and len(seat) == 2:
        return SeatSelection(tier=seat[0], count=seat[1])
    raise InvalidTierError(seat)


class PricingEngine:
    """
    Stateless seat pricing over an injected tier table.

    Safe to share between threads/requests: the tier table is read-only
    and calculate_team_pricing keeps no state between calls.
    """

    def __init__(self, tier_table: Optional[TierTable] = None):
        self.tier_table = tier_table if tier_table is not None else DEFAULT_TIER_TABLE

    @classmethod
    def from_settings(cls, settings: Settings) -> 'PricingEngine':
        """Build an engine from configured tier prices (CSV override or defaults)."""
        if settings.tiers_csv:
            return cls(load_tier_table(settings.tiers_csv))
        return cls(DEFAULT_TIER_TABLE)

    def calculate_team_pricing(
        self,
        seats: Iterable[SeatInput],
        billing_interval: Union[BillingInterval, str] = BillingInterval.MONTHLY,
    ) -> PricingBreakdown:
        """
        Calculate the pricing breakdown for a team's seat mix.

        Args:
            seats: SeatSelection objects, ``{tier, count}`` dicts or ``(tier, count)`` pairs
            billing_interval: Which list price column applies

        Returns:
            PricingBreakdown with all tiers present

        Raises:
            InvalidTierError: unknown tier identifier
            InvalidCountError: negative or non-integer count
            InvalidBillingIntervalError: unknown interval
        """
        interval = BillingInterval.parse(billing_interval)

        # Every entry is parsed before any pricing
        selections = [to_seat_selection(seat) for seat in seats]

        counts = {tier: 0 for tier in self.tier_table}
        for selection in selections:
            counts[selection.tier] += selection.count

        per_tier = {}
        for tier, config in self.tier_table.items():
            unit_price = config.unit_price(interval)
            count = counts[tier]
            per_tier[tier] = TierLine(
                tier=tier,
                display_name=config.display_name,
                count=count,
                unit_price=unit_price,
                subtotal=unit_price * count,
            )

        total_seats = sum(line.count for line in per_tier.values())
        list_subtotal = sum((line.subtotal for line in per_tier.values()), Decimal("0"))

        discount_percent = get_team_discount_percent(total_seats)
        discount_amount = round_money(list_subtotal * discount_percent)
        final_total = list_subtotal - discount_amount

        logger.debug(
            "Priced %d seats (%s): list=%s discount=%s final=%s",
            total_seats, interval.value, list_subtotal, discount_amount, final_total,
        )

        return PricingBreakdown(
            billing_interval=interval,
            total_seats=total_seats,
            per_tier=per_tier,
            list_subtotal=list_subtotal,
            discount_percent=discount_percent,
            discount_amount=discount_amount,
            final_total=final_total,
            currency=self.tier_table.currency,
        )


def calculate_team_pricing(
    seats: Iterable[SeatInput],
    billing_interval: Union[BillingInterval, str] = BillingInterval.MONTHLY,
    tier_table: Optional[TierTable] = None,
) -> PricingBreakdown:
    """Calculate a breakdown with a one-off engine (default tier table unless given)."""
    return PricingEngine(tier_table).calculate_team_pricing(seats, billing_interval)
