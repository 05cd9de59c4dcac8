"""
Margin Policy - checks that list prices keep minimum margins at the deepest team discount.
"""
import logging
from dataclasses import dataclass
from decimal import Decimal
from typing import Optional

from ..engine.models import Tier, BillingInterval
from ..engine.pricing_engine import MAX_TEAM_DISCOUNT
from ..engine.tier_table import TierTable, DEFAULT_TIER_TABLE

logger = logging.getLogger(__name__)

# Internal cost as a share of list price
TIER_COST_RATIOS = {
    Tier.BASIC: Decimal("0.20"),
    Tier.ADVANCED: Decimal("0.35"),
    Tier.ELITE: Decimal("0.45"),
}

# Minimum margin after the maximum discount
TIER_MIN_MARGINS = {
    Tier.BASIC: Decimal("0.70"),
    Tier.ADVANCED: Decimal("0.50"),
    Tier.ELITE: Decimal("0.40"),
}


@dataclass(frozen=True)
class MarginCheck:
    """Margin outcome for one tier."""
    tier: Tier
    list_price: Decimal
    effective_price: Decimal
    cost: Decimal
    effective_margin: Decimal
    min_margin: Decimal

    @property
    def passed(self) -> bool:
        return self.effective_margin >= self.min_margin

    def describe(self) -> str:
        status = "OK" if self.passed else "BELOW MINIMUM"
        return (
            f"{self.tier.value}: margin {self.effective_margin * 100:.2f}% "
            f"(minimum {self.min_margin * 100:.2f}%) {status}"
        )


def check_pricing_margins(
    tier_table: Optional[TierTable] = None,
    max_discount: Optional[Decimal] = None,
    cost_ratios: Optional[dict] = None,
    min_margins: Optional[dict] = None,
) -> list[MarginCheck]:
    """
    Compute the post-discount margin for every tier.

    margin = (price × (1 − discount) − price × cost_ratio) / (price × (1 − discount))
    """
    tier_table = tier_table if tier_table is not None else DEFAULT_TIER_TABLE
    discount = MAX_TEAM_DISCOUNT if max_discount is None else Decimal(max_discount)
    cost_ratios = cost_ratios or TIER_COST_RATIOS
    min_margins = min_margins or TIER_MIN_MARGINS

    checks = []
    for tier, config in tier_table.items():
        price = config.unit_price(BillingInterval.MONTHLY)
        effective_price = price * (1 - discount)
        cost = price * cost_ratios[tier]
        if effective_price > 0:
            margin = (effective_price - cost) / effective_price
        else:
            margin = Decimal("0")
        checks.append(MarginCheck(
            tier=tier,
            list_price=price,
            effective_price=effective_price,
            cost=cost,
            effective_margin=margin,
            min_margin=min_margins[tier],
        ))
    return checks


def validate_pricing_margins(
    tier_table: Optional[TierTable] = None,
    max_discount: Optional[Decimal] = None,
) -> bool:
    """True when every tier meets its minimum margin; logs each failure."""
    valid = True
    for check in check_pricing_margins(tier_table, max_discount):
        if not check.passed:
            logger.error("Margin validation failed for %s", check.describe())
            valid = False
    return valid
