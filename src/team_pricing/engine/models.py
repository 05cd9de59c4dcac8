"""
Data models for the team pricing engine.

Uses enums for the closed tier/interval sets and frozen dataclasses
for seat selections and the computed breakdown.
"""
from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum
from types import MappingProxyType
from typing import Any, Mapping


class PricingInputError(ValueError):
    """Base class for caller-correctable pricing input errors."""


class InvalidTierError(PricingInputError):
    """Input references a tier identifier outside the tier table."""

    def __init__(self, tier: Any):
        self.tier = tier
        valid = ", ".join(t.value for t in Tier)
        super().__init__(f"Unknown tier '{tier}'. Expected one of: {valid}")


class InvalidCountError(PricingInputError):
    """Seat count is negative or not a whole number."""

    def __init__(self, count: Any, tier: Any = None):
        self.count = count
        self.tier = tier
        where = f" for tier '{tier}'" if tier is not None else ""
        super().__init__(f"Invalid seat count {count!r}{where}: must be a non-negative integer")


class InvalidBillingIntervalError(PricingInputError):
    """Billing interval is neither monthly nor yearly."""

    def __init__(self, interval: Any):
        self.interval = interval
        super().__init__(f"Unknown billing interval '{interval}'. Expected 'monthly' or 'yearly'")


class Tier(str, Enum):
    """Subscription tiers, ordered low → high."""
    BASIC = "basic"
    ADVANCED = "advanced"
    ELITE = "elite"

    @classmethod
    def parse(cls, value: Any) -> 'Tier':
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            raise InvalidTierError(value) from None


class BillingInterval(str, Enum):
    MONTHLY = "monthly"
    YEARLY = "yearly"

    @classmethod
    def parse(cls, value: Any) -> 'BillingInterval':
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            raise InvalidBillingIntervalError(value) from None

    @property
    def period(self) -> str:
        """Word used when describing a charge for this interval."""
        return "month" if self is BillingInterval.MONTHLY else "year"


def parse_count(value: Any, tier: Any = None) -> int:
    """Coerce a seat count to int, rejecting negatives, fractions and bools."""
    if isinstance(value, bool):
        raise InvalidCountError(value, tier)
    if isinstance(value, int):
        count = value
    elif isinstance(value, float):
        if not value.is_integer():
            raise InvalidCountError(value, tier)
        count = int(value)
    else:
        raise InvalidCountError(value, tier)

    if count < 0:
        raise InvalidCountError(value, tier)
    return count


@dataclass(frozen=True)
class SeatSelection:
    """How many seats of a given tier a team wants."""
    tier: Tier
    count: int

    def __post_init__(self):
        # Normalize raw values so a SeatSelection is always valid once built
        object.__setattr__(self, 'tier', Tier.parse(self.tier))
        object.__setattr__(self, 'count', parse_count(self.count, self.tier.value))

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> 'SeatSelection':
        """Create from a ``{"tier": ..., "count": ...}`` mapping."""
        if 'tier' not in data:
            raise InvalidTierError(None)
        if 'count' not in data:
            raise InvalidCountError(None, data.get('tier'))
        return cls(tier=data['tier'], count=data['count'])

    def to_dict(self) -> dict:
        return {"tier": self.tier.value, "count": self.count}


@dataclass(frozen=True)
class TierLine:
    """Per-tier slice of a pricing breakdown."""
    tier: Tier
    display_name: str
    count: int
    unit_price: Decimal
    subtotal: Decimal


@dataclass(frozen=True)
class PricingBreakdown:
    """Complete result of a team pricing calculation."""
    billing_interval: BillingInterval
    total_seats: int
    per_tier: Mapping[Tier, TierLine]
    list_subtotal: Decimal
    discount_percent: Decimal
    discount_amount: Decimal
    final_total: Decimal
    currency: str = field(default="usd")

    def __post_init__(self):
        if not isinstance(self.per_tier, MappingProxyType):
            object.__setattr__(self, 'per_tier', MappingProxyType(dict(self.per_tier)))

    def priced_lines(self) -> list[TierLine]:
        """Tier lines with at least one seat, in tier order."""
        return [line for line in self.per_tier.values() if line.count > 0]

    def to_dict(self) -> dict:
        """Convert to a JSON-friendly dict (floats, tier values as keys)."""
        return {
            "billing_interval": self.billing_interval.value,
            "total_seats": self.total_seats,
            "per_tier": {
                tier.value: {
                    "display_name": line.display_name,
                    "count": line.count,
                    "unit_price": float(line.unit_price),
                    "subtotal": float(line.subtotal),
                }
                for tier, line in self.per_tier.items()
            },
            "list_subtotal": float(self.list_subtotal),
            "discount_percent": float(self.discount_percent),
            "discount_amount": float(self.discount_amount),
            "final_total": float(self.final_total),
            "currency": self.currency,
        }
