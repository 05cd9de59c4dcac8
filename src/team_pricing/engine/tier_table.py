"""
Tier price table - immutable per-tier list prices.

The engine receives a TierTable instead of reading a global, so tests and
alternate price books can swap it without touching process state.
"""
import logging
from dataclasses import dataclass
from decimal import Decimal
from pathlib import Path
from types import MappingProxyType
from typing import Iterable, Iterator, Mapping

import pandas as pd

from .models import Tier, BillingInterval

logger = logging.getLogger(__name__)

MINOR_UNITS_PER_MAJOR = 100

TIER_CSV_COLUMNS = ['tier', 'display_name', 'monthly_price_minor', 'yearly_price_minor']


@dataclass(frozen=True)
class TierConfig:
    """List prices for one tier, in minor currency units (cents)."""
    tier: Tier
    display_name: str
    monthly_price_minor: int
    yearly_price_minor: int

    def price_minor(self, interval: BillingInterval) -> int:
        if interval is BillingInterval.YEARLY:
            return self.yearly_price_minor
        return self.monthly_price_minor

    def unit_price(self, interval: BillingInterval) -> Decimal:
        """List price per seat for the interval, in major units."""
        return Decimal(self.price_minor(interval)) / MINOR_UNITS_PER_MAJOR


class TierTable(Mapping[Tier, TierConfig]):
    """Read-only mapping of every Tier to its TierConfig."""

    def __init__(self, configs: Iterable[TierConfig], currency: str = "usd"):
        table = {}
        for config in configs:
            if config.tier in table:
                raise ValueError(f"Duplicate tier '{config.tier.value}' in tier table")
            if config.monthly_price_minor < 0 or config.yearly_price_minor < 0:
                raise ValueError(f"Negative price for tier '{config.tier.value}'")
            table[config.tier] = config

        missing = [t.value for t in Tier if t not in table]
        if missing:
            raise ValueError(f"Tier table is missing tiers: {', '.join(missing)}")

        # Keep enum order regardless of input order
        self._table = MappingProxyType({t: table[t] for t in Tier})
        self.currency = currency

    def __getitem__(self, tier: Tier) -> TierConfig:
        return self._table[tier]

    def __iter__(self) -> Iterator[Tier]:
        return iter(self._table)

    def __len__(self) -> int:
        return len(self._table)

    def __repr__(self) -> str:
        return f"TierTable({list(self._table.values())!r})"

    def to_frame(self) -> pd.DataFrame:
        """Tier table as a DataFrame with major-unit price columns."""
        return pd.DataFrame([
            {
                'tier': c.tier.value,
                'display_name': c.display_name,
                'monthly_price': float(c.unit_price(BillingInterval.MONTHLY)),
                'yearly_price': float(c.unit_price(BillingInterval.YEARLY)),
            }
            for c in self._table.values()
        ])


# Yearly = 11 x monthly (one month free)
DEFAULT_TIER_TABLE = TierTable([
    TierConfig(Tier.BASIC, "Essentials", monthly_price_minor=3999, yearly_price_minor=43989),
    TierConfig(Tier.ADVANCED, "Professional", monthly_price_minor=7999, yearly_price_minor=87989),
    TierConfig(Tier.ELITE, "Executive", monthly_price_minor=12999, yearly_price_minor=142989),
])


def load_tier_table(csv_path: Path, currency: str = "usd") -> TierTable:
    """
    Load a tier table from CSV.

    Expected columns: tier, display_name, monthly_price_minor, yearly_price_minor.
    """
    if not csv_path.exists():
        raise FileNotFoundError(f"Tier price file not found at {csv_path}")

    df = pd.read_csv(csv_path, dtype=str).fillna('')
    df.columns = [c.strip() for c in df.columns]

    missing_cols = [c for c in TIER_CSV_COLUMNS if c not in df.columns]
    if missing_cols:
        raise ValueError(f"{csv_path.name} is missing columns: {', '.join(missing_cols)}")

    for col in TIER_CSV_COLUMNS:
        df[col] = df[col].astype(str).str.strip()

    configs = []
    for row in df.to_dict(orient='records'):
        try:
            monthly = int(row['monthly_price_minor'])
            yearly = int(row['yearly_price_minor'])
        except ValueError:
            raise ValueError(f"Non-integer price for tier '{row['tier']}' in {csv_path.name}") from None
        configs.append(TierConfig(
            tier=Tier.parse(row['tier']),
            display_name=row['display_name'] or Tier.parse(row['tier']).value.title(),
            monthly_price_minor=monthly,
            yearly_price_minor=yearly,
        ))

    table = TierTable(configs, currency=currency)
    logger.info("Loaded tier table from %s (%d tiers)", csv_path, len(table))
    return table
