"""Engine subpackage - core seat pricing logic and explanation."""
from .models import (
    Tier,
    BillingInterval,
    SeatSelection,
    TierLine,
    PricingBreakdown,
    PricingInputError,
    InvalidTierError,
    InvalidCountError,
    InvalidBillingIntervalError,
)
from .tier_table import TierConfig, TierTable, DEFAULT_TIER_TABLE, load_tier_table
from .pricing_engine import PricingEngine, calculate_team_pricing, get_team_discount_percent
from .explainer import describe_team_pricing, format_currency

__all__ = [
    'Tier', 'BillingInterval', 'SeatSelection', 'TierLine', 'PricingBreakdown',
    'PricingInputError', 'InvalidTierError', 'InvalidCountError', 'InvalidBillingIntervalError',
    'TierConfig', 'TierTable', 'DEFAULT_TIER_TABLE', 'load_tier_table',
    'PricingEngine', 'calculate_team_pricing', 'get_team_discount_percent',
    'describe_team_pricing', 'format_currency',
]
