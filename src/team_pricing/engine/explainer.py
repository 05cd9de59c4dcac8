"""
Pricing Explainer - renders a PricingBreakdown as one plain-language paragraph.

The wording is fixed so downstream agents can pattern-match on it
(notably the literal "final total").
"""
from decimal import Decimal, ROUND_HALF_UP

from .models import PricingBreakdown, TierLine

CURRENCY_SYMBOLS = {"usd": "$"}


def format_currency(amount: Decimal, currency: str = "usd") -> str:
    """Format as e.g. ``$1,429.89`` (2 decimals, half-up)."""
    symbol = CURRENCY_SYMBOLS.get(currency.lower(), "$")
    rounded = Decimal(amount).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)
    return f"{symbol}{rounded:,.2f}"


def _describe_line(line: TierLine, currency: str) -> str:
    return f"{line.count} × {line.display_name} ({format_currency(line.unit_price, currency)}/user)"


def describe_team_pricing(breakdown: PricingBreakdown) -> str:
    """
    Describe a breakdown in four sentences: seats, list price, discount, final total.

    Trusts the breakdown as computed; nothing is recalculated here.
    """
    currency = breakdown.currency
    period = breakdown.billing_interval.period
    seat_word = "seat" if breakdown.total_seats == 1 else "seats"

    lines = breakdown.priced_lines()
    if lines:
        listing = ", ".join(_describe_line(line, currency) for line in lines)
        seats_sentence = f"Your team has {breakdown.total_seats} {seat_word}: {listing}."
    else:
        seats_sentence = f"Your team has {breakdown.total_seats} {seat_word}."

    list_sentence = (
        f"The list price before discount is {format_currency(breakdown.list_subtotal, currency)}."
    )

    if breakdown.discount_percent > 0:
        percent = int(breakdown.discount_percent * 100)
        discount_sentence = (
            f"A team discount of {percent}% saves you "
            f"{format_currency(breakdown.discount_amount, currency)} per {period}."
        )
    else:
        discount_sentence = "No team discount applies yet (add more seats to unlock discounts)."

    total_sentence = (
        f"Your final total is {format_currency(breakdown.final_total, currency)} per {period}."
    )

    return " ".join([seats_sentence, list_sentence, discount_sentence, total_sentence])
