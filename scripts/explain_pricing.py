#!/usr/bin/env python
"""
Print a team pricing breakdown and its explanation.

Usage:
    python scripts/explain_pricing.py basic=3 advanced=2
    python scripts/explain_pricing.py elite=20 --yearly
"""
import sys
from pathlib import Path

# Add src to path
src_path = Path(__file__).parent.parent / 'src'
sys.path.insert(0, str(src_path))

from team_pricing.config.settings import get_settings
from team_pricing.engine import PricingEngine, PricingInputError, describe_team_pricing, format_currency


def parse_args(argv: list[str]) -> tuple[list[tuple[str, str]], str]:
    interval = get_settings().default_billing_interval
    seats = []
    for arg in argv:
        if arg == '--yearly':
            interval = 'yearly'
        elif arg == '--monthly':
            interval = 'monthly'
        elif '=' in arg:
            tier, count = arg.split('=', 1)
            seats.append((tier, count))
        else:
            raise SystemExit(f"Unrecognized argument: {arg}\n{__doc__}")
    return seats, interval


def main():
    raw_seats, interval = parse_args(sys.argv[1:])

    try:
        seats = [(tier, int(count)) for tier, count in raw_seats]
    except ValueError:
        print("❌ Seat counts must be whole numbers")
        sys.exit(1)

    engine = PricingEngine.from_settings(get_settings())
    try:
        breakdown = engine.calculate_team_pricing(seats, interval)
    except PricingInputError as e:
        print(f"❌ {e}")
        sys.exit(1)

    print(f"Team pricing ({breakdown.billing_interval.value})")
    print("-" * 50)
    for line in breakdown.per_tier.values():
        print(f"  {line.display_name:<14} {line.count:>4} × {format_currency(line.unit_price):>10}"
              f" = {format_currency(line.subtotal):>12}")
    print("-" * 50)
    print(f"  List subtotal:  {format_currency(breakdown.list_subtotal)}")
    print(f"  Discount:       {int(breakdown.discount_percent * 100)}% "
          f"(-{format_currency(breakdown.discount_amount)})")
    print(f"  Final total:    {format_currency(breakdown.final_total)}")
    print()
    print(describe_team_pricing(breakdown))


if __name__ == "__main__":
    main()
