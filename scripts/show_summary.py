#!/usr/bin/env python3
"""Print the dashboard figures for the stored transactions."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from finance_tracker.analytics import TransactionAnalytics
from finance_tracker.charts import monthly_net_data
from finance_tracker.config import CURRENCIES
from finance_tracker.formatting import format_currency, format_forecast_date, format_runway, format_trend
from finance_tracker.goals import calculate_goal_forecast
from finance_tracker.logging_setup import configure_logging
from finance_tracker.store import RecordStore


def main(store_path: Path | None = None, currency: str = 'INR') -> None:
    configure_logging()
    store = RecordStore(store_path)
    records = store.load()
    symbol = CURRENCIES.get(currency, currency)
    analytics = TransactionAnalytics(records)
    summary = analytics.summary()

    print(f"Transactions: {len(records)}")
    print(f"Balance: {format_currency(summary['balance'], symbol)}")
    print(f"  Income:  {format_currency(summary['total_income'], symbol)}")
    print(f"  Expense: {format_currency(summary['total_expense'], symbol)}")
    print(f"{summary['month_name']}: net {format_currency(summary['monthly_net'], symbol)}")
    print(f"Avg. daily burn: {format_currency(summary['avg_daily_spending'], symbol)}")
    print(f"Runway: {format_runway(summary['runway_days'])}")
    print(f"Expense trend: {format_trend(summary['trend'])}")

    print("\nTop categories:")
    for category, amount in summary['top_categories']:
        print(f"  {category}: {format_currency(amount, symbol)}")

    print("\nMonthly net:")
    print(monthly_net_data(records, chronological=True).to_string(index=False))

    forecast = calculate_goal_forecast(store.load_goal(), records, analytics.today)
    print(f"\nGoal {forecast['name']}: {forecast['progress_pct']:.1f}% complete, "
          f"est. completion {format_forecast_date(forecast['forecasted_date'])}")


if __name__ == '__main__':
    parser = argparse.ArgumentParser(description='Show a summary of stored transactions.')
    parser.add_argument('--store', type=Path, default=None, help='Path to the transactions JSON file')
    parser.add_argument('--currency', default='INR', choices=sorted(CURRENCIES), help='Display currency')
    args = parser.parse_args()
    main(store_path=args.store, currency=args.currency)
