"""Transaction analytics.

This module derives totals, monthly figures, category breakdowns and the
burn-rate/runway/trend indicators shown on the dashboard.  Every value is
a pure function of the record collection and the reference date the
analytics object was built with; nothing here reads session state or
touches the record store.
"""

from __future__ import annotations

import math
from datetime import date
from typing import Any, Dict, List, Optional, Sequence, Tuple, Union

import pandas as pd

try:
    from .clock import SystemClock, resolve_clock
    from .config import RECENT_TRANSACTION_LIMIT, TOP_CATEGORY_LIMIT
    from .frames import records_to_frame
    from .models import INFINITE, TransactionRecord
except ImportError:
    from clock import SystemClock, resolve_clock
    from config import RECENT_TRANSACTION_LIMIT, TOP_CATEGORY_LIMIT
    from frames import records_to_frame
    from models import INFINITE, TransactionRecord

CENT_DIGITS = 2


class TransactionAnalytics:
    """Aggregate calculations over a collection of transactions."""

    def __init__(
        self,
        records: Sequence[TransactionRecord],
        today: Optional[date] = None,
        clock: Optional[SystemClock] = None,
        previous_month_rollover: bool = False,
    ):
        """Initialize with a record collection.

        Args:
            records: The full record collection. It is copied into a tuple
                and never modified.
            today: Reference date for "this month" scoping. Defaults to
                ``clock.today()``.
            clock: Clock used when ``today`` is not given.
            previous_month_rollover: When False the previous month is
                ``month - 1`` of the same year, so January has no previous
                month. When True January compares against December of the
                prior year.
        """
        self.records: Tuple[TransactionRecord, ...] = tuple(records)
        self.today = today if today is not None else resolve_clock(clock).today()
        self.previous_month_rollover = previous_month_rollover
        self.data = records_to_frame(self.records)

    def _expense_rows(self, df: Optional[pd.DataFrame] = None) -> pd.DataFrame:
        source = df if df is not None else self.data
        return source[source['Amount'] < 0]

    def _income_rows(self, df: Optional[pd.DataFrame] = None) -> pd.DataFrame:
        source = df if df is not None else self.data
        return source[source['Amount'] > 0]

    def _month_rows(self, year: int, month: int) -> pd.DataFrame:
        return self.data[(self.data['Year'] == year) & (self.data['Month'] == month)]

    # Totals

    def total_income(self) -> float:
        return round(float(self._income_rows()['Amount'].sum()), CENT_DIGITS)

    def total_expense(self) -> float:
        """Sum of the per-category totals."""
        return float(sum(self.expense_by_category().values()))

    def balance(self) -> float:
        return self.total_income() - self.total_expense()

    def monthly_income(self) -> float:
        month_rows = self._month_rows(self.today.year, self.today.month)
        return float(self._income_rows(month_rows)['Amount'].sum())

    def monthly_expense(self) -> float:
        month_rows = self._month_rows(self.today.year, self.today.month)
        return float(self._expense_rows(month_rows)['Amount'].abs().sum())

    def net_monthly_flow(self) -> float:
        return self.monthly_income() - self.monthly_expense()

    # Extremes and categories

    def highest_expense(self) -> float:
        """Most negative expense amount, or 0 when there are no expenses."""
        expenses = self._expense_rows()
        if expenses.empty:
            return 0.0
        return float(expenses['Amount'].min())

    def highest_income(self) -> float:
        incomes = self._income_rows()
        if incomes.empty:
            return 0.0
        return float(incomes['Amount'].max())

    def expense_by_category(self) -> Dict[str, float]:
        """Absolute expense per category, in first-encounter order."""
        expenses = self._expense_rows()
        if expenses.empty:
            return {}
        totals = expenses['Amount'].abs().groupby(expenses['Category'], sort=False).sum()
        return {str(category): round(float(amount), CENT_DIGITS) for category, amount in totals.items()}

    def top_categories(self, limit: int = TOP_CATEGORY_LIMIT) -> List[Tuple[str, float]]:
        """Largest expense categories, descending; ties keep encounter order."""
        ranked = sorted(self.expense_by_category().items(), key=lambda item: item[1], reverse=True)
        return ranked[:limit]

    # Burn rate, runway and trend

    def distinct_day_count(self) -> int:
        return max(int(self.data['Date'].nunique()), 1)

    def avg_daily_spending(self) -> float:
        return self.total_expense() / self.distinct_day_count()

    def runway_days(self) -> Union[int, str]:
        """Days the balance lasts at the average daily burn.

        Returns ``INFINITE`` when no expense has ever been recorded.
        """
        if self._expense_rows().empty:
            return INFINITE
        burn_rate = self.avg_daily_spending() or 1.0
        return math.floor(self.balance() / burn_rate)

    def previous_month(self) -> Tuple[int, int]:
        """(year, month) used as the comparison period for the trend.

        Without rollover, January yields month 0, which matches nothing.
        """
        year, month = self.today.year, self.today.month - 1
        if month == 0 and self.previous_month_rollover:
            year, month = year - 1, 12
        return year, month

    def previous_month_expense(self) -> float:
        year, month = self.previous_month()
        return float(self._expense_rows(self._month_rows(year, month))['Amount'].abs().sum())

    def expense_trend(self) -> float:
        """Relative change of this month's expense versus the previous month."""
        previous = self.previous_month_expense()
        return (self.monthly_expense() - previous) / (previous or 1)

    def type_mismatches(self) -> List[int]:
        """Ids of records whose stored type disagrees with the sign of the amount."""
        mismatched = self.data[self.data['Flow'] != self.data['Type']]
        return [int(i) for i in mismatched['id']]

    def recent_transactions(self, limit: int = RECENT_TRANSACTION_LIMIT) -> List[TransactionRecord]:
        return list(self.records[:limit])

    def summary(self) -> Dict[str, Any]:
        """All dashboard figures in one dictionary."""
        trend = self.expense_trend()
        monthly_income = self.monthly_income()
        monthly_expense = self.monthly_expense()
        return {
            'total_income': self.total_income(),
            'total_expense': self.total_expense(),
            'balance': self.balance(),
            'monthly_income': monthly_income,
            'monthly_expense': monthly_expense,
            'monthly_net': monthly_income - monthly_expense,
            'month_name': self.today.strftime('%B'),
            'highest_expense': self.highest_expense(),
            'highest_income': self.highest_income(),
            'expense_by_category': self.expense_by_category(),
            'top_categories': self.top_categories(),
            'distinct_day_count': self.distinct_day_count(),
            'avg_daily_spending': self.avg_daily_spending(),
            'runway_days': self.runway_days(),
            'previous_month_expense': self.previous_month_expense(),
            'trend': trend,
            'trend_direction': 'up' if trend > 0 else 'down',
        }
