"""Chart-ready series for the reports page.

Each helper reshapes figures already produced by
:class:`~finance_tracker.analytics.TransactionAnalytics` into a small
``name``/``value`` style frame; :mod:`visualization` turns those frames
into Plotly figures.
"""

from __future__ import annotations

from typing import Dict, Sequence

import pandas as pd

try:
    from .analytics import TransactionAnalytics
    from .frames import records_to_frame
    from .models import TransactionRecord
except ImportError:
    from analytics import TransactionAnalytics
    from frames import records_to_frame
    from models import TransactionRecord

MONTH_LABEL_FORMAT = '%b %y'


def balance_pie_data(analytics: TransactionAnalytics) -> pd.DataFrame:
    """Income vs expense slices, omitting any slice that is not positive."""
    slices = pd.DataFrame([
        {'name': 'Total Income', 'value': analytics.total_income()},
        {'name': 'Total Expense', 'value': analytics.total_expense()},
    ])
    return slices[slices['value'] > 0].reset_index(drop=True)


def category_pie_data(analytics: TransactionAnalytics) -> pd.DataFrame:
    by_category = analytics.expense_by_category()
    ranked = sorted(by_category.items(), key=lambda item: item[1], reverse=True)
    return pd.DataFrame(ranked, columns=['name', 'value'])


def monthly_net_data(records: Sequence[TransactionRecord], chronological: bool = False) -> pd.DataFrame:
    """Signed net amount per month label (e.g. ``"Oct 25"``).

    Months appear in the order they are first met in the collection.
    Pass ``chronological=True`` to order them by calendar month instead.
    """
    data = records_to_frame(records)
    data = data.dropna(subset=['Transaction Date']).copy()
    if data.empty:
        return pd.DataFrame(columns=['month', 'net_amount'])

    data['month'] = data['Transaction Date'].dt.strftime(MONTH_LABEL_FORMAT)
    grouped = data.groupby('month', sort=False).agg(
        net_amount=('Amount', 'sum'),
        period=('Transaction Date', 'min'),
    )
    if chronological:
        grouped = grouped.sort_values('period', kind='mergesort')
    return grouped.reset_index()[['month', 'net_amount']]


def chart_bundle(analytics: TransactionAnalytics) -> Dict[str, pd.DataFrame]:
    """The three series the reports page renders."""
    return {
        'balance': balance_pie_data(analytics),
        'category': category_pie_data(analytics),
        'monthly': monthly_net_data(analytics.records),
    }
