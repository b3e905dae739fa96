"""Savings goal progress and completion forecast."""

from __future__ import annotations

import math
from datetime import date
from typing import Any, Dict, Sequence, Union

import pandas as pd

try:
    from .frames import records_to_frame
    from .models import NOT_AVAILABLE, Goal, TransactionRecord
except ImportError:
    from frames import records_to_frame
    from models import NOT_AVAILABLE, Goal, TransactionRecord


def add_months(start: date, months: int) -> date:
    """Advance ``start`` by calendar months, clamping to the month's last day."""
    return (pd.Timestamp(start) + pd.DateOffset(months=int(months))).date()


def goal_progress_pct(goal: Goal) -> float:
    if goal.target <= 0:
        return 100.0 if goal.saved >= goal.target else 0.0
    return max(0.0, min(goal.saved / goal.target * 100, 100.0))


def goal_contributions(goal: Goal, records: Sequence[TransactionRecord]) -> float:
    """Lifetime sum of expenses whose note tags this goal."""
    data = records_to_frame(records)
    if data.empty:
        return 0.0
    tagged = data['Note'].astype(str).str.contains(goal.contribution_tag, regex=False, na=False)
    contributions = data.loc[tagged & (data['Amount'] < 0), 'Amount']
    return float(contributions.abs().sum())


def calculate_goal_forecast(
    goal: Goal,
    records: Sequence[TransactionRecord],
    today: date,
) -> Dict[str, Any]:
    """Calculate progress towards the savings goal and when it completes.

    ``months_remaining`` and ``forecasted_date`` are ``NOT_AVAILABLE`` when
    nothing has been contributed yet and the goal is still open.
    """
    remaining = goal.target - goal.saved
    contribution = goal_contributions(goal, records)

    months_remaining: Union[int, str]
    if remaining <= 0:
        months_remaining = 0
    elif contribution > 0:
        months_remaining = math.ceil(remaining / contribution)
    else:
        months_remaining = NOT_AVAILABLE

    forecasted_date: Union[date, str] = NOT_AVAILABLE
    if months_remaining != NOT_AVAILABLE and months_remaining > 0:
        forecasted_date = add_months(today, months_remaining)

    return {
        'name': goal.name,
        'target': goal.target,
        'saved': goal.saved,
        'progress_pct': goal_progress_pct(goal),
        'remaining': remaining,
        'monthly_contribution': contribution,
        'months_remaining': months_remaining,
        'forecasted_date': forecasted_date,
        'status': 'Completed' if remaining <= 0 else 'In Progress',
    }
