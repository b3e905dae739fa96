"""Unit tests for savings goal progress and forecasting."""

from __future__ import annotations

from datetime import date

from finance_tracker.goals import add_months, calculate_goal_forecast, goal_contributions, goal_progress_pct
from finance_tracker.models import NOT_AVAILABLE, Goal

from tests.helpers import make_record

TODAY = date(2025, 11, 15)
TRAVEL = Goal(name='Travel Fund', target=50000, saved=15000)


def test_forecast_without_contributions() -> None:
    forecast = calculate_goal_forecast(TRAVEL, [make_record(1, -500, '2025-11-01')], TODAY)
    assert forecast['progress_pct'] == 30.0
    assert forecast['remaining'] == 35000
    assert forecast['monthly_contribution'] == 0
    assert forecast['months_remaining'] == NOT_AVAILABLE
    assert forecast['forecasted_date'] == NOT_AVAILABLE
    assert forecast['status'] == 'In Progress'


def test_contributions_count_tagged_expenses_only() -> None:
    records = [
        make_record(1, -5000, '2025-10-02', note='Goal: Travel Fund'),
        make_record(2, -2000, '2025-11-02', note='monthly Goal: Travel Fund top-up'),
        make_record(3, 1000, '2025-11-03', note='Goal: Travel Fund'),
        make_record(4, -700, '2025-11-04', note='goal: travel fund'),
    ]
    assert goal_contributions(TRAVEL, records) == 7000


def test_forecast_with_contributions() -> None:
    records = [
        make_record(1, -5000, '2025-10-02', note='Goal: Travel Fund'),
        make_record(2, -2000, '2025-11-02', note='Goal: Travel Fund'),
    ]
    forecast = calculate_goal_forecast(TRAVEL, records, TODAY)
    assert forecast['monthly_contribution'] == 7000
    assert forecast['months_remaining'] == 5
    assert forecast['forecasted_date'] == date(2026, 4, 15)


def test_forecast_rounds_months_up() -> None:
    records = [make_record(1, -4000, '2025-10-02', note='Goal: Travel Fund')]
    forecast = calculate_goal_forecast(TRAVEL, records, TODAY)
    assert forecast['months_remaining'] == 9


def test_completed_goal() -> None:
    goal = Goal(name='Travel Fund', target=50000, saved=60000)
    forecast = calculate_goal_forecast(goal, [], TODAY)
    assert forecast['progress_pct'] == 100.0
    assert forecast['remaining'] == -10000
    assert forecast['months_remaining'] == 0
    assert forecast['forecasted_date'] == NOT_AVAILABLE
    assert forecast['status'] == 'Completed'


def test_progress_is_clamped() -> None:
    assert goal_progress_pct(Goal('A', target=100, saved=250)) == 100.0
    assert goal_progress_pct(Goal('A', target=100, saved=-5)) == 0.0
    assert goal_progress_pct(Goal('A', target=200, saved=50)) == 25.0


def test_zero_target_counts_as_reached() -> None:
    assert goal_progress_pct(Goal('A', target=0, saved=0)) == 100.0
    assert calculate_goal_forecast(Goal('A', target=0, saved=10), [], TODAY)['status'] == 'Completed'


def test_add_months_clamps_day() -> None:
    assert add_months(date(2025, 1, 31), 1) == date(2025, 2, 28)
    assert add_months(date(2024, 1, 31), 1) == date(2024, 2, 29)
    assert add_months(date(2025, 11, 15), 3) == date(2026, 2, 15)


def test_contribution_tag() -> None:
    assert TRAVEL.contribution_tag == 'Goal: Travel Fund'
