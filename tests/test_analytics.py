"""Unit tests for finance_tracker.analytics."""

from __future__ import annotations

from datetime import date

from finance_tracker.analytics import TransactionAnalytics
from finance_tracker.models import INFINITE, TransactionRecord, TransactionType

from tests.helpers import make_record

TODAY = date(2025, 11, 15)


def sample_records():
    return [
        make_record(1, -500, '2025-10-25', 'Food', 'Groceries', note='Weekly shopping'),
        make_record(2, 30000, '2025-10-30', 'Salary', 'Salary', recurrent=True),
        make_record(3, -1500, '2025-11-01', 'Shopping', 'New Gadget', status='Pending'),
        make_record(4, -12000, '2025-10-01', 'Bills', 'Rent', recurrent=True),
        make_record(5, 5000, '2025-11-05', 'Investment', 'Freelance'),
    ]


def test_totals_for_two_record_scenario() -> None:
    records = [
        make_record(1, -500, '2025-10-25', 'Food'),
        make_record(2, 30000, '2025-10-30', 'Salary'),
    ]
    analytics = TransactionAnalytics(records, today=TODAY)
    assert analytics.total_income() == 30000
    assert analytics.total_expense() == 500
    assert analytics.balance() == 29500


def test_balance_is_income_minus_expense() -> None:
    analytics = TransactionAnalytics(sample_records(), today=TODAY)
    assert analytics.total_income() == 35000
    assert analytics.total_expense() == 14000
    assert analytics.balance() == analytics.total_income() - analytics.total_expense()


def test_monthly_figures_use_reference_month() -> None:
    analytics = TransactionAnalytics(sample_records(), today=TODAY)
    assert analytics.monthly_income() == 5000
    assert analytics.monthly_expense() == 1500
    assert analytics.net_monthly_flow() == 3500


def test_monthly_figures_ignore_same_month_of_other_years() -> None:
    records = [make_record(1, -100, '2024-11-03'), make_record(2, -40, '2025-11-03')]
    analytics = TransactionAnalytics(records, today=TODAY)
    assert analytics.monthly_expense() == 40


def test_extremes() -> None:
    analytics = TransactionAnalytics(sample_records(), today=TODAY)
    assert analytics.highest_expense() == -12000
    assert analytics.highest_income() == 30000


def test_extremes_default_to_zero() -> None:
    analytics = TransactionAnalytics([make_record(1, 50, '2025-11-01')], today=TODAY)
    assert analytics.highest_expense() == 0
    assert TransactionAnalytics([], today=TODAY).highest_income() == 0


def test_expense_by_category_keeps_encounter_order() -> None:
    analytics = TransactionAnalytics(sample_records(), today=TODAY)
    by_category = analytics.expense_by_category()
    assert list(by_category) == ['Food', 'Shopping', 'Bills']
    assert by_category == {'Food': 500, 'Shopping': 1500, 'Bills': 12000}
    assert sum(by_category.values()) == analytics.total_expense()


def test_top_categories_sorted_and_limited() -> None:
    categories = ['Food', 'Transport', 'Bills', 'Shopping', 'Entertainment', 'Health', 'Other Expense']
    records = [make_record(i, -(i + 1) * 10, '2025-11-01', cat) for i, cat in enumerate(categories)]
    analytics = TransactionAnalytics(records, today=TODAY)
    top = analytics.top_categories()
    assert len(top) == 5
    assert [cat for cat, _ in top] == ['Other Expense', 'Health', 'Entertainment', 'Shopping', 'Bills']
    amounts = [amount for _, amount in top]
    assert amounts == sorted(amounts, reverse=True)
    assert all(analytics.expense_by_category()[cat] == amount for cat, amount in top)


def test_top_categories_ties_keep_encounter_order() -> None:
    records = [
        make_record(1, -100, '2025-11-01', 'Transport'),
        make_record(2, -100, '2025-11-02', 'Health'),
        make_record(3, -300, '2025-11-03', 'Food'),
    ]
    top = TransactionAnalytics(records, today=TODAY).top_categories()
    assert top == [('Food', 300), ('Transport', 100), ('Health', 100)]


def test_burn_rate_and_runway() -> None:
    analytics = TransactionAnalytics(sample_records(), today=TODAY)
    assert analytics.distinct_day_count() == 5
    assert analytics.avg_daily_spending() == 2800
    assert analytics.runway_days() == 7


def test_distinct_days_count_shared_dates_once() -> None:
    records = [make_record(1, -100, '2025-11-01'), make_record(2, -300, '2025-11-01'), make_record(3, 50, '2025-11-02')]
    analytics = TransactionAnalytics(records, today=TODAY)
    assert analytics.distinct_day_count() == 2
    assert analytics.avg_daily_spending() == 200


def test_runway_is_infinite_without_expenses() -> None:
    analytics = TransactionAnalytics([make_record(1, 1000, '2025-11-01')], today=TODAY)
    assert analytics.runway_days() == INFINITE


def test_negative_balance_gives_negative_runway() -> None:
    records = [make_record(1, -300, '2025-11-01'), make_record(2, 100, '2025-11-02')]
    analytics = TransactionAnalytics(records, today=TODAY)
    # burn rate 150/day, balance -200
    assert analytics.runway_days() == -2


def test_trend_against_previous_month() -> None:
    analytics = TransactionAnalytics(sample_records(), today=TODAY)
    assert analytics.previous_month_expense() == 12500
    assert abs(analytics.expense_trend() - (-0.88)) < 1e-9
    assert analytics.summary()['trend_direction'] == 'down'


def test_trend_without_previous_month_divides_by_one() -> None:
    records = [make_record(1, -250, '2025-11-02')]
    analytics = TransactionAnalytics(records, today=TODAY)
    assert analytics.expense_trend() == 250
    assert analytics.summary()['trend_direction'] == 'up'


def test_january_has_no_previous_month_without_rollover() -> None:
    records = [make_record(1, -200, '2025-12-05'), make_record(2, -100, '2026-01-03')]
    analytics = TransactionAnalytics(records, today=date(2026, 1, 10))
    assert analytics.previous_month() == (2026, 0)
    assert analytics.previous_month_expense() == 0
    assert analytics.expense_trend() == 100


def test_january_rollover_compares_with_december() -> None:
    records = [make_record(1, -200, '2025-12-05'), make_record(2, -100, '2026-01-03')]
    analytics = TransactionAnalytics(records, today=date(2026, 1, 10), previous_month_rollover=True)
    assert analytics.previous_month() == (2025, 12)
    assert analytics.expense_trend() == -0.5


def test_empty_collection() -> None:
    summary = TransactionAnalytics([], today=TODAY).summary()
    assert summary['total_income'] == 0
    assert summary['total_expense'] == 0
    assert summary['balance'] == 0
    assert summary['monthly_income'] == 0
    assert summary['monthly_expense'] == 0
    assert summary['top_categories'] == []
    assert summary['expense_by_category'] == {}
    assert summary['distinct_day_count'] == 1
    assert summary['avg_daily_spending'] == 0
    assert summary['runway_days'] == INFINITE
    assert summary['trend'] == 0


def test_summary_month_name() -> None:
    assert TransactionAnalytics([], today=TODAY).summary()['month_name'] == 'November'


def test_type_mismatches_are_reported_by_sign() -> None:
    bad = TransactionRecord(
        id=9, description='Refund', amount=-20.0, date='2025-11-02',
        category='Gift', type=TransactionType.INCOME,
    )
    analytics = TransactionAnalytics(sample_records() + [bad], today=TODAY)
    assert analytics.type_mismatches() == [9]
    # classification follows the amount sign, not the stored type
    assert analytics.total_expense() == 14020


def test_recent_transactions_in_collection_order() -> None:
    records = sample_records()
    analytics = TransactionAnalytics(records, today=TODAY)
    assert analytics.recent_transactions(limit=2) == records[:2]


def test_input_collection_is_not_modified() -> None:
    records = sample_records()
    snapshot = list(records)
    TransactionAnalytics(records, today=TODAY).summary()
    assert records == snapshot


def test_category_totals_add_up_for_cent_amounts() -> None:
    records = [
        make_record(1, -0.1, '2025-11-01', 'Food'),
        make_record(2, -0.2, '2025-11-02', 'Transport'),
        make_record(3, -0.7, '2025-11-03', 'Food'),
        make_record(4, -0.3, '2025-11-04', 'Bills'),
        make_record(5, -19.99, '2025-11-05', 'Shopping'),
        make_record(6, -0.01, '2025-11-06', 'Transport'),
    ]
    analytics = TransactionAnalytics(records, today=TODAY)
    by_category = analytics.expense_by_category()
    assert by_category == {'Food': 0.8, 'Transport': 0.21, 'Bills': 0.3, 'Shopping': 19.99}
    assert sum(by_category.values()) == analytics.total_expense()
    assert round(analytics.total_expense(), 2) == 21.3
