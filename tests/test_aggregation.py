"""Unit tests for finance_tracker.aggregation."""

from __future__ import annotations

from datetime import date, timedelta

import pytest

from finance_tracker import aggregation as agg
from finance_tracker.models import Transaction


def txn(id_, type_, amount, category, day, description=None):
    return Transaction(id=id_, type=type_, amount=amount, category=category, date=day, description=description)


def sample_transactions():
    return [
        txn(1, 'income', 5000.0, 'salary', date(2024, 1, 2)),
        txn(2, 'expense', 1500.0, 'bills', date(2024, 1, 3)),
        txn(3, 'expense', 300.0, 'food', date(2024, 1, 10)),
        txn(4, 'expense', 200.0, 'food', date(2023, 12, 20)),
        txn(5, 'income', 800.0, 'freelance', date(2023, 12, 28)),
        txn(6, 'expense', 50.0, 'mystery', date(2023, 11, 15)),
    ]


def test_totals_of_empty_sequence_are_zero() -> None:
    assert agg.totals([]) == {'income': 0, 'expense': 0, 'balance': 0}


def test_totals_balance_is_income_minus_expense() -> None:
    result = agg.totals(sample_transactions())
    assert result['income'] == 5800.0
    assert result['expense'] == 2050.0
    assert result['balance'] == result['income'] - result['expense']
    assert agg.net_balance(sample_transactions()) == result['balance']


def test_filter_last_n_days_is_inclusive_of_day_29_only() -> None:
    reference = date(2024, 3, 31)
    inside = txn(1, 'expense', 10.0, 'food', reference - timedelta(days=29))
    outside = txn(2, 'expense', 10.0, 'food', reference - timedelta(days=30))
    today = txn(3, 'expense', 10.0, 'food', reference)
    future = txn(4, 'expense', 10.0, 'food', reference + timedelta(days=1))

    result = agg.filter_last_n_days([inside, outside, today, future], 30, reference)

    assert result == [inside, today]


def test_filter_last_n_days_with_non_positive_window_is_empty() -> None:
    assert agg.filter_last_n_days(sample_transactions(), 0, date(2024, 1, 10)) == []


def test_filter_until_keeps_transactions_on_or_before_date() -> None:
    result = agg.filter_until(sample_transactions(), date(2023, 12, 31))
    assert [t.id for t in result] == [4, 5, 6]


def test_monthly_comparison_wraps_january_to_previous_december() -> None:
    result = agg.monthly_comparison(sample_transactions(), 1, 2024)

    assert result['current'] == {'income': 5000.0, 'expense': 1800.0, 'balance': 3200.0}
    # November's expense belongs to neither window
    assert result['previous'] == {'income': 800.0, 'expense': 200.0, 'balance': 600.0}


def test_monthly_comparison_of_empty_sequence_is_zeroed() -> None:
    result = agg.monthly_comparison([], 6, 2024)
    assert result['current']['balance'] == 0
    assert result['previous']['income'] == 0


def test_percent_change_without_prior_data_returns_sentinel() -> None:
    assert agg.percent_change(0, 0) is None
    assert agg.percent_change(250, 0) is None


def test_percent_change_preserves_sign() -> None:
    assert agg.percent_change(150, 100) == pytest.approx(50.0)
    assert agg.percent_change(50, 100) == pytest.approx(-50.0)
    assert agg.percent_change(-50, -100) == pytest.approx(-50.0)


def test_category_breakdown_sorted_descending_and_sums_to_100() -> None:
    breakdown = agg.category_breakdown(sample_transactions(), 'expense')

    assert list(breakdown.columns) == ['Category', 'Amount', 'Percentage']
    assert list(breakdown['Category']) == ['bills', 'food', 'mystery']
    assert list(breakdown['Amount']) == [1500.0, 500.0, 50.0]
    assert breakdown['Percentage'].sum() == pytest.approx(100.0)


def test_category_breakdown_keeps_unknown_category_as_its_own_bucket() -> None:
    breakdown = agg.category_breakdown(sample_transactions(), 'expense')
    assert 'mystery' in set(breakdown['Category'])
    assert 'other' not in set(breakdown['Category'])


def test_category_breakdown_zero_total_gives_zero_percentages() -> None:
    transactions = [
        txn(1, 'expense', 0.0, 'food', date(2024, 1, 1)),
        txn(2, 'expense', 0.0, 'bills', date(2024, 1, 2)),
    ]
    breakdown = agg.category_breakdown(transactions, 'expense')
    assert len(breakdown) == 2
    assert list(breakdown['Percentage']) == [0.0, 0.0]


def test_category_breakdown_of_empty_sequence_is_empty() -> None:
    breakdown = agg.category_breakdown([], 'expense')
    assert breakdown.empty
    assert list(breakdown.columns) == ['Category', 'Amount', 'Percentage']


def test_category_breakdown_filters_by_type() -> None:
    breakdown = agg.category_breakdown(sample_transactions(), 'income')
    assert list(breakdown['Category']) == ['salary', 'freelance']


def test_daily_series_zero_fills_every_day_oldest_first() -> None:
    reference = date(2024, 1, 7)
    transactions = [
        txn(1, 'income', 100.0, 'salary', date(2024, 1, 7)),
        txn(2, 'expense', 20.0, 'food', date(2024, 1, 5)),
        txn(3, 'expense', 5.0, 'food', date(2024, 1, 5)),
        txn(4, 'expense', 999.0, 'food', date(2023, 12, 31)),
    ]

    series = agg.daily_series(transactions, 7, reference)

    assert list(series['Date']) == [date(2024, 1, d) for d in range(1, 8)]
    assert list(series['Income']) == [0.0, 0.0, 0.0, 0.0, 0.0, 0.0, 100.0]
    assert list(series['Expense']) == [0.0, 0.0, 0.0, 0.0, 25.0, 0.0, 0.0]


def test_daily_series_without_transactions_is_all_zero() -> None:
    series = agg.daily_series([], 3, date(2024, 2, 1))
    assert list(series['Date']) == [date(2024, 1, 30), date(2024, 1, 31), date(2024, 2, 1)]
    assert series['Income'].sum() == 0
    assert series['Expense'].sum() == 0


def test_date_totals_one_row_per_distinct_date() -> None:
    series = agg.date_totals(sample_transactions())
    assert list(series['Date']) == sorted({t.date for t in sample_transactions()})
    first = series.iloc[0]
    assert first['Date'] == date(2023, 11, 15)
    assert first['Expense'] == 50.0
    assert first['Income'] == 0.0


def test_aggregation_does_not_mutate_input() -> None:
    transactions = sample_transactions()
    snapshot = list(transactions)
    agg.totals(transactions)
    agg.category_breakdown(transactions, 'expense')
    agg.daily_series(transactions, 30, date(2024, 1, 10))
    assert transactions == snapshot
