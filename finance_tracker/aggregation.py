"""Aggregation engine for transactions.

Pure functions that derive balances, monthly comparisons, daily series and
category breakdowns from a flat sequence of :class:`~finance_tracker.models.Transaction`.
None of them mutate their input, and all of them return zeroed structures
for an empty sequence.

Amounts are summed with ordinary float addition. Categories are grouped on
the literal key stored in each record; mapping unknown keys to an "Other"
label happens at presentation time.
"""

from __future__ import annotations

from datetime import date
from typing import Dict, Iterable, List, Optional, Sequence

import pandas as pd

from .dates import date_range, previous_month, window_start
from .models import EXPENSE, INCOME, Transaction

FRAME_COLUMNS = ['Id', 'Date', 'Type', 'Category', 'Amount', 'Description']
BREAKDOWN_COLUMNS = ['Category', 'Amount', 'Percentage']
SERIES_COLUMNS = ['Date', 'Income', 'Expense']


def transactions_frame(transactions: Iterable[Transaction]) -> pd.DataFrame:
    """Build a DataFrame with one row per transaction.

    ``Date`` holds ``datetime.date`` values so rows can be matched against
    calendar days directly.
    """
    rows = [
        {
            'Id': t.id,
            'Date': t.date,
            'Type': t.type,
            'Category': t.category,
            'Amount': float(t.amount),
            'Description': t.description or '',
        }
        for t in transactions
    ]
    if not rows:
        return pd.DataFrame(columns=FRAME_COLUMNS)
    return pd.DataFrame(rows, columns=FRAME_COLUMNS)


def totals(transactions: Iterable[Transaction]) -> Dict[str, float]:
    """Sum income and expense and derive the balance."""
    income = 0.0
    expense = 0.0
    for t in transactions:
        if t.type == INCOME:
            income += t.amount
        else:
            expense += t.amount
    return {'income': income, 'expense': expense, 'balance': income - expense}


def net_balance(transactions: Iterable[Transaction]) -> float:
    return totals(transactions)['balance']


def filter_last_n_days(transactions: Iterable[Transaction], n: int, reference_date: date) -> List[Transaction]:
    """Return transactions dated within the ``n`` calendar days ending at ``reference_date``.

    The window is inclusive on both ends: ``reference_date - (n - 1)``
    through ``reference_date``.
    """
    if n <= 0:
        return []
    start = window_start(reference_date, n)
    return [t for t in transactions if start <= t.date <= reference_date]


def filter_until(transactions: Iterable[Transaction], end_date: date) -> List[Transaction]:
    """Return transactions dated on or before ``end_date``."""
    return [t for t in transactions if t.date <= end_date]


def monthly_comparison(transactions: Iterable[Transaction], month: int, year: int) -> Dict[str, Dict[str, float]]:
    """Totals for a calendar month and the month before it.

    January compares against December of the previous year. Transactions in
    any other month are ignored.
    """
    prev_month, prev_year = previous_month(month, year)
    current: List[Transaction] = []
    previous: List[Transaction] = []
    for t in transactions:
        if t.date.month == month and t.date.year == year:
            current.append(t)
        elif t.date.month == prev_month and t.date.year == prev_year:
            previous.append(t)
    return {'current': totals(current), 'previous': totals(previous)}


def percent_change(current: float, previous: float) -> Optional[float]:
    """Signed percentage change from ``previous`` to ``current``.

    Returns ``None`` when there is no comparable prior data (``previous`` is
    zero).
    """
    if previous == 0:
        return None
    return (current - previous) / previous * 100


def category_breakdown(transactions: Iterable[Transaction], type_: str = EXPENSE) -> pd.DataFrame:
    """Sum amounts per category for one transaction type.

    Returns:
        DataFrame with ``Category``, ``Amount`` and ``Percentage`` columns
        sorted by amount, largest first. Percentages are 0 when the total is 0.
    """
    frame = transactions_frame(transactions)
    subset = frame[frame['Type'] == type_]
    if subset.empty:
        return pd.DataFrame(columns=BREAKDOWN_COLUMNS)

    amounts = subset.groupby('Category', sort=False)['Amount'].sum()
    amounts = amounts.sort_values(ascending=False, kind='stable')
    total = float(amounts.sum())

    result = amounts.rename('Amount').reset_index()
    if total > 0:
        result['Percentage'] = result['Amount'] / total * 100
    else:
        result['Percentage'] = 0.0
    return result[BREAKDOWN_COLUMNS]


def _series_for_days(frame: pd.DataFrame, days: Sequence[date]) -> pd.DataFrame:
    if frame.empty:
        sums = pd.DataFrame(0.0, index=pd.Index(days, name='Date'), columns=[INCOME, EXPENSE])
    else:
        sums = (
            frame.groupby(['Date', 'Type'])['Amount']
            .sum()
            .unstack(fill_value=0.0)
            .reindex(index=list(days), columns=[INCOME, EXPENSE], fill_value=0.0)
        )
    return pd.DataFrame({
        'Date': list(days),
        'Income': sums[INCOME].astype(float).to_list(),
        'Expense': sums[EXPENSE].astype(float).to_list(),
    }, columns=SERIES_COLUMNS)


def daily_series(transactions: Iterable[Transaction], days: int, reference_date: date) -> pd.DataFrame:
    """Income and expense per calendar day for the last ``days`` days.

    One row per day, oldest first. Days without transactions are present
    with zero sums.
    """
    if days <= 0:
        return pd.DataFrame(columns=SERIES_COLUMNS)
    window = filter_last_n_days(transactions, days, reference_date)
    calendar = date_range(window_start(reference_date, days), reference_date)
    return _series_for_days(transactions_frame(window), calendar)


def date_totals(transactions: Iterable[Transaction]) -> pd.DataFrame:
    """Income and expense per distinct transaction date, ascending."""
    frame = transactions_frame(transactions)
    if frame.empty:
        return pd.DataFrame(columns=SERIES_COLUMNS)
    days = sorted(frame['Date'].unique())
    return _series_for_days(frame, days)
