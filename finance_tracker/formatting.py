"""Formatting utilities for currency, dates and labels."""

from __future__ import annotations

from typing import Optional, Union

from .aggregation import percent_change
from .dates import DateLike, parse_date

CATEGORY_ICONS = {
    'food': '🍔',
    'transport': '🚗',
    'shopping': '🛍️',
    'bills': '📄',
    'entertainment': '🎬',
    'health': '🏥',
    'other': '📦',
    'salary': '💼',
    'freelance': '💻',
    'investment': '📈',
    'gift': '🎁',
    'other-income': '💵',
}

CATEGORY_LABELS = {
    'food': 'Food',
    'transport': 'Transport',
    'shopping': 'Shopping',
    'bills': 'Bills',
    'entertainment': 'Entertainment',
    'health': 'Health',
    'other': 'Other',
    'salary': 'Salary',
    'freelance': 'Freelance',
    'investment': 'Investment',
    'gift': 'Gift',
    'other-income': 'Other',
}

GOAL_CATEGORY_ICONS = {
    'savings': '💰',
    'investment': '📈',
    'purchase': '🛍️',
    'debt': '💳',
    'emergency': '🚨',
    'other': '📦',
}

_FALLBACK_ICON = '📦'
_FALLBACK_LABEL = 'Other'


def format_currency(amount: Union[float, int], include_sign: bool = True) -> str:
    """Format a currency amount with two decimals.

    Example:
        >>> format_currency(1234.5)
        '$1,234.50'
        >>> format_currency(-3, include_sign=False)
        '-3.00'
    """
    formatted = f"{abs(amount):,.2f}"
    sign = '-' if amount < 0 else ''
    return f"{sign}${formatted}" if include_sign else f"{sign}{formatted}"


def format_change(current: float, previous: float) -> str:
    """Describe the change against last month for a summary card."""
    change = percent_change(current, previous)
    if change is None:
        return '+100% compare to last month' if current > 0 else 'No data from last month'
    sign = '+' if change > 0 else ''
    return f"{sign}{change:.1f}% compare to last month"


def category_text(category: str) -> str:
    """Icon and label for a transaction category; unknown keys read as Other."""
    icon = CATEGORY_ICONS.get(category, _FALLBACK_ICON)
    label = CATEGORY_LABELS.get(category, _FALLBACK_LABEL)
    return f"{icon} {label}"


def goal_category_icon(category: str) -> str:
    return GOAL_CATEGORY_ICONS.get(category, _FALLBACK_ICON)


def format_short_date(value: DateLike) -> str:
    """``Jan 5`` style label."""
    day = parse_date(value)
    return f"{day.strftime('%b')} {day.day}"


def format_full_date(value: Optional[DateLike]) -> str:
    """``Jan 5, 2024`` style label; empty for missing dates."""
    if not value:
        return ''
    day = parse_date(value)
    return f"{day.strftime('%b')} {day.day}, {day.year}"


def days_left_label(days: int) -> str:
    return str(days) if days >= 0 else 'Overdue'


def format_percentage(value: float) -> str:
    return f"{value:.1f}%"
