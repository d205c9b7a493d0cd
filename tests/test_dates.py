from datetime import date, datetime

import pytest

from finance_tracker import dates


def test_parse_date_accepts_strings_dates_and_datetimes() -> None:
    assert dates.parse_date('2024-02-29') == date(2024, 2, 29)
    assert dates.parse_date(date(2024, 1, 1)) == date(2024, 1, 1)
    assert dates.parse_date(datetime(2024, 1, 1, 23, 59)) == date(2024, 1, 1)


@pytest.mark.parametrize('value', ['', None, '2024-13-01', 'yesterday'])
def test_parse_date_rejects_invalid_values(value) -> None:
    with pytest.raises(ValueError):
        dates.parse_date(value)


def test_days_remaining_counts_forward_and_overdue() -> None:
    assert dates.days_remaining('2024-01-10', '2024-01-01') == 9
    assert dates.days_remaining('2024-01-01', '2024-01-10') == -9
    assert dates.days_remaining('2024-01-01', '2024-01-01') == 0


def test_days_taken_rounds_partial_days_up() -> None:
    created = datetime(2024, 1, 1, 10, 0)
    assert dates.days_taken(created, '2024-01-03') == 2
    assert dates.days_taken(dates.timestamp_ms(created), date(2024, 1, 3)) == 2


def test_days_taken_same_day_is_not_positive() -> None:
    assert dates.days_taken(datetime(2024, 1, 1, 10, 0), '2024-01-01') <= 0


def test_previous_month_wraps_year() -> None:
    assert dates.previous_month(1, 2024) == (12, 2023)
    assert dates.previous_month(7, 2024) == (6, 2024)


def test_end_of_previous_month() -> None:
    assert dates.end_of_previous_month(date(2024, 3, 15)) == date(2024, 2, 29)
    assert dates.end_of_previous_month(date(2024, 1, 1)) == date(2023, 12, 31)


def test_window_start_and_range() -> None:
    start = dates.window_start(date(2024, 1, 30), 30)
    assert start == date(2024, 1, 1)
    assert len(dates.date_range(start, date(2024, 1, 30))) == 30
