"""Unit tests for billing period arithmetic"""

import pytest
from datetime import date
from pg_ledger.domain.exceptions import InvalidInputError
from pg_ledger.domain.periods import Period, compare_periods, months_in_period_range, periods_before


def test_compare_periods_orders_by_year_then_month():
    assert compare_periods(Period(2023, 12), Period(2024, 1)) == -1
    assert compare_periods(Period(2024, 3), Period(2024, 3)) == 0
    assert compare_periods(Period(2024, 11), Period(2024, 2)) == 1


def test_next_and_previous_roll_over_year():
    assert Period(2023, 12).next() == Period(2024, 1)
    assert Period(2024, 1).previous() == Period(2023, 12)
    assert Period(2024, 6).next() == Period(2024, 7)


def test_invalid_month_rejected():
    with pytest.raises(InvalidInputError):
        Period(2024, 13)
    with pytest.raises(InvalidInputError):
        Period(2024, 0)


def test_range_same_year():
    """Both clamps apply when start and end share a year"""
    periods = list(months_in_period_range(Period(2024, 1), Period(2024, 3)))
    assert periods == [Period(2024, 1), Period(2024, 2)]


def test_range_spanning_years():
    periods = list(months_in_period_range(Period(2022, 11), Period(2024, 2)))

    assert periods[0] == Period(2022, 11)
    assert periods[-1] == Period(2024, 1)
    assert len(periods) == 2 + 12 + 1  # Nov-Dec 2022, all of 2023, Jan 2024


def test_range_is_empty_for_equal_or_reversed_bounds():
    assert list(months_in_period_range(Period(2024, 3), Period(2024, 3))) == []
    assert list(months_in_period_range(Period(2024, 5), Period(2024, 3))) == []
    assert list(months_in_period_range(Period(2025, 1), Period(2024, 12))) == []


def test_range_ending_in_january_excludes_end_year():
    periods = list(months_in_period_range(Period(2023, 10), Period(2024, 1)))
    assert periods == [Period(2023, 10), Period(2023, 11), Period(2023, 12)]


def test_periods_before_is_ascending_and_excludes_target():
    periods = list(periods_before(Period(2023, 12), Period(2024, 2)))
    assert periods == [Period(2023, 12), Period(2024, 1)]
    assert periods == sorted(periods)


def test_from_date_and_label():
    period = Period.from_date(date(2024, 3, 18))
    assert period == Period(2024, 3)
    assert period.label() == "Mar 2024"
    assert Period.current(date(2025, 12, 31)) == Period(2025, 12)
