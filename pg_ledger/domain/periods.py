"""Calendar billing periods and month-range arithmetic"""

from dataclasses import dataclass
from datetime import date
from typing import Iterator

from pg_ledger.domain.exceptions import InvalidInputError
from pg_ledger.utils.date_utils import month_abbr


@dataclass(frozen=True, order=True)
class Period:
    """A (year, month) billing unit, ordered by year then month"""

    year: int
    month: int

    def __post_init__(self) -> None:
        if not 1 <= self.month <= 12:
            raise InvalidInputError(f"Month must be between 1 and 12, got {self.month}")

    @classmethod
    def from_date(cls, value: date) -> "Period":
        return cls(value.year, value.month)

    @classmethod
    def current(cls, today: date | None = None) -> "Period":
        return cls.from_date(today or date.today())

    def next(self) -> "Period":
        if self.month == 12:
            return Period(self.year + 1, 1)
        return Period(self.year, self.month + 1)

    def previous(self) -> "Period":
        if self.month == 1:
            return Period(self.year - 1, 12)
        return Period(self.year, self.month - 1)

    def label(self) -> str:
        """Short display form, e.g. "Mar 2024" """
        return f"{month_abbr(self.month)} {self.year}"


def compare_periods(a: Period, b: Period) -> int:
    """Return -1, 0 or 1 as a is before, equal to or after b"""
    if a < b:
        return -1
    if a > b:
        return 1
    return 0


def months_in_period_range(start: Period, end_exclusive: Period) -> Iterator[Period]:
    """
    Yield every period from start (inclusive) to end_exclusive (exclusive).

    Per year y in [start.year, end_exclusive.year]:
    - y == start.year:         months start.month .. 12
    - intermediate years:      months 1 .. 12
    - y == end_exclusive.year: months 1 .. end_exclusive.month - 1
    Both clamps apply when the years are equal. An end before the start
    yields nothing.

    Example:
        Nov 2023 -> Feb 2024 yields Nov 2023, Dec 2023, Jan 2024
    """
    for year in range(start.year, end_exclusive.year + 1):
        first_month = start.month if year == start.year else 1
        last_month = end_exclusive.month - 1 if year == end_exclusive.year else 12
        for month in range(first_month, last_month + 1):
            yield Period(year, month)


def periods_before(start: Period, target: Period) -> Iterator[Period]:
    """Prior periods used for arrears: start up to but excluding target"""
    return months_in_period_range(start, target)
