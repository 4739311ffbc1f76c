"""Date manipulation utilities"""

import calendar
from datetime import date


def month_abbr(month: int) -> str:
    """Three-letter month name (1 -> "Jan")"""
    return calendar.month_abbr[month]


def rent_due_date(year: int, month: int, due_day: int = 5) -> date:
    """Rent due date for a billing month, clamped to the month's last day"""
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, min(due_day, last_day))
