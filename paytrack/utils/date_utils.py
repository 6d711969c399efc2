"""Calendar helpers for month-based billing schedules"""

import calendar
from datetime import date
from typing import Tuple

MONTH_NAMES = [calendar.month_name[i] for i in range(1, 13)]
MONTH_ABBREVIATIONS = [calendar.month_abbr[i] for i in range(1, 13)]


def days_in_month(year: int, month: int) -> int:
    """Number of days in the given month (leap-year aware)"""
    return calendar.monthrange(year, month)[1]


def next_month(year: int, month: int) -> Tuple[int, int]:
    """(year, month) of the month after the given one"""
    if month == 12:
        return year + 1, 1
    return year, month + 1


def clamp_day(year: int, month: int, day: int) -> int:
    """Clamp a day-of-month to the last day that exists in that month"""
    return min(day, days_in_month(year, month))


def due_date_in_month(year: int, month: int, due_day: int) -> date:
    """Concrete due date for a month; day 31 in a 30-day month becomes the 30th"""
    return date(year, month, clamp_day(year, month, due_day))
