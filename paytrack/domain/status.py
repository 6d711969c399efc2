"""Biller status derivation - point-in-time facts from a payment schedule"""

import math
from datetime import date, datetime

from paytrack.domain.models import Biller
from paytrack.utils.date_utils import days_in_month, due_date_in_month, next_month

DUE_SOON_WINDOW_DAYS = 7
SECONDS_PER_DAY = 24 * 60 * 60


def calculate_status(
    biller: Biller,
    ref_day: int,
    ref_month: int,
    ref_year: int,
    due_soon_window: int = DUE_SOON_WINDOW_DAYS,
) -> str:
    """
    Classify a biller relative to a reference day.

    Precedence (first match wins):
    1. paid:     the reference month/year is in paid_months
    2. overdue:  the due day has already passed this month
    3. due_soon: due within the next `due_soon_window` days (inclusive of today)
    4. pending

    Only the reference month is considered. An unpaid biller whose due day
    has passed stays overdue for the rest of the month; there is no roll
    forward into next month here (unlike days_until_due).
    """
    if biller.is_paid_for(ref_month, ref_year):
        return "paid"

    if ref_day > biller.due_day:
        return "overdue"

    if 0 <= biller.due_day - ref_day <= due_soon_window:
        return "due_soon"

    return "pending"


def status_on(biller: Biller, ref: date, due_soon_window: int = DUE_SOON_WINDOW_DAYS) -> str:
    """calculate_status with the reference taken from a date"""
    return calculate_status(biller, ref.day, ref.month, ref.year, due_soon_window)


def days_until_due(biller: Biller, now: datetime) -> int:
    """
    Days until the next occurrence of the due date.

    Uses this month's due date, or next month's once the due day has passed.
    The result is the ceiling of the fractional day difference from `now`,
    so a biller due today yields 0 regardless of the time of day.
    """
    year, month = now.year, now.month
    if now.day > biller.due_day:
        year, month = next_month(year, month)

    due = due_date_in_month(year, month, biller.due_day)
    due_at = datetime(due.year, due.month, due.day, tzinfo=now.tzinfo)
    delta = (due_at - now).total_seconds() / SECONDS_PER_DAY
    return math.ceil(delta)


def days_remaining_in_cycle(due_day: int, ref: date) -> int:
    """
    Days left until a credit card's payment due date.

    When the due day has passed this month, counts through the end of the
    current month and into next month's due day. Always in
    [0, days_in_month - 1].
    """
    month_length = days_in_month(ref.year, ref.month)
    effective_due = min(due_day, month_length)

    remaining = effective_due - ref.day
    if remaining < 0:
        remaining = month_length - ref.day + effective_due
    return remaining
