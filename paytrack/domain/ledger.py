"""Payment ledger - per-month paid marks on a biller"""

from datetime import date, datetime
from typing import Optional, Tuple

from paytrack.domain.exceptions import AlreadyPaidError, NoSuchPaymentError, ValidationError
from paytrack.domain.models import Biller, PaidMonth


def resolve_period(month: Optional[int], year: Optional[int], today: date) -> Tuple[int, int]:
    """Fill in a missing month/year from the reference date"""
    target_month = month if month is not None else today.month
    target_year = year if year is not None else today.year

    if not 1 <= target_month <= 12:
        raise ValidationError("Month must be between 1 and 12")

    return target_month, target_year


def mark_paid(biller: Biller, month: int, year: int, paid_at: datetime) -> PaidMonth:
    """
    Record a payment for (month, year).

    Raises:
        AlreadyPaidError: the month is already marked paid
    """
    if biller.is_paid_for(month, year):
        raise AlreadyPaidError(month, year)

    paid = PaidMonth(month=month, year=year, paid_at=paid_at)
    biller.paid_months.append(paid)
    return paid


def mark_unpaid(biller: Biller, month: int, year: int) -> PaidMonth:
    """
    Remove the payment recorded for (month, year).

    Raises:
        NoSuchPaymentError: nothing is recorded for that month
    """
    for index, paid in enumerate(biller.paid_months):
        if paid.month == month and paid.year == year:
            return biller.paid_months.pop(index)

    raise NoSuchPaymentError(month, year)
