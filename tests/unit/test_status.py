"""Unit tests for biller status derivation"""

import uuid
import pytest
from datetime import date, datetime
from paytrack.domain.models import Biller, PaidMonth
from paytrack.domain.status import calculate_status, days_remaining_in_cycle, days_until_due, status_on
from paytrack.utils.date_utils import days_in_month


def make_biller(due_day: int = 15, amount_cents: int = 2500, **kwargs) -> Biller:
    return Biller(
        user_id=uuid.uuid4(),
        name="Electric Bill",
        type=kwargs.pop("type", "bill"),
        amount_cents=amount_cents,
        due_day=due_day,
        **kwargs,
    )


def paid(month: int, year: int) -> PaidMonth:
    return PaidMonth(month=month, year=year, paid_at=datetime(year, month, 1))


def test_overdue_when_due_day_passed():
    """Due on the 15th, unpaid, checked on the 20th"""
    biller = make_biller(due_day=15, amount_cents=2500)
    assert calculate_status(biller, 20, 10, 2026) == "overdue"


def test_due_soon_within_seven_days():
    """Due on the 20th, checked on the 15th (5 days away)"""
    biller = make_biller(due_day=20)
    assert calculate_status(biller, 15, 10, 2026) == "due_soon"


def test_due_today_is_due_soon():
    assert calculate_status(make_biller(due_day=20), 20, 10, 2026) == "due_soon"


def test_due_exactly_seven_days_out_is_due_soon():
    assert calculate_status(make_biller(due_day=27), 20, 10, 2026) == "due_soon"


def test_pending_beyond_seven_days():
    assert calculate_status(make_biller(due_day=28), 20, 10, 2026) == "pending"


@pytest.mark.parametrize("due_day", [1, 15, 20, 31])
def test_paid_wins_regardless_of_due_day(due_day: int):
    biller = make_biller(due_day=due_day, paid_months=[paid(10, 2026)])
    for ref_day in (1, 15, 31):
        assert calculate_status(biller, ref_day, 10, 2026) == "paid"


def test_payment_for_other_period_does_not_count():
    """A September payment, or October of last year, leaves October unpaid"""
    biller = make_biller(due_day=15, paid_months=[paid(9, 2026), paid(10, 2025)])
    assert calculate_status(biller, 20, 10, 2026) == "overdue"


def test_unpaid_statuses_are_exclusive_and_exhaustive():
    for due_day in range(1, 32):
        biller = make_biller(due_day=due_day)
        for ref_day in range(1, 32):
            status = calculate_status(biller, ref_day, 10, 2026)
            if ref_day > due_day:
                expected = "overdue"
            elif 0 <= due_day - ref_day <= 7:
                expected = "due_soon"
            else:
                expected = "pending"
            assert status == expected, (due_day, ref_day)


def test_status_on_uses_date_parts():
    biller = make_biller(due_day=15, paid_months=[paid(2, 2024)])
    assert status_on(biller, date(2024, 2, 29)) == "paid"
    assert status_on(biller, date(2024, 3, 1)) == "pending"


def test_status_never_rolls_into_next_month():
    """Overdue stays overdue while days_until_due already counts to next month"""
    biller = make_biller(due_day=5)
    now = datetime(2026, 10, 20, 9, 30)

    assert status_on(biller, now.date()) == "overdue"
    # Nov 5 00:00 minus Oct 20 09:30 = 15 days - 9.5h -> ceil 15
    assert days_until_due(biller, now) == 15


def test_days_until_due_this_month():
    biller = make_biller(due_day=25)
    assert days_until_due(biller, datetime(2026, 10, 20, 9, 30)) == 5


def test_days_until_due_at_midnight_is_exact():
    biller = make_biller(due_day=20)
    assert days_until_due(biller, datetime(2026, 10, 15, 0, 0)) == 5


def test_days_until_due_today_is_zero():
    biller = make_biller(due_day=20)
    assert days_until_due(biller, datetime(2026, 10, 20, 18, 0)) == 0


def test_days_until_due_rolls_over_year_end():
    biller = make_biller(due_day=5)
    # Jan 5 2027 00:00 minus Dec 20 2026 12:00 = 15.5 days
    assert days_until_due(biller, datetime(2026, 12, 20, 12, 0)) == 16


def test_days_until_due_clamps_to_short_month():
    """Due on the 30th, checked Jan 31: February has no 30th, so Feb 28 is used"""
    biller = make_biller(due_day=30)
    assert days_until_due(biller, datetime(2026, 1, 31, 10, 0)) == 28


def test_days_until_due_never_negative():
    for due_day in range(1, 32):
        biller = make_biller(due_day=due_day)
        for ref_day in range(1, 32):
            assert days_until_due(biller, datetime(2026, 10, ref_day, 23, 59)) >= 0


def test_cycle_days_remaining_before_due_day():
    assert days_remaining_in_cycle(25, date(2026, 10, 20)) == 5


def test_cycle_days_remaining_rolls_to_next_month():
    # 31 days in October: 31 - 20 + 10
    assert days_remaining_in_cycle(10, date(2026, 10, 20)) == 21


def test_cycle_days_remaining_leap_february():
    assert days_remaining_in_cycle(5, date(2024, 2, 20)) == 14
    assert days_remaining_in_cycle(5, date(2026, 2, 20)) == 13


def test_cycle_days_remaining_clamps_due_day_31():
    assert days_remaining_in_cycle(31, date(2026, 2, 1)) == 27


def test_cycle_days_remaining_within_month_bounds():
    for year in (2024, 2026):
        for month in range(1, 13):
            month_length = days_in_month(year, month)
            for due_day in range(1, 32):
                for ref_day in range(1, month_length + 1):
                    remaining = days_remaining_in_cycle(due_day, date(year, month, ref_day))
                    assert 0 <= remaining <= month_length - 1, (year, month, due_day, ref_day)
