"""Dashboard aggregation - folds a user's billers into summary views"""

from datetime import date
from typing import Dict, Iterable, List

from paytrack.domain.models import (
    STATUSES,
    Biller,
    ChartPoint,
    CreditCardRef,
    CreditCycleCard,
    MonthlyOverview,
    MonthlySpend,
    MonthlyTotal,
    OverviewRow,
    PaymentHistory,
    StatusBreakdown,
    StatusBucket,
    Summary,
    UpcomingChart,
    UpcomingPayment,
)
from paytrack.domain.status import DUE_SOON_WINDOW_DAYS, days_remaining_in_cycle, status_on
from paytrack.utils.date_utils import MONTH_ABBREVIATIONS, MONTH_NAMES, clamp_day

UPCOMING_PAYMENTS_LIMIT = 5


def active_billers(billers: Iterable[Biller]) -> List[Biller]:
    return [b for b in billers if b.is_active]


def build_summary(
    billers: Iterable[Biller],
    today: date,
    due_soon_window: int = DUE_SOON_WINDOW_DAYS,
    upcoming_limit: int = UPCOMING_PAYMENTS_LIMIT,
) -> Summary:
    """
    Totals for the top dashboard cards.

    - total_due: sum of unpaid amounts
    - upcoming_payments: unpaid billers due in 1..window days, nearest first
    - active_credit_cards: every active credit biller, paid or not
    """
    total_due = 0
    overdue_count = 0
    upcoming: List[UpcomingPayment] = []
    credit_cards: List[CreditCardRef] = []

    for biller in active_billers(billers):
        status = status_on(biller, today, due_soon_window)

        if status != "paid":
            total_due += biller.amount_cents

        if status == "overdue":
            overdue_count += 1

        if status in ("due_soon", "pending"):
            days_until_due = biller.due_day - today.day
            if 0 < days_until_due <= due_soon_window:
                upcoming.append(
                    UpcomingPayment(
                        id=biller.id,
                        name=biller.name,
                        days_until_due=days_until_due,
                        amount=biller.amount_cents,
                    )
                )

        if biller.is_credit:
            credit_cards.append(CreditCardRef(id=biller.id, name=biller.name))

    upcoming.sort(key=lambda p: p.days_until_due)

    return Summary(
        total_due=total_due,
        month=MONTH_NAMES[today.month - 1],
        year=today.year,
        upcoming_payments=upcoming[:upcoming_limit],
        overdue_count=overdue_count,
        active_credit_cards=credit_cards,
    )


def build_upcoming_chart(
    billers: Iterable[Biller],
    today: date,
    due_soon_window: int = DUE_SOON_WINDOW_DAYS,
) -> UpcomingChart:
    """Unpaid amounts grouped by due day, split into bills and credit"""
    total_amount = 0
    bills_count = 0
    credit_cards_count = 0
    points: Dict[int, ChartPoint] = {}

    for biller in active_billers(billers):
        if status_on(biller, today, due_soon_window) == "paid":
            continue

        total_amount += biller.amount_cents

        point = points.get(biller.due_day)
        if point is None:
            point = ChartPoint(date=f"{today.month:02d}/{biller.due_day:02d}")
            points[biller.due_day] = point

        if biller.is_credit:
            credit_cards_count += 1
            point.credit += biller.amount_cents
        else:
            bills_count += 1
            point.bills += biller.amount_cents

    return UpcomingChart(
        total_amount=total_amount,
        bills_count=bills_count,
        credit_cards_count=credit_cards_count,
        chart_data=[points[day] for day in sorted(points)],
    )


def build_monthly_overview(billers: Iterable[Biller], year: int) -> MonthlyOverview:
    """Paid amounts per calendar month of `year`, split by biller type"""
    monthly = [MonthlySpend(month=name) for name in MONTH_ABBREVIATIONS]

    for biller in active_billers(billers):
        for paid in biller.paid_months:
            if paid.year != year:
                continue
            bucket = monthly[paid.month - 1]
            if biller.is_credit:
                bucket.credit += biller.amount_cents
            else:
                bucket.bills += biller.amount_cents

    return MonthlyOverview(year=year, monthly_data=monthly)


def build_payment_history(billers: Iterable[Biller], year: int) -> PaymentHistory:
    """Total paid per calendar month of `year`"""
    monthly = [MonthlyTotal(month=name) for name in MONTH_ABBREVIATIONS]
    total = 0

    for biller in active_billers(billers):
        for paid in biller.paid_months:
            if paid.year == year:
                monthly[paid.month - 1].amount += biller.amount_cents
                total += biller.amount_cents

    return PaymentHistory(year=year, total_this_year=total, monthly_data=monthly)


def build_status_breakdown(
    billers: Iterable[Biller],
    today: date,
    due_soon_window: int = DUE_SOON_WINDOW_DAYS,
) -> StatusBreakdown:
    """Count and amount per status, plus the grand total"""
    buckets = {status: StatusBucket() for status in STATUSES}
    total_amount = 0

    for biller in active_billers(billers):
        bucket = buckets[status_on(biller, today, due_soon_window)]
        bucket.count += 1
        bucket.amount += biller.amount_cents
        total_amount += biller.amount_cents

    return StatusBreakdown(
        total_amount=total_amount,
        paid=buckets["paid"],
        due_soon=buckets["due_soon"],
        overdue=buckets["overdue"],
        pending=buckets["pending"],
    )


def build_credit_cycle(billers: Iterable[Biller], today: date) -> List[CreditCycleCard]:
    """Active credit cards ordered by days left until their due date"""
    cards = [
        CreditCycleCard(
            id=biller.id,
            name=biller.name,
            days_remaining=days_remaining_in_cycle(biller.due_day, today),
            due_date=biller.due_day,
            cut_off_date=biller.cut_off_day,
            credit_limit=biller.credit_limit_cents,
            amount=biller.amount_cents,
        )
        for biller in active_billers(billers)
        if biller.is_credit
    ]
    cards.sort(key=lambda c: c.days_remaining)
    return cards


def format_due_date(due_day: int, month: int, year: int) -> str:
    """e.g. 'Feb 28, 2026' for due day 31 in February"""
    day = clamp_day(year, month, due_day)
    return f"{MONTH_ABBREVIATIONS[month - 1]} {day}, {year}"


def build_overview(
    billers: Iterable[Biller],
    today: date,
    due_soon_window: int = DUE_SOON_WINDOW_DAYS,
) -> List[OverviewRow]:
    """Table rows for every active biller, ordered by due day"""
    rows = [
        OverviewRow(
            id=biller.id,
            name=biller.name,
            type="Credit Card" if biller.is_credit else "Bill",
            due_date=format_due_date(biller.due_day, today.month, today.year),
            raw_due_date=biller.due_day,
            amount=biller.amount_cents,
            status=status_on(biller, today, due_soon_window),
            category=biller.category,
        )
        for biller in active_billers(billers)
    ]
    rows.sort(key=lambda r: r.raw_due_date)
    return rows
