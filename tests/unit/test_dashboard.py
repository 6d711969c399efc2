"""Unit tests for dashboard aggregation"""

import uuid
from datetime import date, datetime
from typing import List
from paytrack.domain import dashboard
from paytrack.domain.billers import create_biller
from paytrack.domain.ledger import mark_paid
from paytrack.domain.models import Biller, BillerDraft

TODAY = date(2026, 10, 20)
PAID_AT = datetime(2026, 10, 20, 9, 30)
FIXTURE_TOTAL = 2500 + 800 + 1699 + 12500 + 8200


def by_name(billers: List[Biller], name: str) -> Biller:
    return next(b for b in billers if b.name == name)


def test_summary_none_paid(fixture_billers: List[Biller]):
    summary = dashboard.build_summary(fixture_billers, TODAY)

    assert summary.total_due == FIXTURE_TOTAL
    assert summary.month == "October"
    assert summary.year == 2026
    # Electric (15th), Water (18th) and Metrobank (10th) have passed
    assert summary.overdue_count == 3
    assert len(summary.active_credit_cards) == 2
    assert {c.name for c in summary.active_credit_cards} == {"BPI Credit Card", "Metrobank Credit Card"}


def test_summary_upcoming_excludes_due_today(fixture_billers: List[Biller]):
    """Internet is due today (0 days) and so is not an upcoming payment"""
    summary = dashboard.build_summary(fixture_billers, TODAY)

    assert [(p.name, p.days_until_due) for p in summary.upcoming_payments] == [("BPI Credit Card", 5)]


def test_summary_paid_biller_excluded_from_total(fixture_billers: List[Biller]):
    electric = by_name(fixture_billers, "Electric Bill")
    mark_paid(electric, 10, 2026, PAID_AT)

    summary = dashboard.build_summary(fixture_billers, TODAY)

    assert summary.total_due == FIXTURE_TOTAL - electric.amount_cents
    assert summary.overdue_count == 2


def test_summary_upcoming_sorted_and_truncated():
    owner = uuid.uuid4()
    billers = []
    for offset in (7, 3, 6, 1, 5, 2, 4):
        biller = create_biller(
            owner,
            BillerDraft(name=f"Bill {offset}", type="bill", amount_cents=100 * offset, due_day=TODAY.day + offset),
        )
        biller.id = uuid.uuid4()
        billers.append(biller)

    summary = dashboard.build_summary(billers, TODAY)

    assert [p.days_until_due for p in summary.upcoming_payments] == [1, 2, 3, 4, 5]


def test_inactive_billers_excluded_everywhere(fixture_billers: List[Biller]):
    water = by_name(fixture_billers, "Water Bill")
    water.is_active = False
    mark_paid(water, 1, 2026, PAID_AT)

    assert dashboard.build_summary(fixture_billers, TODAY).total_due == FIXTURE_TOTAL - 800
    assert dashboard.build_status_breakdown(fixture_billers, TODAY).total_amount == FIXTURE_TOTAL - 800
    assert dashboard.build_upcoming_chart(fixture_billers, TODAY).bills_count == 2
    assert dashboard.build_payment_history(fixture_billers, 2026).total_this_year == 0
    assert all(row.name != "Water Bill" for row in dashboard.build_overview(fixture_billers, TODAY))


def test_upcoming_chart_groups_by_due_day(fixture_billers: List[Biller]):
    chart = dashboard.build_upcoming_chart(fixture_billers, TODAY)

    assert chart.total_amount == FIXTURE_TOTAL
    assert chart.bills_count == 3
    assert chart.credit_cards_count == 2
    assert [(p.date, p.bills, p.credit) for p in chart.chart_data] == [
        ("10/10", 0, 8200),
        ("10/15", 2500, 0),
        ("10/18", 800, 0),
        ("10/20", 1699, 0),
        ("10/25", 0, 12500),
    ]


def test_upcoming_chart_merges_same_day_and_skips_paid(fixture_billers: List[Biller]):
    owner = fixture_billers[0].user_id
    extra = create_biller(owner, BillerDraft(name="Rent", type="bill", amount_cents=20000, due_day=25, category="rent"))
    extra.id = uuid.uuid4()
    mark_paid(by_name(fixture_billers, "Internet"), 10, 2026, PAID_AT)

    chart = dashboard.build_upcoming_chart(fixture_billers + [extra], TODAY)

    points = {p.date: p for p in chart.chart_data}
    assert "10/20" not in points
    assert points["10/25"].bills == 20000
    assert points["10/25"].credit == 12500


def test_monthly_overview_counts_only_target_year(fixture_billers: List[Biller]):
    electric = by_name(fixture_billers, "Electric Bill")
    bpi = by_name(fixture_billers, "BPI Credit Card")
    mark_paid(electric, 1, 2026, PAID_AT)
    mark_paid(electric, 1, 2025, PAID_AT)
    mark_paid(bpi, 3, 2026, PAID_AT)

    overview = dashboard.build_monthly_overview(fixture_billers, 2026)

    assert overview.year == 2026
    assert len(overview.monthly_data) == 12
    assert overview.monthly_data[0].month == "Jan"
    assert overview.monthly_data[0].bills == electric.amount_cents
    assert overview.monthly_data[0].credit == 0
    assert overview.monthly_data[2].credit == bpi.amount_cents
    others = [m for i, m in enumerate(overview.monthly_data) if i not in (0, 2)]
    assert all(m.bills == 0 and m.credit == 0 for m in others)


def test_payment_history_totals(fixture_billers: List[Biller]):
    mark_paid(by_name(fixture_billers, "Electric Bill"), 9, 2026, PAID_AT)
    mark_paid(by_name(fixture_billers, "Metrobank Credit Card"), 9, 2026, PAID_AT)
    mark_paid(by_name(fixture_billers, "Water Bill"), 10, 2026, PAID_AT)

    history = dashboard.build_payment_history(fixture_billers, 2026)

    assert history.total_this_year == 2500 + 8200 + 800
    assert history.monthly_data[8].amount == 2500 + 8200
    assert history.monthly_data[9].amount == 800
    assert dashboard.build_payment_history(fixture_billers, 2025).total_this_year == 0


def test_status_breakdown(fixture_billers: List[Biller]):
    breakdown = dashboard.build_status_breakdown(fixture_billers, TODAY)

    assert breakdown.total_amount == FIXTURE_TOTAL
    assert (breakdown.overdue.count, breakdown.overdue.amount) == (3, 2500 + 800 + 8200)
    assert (breakdown.due_soon.count, breakdown.due_soon.amount) == (2, 1699 + 12500)
    assert (breakdown.paid.count, breakdown.pending.count) == (0, 0)


def test_status_breakdown_paid_bucket_grows(fixture_billers: List[Biller]):
    mark_paid(by_name(fixture_billers, "Electric Bill"), 10, 2026, PAID_AT)

    breakdown = dashboard.build_status_breakdown(fixture_billers, TODAY)

    assert breakdown.paid.count == 1
    assert breakdown.paid.amount == 2500
    assert breakdown.overdue.count == 2


def test_credit_cycle_sorted_by_days_remaining(fixture_billers: List[Biller]):
    cards = dashboard.build_credit_cycle(fixture_billers, TODAY)

    assert [(c.name, c.days_remaining) for c in cards] == [
        ("BPI Credit Card", 5),
        ("Metrobank Credit Card", 21),
    ]
    assert cards[0].cut_off_date == 5
    assert cards[0].credit_limit == 50000
    assert cards[1].due_date == 10


def test_overview_rows(fixture_billers: List[Biller]):
    rows = dashboard.build_overview(fixture_billers, TODAY)

    assert [r.raw_due_date for r in rows] == [10, 15, 18, 20, 25]
    first = rows[0]
    assert first.name == "Metrobank Credit Card"
    assert first.type == "Credit Card"
    assert first.due_date == "Oct 10, 2026"
    assert first.status == "overdue"
    assert rows[1].type == "Bill"
    assert rows[3].status == "due_soon"


def test_format_due_date_clamps_to_month_end():
    assert dashboard.format_due_date(31, 2, 2026) == "Feb 28, 2026"
    assert dashboard.format_due_date(31, 2, 2024) == "Feb 29, 2024"
    assert dashboard.format_due_date(5, 12, 2026) == "Dec 5, 2026"


def test_empty_collection():
    summary = dashboard.build_summary([], TODAY)
    assert summary.total_due == 0
    assert summary.upcoming_payments == []
    assert dashboard.build_credit_cycle([], TODAY) == []
    assert all(m.amount == 0 for m in dashboard.build_payment_history([], 2026).monthly_data)
