"""/v1/dashboard - read-only analytics over the caller's active billers"""

from dataclasses import asdict
from datetime import datetime
from typing import List, Optional
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from paytrack.api.v1.schemas import (
    CreditCycleResponse,
    MonthlyOverviewResponse,
    OverviewResponse,
    PaymentHistoryResponse,
    StatusBreakdownResponse,
    SummaryResponse,
    UpcomingResponse,
)
from paytrack.api.dependencies import get_current_user, get_now
from paytrack.infrastructure.database.models import User
from paytrack.infrastructure.database.session import get_db
from paytrack.infrastructure.database.repositories import BillerRepository, to_domain
from paytrack.domain.models import Biller
from paytrack.domain import dashboard
from paytrack.config import settings

router = APIRouter()


def load_active_billers(db: Session, user: User) -> List[Biller]:
    records = BillerRepository(db).list_for_user(user.id, is_active=True)
    return [to_domain(r) for r in records]


@router.get("/dashboard/summary", response_model=SummaryResponse)
def get_summary(
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
    now: datetime = Depends(get_now),
):
    """Total due this month, overdue count, next payments and credit cards"""
    summary = dashboard.build_summary(
        load_active_billers(db, user),
        now.date(),
        due_soon_window=settings.due_soon_window_days,
        upcoming_limit=settings.upcoming_payments_limit,
    )
    return SummaryResponse.model_validate(asdict(summary))


@router.get("/dashboard/upcoming", response_model=UpcomingResponse)
def get_upcoming(
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
    now: datetime = Depends(get_now),
):
    """Unpaid amounts grouped by due date for the bar chart"""
    chart = dashboard.build_upcoming_chart(load_active_billers(db, user), now.date(), settings.due_soon_window_days)
    return UpcomingResponse.model_validate(asdict(chart))


@router.get("/dashboard/monthly-overview", response_model=MonthlyOverviewResponse)
def get_monthly_overview(
    year: Optional[int] = Query(None, ge=1970, le=9999, description="Defaults to the current year"),
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
    now: datetime = Depends(get_now),
):
    overview = dashboard.build_monthly_overview(load_active_billers(db, user), year or now.year)
    return MonthlyOverviewResponse.model_validate(asdict(overview))


@router.get("/dashboard/status", response_model=StatusBreakdownResponse)
def get_status_breakdown(
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
    now: datetime = Depends(get_now),
):
    breakdown = dashboard.build_status_breakdown(load_active_billers(db, user), now.date(), settings.due_soon_window_days)
    return StatusBreakdownResponse.model_validate(asdict(breakdown))


@router.get("/dashboard/credit-cycle", response_model=CreditCycleResponse)
def get_credit_cycle(
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
    now: datetime = Depends(get_now),
):
    """Active credit cards, soonest due first"""
    cards = dashboard.build_credit_cycle(load_active_billers(db, user), now.date())
    return CreditCycleResponse.model_validate({"cards": [asdict(c) for c in cards]})


@router.get("/dashboard/payment-history", response_model=PaymentHistoryResponse)
def get_payment_history(
    year: Optional[int] = Query(None, ge=1970, le=9999, description="Defaults to the current year"),
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
    now: datetime = Depends(get_now),
):
    history = dashboard.build_payment_history(load_active_billers(db, user), year or now.year)
    return PaymentHistoryResponse.model_validate(asdict(history))


@router.get("/dashboard/overview", response_model=OverviewResponse)
def get_overview(
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
    now: datetime = Depends(get_now),
):
    rows = dashboard.build_overview(load_active_billers(db, user), now.date(), settings.due_soon_window_days)
    return OverviewResponse.model_validate({"billers": [asdict(r) for r in rows]})
