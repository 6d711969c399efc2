"""/v1/billers - CRUD and payment marks for a user's billers"""

import uuid
import logging
from datetime import datetime
from typing import Optional
from fastapi import APIRouter, Depends, HTTPException, Query, Request
from sqlalchemy.orm import Session

from paytrack.api.v1.schemas import (
    BillerCreateRequest,
    BillerListResponse,
    BillerResponse,
    BillerUpdateRequest,
    BillerType,
    Category,
    MessageResponse,
    PaidMonthSchema,
    PaymentPeriodRequest,
    PaymentResponse,
)
from paytrack.api.dependencies import get_current_user, get_now, get_request_id
from paytrack.infrastructure.database.models import User, BillerRecord
from paytrack.infrastructure.database.session import get_db
from paytrack.infrastructure.database.repositories import BillerRepository, to_domain
from paytrack.domain.models import Biller, BillerDraft, BillerPatch
from paytrack.domain.billers import apply_patch, create_biller
from paytrack.domain.ledger import mark_paid, mark_unpaid, resolve_period
from paytrack.domain.status import days_until_due, status_on
from paytrack.domain.exceptions import AlreadyPaidError, NoSuchPaymentError, ValidationError
from paytrack.infrastructure.observability.metrics import record_biller_change, record_payment_mark
from paytrack.infrastructure.observability.logging import log_biller_event, log_payment_event
from paytrack.config import settings

router = APIRouter()

# Update request field -> domain Biller field
PATCH_FIELDS = {
    "name": "name",
    "type": "type",
    "amount": "amount_cents",
    "due_date": "due_day",
    "cut_off_date": "cut_off_day",
    "credit_limit": "credit_limit_cents",
    "category": "category",
    "notes": "notes",
    "is_active": "is_active",
}


def build_biller_response(biller: Biller, now: datetime) -> BillerResponse:
    """Serialize a biller with its status as of `now`"""
    return BillerResponse(
        id=biller.id,
        name=biller.name,
        type=biller.type,
        amount=biller.amount_cents,
        due_date=biller.due_day,
        cut_off_date=biller.cut_off_day,
        credit_limit=biller.credit_limit_cents,
        category=biller.category,
        is_active=biller.is_active,
        notes=biller.notes,
        paid_months=[
            PaidMonthSchema(month=p.month, year=p.year, paid_at=p.paid_at)
            for p in biller.paid_months
        ],
        status=status_on(biller, now.date(), settings.due_soon_window_days),
        days_until_due=days_until_due(biller, now),
        created_at=biller.created_at,
        updated_at=biller.updated_at,
    )


def parse_biller_id(biller_id: str) -> uuid.UUID:
    try:
        return uuid.UUID(biller_id)
    except ValueError:
        raise HTTPException(status_code=400, detail="Invalid biller ID format")


def load_owned_biller(repo: BillerRepository, biller_id: str, user: User) -> BillerRecord:
    """Fetch a biller owned by the user; 404 whether missing or someone else's"""
    record = repo.get_for_user(parse_biller_id(biller_id), user.id)
    if record is None:
        raise HTTPException(status_code=404, detail="Biller not found")
    return record


@router.get("/billers", response_model=BillerListResponse)
def list_billers(
    type: Optional[BillerType] = Query(None, description="bill or credit"),
    category: Optional[Category] = Query(None),
    is_active: Optional[bool] = Query(None, alias="isActive"),
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
    now: datetime = Depends(get_now),
):
    """List the caller's billers (ordered by due day) with computed status"""
    records = BillerRepository(db).list_for_user(user.id, type=type, category=category, is_active=is_active)
    billers = [build_biller_response(to_domain(r), now) for r in records]
    return BillerListResponse(count=len(billers), billers=billers)


@router.get("/billers/{biller_id}", response_model=BillerResponse)
def get_biller(
    biller_id: str,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
    now: datetime = Depends(get_now),
):
    record = load_owned_biller(BillerRepository(db), biller_id, user)
    return build_biller_response(to_domain(record), now)


@router.post("/billers", response_model=BillerResponse, status_code=201)
def create_biller_endpoint(
    request_body: BillerCreateRequest,
    request: Request,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
    now: datetime = Depends(get_now),
):
    """
    Create a bill or credit card.

    Credit cards must include cutOffDate; violations return 400 with every
    broken rule in the message.
    """
    request_id = get_request_id(request)

    try:
        biller = create_biller(
            user.id,
            BillerDraft(
                name=request_body.name,
                type=request_body.type,
                amount_cents=request_body.amount,
                due_day=request_body.due_date,
                cut_off_day=request_body.cut_off_date,
                credit_limit_cents=request_body.credit_limit,
                category=request_body.category,
                notes=request_body.notes,
                is_active=request_body.is_active,
            ),
        )
        record = BillerRepository(db).create_biller(biller)
        db.commit()
        db.refresh(record)

    except ValidationError as e:
        db.rollback()
        raise HTTPException(status_code=400, detail=str(e))

    except Exception as e:
        db.rollback()
        logging.error(f"Unexpected error creating biller: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=500, detail="Internal server error")

    record_biller_change("created", record.type)
    log_biller_event(request_id, str(user.id), str(record.id), "created")
    return build_biller_response(to_domain(record), now)


@router.put("/billers/{biller_id}", response_model=BillerResponse)
def update_biller(
    biller_id: str,
    request_body: BillerUpdateRequest,
    request: Request,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
    now: datetime = Depends(get_now),
):
    """Patch only the supplied fields, then re-check the credit/cut-off rule"""
    request_id = get_request_id(request)
    repo = BillerRepository(db)
    record = load_owned_biller(repo, biller_id, user)

    # Only fields present in the body; an explicit null clears the field
    patch = BillerPatch(
        **{PATCH_FIELDS[name]: getattr(request_body, name) for name in request_body.model_fields_set}
    )

    try:
        biller = apply_patch(to_domain(record), patch)
        repo.save_fields(record, biller)
        db.commit()
        db.refresh(record)

    except ValidationError as e:
        db.rollback()
        raise HTTPException(status_code=400, detail=str(e))

    except Exception as e:
        db.rollback()
        logging.error(f"Unexpected error updating biller: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=500, detail="Internal server error")

    record_biller_change("updated", record.type)
    log_biller_event(request_id, str(user.id), str(record.id), "updated")
    return build_biller_response(to_domain(record), now)


@router.delete("/billers/{biller_id}", response_model=MessageResponse)
def delete_biller(
    biller_id: str,
    request: Request,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Permanently delete a biller and its payment history"""
    record = BillerRepository(db).delete_for_user(parse_biller_id(biller_id), user.id)
    if record is None:
        raise HTTPException(status_code=404, detail="Biller not found")

    biller_type = record.type
    db.commit()

    record_biller_change("deleted", biller_type)
    log_biller_event(get_request_id(request), str(user.id), biller_id, "deleted")
    return MessageResponse(message="Biller deleted successfully")


@router.patch("/billers/{biller_id}/pay", response_model=PaymentResponse)
def pay_biller(
    biller_id: str,
    request: Request,
    request_body: Optional[PaymentPeriodRequest] = None,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
    now: datetime = Depends(get_now),
):
    """Mark a month paid (defaults to the current month)"""
    request_id = get_request_id(request)
    period = request_body or PaymentPeriodRequest()
    repo = BillerRepository(db)
    record = load_owned_biller(repo, biller_id, user)

    try:
        month, year = resolve_period(period.month, period.year, now.date())
        paid = mark_paid(to_domain(record), month, year, paid_at=now)
        repo.add_payment(record.id, paid.month, paid.year, paid.paid_at)
        db.commit()

    except (AlreadyPaidError, ValidationError) as e:
        db.rollback()
        record_payment_mark("pay", accepted=False)
        raise HTTPException(status_code=400, detail=str(e))

    db.refresh(record)
    record_payment_mark("pay", accepted=True)
    log_payment_event(request_id, str(user.id), str(record.id), "marked", month, year)
    return PaymentResponse(
        message=f"Biller marked as paid for {month}/{year}",
        biller=build_biller_response(to_domain(record), now),
    )


@router.patch("/billers/{biller_id}/unpay", response_model=PaymentResponse)
def unpay_biller(
    biller_id: str,
    request: Request,
    request_body: Optional[PaymentPeriodRequest] = None,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
    now: datetime = Depends(get_now),
):
    """Remove the paid mark for a month (defaults to the current month)"""
    request_id = get_request_id(request)
    period = request_body or PaymentPeriodRequest()
    repo = BillerRepository(db)
    record = load_owned_biller(repo, biller_id, user)

    try:
        month, year = resolve_period(period.month, period.year, now.date())
        mark_unpaid(to_domain(record), month, year)
        repo.remove_payment(record.id, month, year)
        db.commit()

    except (NoSuchPaymentError, ValidationError) as e:
        db.rollback()
        record_payment_mark("unpay", accepted=False)
        raise HTTPException(status_code=400, detail=str(e))

    db.refresh(record)
    record_payment_mark("unpay", accepted=True)
    log_payment_event(request_id, str(user.id), str(record.id), "removed", month, year)
    return PaymentResponse(
        message=f"Payment removed for {month}/{year}",
        biller=build_biller_response(to_domain(record), now),
    )
