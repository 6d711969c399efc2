"""Data access layer for users and billers"""

import uuid
from datetime import datetime
from typing import List, Optional
from sqlalchemy import delete, func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from paytrack.infrastructure.database.models import User, BillerRecord, BillerPayment
from paytrack.domain.exceptions import AlreadyPaidError, NoSuchPaymentError
from paytrack.domain.models import Biller, PaidMonth

# Columns copied between the domain Biller and its ORM row
BILLER_FIELDS = (
    "name",
    "type",
    "amount_cents",
    "due_day",
    "cut_off_day",
    "credit_limit_cents",
    "category",
    "is_active",
    "notes",
)


def to_domain(record: BillerRecord) -> Biller:
    """Convert an ORM row (with its payments) to a domain Biller"""
    return Biller(
        id=record.id,
        user_id=record.user_id,
        paid_months=[
            PaidMonth(month=p.month, year=p.year, paid_at=p.paid_at)
            for p in record.payments
        ],
        created_at=record.created_at,
        updated_at=record.updated_at,
        **{name: getattr(record, name) for name in BILLER_FIELDS},
    )


class UserRepository:
    """Repository for user accounts"""

    def __init__(self, db: Session):
        self.db = db

    def get_by_id(self, user_id: uuid.UUID) -> Optional[User]:
        return self.db.get(User, user_id)

    def get_by_email(self, email: str) -> Optional[User]:
        return (
            self.db.query(User)
            .filter(func.lower(User.email) == email.strip().lower())
            .first()
        )

    def get_by_google_id(self, google_id: str) -> Optional[User]:
        return self.db.query(User).filter(User.google_id == google_id).first()

    def create_user(
        self,
        name: str,
        email: str,
        password_hash: Optional[str] = None,
        google_id: Optional[str] = None,
        avatar: Optional[str] = None,
        auth_provider: str = "local",
    ) -> User:
        """Persist a new account"""
        user = User(
            name=name.strip(),
            email=email.strip().lower(),
            password_hash=password_hash,
            google_id=google_id,
            avatar=avatar,
            auth_provider=auth_provider,
        )
        self.db.add(user)
        self.db.flush()  # Get ID without committing
        return user


class BillerRepository:
    """Repository for billers, always scoped to the owning user"""

    def __init__(self, db: Session):
        self.db = db

    def list_for_user(
        self,
        user_id: uuid.UUID,
        type: Optional[str] = None,
        category: Optional[str] = None,
        is_active: Optional[bool] = None,
    ) -> List[BillerRecord]:
        """Fetch a user's billers ordered by due day"""
        query = self.db.query(BillerRecord).filter(BillerRecord.user_id == user_id)
        if type is not None:
            query = query.filter(BillerRecord.type == type)
        if category is not None:
            query = query.filter(BillerRecord.category == category)
        if is_active is not None:
            query = query.filter(BillerRecord.is_active == is_active)
        return query.order_by(BillerRecord.due_day.asc()).all()

    def get_for_user(self, biller_id: uuid.UUID, user_id: uuid.UUID) -> Optional[BillerRecord]:
        """Fetch one biller; None when missing or owned by someone else"""
        return (
            self.db.query(BillerRecord)
            .filter(BillerRecord.id == biller_id, BillerRecord.user_id == user_id)
            .first()
        )

    def create_biller(self, biller: Biller) -> BillerRecord:
        """Persist a validated domain biller"""
        record = BillerRecord(
            user_id=biller.user_id,
            **{name: getattr(biller, name) for name in BILLER_FIELDS},
        )
        self.db.add(record)
        self.db.flush()
        return record

    def save_fields(self, record: BillerRecord, biller: Biller) -> BillerRecord:
        """Copy schedule fields from a patched domain biller onto its row"""
        for name in BILLER_FIELDS:
            setattr(record, name, getattr(biller, name))
        self.db.flush()
        return record

    def delete_for_user(self, biller_id: uuid.UUID, user_id: uuid.UUID) -> Optional[BillerRecord]:
        """Hard delete with payment history; None when nothing owned by the user matched"""
        record = self.get_for_user(biller_id, user_id)
        if record is None:
            return None
        self.db.delete(record)
        self.db.flush()
        return record

    def add_payment(self, biller_id: uuid.UUID, month: int, year: int, paid_at: datetime) -> BillerPayment:
        """
        Insert a paid mark, relying on the (biller, month, year) unique constraint.

        A concurrent request that already inserted the same month makes the
        insert fail instead of silently overwriting.

        Raises:
            AlreadyPaidError: the month is already marked paid
        """
        payment = BillerPayment(biller_id=biller_id, month=month, year=year, paid_at=paid_at)
        self.db.add(payment)
        try:
            self.db.flush()
        except IntegrityError as e:
            self.db.rollback()
            raise AlreadyPaidError(month, year) from e
        return payment

    def remove_payment(self, biller_id: uuid.UUID, month: int, year: int) -> None:
        """
        Delete a paid mark in a single conditional statement.

        Raises:
            NoSuchPaymentError: no row matched
        """
        result = self.db.execute(
            delete(BillerPayment).where(
                BillerPayment.biller_id == biller_id,
                BillerPayment.month == month,
                BillerPayment.year == year,
            )
        )
        if result.rowcount == 0:
            raise NoSuchPaymentError(month, year)
