"""SQLAlchemy ORM models for users, billers and their payment marks"""

import uuid
from sqlalchemy import (
    BigInteger,
    Boolean,
    Column,
    DateTime,
    ForeignKey,
    Integer,
    Text,
    UniqueConstraint,
    Uuid,
)
from sqlalchemy.orm import declarative_base, relationship
from sqlalchemy.sql import func

Base = declarative_base()


class User(Base):
    """Account that owns billers"""

    __tablename__ = "app_user"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    name = Column(Text, nullable=False)
    email = Column(Text, nullable=False, unique=True, index=True)
    password_hash = Column(Text, nullable=True)  # null for Google-only accounts
    google_id = Column(Text, nullable=True, unique=True)
    avatar = Column(Text, nullable=True)
    auth_provider = Column(Text, nullable=False, default="local")  # local | google | both
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
    updated_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now(), onupdate=func.now())

    billers = relationship("BillerRecord", back_populates="user", cascade="all, delete-orphan")


class BillerRecord(Base):
    """Recurring bill or credit card"""

    __tablename__ = "biller"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    user_id = Column(Uuid(as_uuid=True), ForeignKey("app_user.id", ondelete="CASCADE"), nullable=False, index=True)
    name = Column(Text, nullable=False)
    type = Column(Text, nullable=False)
    amount_cents = Column(BigInteger, nullable=False)
    due_day = Column(Integer, nullable=False)
    cut_off_day = Column(Integer, nullable=True)
    credit_limit_cents = Column(BigInteger, nullable=True)
    category = Column(Text, nullable=False, default="other")
    is_active = Column(Boolean, nullable=False, default=True)
    notes = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
    updated_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now(), onupdate=func.now())

    user = relationship("User", back_populates="billers")
    payments = relationship(
        "BillerPayment",
        back_populates="biller",
        cascade="all, delete-orphan",
        order_by="BillerPayment.year",
    )


class BillerPayment(Base):
    """A month marked paid; one row per (biller, month, year)"""

    __tablename__ = "biller_payment"
    __table_args__ = (UniqueConstraint("biller_id", "month", "year", name="uq_biller_payment_period"),)

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    biller_id = Column(Uuid(as_uuid=True), ForeignKey("biller.id", ondelete="CASCADE"), nullable=False, index=True)
    month = Column(Integer, nullable=False)
    year = Column(Integer, nullable=False)
    paid_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())

    biller = relationship("BillerRecord", back_populates="payments")
