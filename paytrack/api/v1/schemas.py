"""Pydantic schemas for API request/response validation

JSON bodies use camelCase keys; Python attributes stay snake_case.
Money fields (amount, creditLimit, totals) are integer cents.
"""

import uuid
from datetime import datetime
from typing import List, Literal, Optional
from pydantic import BaseModel, ConfigDict, EmailStr, Field
from pydantic.alias_generators import to_camel

BillerType = Literal["bill", "credit"]
Category = Literal["utilities", "subscription", "loan", "credit_card", "insurance", "rent", "other"]
Status = Literal["paid", "due_soon", "overdue", "pending"]


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)


# Auth


class RegisterRequest(CamelModel):
    """Request body for POST /v1/auth/register"""

    name: str = Field(..., min_length=1)
    email: EmailStr
    password: str = Field(..., min_length=6)


class LoginRequest(CamelModel):
    """Request body for POST /v1/auth/login"""

    email: EmailStr
    password: str = Field(..., min_length=1)


class UpdateMeRequest(CamelModel):
    """Request body for PUT /v1/auth/me"""

    name: Optional[str] = Field(None, min_length=1)
    email: Optional[EmailStr] = None


class ChangePasswordRequest(CamelModel):
    """Request body for PUT /v1/auth/password"""

    current_password: Optional[str] = None
    new_password: str = Field(..., min_length=6)


class UserSchema(CamelModel):
    id: uuid.UUID
    name: str
    email: str
    avatar: Optional[str] = None
    auth_provider: str
    created_at: Optional[datetime] = None


class TokenResponse(CamelModel):
    token: str
    user: UserSchema


class MessageResponse(CamelModel):
    message: str


# Billers


class BillerCreateRequest(CamelModel):
    """Request body for POST /v1/billers"""

    name: str = Field(..., min_length=1)
    type: BillerType
    amount: int = Field(..., ge=0, description="Amount in cents")
    due_date: int = Field(..., ge=1, le=31, description="Day of month the payment is due")
    cut_off_date: Optional[int] = Field(None, ge=1, le=31, description="Statement cut-off day; required for credit")
    credit_limit: Optional[int] = Field(None, ge=0, description="Credit limit in cents")
    category: Category = "other"
    notes: Optional[str] = None
    is_active: bool = True


class BillerUpdateRequest(CamelModel):
    """Request body for PUT /v1/billers/{biller_id}; omitted fields are left unchanged, null clears"""

    name: Optional[str] = Field(None, min_length=1)
    type: Optional[BillerType] = None
    amount: Optional[int] = Field(None, ge=0)
    due_date: Optional[int] = Field(None, ge=1, le=31)
    cut_off_date: Optional[int] = Field(None, ge=1, le=31)
    credit_limit: Optional[int] = Field(None, ge=0)
    category: Optional[Category] = None
    notes: Optional[str] = None
    is_active: Optional[bool] = None


class PaymentPeriodRequest(CamelModel):
    """Optional body for pay/unpay; defaults to the current month"""

    month: Optional[int] = Field(None, ge=1, le=12)
    year: Optional[int] = Field(None, ge=1970, le=9999)


class PaidMonthSchema(CamelModel):
    month: int
    year: int
    paid_at: datetime


class BillerResponse(CamelModel):
    id: uuid.UUID
    name: str
    type: BillerType
    amount: int
    due_date: int
    cut_off_date: Optional[int] = None
    credit_limit: Optional[int] = None
    category: str
    is_active: bool
    notes: Optional[str] = None
    paid_months: List[PaidMonthSchema]
    status: Status
    days_until_due: int
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class BillerListResponse(CamelModel):
    count: int
    billers: List[BillerResponse]


class PaymentResponse(CamelModel):
    message: str
    biller: BillerResponse


# Dashboard


class UpcomingPaymentSchema(CamelModel):
    id: uuid.UUID
    name: str
    days_until_due: int
    amount: int


class CreditCardRefSchema(CamelModel):
    id: uuid.UUID
    name: str


class SummaryResponse(CamelModel):
    total_due: int
    month: str
    year: int
    upcoming_payments: List[UpcomingPaymentSchema]
    overdue_count: int
    active_credit_cards: List[CreditCardRefSchema]


class ChartPointSchema(CamelModel):
    date: str
    bills: int
    credit: int


class UpcomingResponse(CamelModel):
    total_amount: int
    bills_count: int
    credit_cards_count: int
    chart_data: List[ChartPointSchema]


class MonthlySpendSchema(CamelModel):
    month: str
    bills: int
    credit: int


class MonthlyOverviewResponse(CamelModel):
    year: int
    monthly_data: List[MonthlySpendSchema]


class MonthlyTotalSchema(CamelModel):
    month: str
    amount: int


class PaymentHistoryResponse(CamelModel):
    year: int
    total_this_year: int
    monthly_data: List[MonthlyTotalSchema]


class StatusBucketSchema(CamelModel):
    count: int
    amount: int


class StatusBreakdownResponse(CamelModel):
    total_amount: int
    paid: StatusBucketSchema
    due_soon: StatusBucketSchema
    overdue: StatusBucketSchema
    pending: StatusBucketSchema


class CreditCycleCardSchema(CamelModel):
    id: uuid.UUID
    name: str
    days_remaining: int
    due_date: int
    cut_off_date: Optional[int] = None
    credit_limit: Optional[int] = None
    amount: int


class CreditCycleResponse(CamelModel):
    cards: List[CreditCycleCardSchema]


class OverviewRowSchema(CamelModel):
    id: uuid.UUID
    name: str
    type: str
    due_date: str
    raw_due_date: int
    amount: int
    status: Status
    category: str


class OverviewResponse(CamelModel):
    billers: List[OverviewRowSchema]
