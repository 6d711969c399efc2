"""Domain models - pure Python dataclasses representing business entities"""

import uuid
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, List, Optional

BILLER_TYPES = ("bill", "credit")

CATEGORIES = (
    "utilities",
    "subscription",
    "loan",
    "credit_card",
    "insurance",
    "rent",
    "other",
)

STATUSES = ("paid", "due_soon", "overdue", "pending")


class _Unset:
    """Marker for a patch field the caller did not send"""

    def __repr__(self) -> str:
        return "UNSET"


UNSET: Any = _Unset()


@dataclass
class PaidMonth:
    """A calendar month for which a biller was marked paid"""

    month: int  # 1-12
    year: int
    paid_at: datetime


@dataclass
class Biller:
    """Recurring bill or credit card obligation owned by one user"""

    user_id: uuid.UUID
    name: str
    type: str  # "bill" or "credit"
    amount_cents: int
    due_day: int  # 1-31
    cut_off_day: Optional[int] = None
    credit_limit_cents: Optional[int] = None
    category: str = "other"
    is_active: bool = True
    notes: Optional[str] = None
    paid_months: List[PaidMonth] = field(default_factory=list)
    id: Optional[uuid.UUID] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @property
    def is_credit(self) -> bool:
        return self.type == "credit"

    def is_paid_for(self, month: int, year: int) -> bool:
        return any(p.month == month and p.year == year for p in self.paid_months)


@dataclass
class BillerDraft:
    """Fields supplied when creating a biller"""

    name: str
    type: str
    amount_cents: int
    due_day: int
    cut_off_day: Optional[int] = None
    credit_limit_cents: Optional[int] = None
    category: str = "other"
    notes: Optional[str] = None
    is_active: bool = True


@dataclass
class BillerPatch:
    """Partial update; UNSET leaves a field alone, None clears it"""

    name: Optional[str] = UNSET
    type: Optional[str] = UNSET
    amount_cents: Optional[int] = UNSET
    due_day: Optional[int] = UNSET
    cut_off_day: Optional[int] = UNSET
    credit_limit_cents: Optional[int] = UNSET
    category: Optional[str] = UNSET
    notes: Optional[str] = UNSET
    is_active: Optional[bool] = UNSET


# Dashboard views


@dataclass
class UpcomingPayment:
    id: uuid.UUID
    name: str
    days_until_due: int
    amount: int


@dataclass
class CreditCardRef:
    id: uuid.UUID
    name: str


@dataclass
class Summary:
    """Top-of-dashboard cards"""

    total_due: int
    month: str
    year: int
    upcoming_payments: List[UpcomingPayment]
    overdue_count: int
    active_credit_cards: List[CreditCardRef]


@dataclass
class ChartPoint:
    date: str  # "MM/DD"
    bills: int = 0
    credit: int = 0


@dataclass
class UpcomingChart:
    total_amount: int
    bills_count: int
    credit_cards_count: int
    chart_data: List[ChartPoint]


@dataclass
class MonthlySpend:
    month: str
    bills: int = 0
    credit: int = 0


@dataclass
class MonthlyOverview:
    year: int
    monthly_data: List[MonthlySpend]


@dataclass
class MonthlyTotal:
    month: str
    amount: int = 0


@dataclass
class PaymentHistory:
    year: int
    total_this_year: int
    monthly_data: List[MonthlyTotal]


@dataclass
class StatusBucket:
    count: int = 0
    amount: int = 0


@dataclass
class StatusBreakdown:
    total_amount: int
    paid: StatusBucket
    due_soon: StatusBucket
    overdue: StatusBucket
    pending: StatusBucket


@dataclass
class CreditCycleCard:
    id: uuid.UUID
    name: str
    days_remaining: int
    due_date: int
    cut_off_date: Optional[int]
    credit_limit: Optional[int]
    amount: int


@dataclass
class OverviewRow:
    id: uuid.UUID
    name: str
    type: str  # "Bill" or "Credit Card"
    due_date: str
    raw_due_date: int
    amount: int
    status: str
    category: str
