"""Seed a demo account with a handful of bills and credit cards

Usage:
    python -m paytrack.seed
"""

import logging
from sqlalchemy.orm import Session

from paytrack.config import settings
from paytrack.domain.billers import create_biller
from paytrack.domain.models import BillerDraft
from paytrack.infrastructure.database.models import User
from paytrack.infrastructure.database.repositories import BillerRepository, UserRepository
from paytrack.infrastructure.database.session import SessionLocal, init_db
from paytrack.infrastructure.observability.logging import setup_logging
from paytrack.infrastructure.security.passwords import hash_password

DEMO_EMAIL = "test@example.com"
DEMO_PASSWORD = "password123"

DEMO_BILLERS = [
    BillerDraft(name="Electric Bill", type="bill", amount_cents=2500, due_day=15, category="utilities"),
    BillerDraft(name="Water Bill", type="bill", amount_cents=800, due_day=18, category="utilities"),
    BillerDraft(name="Internet", type="bill", amount_cents=1699, due_day=20, category="subscription"),
    BillerDraft(
        name="BPI Credit Card",
        type="credit",
        amount_cents=12500,
        due_day=25,
        cut_off_day=5,
        credit_limit_cents=50000,
        category="credit_card",
    ),
    BillerDraft(
        name="Metrobank Credit Card",
        type="credit",
        amount_cents=8200,
        due_day=10,
        cut_off_day=22,
        credit_limit_cents=30000,
        category="credit_card",
    ),
]


def seed(db: Session) -> User:
    """Replace the demo user (and its billers) with a fresh copy"""
    users = UserRepository(db)

    existing = users.get_by_email(DEMO_EMAIL)
    if existing is not None:
        db.delete(existing)
        db.flush()

    user = users.create_user(
        name="Test User",
        email=DEMO_EMAIL,
        password_hash=hash_password(DEMO_PASSWORD),
    )

    billers = BillerRepository(db)
    for draft in DEMO_BILLERS:
        billers.create_biller(create_biller(user.id, draft))

    db.commit()
    return user


def main() -> None:
    setup_logging(settings.log_level)
    init_db()

    db = SessionLocal()
    try:
        user = seed(db)
        logging.info("Seeded demo user", extra={"user_id": str(user.id), "email": user.email})
    finally:
        db.close()


if __name__ == "__main__":
    main()
