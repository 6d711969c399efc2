"""Integration test for the demo data seeder"""

from sqlalchemy.orm import Session
from paytrack.infrastructure.database.repositories import BillerRepository, UserRepository
from paytrack.infrastructure.security.passwords import verify_password
from paytrack.seed import DEMO_EMAIL, DEMO_PASSWORD, seed


def test_seed_creates_demo_user_and_billers(db: Session):
    user = seed(db)

    billers = BillerRepository(db).list_for_user(user.id)
    assert len(billers) == 5
    assert sum(1 for b in billers if b.type == "credit") == 2
    assert verify_password(DEMO_PASSWORD, user.password_hash)


def test_seed_is_repeatable(db: Session):
    first_id = seed(db).id
    second = seed(db)

    assert first_id != second.id
    assert UserRepository(db).get_by_email(DEMO_EMAIL).id == second.id
    assert len(BillerRepository(db).list_for_user(second.id)) == 5
