"""Pytest fixtures for testing"""

import os

# Must be set before paytrack.config is imported
os.environ.setdefault("DATABASE_URL", "sqlite:///./test.db")
os.environ.setdefault("JWT_SECRET", "test-secret-key-for-testing")
os.environ.setdefault("BCRYPT_ROUNDS", "4")

import uuid
import pytest
from datetime import datetime
from typing import Callable, Generator, List
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session
from paytrack.api.main import create_app
from paytrack.api.dependencies import get_now
from paytrack.domain.billers import create_biller
from paytrack.domain.models import Biller, BillerDraft
from paytrack.infrastructure.database.models import Base, BillerRecord, User
from paytrack.infrastructure.database.repositories import BillerRepository, UserRepository
from paytrack.infrastructure.database.session import get_db
from paytrack.infrastructure.security.passwords import hash_password
from paytrack.infrastructure.security.tokens import TokenService


# Test database
TEST_DATABASE_URL = "sqlite:///./test.db"
engine = create_engine(TEST_DATABASE_URL, connect_args={"check_same_thread": False})
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# Fixed reference time: Tuesday 20 October 2026, 09:30 local
FIXED_NOW = datetime(2026, 10, 20, 9, 30)

FIXTURE_BILLERS = [
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


@pytest.fixture
def db() -> Generator[Session, None, None]:
    """Create test database and session"""
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client(db: Session) -> TestClient:
    """Create FastAPI test client with test database and a frozen clock"""
    app = create_app()

    def override_get_db():
        try:
            yield db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_now] = lambda: FIXED_NOW
    return TestClient(app)


@pytest.fixture
def make_user(db: Session) -> Callable[..., User]:
    """Factory for persisted local users"""

    def _make_user(email: str = "test@example.com", password: str = "password123", name: str = "Test User") -> User:
        user = UserRepository(db).create_user(name=name, email=email, password_hash=hash_password(password))
        db.commit()
        return user

    return _make_user


@pytest.fixture
def user(make_user) -> User:
    return make_user()


@pytest.fixture
def auth_headers(user: User) -> dict:
    token = TokenService().issue_access_token(user.id)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def seeded_billers(db: Session, user: User) -> List[BillerRecord]:
    """The five fixture billers (3 bills, 2 credit cards) stored for `user`"""
    repo = BillerRepository(db)
    records = [repo.create_biller(create_biller(user.id, draft)) for draft in FIXTURE_BILLERS]
    db.commit()
    return records


@pytest.fixture
def fixture_billers() -> List[Biller]:
    """The five fixture billers as in-memory domain objects"""
    owner = uuid.uuid4()
    billers = []
    for draft in FIXTURE_BILLERS:
        biller = create_biller(owner, draft)
        biller.id = uuid.uuid4()
        billers.append(biller)
    return billers
