"""Database engine, session factory and schema bootstrap"""

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session
from paytrack.config import settings
from paytrack.infrastructure.database.models import Base

# Pooled engine; SQLite URLs (local dev) do not accept pool sizing arguments
if settings.database_url.startswith("sqlite"):
    engine = create_engine(settings.database_url, connect_args={"check_same_thread": False})
else:
    engine = create_engine(
        settings.database_url,
        pool_pre_ping=True,  # Verify connections before using
        pool_size=10,
        max_overflow=10,
        pool_recycle=3600,
    )

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def init_db() -> None:
    """Create any missing tables"""
    Base.metadata.create_all(bind=engine)


def get_db() -> Session:
    """Request-scoped session; closed after the response is sent"""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
