"""Pytest fixtures for testing"""

import itertools
import pytest
from datetime import date
from typing import Callable, Generator
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session
from pg_ledger.api.main import create_app
from pg_ledger.infrastructure.database.models import Base
from pg_ledger.infrastructure.database.session import get_db
from pg_ledger.infrastructure.database.store import SqlRecordStore
from pg_ledger.domain.models import Payment, PaymentMode, Resident, ResidentStatus, Room


# Test database
TEST_DATABASE_URL = "sqlite:///./test.db"
engine = create_engine(TEST_DATABASE_URL, connect_args={"check_same_thread": False})
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


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
def sql_store(db: Session) -> SqlRecordStore:
    return SqlRecordStore(db)


@pytest.fixture
def client(db: Session) -> TestClient:
    """Create FastAPI test client with test database"""
    app = create_app(create_tables=False)

    def override_get_db():
        try:
            yield db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    return TestClient(app)


@pytest.fixture
def room() -> Room:
    """Single-occupancy room renting at 5000.00"""
    return Room(id="room_101", room_number="101", capacity=2, rent_cents=500000)


@pytest.fixture
def make_resident() -> Callable[..., Resident]:
    """Factory for active residents joined in January 2024"""

    def _make(**overrides) -> Resident:
        fields = dict(
            id="res_1",
            name="Asha Rao",
            contact="9876543210",
            status=ResidentStatus.ACTIVE,
            room_id="room_101",
            joining_date=date(2024, 1, 10),
            monthly_discount_cents=None,
        )
        fields.update(overrides)
        return Resident(**fields)

    return _make


@pytest.fixture
def make_payment() -> Callable[..., Payment]:
    """Factory for payments; ids are unique within a test"""
    counter = itertools.count(1)

    def _make(amount_cents: int, month: int, year: int, **overrides) -> Payment:
        n = next(counter)
        fields = dict(
            id=f"pay_{n}",
            resident_id="res_1",
            room_id="room_101",
            amount_cents=amount_cents,
            month=month,
            year=year,
            date=date(year, month, 3),
            mode=PaymentMode.UPI,
            receipt_id=f"RCPT-{n:08d}",
        )
        fields.update(overrides)
        return Payment(**fields)

    return _make
