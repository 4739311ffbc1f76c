"""Dependency injection for FastAPI endpoints"""

from datetime import date
from typing import Optional

from fastapi import Depends, HTTPException, Query, Request
from sqlalchemy.orm import Session

from pg_ledger.config import settings
from pg_ledger.domain.exceptions import InvalidInputError
from pg_ledger.domain.periods import Period
from pg_ledger.infrastructure.database.session import get_db
from pg_ledger.infrastructure.database.store import RecordStore, SqlRecordStore
from pg_ledger.services.billing_service import BillingService


def get_request_id(request: Request) -> str:
    """Extract request ID from request state"""
    return getattr(request.state, "request_id", "unknown")


def get_record_store(db: Session = Depends(get_db)) -> RecordStore:
    """Provide the record store bound to the request's database session"""
    return SqlRecordStore(db)


def get_billing_service(store: RecordStore = Depends(get_record_store)) -> BillingService:
    """Provide billing service configured from settings"""
    return BillingService(
        store,
        rent_due_day=settings.rent_due_day,
        recent_payments_limit=settings.recent_payments_limit,
        ledger_include_unbilled=settings.ledger_include_unbilled,
    )


def get_period(
    month: Optional[int] = Query(None, ge=1, le=12, description="Billing month 1-12 (default: current)"),
    year: Optional[int] = Query(None, ge=1, description="Billing year (default: current)"),
) -> Period:
    """Resolve the requested billing period, defaulting to the current month"""
    today = date.today()
    try:
        return Period(
            today.year if year is None else year,
            today.month if month is None else month,
        )
    except InvalidInputError as e:
        raise HTTPException(status_code=422, detail=str(e))
