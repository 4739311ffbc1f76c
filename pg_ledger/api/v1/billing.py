"""GET /v1/billing/* - Billing overview, overdue, upcoming, collected and ledger views"""

import time

from fastapi import APIRouter, Depends, Query, Request

from pg_ledger.api.dependencies import get_billing_service, get_period, get_request_id
from pg_ledger.api.v1.schemas import (
    CollectedItem,
    CollectedResponse,
    LedgerItem,
    LedgerResponse,
    LedgerTotalsSchema,
    OverdueItem,
    OverdueResponse,
    OverviewResponse,
    PeriodSchema,
    SnapshotSchema,
    UpcomingItem,
    UpcomingResponse,
)
from pg_ledger.domain.periods import Period
from pg_ledger.domain.reports import LedgerFilter, filter_ledger_entries
from pg_ledger.infrastructure.observability.logging import log_report
from pg_ledger.infrastructure.observability.metrics import record_report
from pg_ledger.services.billing_service import BillingService

router = APIRouter()


def _finish(request: Request, view: str, period: Period, entry_count: int, start_time: float) -> None:
    duration_ms = (time.time() - start_time) * 1000
    log_report(get_request_id(request), view, period.label(), entry_count, duration_ms)


@router.get("/billing/overview", response_model=OverviewResponse)
def get_overview(
    request: Request,
    period: Period = Depends(get_period),
    service: BillingService = Depends(get_billing_service),
):
    """Dashboard totals: current-period shortfall, arrears, collections and recent payments"""
    start_time = time.time()
    overview = service.overview(period)

    record_report("overview", overview.overdue_total_cents)
    _finish(request, "overview", period, len(overview.recent_payments), start_time)

    return OverviewResponse(
        period=PeriodSchema.from_period(overview.period),
        upcoming_total_cents=overview.upcoming_total_cents,
        overdue_total_cents=overview.overdue_total_cents,
        collected_total_cents=overview.collected_total_cents,
        recent_payments=[CollectedItem.from_entry(e) for e in overview.recent_payments],
    )


@router.get("/billing/overdue", response_model=OverdueResponse)
def get_overdue(
    request: Request,
    period: Period = Depends(get_period),
    service: BillingService = Depends(get_billing_service),
):
    """Active residents with arrears from months before the selected period"""
    start_time = time.time()
    report = service.overdue_report(period)

    record_report("overdue", report.total_arrears_cents)
    _finish(request, "overdue", period, len(report.entries), start_time)

    return OverdueResponse(
        period=PeriodSchema.from_period(report.period),
        entries=[
            OverdueItem(
                resident_id=e.resident_id,
                resident_name=e.resident_name,
                room_number=e.room_number,
                arrears_cents=e.arrears_cents,
                last_fully_paid=PeriodSchema.from_period(e.last_fully_paid) if e.last_fully_paid else None,
            )
            for e in report.entries
        ],
        total_arrears_cents=report.total_arrears_cents,
    )


@router.get("/billing/upcoming", response_model=UpcomingResponse)
def get_upcoming(
    request: Request,
    period: Period = Depends(get_period),
    service: BillingService = Depends(get_billing_service),
):
    """Active residents who have not yet paid the selected period in full"""
    start_time = time.time()
    report = service.upcoming_report(period)

    record_report("upcoming")
    _finish(request, "upcoming", period, len(report.entries), start_time)

    return UpcomingResponse(
        period=PeriodSchema.from_period(report.period),
        entries=[
            UpcomingItem(
                resident_id=e.resident_id,
                resident_name=e.resident_name,
                room_number=e.room_number,
                effective_rent_cents=e.effective_rent_cents,
                amount_paid_cents=e.amount_paid_cents,
                shortfall_cents=e.shortfall_cents,
            )
            for e in report.entries
        ],
        total_shortfall_cents=report.total_shortfall_cents,
    )


@router.get("/billing/collected", response_model=CollectedResponse)
def get_collected(
    request: Request,
    period: Period = Depends(get_period),
    service: BillingService = Depends(get_billing_service),
):
    """Payments recorded against the selected period, newest first"""
    start_time = time.time()
    report = service.collected_report(period)

    record_report("collected")
    _finish(request, "collected", period, len(report.entries), start_time)

    return CollectedResponse(
        period=PeriodSchema.from_period(report.period),
        entries=[CollectedItem.from_entry(e) for e in report.entries],
        total_collected_cents=report.total_collected_cents,
    )


@router.get("/billing/ledger", response_model=LedgerResponse)
def get_ledger(
    request: Request,
    period: Period = Depends(get_period),
    status: LedgerFilter = Query(LedgerFilter.ALL, description="Display tab"),
    service: BillingService = Depends(get_billing_service),
):
    """
    Monthly statement for all active residents.

    Totals always cover the whole ledger; the status filter only narrows the
    listed entries.
    """
    start_time = time.time()
    ledger = service.period_ledger(period)
    entries = filter_ledger_entries(ledger, status)

    record_report("ledger", ledger.totals.arrears_sum_cents)
    _finish(request, "ledger", period, len(entries), start_time)

    return LedgerResponse(
        period=PeriodSchema.from_period(ledger.period),
        status_filter=status.value,
        entries=[
            LedgerItem(
                resident_id=e.resident_id,
                resident_name=e.resident_name,
                room_number=e.room_number,
                due_date=e.due_date,
                snapshot=SnapshotSchema.from_snapshot(e.snapshot),
            )
            for e in entries
        ],
        totals=LedgerTotalsSchema(
            rent_sum_cents=ledger.totals.rent_sum_cents,
            paid_sum_cents=ledger.totals.paid_sum_cents,
            arrears_sum_cents=ledger.totals.arrears_sum_cents,
            overall_due_cents=ledger.totals.overall_due_cents,
        ),
    )
