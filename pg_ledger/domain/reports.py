"""Billing report builder - overdue, upcoming, ledger and collection views"""

from collections import defaultdict
from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Dict, Iterator, List, Optional, Tuple

from pg_ledger.domain.dues import compute_snapshot, last_fully_paid_period
from pg_ledger.domain.models import (
    BillingSnapshot,
    Payment,
    PaymentStatus,
    Resident,
    ResidentStatus,
    Room,
)
from pg_ledger.domain.periods import Period
from pg_ledger.utils.date_utils import rent_due_date


class LedgerFilter(str, Enum):
    """Display tabs over a period ledger"""

    ALL = "all"
    UNPAID = "unpaid"
    PARTIALLY_PAID = "partially_paid"
    PAID = "paid"


_FILTER_STATUS = {
    LedgerFilter.UNPAID: PaymentStatus.UNPAID,
    LedgerFilter.PARTIALLY_PAID: PaymentStatus.PARTIALLY_PAID,
    LedgerFilter.PAID: PaymentStatus.PAID,
}


@dataclass(frozen=True)
class OverdueEntry:
    resident_id: str
    resident_name: str
    room_number: str
    arrears_cents: int
    last_fully_paid: Optional[Period]


@dataclass(frozen=True)
class OverdueReport:
    period: Period
    entries: List[OverdueEntry]
    total_arrears_cents: int


@dataclass(frozen=True)
class UpcomingEntry:
    """Resident who has not yet paid the full rent for the current period"""

    resident_id: str
    resident_name: str
    room_number: str
    effective_rent_cents: int
    amount_paid_cents: int
    shortfall_cents: int


@dataclass(frozen=True)
class UpcomingReport:
    period: Period
    entries: List[UpcomingEntry]
    total_shortfall_cents: int


@dataclass(frozen=True)
class LedgerEntry:
    resident_id: str
    resident_name: str
    room_number: Optional[str]
    due_date: date
    snapshot: BillingSnapshot


@dataclass(frozen=True)
class LedgerTotals:
    rent_sum_cents: int
    paid_sum_cents: int
    arrears_sum_cents: int
    overall_due_cents: int


@dataclass(frozen=True)
class PeriodLedger:
    period: Period
    entries: List[LedgerEntry]
    totals: LedgerTotals


@dataclass(frozen=True)
class CollectedEntry:
    payment: Payment
    resident_name: str
    room_number: Optional[str]


@dataclass(frozen=True)
class CollectedReport:
    period: Period
    entries: List[CollectedEntry]
    total_collected_cents: int


@dataclass(frozen=True)
class BillingOverview:
    """Headline figures for the billing dashboard"""

    period: Period
    upcoming_total_cents: int
    overdue_total_cents: int
    collected_total_cents: int
    recent_payments: List[CollectedEntry]


def group_payments(payments: List[Payment]) -> Dict[str, List[Payment]]:
    """Index payments by resident id"""
    by_resident: Dict[str, List[Payment]] = defaultdict(list)
    for payment in payments:
        by_resident[payment.resident_id].append(payment)
    return by_resident


def _active_snapshots(
    residents: List[Resident],
    rooms: List[Room],
    payments: List[Payment],
    target: Period,
) -> Iterator[Tuple[Resident, Optional[Room], List[Payment], BillingSnapshot]]:
    """Run the dues calculator once for every active resident"""
    rooms_by_id = {room.id: room for room in rooms}
    by_resident = group_payments(payments)

    for resident in residents:
        if resident.status != ResidentStatus.ACTIVE:
            continue
        room = rooms_by_id.get(resident.room_id) if resident.room_id else None
        resident_payments = by_resident.get(resident.id, [])
        snapshot = compute_snapshot(resident, room, resident_payments, target)
        yield resident, room, resident_payments, snapshot


def build_overdue_report(
    residents: List[Resident],
    rooms: List[Room],
    payments: List[Payment],
    target: Period,
) -> OverdueReport:
    """Active residents with arrears from periods before target, largest first"""
    entries = [
        OverdueEntry(
            resident_id=resident.id,
            resident_name=resident.name,
            room_number=room.room_number,
            arrears_cents=snapshot.arrears_before_period_cents,
            last_fully_paid=last_fully_paid_period(resident, room, resident_payments),
        )
        for resident, room, resident_payments, snapshot in _active_snapshots(residents, rooms, payments, target)
        if snapshot.billable and snapshot.arrears_before_period_cents > 0
    ]
    entries.sort(key=lambda e: e.arrears_cents, reverse=True)

    return OverdueReport(
        period=target,
        entries=entries,
        total_arrears_cents=sum(e.arrears_cents for e in entries),
    )


def build_upcoming_report(
    residents: List[Resident],
    rooms: List[Room],
    payments: List[Payment],
    target: Period,
) -> UpcomingReport:
    """
    Current-period shortfall: active residents who have paid less than their
    effective rent for target. Not a projection of future dues.
    """
    entries = [
        UpcomingEntry(
            resident_id=resident.id,
            resident_name=resident.name,
            room_number=room.room_number,
            effective_rent_cents=snapshot.effective_rent_cents,
            amount_paid_cents=snapshot.amount_paid_for_period_cents,
            shortfall_cents=snapshot.remaining_for_period_cents,
        )
        for resident, room, _, snapshot in _active_snapshots(residents, rooms, payments, target)
        if snapshot.billable and snapshot.amount_paid_for_period_cents < snapshot.effective_rent_cents
    ]
    entries.sort(key=lambda e: e.shortfall_cents, reverse=True)

    return UpcomingReport(
        period=target,
        entries=entries,
        total_shortfall_cents=sum(e.shortfall_cents for e in entries),
    )


def build_period_ledger(
    residents: List[Resident],
    rooms: List[Room],
    payments: List[Payment],
    target: Period,
    include_unbilled: bool = True,
    due_day: int = 5,
) -> PeriodLedger:
    """
    Full monthly statement for every active resident, sorted by name.

    Residents without a billable room appear as NOT_APPLICABLE rows when
    include_unbilled is set; they contribute nothing to the totals.
    """
    due_date = rent_due_date(target.year, target.month, due_day)
    entries = [
        LedgerEntry(
            resident_id=resident.id,
            resident_name=resident.name,
            room_number=room.room_number if room else None,
            due_date=due_date,
            snapshot=snapshot,
        )
        for resident, room, _, snapshot in _active_snapshots(residents, rooms, payments, target)
        if snapshot.billable or include_unbilled
    ]
    entries.sort(key=lambda e: e.resident_name.lower())

    rent_sum = sum(e.snapshot.effective_rent_cents for e in entries)
    paid_sum = sum(e.snapshot.amount_paid_for_period_cents for e in entries)
    arrears_sum = sum(e.snapshot.arrears_before_period_cents for e in entries)

    return PeriodLedger(
        period=target,
        entries=entries,
        totals=LedgerTotals(
            rent_sum_cents=rent_sum,
            paid_sum_cents=paid_sum,
            arrears_sum_cents=arrears_sum,
            overall_due_cents=rent_sum + arrears_sum,
        ),
    )


def filter_ledger_entries(ledger: PeriodLedger, ledger_filter: LedgerFilter) -> List[LedgerEntry]:
    """Entries shown under a ledger tab; ALL keeps every row"""
    if ledger_filter == LedgerFilter.ALL:
        return list(ledger.entries)
    status = _FILTER_STATUS[ledger_filter]
    return [e for e in ledger.entries if e.snapshot.status == status]


def _collected_entries(
    residents: List[Resident],
    rooms: List[Room],
    payments: List[Payment],
) -> List[CollectedEntry]:
    active = {r.id: r for r in residents if r.status == ResidentStatus.ACTIVE}
    room_numbers = {room.id: room.room_number for room in rooms}
    entries = [
        CollectedEntry(
            payment=payment,
            resident_name=active[payment.resident_id].name,
            room_number=room_numbers.get(payment.room_id),
        )
        for payment in payments
        if payment.resident_id in active
    ]
    entries.sort(key=lambda e: e.payment.date, reverse=True)
    return entries


def build_collected_report(
    residents: List[Resident],
    rooms: List[Room],
    payments: List[Payment],
    target: Period,
) -> CollectedReport:
    """Payments recorded against target by active residents, newest first"""
    entries = [
        e for e in _collected_entries(residents, rooms, payments)
        if e.payment.period == target
    ]
    return CollectedReport(
        period=target,
        entries=entries,
        total_collected_cents=sum(e.payment.amount_cents for e in entries),
    )


def build_billing_overview(
    residents: List[Resident],
    rooms: List[Room],
    payments: List[Payment],
    target: Period,
    recent_limit: int = 5,
) -> BillingOverview:
    """Dashboard totals for target plus the most recent payments"""
    upcoming = build_upcoming_report(residents, rooms, payments, target)
    overdue = build_overdue_report(residents, rooms, payments, target)
    collected = build_collected_report(residents, rooms, payments, target)

    return BillingOverview(
        period=target,
        upcoming_total_cents=upcoming.total_shortfall_cents,
        overdue_total_cents=overdue.total_arrears_cents,
        collected_total_cents=collected.total_collected_cents,
        recent_payments=_collected_entries(residents, rooms, payments)[:recent_limit],
    )
