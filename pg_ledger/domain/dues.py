"""Dues calculator - core business logic for rent, arrears and payment status"""

from collections import defaultdict
from typing import Dict, Iterable, List, Optional, Tuple

from pg_ledger.domain.models import BillingSnapshot, Payment, PaymentStatus, Resident, Room
from pg_ledger.domain.periods import Period, months_in_period_range

PeriodKey = Tuple[int, int, str]  # (year, month, room_id)


def is_billable(room: Optional[Room]) -> bool:
    """A room carries a rent obligation only if it exists and has positive rent"""
    return room is not None and room.rent_cents > 0


def effective_rent(resident: Resident, room: Optional[Room]) -> int:
    """
    Monthly rent after the resident's discount, floored at zero.

    Uses the current room rent and current discount for every period;
    rent history is not tracked.
    """
    if not is_billable(room):
        return 0
    discount = resident.monthly_discount_cents or 0
    return max(0, room.rent_cents - discount)


def paid_by_period(payments: Iterable[Payment]) -> Dict[PeriodKey, int]:
    """Sum payment amounts per (year, month, room_id)"""
    totals: Dict[PeriodKey, int] = defaultdict(int)
    for payment in payments:
        totals[(payment.year, payment.month, payment.room_id)] += payment.amount_cents
    return totals


def arrears_start_period(resident: Resident, target: Period) -> Period:
    """
    First period scanned for arrears.

    The joining month when known; otherwise January of the year before the
    target period, a conservative fallback for residents without a joining date.
    """
    if resident.joining_date is not None:
        return Period.from_date(resident.joining_date)
    return Period(target.year - 1, 1)


def _arrears(
    start: Period,
    target: Period,
    room_id: str,
    rent: int,
    totals: Dict[PeriodKey, int],
) -> int:
    arrears = 0
    for period in months_in_period_range(start, target):
        paid = totals.get((period.year, period.month, room_id), 0)
        if paid < rent:
            arrears += rent - paid
    return arrears


def compute_arrears(
    resident: Resident,
    room: Optional[Room],
    payments: List[Payment],
    target: Period,
) -> int:
    """Sum of effective-rent shortfalls over all periods strictly before target"""
    if not is_billable(room):
        return 0
    return _arrears(
        arrears_start_period(resident, target),
        target,
        room.id,
        effective_rent(resident, room),
        paid_by_period(payments),
    )


def classify_status(effective_rent_cents: int, paid_cents: int) -> PaymentStatus:
    """Map rent and amount paid for a billable room to a payment status"""
    if effective_rent_cents == 0:
        return PaymentStatus.WAIVED
    if paid_cents >= effective_rent_cents:
        return PaymentStatus.PAID
    if paid_cents > 0:
        return PaymentStatus.PARTIALLY_PAID
    return PaymentStatus.UNPAID


def compute_snapshot(
    resident: Resident,
    room: Optional[Room],
    payments: List[Payment],
    target: Period,
) -> BillingSnapshot:
    """
    Compute what a resident owes for a target period.

    Never raises for incomplete data: a missing room, a missing discount or an
    empty payment list degrade to a zero-dues snapshot. Residents without a
    billable room get NOT_APPLICABLE so reports can drop them, while a fully
    discounted rent is WAIVED and still shows up in the ledger.

    Args:
        resident: Resident whose dues are computed
        room: Resident's current room (None if unassigned or unknown)
        payments: The resident's payments; only those for the current room count
        target: Billing period to compute

    Returns:
        BillingSnapshot with rent, amount paid, arrears before target and status
    """
    if not is_billable(room):
        return BillingSnapshot(
            resident_id=resident.id,
            room_id=room.id if room else resident.room_id,
            period=target,
            effective_rent_cents=0,
            amount_paid_for_period_cents=0,
            arrears_before_period_cents=0,
            total_due_cents=0,
            remaining_for_period_cents=0,
            status=PaymentStatus.NOT_APPLICABLE,
            billable=False,
        )

    rent = effective_rent(resident, room)
    totals = paid_by_period(payments)

    arrears = _arrears(arrears_start_period(resident, target), target, room.id, rent, totals)
    paid = totals.get((target.year, target.month, room.id), 0)

    return BillingSnapshot(
        resident_id=resident.id,
        room_id=room.id,
        period=target,
        effective_rent_cents=rent,
        amount_paid_for_period_cents=paid,
        arrears_before_period_cents=arrears,
        total_due_cents=rent + arrears,
        remaining_for_period_cents=max(0, rent - paid),
        status=classify_status(rent, paid),
        billable=True,
    )


def last_fully_paid_period(
    resident: Resident,
    room: Optional[Room],
    payments: List[Payment],
) -> Optional[Period]:
    """Latest period whose payments for the current room reach the effective rent"""
    if not is_billable(room):
        return None
    rent = effective_rent(resident, room)
    fully_paid = [
        Period(year, month)
        for (year, month, room_id), paid in paid_by_period(payments).items()
        if room_id == room.id and paid >= rent
    ]
    return max(fully_paid) if fully_paid else None
