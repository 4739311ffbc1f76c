"""Payment recorder - validates a new payment against current ledger state"""

import uuid
from datetime import date
from typing import List, Optional

from pg_ledger.domain.dues import compute_snapshot, is_billable
from pg_ledger.domain.exceptions import InvalidInputError
from pg_ledger.domain.models import (
    Payment,
    PaymentInput,
    PaymentMode,
    RecordResult,
    RejectionReason,
    Resident,
    Room,
)
from pg_ledger.domain.periods import Period

# Accepted payment years, relative to today
YEARS_BACK = 10
YEARS_AHEAD = 1

RECEIPT_PREFIX = "RCPT"


def validate_payment_input(payment_input: PaymentInput, today: date | None = None) -> Period:
    """
    Reject malformed payment input before any ledger computation.

    Raises:
        InvalidInputError: Non-positive amount, month outside 1-12, year out of
            range or unknown payment mode

    Returns:
        The billing period the payment targets
    """
    today = today or date.today()

    if not isinstance(payment_input.amount_cents, int) or payment_input.amount_cents <= 0:
        raise InvalidInputError("Amount must be greater than 0")
    if not isinstance(payment_input.mode, PaymentMode):
        raise InvalidInputError(f"Unknown payment mode: {payment_input.mode!r}")
    if not today.year - YEARS_BACK <= payment_input.year <= today.year + YEARS_AHEAD:
        raise InvalidInputError(
            f"Year must be between {today.year - YEARS_BACK} and {today.year + YEARS_AHEAD}"
        )

    return Period(payment_input.year, payment_input.month)


def generate_receipt_id() -> str:
    return f"{RECEIPT_PREFIX}-{uuid.uuid4().hex[:8].upper()}"


def record_payment(
    resident: Resident,
    room: Optional[Room],
    payments: List[Payment],
    payment_input: PaymentInput,
    today: date | None = None,
) -> RecordResult:
    """
    Decide whether a payment may be recorded and build it.

    Check order:
    1. Input is well formed (raises InvalidInputError otherwise)
    2. Resident has a billable room, else NO_BILLABLE_ROOM
    3. Period paid in full with no arrears, else ALREADY_SETTLED; arrears
       always allow a catch-up payment
    4. Fully discounted rent with no arrears, else NO_PAYMENT_NEEDED

    The returned payment is new; existing payments are never modified. The
    caller appends it to the store.
    """
    today = today or date.today()
    target = validate_payment_input(payment_input, today)

    if not is_billable(room):
        return RecordResult(rejection=RejectionReason.NO_BILLABLE_ROOM)

    snapshot = compute_snapshot(resident, room, payments, target)
    no_arrears = snapshot.arrears_before_period_cents == 0

    if (
        snapshot.effective_rent_cents > 0
        and snapshot.amount_paid_for_period_cents >= snapshot.effective_rent_cents
        and no_arrears
    ):
        return RecordResult(rejection=RejectionReason.ALREADY_SETTLED)

    if snapshot.effective_rent_cents == 0 and no_arrears:
        return RecordResult(rejection=RejectionReason.NO_PAYMENT_NEEDED)

    payment = Payment(
        id=str(uuid.uuid4()),
        resident_id=resident.id,
        room_id=room.id,
        amount_cents=payment_input.amount_cents,
        month=target.month,
        year=target.year,
        date=payment_input.paid_on or today,
        mode=payment_input.mode,
        receipt_id=generate_receipt_id(),
        notes=payment_input.notes,
    )
    return RecordResult(payment=payment)
