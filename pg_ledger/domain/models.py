"""Domain models - pure Python dataclasses representing ledger entities"""

from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum
from typing import Any, Dict, List, Optional

from pg_ledger.domain.periods import Period


class ResidentStatus(str, Enum):
    UPCOMING = "upcoming"
    ACTIVE = "active"
    FORMER = "former"


class PaymentMode(str, Enum):
    CASH = "Cash"
    UPI = "UPI"
    BANK_TRANSFER = "Bank Transfer"


class PaymentStatus(str, Enum):
    """Classification of a resident's standing for one billing period"""

    PAID = "paid"
    PARTIALLY_PAID = "partially_paid"
    UNPAID = "unpaid"
    WAIVED = "waived"  # billable room, discount covers the whole rent
    NOT_APPLICABLE = "not_applicable"  # no billable room


class RejectionReason(str, Enum):
    NO_BILLABLE_ROOM = "no_billable_room"
    ALREADY_SETTLED = "already_settled"
    NO_PAYMENT_NEEDED = "no_payment_needed"
    NOT_FOUND = "not_found"


class ActivityType(str, Enum):
    PAYMENT_RECORDED = "PAYMENT_RECORDED"
    RESIDENT_ACTIVATED = "RESIDENT_ACTIVATED"
    RESIDENT_VACATED = "RESIDENT_VACATED"


@dataclass(frozen=True)
class Room:
    """Rentable room; occupancy is derived from residents, never stored"""

    id: str
    room_number: str
    capacity: int
    rent_cents: int


@dataclass(frozen=True)
class ActivityLogEntry:
    """Audit trail entry attached to a resident"""

    id: str
    timestamp: datetime
    type: ActivityType
    description: str
    details: Dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class Resident:
    """Person living in (or about to join) the property"""

    id: str
    name: str
    contact: str
    status: ResidentStatus
    room_id: Optional[str] = None
    joining_date: Optional[date] = None
    monthly_discount_cents: Optional[int] = None
    activity_log: List[ActivityLogEntry] = field(default_factory=list)


@dataclass(frozen=True)
class Payment:
    """Money received against one (month, year, room) billing period"""

    id: str
    resident_id: str
    room_id: str
    amount_cents: int
    month: int
    year: int
    date: date
    mode: PaymentMode
    receipt_id: str
    notes: Optional[str] = None

    @property
    def period(self) -> Period:
        return Period(self.year, self.month)


@dataclass(frozen=True)
class PaymentInput:
    """Unvalidated payment details as entered by an operator"""

    amount_cents: int
    month: int
    year: int
    mode: PaymentMode
    paid_on: Optional[date] = None
    notes: Optional[str] = None


@dataclass(frozen=True)
class BillingSnapshot:
    """Dues for one resident and one period; recomputed on every query"""

    resident_id: str
    room_id: Optional[str]
    period: Period
    effective_rent_cents: int
    amount_paid_for_period_cents: int
    arrears_before_period_cents: int
    total_due_cents: int
    remaining_for_period_cents: int
    status: PaymentStatus
    billable: bool


@dataclass(frozen=True)
class RecordResult:
    """Outcome of a payment attempt: exactly one of payment or rejection is set"""

    payment: Optional[Payment] = None
    rejection: Optional[RejectionReason] = None

    @property
    def accepted(self) -> bool:
        return self.payment is not None
