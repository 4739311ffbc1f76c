"""Pydantic schemas for API request/response validation"""

from datetime import date
from typing import List, Optional

from pydantic import BaseModel, Field

from pg_ledger.domain.models import (
    BillingSnapshot,
    Payment,
    PaymentMode,
    PaymentStatus,
    RejectionReason,
    Resident,
    ResidentStatus,
)
from pg_ledger.domain.periods import Period
from pg_ledger.domain.reports import CollectedEntry
from pg_ledger.domain.residents import RoomOccupancy


class PeriodSchema(BaseModel):
    year: int
    month: int
    label: str

    @classmethod
    def from_period(cls, period: Period) -> "PeriodSchema":
        return cls(year=period.year, month=period.month, label=period.label())


class PaymentRequest(BaseModel):
    """Request body for POST /v1/residents/{resident_id}/payments"""

    amount_cents: int = Field(..., gt=0, description="Amount received in cents")
    month: int = Field(..., ge=1, le=12)
    year: int
    mode: PaymentMode
    paid_on: Optional[date] = Field(None, description="Date received (default: today)")
    notes: Optional[str] = None


class PaymentSchema(BaseModel):
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

    @classmethod
    def from_payment(cls, payment: Payment) -> "PaymentSchema":
        return cls(
            id=payment.id,
            resident_id=payment.resident_id,
            room_id=payment.room_id,
            amount_cents=payment.amount_cents,
            month=payment.month,
            year=payment.year,
            date=payment.date,
            mode=payment.mode,
            receipt_id=payment.receipt_id,
            notes=payment.notes,
        )


class RejectionResponse(BaseModel):
    """Body of a 404/409 response for a refused payment"""

    reason: RejectionReason
    detail: str


class SnapshotSchema(BaseModel):
    resident_id: str
    room_id: Optional[str]
    period: PeriodSchema
    effective_rent_cents: int
    amount_paid_for_period_cents: int
    arrears_before_period_cents: int
    total_due_cents: int
    remaining_for_period_cents: int
    status: PaymentStatus
    billable: bool

    @classmethod
    def from_snapshot(cls, snapshot: BillingSnapshot) -> "SnapshotSchema":
        return cls(
            resident_id=snapshot.resident_id,
            room_id=snapshot.room_id,
            period=PeriodSchema.from_period(snapshot.period),
            effective_rent_cents=snapshot.effective_rent_cents,
            amount_paid_for_period_cents=snapshot.amount_paid_for_period_cents,
            arrears_before_period_cents=snapshot.arrears_before_period_cents,
            total_due_cents=snapshot.total_due_cents,
            remaining_for_period_cents=snapshot.remaining_for_period_cents,
            status=snapshot.status,
            billable=snapshot.billable,
        )


class OverdueItem(BaseModel):
    resident_id: str
    resident_name: str
    room_number: str
    arrears_cents: int
    last_fully_paid: Optional[PeriodSchema] = None


class OverdueResponse(BaseModel):
    period: PeriodSchema
    entries: List[OverdueItem]
    total_arrears_cents: int


class UpcomingItem(BaseModel):
    resident_id: str
    resident_name: str
    room_number: str
    effective_rent_cents: int
    amount_paid_cents: int
    shortfall_cents: int


class UpcomingResponse(BaseModel):
    """Current-period shortfall, not a forward projection"""

    period: PeriodSchema
    entries: List[UpcomingItem]
    total_shortfall_cents: int


class LedgerItem(BaseModel):
    resident_id: str
    resident_name: str
    room_number: Optional[str]
    due_date: date
    snapshot: SnapshotSchema


class LedgerTotalsSchema(BaseModel):
    rent_sum_cents: int
    paid_sum_cents: int
    arrears_sum_cents: int
    overall_due_cents: int


class LedgerResponse(BaseModel):
    period: PeriodSchema
    status_filter: str
    entries: List[LedgerItem]
    totals: LedgerTotalsSchema


class CollectedItem(BaseModel):
    payment: PaymentSchema
    resident_name: str
    room_number: Optional[str]

    @classmethod
    def from_entry(cls, entry: CollectedEntry) -> "CollectedItem":
        return cls(
            payment=PaymentSchema.from_payment(entry.payment),
            resident_name=entry.resident_name,
            room_number=entry.room_number,
        )


class CollectedResponse(BaseModel):
    period: PeriodSchema
    entries: List[CollectedItem]
    total_collected_cents: int


class OverviewResponse(BaseModel):
    period: PeriodSchema
    upcoming_total_cents: int
    overdue_total_cents: int
    collected_total_cents: int
    recent_payments: List[CollectedItem]


class ActivateRequest(BaseModel):
    room_id: Optional[str] = Field(None, description="Room to assign (default: current room)")


class VacateRequest(BaseModel):
    vacated_on: Optional[date] = Field(None, description="Vacate date (default: today)")


class ResidentSchema(BaseModel):
    id: str
    name: str
    contact: str
    status: ResidentStatus
    room_id: Optional[str]
    joining_date: Optional[date]
    monthly_discount_cents: Optional[int]

    @classmethod
    def from_resident(cls, resident: Resident) -> "ResidentSchema":
        return cls(
            id=resident.id,
            name=resident.name,
            contact=resident.contact,
            status=resident.status,
            room_id=resident.room_id,
            joining_date=resident.joining_date,
            monthly_discount_cents=resident.monthly_discount_cents,
        )


class RoomOccupancyItem(BaseModel):
    room_id: str
    room_number: str
    capacity: int
    rent_cents: int
    occupancy: int
    available_beds: int
    is_full: bool

    @classmethod
    def from_occupancy(cls, item: RoomOccupancy) -> "RoomOccupancyItem":
        return cls(
            room_id=item.room.id,
            room_number=item.room.room_number,
            capacity=item.room.capacity,
            rent_cents=item.room.rent_cents,
            occupancy=item.occupancy,
            available_beds=item.available_beds,
            is_full=item.is_full,
        )
