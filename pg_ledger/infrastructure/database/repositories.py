"""Data access layer mapping store records to ledger entities"""

from dataclasses import dataclass
from datetime import date, datetime
from typing import List, Optional

from pg_ledger.domain.models import (
    ActivityLogEntry,
    ActivityType,
    Payment,
    PaymentMode,
    Resident,
    ResidentStatus,
    Room,
)
from pg_ledger.infrastructure.database.store import Record, RecordStore

RESIDENTS = "residents"
ROOMS = "rooms"
PAYMENTS = "payments"


@dataclass(frozen=True)
class LedgerState:
    """Residents, rooms and payments read together for one operation"""

    residents: List[Resident]
    rooms: List[Room]
    payments: List[Payment]

    def resident(self, resident_id: str) -> Optional[Resident]:
        return next((r for r in self.residents if r.id == resident_id), None)

    def room(self, room_id: Optional[str]) -> Optional[Room]:
        if not room_id:
            return None
        return next((r for r in self.rooms if r.id == room_id), None)

    def payments_for(self, resident_id: str) -> List[Payment]:
        return [p for p in self.payments if p.resident_id == resident_id]


def _parse_date(value: Optional[str]) -> Optional[date]:
    return date.fromisoformat(value[:10]) if value else None


def room_from_record(record: Record) -> Room:
    return Room(
        id=record["id"],
        room_number=record["room_number"],
        capacity=int(record.get("capacity", 0)),
        rent_cents=int(record.get("rent_cents", 0)),
    )


def room_to_record(room: Room) -> Record:
    return {
        "id": room.id,
        "room_number": room.room_number,
        "capacity": room.capacity,
        "rent_cents": room.rent_cents,
    }


def activity_from_record(record: Record) -> ActivityLogEntry:
    return ActivityLogEntry(
        id=record["id"],
        timestamp=datetime.fromisoformat(record["timestamp"]),
        type=ActivityType(record["type"]),
        description=record.get("description", ""),
        details=record.get("details") or {},
    )


def activity_to_record(entry: ActivityLogEntry) -> Record:
    return {
        "id": entry.id,
        "timestamp": entry.timestamp.isoformat(),
        "type": entry.type.value,
        "description": entry.description,
        "details": entry.details,
    }


def resident_from_record(record: Record) -> Resident:
    # Records written before statuses existed are treated as active
    return Resident(
        id=record["id"],
        name=record["name"],
        contact=record.get("contact", ""),
        status=ResidentStatus(record.get("status") or ResidentStatus.ACTIVE.value),
        room_id=record.get("room_id"),
        joining_date=_parse_date(record.get("joining_date")),
        monthly_discount_cents=record.get("monthly_discount_cents"),
        activity_log=[activity_from_record(e) for e in record.get("activity_log") or []],
    )


def resident_to_record(resident: Resident) -> Record:
    return {
        "id": resident.id,
        "name": resident.name,
        "contact": resident.contact,
        "status": resident.status.value,
        "room_id": resident.room_id,
        "joining_date": resident.joining_date.isoformat() if resident.joining_date else None,
        "monthly_discount_cents": resident.monthly_discount_cents,
        "activity_log": [activity_to_record(e) for e in resident.activity_log],
    }


def payment_from_record(record: Record) -> Payment:
    return Payment(
        id=record["id"],
        resident_id=record["resident_id"],
        room_id=record["room_id"],
        amount_cents=int(record["amount_cents"]),
        month=int(record["month"]),
        year=int(record["year"]),
        date=_parse_date(record["date"]),
        mode=PaymentMode(record["mode"]),
        receipt_id=record.get("receipt_id") or "",
        notes=record.get("notes"),
    )


def payment_to_record(payment: Payment) -> Record:
    return {
        "id": payment.id,
        "resident_id": payment.resident_id,
        "room_id": payment.room_id,
        "amount_cents": payment.amount_cents,
        "month": payment.month,
        "year": payment.year,
        "date": payment.date.isoformat(),
        "mode": payment.mode.value,
        "receipt_id": payment.receipt_id,
        "notes": payment.notes,
    }


class LedgerRepository:
    """Repository for residents, rooms and payments over a record store"""

    def __init__(self, store: RecordStore):
        self.store = store

    def load_state(self) -> LedgerState:
        """Read all three collections before any calculation starts"""
        return LedgerState(
            residents=[resident_from_record(r) for r in self.store.load_all(RESIDENTS)],
            rooms=[room_from_record(r) for r in self.store.load_all(ROOMS)],
            payments=[payment_from_record(r) for r in self.store.load_all(PAYMENTS)],
        )

    def save_residents(self, residents: List[Resident]) -> None:
        self.store.save_all(RESIDENTS, [resident_to_record(r) for r in residents])

    def save_rooms(self, rooms: List[Room]) -> None:
        self.store.save_all(ROOMS, [room_to_record(r) for r in rooms])

    def save_payments(self, payments: List[Payment]) -> None:
        self.store.save_all(PAYMENTS, [payment_to_record(p) for p in payments])
