"""Resident lifecycle transitions and room occupancy projection"""

import uuid
from dataclasses import dataclass, replace
from datetime import date, datetime, timezone
from typing import Dict, List, Optional

from pg_ledger.domain.exceptions import ResidentLifecycleError
from pg_ledger.domain.models import ActivityLogEntry, ActivityType, Resident, ResidentStatus, Room

# Residents who hold a bed in their assigned room
OCCUPYING_STATUSES = (ResidentStatus.ACTIVE, ResidentStatus.UPCOMING)


@dataclass(frozen=True)
class RoomOccupancy:
    room: Room
    occupancy: int

    @property
    def available_beds(self) -> int:
        return max(0, self.room.capacity - self.occupancy)

    @property
    def is_full(self) -> bool:
        return self.room.capacity > 0 and self.occupancy >= self.room.capacity


def new_activity_entry(activity_type: ActivityType, description: str, **details) -> ActivityLogEntry:
    return ActivityLogEntry(
        id=str(uuid.uuid4()),
        timestamp=datetime.now(timezone.utc),
        type=activity_type,
        description=description,
        details=details,
    )


def activate_resident(resident: Resident, room_id: Optional[str] = None) -> Resident:
    """
    Move an upcoming resident to active.

    Raises:
        ResidentLifecycleError: Resident is former or has no room assignment
    """
    if resident.status == ResidentStatus.FORMER:
        raise ResidentLifecycleError(f"Resident {resident.id} has vacated and cannot be activated")

    room_id = room_id or resident.room_id
    if not room_id:
        raise ResidentLifecycleError("Active residents must be assigned to a room")

    entry = new_activity_entry(
        ActivityType.RESIDENT_ACTIVATED,
        f"{resident.name} activated in room {room_id}.",
        room_id=room_id,
    )
    return replace(
        resident,
        status=ResidentStatus.ACTIVE,
        room_id=room_id,
        activity_log=[*resident.activity_log, entry],
    )


def vacate_resident(resident: Resident, arrears_cents: int, vacated_on: date) -> Resident:
    """
    Mark a resident as former and release their room.

    Raises:
        ResidentLifecycleError: Resident already vacated or still owes arrears
    """
    if resident.status == ResidentStatus.FORMER:
        raise ResidentLifecycleError(f"Resident {resident.id} has already vacated")
    if arrears_cents > 0:
        raise ResidentLifecycleError(
            f"Cannot vacate resident with outstanding dues of {arrears_cents}"
        )

    entry = new_activity_entry(
        ActivityType.RESIDENT_VACATED,
        f"{resident.name} vacated on {vacated_on.isoformat()}.",
        vacated_from_room_id=resident.room_id,
        vacated_on=vacated_on.isoformat(),
    )
    return replace(
        resident,
        status=ResidentStatus.FORMER,
        room_id=None,
        activity_log=[*resident.activity_log, entry],
    )


def compute_occupancy(rooms: List[Room], residents: List[Resident]) -> List[RoomOccupancy]:
    """Count active and upcoming residents per room"""
    counts: Dict[str, int] = {room.id: 0 for room in rooms}
    for resident in residents:
        if resident.status in OCCUPYING_STATUSES and resident.room_id in counts:
            counts[resident.room_id] += 1
    return [RoomOccupancy(room=room, occupancy=counts[room.id]) for room in rooms]
