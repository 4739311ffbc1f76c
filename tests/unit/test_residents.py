"""Unit tests for resident lifecycle and occupancy projection"""

import pytest
from datetime import date
from pg_ledger.domain.exceptions import ResidentLifecycleError
from pg_ledger.domain.models import ActivityType, ResidentStatus, Room
from pg_ledger.domain.residents import activate_resident, compute_occupancy, vacate_resident


def test_activate_upcoming_resident(make_resident):
    resident = make_resident(status=ResidentStatus.UPCOMING)

    activated = activate_resident(resident)

    assert activated.status == ResidentStatus.ACTIVE
    assert activated.room_id == "room_101"
    assert activated.activity_log[-1].type == ActivityType.RESIDENT_ACTIVATED
    assert resident.status == ResidentStatus.UPCOMING  # input unchanged


def test_activate_assigns_given_room(make_resident):
    activated = activate_resident(make_resident(status=ResidentStatus.UPCOMING, room_id=None), "room_102")

    assert activated.room_id == "room_102"


def test_activate_without_room_refused(make_resident):
    with pytest.raises(ResidentLifecycleError):
        activate_resident(make_resident(status=ResidentStatus.UPCOMING, room_id=None))


def test_activate_former_resident_refused(make_resident):
    with pytest.raises(ResidentLifecycleError):
        activate_resident(make_resident(status=ResidentStatus.FORMER))


def test_vacate_releases_room(make_resident):
    vacated = vacate_resident(make_resident(), arrears_cents=0, vacated_on=date(2024, 4, 30))

    assert vacated.status == ResidentStatus.FORMER
    assert vacated.room_id is None
    entry = vacated.activity_log[-1]
    assert entry.type == ActivityType.RESIDENT_VACATED
    assert entry.details["vacated_from_room_id"] == "room_101"


def test_vacate_with_arrears_refused(make_resident):
    with pytest.raises(ResidentLifecycleError):
        vacate_resident(make_resident(), arrears_cents=100, vacated_on=date(2024, 4, 30))


def test_vacate_twice_refused(make_resident):
    with pytest.raises(ResidentLifecycleError):
        vacate_resident(make_resident(status=ResidentStatus.FORMER), arrears_cents=0, vacated_on=date(2024, 4, 30))


def test_occupancy_counts_active_and_upcoming(make_resident):
    rooms = [
        Room(id="room_101", room_number="101", capacity=2, rent_cents=500000),
        Room(id="room_102", room_number="102", capacity=1, rent_cents=800000),
        Room(id="room_103", room_number="103", capacity=0, rent_cents=0),
    ]
    residents = [
        make_resident(id="a", room_id="room_101"),
        make_resident(id="b", room_id="room_101", status=ResidentStatus.UPCOMING),
        make_resident(id="c", room_id="room_102", status=ResidentStatus.FORMER),
        make_resident(id="d", room_id="room_999"),
        make_resident(id="e", room_id=None),
    ]

    occupancy = {o.room.id: o for o in compute_occupancy(rooms, residents)}

    assert occupancy["room_101"].occupancy == 2
    assert occupancy["room_101"].is_full
    assert occupancy["room_101"].available_beds == 0
    assert occupancy["room_102"].occupancy == 0
    assert occupancy["room_102"].available_beds == 1
    assert not occupancy["room_103"].is_full
