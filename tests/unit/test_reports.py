"""Unit tests for billing report views"""

import pytest
from datetime import date
from pg_ledger.domain.models import PaymentStatus, ResidentStatus, Room
from pg_ledger.domain.periods import Period
from pg_ledger.domain.reports import (
    LedgerFilter,
    build_billing_overview,
    build_collected_report,
    build_overdue_report,
    build_period_ledger,
    build_upcoming_report,
    filter_ledger_entries,
)

MARCH = Period(2024, 3)


@pytest.fixture
def rooms():
    return [
        Room(id="room_101", room_number="101", capacity=2, rent_cents=500000),
        Room(id="room_102", room_number="102", capacity=1, rent_cents=800000),
        Room(id="room_free", room_number="G1", capacity=1, rent_cents=0),
    ]


@pytest.fixture
def residents(make_resident):
    return [
        # Paid Jan-Mar in full
        make_resident(id="paid", name="Bela", room_id="room_101"),
        # Owes Jan and Feb, partial for March
        make_resident(id="owing", name="Arun", room_id="room_102"),
        # No room assigned
        make_resident(id="roomless", name="Chitra", room_id=None),
        # Zero-rent room
        make_resident(id="free", name="Dev", room_id="room_free"),
        # Former resident with unpaid history is ignored
        make_resident(id="gone", name="Esha", room_id="room_101", status=ResidentStatus.FORMER),
        # Upcoming resident is not billed yet
        make_resident(id="soon", name="Farah", room_id="room_101", status=ResidentStatus.UPCOMING),
    ]


@pytest.fixture
def payments(make_payment):
    return [
        make_payment(500000, 1, 2024, resident_id="paid"),
        make_payment(500000, 2, 2024, resident_id="paid"),
        make_payment(500000, 3, 2024, resident_id="paid", date=date(2024, 3, 2)),
        make_payment(300000, 3, 2024, resident_id="owing", room_id="room_102", date=date(2024, 3, 9)),
        make_payment(100000, 3, 2024, resident_id="gone", date=date(2024, 3, 15)),
    ]


def test_overdue_report_lists_only_residents_with_arrears(residents, rooms, payments):
    report = build_overdue_report(residents, rooms, payments, MARCH)

    assert [e.resident_id for e in report.entries] == ["owing"]
    assert report.entries[0].arrears_cents == 1600000
    assert report.entries[0].room_number == "102"
    assert report.entries[0].last_fully_paid is None
    assert report.total_arrears_cents == 1600000


def test_overdue_report_sorted_by_arrears_desc(make_resident, make_payment, rooms):
    residents = [
        make_resident(id="small", name="Small", room_id="room_101"),
        make_resident(id="large", name="Large", room_id="room_102"),
    ]
    payments = [make_payment(500000, 1, 2024, resident_id="small")]

    report = build_overdue_report(residents, rooms, payments, MARCH)

    assert [e.resident_id for e in report.entries] == ["large", "small"]
    assert report.entries[1].last_fully_paid == Period(2024, 1)


def test_upcoming_report_is_current_period_shortfall(residents, rooms, payments):
    report = build_upcoming_report(residents, rooms, payments, MARCH)

    assert [e.resident_id for e in report.entries] == ["owing"]
    entry = report.entries[0]
    assert entry.effective_rent_cents == 800000
    assert entry.amount_paid_cents == 300000
    assert entry.shortfall_cents == 500000
    assert report.total_shortfall_cents == 500000


def test_upcoming_report_uses_discounted_rent(make_resident, make_payment, rooms):
    residents = [make_resident(id="disc", room_id="room_101", monthly_discount_cents=100000)]
    payments = [make_payment(400000, 3, 2024, resident_id="disc")]

    report = build_upcoming_report(residents, rooms, payments, MARCH)

    assert report.entries == []


def test_unbilled_residents_excluded_from_overdue_and_upcoming(residents, rooms, payments):
    overdue_ids = {e.resident_id for e in build_overdue_report(residents, rooms, payments, MARCH).entries}
    upcoming_ids = {e.resident_id for e in build_upcoming_report(residents, rooms, payments, MARCH).entries}

    for excluded in ("roomless", "free", "gone", "soon"):
        assert excluded not in overdue_ids
        assert excluded not in upcoming_ids


def test_period_ledger_lists_unbilled_rows_as_not_applicable(residents, rooms, payments):
    ledger = build_period_ledger(residents, rooms, payments, MARCH)

    assert [e.resident_name for e in ledger.entries] == ["Arun", "Bela", "Chitra", "Dev"]
    by_id = {e.resident_id: e for e in ledger.entries}
    assert by_id["roomless"].snapshot.status == PaymentStatus.NOT_APPLICABLE
    assert by_id["roomless"].room_number is None
    assert by_id["free"].snapshot.status == PaymentStatus.NOT_APPLICABLE
    assert by_id["paid"].snapshot.status == PaymentStatus.PAID
    assert by_id["owing"].snapshot.status == PaymentStatus.PARTIALLY_PAID
    assert all(e.due_date == date(2024, 3, 5) for e in ledger.entries)


def test_period_ledger_can_drop_unbilled_rows(residents, rooms, payments):
    ledger = build_period_ledger(residents, rooms, payments, MARCH, include_unbilled=False)

    assert {e.resident_id for e in ledger.entries} == {"paid", "owing"}


def test_period_ledger_totals(residents, rooms, payments):
    totals = build_period_ledger(residents, rooms, payments, MARCH).totals

    assert totals.rent_sum_cents == 500000 + 800000
    assert totals.paid_sum_cents == 500000 + 300000
    assert totals.arrears_sum_cents == 1600000
    assert totals.overall_due_cents == totals.rent_sum_cents + totals.arrears_sum_cents


def test_filter_ledger_entries_by_tab(residents, rooms, payments):
    ledger = build_period_ledger(residents, rooms, payments, MARCH)

    assert len(filter_ledger_entries(ledger, LedgerFilter.ALL)) == 4
    assert [e.resident_id for e in filter_ledger_entries(ledger, LedgerFilter.PAID)] == ["paid"]
    assert [e.resident_id for e in filter_ledger_entries(ledger, LedgerFilter.PARTIALLY_PAID)] == ["owing"]
    assert filter_ledger_entries(ledger, LedgerFilter.UNPAID) == []


def test_collected_report_newest_first_for_active_residents(residents, rooms, payments):
    report = build_collected_report(residents, rooms, payments, MARCH)

    assert [e.payment.resident_id for e in report.entries] == ["owing", "paid"]
    assert report.entries[0].room_number == "102"
    assert report.total_collected_cents == 800000


def test_billing_overview(residents, rooms, payments):
    overview = build_billing_overview(residents, rooms, payments, MARCH, recent_limit=2)

    assert overview.upcoming_total_cents == 500000
    assert overview.overdue_total_cents == 1600000
    assert overview.collected_total_cents == 800000
    assert [e.payment.id for e in overview.recent_payments] == ["pay_4", "pay_3"]
