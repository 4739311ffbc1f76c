"""Billing service - loads ledger state, runs the engine and writes results back"""

from dataclasses import replace
from datetime import date
from typing import List, Optional

from pg_ledger.domain.dues import compute_arrears, compute_snapshot
from pg_ledger.domain.exceptions import RecordNotFoundError
from pg_ledger.domain.models import (
    ActivityType,
    BillingSnapshot,
    PaymentInput,
    RecordResult,
    RejectionReason,
    Resident,
)
from pg_ledger.domain.payments import record_payment, validate_payment_input
from pg_ledger.domain.periods import Period
from pg_ledger.domain.reports import (
    BillingOverview,
    CollectedReport,
    OverdueReport,
    PeriodLedger,
    UpcomingReport,
    build_billing_overview,
    build_collected_report,
    build_overdue_report,
    build_period_ledger,
    build_upcoming_report,
)
from pg_ledger.domain.residents import (
    RoomOccupancy,
    activate_resident,
    compute_occupancy,
    new_activity_entry,
    vacate_resident,
)
from pg_ledger.infrastructure.database.repositories import LedgerRepository, LedgerState
from pg_ledger.infrastructure.database.store import RecordStore


class BillingService:
    """
    Entry point for billing reads and writes over a record store.

    Every call reads a fresh LedgerState; nothing is cached between calls.
    Writes replace whole collections and store errors propagate unchanged.
    """

    def __init__(
        self,
        store: RecordStore,
        rent_due_day: int = 5,
        recent_payments_limit: int = 5,
        ledger_include_unbilled: bool = True,
    ):
        self.repository = LedgerRepository(store)
        self.rent_due_day = rent_due_day
        self.recent_payments_limit = recent_payments_limit
        self.ledger_include_unbilled = ledger_include_unbilled

    def load_state(self) -> LedgerState:
        return self.repository.load_state()

    def _require_resident(self, state: LedgerState, resident_id: str) -> Resident:
        resident = state.resident(resident_id)
        if resident is None:
            raise RecordNotFoundError(f"Resident {resident_id} not found")
        return resident

    # Reports

    def overdue_report(self, period: Period) -> OverdueReport:
        state = self.load_state()
        return build_overdue_report(state.residents, state.rooms, state.payments, period)

    def upcoming_report(self, period: Period) -> UpcomingReport:
        state = self.load_state()
        return build_upcoming_report(state.residents, state.rooms, state.payments, period)

    def period_ledger(self, period: Period) -> PeriodLedger:
        state = self.load_state()
        return build_period_ledger(
            state.residents,
            state.rooms,
            state.payments,
            period,
            include_unbilled=self.ledger_include_unbilled,
            due_day=self.rent_due_day,
        )

    def collected_report(self, period: Period) -> CollectedReport:
        state = self.load_state()
        return build_collected_report(state.residents, state.rooms, state.payments, period)

    def overview(self, period: Period) -> BillingOverview:
        state = self.load_state()
        return build_billing_overview(
            state.residents,
            state.rooms,
            state.payments,
            period,
            recent_limit=self.recent_payments_limit,
        )

    def snapshot_for(self, resident_id: str, period: Period) -> BillingSnapshot:
        state = self.load_state()
        resident = self._require_resident(state, resident_id)
        return compute_snapshot(
            resident,
            state.room(resident.room_id),
            state.payments_for(resident.id),
            period,
        )

    def room_occupancy(self) -> List[RoomOccupancy]:
        state = self.load_state()
        return compute_occupancy(state.rooms, state.residents)

    # Writes

    def record_payment(
        self,
        resident_id: str,
        payment_input: PaymentInput,
        today: date | None = None,
    ) -> RecordResult:
        """
        Validate and append a payment for a resident.

        Unknown residents are a NOT_FOUND rejection rather than an error.
        Malformed input raises InvalidInputError before the store is touched.
        """
        validate_payment_input(payment_input, today)

        state = self.load_state()
        resident = state.resident(resident_id)
        if resident is None:
            return RecordResult(rejection=RejectionReason.NOT_FOUND)

        room = state.room(resident.room_id)
        result = record_payment(resident, room, state.payments_for(resident.id), payment_input, today)
        if not result.accepted:
            return result

        payment = result.payment
        entry = new_activity_entry(
            ActivityType.PAYMENT_RECORDED,
            f"Payment of {payment.amount_cents} via {payment.mode.value} for "
            f"{payment.period.label()} recorded. Room: {room.room_number}.",
            payment_id=payment.id,
            amount_cents=payment.amount_cents,
            room_number=room.room_number,
        )
        updated = replace(resident, activity_log=[*resident.activity_log, entry])

        self.repository.save_payments([*state.payments, payment])
        self.repository.save_residents(self._replace_resident(state.residents, updated))
        return result

    def activate_resident(self, resident_id: str, room_id: Optional[str] = None) -> Resident:
        state = self.load_state()
        resident = self._require_resident(state, resident_id)
        target_room_id = room_id or resident.room_id
        if target_room_id and state.room(target_room_id) is None:
            raise RecordNotFoundError(f"Room {target_room_id} not found")

        activated = activate_resident(resident, target_room_id)
        self.repository.save_residents(self._replace_resident(state.residents, activated))
        return activated

    def vacate_resident(self, resident_id: str, today: date | None = None) -> Resident:
        """Vacate a resident once arrears before the current period are cleared"""
        today = today or date.today()
        state = self.load_state()
        resident = self._require_resident(state, resident_id)
        arrears = compute_arrears(
            resident,
            state.room(resident.room_id),
            state.payments_for(resident.id),
            Period.from_date(today),
        )

        vacated = vacate_resident(resident, arrears, today)
        self.repository.save_residents(self._replace_resident(state.residents, vacated))
        return vacated

    @staticmethod
    def _replace_resident(residents: List[Resident], updated: Resident) -> List[Resident]:
        return [updated if r.id == updated.id else r for r in residents]
