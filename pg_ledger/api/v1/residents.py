"""Resident endpoints - dues snapshot, payment recording and lifecycle"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Request
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from pg_ledger.api.dependencies import get_billing_service, get_period, get_request_id
from pg_ledger.api.v1.schemas import (
    ActivateRequest,
    PaymentRequest,
    PaymentSchema,
    RejectionResponse,
    ResidentSchema,
    SnapshotSchema,
    VacateRequest,
)
from pg_ledger.domain.exceptions import InvalidInputError, RecordNotFoundError, ResidentLifecycleError
from pg_ledger.domain.models import PaymentInput, RejectionReason
from pg_ledger.domain.periods import Period
from pg_ledger.infrastructure.database.session import get_db
from pg_ledger.infrastructure.observability.logging import log_payment_outcome
from pg_ledger.infrastructure.observability.metrics import record_payment_attempt
from pg_ledger.services.billing_service import BillingService

router = APIRouter()

REJECTION_DETAILS = {
    RejectionReason.NOT_FOUND: "Resident not found",
    RejectionReason.NO_BILLABLE_ROOM: "Resident has no room with a rent to pay",
    RejectionReason.ALREADY_SETTLED: "Period is already paid in full and there are no arrears",
    RejectionReason.NO_PAYMENT_NEEDED: "Rent is fully discounted and there are no arrears",
}


@router.get("/residents/{resident_id}/snapshot", response_model=SnapshotSchema)
def get_snapshot(
    resident_id: str,
    period: Period = Depends(get_period),
    service: BillingService = Depends(get_billing_service),
):
    """Rent, amount paid, arrears and status of one resident for a period"""
    try:
        snapshot = service.snapshot_for(resident_id, period)
    except RecordNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return SnapshotSchema.from_snapshot(snapshot)


@router.post(
    "/residents/{resident_id}/payments",
    response_model=PaymentSchema,
    status_code=201,
    responses={404: {"model": RejectionResponse}, 409: {"model": RejectionResponse}},
)
def create_payment(
    resident_id: str,
    request_body: PaymentRequest,
    request: Request,
    db: Session = Depends(get_db),
    service: BillingService = Depends(get_billing_service),
):
    """
    Record a payment for a resident.

    Flow:
    1. Validate input (422 on malformed amount, period or mode)
    2. Check the resident's dues for the named period
    3. Append the payment and an activity log entry
    4. Commit and return the payment with its receipt id

    Business rejections come back as 404 (unknown resident) or 409 with the
    rejection reason in the body.
    """
    request_id = get_request_id(request)
    period_label = f"{request_body.year}-{request_body.month:02d}"

    try:
        result = service.record_payment(
            resident_id,
            PaymentInput(
                amount_cents=request_body.amount_cents,
                month=request_body.month,
                year=request_body.year,
                mode=request_body.mode,
                paid_on=request_body.paid_on,
                notes=request_body.notes,
            ),
        )
        db.commit()

    except InvalidInputError as e:
        db.rollback()
        logging.warning(f"Invalid payment input: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=422, detail=str(e))

    except Exception as e:
        db.rollback()
        logging.error(f"Unexpected error: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=500, detail="Internal server error")

    if not result.accepted:
        record_payment_attempt(result.rejection.value)
        log_payment_outcome(request_id, resident_id, result.rejection.value, request_body.amount_cents, period_label)
        status_code = 404 if result.rejection == RejectionReason.NOT_FOUND else 409
        body = RejectionResponse(reason=result.rejection, detail=REJECTION_DETAILS[result.rejection])
        return JSONResponse(status_code=status_code, content=body.model_dump(mode="json"))

    payment = result.payment
    record_payment_attempt("accepted", payment.amount_cents)
    log_payment_outcome(request_id, resident_id, "accepted", payment.amount_cents, period_label, payment.id)

    return PaymentSchema.from_payment(payment)


def _lifecycle_response(action, db: Session, request_id: str) -> ResidentSchema:
    try:
        resident = action()
        db.commit()
        return ResidentSchema.from_resident(resident)

    except RecordNotFoundError as e:
        db.rollback()
        raise HTTPException(status_code=404, detail=str(e))

    except ResidentLifecycleError as e:
        db.rollback()
        logging.warning(f"Lifecycle change refused: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=409, detail=str(e))

    except Exception as e:
        db.rollback()
        logging.error(f"Unexpected error: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=500, detail="Internal server error")


@router.post("/residents/{resident_id}/activate", response_model=ResidentSchema)
def activate(
    resident_id: str,
    request: Request,
    request_body: Optional[ActivateRequest] = None,
    db: Session = Depends(get_db),
    service: BillingService = Depends(get_billing_service),
):
    """Make a resident active; a room assignment is required"""
    room_id = request_body.room_id if request_body else None
    return _lifecycle_response(
        lambda: service.activate_resident(resident_id, room_id),
        db,
        get_request_id(request),
    )


@router.post("/residents/{resident_id}/vacate", response_model=ResidentSchema)
def vacate(
    resident_id: str,
    request: Request,
    request_body: Optional[VacateRequest] = None,
    db: Session = Depends(get_db),
    service: BillingService = Depends(get_billing_service),
):
    """Mark a resident as former and free their bed; refused while arrears remain"""
    vacated_on = request_body.vacated_on if request_body else None
    return _lifecycle_response(
        lambda: service.vacate_resident(resident_id, vacated_on),
        db,
        get_request_id(request),
    )
