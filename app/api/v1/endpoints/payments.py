from typing import List, Optional
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from app.api import deps
from app import schemas
from app.models.user import User
from app.services import payments as payment_service

router = APIRouter()


@router.post("/application-fee", response_model=schemas.PaymentInitiated)
def create_application_fee_payment(
    payment_in: schemas.PaymentCreate,
    db: Session = Depends(deps.get_db),
    current_user: User = Depends(deps.require_student),
):
    payment, handoff = payment_service.create_application_fee_payment(db, current_user, payment_in.application_id)
    return {"payment": payment, "payment_gateway": handoff}


@router.post("/issue-resolution", response_model=schemas.PaymentInitiated)
def create_issue_resolution_payment(
    payment_in: schemas.PaymentCreate,
    db: Session = Depends(deps.get_db),
    current_user: User = Depends(deps.require_student),
):
    payment, handoff = payment_service.create_issue_resolution_payment(db, current_user, payment_in.application_id)
    return {"payment": payment, "payment_gateway": handoff}


@router.post("/verify", response_model=schemas.Payment)
def verify_payment(
    verify_in: schemas.PaymentVerifyRequest,
    db: Session = Depends(deps.get_db),
    caller: Optional[User] = Depends(deps.require_payment_gateway),
):
    """
    Gateway callback: records the outcome and advances the application.
    Accepts the gateway key or an admin token; students cannot complete payments.
    """
    return payment_service.record_payment_result(
        db,
        verify_in.payment_id,
        verify_in.status,
        verify_in.transaction_id,
        verify_in.gateway_response,
    )


@router.get("/", response_model=List[schemas.Payment])
def read_payments(
    db: Session = Depends(deps.get_db),
    current_user: User = Depends(deps.get_current_user),
):
    return payment_service.list_payments(db, current_user)
