"""
Payment Service

Creates pending payments with the handoff the gateway checkout needs,
and applies gateway callbacks to payments and their applications.
"""

import logging
from decimal import Decimal
from typing import Any, Dict, List, Optional, Tuple

from sqlalchemy.orm import Session

from app import crud
from app.core.config import settings
from app.core.db import transaction
from app.core.errors import NotFoundError, PaymentAlreadyCompletedError, ValidationError
from app.crud.base import Filter
from app.models.payment import Payment
from app.models.user import User
from app.schemas.payment import GatewayHandoff
from app.services.identifiers import generate_payment_id
from app.services.workflow import ApplicationStatus, Trigger, can_fire, fire

logger = logging.getLogger(__name__)

APPLICATION_FEE = "application_fee"
ISSUE_RESOLUTION = "issue_resolution"
PAYMENT_STATUSES = ("pending", "completed", "failed")

CALLBACK_TRIGGERS = {
    APPLICATION_FEE: Trigger.APPLICATION_FEE_PAID,
    ISSUE_RESOLUTION: Trigger.ISSUE_RESOLVED,
}


def gateway_handoff(payment: Payment) -> GatewayHandoff:
    return GatewayHandoff(
        key=settings.PAYMENT_GATEWAY_KEY,
        amount=int((Decimal(payment.amount) * 100).to_integral_value()),
        currency=payment.currency,
        order_id=payment.payment_id,
    )


def _create_payment(db: Session, user: User, application_id: int, payment_type: str, amount) -> Payment:
    with transaction(db):
        payment = crud.payment.create(
            db,
            obj_in={
                "payment_id": generate_payment_id(),
                "application_id": application_id,
                "user_id": user.id,
                "payment_type": payment_type,
                "amount": amount,
                "currency": settings.PAYMENT_CURRENCY,
                "status": "pending",
            },
        )
    logger.info(f"Payment {payment.payment_id} ({payment_type}, {amount}) initiated for application {application_id}")
    return payment


def create_application_fee_payment(db: Session, user: User, application_id: int) -> Tuple[Payment, GatewayHandoff]:
    application = crud.application.get(db, application_id)
    if application is None or application.user_id != user.id:
        raise NotFoundError("Application not found")
    if application.status != ApplicationStatus.VERIFIED.value:
        raise ValidationError("Application must be verified before payment")
    if crud.payment.get_completed(db, application.id, APPLICATION_FEE) is not None:
        raise PaymentAlreadyCompletedError(application.application_id)

    amount = application.program.application_fee or 0
    payment = _create_payment(db, user, application.id, APPLICATION_FEE, amount)
    return payment, gateway_handoff(payment)


def create_issue_resolution_payment(db: Session, user: User, application_id: int) -> Tuple[Payment, GatewayHandoff]:
    application = crud.application.get(db, application_id)
    if application is None or application.user_id != user.id or not application.issue_raised:
        raise NotFoundError("Application with issue not found")

    payment = _create_payment(db, user, application.id, ISSUE_RESOLUTION, settings.ISSUE_RESOLUTION_FEE)
    return payment, gateway_handoff(payment)


def record_payment_result(
    db: Session,
    payment_id: str,
    status: str,
    transaction_id: Optional[str] = None,
    gateway_response: Optional[Dict[str, Any]] = None,
) -> Payment:
    """
    Apply a gateway callback. A completed payment moves its application
    forward when the workflow allows it; otherwise the payment is still
    recorded and the skipped transition is logged.
    """
    if status not in PAYMENT_STATUSES:
        raise ValidationError("Invalid payment status", details={"allowed": list(PAYMENT_STATUSES)})

    payment = crud.payment.get_by_payment_id(db, payment_id)
    if payment is None:
        raise NotFoundError("Payment not found")

    with transaction(db):
        crud.payment.update(
            db,
            db_obj=payment,
            obj_in={
                "status": status,
                "transaction_id": transaction_id,
                "payment_data": gateway_response or {},
            },
        )

        if status == "completed":
            application = payment.application
            trigger = CALLBACK_TRIGGERS[payment.payment_type]
            if can_fire(application, trigger):
                fire(application, trigger)
                db.flush()
            else:
                logger.warning(
                    f"Payment {payment.payment_id} completed but application {application.application_id} "
                    f"in status '{application.status}' does not allow {trigger.value}"
                )
    return payment


def list_payments(db: Session, user: User) -> List[Payment]:
    if user.role == "admin":
        return crud.payment.query(db, order_by="created_at", descending=True)
    return crud.payment.query(db, [Filter("user_id", "eq", user.id)], order_by="created_at", descending=True)
