"""
Admin Review Service

Manual overrides on applications (approve, raise issue), the review
queue, and dashboard analytics.
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, List, Optional

from sqlalchemy.orm import Session

from app import crud
from app.core.db import transaction
from app.core.errors import ValidationError
from app.crud.base import Filter
from app.models.application import Application
from app.services.applications import get_application
from app.services.workflow import ApplicationStatus, Trigger, fire

logger = logging.getLogger(__name__)

PENDING_REVIEW_STATUSES = [ApplicationStatus.SUBMITTED.value, ApplicationStatus.UNDER_REVIEW.value]


def approve_application(db: Session, application_id: int) -> Application:
    """Force verified regardless of document state. No-op when already approved."""
    application = get_application(db, application_id)
    if (
        application.status == ApplicationStatus.VERIFIED.value
        and application.admin_verification_status == "verified"
        and not application.issue_raised
    ):
        return application

    with transaction(db):
        fire(application, Trigger.APPROVE)
        db.flush()
    return application


def raise_issue(db: Session, application_id: int, issue_details: str) -> Application:
    if not issue_details or not issue_details.strip():
        raise ValidationError("Issue details are required")

    application = get_application(db, application_id)
    with transaction(db):
        fire(application, Trigger.RAISE_ISSUE, issue_details=issue_details.strip())
        db.flush()
    return application


def list_applications(
    db: Session,
    status: Optional[str] = None,
    ai_status: Optional[str] = None,
    skip: int = 0,
    limit: int = 50,
) -> Dict[str, Any]:
    filters = []
    if status:
        filters.append(Filter("status", "eq", status))
    if ai_status:
        filters.append(Filter("ai_verification_status", "eq", ai_status))

    items = crud.application.query(db, filters, order_by="created_at", descending=True, skip=skip, limit=limit)
    return {
        "items": items,
        "pagination": {"limit": limit, "offset": skip, "total": crud.application.count(db, filters)},
    }


def get_application_detail(db: Session, application_id: int) -> Dict[str, Any]:
    application = get_application(db, application_id)
    documents = crud.document.query(db, [Filter("application_id", "eq", application.id)], order_by="id", descending=True)
    return {"application": application, "documents": documents}


def get_analytics(db: Session, now: datetime = None) -> Dict[str, Any]:
    now = now or datetime.now(timezone.utc)

    def revenue(payment_type: str) -> float:
        return float(crud.payment.sum(
            db,
            "amount",
            [Filter("payment_type", "eq", payment_type), Filter("status", "eq", "completed")],
        ))

    return {
        "status_counts": crud.application.count_by(db, "status"),
        "ai_status_counts": crud.application.count_by(db, "ai_verification_status"),
        "revenue": {
            "application_fee_revenue": revenue("application_fee"),
            "issue_resolution_revenue": revenue("issue_resolution"),
            "total_transactions": crud.payment.count(db),
        },
        "recent_applications": crud.application.count(db, [Filter("created_at", "ge", now - timedelta(days=7))]),
        "total_applications": crud.application.count(db),
        "pending_review": crud.application.count(db, [Filter("status", "in", PENDING_REVIEW_STATUSES)]),
        "open_tickets": crud.support_ticket.count(db, [Filter("status", "eq", "open")]),
    }


def list_students(db: Session) -> List[Dict[str, Any]]:
    students = crud.user.query(db, [Filter("role", "eq", "student")], order_by="created_at", descending=True)
    totals = crud.application.count_by(db, "user_id")
    return [
        {
            "id": s.id,
            "email": s.email,
            "first_name": s.first_name,
            "last_name": s.last_name,
            "role": s.role,
            "total_applications": totals.get(s.id, 0),
        }
        for s in students
    ]
