"""
Support tickets: students open them, admins respond and move them along.
"""

import logging
from typing import List

from sqlalchemy.orm import Session

from app import crud
from app.core.db import transaction
from app.core.errors import AccessDeniedError, NotFoundError, ValidationError
from app.crud.base import Filter
from app.models.support_ticket import SupportTicket
from app.models.user import User
from app.schemas.support import TicketCreate, TicketUpdate
from app.services.identifiers import generate_ticket_id

logger = logging.getLogger(__name__)

TICKET_STATUSES = ("open", "in_progress", "resolved", "closed")
TICKET_PRIORITIES = ("low", "medium", "high")


def create_ticket(db: Session, user: User, obj_in: TicketCreate) -> SupportTicket:
    if not (obj_in.subject or "").strip() or not (obj_in.description or "").strip():
        raise ValidationError("Subject and description are required")

    with transaction(db):
        ticket = crud.support_ticket.create(
            db,
            obj_in={
                "ticket_id": generate_ticket_id(),
                "user_id": user.id,
                "application_id": obj_in.application_id,
                "subject": obj_in.subject.strip(),
                "category": obj_in.category or "general",
                "description": obj_in.description,
                "status": "open",
                "priority": "medium",
            },
        )
    logger.info(f"Support ticket {ticket.ticket_id} opened by user {user.id}")
    return ticket


def list_tickets(db: Session, user: User) -> List[SupportTicket]:
    filters = [] if user.role == "admin" else [Filter("user_id", "eq", user.id)]
    return crud.support_ticket.query(db, filters, order_by="created_at", descending=True)


def update_ticket(db: Session, user: User, ticket_id: int, obj_in: TicketUpdate) -> SupportTicket:
    """Admins change status, response and priority; owners may only read."""
    ticket = crud.support_ticket.get(db, ticket_id)
    if ticket is None:
        raise NotFoundError("Ticket not found")

    changes = obj_in.model_dump(exclude_none=True)
    if not changes:
        if user.role != "admin" and ticket.user_id != user.id:
            raise AccessDeniedError("Access denied")
        return ticket

    if user.role != "admin":
        raise AccessDeniedError("Admin access required")
    if "status" in changes and changes["status"] not in TICKET_STATUSES:
        raise ValidationError("Invalid ticket status", details={"allowed": list(TICKET_STATUSES)})
    if "priority" in changes and changes["priority"] not in TICKET_PRIORITIES:
        raise ValidationError("Invalid ticket priority", details={"allowed": list(TICKET_PRIORITIES)})

    with transaction(db):
        ticket = crud.support_ticket.update(db, db_obj=ticket, obj_in=changes)
    return ticket
