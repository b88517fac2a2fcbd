from typing import List
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from app.api import deps
from app import schemas
from app.models.user import User
from app.services import support as support_service

router = APIRouter()


@router.post("/tickets", response_model=schemas.Ticket, status_code=201)
def create_ticket(
    ticket_in: schemas.TicketCreate,
    db: Session = Depends(deps.get_db),
    current_user: User = Depends(deps.get_current_user),
):
    return support_service.create_ticket(db, current_user, ticket_in)


@router.get("/tickets", response_model=List[schemas.Ticket])
def read_tickets(
    db: Session = Depends(deps.get_db),
    current_user: User = Depends(deps.get_current_user),
):
    return support_service.list_tickets(db, current_user)


@router.put("/tickets/{id}", response_model=schemas.Ticket)
def update_ticket(
    id: int,
    ticket_in: schemas.TicketUpdate,
    db: Session = Depends(deps.get_db),
    current_user: User = Depends(deps.get_current_user),
):
    """
    Admin response / status change. Owners sending no changes get the ticket back.
    """
    return support_service.update_ticket(db, current_user, id, ticket_in)
