from datetime import datetime
from typing import Optional
from pydantic import BaseModel


class TicketCreate(BaseModel):
    subject: str
    description: str
    category: Optional[str] = None
    application_id: Optional[int] = None


class TicketUpdate(BaseModel):
    status: Optional[str] = None
    admin_response: Optional[str] = None
    priority: Optional[str] = None


class Ticket(BaseModel):
    id: int
    ticket_id: str
    user_id: int
    application_id: Optional[int] = None
    subject: str
    category: str
    description: str
    status: str
    priority: str
    admin_response: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True
