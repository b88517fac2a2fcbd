from sqlalchemy import Column, Integer, String, DateTime, Text, ForeignKey
from sqlalchemy.sql import func
from app.core.db import Base

class SupportTicket(Base):
    __tablename__ = "support_tickets"

    id = Column(Integer, primary_key=True, index=True)
    ticket_id = Column(String(32), unique=True, nullable=False, index=True)  # TKT-<epoch ms>-<4 digits>
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    application_id = Column(Integer, ForeignKey("applications.id"), nullable=True)
    subject = Column(String(200), nullable=False)
    category = Column(String(50), nullable=False, default="general")
    description = Column(Text, nullable=False)
    status = Column(String(20), nullable=False, default="open", index=True)  # open, in_progress, resolved, closed
    priority = Column(String(20), nullable=False, default="medium")  # low, medium, high
    admin_response = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())
