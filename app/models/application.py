from sqlalchemy import Column, Integer, String, DateTime, Boolean, JSON, Text, ForeignKey
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from app.core.db import Base


class Application(Base):
    __tablename__ = "applications"

    id = Column(Integer, primary_key=True, index=True)
    application_id = Column(String(32), unique=True, nullable=False, index=True)  # APP-<yyyymm>-<6 digits>
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    program_id = Column(Integer, ForeignKey("programs.id"), nullable=False, index=True)

    personal_info = Column(JSON, nullable=False, default=dict)
    academic_history = Column(JSON, nullable=False, default=dict)

    # draft, submitted, payment_received, under_review, verified, issue_raised
    status = Column(String(32), nullable=False, default="draft", index=True)

    # Automated extraction + rule check outcome
    ai_verification_status = Column(String(20), nullable=False, default="pending", index=True)  # pending, verified, flagged
    ai_verification_result = Column(JSON, nullable=True)  # {verified: {...}, issues: [...], isValid: bool}

    # Human reviewer outcome
    admin_verification_status = Column(String(20), nullable=False, default="pending")  # pending, verified
    issue_raised = Column(Boolean, nullable=False, default=False)
    issue_details = Column(Text, nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    user = relationship("User")
    program = relationship("Program")
    documents = relationship(
        "Document",
        back_populates="application",
        cascade="all, delete-orphan",
        order_by="Document.id",
    )
    payments = relationship("Payment", back_populates="application")
