from sqlalchemy import Column, Integer, String, DateTime, JSON, Numeric, ForeignKey
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from app.core.db import Base


class Payment(Base):
    __tablename__ = "payments"

    id = Column(Integer, primary_key=True, index=True)
    payment_id = Column(String(40), unique=True, nullable=False, index=True)  # PAY-<epoch ms>-<6 digits>
    application_id = Column(Integer, ForeignKey("applications.id"), nullable=False, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    payment_type = Column(String(32), nullable=False)  # application_fee, issue_resolution
    amount = Column(Numeric(10, 2), nullable=False)
    currency = Column(String(8), nullable=False, default="INR")
    status = Column(String(20), nullable=False, default="pending", index=True)  # pending, completed, failed
    transaction_id = Column(String, nullable=True)
    payment_data = Column(JSON, nullable=True)  # raw gateway response
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    application = relationship("Application", back_populates="payments")
