from sqlalchemy import Column, Integer, String, DateTime, JSON, Numeric, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from app.core.db import Base


class University(Base):
    __tablename__ = "universities"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)
    code = Column(String(20), unique=True, nullable=False, index=True)
    location = Column(String, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    programs = relationship("Program", back_populates="university")


class Program(Base):
    __tablename__ = "programs"
    __table_args__ = (UniqueConstraint("university_id", "code", name="uq_programs_university_code"),)

    id = Column(Integer, primary_key=True, index=True)
    university_id = Column(Integer, ForeignKey("universities.id"), nullable=False, index=True)
    name = Column(String, nullable=False)
    code = Column(String(40), nullable=False)
    degree_type = Column(String(40), nullable=True)
    duration = Column(Integer, nullable=True)  # years
    application_fee = Column(Numeric(10, 2), nullable=False, default=0)
    eligibility_criteria = Column(JSON, nullable=True)  # e.g. {"minPercentage": 70, "degree": "B.Tech"}
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    university = relationship("University", back_populates="programs")
    required_documents = relationship("RequiredDocument", back_populates="program")

    @property
    def min_percentage(self):
        criteria = self.eligibility_criteria or {}
        value = criteria.get("minPercentage")
        try:
            return float(value) if value is not None else None
        except (TypeError, ValueError):
            return None
