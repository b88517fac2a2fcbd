from sqlalchemy import Column, Integer, String, DateTime, Boolean, JSON, Text, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from app.core.db import Base


class Document(Base):
    __tablename__ = "documents"

    id = Column(Integer, primary_key=True, index=True)
    application_id = Column(Integer, ForeignKey("applications.id", ondelete="CASCADE"), nullable=False, index=True)
    document_type = Column(String(100), nullable=False, index=True)

    # File metadata (bytes live in file storage)
    file_name = Column(String, nullable=False)
    file_path = Column(String, nullable=False)
    file_size = Column(Integer, nullable=False)
    mime_type = Column(String, nullable=False)

    extracted_data = Column(JSON, nullable=False, default=dict)
    ai_verification_status = Column(String(20), nullable=False)  # verified, flagged
    verification_result = Column(JSON, nullable=True)  # this document's {verified, issues, isValid}

    admin_verification_status = Column(String(20), nullable=False, default="pending")  # pending, verified
    is_rejected = Column(Boolean, nullable=False, default=False)
    admin_notes = Column(Text, nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    application = relationship("Application", back_populates="documents")

    @property
    def is_admin_final(self) -> bool:
        """Verified and rejected are both terminal for admin action."""
        return self.admin_verification_status == "verified" or bool(self.is_rejected)


class RequiredDocument(Base):
    """Required-document catalog entry for one program."""

    __tablename__ = "required_documents"
    __table_args__ = (UniqueConstraint("program_id", "document_type", name="uq_required_documents_program_type"),)

    id = Column(Integer, primary_key=True, index=True)
    program_id = Column(Integer, ForeignKey("programs.id"), nullable=False, index=True)
    document_type = Column(String(100), nullable=False)
    is_required = Column(Boolean, nullable=False, default=False)
    is_optional = Column(Boolean, nullable=False, default=False)
    description = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    program = relationship("Program", back_populates="required_documents")
