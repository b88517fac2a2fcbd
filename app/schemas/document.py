from datetime import datetime
from typing import Any, Dict, Optional
from pydantic import BaseModel, Field


class FileMeta(BaseModel):
    """Metadata handed back by file storage for one stored upload."""
    file_name: str
    file_path: str
    file_size: int
    mime_type: str


class Document(BaseModel):
    id: int
    application_id: int
    document_type: str
    file_name: str
    file_size: int
    mime_type: str
    extracted_data: Dict[str, Any] = Field(default_factory=dict)
    ai_verification_status: str
    verification_result: Optional[Dict[str, Any]] = None
    admin_verification_status: str
    is_rejected: bool
    admin_notes: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class DocumentVerifyRequest(BaseModel):
    status: str  # verified or rejected
    notes: Optional[str] = None


class UploadResult(BaseModel):
    document: Document
    extracted_data: Dict[str, Any]
    verification: Dict[str, Any]
