from datetime import datetime
from typing import Any, Dict, List, Optional
from pydantic import BaseModel, Field

from app.schemas.document import Document
from app.schemas.user import User


class ApplicationCreate(BaseModel):
    program_id: int
    personal_info: Dict[str, Any] = Field(default_factory=dict)
    academic_history: Dict[str, Any] = Field(default_factory=dict)


class ApplicationUpdate(BaseModel):
    personal_info: Optional[Dict[str, Any]] = None
    academic_history: Optional[Dict[str, Any]] = None
    status: Optional[str] = None  # only "draft" or "submitted"


class RaiseIssueRequest(BaseModel):
    issue_details: str


class Application(BaseModel):
    id: int
    application_id: str
    user_id: int
    program_id: int
    personal_info: Dict[str, Any] = Field(default_factory=dict)
    academic_history: Dict[str, Any] = Field(default_factory=dict)
    status: str
    ai_verification_status: str
    ai_verification_result: Optional[Dict[str, Any]] = None
    admin_verification_status: str
    issue_raised: bool
    issue_details: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class ApplicationDetail(BaseModel):
    application: Application
    documents: List[Document]


class Pagination(BaseModel):
    limit: int
    offset: int
    total: int


class ApplicationList(BaseModel):
    items: List[Application]
    pagination: Pagination


class Revenue(BaseModel):
    application_fee_revenue: float
    issue_resolution_revenue: float
    total_transactions: int


class Analytics(BaseModel):
    status_counts: Dict[str, int]
    ai_status_counts: Dict[str, int]
    revenue: Revenue
    recent_applications: int
    total_applications: int
    pending_review: int
    open_tickets: int


class StudentSummary(User):
    total_applications: int
