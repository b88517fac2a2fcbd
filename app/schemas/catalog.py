from decimal import Decimal
from typing import Any, Dict, Optional
from pydantic import BaseModel


class RequiredDocumentConfig(BaseModel):
    document_type: str
    is_required: bool = False
    is_optional: bool = False
    description: Optional[str] = None


class RequiredDocument(RequiredDocumentConfig):
    id: int
    program_id: int

    class Config:
        from_attributes = True


class Program(BaseModel):
    id: int
    university_id: int
    name: str
    code: str
    degree_type: Optional[str] = None
    duration: Optional[int] = None
    application_fee: Decimal
    eligibility_criteria: Optional[Dict[str, Any]] = None

    class Config:
        from_attributes = True


class University(BaseModel):
    id: int
    name: str
    code: str
    location: Optional[str] = None
    programs_count: int = 0
