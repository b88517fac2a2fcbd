"""
Verification Schemas

Applicant identity used to cross-check documents, and the verdict the
verification engine produces for one document.
"""

from typing import Dict, List, Optional
from pydantic import BaseModel, ConfigDict, Field


class ApplicantContext(BaseModel):
    """Declared identity and eligibility data a document is checked against."""
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    date_of_birth: Optional[str] = None
    min_percentage: Optional[float] = None

    @property
    def full_name(self) -> str:
        return f"{self.first_name or ''} {self.last_name or ''}".strip()


class VerificationResult(BaseModel):
    """Verdict for one document. Stored on the application as a JSON map."""
    model_config = ConfigDict(populate_by_name=True)

    verified: Dict[str, bool] = Field(default_factory=dict)
    issues: List[str] = Field(default_factory=list)
    is_valid: bool = Field(True, alias="isValid")

    def to_map(self) -> dict:
        return self.model_dump(by_alias=True)
