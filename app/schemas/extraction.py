"""
Extraction Schemas

Per-document-type field schemas the remote extraction model must satisfy.
Keys use the camelCase names stored in ``extracted_data``.
"""

from typing import Dict, Optional, Type
from pydantic import BaseModel, ConfigDict, Field, field_validator


class ExtractedFields(BaseModel):
    """Common behaviour: unknown keys dropped, numbers accepted for text fields."""
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    name: Optional[str] = None

    @field_validator("*", mode="before")
    @classmethod
    def _blank_to_none(cls, value):
        if isinstance(value, str) and not value.strip():
            return None
        return value

    def to_field_map(self) -> dict:
        return self.model_dump(by_alias=True, exclude_none=True)


class MarksheetFields(ExtractedFields):
    """10th/12th marksheet."""
    date_of_birth: Optional[str] = Field(None, alias="dateOfBirth")
    percentage: Optional[float] = None
    board: Optional[str] = None
    roll_number: Optional[str] = Field(None, alias="rollNumber")
    year: Optional[str] = None

    @field_validator("percentage", mode="before")
    @classmethod
    def _strip_percent_sign(cls, value):
        if isinstance(value, str):
            return value.replace("%", "").strip() or None
        return value

    @field_validator("roll_number", "year", mode="before")
    @classmethod
    def _number_to_text(cls, value):
        if isinstance(value, (int, float)):
            return str(value)
        return value


class AadharFields(ExtractedFields):
    date_of_birth: Optional[str] = Field(None, alias="dateOfBirth")
    aadhar_last4: Optional[str] = Field(None, alias="aadharLast4")
    address: Optional[str] = None

    @field_validator("aadhar_last4", mode="before")
    @classmethod
    def _number_to_text(cls, value):
        if isinstance(value, int):
            return str(value).zfill(4)
        return value


class GraduationFields(ExtractedFields):
    degree: Optional[str] = None
    university: Optional[str] = None
    year: Optional[str] = None
    cgpa: Optional[str] = None

    @field_validator("year", "cgpa", mode="before")
    @classmethod
    def _number_to_text(cls, value):
        if isinstance(value, (int, float)):
            return str(value)
        return value


DOCUMENT_SCHEMAS: Dict[str, Type[ExtractedFields]] = {
    "10th Marksheet": MarksheetFields,
    "12th Marksheet": MarksheetFields,
    "Aadhar Card": AadharFields,
    "Graduation Certificate": GraduationFields,
}


def schema_for(document_type: str) -> Optional[Type[ExtractedFields]]:
    """Fixed schema for a known document type, None for free-form types."""
    return DOCUMENT_SCHEMAS.get(document_type)
