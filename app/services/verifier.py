"""
Document Verifier Service

Cross-checks an extracted field map against what the applicant declared
on the application. Every rule runs; a rule whose inputs are missing is
skipped rather than failed, leaving the gap to manual review.
"""

from datetime import datetime
from typing import Any, Dict, List, Optional

from app.schemas.verification import ApplicantContext, VerificationResult

NAME_MISMATCH = "Name mismatch between document and application"
DOB_MISMATCH = "Date of birth mismatch"

# ISO first, then day-first formats as printed on Indian certificates
DATE_FORMATS = ["%Y-%m-%d", "%Y/%m/%d", "%d/%m/%Y", "%d-%m-%Y", "%d/%m/%y", "%d-%m-%y"]


def normalize_date(value: Any) -> str:
    """Normalize a date to YYYY-MM-DD; unparseable input is returned stripped."""
    if value is None:
        return ""
    text = str(value).strip()
    text_date = text.split("T", 1)[0]  # drop a time part on ISO timestamps
    for fmt in DATE_FORMATS:
        try:
            return datetime.strptime(text_date, fmt).date().isoformat()
        except ValueError:
            continue
    return text


def _as_number(value: Any) -> Optional[float]:
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        try:
            return float(value.replace("%", "").strip())
        except ValueError:
            return None
    return None


def _fmt(number: float) -> str:
    return f"{number:g}"


class DocumentVerifier:
    """Rule checks for one extracted document."""

    def check_name(self, extracted_name: str, context: ApplicantContext) -> bool:
        document_name = extracted_name.lower().strip()
        applicant_name = context.full_name.lower()
        document_first = document_name.split()[0] if document_name.split() else ""
        applicant_first = applicant_name.split()[0] if applicant_name.split() else ""
        return applicant_first in document_name or document_first in applicant_name

    def check_date_of_birth(self, extracted_dob: Any, declared_dob: Any) -> bool:
        return normalize_date(extracted_dob) == normalize_date(declared_dob)

    def verify(
        self,
        extracted: Dict[str, Any],
        context: ApplicantContext,
        document_type: str,
    ) -> VerificationResult:
        verified: Dict[str, bool] = {}
        issues: List[str] = []
        extracted = extracted or {}

        name = extracted.get("name")
        if name and context.first_name:
            if self.check_name(str(name), context):
                verified["name"] = True
            else:
                issues.append(NAME_MISMATCH)

        dob = extracted.get("dateOfBirth")
        if dob and context.date_of_birth:
            if self.check_date_of_birth(dob, context.date_of_birth):
                verified["dateOfBirth"] = True
            else:
                issues.append(DOB_MISMATCH)

        if "marksheet" in (document_type or "").lower():
            percentage = _as_number(extracted.get("percentage"))
            if percentage is not None and context.min_percentage is not None:
                if percentage < context.min_percentage:
                    issues.append(
                        f"Percentage {_fmt(percentage)}% is below required {_fmt(context.min_percentage)}%"
                    )
                else:
                    verified["percentage"] = True

        return VerificationResult(verified=verified, issues=issues, is_valid=not issues)


# Singleton instance
document_verifier = DocumentVerifier()


def verify(extracted: Dict[str, Any], context: ApplicantContext, document_type: str) -> VerificationResult:
    return document_verifier.verify(extracted, context, document_type)
