"""
Error taxonomy for the application core.

Services raise these; the HTTP layer maps each class to a status code
(see ``app.main``). Nothing here is retried by the core.
"""

from typing import Any, Dict, List, Optional


class UniApplyError(Exception):
    """Base class for all domain errors."""

    status_code = 500

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class ValidationError(UniApplyError):
    """Bad or missing input, or an illegal state transition."""

    status_code = 400


class MissingDocumentsError(ValidationError):
    """Submission blocked because required document types were not uploaded."""

    def __init__(self, missing_types: List[str]):
        super().__init__(
            "Missing required documents",
            details={"missingDocuments": list(missing_types)},
        )
        self.missing_types = list(missing_types)


class PaymentAlreadyCompletedError(ValidationError):
    def __init__(self, application_id: str):
        super().__init__(
            "Payment already completed",
            details={"applicationId": application_id, "code": "already_completed"},
        )


class NotFoundError(UniApplyError):
    """Referenced entity is absent or not owned by the caller."""

    status_code = 404


class AuthenticationError(UniApplyError):
    status_code = 401


class AccessDeniedError(UniApplyError):
    """Role or ownership mismatch."""

    status_code = 403


class ExternalServiceError(UniApplyError):
    """Remote extraction failed. Always recovered inside the extractor."""

    status_code = 502


class PersistenceError(UniApplyError):
    """The store is unavailable or rejected the unit of work."""

    status_code = 503
