"""
Document Service

Upload pipeline and admin review of documents:

    store file -> read text -> extract fields -> verify -> record
    admin verify/reject -> recompute application verification

The application-level AI status is derived from all of the application's
documents through the configured aggregation policy.
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, List

from sqlalchemy.orm import Session

from app import crud
from app.core.db import transaction
from app.core.errors import NotFoundError, ValidationError
from app.crud.base import Filter
from app.models.application import Application
from app.models.document import Document
from app.models.user import User
from app.schemas.document import FileMeta
from app.schemas.verification import ApplicantContext, VerificationResult
from app.services.aggregation import aggregate_ai_result, aggregate_ai_status
from app.services.applications import get_owned_application
from app.services.extractor import DocumentExtractor, document_extractor
from app.services.file_storage import LocalFileStorage, file_storage
from app.services.text_reader import read_text
from app.services.verifier import DocumentVerifier, document_verifier
from app.services.workflow import ApplicationStatus, Trigger, can_fire, fire

logger = logging.getLogger(__name__)

ADMIN_DECISIONS = ("verified", "rejected")


@dataclass
class UploadOutcome:
    document: Document
    extracted_data: Dict[str, Any]
    verification: VerificationResult


def build_applicant_context(application: Application) -> ApplicantContext:
    """Identity the documents are checked against: account names, declared DOB, program cut-off."""
    personal_info = application.personal_info or {}
    user = application.user
    program = application.program
    return ApplicantContext(
        first_name=user.first_name if user else None,
        last_name=user.last_name if user else None,
        date_of_birth=personal_info.get("dateOfBirth") or personal_info.get("dob"),
        min_percentage=program.min_percentage if program else None,
    )


def record_upload(
    db: Session,
    application: Application,
    document_type: str,
    file_meta: FileMeta,
    extracted: Dict[str, Any],
    verdict: VerificationResult,
) -> Document:
    """Create the document row and refresh the application's AI status and result. Flushes only."""
    document = crud.document.create(
        db,
        obj_in={
            "application_id": application.id,
            "document_type": document_type,
            **file_meta.model_dump(),
            "extracted_data": extracted or {},
            "ai_verification_status": "verified" if verdict.is_valid else "flagged",
            "verification_result": verdict.to_map(),
        },
    )

    documents = crud.document.get_for_application(db, application.id)
    crud.application.update(
        db,
        db_obj=application,
        obj_in={
            "ai_verification_status": aggregate_ai_status([doc.ai_verification_status for doc in documents]),
            "ai_verification_result": aggregate_ai_result([doc.verification_result for doc in documents]),
        },
    )
    return document


def upload_document(
    db: Session,
    user: User,
    application_id: int,
    document_type: str,
    filename: str,
    content: bytes,
    content_type: str = None,
    *,
    storage: LocalFileStorage = file_storage,
    extractor: DocumentExtractor = document_extractor,
    verifier: DocumentVerifier = document_verifier,
) -> UploadOutcome:
    if not application_id or not (document_type or "").strip():
        raise ValidationError("Application ID and document type are required")
    document_type = document_type.strip()

    application = crud.application.get(db, application_id)
    if application is None or application.user_id != user.id:
        raise NotFoundError("Application not found")

    file_meta = storage.save(user.id, filename, content, content_type)
    try:
        context = build_applicant_context(application)
        text = read_text(file_meta.file_path)
        extracted = extractor.extract(document_type, text, context)
        verdict = verifier.verify(extracted, context, document_type)

        with transaction(db):
            document = record_upload(db, application, document_type, file_meta, extracted, verdict)
    except Exception:
        storage.delete(file_meta.file_path)
        raise

    logger.info(
        f"Document {document.id} ({document_type}) uploaded for {application.application_id}: "
        f"{document.ai_verification_status}"
    )
    return UploadOutcome(document=document, extracted_data=extracted, verification=verdict)


def list_documents(db: Session, user: User, application_id: int) -> List[Document]:
    get_owned_application(db, application_id, user)
    return crud.document.query(db, [Filter("application_id", "eq", application_id)], order_by="id", descending=True)


def recompute_application_verification(db: Session, application_id: int) -> Application:
    """
    Promote the application once every uploaded document is admin verified.

    Reads the committed document set, so it can be re-run at any time;
    an already promoted application is left untouched.
    """
    application = crud.application.get(db, application_id)
    if application is None:
        raise NotFoundError("Application not found")

    total = crud.document.count_for_application(db, application_id)
    verified = crud.document.count_for_application(
        db, application_id, Filter("admin_verification_status", "eq", "verified")
    )
    if total == 0 or verified != total:
        return application

    if application.status == ApplicationStatus.VERIFIED.value:
        if application.admin_verification_status != "verified":
            with transaction(db):
                crud.application.update(db, db_obj=application, obj_in={"admin_verification_status": "verified"})
        return application

    if not can_fire(application, Trigger.DOCUMENTS_VERIFIED):
        logger.info(
            f"All documents verified for {application.application_id} but status "
            f"'{application.status}' is not promoted"
        )
        return application

    with transaction(db):
        fire(application, Trigger.DOCUMENTS_VERIFIED)
        db.flush()
    return application


def admin_verify_document(db: Session, document_id: int, status: str, notes: str = None) -> Document:
    if status not in ADMIN_DECISIONS:
        raise ValidationError("Invalid status", details={"allowed": list(ADMIN_DECISIONS)})

    document = crud.document.get(db, document_id)
    if document is None:
        raise NotFoundError("Document not found")
    if document.is_admin_final:
        state = "rejected" if document.is_rejected else "verified"
        raise ValidationError(f"Document already {state}")

    with transaction(db):
        crud.document.update(
            db,
            db_obj=document,
            obj_in={
                "admin_verification_status": "verified" if status == "verified" else "pending",
                "is_rejected": status == "rejected",
                "admin_notes": notes,
            },
        )
    logger.info(f"Document {document.id} {status} by admin")

    recompute_application_verification(db, document.application_id)
    return document
