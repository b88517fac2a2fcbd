"""
Application Service

Student-facing application lifecycle: create, read, amend while in draft,
and submit once every required document type has been uploaded.
"""

import logging
from typing import List

from sqlalchemy.orm import Session

from app import crud
from app.core.db import transaction
from app.core.errors import AccessDeniedError, MissingDocumentsError, NotFoundError, ValidationError
from app.models.application import Application
from app.models.user import User
from app.schemas.application import ApplicationCreate, ApplicationUpdate
from app.services.identifiers import generate_application_id
from app.services.workflow import ApplicationStatus, Trigger, fire

logger = logging.getLogger(__name__)


def get_application(db: Session, application_id: int) -> Application:
    application = crud.application.get(db, application_id)
    if application is None:
        raise NotFoundError("Application not found")
    return application


def get_owned_application(db: Session, application_id: int, user: User) -> Application:
    """Admins see every application, students only their own."""
    application = get_application(db, application_id)
    if user.role != "admin" and application.user_id != user.id:
        raise AccessDeniedError("Access denied")
    return application


def create_application(db: Session, user: User, obj_in: ApplicationCreate) -> Application:
    if crud.program.get(db, obj_in.program_id) is None:
        raise NotFoundError("Program not found")

    with transaction(db):
        application = crud.application.create(
            db,
            obj_in={
                "application_id": generate_application_id(),
                "user_id": user.id,
                "program_id": obj_in.program_id,
                "personal_info": obj_in.personal_info or {},
                "academic_history": obj_in.academic_history or {},
                "status": ApplicationStatus.DRAFT.value,
            },
        )
    logger.info(f"Application {application.application_id} created by user {user.id}")
    return application


def list_applications(db: Session, user: User) -> List[Application]:
    return crud.application.get_for_user(db, user.id)


def missing_required_documents(db: Session, application: Application) -> List[str]:
    """Required catalog types for the program that have no uploaded document."""
    required = crud.required_document.get_required_types(db, application.program_id)
    uploaded = set(crud.document.get_uploaded_types(db, application.id))
    return [doc_type for doc_type in required if doc_type not in uploaded]


def _check_submittable(db: Session, application: Application) -> None:
    if application.status != ApplicationStatus.DRAFT.value:
        raise ValidationError("Application already submitted")
    missing = missing_required_documents(db, application)
    if missing:
        logger.info(f"Application {application.application_id} submit blocked, missing: {missing}")
        raise MissingDocumentsError(missing)


def submit_application(db: Session, user: User, application_id: int) -> Application:
    application = get_owned_application(db, application_id, user)
    _check_submittable(db, application)

    with transaction(db):
        fire(application, Trigger.SUBMIT)
        db.flush()
    return application


def update_application(db: Session, user: User, application_id: int, obj_in: ApplicationUpdate) -> Application:
    """
    Amend a draft. ``status`` may only be ``draft`` (no change) or
    ``submitted``, which goes through the same document gate as submit.
    """
    application = get_owned_application(db, application_id, user)
    if application.status != ApplicationStatus.DRAFT.value:
        raise ValidationError("Only draft applications can be updated")

    submit = False
    if obj_in.status is not None:
        if obj_in.status == ApplicationStatus.SUBMITTED.value:
            _check_submittable(db, application)
            submit = True
        elif obj_in.status != ApplicationStatus.DRAFT.value:
            raise ValidationError(f"Status can only be changed to '{ApplicationStatus.SUBMITTED.value}'")

    changes = {}
    if obj_in.personal_info is not None:
        changes["personal_info"] = obj_in.personal_info
    if obj_in.academic_history is not None:
        changes["academic_history"] = obj_in.academic_history

    with transaction(db):
        if changes:
            crud.application.update(db, db_obj=application, obj_in=changes)
        if submit:
            fire(application, Trigger.SUBMIT)
            db.flush()
    return application
