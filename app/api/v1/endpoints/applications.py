from typing import List
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from app.api import deps
from app import schemas
from app.models.user import User
from app.services import applications as application_service

router = APIRouter()


@router.post("/", response_model=schemas.Application, status_code=201)
def create_application(
    *,
    db: Session = Depends(deps.get_db),
    application_in: schemas.ApplicationCreate,
    current_user: User = Depends(deps.require_student),
):
    return application_service.create_application(db, current_user, application_in)


@router.get("/", response_model=List[schemas.Application])
def read_applications(
    db: Session = Depends(deps.get_db),
    current_user: User = Depends(deps.require_student),
):
    """
    Applications of the current student, newest first.
    """
    return application_service.list_applications(db, current_user)


@router.get("/{id}", response_model=schemas.Application)
def read_application(
    id: int,
    db: Session = Depends(deps.get_db),
    current_user: User = Depends(deps.get_current_user),
):
    return application_service.get_owned_application(db, id, current_user)


@router.put("/{id}", response_model=schemas.Application)
def update_application(
    *,
    id: int,
    db: Session = Depends(deps.get_db),
    application_in: schemas.ApplicationUpdate,
    current_user: User = Depends(deps.require_student),
):
    """
    Amend a draft application. Sending status "submitted" submits it.
    """
    return application_service.update_application(db, current_user, id, application_in)


@router.post("/{id}/submit", response_model=schemas.Application)
def submit_application(
    id: int,
    db: Session = Depends(deps.get_db),
    current_user: User = Depends(deps.require_student),
):
    """
    Submit a draft. Fails with the list of missing required document types.
    """
    return application_service.submit_application(db, current_user, id)
