from typing import List, Optional
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from app.api import deps
from app import schemas
from app.services import admin as admin_service
from app.services import catalog as catalog_service
from app.services import documents as document_service

# Every route here requires an admin token
router = APIRouter(dependencies=[Depends(deps.require_admin)])


@router.get("/applications", response_model=schemas.ApplicationList)
def read_applications(
    db: Session = Depends(deps.get_db),
    status: Optional[str] = None,
    ai_status: Optional[str] = None,
    skip: int = 0,
    limit: int = 50,
):
    """
    Review queue, filtered by workflow status and/or AI verification status.
    """
    return admin_service.list_applications(db, status=status, ai_status=ai_status, skip=skip, limit=limit)


@router.get("/applications/{id}", response_model=schemas.ApplicationDetail)
def read_application_detail(id: int, db: Session = Depends(deps.get_db)):
    return admin_service.get_application_detail(db, id)


@router.post("/applications/{id}/approve", response_model=schemas.Application)
def approve_application(id: int, db: Session = Depends(deps.get_db)):
    """
    Force the application to verified, bypassing document completeness.
    """
    return admin_service.approve_application(db, id)


@router.post("/applications/{id}/raise-issue", response_model=schemas.Application)
def raise_issue(id: int, issue_in: schemas.RaiseIssueRequest, db: Session = Depends(deps.get_db)):
    return admin_service.raise_issue(db, id, issue_in.issue_details)


@router.post("/documents/{id}/verify", response_model=schemas.Document)
def verify_document(id: int, verify_in: schemas.DocumentVerifyRequest, db: Session = Depends(deps.get_db)):
    """
    Manual verification ("verified" or "rejected"). Promotes the application
    once all of its documents are verified.
    """
    return document_service.admin_verify_document(db, id, verify_in.status, verify_in.notes)


@router.get("/analytics", response_model=schemas.Analytics)
def read_analytics(db: Session = Depends(deps.get_db)):
    return admin_service.get_analytics(db)


@router.get("/students", response_model=List[schemas.StudentSummary])
def read_students(db: Session = Depends(deps.get_db)):
    return admin_service.list_students(db)


@router.get("/universities", response_model=List[schemas.University])
def read_universities(db: Session = Depends(deps.get_db)):
    return catalog_service.list_universities(db)


@router.get("/programs", response_model=List[schemas.Program])
def read_programs(db: Session = Depends(deps.get_db), university_id: Optional[int] = None):
    return catalog_service.list_programs(db, university_id)


@router.get("/programs/{program_id}/documents", response_model=List[schemas.RequiredDocument])
def read_required_documents(program_id: int, db: Session = Depends(deps.get_db)):
    return catalog_service.list_required_documents(db, program_id)


@router.post("/programs/{program_id}/documents", response_model=schemas.RequiredDocument)
def configure_required_document(
    program_id: int,
    config_in: schemas.RequiredDocumentConfig,
    db: Session = Depends(deps.get_db),
):
    return catalog_service.configure_required_document(db, program_id, config_in)
