import asyncio
from typing import List
from fastapi import APIRouter, Depends, File, Form, UploadFile
from sqlalchemy.orm import Session
from app.api import deps
from app import schemas
from app.models.user import User
from app.services import documents as document_service

router = APIRouter()


@router.post("/upload", response_model=schemas.UploadResult)
async def upload_document(
    application_id: int = Form(...),
    document_type: str = Form(...),
    document: UploadFile = File(...),
    db: Session = Depends(deps.get_db),
    current_user: User = Depends(deps.require_student),
):
    """
    Store a document, extract its fields and verify them against the application.
    """
    try:
        content = await document.read()
    finally:
        document.file.close()

    # extraction may call out to the LLM; keep it off the event loop
    outcome = await asyncio.to_thread(
        document_service.upload_document,
        db,
        current_user,
        application_id,
        document_type,
        document.filename,
        content,
        document.content_type,
    )
    return schemas.UploadResult(
        document=schemas.Document.model_validate(outcome.document),
        extracted_data=outcome.extracted_data,
        verification=outcome.verification.to_map(),
    )


@router.get("/{application_id}", response_model=List[schemas.Document])
def read_documents(
    application_id: int,
    db: Session = Depends(deps.get_db),
    current_user: User = Depends(deps.get_current_user),
):
    return document_service.list_documents(db, current_user, application_id)
