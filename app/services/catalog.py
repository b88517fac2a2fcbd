"""
Required-document catalog administration and program listing.
"""

import logging
from typing import Any, Dict, List

from sqlalchemy.orm import Session

from app import crud
from app.core.db import transaction
from app.core.errors import NotFoundError, ValidationError
from app.crud.base import Filter
from app.models.document import RequiredDocument
from app.models.program import Program
from app.schemas.catalog import RequiredDocumentConfig

logger = logging.getLogger(__name__)


def _get_program(db: Session, program_id: int) -> Program:
    program = crud.program.get(db, program_id)
    if program is None:
        raise NotFoundError("Program not found")
    return program


def list_required_documents(db: Session, program_id: int) -> List[RequiredDocument]:
    _get_program(db, program_id)
    entries = crud.required_document.get_for_program(db, program_id)
    # required first, then alphabetical
    return sorted(entries, key=lambda e: (not e.is_required, e.document_type))


def configure_required_document(db: Session, program_id: int, config: RequiredDocumentConfig) -> RequiredDocument:
    """Insert or update the catalog entry for (program, document type)."""
    document_type = (config.document_type or "").strip()
    if not document_type:
        raise ValidationError("Document type is required")
    _get_program(db, program_id)

    values = {
        "is_required": config.is_required,
        "is_optional": config.is_optional,
        "description": config.description,
    }
    with transaction(db):
        entry = crud.required_document.get_entry(db, program_id, document_type)
        if entry is None:
            entry = crud.required_document.create(
                db, obj_in={"program_id": program_id, "document_type": document_type, **values}
            )
        else:
            entry = crud.required_document.update(db, db_obj=entry, obj_in=values)
    logger.info(f"Program {program_id} requires '{document_type}': required={config.is_required}")
    return entry


def list_programs(db: Session, university_id: int = None) -> List[Program]:
    filters = [Filter("university_id", "eq", university_id)] if university_id else []
    programs = crud.program.query(db, filters)
    return sorted(programs, key=lambda p: (p.university.name, p.name))


def list_universities(db: Session) -> List[Dict[str, Any]]:
    """Universities by name, each with how many programs it offers."""
    program_counts = crud.program.count_by(db, "university_id")
    return [
        {
            "id": university.id,
            "name": university.name,
            "code": university.code,
            "location": university.location,
            "programs_count": program_counts.get(university.id, 0),
        }
        for university in crud.university.query(db, order_by="name")
    ]
