#!/usr/bin/env python
"""
Populate the database with demo universities, programs and their
required-document catalog, plus an admin account.

    python -m app.seed

Existing rows are left untouched, so the command can be re-run.
"""

import logging

from sqlalchemy.orm import Session

from app import crud
from app.core.db import SessionLocal, init_db, transaction
from app.core.logging_config import configure_logging

logger = logging.getLogger(__name__)

ADMIN_EMAIL = "admin@uniapply.com"

UNIVERSITIES = [
    {"name": "IIT Delhi", "code": "IITD", "location": "New Delhi"},
    {"name": "IIT Bombay", "code": "IITB", "location": "Mumbai"},
    {"name": "IIT Madras", "code": "IITM", "location": "Chennai"},
    {"name": "BITS Pilani", "code": "BITSP", "location": "Pilani"},
    {"name": "NIT Trichy", "code": "NITT", "location": "Trichy"},
]

PROGRAMS = [
    ("IITD", "M.Tech Computer Science", "MTECH_CS", "M.Tech", 3000, {"minPercentage": 70, "degree": "B.Tech"}),
    ("IITB", "M.Tech Data Science", "MTECH_DS", "M.Tech", 3500, {"minPercentage": 75, "degree": "B.Tech"}),
    ("IITB", "MBA", "MBA", "MBA", 2500, {"minPercentage": 60, "degree": "Any"}),
    ("BITSP", "M.Tech Software Engineering", "MTECH_SE", "M.Tech", 2000, {"minPercentage": 65, "degree": "B.Tech"}),
    ("NITT", "M.Tech AI & ML", "MTECH_AI", "M.Tech", 2000, {"minPercentage": 70, "degree": "B.Tech"}),
]

DOCUMENT_TYPES = ["10th Marksheet", "12th Marksheet", "Aadhar Card", "Graduation Certificate"]


def is_required_for(program_code: str, document_type: str) -> bool:
    """Graduation certificates are only mandatory for M.Tech programs."""
    return "Graduation" not in document_type or "MTECH" in program_code


def seed(db: Session) -> None:
    with transaction(db):
        if crud.user.get_by_email(db, ADMIN_EMAIL) is None:
            crud.user.create(
                db,
                obj_in={"email": ADMIN_EMAIL, "role": "admin", "first_name": "Admin", "last_name": "User"},
            )
            logger.info(f"Created admin user {ADMIN_EMAIL}")

        universities = {}
        for uni in UNIVERSITIES:
            university = crud.university.get_by_code(db, uni["code"])
            if university is None:
                university = crud.university.create(db, obj_in=uni)
                logger.info(f"Created university: {uni['name']}")
            universities[uni["code"]] = university

        for uni_code, name, code, degree_type, fee, eligibility in PROGRAMS:
            university = universities[uni_code]
            program = crud.program.get_by_code(db, university.id, code)
            if program is None:
                program = crud.program.create(
                    db,
                    obj_in={
                        "university_id": university.id,
                        "name": name,
                        "code": code,
                        "degree_type": degree_type,
                        "duration": 2,
                        "application_fee": fee,
                        "eligibility_criteria": eligibility,
                    },
                )
                logger.info(f"Created program: {name}")

            for document_type in DOCUMENT_TYPES:
                if crud.required_document.get_entry(db, program.id, document_type) is None:
                    required = is_required_for(code, document_type)
                    crud.required_document.create(
                        db,
                        obj_in={
                            "program_id": program.id,
                            "document_type": document_type,
                            "is_required": required,
                            "is_optional": not required,
                        },
                    )


def main() -> None:
    configure_logging()
    init_db()
    db = SessionLocal()
    try:
        seed(db)
    finally:
        db.close()
    logger.info("Database seed completed")


if __name__ == "__main__":
    main()
