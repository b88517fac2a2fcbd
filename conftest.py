import os

# Settings are read at import time: point the app at an in-memory database
# and keep the remote extractor off before anything from app is imported.
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["EXTRACTION_LLM_ENABLED"] = "false"
os.environ["JWT_SECRET"] = "test-secret-key-for-uniapply-tokens"

import pymupdf
import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker

from app import crud
from app.api import deps
from app.core.db import create_db_engine, init_db
from app.core.security import create_access_token
from app.main import app
from app.services.file_storage import file_storage


@pytest.fixture
def db():
    engine = create_db_engine("sqlite://")
    init_db(bind=engine)
    session = sessionmaker(bind=engine, autocommit=False, autoflush=False, expire_on_commit=False)()
    try:
        yield session
    finally:
        session.close()
        engine.dispose()


@pytest.fixture
def upload_dir(tmp_path, monkeypatch):
    monkeypatch.setattr(file_storage, "root", str(tmp_path))
    return tmp_path


@pytest.fixture
def client(db, upload_dir):
    app.dependency_overrides[deps.get_db] = lambda: db
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def student(db):
    user = crud.user.create(
        db,
        obj_in={"email": "amit@example.com", "role": "student", "first_name": "Amit", "last_name": "Kumar"},
    )
    db.commit()
    return user


@pytest.fixture
def other_student(db):
    user = crud.user.create(
        db,
        obj_in={"email": "ravi@example.com", "role": "student", "first_name": "Ravi", "last_name": "Shah"},
    )
    db.commit()
    return user


@pytest.fixture
def admin(db):
    user = crud.user.create(
        db,
        obj_in={"email": "admin@example.com", "role": "admin", "first_name": "Admin", "last_name": "User"},
    )
    db.commit()
    return user


@pytest.fixture
def program(db):
    """M.Tech program: marksheets and Aadhar required, graduation optional, 70% cut-off."""
    university = crud.university.create(db, obj_in={"name": "IIT Delhi", "code": "IITD", "location": "New Delhi"})
    program = crud.program.create(
        db,
        obj_in={
            "university_id": university.id,
            "name": "M.Tech Computer Science",
            "code": "MTECH_CS",
            "degree_type": "M.Tech",
            "duration": 2,
            "application_fee": 3000,
            "eligibility_criteria": {"minPercentage": 70, "degree": "B.Tech"},
        },
    )
    for document_type, required in [
        ("10th Marksheet", True),
        ("Aadhar Card", True),
        ("Graduation Certificate", False),
    ]:
        crud.required_document.create(
            db,
            obj_in={
                "program_id": program.id,
                "document_type": document_type,
                "is_required": required,
                "is_optional": not required,
            },
        )
    db.commit()
    return program


@pytest.fixture
def application(db, student, program):
    app_obj = crud.application.create(
        db,
        obj_in={
            "application_id": "APP-202601-000001",
            "user_id": student.id,
            "program_id": program.id,
            "personal_info": {"dateOfBirth": "2000-08-15"},
            "academic_history": {},
        },
    )
    db.commit()
    return app_obj


def auth_header(user) -> dict:
    return {"Authorization": f"Bearer {create_access_token(user.id, user.role)}"}


def make_pdf(text: str) -> bytes:
    doc = pymupdf.open()
    page = doc.new_page()
    page.insert_text((72, 72), text, fontsize=11)
    data = doc.tobytes()
    doc.close()
    return data
