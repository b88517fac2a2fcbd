import re

import pytest

from app import crud
from app.core.errors import AccessDeniedError, MissingDocumentsError, NotFoundError, ValidationError
from app.schemas.application import ApplicationCreate, ApplicationUpdate
from app.schemas.document import FileMeta
from app.schemas.verification import VerificationResult
from app.services.applications import (
    create_application,
    get_owned_application,
    missing_required_documents,
    submit_application,
    update_application,
)
from app.services.documents import record_upload
from app.services.identifiers import generate_application_id, generate_payment_id, generate_ticket_id


def upload(db, application, document_type):
    meta = FileMeta(file_name="f.pdf", file_path="/tmp/f.pdf", file_size=1, mime_type="application/pdf")
    record_upload(db, application, document_type, meta, {}, VerificationResult())
    db.commit()


def test_identifier_formats():
    assert re.fullmatch(r"APP-\d{6}-\d{6}", generate_application_id())
    assert re.fullmatch(r"PAY-\d+-\d{6}", generate_payment_id())
    assert re.fullmatch(r"TKT-\d+-\d{4}", generate_ticket_id())


def test_create_application_starts_as_draft(db, student, program):
    application = create_application(
        db, student, ApplicationCreate(program_id=program.id, personal_info={"dateOfBirth": "2000-08-15"})
    )

    assert application.status == "draft"
    assert application.ai_verification_status == "pending"
    assert application.user_id == student.id
    assert re.fullmatch(r"APP-\d{6}-\d{6}", application.application_id)


def test_create_application_unknown_program(db, student):
    with pytest.raises(NotFoundError):
        create_application(db, student, ApplicationCreate(program_id=404))


def test_ownership(db, student, other_student, admin, application):
    assert get_owned_application(db, application.id, student) is application
    assert get_owned_application(db, application.id, admin) is application
    with pytest.raises(AccessDeniedError):
        get_owned_application(db, application.id, other_student)


def test_submit_without_documents_lists_every_missing_type(db, student, application):
    with pytest.raises(MissingDocumentsError) as exc:
        submit_application(db, student, application.id)

    assert exc.value.details == {"missingDocuments": ["10th Marksheet", "Aadhar Card"]}
    assert application.status == "draft"


def test_missing_types_are_required_minus_uploaded(db, student, application):
    upload(db, application, "10th Marksheet")
    upload(db, application, "Graduation Certificate")

    assert missing_required_documents(db, application) == ["Aadhar Card"]
    with pytest.raises(MissingDocumentsError) as exc:
        submit_application(db, student, application.id)
    assert exc.value.missing_types == ["Aadhar Card"]


def test_optional_documents_do_not_block_submit(db, student, application):
    upload(db, application, "10th Marksheet")
    upload(db, application, "Aadhar Card")

    submitted = submit_application(db, student, application.id)

    assert submitted.status == "submitted"


def test_submit_twice_is_rejected(db, student, application):
    upload(db, application, "10th Marksheet")
    upload(db, application, "Aadhar Card")
    submit_application(db, student, application.id)

    with pytest.raises(ValidationError, match="already submitted"):
        submit_application(db, student, application.id)


def test_submit_with_empty_catalog(db, student, application, program):
    for entry in crud.required_document.get_for_program(db, program.id):
        db.delete(entry)
    db.commit()

    assert submit_application(db, student, application.id).status == "submitted"


def test_update_draft_details(db, student, application):
    updated = update_application(
        db, student, application.id, ApplicationUpdate(academic_history={"graduation": {"cgpa": 8.1}})
    )

    assert updated.academic_history == {"graduation": {"cgpa": 8.1}}
    assert updated.personal_info == {"dateOfBirth": "2000-08-15"}
    assert updated.status == "draft"


def test_update_to_submitted_goes_through_document_gate(db, student, application):
    with pytest.raises(MissingDocumentsError):
        update_application(
            db, student, application.id, ApplicationUpdate(status="submitted", personal_info={"city": "Pune"})
        )
    assert application.status == "draft"
    assert application.personal_info == {"dateOfBirth": "2000-08-15"}

    upload(db, application, "10th Marksheet")
    upload(db, application, "Aadhar Card")
    assert update_application(db, student, application.id, ApplicationUpdate(status="submitted")).status == "submitted"


@pytest.mark.parametrize("status", ["verified", "payment_received", "issue_raised"])
def test_update_cannot_jump_status(db, student, application, status):
    with pytest.raises(ValidationError):
        update_application(db, student, application.id, ApplicationUpdate(status=status))

    assert application.status == "draft"


def test_update_after_submit_is_rejected(db, student, application):
    application.status = "submitted"
    db.commit()

    with pytest.raises(ValidationError, match="Only draft applications can be updated"):
        update_application(db, student, application.id, ApplicationUpdate(personal_info={}))


def test_update_someone_elses_application(db, other_student, application):
    with pytest.raises(AccessDeniedError):
        update_application(db, other_student, application.id, ApplicationUpdate(personal_info={}))
