from app import crud
from app.seed import ADMIN_EMAIL, DOCUMENT_TYPES, PROGRAMS, UNIVERSITIES, is_required_for, seed


def test_seed_is_idempotent(db):
    seed(db)
    seed(db)

    assert crud.university.count(db) == len(UNIVERSITIES)
    assert crud.program.count(db) == len(PROGRAMS)
    assert crud.required_document.count(db) == len(PROGRAMS) * len(DOCUMENT_TYPES)
    assert crud.user.get_by_email(db, ADMIN_EMAIL).role == "admin"


def test_graduation_required_only_for_mtech(db):
    seed(db)
    mba = crud.program.get_by(db, crud.Filter("code", "eq", "MBA"))

    assert crud.required_document.get_required_types(db, mba.id) == [
        "10th Marksheet", "12th Marksheet", "Aadhar Card",
    ]
    assert is_required_for("MTECH_CS", "Graduation Certificate")
