import pytest

from app import crud
from app.core.errors import NotFoundError, PaymentAlreadyCompletedError, ValidationError
from app.services.admin import raise_issue
from app.services.payments import (
    create_application_fee_payment,
    create_issue_resolution_payment,
    list_payments,
    record_payment_result,
)


@pytest.fixture
def verified_application(db, application):
    application.status = "verified"
    application.admin_verification_status = "verified"
    db.commit()
    return application


def test_fee_payment_handoff(db, student, verified_application):
    payment, handoff = create_application_fee_payment(db, student, verified_application.id)

    assert payment.status == "pending"
    assert payment.payment_type == "application_fee"
    assert payment.payment_id.startswith("PAY-")
    assert handoff.amount == 300000
    assert handoff.currency == "INR"
    assert handoff.order_id == payment.payment_id


def test_fee_payment_requires_verified_application(db, student, application):
    with pytest.raises(ValidationError, match="must be verified"):
        create_application_fee_payment(db, student, application.id)


def test_fee_payment_for_someone_elses_application(db, other_student, verified_application):
    with pytest.raises(NotFoundError):
        create_application_fee_payment(db, other_student, verified_application.id)


def test_completed_fee_moves_application_to_payment_received(db, student, verified_application):
    payment, _ = create_application_fee_payment(db, student, verified_application.id)

    record_payment_result(db, payment.payment_id, "completed", transaction_id="txn_1", gateway_response={"ok": True})

    assert payment.status == "completed"
    assert payment.transaction_id == "txn_1"
    assert payment.payment_data == {"ok": True}
    assert verified_application.status == "payment_received"


def test_second_fee_payment_is_rejected_without_new_row(db, student, verified_application):
    payment, _ = create_application_fee_payment(db, student, verified_application.id)
    record_payment_result(db, payment.payment_id, "completed")
    verified_application.status = "verified"  # back in the payable state
    db.commit()
    before = crud.payment.count(db)

    with pytest.raises(PaymentAlreadyCompletedError) as exc:
        create_application_fee_payment(db, student, verified_application.id)

    assert exc.value.details["code"] == "already_completed"
    assert crud.payment.count(db) == before


def test_failed_payment_leaves_application_alone(db, student, verified_application):
    payment, _ = create_application_fee_payment(db, student, verified_application.id)

    record_payment_result(db, payment.payment_id, "failed")

    assert payment.status == "failed"
    assert verified_application.status == "verified"
    # a failed attempt does not block paying again
    assert create_application_fee_payment(db, student, verified_application.id)[0].status == "pending"


def test_completed_payment_recorded_even_when_transition_not_allowed(db, student, verified_application):
    payment, _ = create_application_fee_payment(db, student, verified_application.id)
    raise_issue(db, verified_application.id, "Aadhar scan is blurry")

    record_payment_result(db, payment.payment_id, "completed")

    assert payment.status == "completed"
    assert verified_application.status == "issue_raised"


def test_issue_resolution_flow(db, student, verified_application):
    with pytest.raises(NotFoundError, match="with issue"):
        create_issue_resolution_payment(db, student, verified_application.id)

    raise_issue(db, verified_application.id, "Marksheet name differs from Aadhar")
    payment, handoff = create_issue_resolution_payment(db, student, verified_application.id)
    assert payment.payment_type == "issue_resolution"
    assert handoff.amount == 50000

    record_payment_result(db, payment.payment_id, "completed")

    assert verified_application.status == "under_review"
    assert verified_application.issue_raised is False


def test_callback_validation(db):
    with pytest.raises(ValidationError, match="Invalid payment status"):
        record_payment_result(db, "PAY-1-000001", "refunded")
    with pytest.raises(NotFoundError):
        record_payment_result(db, "PAY-1-000001", "completed")


def test_list_payments_scoped_to_student(db, student, other_student, admin, verified_application):
    create_application_fee_payment(db, student, verified_application.id)

    assert len(list_payments(db, student)) == 1
    assert list_payments(db, other_student) == []
    assert len(list_payments(db, admin)) == 1
