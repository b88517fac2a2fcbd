import pytest

from app import crud
from app.core.config import settings
from app.services import llm_client
from app.services import payments as payment_service
from conftest import auth_header, make_pdf

API = "/api/v1"
GATEWAY_HEADERS = {"X-Gateway-Key": settings.PAYMENT_GATEWAY_SECRET}

MARKSHEET = "Name: Amit Kumar\nDate of Birth: 15/08/2000\nBoard: CBSE\nAggregate 82%"
AADHAR = "Government of India\nName: Amit Kumar\nDOB: 15/08/2000\n1234 5678 9012"


def upload(client, user, application_id, document_type, text):
    return client.post(
        f"{API}/documents/upload",
        headers=auth_header(user),
        data={"application_id": str(application_id), "document_type": document_type},
        files={"document": ("scan.pdf", make_pdf(text), "application/pdf")},
    )


def test_health(client):
    assert client.get("/health").json() == {"status": "OK"}


def test_application_lifecycle(client, student, admin, program):
    student_headers = auth_header(student)
    admin_headers = auth_header(admin)

    response = client.post(
        f"{API}/applications/",
        headers=student_headers,
        json={"program_id": program.id, "personal_info": {"dateOfBirth": "2000-08-15"}},
    )
    assert response.status_code == 201
    application = response.json()
    app_id = application["id"]
    assert application["status"] == "draft"

    response = client.post(f"{API}/applications/{app_id}/submit", headers=student_headers)
    assert response.status_code == 400
    assert response.json() == {
        "success": False,
        "message": "Missing required documents",
        "missingDocuments": ["10th Marksheet", "Aadhar Card"],
    }

    marksheet = upload(client, student, app_id, "10th Marksheet", MARKSHEET)
    assert marksheet.status_code == 200
    body = marksheet.json()
    assert body["extracted_data"]["percentage"] == 82.0
    assert body["verification"] == {
        "verified": {"name": True, "dateOfBirth": True, "percentage": True},
        "issues": [],
        "isValid": True,
    }

    aadhar = upload(client, student, app_id, "Aadhar Card", AADHAR)
    assert aadhar.json()["extracted_data"]["aadharNumber"] == "123456789012"

    response = client.post(f"{API}/applications/{app_id}/submit", headers=student_headers)
    assert response.status_code == 200
    assert response.json()["status"] == "submitted"
    assert response.json()["ai_verification_status"] == "verified"

    queue = client.get(f"{API}/admin/applications", headers=admin_headers, params={"status": "submitted"}).json()
    assert queue["pagination"]["total"] == 1
    assert queue["items"][0]["id"] == app_id

    detail = client.get(f"{API}/admin/applications/{app_id}", headers=admin_headers).json()
    document_ids = [d["id"] for d in detail["documents"]]
    assert len(document_ids) == 2

    for document_id in document_ids:
        response = client.post(
            f"{API}/admin/documents/{document_id}/verify", headers=admin_headers, json={"status": "verified"}
        )
        assert response.status_code == 200

    application = client.get(f"{API}/applications/{app_id}", headers=student_headers).json()
    assert application["status"] == "verified"
    assert application["admin_verification_status"] == "verified"

    response = client.post(f"{API}/admin/applications/{app_id}/approve", headers=admin_headers)
    assert response.json()["status"] == "verified"

    response = client.post(f"{API}/payments/application-fee", headers=student_headers, json={"application_id": app_id})
    assert response.status_code == 200
    payment = response.json()
    assert payment["payment_gateway"]["amount"] == 300000
    assert payment["payment_gateway"]["currency"] == "INR"

    response = client.post(
        f"{API}/payments/verify",
        headers=GATEWAY_HEADERS,
        json={"payment_id": payment["payment"]["payment_id"], "status": "completed", "transaction_id": "txn_9"},
    )
    assert response.json()["status"] == "completed"

    application = client.get(f"{API}/applications/{app_id}", headers=student_headers).json()
    assert application["status"] == "payment_received"

    response = client.post(f"{API}/payments/application-fee", headers=student_headers, json={"application_id": app_id})
    assert response.status_code == 400

    analytics = client.get(f"{API}/admin/analytics", headers=admin_headers).json()
    assert analytics["status_counts"] == {"payment_received": 1}
    assert analytics["revenue"]["application_fee_revenue"] == 3000
    assert analytics["revenue"]["total_transactions"] == 1


def test_flagged_upload_visible_in_queue(client, student, admin, application):
    response = upload(client, student, application.id, "10th Marksheet", "Name: Ravi Shah\nAggregate 62%")

    assert response.json()["verification"]["issues"] == [
        "Name mismatch between document and application",
        "Percentage 62% is below required 70%",
    ]
    queue = client.get(f"{API}/admin/applications", headers=auth_header(admin), params={"ai_status": "flagged"})
    assert [item["id"] for item in queue.json()["items"]] == [application.id]


def test_upload_rejects_unsupported_file(client, student, application):
    response = client.post(
        f"{API}/documents/upload",
        headers=auth_header(student),
        data={"application_id": str(application.id), "document_type": "Aadhar Card"},
        files={"document": ("notes.txt", b"hello", "text/plain")},
    )

    assert response.status_code == 400
    assert response.json()["message"] == "Only PDF, JPEG, JPG, and PNG files are allowed"


def test_raise_issue_and_resolve_with_payment(client, student, admin, application):
    response = client.post(
        f"{API}/admin/applications/{application.id}/raise-issue",
        headers=auth_header(admin),
        json={"issue_details": "Aadhar scan unreadable"},
    )
    assert response.json()["status"] == "issue_raised"

    response = client.post(
        f"{API}/payments/issue-resolution", headers=auth_header(student), json={"application_id": application.id}
    )
    payment = response.json()
    assert payment["payment_gateway"]["amount"] == 50000

    client.post(
        f"{API}/payments/verify",
        headers=GATEWAY_HEADERS,
        json={"payment_id": payment["payment"]["payment_id"], "status": "completed"},
    )
    application_json = client.get(f"{API}/applications/{application.id}", headers=auth_header(student)).json()
    assert application_json["status"] == "under_review"
    assert application_json["issue_raised"] is False


@pytest.fixture
def pending_fee(db, student, application):
    application.status = "verified"
    application.admin_verification_status = "verified"
    db.commit()
    payment, _ = payment_service.create_application_fee_payment(db, student, application.id)
    return payment


@pytest.mark.parametrize("headers, status_code", [
    ("student", 403),
    ({"X-Gateway-Key": "guessed"}, 401),
    ({}, 401),
])
def test_only_gateway_or_admin_completes_payment(client, student, application, pending_fee, headers, status_code):
    if headers == "student":
        headers = auth_header(student)

    response = client.post(
        f"{API}/payments/verify",
        headers=headers,
        json={"payment_id": pending_fee.payment_id, "status": "completed"},
    )

    assert response.status_code == status_code
    assert pending_fee.status == "pending"
    assert application.status == "verified"


def test_admin_can_record_payment(client, admin, application, pending_fee):
    response = client.post(
        f"{API}/payments/verify",
        headers=auth_header(admin),
        json={"payment_id": pending_fee.payment_id, "status": "completed", "transaction_id": "offline-17"},
    )

    assert response.status_code == 200
    assert application.status == "payment_received"


def test_raise_issue_requires_details(client, admin, application):
    response = client.post(
        f"{API}/admin/applications/{application.id}/raise-issue",
        headers=auth_header(admin),
        json={"issue_details": "   "},
    )

    assert response.status_code == 400
    assert response.json()["message"] == "Issue details are required"


@pytest.mark.parametrize("headers, status, message", [
    ({}, 401, "No token provided"),
    ({"Authorization": "Bearer not-a-jwt"}, 401, None),
])
def test_authentication_required(client, headers, status, message):
    response = client.get(f"{API}/applications/", headers=headers)

    assert response.status_code == status
    assert response.json()["success"] is False
    if message:
        assert response.json()["message"] == message


def test_role_checks(client, student, admin, application):
    response = client.get(f"{API}/admin/analytics", headers=auth_header(student))
    assert response.status_code == 403
    assert response.json() == {"success": False, "message": "Admin access required"}

    response = client.post(f"{API}/applications/", headers=auth_header(admin), json={"program_id": 1})
    assert response.status_code == 403


def test_student_cannot_read_other_application(client, other_student, application):
    response = client.get(f"{API}/applications/{application.id}", headers=auth_header(other_student))

    assert response.status_code == 403


def test_unknown_application_is_404(client, admin):
    response = client.get(f"{API}/admin/applications/999", headers=auth_header(admin))

    assert response.status_code == 404
    assert response.json()["message"] == "Application not found"


def test_required_document_catalog(client, admin, program):
    headers = auth_header(admin)

    response = client.post(
        f"{API}/admin/programs/{program.id}/documents",
        headers=headers,
        json={"document_type": "Graduation Certificate", "is_required": True},
    )
    assert response.status_code == 200

    catalog = client.get(f"{API}/admin/programs/{program.id}/documents", headers=headers).json()
    assert [(entry["document_type"], entry["is_required"]) for entry in catalog] == [
        ("10th Marksheet", True),
        ("Aadhar Card", True),
        ("Graduation Certificate", True),
    ]

    programs = client.get(f"{API}/admin/programs", headers=headers).json()
    assert [p["code"] for p in programs] == ["MTECH_CS"]


def test_admin_students(client, admin, student, application):
    students = client.get(f"{API}/admin/students", headers=auth_header(admin)).json()

    assert students == [
        {"id": student.id, "email": "amit@example.com", "first_name": "Amit", "last_name": "Kumar",
         "role": "student", "total_applications": 1},
    ]


def test_support_tickets(client, student, other_student, admin):
    response = client.post(
        f"{API}/support/tickets",
        headers=auth_header(student),
        json={"subject": "Payment stuck", "description": "Charged twice for the fee"},
    )
    assert response.status_code == 201
    ticket = response.json()
    assert ticket["ticket_id"].startswith("TKT-")
    assert (ticket["status"], ticket["priority"], ticket["category"]) == ("open", "medium", "general")

    assert len(client.get(f"{API}/support/tickets", headers=auth_header(other_student)).json()) == 0
    assert len(client.get(f"{API}/support/tickets", headers=auth_header(admin)).json()) == 1

    response = client.put(
        f"{API}/support/tickets/{ticket['id']}", headers=auth_header(student), json={"status": "closed"}
    )
    assert response.status_code == 403

    response = client.put(
        f"{API}/support/tickets/{ticket['id']}",
        headers=auth_header(admin),
        json={"status": "resolved", "admin_response": "Refund issued"},
    )
    assert response.json()["status"] == "resolved"
    assert response.json()["admin_response"] == "Refund issued"

    response = client.put(f"{API}/support/tickets/{ticket['id']}", headers=auth_header(admin), json={"status": "lost"})
    assert response.status_code == 400


def test_llm_settings(client, student, admin, monkeypatch):
    monkeypatch.setattr(llm_client, "_current_provider", "openai")

    info = client.get(f"{API}/settings/llm", headers=auth_header(student)).json()
    assert info["provider"] == "openai"
    assert info["extraction_enabled"] is False

    response = client.post(f"{API}/settings/llm", headers=auth_header(student), json={"provider": "groq"})
    assert response.status_code == 403

    response = client.post(f"{API}/settings/llm", headers=auth_header(admin), json={"provider": "groq"})
    assert response.json()["model"] == "llama-3.3-70b-versatile"

    response = client.post(f"{API}/settings/llm", headers=auth_header(admin), json={"provider": "claude"})
    assert response.status_code == 400


def test_universities_with_program_counts(client, db, admin, student, program):
    crud.university.create(db, obj_in={"name": "BITS Pilani", "code": "BITSP", "location": "Pilani"})
    db.commit()

    response = client.get(f"{API}/admin/universities", headers=auth_header(admin))

    assert response.status_code == 200
    assert [(u["code"], u["programs_count"]) for u in response.json()] == [("BITSP", 0), ("IITD", 1)]
    assert client.get(f"{API}/admin/universities", headers=auth_header(student)).status_code == 403
