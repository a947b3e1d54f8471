import re
import threading
from smtplib import SMTPException
from unittest import mock

import pytest
from django.core import mail
from django.db import DatabaseError, connection

from apps.registrations.exceptions import CapacityExceeded, InvalidSection, RegistrationConflict, RegistrationFailed
from apps.registrations.models import Student
from apps.registrations.services import RegistrationService
from apps.sections.models import Section

REGISTER_URL = "/api/registration/"

pytestmark = pytest.mark.django_db


def enrollment(name):
    return Section.objects.get(name=name).current_enrollment


def service_payload(**overrides):
    data = {
        "parent_name": "Amina Yusuf",
        "phone": "+2348012345678",
        "email": None,
        "student_name": "Fatima Yusuf",
        "student_age": 7,
        "section": "Tahfiz",
        "payment_plan": "Annual Plan",
        "comments": None,
    }
    data.update(overrides)
    return data


def test_register_student(api_client, sections, registration_payload):
    """A valid submission creates one pending row and takes exactly one seat"""
    response = api_client.post(REGISTER_URL, registration_payload, format="json")

    assert response.status_code == 201
    body = response.json()
    student = Student.objects.get()
    assert body["success"] is True
    assert body["message"] == "Registration successful"
    assert body["data"] == {
        "registrationId": f"MBU{student.pk:06d}",
        "studentId": student.pk,
        "section": "Tahfiz",
        "paymentPlan": "Annual Plan",
    }
    assert re.fullmatch(r"MBU\d{6}", body["data"]["registrationId"])
    assert student.status == "pending"
    assert student.payment_status == "unpaid"
    assert enrollment("Tahfiz") == 1


def test_duplicate_registration_conflicts(api_client, sections, registration_payload):
    api_client.post(REGISTER_URL, registration_payload, format="json")

    response = api_client.post(REGISTER_URL, registration_payload, format="json")

    assert response.status_code == 409
    assert response.json() == {
        "success": False,
        "message": "A student with this information is already registered",
    }
    assert Student.objects.count() == 1
    assert enrollment("Tahfiz") == 1


def test_full_section_rejects_without_writing(api_client, sections, registration_payload):
    Section.objects.filter(name="Tahfiz").update(current_enrollment=25)

    response = api_client.post(REGISTER_URL, registration_payload, format="json")

    assert response.status_code == 400
    assert response.json()["message"] == "Selected section is at full capacity"
    assert not Student.objects.exists()
    assert enrollment("Tahfiz") == 25


def test_last_seats_are_handed_out_once(sections):
    """With K seats left only the first K of N submissions succeed"""
    Section.objects.filter(name="Tahfiz").update(current_enrollment=23)
    service = RegistrationService(notify=mock.Mock())

    outcomes = []
    for n in range(4):
        try:
            service.submit(service_payload(student_name=f"Child {n}"))
            outcomes.append("ok")
        except CapacityExceeded:
            outcomes.append("full")

    assert outcomes == ["ok", "ok", "full", "full"]
    assert enrollment("Tahfiz") == 25
    assert Student.objects.filter(section_id="Tahfiz").count() == 2


def test_reserve_seat_never_passes_capacity(sections):
    """A caller holding a stale read still cannot take a seat that is gone"""
    stale = Section.objects.get(name="Tahfiz")
    Section.objects.filter(pk=stale.pk).update(current_enrollment=stale.capacity)

    assert stale.is_full is False
    assert Section.objects.reserve_seat("Tahfiz") is False
    assert enrollment("Tahfiz") == stale.capacity


def test_inactive_section_is_not_available(api_client, sections, registration_payload):
    Section.objects.filter(name="Tahfiz").update(is_active=False)

    response = api_client.post(REGISTER_URL, registration_payload, format="json")

    assert response.status_code == 400
    assert response.json()["message"] == "Selected section is not available"
    assert not Student.objects.exists()


def test_validation_reports_every_field(api_client, sections):
    response = api_client.post(REGISTER_URL, {}, format="json")

    assert response.status_code == 400
    body = response.json()
    assert body["message"] == "Validation failed"
    fields = {error["field"] for error in body["errors"]}
    assert fields == {"parentName", "phone", "studentName", "studentAge", "section", "paymentPlan"}


def test_validation_messages(api_client, sections, registration_payload):
    payload = {
        **registration_payload,
        "phone": "call me",
        "email": "not-an-email",
        "studentAge": 2,
        "section": "Madrasa",
        "paymentPlan": "Weekly Plan",
        "comments": "x" * 501,
    }

    response = api_client.post(REGISTER_URL, payload, format="json")

    assert response.status_code == 400
    errors = {error["field"]: error["message"] for error in response.json()["errors"]}
    assert errors == {
        "phone": "Please provide a valid phone number",
        "email": "Please provide a valid email address",
        "studentAge": "Student age must be between 3-30 years",
        "section": "Please select a valid section",
        "paymentPlan": "Please select a valid payment plan",
        "comments": "Comments must not exceed 500 characters",
    }
    assert enrollment("Tahfiz") == 0


def test_short_section_name_is_accepted(api_client, sections, registration_payload):
    response = api_client.post(REGISTER_URL, {**registration_payload, "section": "Primary"}, format="json")

    assert response.status_code == 201
    assert response.json()["data"]["section"] == "Primary School"
    assert enrollment("Primary School") == 1


def test_confirmation_email_sent_after_commit(
    api_client, sections, registration_payload, django_capture_on_commit_callbacks
):
    payload = {**registration_payload, "email": "amina@example.com"}

    with django_capture_on_commit_callbacks(execute=True):
        response = api_client.post(REGISTER_URL, payload, format="json")

    assert response.status_code == 201
    assert len(mail.outbox) == 1
    message = mail.outbox[0]
    assert message.to == ["amina@example.com"]
    assert message.subject.startswith("Registration Confirmation")
    assert response.json()["data"]["registrationId"] in message.body
    assert "Fatima Yusuf" in message.alternatives[0][0]


def test_no_email_means_no_notification(sections, django_capture_on_commit_callbacks):
    notify = mock.Mock()

    with django_capture_on_commit_callbacks(execute=True):
        RegistrationService(notify=notify).submit(service_payload())

    notify.assert_not_called()


def test_email_failure_does_not_fail_registration(
    api_client, sections, registration_payload, django_capture_on_commit_callbacks
):
    payload = {**registration_payload, "email": "amina@example.com"}

    with mock.patch("apps.registrations.tasks.EmailNotifier.send", side_effect=SMTPException("relay down")):
        with django_capture_on_commit_callbacks(execute=True):
            response = api_client.post(REGISTER_URL, payload, format="json")

    assert response.status_code == 201
    assert Student.objects.count() == 1
    assert enrollment("Tahfiz") == 1


def test_queue_failure_does_not_fail_registration(
    api_client, sections, registration_payload, django_capture_on_commit_callbacks
):
    payload = {**registration_payload, "email": "amina@example.com"}

    with mock.patch(
        "apps.registrations.services.send_registration_confirmation.delay", side_effect=ConnectionError("no broker")
    ):
        with django_capture_on_commit_callbacks(execute=True):
            response = api_client.post(REGISTER_URL, payload, format="json")

    assert response.status_code == 201
    assert enrollment("Tahfiz") == 1


def test_injected_notifier_failure_is_swallowed(sections, django_capture_on_commit_callbacks):
    notify = mock.Mock(side_effect=RuntimeError("mail server unreachable"))

    with django_capture_on_commit_callbacks(execute=True):
        result = RegistrationService(notify=notify).submit(service_payload(email="amina@example.com"))

    notify.assert_called_once()
    assert notify.call_args.args[0].pk == result.student_id
    assert result.registration_id == f"MBU{result.student_id:06d}"


def test_service_outcomes(sections):
    service = RegistrationService(notify=mock.Mock())
    service.submit(service_payload())

    with pytest.raises(RegistrationConflict):
        service.submit(service_payload())
    with pytest.raises(InvalidSection):
        service.submit(service_payload(student_name="Other", section="Closed Section"))


def test_constraint_catches_duplicate_race(sections):
    """Two submissions that both pass the duplicate check: the unique constraint rejects the second"""
    service = RegistrationService(notify=mock.Mock())
    service.submit(service_payload())

    with mock.patch("django.db.models.query.QuerySet.exists", return_value=False):
        with pytest.raises(RegistrationConflict):
            service.submit(service_payload())

    assert Student.objects.count() == 1
    assert enrollment("Tahfiz") == 1


def test_storage_failure_rolls_back_seat(api_client, sections, registration_payload):
    with mock.patch.object(Student.objects, "create", side_effect=DatabaseError("disk I/O error")):
        response = api_client.post(REGISTER_URL, registration_payload, format="json")

    assert response.status_code == 500
    assert response.json() == {"success": False, "message": "Registration failed. Please try again."}
    assert enrollment("Tahfiz") == 0


def test_duplicate_check_storage_failure_is_registration_failed(sections):
    with mock.patch("django.db.models.query.QuerySet.exists", side_effect=DatabaseError("database is locked")):
        with pytest.raises(RegistrationFailed):
            RegistrationService(notify=mock.Mock()).submit(service_payload())

    assert not Student.objects.exists()
    assert enrollment("Tahfiz") == 0


def test_duplicate_check_storage_failure_response(api_client, sections, registration_payload):
    with mock.patch("django.db.models.query.QuerySet.exists", side_effect=DatabaseError("database is locked")):
        response = api_client.post(REGISTER_URL, registration_payload, format="json")

    assert response.status_code == 500
    assert response.json() == {"success": False, "message": "Registration failed. Please try again."}


@pytest.mark.django_db(transaction=True)
def test_concurrent_submissions_respect_capacity(sections):
    """N parallel submissions for K remaining seats: exactly K succeed, the rest are refused as full"""
    Section.objects.filter(name="Tahfiz").update(current_enrollment=22)
    service = RegistrationService(notify=mock.Mock())
    outcomes = []
    lock = threading.Lock()
    barrier = threading.Barrier(8)

    def submit(n):
        barrier.wait()
        try:
            service.submit(service_payload(student_name=f"Child {n}"))
            outcome = "ok"
        except CapacityExceeded:
            outcome = "full"
        except Exception as exc:
            outcome = repr(exc)
        finally:
            connection.close()
        with lock:
            outcomes.append(outcome)

    threads = [threading.Thread(target=submit, args=(n,)) for n in range(8)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert outcomes.count("ok") == 3
    assert outcomes.count("full") == 5
    assert enrollment("Tahfiz") == 25
    assert Student.objects.filter(section_id="Tahfiz").count() == 3
