import csv
import io

import pytest
from django.utils import timezone

from apps.contacts.models import ContactMessage

DASHBOARD_URL = "/api/admin/dashboard/"
EXPORT_URL = "/api/admin/export/{}/"

pytestmark = pytest.mark.django_db


def test_dashboard(admin_client, make_student):
    for _ in range(6):
        make_student(section_id="Nursery", student_age=4)
    make_student(section_id="Nursery", student_age=4, status="approved", payment_plan="Annual Plan")
    ContactMessage.objects.create(name="Ali", email="ali@example.com", subject="Uniforms", message="Where to buy?")

    response = admin_client.get(DASHBOARD_URL)

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["overview"] == {
        "total_students": 7,
        "pending_registrations": 6,
        "approved_registrations": 1,
        "unread_messages": 1,
    }
    nursery = next(row for row in data["section_stats"] if row["name"] == "Nursery")
    assert nursery == {"name": "Nursery", "capacity": 30, "enrolled": 1, "available": 29}
    assert len(data["recent_registrations"]) == 5
    assert data["recent_messages"][0]["subject"] == "Uniforms"
    assert data["monthly_trends"] == [{"month": timezone.localtime().strftime("%Y-%m"), "registrations": 7}]
    assert data["payment_stats"] == [
        {"payment_plan": "Annual Plan", "count": 1},
        {"payment_plan": "Termly Plan", "count": 6},
    ]


def test_dashboard_requires_token(api_client, db):
    assert api_client.get(DASHBOARD_URL).status_code == 401


def test_export_students_json(admin_client, make_student):
    make_student(section_id="Tahfiz", student_age=10)

    response = admin_client.get(EXPORT_URL.format("students"))

    assert response.status_code == 200
    body = response.json()
    assert body["total_records"] == 1
    assert body["data"][0]["section"] == "Tahfiz"
    assert "exported_at" in body


def test_export_sections_csv(admin_client, make_student):
    make_student(section_id="Tahfiz", student_age=10, status="approved")

    response = admin_client.get(EXPORT_URL.format("sections"), {"format": "csv"})

    assert response.status_code == 200
    assert response["Content-Type"] == "text/csv"
    today = timezone.now().date().isoformat()
    assert response["Content-Disposition"] == f'attachment; filename="sections_{today}.csv"'

    rows = list(csv.DictReader(io.StringIO(response.content.decode())))
    assert len(rows) == 6
    tahfiz = next(row for row in rows if row["name"] == "Tahfiz")
    assert tahfiz["enrolled_students"] == "1"
    assert response.content.decode().startswith('"id","name","description"')


def test_export_empty_csv_is_404(admin_client, db):
    response = admin_client.get(EXPORT_URL.format("messages"), {"format": "csv"})

    assert response.status_code == 404
    assert response.json()["message"] == "No data to export"


def test_export_empty_json(admin_client, db):
    response = admin_client.get(EXPORT_URL.format("messages"))

    assert response.status_code == 200
    assert response.json()["total_records"] == 0


def test_export_unknown_type(admin_client, db):
    response = admin_client.get(EXPORT_URL.format("payments"))

    assert response.status_code == 400
    assert response.json()["message"] == "Invalid export type"
