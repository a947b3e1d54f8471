from decimal import Decimal

import pytest
from django.core.management import call_command

from apps.sections.catalog import DEFAULT_SECTIONS
from apps.sections.models import Section
from apps.sections.signals import seed_sections

SECTIONS_URL = "/api/sections/"

pytestmark = pytest.mark.django_db


def test_catalog_is_seeded(sections):
    assert set(sections) == {entry["name"] for entry in DEFAULT_SECTIONS}
    tahfiz = sections["Tahfiz"]
    assert (tahfiz.capacity, tahfiz.current_enrollment) == (25, 0)
    assert (tahfiz.fee_termly, tahfiz.fee_annual) == (Decimal("18000"), Decimal("48000"))
    assert (tahfiz.age_min, tahfiz.age_max) == (8, 18)


def test_seeding_is_idempotent(sections):
    Section.objects.filter(name="Nursery").update(capacity=45, current_enrollment=3)

    assert seed_sections() == 0

    assert Section.objects.count() == len(DEFAULT_SECTIONS)
    nursery = Section.objects.get(name="Nursery")
    assert (nursery.capacity, nursery.current_enrollment) == (45, 3)


def test_seeding_restores_missing_section(sections):
    Section.objects.filter(name="Mosque/Majlis").delete()

    assert seed_sections() == 1
    assert Section.objects.get(name="Mosque/Majlis").capacity == 100


def test_list_sections(api_client, make_student):
    make_student(section_id="Nursery", status="approved")
    make_student(section_id="Nursery")
    Section.objects.filter(name="Nursery").update(current_enrollment=2)
    Section.objects.filter(name="Higher Islamic").update(is_active=False)

    response = api_client.get(SECTIONS_URL)

    assert response.status_code == 200
    data = {row["name"]: row for row in response.json()["data"]}
    assert "Higher Islamic" not in data
    assert data["Nursery"]["enrolled_students"] == 1
    assert data["Nursery"]["available_spots"] == 28
    assert data["Nursery"]["fee_termly"] == 12000


def test_section_list_cache_is_refreshed(api_client, make_student, django_capture_on_commit_callbacks):
    api_client.get(SECTIONS_URL)

    with django_capture_on_commit_callbacks(execute=True):
        make_student(section_id="Tahfiz", status="approved")

    data = {row["name"]: row for row in api_client.get(SECTIONS_URL).json()["data"]}
    assert data["Tahfiz"]["enrolled_students"] == 1


def test_section_detail_by_name_and_id(api_client, make_student, sections):
    make_student(section_id="Mosque/Majlis", status="approved", student_age=30)
    make_student(section_id="Mosque/Majlis", student_age=40)

    by_name = api_client.get(f"{SECTIONS_URL}Mosque/Majlis/")
    by_id = api_client.get(f"{SECTIONS_URL}{sections['Mosque/Majlis'].pk}/")

    assert by_name.status_code == 200
    assert by_name.json() == by_id.json()
    data = by_name.json()["data"]
    assert (data["enrolled_students"], data["approved_students"], data["pending_students"]) == (2, 1, 1)
    assert data["available_spots"] == 99


def test_inactive_section_detail_is_404(api_client, sections):
    Section.objects.filter(name="Tahfiz").update(is_active=False)

    response = api_client.get(f"{SECTIONS_URL}Tahfiz/")

    assert response.status_code == 404
    assert response.json()["message"] == "Section not found"


@pytest.mark.parametrize("identifier", ["%C2%B2", "999999", "Madrasa"])
def test_unknown_section_detail_is_404(api_client, sections, identifier):
    """Superscript digits and unknown ids or names are plain misses"""
    response = api_client.get(f"{SECTIONS_URL}{identifier}/")

    assert response.status_code == 404
    assert response.json()["message"] == "Section not found"


def test_section_students(admin_client, make_student):
    make_student(section_id="Islamiyya", status="approved")
    make_student(section_id="Islamiyya")
    make_student(section_id="Nursery", student_age=4)

    response = admin_client.get(f"{SECTIONS_URL}Islamiyya/students/", {"status": "approved"})

    assert response.status_code == 200
    body = response.json()
    assert body["data"]["section"]["name"] == "Islamiyya"
    assert len(body["data"]["students"]) == 1
    assert body["pagination"]["total"] == 1


def test_section_students_requires_token(api_client, sections):
    assert api_client.get(f"{SECTIONS_URL}Islamiyya/students/").status_code == 401


def test_section_students_unknown_section(admin_client, sections):
    assert admin_client.get(f"{SECTIONS_URL}Kindergarten/students/").status_code == 404


def test_section_stats(admin_client, make_student):
    make_student(section_id="Tahfiz", status="approved", student_age=9, payment_plan="Annual Plan")
    make_student(section_id="Tahfiz", status="approved", student_age=12)
    make_student(section_id="Tahfiz", status="rejected", student_age=15)
    make_student(section_id="Tahfiz", student_age=10)

    response = admin_client.get(f"{SECTIONS_URL}Tahfiz/stats/")

    assert response.status_code == 200
    data = response.json()["data"]
    stats = data["statistics"]
    assert stats["total_registrations"] == 4
    assert stats["approved_registrations"] == 2
    assert stats["pending_registrations"] == 1
    assert stats["rejected_registrations"] == 1
    assert (stats["annual_payments"], stats["termly_payments"]) == (1, 3)
    assert stats["average_age"] == 11.5
    assert (stats["youngest_student"], stats["oldest_student"]) == (9, 15)
    assert stats["capacity_utilization"] == "8.0"
    assert stats["available_spots"] == 23
    assert sum(month["registrations"] for month in data["monthly_trends"]) == 4


def test_recount_enrollment_command(make_student, capsys):
    make_student(section_id="Nursery", student_age=4)
    make_student(section_id="Nursery", student_age=4, status="approved")
    make_student(section_id="Nursery", student_age=4, status="rejected")
    Section.objects.filter(name="Nursery").update(current_enrollment=7)

    call_command("recount_enrollment")

    assert Section.objects.get(name="Nursery").current_enrollment == 2
    output = capsys.readouterr().out
    assert "Nursery: 7 -> 2" in output


def test_recount_without_drift_changes_nothing(sections):
    assert Section.objects.recount() == []
