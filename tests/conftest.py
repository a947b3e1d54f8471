"""
Shared fixtures for the API test suite
"""
import pytest
from django.core.cache import cache
from rest_framework.test import APIClient

from apps.registrations.models import Student
from apps.sections.models import Section
from apps.sections.signals import seed_sections
from apps.users.models import AdminUser
from apps.users.views import issue_access_token


@pytest.fixture(autouse=True)
def clear_cache():
    """Section list and throttle history live in the cache"""
    cache.clear()
    yield
    cache.clear()


@pytest.fixture
def api_client():
    return APIClient()


@pytest.fixture
def sections(db):
    """The seeded catalog sections by name"""
    seed_sections()
    return {section.name: section for section in Section.objects.all()}


@pytest.fixture
def admin_user(db):
    return AdminUser.objects.create_user(username="registrar", email="registrar@example.com", password="secret123")


@pytest.fixture
def auth_headers(admin_user):
    token = issue_access_token(admin_user)
    return {"HTTP_AUTHORIZATION": f"Bearer {token}"}


@pytest.fixture
def admin_client(api_client, auth_headers):
    api_client.credentials(**auth_headers)
    return api_client


@pytest.fixture
def registration_payload():
    return {
        "parentName": "Amina Yusuf",
        "phone": "+2348012345678",
        "studentName": "Fatima Yusuf",
        "studentAge": 7,
        "section": "Tahfiz",
        "paymentPlan": "Annual Plan",
    }


@pytest.fixture
def make_student(sections):
    """Insert registrations directly, bypassing the workflow and the seat counter"""
    counter = {"n": 0}

    def _make_student(**overrides):
        counter["n"] += 1
        fields = {
            "student_name": f"Student {counter['n']}",
            "student_age": 8,
            "parent_name": f"Parent {counter['n']}",
            "phone": f"+23480{counter['n']:08d}",
            "section_id": "Islamiyya",
            "payment_plan": "Termly Plan",
        }
        fields.update(overrides)
        return Student.objects.create(**fields)

    return _make_student
