# /tests/conftest.py

import pytest
from fastapi.testclient import TestClient

from classroom.main import app
from classroom.services.data_service import DataService, get_table_client
from classroom.services.repository_helpers.fixture_table_client import FixtureTableClient


# --- Seed Rows (backend shape) ---

def _student(record_id, first, last, grade, status="active"):
    return {
        "Id": record_id,
        "Name": f"{first} {last}",
        "first_name_c": first,
        "last_name_c": last,
        "grade_c": grade,
        "email_c": f"{first.lower()}.{last.lower()}@school.edu",
        "status_c": status,
    }


@pytest.fixture
def seed_tables():
    """A small, self-contained class: three students, two assignments."""
    return {
        "student_c": [
            _student(1, "Emma", "Johnson", "5th Grade"),
            _student(2, "Liam", "Smith", "5th Grade"),
            _student(3, "Olivia", "Brown", "4th Grade", status="inactive"),
        ],
        "assignment_c": [
            {"Id": 1, "Name": "Essay", "title_c": "Essay", "category_c": "Project", "total_points_c": 100},
            {"Id": 2, "Name": "Quiz", "title_c": "Quiz", "category_c": "Quiz", "total_points_c": "50"},
        ],
        "grade_c": [
            {"Id": 1, "student_id_c": {"Id": 1, "Name": "Emma Johnson"}, "assignment_id_c": 1, "score_c": 90},
            {"Id": 2, "student_id_c": 1, "assignment_id_c": {"Id": 2, "Name": "Quiz"}, "score_c": 40},
            {"Id": 3, "student_id_c": 2, "assignment_id_c": 1, "score_c": 70},
        ],
        "attendance_c": [
            {"Id": 1, "student_id_c": 1, "date_c": "2024-01-15", "status_c": "present"},
            {"Id": 2, "student_id_c": {"Id": 2}, "date_c": "2024-01-15T08:30:00Z", "status_c": "absent"},
            {"Id": 3, "student_id_c": 1, "date_c": "2024-01-16", "status_c": "late", "reason_c": "Late arrival"},
        ],
        "communication_c": [
            {"Id": 1, "student_id_c": 1, "date_c": "2024-01-10", "type_c": "email", "subject_c": "Welcome", "follow_up_required_c": False, "created_at_c": "2024-01-10T09:00:00Z"},
            {"Id": 2, "student_id_c": 1, "date_c": "2024-01-20", "type_c": "phone", "subject_c": "Check-in", "follow_up_required_c": "true", "created_at_c": "2024-01-20T09:00:00Z"},
            {"Id": 3, "student_id_c": 2, "date_c": "2024-01-12", "type_c": "note", "subject_c": "Homework", "created_at_c": "2024-01-12T09:00:00Z"},
        ],
    }


@pytest.fixture
def fixture_client(seed_tables):
    """
    Creates a NEW in-memory table store for EACH test function, so writes in
    one test never leak into another.
    """
    return FixtureTableClient(tables=seed_tables)


@pytest.fixture
def data_service(fixture_client):
    return DataService(fixture_client)


@pytest.fixture
def api_client(fixture_client):
    """A TestClient whose routers all read and write the per-test fixture store."""
    app.dependency_overrides[get_table_client] = lambda: fixture_client
    with TestClient(app) as client:
        yield client
    app.dependency_overrides.clear()
