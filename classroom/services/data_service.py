# /classroom/services/data_service.py

import logging
from typing import Any, Generator, List

from fastapi import Depends, Request

from .. import config
from ..models.assignment_model import Assignment
from ..models.attendance_model import Attendance
from ..models.communication_model import Communication
from ..models.grade_model import Grade
from ..models.student_model import Student
from .repository_helpers.entity_mappings import (
    ASSIGNMENT_MAPPING,
    ATTENDANCE_MAPPING,
    COMMUNICATION_MAPPING,
    GRADE_MAPPING,
    STUDENT_MAPPING,
)
from .repository_helpers.entity_repository import EntityRepository
from .repository_helpers.fixture_table_client import FixtureTableClient
from .repository_helpers.live_table_client import LiveTableClient
from .repository_helpers.table_client import TableClient

logger = logging.getLogger(__name__)


def build_table_client() -> TableClient:
    """
    Chooses the data source from configuration: the hosted backend when
    USE_LIVE_BACKEND is true, otherwise the local JSON fixtures.
    """
    if config.USE_LIVE_BACKEND:
        logger.info("Using live table backend at %s", config.BACKEND_BASE_URL)
        return LiveTableClient(
            base_url=config.BACKEND_BASE_URL,
            project_id=config.BACKEND_PROJECT_ID,
            public_key=config.BACKEND_PUBLIC_KEY,
            timeout_seconds=config.BACKEND_TIMEOUT_SECONDS,
        )
    logger.info("Using fixture table store from %s", config.FIXTURE_DIR)
    return FixtureTableClient(config.FIXTURE_DIR)


class DataService:
    def __init__(self, client: TableClient):
        """
        Builds one repository per table, all sharing the given boundary client.
        """
        self.client = client
        self.students = EntityRepository(STUDENT_MAPPING, client)
        self.assignments = EntityRepository(ASSIGNMENT_MAPPING, client)
        self.grades = EntityRepository(GRADE_MAPPING, client)
        self.attendance = EntityRepository(ATTENDANCE_MAPPING, client)
        self.communications = EntityRepository(COMMUNICATION_MAPPING, client)

    # --- STUDENT METHODS (DELEGATED) ---
    async def get_all_students(self) -> List[Student]: return await self.students.list_all()
    async def get_student_by_id(self, student_id: Any) -> Student: return await self.students.get_by_id(student_id)
    async def add_student(self, record) -> Student: return await self.students.create(record)
    async def update_student(self, student_id: Any, record) -> Student: return await self.students.update(student_id, record)
    async def delete_student(self, student_id: Any) -> bool: return await self.students.delete(student_id)

    # --- ASSIGNMENT METHODS (DELEGATED) ---
    async def get_all_assignments(self) -> List[Assignment]: return await self.assignments.list_all()
    async def get_assignment_by_id(self, assignment_id: Any) -> Assignment: return await self.assignments.get_by_id(assignment_id)
    async def add_assignment(self, record) -> Assignment: return await self.assignments.create(record)
    async def update_assignment(self, assignment_id: Any, record) -> Assignment: return await self.assignments.update(assignment_id, record)
    async def delete_assignment(self, assignment_id: Any) -> bool: return await self.assignments.delete(assignment_id)

    # --- GRADE METHODS (DELEGATED) ---
    async def get_all_grades(self) -> List[Grade]: return await self.grades.list_all()
    async def get_grade_by_id(self, grade_id: Any) -> Grade: return await self.grades.get_by_id(grade_id)
    async def get_grades_by_student(self, student_id: Any) -> List[Grade]: return await self.grades.get_by_student(student_id)
    async def get_grades_by_assignment(self, assignment_id: Any) -> List[Grade]: return await self.grades.get_by_assignment(assignment_id)
    async def add_grade(self, record) -> Grade: return await self.grades.create(record)
    async def update_grade(self, grade_id: Any, record) -> Grade: return await self.grades.update(grade_id, record)
    async def delete_grade(self, grade_id: Any) -> bool: return await self.grades.delete(grade_id)

    # --- ATTENDANCE METHODS (DELEGATED) ---
    async def get_all_attendance(self) -> List[Attendance]: return await self.attendance.list_all()
    async def get_attendance_by_id(self, attendance_id: Any) -> Attendance: return await self.attendance.get_by_id(attendance_id)
    async def get_attendance_by_student(self, student_id: Any) -> List[Attendance]: return await self.attendance.get_by_student(student_id)
    async def get_attendance_by_date(self, day: Any) -> List[Attendance]: return await self.attendance.get_by_date(day)
    async def add_attendance(self, record) -> Attendance: return await self.attendance.create(record)
    async def update_attendance(self, attendance_id: Any, record) -> Attendance: return await self.attendance.update(attendance_id, record)
    async def delete_attendance(self, attendance_id: Any) -> bool: return await self.attendance.delete(attendance_id)

    # --- COMMUNICATION METHODS (DELEGATED) ---
    async def get_all_communications(self) -> List[Communication]: return await self.communications.list_all()
    async def get_communication_by_id(self, communication_id: Any) -> Communication: return await self.communications.get_by_id(communication_id)
    async def get_communications_by_student(self, student_id: Any) -> List[Communication]: return await self.communications.get_by_student(student_id)
    async def add_communication(self, record) -> Communication: return await self.communications.create(record)
    async def update_communication(self, communication_id: Any, record) -> Communication: return await self.communications.update(communication_id, record)
    async def delete_communication(self, communication_id: Any) -> bool: return await self.communications.delete(communication_id)


# --- DEPENDENCY PROVIDERS ---

def get_table_client(request: Request) -> TableClient:
    """Returns the boundary client created at application startup."""
    return request.app.state.table_client


def get_data_service(client: TableClient = Depends(get_table_client)) -> Generator[DataService, None, None]:
    """
    FastAPI dependency that provides a DataService bound to the application's
    table client. The service itself is cheap and stateless.
    """
    yield DataService(client)
