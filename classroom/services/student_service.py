# /classroom/services/student_service.py

from typing import List, Optional

from ..models.student_model import Student
from .data_service import DataService


async def search_students(
    db: DataService,
    search: Optional[str] = None,
    grade: Optional[str] = None,
    status: Optional[str] = None,
) -> List[Student]:
    """
    Retrieves the roster and narrows it the way the students view does:
    free-text search over full name, email and id, then exact grade-level and
    status filters.
    """
    students = await db.get_all_students()

    filtered = students
    if search:
        term = search.lower()
        filtered = [
            s for s in filtered
            if term in s.full_name.lower()
            or term in s.email.lower()
            or term in str(s.id or "")
        ]
    if grade:
        filtered = [s for s in filtered if s.grade == grade]
    if status:
        filtered = [s for s in filtered if s.status.value == status]
    return filtered
