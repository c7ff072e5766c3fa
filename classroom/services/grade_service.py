# /classroom/services/grade_service.py

import asyncio
import logging
from datetime import datetime, timezone
from typing import Any

from ..models.grade_model import Grade, GradeBook, GradeBookRow, GradeCreate
from .analytics_helpers import aggregation
from .data_service import DataService

logger = logging.getLogger(__name__)


async def save_grade(db: DataService, entry: GradeCreate) -> Grade:
    """
    Records a student's score on an assignment. If the student already has a
    grade for that assignment it is replaced rather than duplicated.
    """
    record = entry.model_dump()
    if not record.get("submittedDate"):
        record["submittedDate"] = datetime.now(timezone.utc).isoformat()

    student_grades = await db.get_grades_by_student(entry.studentId)
    existing = next((g for g in student_grades if g.assignmentId == entry.assignmentId), None)
    if existing is not None:
        logger.debug("Replacing grade %s for student %s", existing.id, entry.studentId)
        return await db.update_grade(existing.id, record)
    return await db.add_grade(record)


async def get_grade_book(db: DataService, assignment_id: Any) -> GradeBook:
    """Every student on the roster with their grade (if any) for one assignment."""
    assignment = await db.get_assignment_by_id(assignment_id)
    students, grades = await asyncio.gather(
        db.get_all_students(),
        db.get_grades_by_assignment(assignment.id),
    )
    grades_by_student = {g.studentId: g for g in grades}

    rows = []
    for student in students:
        grade = grades_by_student.get(student.id)
        percentage = aggregation.grade_percentage(grade.score, assignment.totalPoints) if grade else 0
        rows.append(GradeBookRow(
            student=student,
            grade=grade,
            percentage=percentage,
            band=aggregation.performance_band(percentage).value if grade else None,
        ))

    return GradeBook(
        assignmentId=assignment.id,
        title=assignment.title,
        totalPoints=assignment.totalPoints,
        classAverage=aggregation.class_average(assignment.id, grades, [assignment]),
        rows=rows,
    )
