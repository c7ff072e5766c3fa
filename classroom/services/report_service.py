# /classroom/services/report_service.py

"""
Assembles the class report: roster distribution, overall rates, the top
performers, students with attendance concerns, and per-assignment
statistics. All numbers come from one concurrent snapshot of the tables.
"""

import asyncio
import logging

from ..models.report_model import AssignmentStatistics, ClassReport
from .analytics_helpers import aggregation
from .data_service import DataService

logger = logging.getLogger(__name__)


async def get_class_report(db: DataService, top_count: int = aggregation.TOP_PERFORMER_COUNT) -> ClassReport:
    try:
        students, attendance, grades, assignments = await asyncio.gather(
            db.get_all_students(),
            db.get_all_attendance(),
            db.get_all_grades(),
            db.get_all_assignments(),
        )
    except Exception as e:
        logger.error("Error loading report data: %s", e)
        raise

    assignment_stats = [
        AssignmentStatistics(
            assignmentId=a.id,
            title=a.title,
            category=a.category,
            average=aggregation.class_average(a.id, grades, assignments),
            completionRate=aggregation.assignment_completion_rate(a.id, grades, students),
        )
        for a in assignments
        if a.id is not None
    ]

    return ClassReport(
        totalStudents=len(students),
        gradeDistribution=aggregation.grade_level_distribution(students),
        overallAttendanceRate=aggregation.overall_attendance_rate(attendance),
        overallGradeAverage=aggregation.overall_grade_average(grades, assignments),
        completionRate=aggregation.overall_completion_rate(students, assignments, grades),
        topPerformers=aggregation.top_performers(students, grades, assignments, limit=top_count),
        attendanceIssues=aggregation.attendance_issues(students, attendance),
        assignments=assignment_stats,
    )
