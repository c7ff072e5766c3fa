# /classroom/services/dashboard_service.py

import asyncio
import logging

# --- Core Imports ---
from ..models.dashboard_model import DashboardSummary
from .analytics_helpers import aggregation
from .data_service import DataService

logger = logging.getLogger(__name__)

RECENT_STUDENT_COUNT = 6


async def get_summary_data(db: DataService) -> DashboardSummary:
    """
    Calculates the dashboard statistics from a fresh snapshot of every table.

    The four lists are fetched concurrently; all arithmetic is delegated to
    the aggregation helpers so the dashboard and the reports view always agree.
    """
    try:
        students, attendance, grades, assignments = await asyncio.gather(
            db.get_all_students(),
            db.get_all_attendance(),
            db.get_all_grades(),
            db.get_all_assignments(),
        )
    except Exception as e:
        logger.error("Error loading dashboard data: %s", e)
        raise

    attendance_rate = aggregation.overall_attendance_rate(attendance)
    return DashboardSummary(
        totalStudents=len(students),
        averageGrade=aggregation.overall_grade_average(grades, assignments),
        attendanceRate=attendance_rate,
        attendanceTrend="up" if attendance_rate >= aggregation.ATTENDANCE_THRESHOLD else "down",
        recentStudents=students[:RECENT_STUDENT_COUNT],
    )
