# /classroom/services/attendance_service.py

"""
Business logic for taking attendance.

A student has at most one attendance record per calendar day. The
repository does not enforce that, so every write here looks up the day's
records first and updates the existing record instead of creating a second.
"""

import asyncio
import logging
from datetime import date
from typing import Dict, List, Optional

from ..models.attendance_model import Attendance, AttendanceBreakdown, AttendanceStatus
from .analytics_helpers import aggregation
from .data_service import DataService
from .exceptions import InvalidArgumentError

logger = logging.getLogger(__name__)

DEFAULT_REASONS = {
    AttendanceStatus.EXCUSED: "Excused absence",
    AttendanceStatus.LATE: "Late arrival",
}


def _build_record(student_id: int, day: date, status: AttendanceStatus) -> Dict:
    return {
        "studentId": student_id,
        "date": day.isoformat(),
        "status": status.value,
        "reason": DEFAULT_REASONS.get(status, ""),
    }


async def _upsert(db: DataService, student_id: int, day: date, status: AttendanceStatus, existing: Optional[Attendance]) -> Attendance:
    record = _build_record(student_id, day, status)
    if existing is not None:
        return await db.update_attendance(existing.id, record)
    return await db.add_attendance(record)


async def mark_attendance(db: DataService, student_id: int, day: date, status: AttendanceStatus) -> Attendance:
    """Records one student's status for a day, replacing any earlier mark."""
    if status == AttendanceStatus.UNMARKED:
        raise InvalidArgumentError("'unmarked' cannot be recorded; delete the record instead.")

    day_records = await db.get_attendance_by_date(day)
    existing = next((r for r in day_records if r.studentId == student_id), None)
    return await _upsert(db, student_id, day, status, existing)


async def mark_all_present(db: DataService, day: date) -> List[Attendance]:
    """
    Marks every student on the roster present for `day`.

    The per-student writes are independent and issued concurrently. There is
    no atomicity across the set: if one write fails the others may already
    have been applied, and the failure propagates to the caller.
    """
    students, day_records = await asyncio.gather(
        db.get_all_students(),
        db.get_attendance_by_date(day),
    )
    existing_by_student = {r.studentId: r for r in day_records}

    writes = [
        _upsert(db, s.id, day, AttendanceStatus.PRESENT, existing_by_student.get(s.id))
        for s in students
        if s.id is not None
    ]
    results = await asyncio.gather(*writes)
    logger.info("Marked %d students present for %s", len(results), day.isoformat())
    return list(results)


async def get_daily_breakdown(db: DataService, day: date) -> AttendanceBreakdown:
    day_records = await db.get_attendance_by_date(day)
    return aggregation.attendance_breakdown(day_records, day)


async def get_student_attendance_rate(db: DataService, student_id: int) -> int:
    records = await db.get_attendance_by_student(student_id)
    return aggregation.attendance_rate(records)
