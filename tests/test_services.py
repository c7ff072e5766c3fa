# /tests/test_services.py

from datetime import date

import pytest
from unittest.mock import AsyncMock

from classroom.models.attendance_model import AttendanceStatus
from classroom.models.grade_model import GradeCreate
from classroom.services import (
    attendance_service,
    dashboard_service,
    grade_service,
    report_service,
    student_service,
)
from classroom.services.exceptions import BoundaryUnavailableError, InvalidArgumentError, NotFoundError

# --- Attendance Marking ---

@pytest.mark.asyncio
async def test_mark_attendance_updates_existing_record(data_service):
    record = await attendance_service.mark_attendance(data_service, 2, date(2024, 1, 15), AttendanceStatus.EXCUSED)

    assert record.id == 2
    assert record.status == AttendanceStatus.EXCUSED
    assert record.reason == "Excused absence"
    day_records = await data_service.get_attendance_by_date("2024-01-15")
    assert len([r for r in day_records if r.studentId == 2]) == 1

@pytest.mark.asyncio
async def test_mark_attendance_creates_when_missing(data_service):
    record = await attendance_service.mark_attendance(data_service, 3, date(2024, 1, 15), AttendanceStatus.LATE)

    assert record.id == 4
    assert record.date == "2024-01-15"
    assert record.reason == "Late arrival"

@pytest.mark.asyncio
async def test_mark_attendance_rejects_unmarked(data_service):
    with pytest.raises(InvalidArgumentError):
        await attendance_service.mark_attendance(data_service, 1, date(2024, 1, 15), AttendanceStatus.UNMARKED)

@pytest.mark.asyncio
async def test_mark_all_present_upserts_every_student(data_service):
    results = await attendance_service.mark_all_present(data_service, date(2024, 1, 15))

    assert sorted(r.studentId for r in results) == [1, 2, 3]
    assert all(r.status == AttendanceStatus.PRESENT for r in results)
    day_records = await data_service.get_attendance_by_date(date(2024, 1, 15))
    assert len(day_records) == 3
    breakdown = await attendance_service.get_daily_breakdown(data_service, date(2024, 1, 15))
    assert breakdown.present == 3
    assert breakdown.absent == 0

@pytest.mark.asyncio
async def test_student_attendance_rate(data_service):
    # Student 1: present on the 15th, late on the 16th.
    assert await attendance_service.get_student_attendance_rate(data_service, 1) == 50
    # Student 3 has nothing recorded.
    assert await attendance_service.get_student_attendance_rate(data_service, 3) == 100

# --- Grade Entry ---

@pytest.mark.asyncio
async def test_save_grade_replaces_existing_grade(data_service):
    saved = await grade_service.save_grade(data_service, GradeCreate(studentId=2, assignmentId=1, score=85, comments="Rewrite"))

    assert saved.id == 3
    assert saved.score == 85
    assert saved.submittedDate
    grades = await data_service.get_grades_by_student(2)
    assert len(grades) == 1

@pytest.mark.asyncio
async def test_save_grade_creates_new_grade(data_service):
    saved = await grade_service.save_grade(data_service, GradeCreate(studentId=3, assignmentId=2, score=45, submittedDate="2024-01-20"))

    assert saved.id == 4
    assert saved.submittedDate == "2024-01-20"

@pytest.mark.asyncio
async def test_grade_book_lists_every_student(data_service):
    book = await grade_service.get_grade_book(data_service, "1")

    assert book.title == "Essay"
    assert book.classAverage == 80
    rows = {row.student.id: row for row in book.rows}
    assert rows[1].percentage == 90 and rows[1].band == "excellent"
    assert rows[2].percentage == 70 and rows[2].band == "fair"
    assert rows[3].grade is None and rows[3].band is None

@pytest.mark.asyncio
async def test_grade_book_for_unknown_assignment(data_service):
    with pytest.raises(NotFoundError):
        await grade_service.get_grade_book(data_service, 42)

# --- Dashboard and Reports ---

@pytest.mark.asyncio
async def test_dashboard_summary(data_service):
    summary = await dashboard_service.get_summary_data(data_service)

    assert summary.totalStudents == 3
    # (90 + 40 + 70) / (100 + 50 + 100)
    assert summary.averageGrade == 80
    # one present out of three records
    assert summary.attendanceRate == 33
    assert summary.attendanceTrend == "down"
    assert [s.id for s in summary.recentStudents] == [1, 2, 3]

@pytest.mark.asyncio
async def test_dashboard_propagates_boundary_failures(data_service, mocker):
    mocker.patch.object(data_service, "get_all_grades", AsyncMock(side_effect=BoundaryUnavailableError("down")))
    with pytest.raises(BoundaryUnavailableError):
        await dashboard_service.get_summary_data(data_service)

@pytest.mark.asyncio
async def test_class_report(data_service):
    report = await report_service.get_class_report(data_service, top_count=2)

    assert report.totalStudents == 3
    assert report.gradeDistribution == {"5th Grade": 2, "4th Grade": 1}
    assert report.overallGradeAverage == 80
    # 3 grades over 3 students x 2 assignments
    assert report.completionRate == 50
    assert [(p.student.id, p.average) for p in report.topPerformers] == [(1, 87), (2, 70)]
    assert [(i.student.id, i.rate) for i in report.attendanceIssues] == [(2, 0), (1, 50)]
    essay = next(a for a in report.assignments if a.assignmentId == 1)
    assert essay.average == 80
    assert essay.completionRate == 67

# --- Student Search ---

@pytest.mark.asyncio
async def test_search_students_by_name_email_or_id(data_service):
    by_name = await student_service.search_students(data_service, search="emma j")
    by_email = await student_service.search_students(data_service, search="SMITH@")
    by_id = await student_service.search_students(data_service, search="3")
    assert [s.id for s in by_name] == [1]
    assert [s.id for s in by_email] == [2]
    assert [s.id for s in by_id] == [3]

@pytest.mark.asyncio
async def test_search_students_filters(data_service):
    fifth = await student_service.search_students(data_service, grade="5th Grade")
    inactive = await student_service.search_students(data_service, status="inactive")
    assert [s.id for s in fifth] == [1, 2]
    assert [s.id for s in inactive] == [3]
