# /classroom/services/analytics_helpers/aggregation.py

"""
Derived metrics for the dashboard, report and grade book views.

Every function here is pure: it works on records that have already been
fetched and never performs I/O. None of them raise on missing references;
each documents the fallback it applies instead. Percentages are rounded half
up to whole numbers and are not clamped, so a score above the assignment's
total points produces a percentage above 100.
"""

from datetime import date
from enum import Enum
from typing import Dict, Iterable, List, Optional, Sequence

import pandas as pd

from ..coercion import parse_day, round_half_up
from ...models.assignment_model import Assignment
from ...models.attendance_model import Attendance, AttendanceBreakdown, AttendanceStatus
from ...models.grade_model import Grade
from ...models.report_model import StudentAttendance, StudentAverage
from ...models.student_model import Student

ATTENDANCE_THRESHOLD = 90
DEFAULT_TOTAL_POINTS = 100
TOP_PERFORMER_COUNT = 5


class PerformanceBand(str, Enum):
    EXCELLENT = "excellent"
    GOOD = "good"
    FAIR = "fair"
    POOR = "poor"


def _points_by_assignment(assignments: Iterable[Assignment]) -> Dict[Optional[int], int]:
    return {a.id: a.totalPoints for a in assignments}


def _possible_points(grade: Grade, points: Dict[Optional[int], int]) -> float:
    # An assignment that cannot be found (or has no points) counts as 100 points.
    return points.get(grade.assignmentId) or DEFAULT_TOTAL_POINTS


def _is_present(record: Attendance) -> bool:
    return record.status == AttendanceStatus.PRESENT


# --- Grade Metrics ---

def grade_percentage(score: float, total_points: float) -> int:
    """A single score as a percentage of the points available; 0 when there are no points."""
    if not total_points:
        return 0
    return round_half_up(score / total_points * 100)


def class_average(assignment_id: int, grades: Sequence[Grade], assignments: Sequence[Assignment]) -> int:
    """
    Mean score on one assignment as a percentage of its total points.
    Returns 0 when nobody has been graded or the assignment is unknown.
    """
    assignment_grades = [g for g in grades if g.assignmentId == assignment_id]
    if not assignment_grades:
        return 0
    assignment = next((a for a in assignments if a.id == assignment_id), None)
    if assignment is None or not assignment.totalPoints:
        return 0
    mean_score = sum(g.score for g in assignment_grades) / len(assignment_grades)
    return round_half_up(mean_score / assignment.totalPoints * 100)


def overall_grade_average(grades: Sequence[Grade], assignments: Sequence[Assignment]) -> int:
    """Points earned over points available across every grade given."""
    points = _points_by_assignment(assignments)
    total_possible = sum(_possible_points(g, points) for g in grades)
    if total_possible <= 0:
        return 0
    total_score = sum(g.score for g in grades)
    return round_half_up(total_score / total_possible * 100)


def student_average(student_id: int, grades: Sequence[Grade], assignments: Sequence[Assignment]) -> int:
    """The overall grade average restricted to one student's grades; 0 with no grades."""
    return overall_grade_average([g for g in grades if g.studentId == student_id], assignments)


def top_performers(
    students: Sequence[Student],
    grades: Sequence[Grade],
    assignments: Sequence[Assignment],
    limit: int = TOP_PERFORMER_COUNT,
) -> List[StudentAverage]:
    """Students ranked by average, highest first; ties keep roster order."""
    averages = [
        StudentAverage(student=s, average=student_average(s.id, grades, assignments))
        for s in students
    ]
    # sorted() is stable, so equal averages stay in input order.
    ranked = sorted(averages, key=lambda item: item.average, reverse=True)
    return ranked[:max(limit, 0)]


def performance_band(percentage: float) -> PerformanceBand:
    if percentage >= 90:
        return PerformanceBand.EXCELLENT
    if percentage >= 80:
        return PerformanceBand.GOOD
    if percentage >= 70:
        return PerformanceBand.FAIR
    return PerformanceBand.POOR


# --- Attendance Metrics ---

def attendance_rate(records: Sequence[Attendance]) -> int:
    """
    Share of records marked present. A student with nothing recorded is not
    penalised: an empty list yields 100.
    """
    if not records:
        return 100
    present = sum(1 for r in records if _is_present(r))
    return round_half_up(present / len(records) * 100)


def overall_attendance_rate(records: Sequence[Attendance]) -> int:
    """The whole-school rate shown on the dashboard; 0 when nothing is recorded."""
    if not records:
        return 0
    return attendance_rate(records)


def attendance_issues(
    students: Sequence[Student],
    attendance: Sequence[Attendance],
    threshold: int = ATTENDANCE_THRESHOLD,
) -> List[StudentAttendance]:
    """Students whose attendance rate is strictly below `threshold`, lowest first."""
    by_student: Dict[Optional[int], List[Attendance]] = {}
    for record in attendance:
        by_student.setdefault(record.studentId, []).append(record)

    rates = [
        StudentAttendance(student=s, rate=attendance_rate(by_student.get(s.id, [])))
        for s in students
    ]
    flagged = [item for item in rates if item.rate < threshold]
    return sorted(flagged, key=lambda item: item.rate)


def attendance_breakdown(records: Sequence[Attendance], day: date) -> AttendanceBreakdown:
    """Status counts for the records that fall on `day` (time of day ignored)."""
    counts = {status: 0 for status in ("present", "absent", "late", "excused")}
    for record in records:
        if parse_day(record.date) != day:
            continue
        status = record.status.value if isinstance(record.status, Enum) else record.status
        if status in counts:
            counts[status] += 1
    return AttendanceBreakdown(date=day, **counts)


# --- Roster Metrics ---

def grade_level_distribution(students: Sequence[Student]) -> Dict[str, int]:
    """Number of students per grade-level label."""
    if not students:
        return {}
    df = pd.DataFrame({"grade": [s.grade for s in students]})
    counts = df.groupby("grade", sort=False).size()
    return {str(label): int(count) for label, count in counts.items()}


def assignment_completion_rate(assignment_id: int, grades: Sequence[Grade], students: Sequence[Student]) -> int:
    """Graded submissions for one assignment over roster size; 0 with an empty roster."""
    if not students:
        return 0
    submitted = sum(1 for g in grades if g.assignmentId == assignment_id)
    return round_half_up(submitted / len(students) * 100)


def overall_completion_rate(
    students: Sequence[Student],
    assignments: Sequence[Assignment],
    grades: Sequence[Grade],
) -> int:
    """All grades recorded over every (student, assignment) pair."""
    possible = len(students) * len(assignments)
    if possible == 0:
        return 0
    return round_half_up(len(grades) / possible * 100)
