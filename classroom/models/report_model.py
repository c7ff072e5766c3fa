# /classroom/models/report_model.py

from typing import Dict, List

from pydantic import BaseModel, Field

from .student_model import Student


class StudentAverage(BaseModel):
    student: Student
    average: int


class StudentAttendance(BaseModel):
    student: Student
    rate: int


class AssignmentStatistics(BaseModel):
    assignmentId: int
    title: str
    category: str
    average: int
    completionRate: int


class ClassReport(BaseModel):
    """Everything the reports view renders, computed from one snapshot of the roster."""
    totalStudents: int
    gradeDistribution: Dict[str, int] = Field(default_factory=dict)
    overallAttendanceRate: int
    overallGradeAverage: int
    completionRate: int
    topPerformers: List[StudentAverage] = Field(default_factory=list)
    attendanceIssues: List[StudentAttendance] = Field(default_factory=list)
    assignments: List[AssignmentStatistics] = Field(default_factory=list)
