# /classroom/models/dashboard_model.py

# --- Core Imports ---
from typing import List

from pydantic import BaseModel, Field

from .student_model import Student

# --- Model Definition ---

class DashboardSummary(BaseModel):
    """
    Defines the data contract for the dashboard summary endpoint: the three
    headline statistics plus the short list of recently added students.
    """

    totalStudents: int = Field(
        ...,
        description="The number of students on the roster.",
        examples=[24]
    )

    averageGrade: int = Field(
        ...,
        description="Points earned over points available across every recorded grade, as a percentage.",
        examples=[87]
    )

    attendanceRate: int = Field(
        ...,
        description="Share of attendance records marked present, as a percentage.",
        examples=[93]
    )

    attendanceTrend: str = Field(
        ...,
        description="'up' when the attendance rate meets the target, otherwise 'down'.",
        examples=["up"]
    )

    recentStudents: List[Student] = Field(default_factory=list)
