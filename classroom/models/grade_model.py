# /classroom/models/grade_model.py

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from .student_model import Student


class GradeBase(BaseModel):
    """
    A score recorded for one student on one assignment. Scores are not
    clamped to the assignment's total points.
    """
    studentId: Optional[int] = None
    assignmentId: Optional[int] = None
    score: float = 0
    submittedDate: str = ""
    comments: str = ""


class GradeCreate(GradeBase):
    studentId: int = Field(..., gt=0)
    assignmentId: int = Field(..., gt=0)
    score: float = Field(...)


class Grade(GradeBase):
    model_config = ConfigDict(from_attributes=True)

    id: Optional[int] = None


# --- Grade Book View ---

class GradeBookRow(BaseModel):
    student: Student
    grade: Optional[Grade] = None
    percentage: int = 0
    band: Optional[str] = Field(default=None, description="Performance band of the percentage, if graded.")


class GradeBook(BaseModel):
    """Every student's standing on a single assignment."""
    assignmentId: int
    title: str
    totalPoints: int
    classAverage: int
    rows: List[GradeBookRow]
