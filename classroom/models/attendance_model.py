# /classroom/models/attendance_model.py

import datetime as dt
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class AttendanceStatus(str, Enum):
    PRESENT = "present"
    ABSENT = "absent"
    LATE = "late"
    EXCUSED = "excused"
    # Never stored; the default for a student with nothing recorded yet.
    UNMARKED = "unmarked"


class AttendanceBase(BaseModel):
    studentId: Optional[int] = None
    date: str = ""
    status: AttendanceStatus = AttendanceStatus.UNMARKED
    reason: str = ""


class AttendanceCreate(AttendanceBase):
    studentId: int = Field(..., gt=0)
    date: str = Field(..., min_length=1)


class Attendance(AttendanceBase):
    model_config = ConfigDict(from_attributes=True)

    id: Optional[int] = None


# --- Request / Response Models for the marking workflow ---

class AttendanceMark(BaseModel):
    studentId: int = Field(..., gt=0)
    date: dt.date
    status: AttendanceStatus


class MarkAllPresentRequest(BaseModel):
    date: dt.date


class AttendanceBreakdown(BaseModel):
    """Status counts for a single calendar day."""
    date: dt.date
    present: int = 0
    absent: int = 0
    late: int = 0
    excused: int = 0
