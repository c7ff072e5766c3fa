# /classroom/models/student_model.py

# --- Core Imports ---
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class StudentStatus(str, Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"
    PENDING = "pending"


# --- Model Definitions ---

class StudentBase(BaseModel):
    """
    The fields shared by every representation of a Student. Every field has a
    default so that sparse backend rows still produce a valid record.
    """
    firstName: str = Field(default="", description="The student's given name.")
    lastName: str = Field(default="", description="The student's family name.")
    grade: str = Field(default="", description="Grade level label, e.g. '5th Grade'.")
    dateOfBirth: str = ""
    email: str = ""
    phone: str = ""
    parentName: str = ""
    parentEmail: str = ""
    parentPhone: str = ""
    address: str = ""
    enrollmentDate: str = ""
    status: StudentStatus = Field(default=StudentStatus.ACTIVE)


class StudentCreate(StudentBase):
    """The payload for creating or fully replacing a student."""
    firstName: str = Field(..., min_length=1)
    lastName: str = Field(..., min_length=1)


class Student(StudentBase):
    """A Student as returned by the repositories and the API."""
    model_config = ConfigDict(from_attributes=True)

    id: Optional[int] = Field(default=None, description="Store-assigned identifier.")

    @property
    def full_name(self) -> str:
        return f"{self.firstName} {self.lastName}".strip()
