# /classroom/models/communication_model.py

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class CommunicationType(str, Enum):
    PHONE = "phone"
    EMAIL = "email"
    MEETING = "meeting"
    NOTE = "note"


class CommunicationBase(BaseModel):
    """A logged contact with a student's family."""
    studentId: Optional[int] = None
    teacherId: Optional[int] = None
    teacherName: str = ""
    date: str = ""
    type: Optional[CommunicationType] = None
    subject: str = ""
    notes: str = ""
    followUpRequired: bool = False


class CommunicationCreate(CommunicationBase):
    studentId: int = Field(..., gt=0)
    type: CommunicationType
    subject: str = Field(..., min_length=1)


class Communication(CommunicationBase):
    model_config = ConfigDict(from_attributes=True)

    id: Optional[int] = None
    createdAt: str = Field(default="", description="Stamped when the record is created; never updated.")
