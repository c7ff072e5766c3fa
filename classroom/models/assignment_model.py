# /classroom/models/assignment_model.py

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class AssignmentBase(BaseModel):
    title: str = ""
    category: str = ""
    totalPoints: int = Field(default=0, description="Points available for the assignment.")
    dueDate: str = ""
    classId: str = ""


class AssignmentCreate(AssignmentBase):
    title: str = Field(..., min_length=1)
    totalPoints: int = Field(..., gt=0)


class Assignment(AssignmentBase):
    model_config = ConfigDict(from_attributes=True)

    id: Optional[int] = None
