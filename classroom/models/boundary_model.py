# /classroom/models/boundary_model.py

"""
Data contract for responses coming back from a table boundary client.

Clients return plain JSON-like dictionaries; the repositories validate them
against these models so that a malformed response fails loudly in one place
instead of leaking half-parsed dictionaries to callers.
"""

from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import AliasChoices, BaseModel, Field

NOT_FOUND_CODE = "NOT_FOUND"


class PredicateOperator(str, Enum):
    EQUAL_TO = "EqualTo"
    SAME_DAY = "SameDay"


class SortDirection(str, Enum):
    ASC = "ASC"
    DESC = "DESC"


# --- Query Parameters ---

class FilterPredicate(BaseModel):
    field: str
    operator: PredicateOperator = PredicateOperator.EQUAL_TO
    values: List[Any]


class OrderBy(BaseModel):
    field: str
    direction: SortDirection = SortDirection.ASC


# --- Responses ---

class FieldError(BaseModel):
    # Some backends label the offending column as "fieldLabel".
    field: str = Field(default="", validation_alias=AliasChoices("field", "fieldLabel"))
    message: str = ""


class ReadResponse(BaseModel):
    success: bool = False
    message: Optional[str] = None
    code: Optional[str] = None
    data: Any = None


class WriteResult(BaseModel):
    success: bool = False
    data: Optional[Dict[str, Any]] = None
    errors: List[FieldError] = Field(default_factory=list)
    message: Optional[str] = None
    code: Optional[str] = None


class WriteResponse(BaseModel):
    success: bool = False
    message: Optional[str] = None
    code: Optional[str] = None
    results: Optional[List[WriteResult]] = None


class DeleteResult(BaseModel):
    id: Optional[int] = None
    success: bool = False
    message: Optional[str] = None
    code: Optional[str] = None


class DeleteResponse(BaseModel):
    success: bool = False
    message: Optional[str] = None
    code: Optional[str] = None
    results: Optional[List[DeleteResult]] = None
