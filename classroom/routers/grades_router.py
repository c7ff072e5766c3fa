# /classroom/routers/grades_router.py

from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Response, status

from ..models.grade_model import Grade, GradeBook, GradeCreate
from ..services import grade_service
from ..services.coercion import coerce_id
from ..services.data_service import DataService, get_data_service

router = APIRouter()

# --- GRADE COLLECTION ENDPOINTS (/api/grades) ---

@router.get("", response_model=List[Grade], summary="List Grades")
async def list_grades(
    studentId: Optional[str] = None,
    assignmentId: Optional[str] = None,
    db: DataService = Depends(get_data_service),
):
    """Optionally narrowed to one student and/or one assignment."""
    if studentId and assignmentId:
        assignment_id = coerce_id(assignmentId, label="assignmentId")
        grades = await db.get_grades_by_student(studentId)
        return [g for g in grades if g.assignmentId == assignment_id]
    if studentId:
        return await db.get_grades_by_student(studentId)
    if assignmentId:
        return await db.get_grades_by_assignment(assignmentId)
    return await db.get_all_grades()

@router.post("", response_model=Grade, status_code=status.HTTP_201_CREATED, summary="Create a Grade")
async def create_grade(grade_create: GradeCreate, db: DataService = Depends(get_data_service)):
    return await db.add_grade(grade_create)

# --- GRADE ENTRY WORKFLOW ---

@router.post("/entry", response_model=Grade, summary="Save a Student's Grade for an Assignment")
async def save_grade_entry(entry: GradeCreate, db: DataService = Depends(get_data_service)):
    """Creates the grade, or replaces the student's existing grade for the same assignment."""
    return await grade_service.save_grade(db, entry)

@router.get("/book/{assignment_id}", response_model=GradeBook, summary="Get the Grade Book for an Assignment")
async def get_grade_book(assignment_id: str, db: DataService = Depends(get_data_service)):
    return await grade_service.get_grade_book(db, assignment_id)

# --- INDIVIDUAL GRADE ENDPOINTS (/api/grades/{grade_id}) ---

@router.get("/{grade_id}", response_model=Grade, summary="Get a Grade")
async def get_grade(grade_id: str, db: DataService = Depends(get_data_service)):
    return await db.get_grade_by_id(grade_id)

@router.put("/{grade_id}", response_model=Grade, summary="Replace a Grade")
async def update_grade(grade_id: str, grade_update: GradeCreate, db: DataService = Depends(get_data_service)):
    return await db.update_grade(grade_id, grade_update)

@router.delete("/{grade_id}", status_code=status.HTTP_204_NO_CONTENT, summary="Delete a Grade")
async def delete_grade(grade_id: str, db: DataService = Depends(get_data_service)):
    was_deleted = await db.delete_grade(grade_id)
    if not was_deleted:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Grade with ID {grade_id} not found")
    return Response(status_code=status.HTTP_204_NO_CONTENT)
