# /classroom/routers/students_router.py

from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status

from ..models.attendance_model import Attendance
from ..models.communication_model import Communication
from ..models.grade_model import Grade
from ..models.student_model import Student, StudentCreate
from ..services import student_service
from ..services.data_service import DataService, get_data_service

router = APIRouter()

# --- STUDENT COLLECTION ENDPOINTS (/api/students) ---

@router.get("", response_model=List[Student], summary="List Students")
async def list_students(
    search: Optional[str] = None,
    grade: Optional[str] = None,
    status_filter: Optional[str] = Query(default=None, alias="status"),
    db: DataService = Depends(get_data_service),
):
    return await student_service.search_students(db, search=search, grade=grade, status=status_filter)

@router.post("", response_model=Student, status_code=status.HTTP_201_CREATED, summary="Create a Student")
async def create_student(student_create: StudentCreate, db: DataService = Depends(get_data_service)):
    return await db.add_student(student_create)

# --- INDIVIDUAL STUDENT ENDPOINTS (/api/students/{student_id}) ---

@router.get("/{student_id}", response_model=Student, summary="Get a Student")
async def get_student(student_id: str, db: DataService = Depends(get_data_service)):
    return await db.get_student_by_id(student_id)

@router.put("/{student_id}", response_model=Student, summary="Replace a Student")
async def update_student(student_id: str, student_update: StudentCreate, db: DataService = Depends(get_data_service)):
    return await db.update_student(student_id, student_update)

@router.delete("/{student_id}", status_code=status.HTTP_204_NO_CONTENT, summary="Delete a Student")
async def delete_student(student_id: str, db: DataService = Depends(get_data_service)):
    # Grades, attendance and communications for the student are not removed.
    was_deleted = await db.delete_student(student_id)
    if not was_deleted:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Student with ID {student_id} not found")
    return Response(status_code=status.HTTP_204_NO_CONTENT)

# --- STUDENT SUB-RESOURCE ENDPOINTS ---

@router.get("/{student_id}/grades", response_model=List[Grade], summary="Get a Student's Grades")
async def get_student_grades(student_id: str, db: DataService = Depends(get_data_service)):
    return await db.get_grades_by_student(student_id)

@router.get("/{student_id}/attendance", response_model=List[Attendance], summary="Get a Student's Attendance")
async def get_student_attendance(student_id: str, db: DataService = Depends(get_data_service)):
    return await db.get_attendance_by_student(student_id)

@router.get("/{student_id}/communications", response_model=List[Communication], summary="Get a Student's Communication Log")
async def get_student_communications(student_id: str, db: DataService = Depends(get_data_service)):
    return await db.get_communications_by_student(student_id)
