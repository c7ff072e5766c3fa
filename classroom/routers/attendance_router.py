# /classroom/routers/attendance_router.py

import datetime as dt
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Response, status

from ..models.attendance_model import (
    Attendance,
    AttendanceBreakdown,
    AttendanceCreate,
    AttendanceMark,
    MarkAllPresentRequest,
)
from ..services import attendance_service
from ..services.coercion import coerce_id
from ..services.data_service import DataService, get_data_service

router = APIRouter()

# --- ATTENDANCE COLLECTION ENDPOINTS (/api/attendance) ---

@router.get("", response_model=List[Attendance], summary="List Attendance Records")
async def list_attendance(
    studentId: Optional[str] = None,
    date: Optional[str] = None,
    db: DataService = Depends(get_data_service),
):
    """Optionally narrowed to one student and/or one calendar day."""
    if date:
        student_id = coerce_id(studentId, label="studentId") if studentId else None
        records = await db.get_attendance_by_date(date)
        if student_id is not None:
            records = [r for r in records if r.studentId == student_id]
        return records
    if studentId:
        return await db.get_attendance_by_student(studentId)
    return await db.get_all_attendance()

@router.post("", response_model=Attendance, status_code=status.HTTP_201_CREATED, summary="Create an Attendance Record")
async def create_attendance(attendance_create: AttendanceCreate, db: DataService = Depends(get_data_service)):
    return await db.add_attendance(attendance_create)

# --- MARKING WORKFLOW ---

@router.post("/mark", response_model=Attendance, summary="Mark a Student's Attendance for a Day")
async def mark_attendance(mark: AttendanceMark, db: DataService = Depends(get_data_service)):
    return await attendance_service.mark_attendance(db, mark.studentId, mark.date, mark.status)

@router.post("/mark-all-present", response_model=List[Attendance], summary="Mark Every Student Present")
async def mark_all_present(request: MarkAllPresentRequest, db: DataService = Depends(get_data_service)):
    return await attendance_service.mark_all_present(db, request.date)

@router.get("/breakdown", response_model=AttendanceBreakdown, summary="Get Status Counts for a Day")
async def get_breakdown(date: dt.date, db: DataService = Depends(get_data_service)):
    return await attendance_service.get_daily_breakdown(db, date)

# --- INDIVIDUAL RECORD ENDPOINTS (/api/attendance/{attendance_id}) ---

@router.get("/{attendance_id}", response_model=Attendance, summary="Get an Attendance Record")
async def get_attendance(attendance_id: str, db: DataService = Depends(get_data_service)):
    return await db.get_attendance_by_id(attendance_id)

@router.put("/{attendance_id}", response_model=Attendance, summary="Replace an Attendance Record")
async def update_attendance(attendance_id: str, attendance_update: AttendanceCreate, db: DataService = Depends(get_data_service)):
    return await db.update_attendance(attendance_id, attendance_update)

@router.delete("/{attendance_id}", status_code=status.HTTP_204_NO_CONTENT, summary="Delete an Attendance Record")
async def delete_attendance(attendance_id: str, db: DataService = Depends(get_data_service)):
    was_deleted = await db.delete_attendance(attendance_id)
    if not was_deleted:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Attendance record with ID {attendance_id} not found")
    return Response(status_code=status.HTTP_204_NO_CONTENT)
