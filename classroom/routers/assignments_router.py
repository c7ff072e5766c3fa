# /classroom/routers/assignments_router.py

from typing import List

from fastapi import APIRouter, Depends, HTTPException, Response, status

from ..models.assignment_model import Assignment, AssignmentCreate
from ..services.data_service import DataService, get_data_service

router = APIRouter()

@router.get("", response_model=List[Assignment], summary="List Assignments")
async def list_assignments(db: DataService = Depends(get_data_service)):
    return await db.get_all_assignments()

@router.post("", response_model=Assignment, status_code=status.HTTP_201_CREATED, summary="Create an Assignment")
async def create_assignment(assignment_create: AssignmentCreate, db: DataService = Depends(get_data_service)):
    return await db.add_assignment(assignment_create)

@router.get("/{assignment_id}", response_model=Assignment, summary="Get an Assignment")
async def get_assignment(assignment_id: str, db: DataService = Depends(get_data_service)):
    return await db.get_assignment_by_id(assignment_id)

@router.put("/{assignment_id}", response_model=Assignment, summary="Replace an Assignment")
async def update_assignment(assignment_id: str, assignment_update: AssignmentCreate, db: DataService = Depends(get_data_service)):
    return await db.update_assignment(assignment_id, assignment_update)

@router.delete("/{assignment_id}", status_code=status.HTTP_204_NO_CONTENT, summary="Delete an Assignment")
async def delete_assignment(assignment_id: str, db: DataService = Depends(get_data_service)):
    was_deleted = await db.delete_assignment(assignment_id)
    if not was_deleted:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Assignment with ID {assignment_id} not found")
    return Response(status_code=status.HTTP_204_NO_CONTENT)
