# /classroom/routers/communications_router.py

from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Response, status

from ..models.communication_model import Communication, CommunicationCreate
from ..services.data_service import DataService, get_data_service

router = APIRouter()

@router.get("", response_model=List[Communication], summary="List Communications")
async def list_communications(studentId: Optional[str] = None, db: DataService = Depends(get_data_service)):
    """With `studentId`, returns that student's log newest first."""
    if studentId:
        return await db.get_communications_by_student(studentId)
    return await db.get_all_communications()

@router.post("", response_model=Communication, status_code=status.HTTP_201_CREATED, summary="Log a Communication")
async def create_communication(communication_create: CommunicationCreate, db: DataService = Depends(get_data_service)):
    return await db.add_communication(communication_create)

@router.get("/{communication_id}", response_model=Communication, summary="Get a Communication")
async def get_communication(communication_id: str, db: DataService = Depends(get_data_service)):
    return await db.get_communication_by_id(communication_id)

@router.put("/{communication_id}", response_model=Communication, summary="Replace a Communication")
async def update_communication(communication_id: str, communication_update: CommunicationCreate, db: DataService = Depends(get_data_service)):
    return await db.update_communication(communication_id, communication_update)

@router.delete("/{communication_id}", status_code=status.HTTP_204_NO_CONTENT, summary="Delete a Communication")
async def delete_communication(communication_id: str, db: DataService = Depends(get_data_service)):
    was_deleted = await db.delete_communication(communication_id)
    if not was_deleted:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Communication with ID {communication_id} not found")
    return Response(status_code=status.HTTP_204_NO_CONTENT)
