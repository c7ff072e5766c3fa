# /classroom/routers/reports_router.py

from fastapi import APIRouter, Depends, Query

from ..models.report_model import ClassReport
from ..services import report_service
from ..services.analytics_helpers.aggregation import TOP_PERFORMER_COUNT
from ..services.data_service import DataService, get_data_service

router = APIRouter()

@router.get(
    "",
    response_model=ClassReport,
    summary="Get the Class Report",
    description="Grade distribution, overall rates, top performers, attendance concerns and per-assignment statistics."
)
async def get_class_report(
    top: int = Query(default=TOP_PERFORMER_COUNT, ge=1, le=50),
    db: DataService = Depends(get_data_service),
):
    return await report_service.get_class_report(db=db, top_count=top)
