# /classroom/routers/dashboard_router.py

# --- Core FastAPI Imports ---
from fastapi import APIRouter, Depends

# --- Service and Model Imports ---
from ..services import dashboard_service
from ..services.data_service import DataService, get_data_service
from ..models.dashboard_model import DashboardSummary

router = APIRouter()

# --- Endpoint Definition ---
@router.get(
    "/summary",
    response_model=DashboardSummary,
    summary="Get Dashboard Summary",
    description="Retrieves roster size, grade average, attendance rate and recent students for the home view."
)
async def get_dashboard_summary(db: DataService = Depends(get_data_service)):
    # Thin router: all the arithmetic lives in the service layer.
    return await dashboard_service.get_summary_data(db=db)
