"""Back-office dashboard endpoint."""

from fastapi import APIRouter, Depends

from newsroom.application.schemas import DashboardResponse
from newsroom.application.services import DashboardService
from newsroom.infrastructure.dependencies import get_current_admin, get_dashboard_service

router = APIRouter(prefix="/admin", tags=["Admin: Dashboard"], dependencies=[Depends(get_current_admin)])


@router.get("/dashboard", response_model=DashboardResponse)
async def dashboard(
    service: DashboardService = Depends(get_dashboard_service),
) -> DashboardResponse:
    """Counts per status, total views and the 20 most recently updated articles."""
    overview = await service.overview()
    return DashboardResponse.model_validate(overview, from_attributes=True)
