"""
Dashboard API endpoint.
"""

from fastapi import APIRouter, Depends, status

from app.services.dashboard import DashboardService
from app.schemas.dashboard import DashboardMetrics
from app.utils.dependencies import get_dashboard_service


router = APIRouter(prefix="/dashboard", tags=["Dashboard"])


@router.get(
    "/metrics",
    response_model=DashboardMetrics,
    status_code=status.HTTP_200_OK,
    summary="Get dashboard metrics",
    description="Customer, listing, visit, revenue and interaction totals"
)
async def get_dashboard_metrics(
    dashboard_service: DashboardService = Depends(get_dashboard_service)
) -> DashboardMetrics:
    return await dashboard_service.get_metrics()
