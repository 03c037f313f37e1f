"""
Dashboard service aggregating CRM-wide metrics.
"""

from sqlalchemy.ext.asyncio import AsyncSession
from app.config import settings
from app.models.interaction import overdue_cutoff
from app.repositories.dashboard import DashboardRepository
from app.schemas.dashboard import DashboardMetrics
from app.services.broker import start_of_month
import logging

logger = logging.getLogger(__name__)


class DashboardService:

    def __init__(self, db_session: AsyncSession):
        self.db = db_session
        self.dashboard_repo = DashboardRepository(db_session)

    async def get_metrics(self) -> DashboardMetrics:
        """
        Compute the dashboard metrics.

        Monthly counts start at the first of the current UTC month. Revenue
        is the summed price of sold properties.
        """
        metrics = await self.dashboard_repo.get_metrics(
            month_start=start_of_month(),
            overdue_cutoff=overdue_cutoff(settings.overdue_after_days)
        )
        metrics["total_revenue"] = float(metrics["total_revenue"])
        return DashboardMetrics(**metrics)
