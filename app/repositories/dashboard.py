"""
Aggregate queries behind the dashboard metrics.
"""

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, func
from app.models.customer import Customer
from app.models.property import Property, PropertyStatus
from app.models.visit import Visit
from app.models.interaction import Interaction
from app.models.enums import Priority
from app.repositories.interaction import overdue_condition
from datetime import datetime
from decimal import Decimal
from typing import Dict, Any
import logging

logger = logging.getLogger(__name__)


class DashboardRepository:
    """
    Read-only repository computing CRM-wide counts and sums.
    """

    def __init__(self, db: AsyncSession):
        self.db = db

    async def _scalar(self, query) -> Any:
        result = await self.db.execute(query)
        return result.scalar()

    async def get_metrics(self, month_start: datetime, overdue_cutoff: datetime) -> Dict[str, Any]:
        """
        Compute dashboard metrics.

        Args:
            month_start: First instant of the current month
            overdue_cutoff: Open interactions last updated before this are overdue

        Returns:
            Dictionary of metric name to value
        """
        try:
            metrics = {
                "total_customers": await self._scalar(select(func.count(Customer.id))),
                "active_properties": await self._scalar(
                    select(func.count(Property.id)).where(Property.status == PropertyStatus.AVAILABLE)
                ),
                "visits_this_month": await self._scalar(
                    select(func.count(Visit.id)).where(Visit.visit_date >= month_start)
                ),
                "total_revenue": await self._scalar(
                    select(func.coalesce(func.sum(Property.price), 0)).where(
                        Property.status == PropertyStatus.SOLD
                    )
                ),
                "interactions_this_month": await self._scalar(
                    select(func.count(Interaction.id)).where(Interaction.created_at >= month_start)
                ),
                "hot_leads": await self._scalar(
                    select(func.count(Customer.id)).where(Customer.priority == Priority.HIGH)
                ),
                "overdue_interactions": await self._scalar(
                    select(func.count(Interaction.id)).where(overdue_condition(overdue_cutoff))
                ),
            }
            metrics["total_revenue"] = Decimal(str(metrics["total_revenue"] or 0))

            logger.debug(f"Computed dashboard metrics: {metrics}")
            return metrics
        except Exception as e:
            logger.error(f"Failed to compute dashboard metrics: {e}")
            raise
