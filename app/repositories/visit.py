"""
Visit repository with search across the visiting customer and the visited property.
"""

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, or_, desc
from app.repositories.base import BaseRepository
from app.models.visit import Visit, VisitStatus
from app.models.customer import Customer
from app.models.property import Property
from typing import Optional, List
import logging

logger = logging.getLogger(__name__)


class VisitRepository(BaseRepository[Visit]):
    """Repository for property visits."""

    def __init__(self, db: AsyncSession):
        super().__init__(Visit, db)

    async def search_visits(
        self,
        search: Optional[str] = None,
        status: Optional[VisitStatus] = None,
        customer_id: Optional[int] = None,
        property_id: Optional[int] = None,
        broker_id: Optional[int] = None,
        skip: int = 0,
        limit: int = 100
    ) -> List[Visit]:
        """
        Search visits with customer, property and broker loaded.

        Args:
            search: Case-insensitive substring of customer name, property title or location
            status: Visit status filter
            customer_id: Only visits by this customer
            property_id: Only visits to this property
            broker_id: Only visits accompanied by this broker
            skip: Number of records to skip
            limit: Maximum number of records to return

        Returns:
            Matching visits, most recent visit date first
        """
        try:
            query = select(Visit)

            if search:
                search_term = f"%{search}%"
                query = (
                    query.join(Customer, Visit.customer_id == Customer.id)
                    .join(Property, Visit.property_id == Property.id)
                    .where(
                        or_(
                            Customer.name.ilike(search_term),
                            Property.title.ilike(search_term),
                            Property.location.ilike(search_term)
                        )
                    )
                )
            if status:
                query = query.where(Visit.status == status)
            if customer_id is not None:
                query = query.where(Visit.customer_id == customer_id)
            if property_id is not None:
                query = query.where(Visit.property_id == property_id)
            if broker_id is not None:
                query = query.where(Visit.broker_id == broker_id)

            query = (
                query.order_by(desc(Visit.visit_date), desc(Visit.id))
                .offset(skip)
                .limit(limit)
            )
            result = await self.db.execute(self._with_relationships(query))
            visits = result.scalars().all()

            logger.debug(f"Visit search returned {len(visits)} results")
            return list(visits)
        except Exception as e:
            logger.error(f"Failed to search visits: {e}")
            raise
