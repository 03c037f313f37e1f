"""
PropertyInterest repository keyed by the (customer, property) pair.
"""

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, delete, and_, desc
from app.repositories.base import BaseRepository
from app.models.property_interest import PropertyInterest, InterestLevel
from typing import Optional, List
import logging

logger = logging.getLogger(__name__)


class PropertyInterestRepository(BaseRepository[PropertyInterest]):
    """Repository for customer interest in properties."""

    def __init__(self, db: AsyncSession):
        super().__init__(PropertyInterest, db)

    async def get_by_pair(self, customer_id: int, property_id: int) -> Optional[PropertyInterest]:
        query = select(PropertyInterest).where(
            and_(
                PropertyInterest.customer_id == customer_id,
                PropertyInterest.property_id == property_id
            )
        )
        result = await self.db.execute(query)
        return result.scalar_one_or_none()

    async def search_interests(
        self,
        customer_id: Optional[int] = None,
        property_id: Optional[int] = None,
        interest_level: Optional[InterestLevel] = None,
        skip: int = 0,
        limit: int = 100
    ) -> List[PropertyInterest]:
        """
        List property interests with optional filters.

        Returns:
            Matching interests with the property loaded, newest first
        """
        try:
            query = select(PropertyInterest)
            if customer_id is not None:
                query = query.where(PropertyInterest.customer_id == customer_id)
            if property_id is not None:
                query = query.where(PropertyInterest.property_id == property_id)
            if interest_level:
                query = query.where(PropertyInterest.interest_level == interest_level)

            query = (
                query.order_by(desc(PropertyInterest.created_at), desc(PropertyInterest.id))
                .offset(skip)
                .limit(limit)
            )
            result = await self.db.execute(self._with_relationships(query))
            interests = result.scalars().all()

            logger.debug(f"Property interest search returned {len(interests)} results")
            return list(interests)
        except Exception as e:
            logger.error(f"Failed to search property interests: {e}")
            raise

    async def delete_by_pair(self, customer_id: int, property_id: int) -> bool:
        """
        Delete the interest record for a customer and property.

        Returns:
            True if a record was deleted, False if none existed
        """
        try:
            stmt = (
                delete(PropertyInterest)
                .where(
                    and_(
                        PropertyInterest.customer_id == customer_id,
                        PropertyInterest.property_id == property_id
                    )
                )
                .execution_options(synchronize_session=False)
            )
            result = await self.db.execute(stmt)
            await self.db.commit()
            self.db.expunge_all()

            deleted = result.rowcount > 0
            logger.debug(
                f"Property interest ({customer_id}, {property_id}) deleted: {deleted}"
            )
            return deleted
        except Exception as e:
            await self.db.rollback()
            logger.error(f"Failed to delete property interest ({customer_id}, {property_id}): {e}")
            raise
