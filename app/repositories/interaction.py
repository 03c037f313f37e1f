"""
Interaction repository.
Provides list search, overdue detection and per-broker deal counts.
"""

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, and_, or_, func, desc
from app.repositories.base import BaseRepository
from app.models.interaction import Interaction, InteractionType, InteractionStatus, OPEN_STATUSES
from app.models.customer import Customer
from app.models.broker import Broker
from app.models.enums import Priority
from datetime import datetime
from typing import Optional, List
import logging

logger = logging.getLogger(__name__)


def overdue_condition(cutoff: datetime):
    """SQL condition matching open interactions last updated before the cutoff."""
    return and_(
        Interaction.status.in_(OPEN_STATUSES),
        Interaction.updated_at < cutoff
    )


class InteractionRepository(BaseRepository[Interaction]):
    """Repository for broker-customer interactions."""

    def __init__(self, db: AsyncSession):
        super().__init__(Interaction, db)

    async def search_interactions(
        self,
        search: Optional[str] = None,
        interaction_type: Optional[InteractionType] = None,
        status: Optional[InteractionStatus] = None,
        customer_id: Optional[int] = None,
        broker_id: Optional[int] = None,
        priority: Optional[Priority] = None,
        overdue_before: Optional[datetime] = None,
        not_overdue_before: Optional[datetime] = None,
        skip: int = 0,
        limit: int = 100
    ) -> List[Interaction]:
        """
        Search interactions with customer, broker and property loaded.

        Args:
            search: Case-insensitive substring of title, customer name or broker name
            interaction_type: Interaction type filter
            status: Status filter
            customer_id: Only interactions with this customer
            broker_id: Only interactions handled by this broker
            priority: Priority filter
            overdue_before: Only interactions that are overdue relative to this cutoff
            not_overdue_before: Only interactions that are not overdue relative to this cutoff
            skip: Number of records to skip
            limit: Maximum number of records to return

        Returns:
            Matching interactions, most recently updated first
        """
        try:
            query = select(Interaction)

            if search:
                search_term = f"%{search}%"
                query = (
                    query.join(Customer, Interaction.customer_id == Customer.id)
                    .join(Broker, Interaction.broker_id == Broker.id)
                    .where(
                        or_(
                            Interaction.title.ilike(search_term),
                            Customer.name.ilike(search_term),
                            Broker.name.ilike(search_term)
                        )
                    )
                )
            if interaction_type:
                query = query.where(Interaction.type == interaction_type)
            if status:
                query = query.where(Interaction.status == status)
            if customer_id is not None:
                query = query.where(Interaction.customer_id == customer_id)
            if broker_id is not None:
                query = query.where(Interaction.broker_id == broker_id)
            if priority:
                query = query.where(Interaction.priority == priority)
            if overdue_before is not None:
                query = query.where(overdue_condition(overdue_before))
            if not_overdue_before is not None:
                query = query.where(~overdue_condition(not_overdue_before))

            query = (
                query.order_by(desc(Interaction.updated_at), desc(Interaction.id))
                .offset(skip)
                .limit(limit)
            )
            result = await self.db.execute(self._with_relationships(query))
            interactions = result.scalars().all()

            logger.debug(f"Interaction search returned {len(interactions)} results")
            return list(interactions)
        except Exception as e:
            logger.error(f"Failed to search interactions: {e}")
            raise

    async def get_overdue(self, cutoff: datetime, skip: int = 0, limit: int = 100) -> List[Interaction]:
        """Get open interactions not updated since the cutoff, oldest first."""
        try:
            query = (
                select(Interaction)
                .where(overdue_condition(cutoff))
                .order_by(Interaction.updated_at, Interaction.id)
                .offset(skip)
                .limit(limit)
            )
            result = await self.db.execute(self._with_relationships(query))
            interactions = result.scalars().all()

            logger.debug(f"Found {len(interactions)} overdue interactions")
            return list(interactions)
        except Exception as e:
            logger.error(f"Failed to get overdue interactions: {e}")
            raise

    async def count_overdue(self, cutoff: datetime) -> int:
        result = await self.db.execute(
            select(func.count(Interaction.id)).where(overdue_condition(cutoff))
        )
        return result.scalar() or 0

    async def get_recent(
        self,
        customer_id: Optional[int] = None,
        broker_id: Optional[int] = None,
        limit: int = 5
    ) -> List[Interaction]:
        """
        Get the latest interactions for a customer or a broker.

        Args:
            customer_id: Restrict to this customer
            broker_id: Restrict to this broker
            limit: Number of interactions to return

        Returns:
            Interactions, newest first
        """
        query = select(Interaction)
        if customer_id is not None:
            query = query.where(Interaction.customer_id == customer_id)
        if broker_id is not None:
            query = query.where(Interaction.broker_id == broker_id)
        query = query.order_by(desc(Interaction.created_at), desc(Interaction.id)).limit(limit)

        result = await self.db.execute(self._with_relationships(query))
        return list(result.scalars().all())

    async def count_completed_since(self, broker_id: int, since: datetime) -> int:
        """
        Count a broker's interactions completed on or after a given time.

        Args:
            broker_id: Broker whose deals to count
            since: Start of the counting window

        Returns:
            Number of completed interactions in the window
        """
        try:
            query = select(func.count(Interaction.id)).where(
                and_(
                    Interaction.broker_id == broker_id,
                    Interaction.status == InteractionStatus.COMPLETED,
                    Interaction.completed_date.isnot(None),
                    Interaction.completed_date >= since
                )
            )
            result = await self.db.execute(query)
            return result.scalar() or 0
        except Exception as e:
            logger.error(f"Failed to count completed interactions for broker {broker_id}: {e}")
            raise
