"""
Broker repository.
"""

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, or_, func, desc
from app.repositories.base import BaseRepository
from app.models.broker import Broker, BrokerStatus, BrokerAffiliation
from typing import Optional, List
import logging

logger = logging.getLogger(__name__)


class BrokerRepository(BaseRepository[Broker]):
    """Repository for broker records."""

    def __init__(self, db: AsyncSession):
        super().__init__(Broker, db)

    async def get_by_email(self, email: str) -> Optional[Broker]:
        try:
            query = select(Broker).where(func.lower(Broker.email) == email.lower())
            result = await self.db.execute(query)
            return result.scalars().first()
        except Exception as e:
            logger.error(f"Failed to get broker by email {email}: {e}")
            raise

    async def search_brokers(
        self,
        search: Optional[str] = None,
        status: Optional[BrokerStatus] = None,
        affiliation: Optional[BrokerAffiliation] = None,
        skip: int = 0,
        limit: int = 100
    ) -> List[Broker]:
        """
        Search brokers by name, email or phone with optional filters.

        Returns:
            Matching brokers, newest first
        """
        try:
            query = select(Broker)

            if search:
                search_term = f"%{search}%"
                query = query.where(
                    or_(
                        Broker.name.ilike(search_term),
                        Broker.email.ilike(search_term),
                        Broker.phone.ilike(search_term)
                    )
                )
            if status:
                query = query.where(Broker.status == status)
            if affiliation:
                query = query.where(Broker.affiliation == affiliation)

            query = (
                query.order_by(desc(Broker.created_at), desc(Broker.id))
                .offset(skip)
                .limit(limit)
                .execution_options(populate_existing=True)
            )
            result = await self.db.execute(query)
            brokers = result.scalars().all()

            logger.debug(f"Broker search returned {len(brokers)} results")
            return list(brokers)
        except Exception as e:
            logger.error(f"Failed to search brokers: {e}")
            raise
