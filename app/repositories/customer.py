"""
Customer repository with lookup by email and list search.
"""

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, update, or_, func, desc
from app.repositories.base import BaseRepository
from app.models.customer import Customer, CustomerStatus
from app.models.enums import Priority
from datetime import datetime
from typing import Optional, List
import logging

logger = logging.getLogger(__name__)


class CustomerRepository(BaseRepository[Customer]):
    """Repository for customer records."""

    def __init__(self, db: AsyncSession):
        super().__init__(Customer, db)

    async def get_by_email(self, email: str) -> Optional[Customer]:
        """
        Get customer by email address (case-insensitive).

        Args:
            email: Email address to look up

        Returns:
            Customer if found, None otherwise
        """
        try:
            query = select(Customer).where(func.lower(Customer.email) == email.lower())
            result = await self.db.execute(query)
            return result.scalars().first()
        except Exception as e:
            logger.error(f"Failed to get customer by email {email}: {e}")
            raise

    async def search_customers(
        self,
        search: Optional[str] = None,
        status: Optional[CustomerStatus] = None,
        priority: Optional[Priority] = None,
        assigned_broker_id: Optional[int] = None,
        skip: int = 0,
        limit: int = 100
    ) -> List[Customer]:
        """
        Search customers by name, email or phone with optional filters.

        Args:
            search: Case-insensitive substring of name, email or phone
            status: Customer status filter
            priority: Priority filter
            assigned_broker_id: Only customers assigned to this broker
            skip: Number of records to skip
            limit: Maximum number of records to return

        Returns:
            Matching customers, newest first
        """
        try:
            query = select(Customer)

            if search:
                search_term = f"%{search}%"
                query = query.where(
                    or_(
                        Customer.name.ilike(search_term),
                        Customer.email.ilike(search_term),
                        Customer.phone.ilike(search_term)
                    )
                )
            if status:
                query = query.where(Customer.status == status)
            if priority:
                query = query.where(Customer.priority == priority)
            if assigned_broker_id is not None:
                query = query.where(Customer.assigned_broker_id == assigned_broker_id)

            query = (
                query.order_by(desc(Customer.created_at), desc(Customer.id))
                .offset(skip)
                .limit(limit)
            )
            result = await self.db.execute(self._with_relationships(query))
            customers = result.scalars().all()

            logger.debug(f"Customer search returned {len(customers)} results")
            return list(customers)
        except Exception as e:
            logger.error(f"Failed to search customers: {e}")
            raise

    async def get_by_broker(self, broker_id: int) -> List[Customer]:
        """Get all customers assigned to a broker."""
        return await self.search_customers(assigned_broker_id=broker_id, limit=1000)

    async def touch_last_interaction(self, customer_id: int, when: datetime) -> None:
        """
        Record the time of the customer's latest interaction.
        The caller commits.

        Args:
            customer_id: Customer to update
            when: Interaction timestamp
        """
        stmt = (
            update(Customer)
            .where(Customer.id == customer_id)
            .values(last_interaction_date=when)
            .execution_options(synchronize_session=False)
        )
        await self.db.execute(stmt)
        logger.debug(f"Customer {customer_id} last interaction set to {when}")
