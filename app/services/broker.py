"""
Broker service with email uniqueness and performance statistics.
"""

from typing import Optional, List, Tuple
from datetime import datetime, timezone
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from app.config import settings
from app.database import utc_now
from app.repositories.broker import BrokerRepository
from app.repositories.customer import CustomerRepository
from app.repositories.interaction import InteractionRepository
from app.models.broker import Broker, BrokerStatus, BrokerAffiliation
from app.models.customer import Customer
from app.models.interaction import Interaction
from app.schemas.broker import BrokerCreate, BrokerUpdate
from app.utils.exceptions import (
    APIException,
    BadRequestError,
    BrokerNotFoundError,
    DuplicateResourceError,
    ValidationError,
)
from app.utils.validators import BusinessRuleValidator
import logging

logger = logging.getLogger(__name__)


def start_of_month(now: Optional[datetime] = None) -> datetime:
    """First instant of the current UTC month."""
    now = now or utc_now()
    return datetime(now.year, now.month, 1, tzinfo=timezone.utc)


class BrokerService:
    """Broker service for managing agents and their track record."""

    def __init__(self, db_session: AsyncSession):
        self.db = db_session
        self.broker_repo = BrokerRepository(db_session)
        self.customer_repo = CustomerRepository(db_session)
        self.interaction_repo = InteractionRepository(db_session)

    async def create_broker(self, broker_data: BrokerCreate) -> Broker:
        """
        Create a new broker.

        Raises:
            DuplicateResourceError: If the email is already registered
        """
        try:
            create_data = broker_data.model_dump()
            create_data["email"] = create_data["email"].lower()

            await self._ensure_unique_email(create_data["email"])
            Broker(**create_data).validate_all()

            broker = await self.broker_repo.create(create_data)
            logger.info(f"Broker created: {broker.name} (ID: {broker.id})")
            return broker

        except (APIException, SQLAlchemyError):
            raise
        except ValueError as e:
            raise ValidationError(str(e))
        except Exception as e:
            logger.error(f"Failed to create broker: {e}")
            raise BadRequestError(f"Failed to create broker: {str(e)}")

    async def get_broker(self, broker_id: int) -> Broker:
        broker = await self.broker_repo.get_by_id(broker_id, load_relationships=True)
        if not broker:
            raise BrokerNotFoundError(broker_id)
        return broker

    async def list_brokers(
        self,
        search: Optional[str] = None,
        status: Optional[BrokerStatus] = None,
        affiliation: Optional[BrokerAffiliation] = None,
        skip: int = 0,
        limit: int = 100
    ) -> List[Broker]:
        return await self.broker_repo.search_brokers(
            search=search,
            status=status,
            affiliation=affiliation,
            skip=skip,
            limit=limit
        )

    async def update_broker(self, broker_id: int, broker_data: BrokerUpdate) -> Broker:
        """
        Apply a partial update to a broker.

        Raises:
            BrokerNotFoundError: If broker doesn't exist
            DuplicateResourceError: If the new email belongs to another broker
        """
        try:
            existing = await self.get_broker(broker_id)
            changes = broker_data.model_dump(exclude_unset=True)

            if "email" in changes:
                changes["email"] = changes["email"].lower()
                if changes["email"] != existing.email:
                    await self._ensure_unique_email(changes["email"], exclude_id=broker_id)

            BusinessRuleValidator.validate_merged(Broker, existing, changes)

            broker = await self.broker_repo.update(broker_id, changes)
            if not broker:
                raise BrokerNotFoundError(broker_id)

            logger.info(f"Broker updated: {broker_id}")
            return broker

        except (APIException, SQLAlchemyError):
            raise
        except Exception as e:
            logger.error(f"Failed to update broker {broker_id}: {e}")
            raise BadRequestError(f"Failed to update broker: {str(e)}")

    async def delete_broker(self, broker_id: int) -> None:
        """
        Delete a broker. Their interactions are removed; visits and
        assigned customers are detached.

        Raises:
            BrokerNotFoundError: If broker doesn't exist
        """
        deleted = await self.broker_repo.delete(broker_id)
        if not deleted:
            raise BrokerNotFoundError(broker_id)
        logger.info(f"Broker deleted: {broker_id}")

    async def get_broker_stats(
        self,
        broker_id: int
    ) -> Tuple[Broker, List[Customer], List[Interaction], int]:
        """
        Get a broker with assigned customers, latest interactions and the
        number of deals closed this month.

        A deal is an interaction completed on or after the first of the month.

        Returns:
            Tuple of (broker, assigned customers, recent interactions, monthly deals)
        """
        broker = await self.get_broker(broker_id)
        customers = await self.customer_repo.get_by_broker(broker_id)
        recent = await self.interaction_repo.get_recent(
            broker_id=broker_id,
            limit=settings.recent_interactions_limit
        )
        monthly_deals = await self.interaction_repo.count_completed_since(broker_id, start_of_month())

        logger.debug(f"Broker {broker_id} stats: {len(customers)} customers, {monthly_deals} deals this month")
        return broker, customers, recent, monthly_deals

    async def _ensure_unique_email(self, email: str, exclude_id: Optional[int] = None) -> None:
        existing = await self.broker_repo.get_by_email(email)
        if existing and existing.id != exclude_id:
            raise DuplicateResourceError("Broker", email)
