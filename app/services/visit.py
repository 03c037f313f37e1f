"""
Visit service for recording and managing property visits.
"""

from typing import Optional, List, Dict, Any
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from app.repositories.visit import VisitRepository
from app.repositories.customer import CustomerRepository
from app.repositories.property import PropertyRepository
from app.repositories.broker import BrokerRepository
from app.models.visit import Visit, VisitStatus
from app.schemas.visit import VisitCreate, VisitUpdate
from app.utils.exceptions import APIException, BadRequestError, VisitNotFoundError
from app.utils.validators import BusinessRuleValidator
import logging

logger = logging.getLogger(__name__)


class VisitService:
    """Visit service validating the customer, property and broker references."""

    def __init__(self, db_session: AsyncSession):
        self.db = db_session
        self.visit_repo = VisitRepository(db_session)
        self.customer_repo = CustomerRepository(db_session)
        self.property_repo = PropertyRepository(db_session)
        self.broker_repo = BrokerRepository(db_session)

    async def _check_references(self, data: Dict[str, Any]) -> None:
        if "customer_id" in data:
            await BusinessRuleValidator.ensure_reference(
                self.customer_repo, data["customer_id"], "customer_id", "Customer"
            )
        if "property_id" in data:
            await BusinessRuleValidator.ensure_reference(
                self.property_repo, data["property_id"], "property_id", "Property"
            )
        if "broker_id" in data:
            await BusinessRuleValidator.ensure_reference(
                self.broker_repo, data["broker_id"], "broker_id", "Broker"
            )

    async def create_visit(self, visit_data: VisitCreate) -> Visit:
        """
        Record a property visit.

        Raises:
            ValidationError: If the customer, property or broker does not exist
        """
        try:
            create_data = visit_data.model_dump()
            await self._check_references(create_data)

            visit = await self.visit_repo.create(create_data)
            logger.info(
                f"Visit recorded: customer {visit.customer_id} at property {visit.property_id} (ID: {visit.id})"
            )
            return visit

        except (APIException, SQLAlchemyError):
            raise
        except Exception as e:
            logger.error(f"Failed to create visit: {e}")
            raise BadRequestError(f"Failed to create visit: {str(e)}")

    async def get_visit(self, visit_id: int) -> Visit:
        visit = await self.visit_repo.get_by_id(visit_id, load_relationships=True)
        if not visit:
            raise VisitNotFoundError(visit_id)
        return visit

    async def list_visits(
        self,
        search: Optional[str] = None,
        status: Optional[VisitStatus] = None,
        customer_id: Optional[int] = None,
        property_id: Optional[int] = None,
        broker_id: Optional[int] = None,
        skip: int = 0,
        limit: int = 100
    ) -> List[Visit]:
        """List visits with the related records loaded."""
        return await self.visit_repo.search_visits(
            search=search,
            status=status,
            customer_id=customer_id,
            property_id=property_id,
            broker_id=broker_id,
            skip=skip,
            limit=limit
        )

    async def update_visit(self, visit_id: int, visit_data: VisitUpdate) -> Visit:
        """
        Apply a partial update to a visit.

        Raises:
            VisitNotFoundError: If visit doesn't exist
            ValidationError: If a changed reference does not exist
        """
        try:
            existing = await self.get_visit(visit_id)
            changes = visit_data.model_dump(exclude_unset=True)

            await self._check_references(changes)
            BusinessRuleValidator.validate_merged(Visit, existing, changes)

            visit = await self.visit_repo.update(visit_id, changes)
            if not visit:
                raise VisitNotFoundError(visit_id)

            logger.info(f"Visit updated: {visit_id}")
            return visit

        except (APIException, SQLAlchemyError):
            raise
        except Exception as e:
            logger.error(f"Failed to update visit {visit_id}: {e}")
            raise BadRequestError(f"Failed to update visit: {str(e)}")

    async def delete_visit(self, visit_id: int) -> None:
        deleted = await self.visit_repo.delete(visit_id)
        if not deleted:
            raise VisitNotFoundError(visit_id)
        logger.info(f"Visit deleted: {visit_id}")
