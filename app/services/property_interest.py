"""
Property interest service.
One interest record per customer and property pair.
"""

from typing import Optional, List
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from app.repositories.property_interest import PropertyInterestRepository
from app.repositories.customer import CustomerRepository
from app.repositories.property import PropertyRepository
from app.repositories.interaction import InteractionRepository
from app.models.property_interest import PropertyInterest, InterestLevel
from app.schemas.property_interest import PropertyInterestCreate
from app.utils.exceptions import (
    APIException,
    BadRequestError,
    DuplicateResourceError,
    NotFoundError,
)
from app.utils.validators import BusinessRuleValidator
import logging

logger = logging.getLogger(__name__)


class PropertyInterestService:

    def __init__(self, db_session: AsyncSession):
        self.db = db_session
        self.interest_repo = PropertyInterestRepository(db_session)
        self.customer_repo = CustomerRepository(db_session)
        self.property_repo = PropertyRepository(db_session)
        self.interaction_repo = InteractionRepository(db_session)

    async def list_interests(
        self,
        customer_id: Optional[int] = None,
        property_id: Optional[int] = None,
        interest_level: Optional[InterestLevel] = None,
        skip: int = 0,
        limit: int = 100
    ) -> List[PropertyInterest]:
        return await self.interest_repo.search_interests(
            customer_id=customer_id,
            property_id=property_id,
            interest_level=interest_level,
            skip=skip,
            limit=limit
        )

    async def create_interest(self, interest_data: PropertyInterestCreate) -> PropertyInterest:
        """
        Record a customer's interest in a property.

        Raises:
            ValidationError: If the customer, property or interaction does not exist
            DuplicateResourceError: If the pair already has an interest record
        """
        try:
            create_data = interest_data.model_dump()

            await BusinessRuleValidator.ensure_reference(
                self.customer_repo, create_data["customer_id"], "customer_id", "Customer"
            )
            await BusinessRuleValidator.ensure_reference(
                self.property_repo, create_data["property_id"], "property_id", "Property"
            )
            await BusinessRuleValidator.ensure_reference(
                self.interaction_repo, create_data.get("interaction_id"), "interaction_id", "Interaction"
            )

            existing = await self.interest_repo.get_by_pair(create_data["customer_id"], create_data["property_id"])
            if existing:
                raise DuplicateResourceError(
                    "Property interest",
                    f"customer {create_data['customer_id']} / property {create_data['property_id']}"
                )

            interest = await self.interest_repo.create(create_data)
            logger.info(
                f"Interest recorded: customer {interest.customer_id} -> property {interest.property_id} "
                f"({interest.interest_level.value})"
            )
            return interest

        except (APIException, SQLAlchemyError):
            raise
        except Exception as e:
            logger.error(f"Failed to create property interest: {e}")
            raise BadRequestError(f"Failed to create property interest: {str(e)}")

    async def delete_interest(self, customer_id: int, property_id: int) -> None:
        """
        Remove the interest a customer registered for a property.

        Raises:
            NotFoundError: If the pair has no interest record
        """
        deleted = await self.interest_repo.delete_by_pair(customer_id, property_id)
        if not deleted:
            raise NotFoundError("Property interest")
        logger.info(f"Interest removed: customer {customer_id} -> property {property_id}")
