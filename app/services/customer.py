"""
Customer service with business logic validation.
Handles CRUD operations, email uniqueness, broker assignment and the detail view.
"""

from typing import Optional, List, Tuple
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from app.config import settings
from app.repositories.customer import CustomerRepository
from app.repositories.broker import BrokerRepository
from app.repositories.interaction import InteractionRepository
from app.repositories.property_interest import PropertyInterestRepository
from app.models.customer import Customer, CustomerStatus
from app.models.interaction import Interaction
from app.models.property_interest import PropertyInterest
from app.models.enums import Priority
from app.schemas.customer import CustomerCreate, CustomerUpdate
from app.utils.exceptions import (
    APIException,
    BadRequestError,
    CustomerNotFoundError,
    DuplicateResourceError,
    ValidationError,
)
from app.utils.validators import BusinessRuleValidator
import logging

logger = logging.getLogger(__name__)


class CustomerService:
    """
    Customer service for managing leads and their requirements.
    """

    def __init__(self, db_session: AsyncSession):
        self.db = db_session
        self.customer_repo = CustomerRepository(db_session)
        self.broker_repo = BrokerRepository(db_session)
        self.interaction_repo = InteractionRepository(db_session)
        self.interest_repo = PropertyInterestRepository(db_session)

    async def create_customer(self, customer_data: CustomerCreate) -> Customer:
        """
        Create a new customer.

        Args:
            customer_data: Customer creation data

        Returns:
            Created customer instance

        Raises:
            DuplicateResourceError: If the email is already registered
            ValidationError: If the assigned broker does not exist
        """
        try:
            create_data = customer_data.model_dump()

            await self._ensure_unique_email(create_data["email"])
            await BusinessRuleValidator.ensure_reference(
                self.broker_repo, create_data.get("assigned_broker_id"), "assigned_broker_id", "Broker"
            )

            Customer(**create_data).validate_all()

            customer = await self.customer_repo.create(create_data)
            logger.info(f"Customer created: {customer.name} (ID: {customer.id})")
            return customer

        except (APIException, SQLAlchemyError):
            raise
        except ValueError as e:
            raise ValidationError(str(e))
        except Exception as e:
            logger.error(f"Failed to create customer: {e}")
            raise BadRequestError(f"Failed to create customer: {str(e)}")

    async def get_customer(self, customer_id: int) -> Customer:
        """
        Get customer by ID.

        Raises:
            CustomerNotFoundError: If customer doesn't exist
        """
        customer = await self.customer_repo.get_by_id(customer_id, load_relationships=True)
        if not customer:
            raise CustomerNotFoundError(customer_id)
        return customer

    async def list_customers(
        self,
        search: Optional[str] = None,
        status: Optional[CustomerStatus] = None,
        priority: Optional[Priority] = None,
        assigned_broker_id: Optional[int] = None,
        skip: int = 0,
        limit: int = 100
    ) -> List[Customer]:
        """List customers matching the given filters."""
        try:
            return await self.customer_repo.search_customers(
                search=search,
                status=status,
                priority=priority,
                assigned_broker_id=assigned_broker_id,
                skip=skip,
                limit=limit
            )
        except SQLAlchemyError:
            raise
        except Exception as e:
            logger.error(f"Failed to list customers: {e}")
            raise BadRequestError(f"Failed to list customers: {str(e)}")

    async def update_customer(self, customer_id: int, customer_data: CustomerUpdate) -> Customer:
        """
        Apply a partial update to a customer.

        Args:
            customer_id: Customer to update
            customer_data: Fields to change

        Returns:
            Updated customer

        Raises:
            CustomerNotFoundError: If customer doesn't exist
            DuplicateResourceError: If the new email belongs to another customer
            ValidationError: If the merged record breaks a rule
        """
        try:
            existing = await self.get_customer(customer_id)
            changes = customer_data.model_dump(exclude_unset=True)

            if "email" in changes and changes["email"] != existing.email:
                await self._ensure_unique_email(changes["email"], exclude_id=customer_id)

            if "assigned_broker_id" in changes:
                await BusinessRuleValidator.ensure_reference(
                    self.broker_repo, changes["assigned_broker_id"], "assigned_broker_id", "Broker"
                )

            BusinessRuleValidator.validate_merged(Customer, existing, changes)

            customer = await self.customer_repo.update(customer_id, changes)
            if not customer:
                raise CustomerNotFoundError(customer_id)

            logger.info(f"Customer updated: {customer_id} ({', '.join(changes) or 'no changes'})")
            return customer

        except (APIException, SQLAlchemyError):
            raise
        except Exception as e:
            logger.error(f"Failed to update customer {customer_id}: {e}")
            raise BadRequestError(f"Failed to update customer: {str(e)}")

    async def delete_customer(self, customer_id: int) -> None:
        """
        Delete a customer together with their visits, interactions and interests.

        Raises:
            CustomerNotFoundError: If customer doesn't exist
        """
        deleted = await self.customer_repo.delete(customer_id)
        if not deleted:
            raise CustomerNotFoundError(customer_id)
        logger.info(f"Customer deleted: {customer_id}")

    async def get_customer_details(
        self,
        customer_id: int
    ) -> Tuple[Customer, List[Interaction], List[PropertyInterest]]:
        """
        Get a customer with their latest interactions and property interests.

        Returns:
            Tuple of (customer, recent interactions, property interests)
        """
        customer = await self.get_customer(customer_id)
        recent_interactions = await self.interaction_repo.get_recent(
            customer_id=customer_id,
            limit=settings.recent_interactions_limit
        )
        interests = await self.interest_repo.search_interests(customer_id=customer_id, limit=1000)
        return customer, recent_interactions, interests

    async def _ensure_unique_email(self, email: str, exclude_id: Optional[int] = None) -> None:
        existing = await self.customer_repo.get_by_email(email)
        if existing and existing.id != exclude_id:
            raise DuplicateResourceError("Customer", email)
