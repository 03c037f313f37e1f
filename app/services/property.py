"""
Property service for managing property listings with business logic validation.
Handles CRUD operations, filter-panel search and the city list.
"""

from typing import List
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from app.repositories.property import PropertyRepository, PropertySearchFilters
from app.repositories.category import SubCategoryRepository
from app.models.property import Property
from app.schemas.property import PropertyCreate, PropertyUpdate
from app.utils.exceptions import (
    APIException,
    BadRequestError,
    PropertyNotFoundError,
    ValidationError,
)
from app.utils.validators import BusinessRuleValidator
import logging

logger = logging.getLogger(__name__)


class PropertyService:
    """
    Property service for managing listings.
    """

    def __init__(self, db_session: AsyncSession):
        self.db = db_session
        self.property_repo = PropertyRepository(db_session)
        self.sub_category_repo = SubCategoryRepository(db_session)

    async def create_property(self, property_data: PropertyCreate) -> Property:
        """
        Create a new property listing.

        Args:
            property_data: Property creation data

        Returns:
            Created property instance

        Raises:
            ValidationError: If property data is invalid or the subcategory is unknown
            BadRequestError: If creation fails unexpectedly
        """
        try:
            create_data = property_data.model_dump()

            await BusinessRuleValidator.ensure_reference(
                self.sub_category_repo, create_data.get("sub_category_id"), "sub_category_id", "Property subcategory"
            )

            Property(**create_data).validate_all()

            property_obj = await self.property_repo.create(create_data)
            logger.info(f"Property created: {property_obj.title} (ID: {property_obj.id})")
            return property_obj

        except (APIException, SQLAlchemyError):
            raise
        except ValueError as e:
            raise ValidationError(str(e))
        except Exception as e:
            logger.error(f"Failed to create property: {e}")
            raise BadRequestError(f"Failed to create property: {str(e)}")

    async def get_property(self, property_id: int) -> Property:
        """
        Get property by ID.

        Raises:
            PropertyNotFoundError: If property doesn't exist
        """
        property_obj = await self.property_repo.get_by_id(property_id, load_relationships=True)
        if not property_obj:
            raise PropertyNotFoundError(property_id)

        logger.debug(f"Retrieved property: {property_id}")
        return property_obj

    async def search_properties(
        self,
        filters: PropertySearchFilters,
        skip: int = 0,
        limit: int = 100
    ) -> List[Property]:
        """
        Search properties with the listing filters.

        Raises:
            ValidationError: If min_price is greater than max_price
        """
        if filters.min_price is not None and filters.max_price is not None:
            if filters.min_price > filters.max_price:
                raise ValidationError("Minimum price cannot be greater than maximum price")

        try:
            return await self.property_repo.search_properties(filters, skip=skip, limit=limit)
        except SQLAlchemyError:
            raise
        except Exception as e:
            logger.error(f"Failed to search properties: {e}")
            raise BadRequestError(f"Failed to search properties: {str(e)}")

    async def update_property(self, property_id: int, property_data: PropertyUpdate) -> Property:
        """
        Apply a partial update to a property.

        Raises:
            PropertyNotFoundError: If property doesn't exist
            ValidationError: If the merged record breaks a rule
        """
        try:
            existing = await self.get_property(property_id)
            changes = property_data.model_dump(exclude_unset=True)

            if "sub_category_id" in changes:
                await BusinessRuleValidator.ensure_reference(
                    self.sub_category_repo, changes["sub_category_id"], "sub_category_id", "Property subcategory"
                )

            # Coordinates travel together
            merged_lat = changes.get("latitude", existing.latitude)
            merged_lng = changes.get("longitude", existing.longitude)
            if (merged_lat is None) != (merged_lng is None):
                raise ValidationError("Both latitude and longitude must be provided together, or both must be None")

            BusinessRuleValidator.validate_merged(Property, existing, changes)

            property_obj = await self.property_repo.update(property_id, changes)
            if not property_obj:
                raise PropertyNotFoundError(property_id)

            logger.info(f"Property updated: {property_id}")
            return property_obj

        except (APIException, SQLAlchemyError):
            raise
        except Exception as e:
            logger.error(f"Failed to update property {property_id}: {e}")
            raise BadRequestError(f"Failed to update property: {str(e)}")

    async def delete_property(self, property_id: int) -> None:
        """
        Delete a property with its visits and interests.
        Interactions that referenced it are kept and detached.

        Raises:
            PropertyNotFoundError: If property doesn't exist
        """
        deleted = await self.property_repo.delete(property_id)
        if not deleted:
            raise PropertyNotFoundError(property_id)
        logger.info(f"Property deleted: {property_id}")

    async def get_cities(self) -> List[str]:
        """Get the sorted distinct cities of all listings."""
        return await self.property_repo.get_cities()
