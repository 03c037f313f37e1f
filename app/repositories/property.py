"""
Property repository for managing property listings with search and filtering.
"""

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, and_, or_, desc
from app.repositories.base import BaseRepository
from app.models.property import Property, PropertyStatus, PriceRange
from app.models.enums import PropertyCategoryType, Furnishing
from typing import Optional, List
from decimal import Decimal
import logging

logger = logging.getLogger(__name__)


class PropertySearchFilters:
    """Data class for property search filters."""

    def __init__(
        self,
        search: Optional[str] = None,
        category: Optional[PropertyCategoryType] = None,
        status: Optional[PropertyStatus] = None,
        price_range: Optional[PriceRange] = None,
        min_price: Optional[Decimal] = None,
        max_price: Optional[Decimal] = None,
        bedrooms: Optional[int] = None,
        city: Optional[str] = None,
        furnishing: Optional[Furnishing] = None,
        parking: Optional[bool] = None,
        sub_category_id: Optional[int] = None
    ):
        self.search = search
        self.category = category
        self.status = status
        self.price_range = price_range
        self.min_price = min_price
        self.max_price = max_price
        self.bedrooms = bedrooms
        self.city = city
        self.furnishing = furnishing
        self.parking = parking
        self.sub_category_id = sub_category_id


class PropertyRepository(BaseRepository[Property]):
    """
    Repository for property listings with filter-panel search.
    """

    def __init__(self, db: AsyncSession):
        super().__init__(Property, db)

    async def search_properties(
        self,
        filters: PropertySearchFilters,
        skip: int = 0,
        limit: int = 100
    ) -> List[Property]:
        """
        Search properties with filtering and pagination.

        Args:
            filters: PropertySearchFilters instance with search criteria
            skip: Number of records to skip for pagination
            limit: Maximum number of records to return

        Returns:
            Matching properties, newest first
        """
        try:
            query = select(Property)

            conditions = self._build_filter_conditions(filters)
            if conditions:
                query = query.where(and_(*conditions))

            query = (
                query.order_by(desc(Property.created_at), desc(Property.id))
                .offset(skip)
                .limit(limit)
            )
            query = self._with_relationships(query)

            result = await self.db.execute(query)
            properties = result.scalars().all()

            logger.debug(f"Property search returned {len(properties)} results")
            return list(properties)
        except Exception as e:
            logger.error(f"Failed to search properties: {e}")
            raise

    def _build_filter_conditions(self, filters: PropertySearchFilters) -> List:
        """
        Build SQLAlchemy filter conditions from search filters.

        Args:
            filters: PropertySearchFilters instance

        Returns:
            List of SQLAlchemy conditions
        """
        conditions = []

        # Text search over title, location and city (case-insensitive)
        if filters.search:
            search_term = f"%{filters.search}%"
            conditions.append(
                or_(
                    Property.title.ilike(search_term),
                    Property.location.ilike(search_term),
                    Property.city.ilike(search_term)
                )
            )

        if filters.category:
            conditions.append(Property.category == filters.category)

        if filters.status:
            conditions.append(Property.status == filters.status)

        if filters.sub_category_id is not None:
            conditions.append(Property.sub_category_id == filters.sub_category_id)

        # Price bucket: lower bound exclusive, upper bound inclusive
        if filters.price_range:
            lower, upper = filters.price_range.bounds
            if lower is not None:
                conditions.append(Property.price > lower)
            if upper is not None:
                conditions.append(Property.price <= upper)

        if filters.min_price is not None:
            conditions.append(Property.price >= filters.min_price)
        if filters.max_price is not None:
            conditions.append(Property.price <= filters.max_price)

        if filters.bedrooms is not None:
            conditions.append(Property.bedrooms == filters.bedrooms)

        if filters.city:
            conditions.append(Property.city == filters.city)

        if filters.furnishing:
            conditions.append(Property.furnishing == filters.furnishing)

        if filters.parking is not None:
            conditions.append(Property.parking == filters.parking)

        return conditions

    async def get_cities(self) -> List[str]:
        """
        Get the distinct, non-empty cities across all listings.

        Returns:
            Sorted list of city names
        """
        try:
            query = (
                select(Property.city)
                .where(and_(Property.city.isnot(None), Property.city != ""))
                .distinct()
                .order_by(Property.city)
            )
            result = await self.db.execute(query)
            cities = list(result.scalars().all())

            logger.debug(f"Retrieved {len(cities)} distinct cities")
            return cities
        except Exception as e:
            logger.error(f"Failed to get property cities: {e}")
            raise
