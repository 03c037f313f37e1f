"""
Repositories for the property category tree.
"""

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, and_, func
from app.repositories.base import BaseRepository
from app.models.category import PropertyCategory, PropertySubCategory
from typing import Optional, List
import logging

logger = logging.getLogger(__name__)


class CategoryRepository(BaseRepository[PropertyCategory]):

    def __init__(self, db: AsyncSession):
        super().__init__(PropertyCategory, db)

    async def get_all(self) -> List[PropertyCategory]:
        """Get every category ordered by name."""
        return await self.get_multi(limit=1000, order_by="name")

    async def get_by_name(self, name: str) -> Optional[PropertyCategory]:
        query = select(PropertyCategory).where(func.lower(PropertyCategory.name) == name.lower())
        result = await self.db.execute(query)
        return result.scalars().first()


class SubCategoryRepository(BaseRepository[PropertySubCategory]):

    def __init__(self, db: AsyncSession):
        super().__init__(PropertySubCategory, db)

    async def get_by_category(self, category_id: int) -> List[PropertySubCategory]:
        """
        Get a category's subcategories with the parent loaded.

        Args:
            category_id: Parent category id

        Returns:
            Subcategories ordered by name
        """
        try:
            query = (
                select(PropertySubCategory)
                .where(PropertySubCategory.category_id == category_id)
                .order_by(PropertySubCategory.name)
            )
            result = await self.db.execute(self._with_relationships(query))
            sub_categories = result.scalars().all()

            logger.debug(f"Retrieved {len(sub_categories)} subcategories for category {category_id}")
            return list(sub_categories)
        except Exception as e:
            logger.error(f"Failed to get subcategories for category {category_id}: {e}")
            raise

    async def get_by_name(self, category_id: int, name: str) -> Optional[PropertySubCategory]:
        query = select(PropertySubCategory).where(
            and_(
                PropertySubCategory.category_id == category_id,
                func.lower(PropertySubCategory.name) == name.lower()
            )
        )
        result = await self.db.execute(query)
        return result.scalars().first()
