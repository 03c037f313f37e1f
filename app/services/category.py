"""
Category service for the property category tree.
"""

from typing import List
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from app.repositories.category import CategoryRepository, SubCategoryRepository
from app.models.category import PropertyCategory, PropertySubCategory
from app.schemas.category import CategoryCreate, SubCategoryCreate
from app.utils.exceptions import (
    APIException,
    BadRequestError,
    DuplicateResourceError,
    NotFoundError,
)
import logging

logger = logging.getLogger(__name__)


class CategoryService:
    """Read and extend the category and subcategory lookup tables."""

    def __init__(self, db_session: AsyncSession):
        self.db = db_session
        self.category_repo = CategoryRepository(db_session)
        self.sub_category_repo = SubCategoryRepository(db_session)

    async def list_categories(self) -> List[PropertyCategory]:
        return await self.category_repo.get_all()

    async def get_category(self, category_id: int) -> PropertyCategory:
        category = await self.category_repo.get_by_id(category_id)
        if not category:
            raise NotFoundError("Property category", category_id)
        return category

    async def list_subcategories(self, category_id: int) -> List[PropertySubCategory]:
        """
        Get the subcategories of a category.

        Raises:
            NotFoundError: If the category doesn't exist
        """
        await self.get_category(category_id)
        return await self.sub_category_repo.get_by_category(category_id)

    async def get_subcategory(self, sub_category_id: int) -> PropertySubCategory:
        sub_category = await self.sub_category_repo.get_by_id(sub_category_id, load_relationships=True)
        if not sub_category:
            raise NotFoundError("Property subcategory", sub_category_id)
        return sub_category

    async def create_category(self, category_data: CategoryCreate) -> PropertyCategory:
        """
        Create a category.

        Raises:
            DuplicateResourceError: If a category with the same name exists
        """
        try:
            if await self.category_repo.get_by_name(category_data.name):
                raise DuplicateResourceError("Property category", category_data.name)

            category = await self.category_repo.create(category_data.model_dump())
            logger.info(f"Category created: {category.name} (ID: {category.id})")
            return category

        except (APIException, SQLAlchemyError):
            raise
        except Exception as e:
            logger.error(f"Failed to create category: {e}")
            raise BadRequestError(f"Failed to create category: {str(e)}")

    async def create_subcategory(self, category_id: int, sub_category_data: SubCategoryCreate) -> PropertySubCategory:
        """
        Create a subcategory under a category.

        Raises:
            NotFoundError: If the category doesn't exist
            DuplicateResourceError: If the category already has a subcategory with that name
        """
        try:
            await self.get_category(category_id)
            if await self.sub_category_repo.get_by_name(category_id, sub_category_data.name):
                raise DuplicateResourceError("Property subcategory", sub_category_data.name)

            create_data = sub_category_data.model_dump()
            create_data["category_id"] = category_id
            sub_category = await self.sub_category_repo.create(create_data)

            logger.info(f"Subcategory created: {sub_category.name} in category {category_id}")
            return sub_category

        except (APIException, SQLAlchemyError):
            raise
        except Exception as e:
            logger.error(f"Failed to create subcategory: {e}")
            raise BadRequestError(f"Failed to create subcategory: {str(e)}")
