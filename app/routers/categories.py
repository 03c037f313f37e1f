"""
Property category API endpoints.
Read access to the category tree plus creation endpoints for seeding.
"""

from fastapi import APIRouter, Depends, status, Path
from typing import List

from app.services.category import CategoryService
from app.schemas.category import (
    CategoryCreate,
    SubCategoryCreate,
    CategoryResponse,
    SubCategoryResponse,
)
from app.utils.dependencies import get_category_service
from app.schemas.error import get_crud_error_responses, get_common_error_responses


router = APIRouter(prefix="/property-categories", tags=["Property Categories"])


@router.get(
    "",
    response_model=List[CategoryResponse],
    status_code=status.HTTP_200_OK,
    summary="List categories"
)
async def list_categories(
    category_service: CategoryService = Depends(get_category_service)
) -> List[CategoryResponse]:
    categories = await category_service.list_categories()
    return [CategoryResponse.model_validate(category) for category in categories]


@router.get(
    "/sub/{category_id}",
    response_model=List[SubCategoryResponse],
    status_code=status.HTTP_200_OK,
    summary="List subcategories of a category",
    responses=get_common_error_responses()
)
async def list_subcategories(
    category_id: int = Path(..., gt=0, description="Category ID"),
    category_service: CategoryService = Depends(get_category_service)
) -> List[SubCategoryResponse]:
    sub_categories = await category_service.list_subcategories(category_id)
    return [SubCategoryResponse.model_validate(sub) for sub in sub_categories]


@router.get(
    "/subcategory/{sub_category_id}",
    response_model=SubCategoryResponse,
    status_code=status.HTTP_200_OK,
    summary="Get subcategory",
    responses=get_common_error_responses()
)
async def get_subcategory(
    sub_category_id: int = Path(..., gt=0, description="Subcategory ID"),
    category_service: CategoryService = Depends(get_category_service)
) -> SubCategoryResponse:
    sub_category = await category_service.get_subcategory(sub_category_id)
    return SubCategoryResponse.model_validate(sub_category)


@router.get(
    "/{category_id}",
    response_model=CategoryResponse,
    status_code=status.HTTP_200_OK,
    summary="Get category",
    responses=get_common_error_responses()
)
async def get_category(
    category_id: int = Path(..., gt=0, description="Category ID"),
    category_service: CategoryService = Depends(get_category_service)
) -> CategoryResponse:
    category = await category_service.get_category(category_id)
    return CategoryResponse.model_validate(category)


@router.post(
    "",
    response_model=CategoryResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create category",
    responses=get_crud_error_responses()
)
async def create_category(
    category_data: CategoryCreate,
    category_service: CategoryService = Depends(get_category_service)
) -> CategoryResponse:
    category = await category_service.create_category(category_data)
    return CategoryResponse.model_validate(category)


@router.post(
    "/{category_id}/sub",
    response_model=SubCategoryResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create subcategory",
    responses=get_crud_error_responses()
)
async def create_subcategory(
    sub_category_data: SubCategoryCreate,
    category_id: int = Path(..., gt=0, description="Category ID"),
    category_service: CategoryService = Depends(get_category_service)
) -> SubCategoryResponse:
    sub_category = await category_service.create_subcategory(category_id, sub_category_data)
    return SubCategoryResponse.model_validate(sub_category)
