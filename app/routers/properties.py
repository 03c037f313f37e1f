"""
Property management API endpoints for CRUD operations, search, and filtering.
"""

from fastapi import APIRouter, Depends, status, Query, Path
from typing import Optional, List
from decimal import Decimal

from app.config import settings
from app.models.enums import PropertyCategoryType, Furnishing
from app.models.property import PropertyStatus, PriceRange
from app.repositories.property import PropertySearchFilters
from app.services.property import PropertyService
from app.schemas.property import (
    PropertyCreate,
    PropertyUpdate,
    PropertyResponse,
)
from app.utils.dependencies import get_property_service
from app.schemas.error import get_crud_error_responses, get_common_error_responses


router = APIRouter(prefix="/properties", tags=["Properties"])


@router.get(
    "",
    response_model=List[PropertyResponse],
    status_code=status.HTTP_200_OK,
    summary="List properties with search and filtering",
    description="List property listings matching the filter panel, newest first",
    responses=get_common_error_responses()
)
async def list_properties(
    # Search parameters
    search: Optional[str] = Query(None, description="Substring of title, location or city"),
    category: Optional[PropertyCategoryType] = Query(None, description="Property category"),
    property_status: Optional[PropertyStatus] = Query(None, alias="status", description="Listing status"),

    # Price filters
    price_range: Optional[PriceRange] = Query(None, description="Price bucket: 0-50L, 50L-1Cr, 1Cr-2Cr or 2Cr+"),
    min_price: Optional[Decimal] = Query(None, ge=0, description="Minimum price filter"),
    max_price: Optional[Decimal] = Query(None, ge=0, description="Maximum price filter"),

    # Property specification filters
    bedrooms: Optional[int] = Query(None, ge=0, le=50, description="Exact number of bedrooms"),
    city: Optional[str] = Query(None, description="Exact city"),
    furnishing: Optional[Furnishing] = Query(None, description="Furnishing level"),
    parking: Optional[bool] = Query(None, description="Parking available"),
    sub_category_id: Optional[int] = Query(None, gt=0, description="Property subcategory"),

    # Pagination
    skip: int = Query(0, ge=0, description="Number of records to skip"),
    limit: int = Query(settings.default_page_size, ge=1, le=settings.max_page_size, description="Maximum records"),

    property_service: PropertyService = Depends(get_property_service)
) -> List[PropertyResponse]:
    """
    Get the list of properties with search and filtering capabilities.

    Args:
        Various query parameters for filtering and pagination
        property_service: Property service instance

    Returns:
        Matching properties
    """
    search_filters = PropertySearchFilters(
        search=search,
        category=category,
        status=property_status,
        price_range=price_range,
        min_price=min_price,
        max_price=max_price,
        bedrooms=bedrooms,
        city=city,
        furnishing=furnishing,
        parking=parking,
        sub_category_id=sub_category_id
    )

    properties = await property_service.search_properties(search_filters, skip=skip, limit=limit)
    return [PropertyResponse.model_validate(prop) for prop in properties]


@router.get(
    "/cities",
    response_model=List[str],
    status_code=status.HTTP_200_OK,
    summary="List cities",
    description="Distinct cities of all listings, sorted"
)
async def list_cities(
    property_service: PropertyService = Depends(get_property_service)
) -> List[str]:
    return await property_service.get_cities()


@router.post(
    "",
    response_model=PropertyResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create new property",
    description="Create a new property listing",
    responses=get_crud_error_responses()
)
async def create_property(
    property_data: PropertyCreate,
    property_service: PropertyService = Depends(get_property_service)
) -> PropertyResponse:
    """
    Create a new property listing.

    Args:
        property_data: Property creation data
        property_service: Property service instance

    Returns:
        Created property with details

    Raises:
        ValidationError: If property data is invalid
    """
    property_obj = await property_service.create_property(property_data)
    return PropertyResponse.model_validate(property_obj)


@router.get(
    "/{property_id}",
    response_model=PropertyResponse,
    status_code=status.HTTP_200_OK,
    summary="Get property details",
    description="Get detailed information about a specific property",
    responses=get_common_error_responses()
)
async def get_property(
    property_id: int = Path(..., gt=0, description="Property ID"),
    property_service: PropertyService = Depends(get_property_service)
) -> PropertyResponse:
    """
    Get detailed information about a specific property.

    Raises:
        PropertyNotFoundError: If property doesn't exist
    """
    property_obj = await property_service.get_property(property_id)
    return PropertyResponse.model_validate(property_obj)


@router.put(
    "/{property_id}",
    response_model=PropertyResponse,
    status_code=status.HTTP_200_OK,
    summary="Update property",
    description="Partially update property details",
    responses=get_crud_error_responses()
)
async def update_property(
    property_id: int = Path(..., gt=0, description="Property ID"),
    property_data: PropertyUpdate = ...,
    property_service: PropertyService = Depends(get_property_service)
) -> PropertyResponse:
    """
    Update property details.

    Args:
        property_id: ID of the property to update
        property_data: Property update data
        property_service: Property service instance

    Returns:
        Updated property details
    """
    updated_property = await property_service.update_property(property_id, property_data)
    return PropertyResponse.model_validate(updated_property)


@router.delete(
    "/{property_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete property",
    description="Delete a property listing with its visits and interests",
    responses=get_common_error_responses()
)
async def delete_property(
    property_id: int = Path(..., gt=0, description="Property ID"),
    property_service: PropertyService = Depends(get_property_service)
) -> None:
    await property_service.delete_property(property_id)
