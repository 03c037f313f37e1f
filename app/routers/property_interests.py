"""
Property interest API endpoints.
"""

from fastapi import APIRouter, Depends, status, Query, Path
from typing import Optional, List

from app.config import settings
from app.models.property_interest import InterestLevel
from app.services.property_interest import PropertyInterestService
from app.schemas.property_interest import PropertyInterestCreate, PropertyInterestResponse
from app.utils.dependencies import get_property_interest_service
from app.schemas.error import get_crud_error_responses, get_common_error_responses


router = APIRouter(prefix="/property-interests", tags=["Property Interests"])


@router.get(
    "",
    response_model=List[PropertyInterestResponse],
    status_code=status.HTTP_200_OK,
    summary="List property interests"
)
async def list_property_interests(
    customer_id: Optional[int] = Query(None, gt=0),
    property_id: Optional[int] = Query(None, gt=0),
    interest_level: Optional[InterestLevel] = Query(None),
    skip: int = Query(0, ge=0, description="Number of records to skip"),
    limit: int = Query(settings.default_page_size, ge=1, le=settings.max_page_size, description="Maximum records"),
    interest_service: PropertyInterestService = Depends(get_property_interest_service)
) -> List[PropertyInterestResponse]:
    interests = await interest_service.list_interests(
        customer_id=customer_id,
        property_id=property_id,
        interest_level=interest_level,
        skip=skip,
        limit=limit
    )
    return [PropertyInterestResponse.model_validate(interest) for interest in interests]


@router.post(
    "",
    response_model=PropertyInterestResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Record property interest",
    description="Record a customer's interest in a property; one record per pair",
    responses=get_crud_error_responses()
)
async def create_property_interest(
    interest_data: PropertyInterestCreate,
    interest_service: PropertyInterestService = Depends(get_property_interest_service)
) -> PropertyInterestResponse:
    interest = await interest_service.create_interest(interest_data)
    return PropertyInterestResponse.model_validate(interest)


@router.delete(
    "/{customer_id}/{property_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Remove property interest",
    responses=get_common_error_responses()
)
async def delete_property_interest(
    customer_id: int = Path(..., gt=0, description="Customer ID"),
    property_id: int = Path(..., gt=0, description="Property ID"),
    interest_service: PropertyInterestService = Depends(get_property_interest_service)
) -> None:
    await interest_service.delete_interest(customer_id, property_id)
