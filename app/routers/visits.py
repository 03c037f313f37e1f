"""
Property visit API endpoints.
"""

from fastapi import APIRouter, Depends, status, Query, Path
from typing import Optional, List

from app.config import settings
from app.models.visit import VisitStatus
from app.services.visit import VisitService
from app.schemas.visit import VisitCreate, VisitUpdate, VisitResponse
from app.utils.dependencies import get_visit_service
from app.schemas.error import get_crud_error_responses, get_common_error_responses


router = APIRouter(prefix="/visits", tags=["Visits"])


@router.get(
    "",
    response_model=List[VisitResponse],
    status_code=status.HTTP_200_OK,
    summary="List visits",
    description="List visits with customer, property and broker embedded"
)
async def list_visits(
    search: Optional[str] = Query(None, description="Customer name, property title or location"),
    visit_status: Optional[VisitStatus] = Query(None, alias="status", description="Visit status"),
    customer_id: Optional[int] = Query(None, gt=0),
    property_id: Optional[int] = Query(None, gt=0),
    broker_id: Optional[int] = Query(None, gt=0),
    skip: int = Query(0, ge=0, description="Number of records to skip"),
    limit: int = Query(settings.default_page_size, ge=1, le=settings.max_page_size, description="Maximum records"),
    visit_service: VisitService = Depends(get_visit_service)
) -> List[VisitResponse]:
    visits = await visit_service.list_visits(
        search=search,
        status=visit_status,
        customer_id=customer_id,
        property_id=property_id,
        broker_id=broker_id,
        skip=skip,
        limit=limit
    )
    return [VisitResponse.model_validate(visit) for visit in visits]


@router.post(
    "",
    response_model=VisitResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Record visit",
    responses=get_crud_error_responses()
)
async def create_visit(
    visit_data: VisitCreate,
    visit_service: VisitService = Depends(get_visit_service)
) -> VisitResponse:
    """
    Record a property visit.

    Raises:
        ValidationError: If the customer, property or broker does not exist
    """
    visit = await visit_service.create_visit(visit_data)
    return VisitResponse.model_validate(visit)


@router.get(
    "/{visit_id}",
    response_model=VisitResponse,
    status_code=status.HTTP_200_OK,
    summary="Get visit",
    responses=get_common_error_responses()
)
async def get_visit(
    visit_id: int = Path(..., gt=0, description="Visit ID"),
    visit_service: VisitService = Depends(get_visit_service)
) -> VisitResponse:
    visit = await visit_service.get_visit(visit_id)
    return VisitResponse.model_validate(visit)


@router.put(
    "/{visit_id}",
    response_model=VisitResponse,
    status_code=status.HTTP_200_OK,
    summary="Update visit",
    responses=get_crud_error_responses()
)
async def update_visit(
    visit_id: int = Path(..., gt=0, description="Visit ID"),
    visit_data: VisitUpdate = ...,
    visit_service: VisitService = Depends(get_visit_service)
) -> VisitResponse:
    visit = await visit_service.update_visit(visit_id, visit_data)
    return VisitResponse.model_validate(visit)


@router.delete(
    "/{visit_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete visit",
    responses=get_common_error_responses()
)
async def delete_visit(
    visit_id: int = Path(..., gt=0, description="Visit ID"),
    visit_service: VisitService = Depends(get_visit_service)
) -> None:
    await visit_service.delete_visit(visit_id)
