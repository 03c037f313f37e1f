"""
Broker management API endpoints, including per-broker performance stats.
"""

from fastapi import APIRouter, Depends, status, Query, Path
from typing import Optional, List

from app.config import settings
from app.models.broker import BrokerStatus, BrokerAffiliation
from app.services.broker import BrokerService
from app.schemas.broker import (
    BrokerCreate,
    BrokerUpdate,
    BrokerResponse,
    BrokerStatsResponse,
)
from app.schemas.interaction import InteractionSummary
from app.schemas.summary import CustomerSummary
from app.utils.dependencies import get_broker_service
from app.schemas.error import get_crud_error_responses, get_common_error_responses


router = APIRouter(prefix="/brokers", tags=["Brokers"])


@router.get(
    "",
    response_model=List[BrokerResponse],
    status_code=status.HTTP_200_OK,
    summary="List brokers"
)
async def list_brokers(
    search: Optional[str] = Query(None, description="Substring of name, email or phone"),
    broker_status: Optional[BrokerStatus] = Query(None, alias="status", description="Broker status"),
    affiliation: Optional[BrokerAffiliation] = Query(None, description="In-house or external"),
    skip: int = Query(0, ge=0, description="Number of records to skip"),
    limit: int = Query(settings.default_page_size, ge=1, le=settings.max_page_size, description="Maximum records"),
    broker_service: BrokerService = Depends(get_broker_service)
) -> List[BrokerResponse]:
    brokers = await broker_service.list_brokers(
        search=search,
        status=broker_status,
        affiliation=affiliation,
        skip=skip,
        limit=limit
    )
    return [BrokerResponse.model_validate(broker) for broker in brokers]


@router.post(
    "",
    response_model=BrokerResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create broker",
    responses=get_crud_error_responses()
)
async def create_broker(
    broker_data: BrokerCreate,
    broker_service: BrokerService = Depends(get_broker_service)
) -> BrokerResponse:
    broker = await broker_service.create_broker(broker_data)
    return BrokerResponse.model_validate(broker)


@router.get(
    "/{broker_id}",
    response_model=BrokerResponse,
    status_code=status.HTTP_200_OK,
    summary="Get broker",
    responses=get_common_error_responses()
)
async def get_broker(
    broker_id: int = Path(..., gt=0, description="Broker ID"),
    broker_service: BrokerService = Depends(get_broker_service)
) -> BrokerResponse:
    broker = await broker_service.get_broker(broker_id)
    return BrokerResponse.model_validate(broker)


@router.get(
    "/{broker_id}/stats",
    response_model=BrokerStatsResponse,
    status_code=status.HTTP_200_OK,
    summary="Get broker statistics",
    description="Assigned customers, latest interactions and deals closed this month",
    responses=get_common_error_responses()
)
async def get_broker_stats(
    broker_id: int = Path(..., gt=0, description="Broker ID"),
    broker_service: BrokerService = Depends(get_broker_service)
) -> BrokerStatsResponse:
    """
    Get a broker's performance statistics.

    Args:
        broker_id: Broker ID
        broker_service: Broker service instance

    Returns:
        Broker with assigned customers, recent interactions and monthly deals
    """
    broker, customers, interactions, monthly_deals = await broker_service.get_broker_stats(broker_id)
    return BrokerStatsResponse(
        broker=BrokerResponse.model_validate(broker),
        assigned_customers=[CustomerSummary.model_validate(c) for c in customers],
        recent_interactions=[InteractionSummary.model_validate(i) for i in interactions],
        monthly_deals=monthly_deals
    )


@router.put(
    "/{broker_id}",
    response_model=BrokerResponse,
    status_code=status.HTTP_200_OK,
    summary="Update broker",
    description="Partially update a broker",
    responses=get_crud_error_responses()
)
async def update_broker(
    broker_id: int = Path(..., gt=0, description="Broker ID"),
    broker_data: BrokerUpdate = ...,
    broker_service: BrokerService = Depends(get_broker_service)
) -> BrokerResponse:
    broker = await broker_service.update_broker(broker_id, broker_data)
    return BrokerResponse.model_validate(broker)


@router.delete(
    "/{broker_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete broker",
    description="Delete a broker; their interactions are removed and their customers unassigned",
    responses=get_common_error_responses()
)
async def delete_broker(
    broker_id: int = Path(..., gt=0, description="Broker ID"),
    broker_service: BrokerService = Depends(get_broker_service)
) -> None:
    await broker_service.delete_broker(broker_id)
