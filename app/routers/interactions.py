"""
Interaction API endpoints.
CRUD, overdue listing and the start/pause/resume/complete/end lifecycle actions.
"""

from fastapi import APIRouter, Depends, status, Query, Path
from typing import Optional, List

from app.config import settings
from app.models.enums import Priority
from app.models.interaction import InteractionType, InteractionStatus
from app.services.interaction import InteractionService
from app.schemas.interaction import (
    InteractionCreate,
    InteractionUpdate,
    InteractionResponse,
    InteractionTransitionRequest,
)
from app.utils.dependencies import get_interaction_service
from app.schemas.error import get_crud_error_responses, get_common_error_responses


router = APIRouter(prefix="/interactions", tags=["Interactions"])


def _to_response(interaction) -> InteractionResponse:
    return InteractionResponse.from_interaction(interaction, settings.overdue_after_days)


@router.get(
    "",
    response_model=List[InteractionResponse],
    status_code=status.HTTP_200_OK,
    summary="List interactions",
    description="List interactions with customer, broker and property embedded"
)
async def list_interactions(
    search: Optional[str] = Query(None, description="Title, customer name or broker name"),
    interaction_type: Optional[InteractionType] = Query(None, alias="type", description="Interaction type"),
    interaction_status: Optional[InteractionStatus] = Query(None, alias="status", description="Lifecycle status"),
    customer_id: Optional[int] = Query(None, gt=0),
    broker_id: Optional[int] = Query(None, gt=0),
    priority: Optional[Priority] = Query(None),
    overdue: Optional[bool] = Query(None, description="Only overdue (true) or only not overdue (false)"),
    skip: int = Query(0, ge=0, description="Number of records to skip"),
    limit: int = Query(settings.default_page_size, ge=1, le=settings.max_page_size, description="Maximum records"),
    interaction_service: InteractionService = Depends(get_interaction_service)
) -> List[InteractionResponse]:
    interactions = await interaction_service.list_interactions(
        search=search,
        interaction_type=interaction_type,
        status=interaction_status,
        customer_id=customer_id,
        broker_id=broker_id,
        priority=priority,
        overdue=overdue,
        skip=skip,
        limit=limit
    )
    return [_to_response(interaction) for interaction in interactions]


@router.get(
    "/overdue",
    response_model=List[InteractionResponse],
    status_code=status.HTTP_200_OK,
    summary="List overdue interactions",
    description="Pending or in-progress interactions with no update for the configured number of days"
)
async def list_overdue_interactions(
    skip: int = Query(0, ge=0, description="Number of records to skip"),
    limit: int = Query(settings.default_page_size, ge=1, le=settings.max_page_size, description="Maximum records"),
    interaction_service: InteractionService = Depends(get_interaction_service)
) -> List[InteractionResponse]:
    interactions = await interaction_service.get_overdue_interactions(skip=skip, limit=limit)
    return [_to_response(interaction) for interaction in interactions]


@router.post(
    "",
    response_model=InteractionResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create interaction",
    responses=get_crud_error_responses()
)
async def create_interaction(
    interaction_data: InteractionCreate,
    interaction_service: InteractionService = Depends(get_interaction_service)
) -> InteractionResponse:
    """
    Log a new interaction with a customer.

    Args:
        interaction_data: Interaction creation data
        interaction_service: Interaction service instance

    Returns:
        Created interaction

    Raises:
        ValidationError: If the payload breaks a type rule or references a missing record
    """
    interaction = await interaction_service.create_interaction(interaction_data)
    return _to_response(interaction)


@router.get(
    "/{interaction_id}",
    response_model=InteractionResponse,
    status_code=status.HTTP_200_OK,
    summary="Get interaction",
    responses=get_common_error_responses()
)
async def get_interaction(
    interaction_id: int = Path(..., gt=0, description="Interaction ID"),
    interaction_service: InteractionService = Depends(get_interaction_service)
) -> InteractionResponse:
    interaction = await interaction_service.get_interaction(interaction_id)
    return _to_response(interaction)


@router.put(
    "/{interaction_id}",
    response_model=InteractionResponse,
    status_code=status.HTTP_200_OK,
    summary="Update interaction",
    description="Partially update an interaction; status changes follow the lifecycle",
    responses=get_crud_error_responses()
)
async def update_interaction(
    interaction_id: int = Path(..., gt=0, description="Interaction ID"),
    interaction_data: InteractionUpdate = ...,
    interaction_service: InteractionService = Depends(get_interaction_service)
) -> InteractionResponse:
    interaction = await interaction_service.update_interaction(interaction_id, interaction_data)
    return _to_response(interaction)


@router.delete(
    "/{interaction_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete interaction",
    responses=get_common_error_responses()
)
async def delete_interaction(
    interaction_id: int = Path(..., gt=0, description="Interaction ID"),
    interaction_service: InteractionService = Depends(get_interaction_service)
) -> None:
    await interaction_service.delete_interaction(interaction_id)


@router.patch(
    "/{interaction_id}/start",
    response_model=InteractionResponse,
    summary="Start interaction",
    description="pending -> in_progress",
    responses=get_crud_error_responses()
)
async def start_interaction(
    interaction_id: int = Path(..., gt=0, description="Interaction ID"),
    interaction_service: InteractionService = Depends(get_interaction_service)
) -> InteractionResponse:
    interaction = await interaction_service.start_interaction(interaction_id)
    return _to_response(interaction)


@router.patch(
    "/{interaction_id}/pause",
    response_model=InteractionResponse,
    summary="Pause interaction",
    description="pending or in_progress -> paused, recording the reason",
    responses=get_crud_error_responses()
)
async def pause_interaction(
    transition: InteractionTransitionRequest,
    interaction_id: int = Path(..., gt=0, description="Interaction ID"),
    interaction_service: InteractionService = Depends(get_interaction_service)
) -> InteractionResponse:
    interaction = await interaction_service.pause_interaction(interaction_id, transition.reason)
    return _to_response(interaction)


@router.patch(
    "/{interaction_id}/resume",
    response_model=InteractionResponse,
    summary="Resume interaction",
    description="paused -> in_progress, clearing the pause reason",
    responses=get_crud_error_responses()
)
async def resume_interaction(
    interaction_id: int = Path(..., gt=0, description="Interaction ID"),
    interaction_service: InteractionService = Depends(get_interaction_service)
) -> InteractionResponse:
    interaction = await interaction_service.resume_interaction(interaction_id)
    return _to_response(interaction)


@router.patch(
    "/{interaction_id}/complete",
    response_model=InteractionResponse,
    summary="Complete interaction",
    description="pending or in_progress -> completed, stamping the completion date",
    responses=get_crud_error_responses()
)
async def complete_interaction(
    interaction_id: int = Path(..., gt=0, description="Interaction ID"),
    interaction_service: InteractionService = Depends(get_interaction_service)
) -> InteractionResponse:
    interaction = await interaction_service.complete_interaction(interaction_id)
    return _to_response(interaction)


@router.patch(
    "/{interaction_id}/end",
    response_model=InteractionResponse,
    summary="End interaction",
    description="pending, in_progress or paused -> ended, recording the reason",
    responses=get_crud_error_responses()
)
async def end_interaction(
    transition: InteractionTransitionRequest,
    interaction_id: int = Path(..., gt=0, description="Interaction ID"),
    interaction_service: InteractionService = Depends(get_interaction_service)
) -> InteractionResponse:
    interaction = await interaction_service.end_interaction(interaction_id, transition.reason)
    return _to_response(interaction)
