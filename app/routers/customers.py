"""
Customer management API endpoints for CRUD operations, search and the detail view.
"""

from fastapi import APIRouter, Depends, status, Query, Path
from typing import Optional, List

from app.config import settings
from app.models.customer import CustomerStatus
from app.models.enums import Priority
from app.services.customer import CustomerService
from app.schemas.customer import (
    CustomerCreate,
    CustomerUpdate,
    CustomerResponse,
    CustomerDetailResponse,
)
from app.schemas.interaction import InteractionSummary
from app.schemas.property_interest import PropertyInterestResponse
from app.utils.dependencies import get_customer_service
from app.schemas.error import get_crud_error_responses, get_common_error_responses


router = APIRouter(prefix="/customers", tags=["Customers"])


@router.get(
    "",
    response_model=List[CustomerResponse],
    status_code=status.HTTP_200_OK,
    summary="List customers",
    description="List customers with search and filters, newest first"
)
async def list_customers(
    search: Optional[str] = Query(None, description="Substring of name, email or phone"),
    customer_status: Optional[CustomerStatus] = Query(None, alias="status", description="Lead status"),
    priority: Optional[Priority] = Query(None, description="Lead priority"),
    assigned_broker_id: Optional[int] = Query(None, gt=0, description="Assigned broker"),
    skip: int = Query(0, ge=0, description="Number of records to skip"),
    limit: int = Query(settings.default_page_size, ge=1, le=settings.max_page_size, description="Maximum records"),
    customer_service: CustomerService = Depends(get_customer_service)
) -> List[CustomerResponse]:
    customers = await customer_service.list_customers(
        search=search,
        status=customer_status,
        priority=priority,
        assigned_broker_id=assigned_broker_id,
        skip=skip,
        limit=limit
    )
    return [CustomerResponse.model_validate(customer) for customer in customers]


@router.post(
    "",
    response_model=CustomerResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create customer",
    description="Create a new customer lead",
    responses=get_crud_error_responses()
)
async def create_customer(
    customer_data: CustomerCreate,
    customer_service: CustomerService = Depends(get_customer_service)
) -> CustomerResponse:
    """
    Create a new customer.

    Args:
        customer_data: Customer creation data
        customer_service: Customer service instance

    Returns:
        Created customer

    Raises:
        DuplicateResourceError: If the email is already registered
        ValidationError: If the data is invalid or the assigned broker is unknown
    """
    customer = await customer_service.create_customer(customer_data)
    return CustomerResponse.model_validate(customer)


@router.get(
    "/{customer_id}",
    response_model=CustomerResponse,
    status_code=status.HTTP_200_OK,
    summary="Get customer",
    responses=get_common_error_responses()
)
async def get_customer(
    customer_id: int = Path(..., gt=0, description="Customer ID"),
    customer_service: CustomerService = Depends(get_customer_service)
) -> CustomerResponse:
    customer = await customer_service.get_customer(customer_id)
    return CustomerResponse.model_validate(customer)


@router.get(
    "/{customer_id}/details",
    response_model=CustomerDetailResponse,
    status_code=status.HTTP_200_OK,
    summary="Get customer details",
    description="Customer with assigned broker, latest interactions and property interests",
    responses=get_common_error_responses()
)
async def get_customer_details(
    customer_id: int = Path(..., gt=0, description="Customer ID"),
    customer_service: CustomerService = Depends(get_customer_service)
) -> CustomerDetailResponse:
    """
    Get the customer detail view.

    Args:
        customer_id: Customer ID
        customer_service: Customer service instance

    Returns:
        Customer with recent interactions and property interests
    """
    customer, interactions, interests = await customer_service.get_customer_details(customer_id)
    return CustomerDetailResponse(
        **CustomerResponse.model_validate(customer).model_dump(),
        recent_interactions=[InteractionSummary.model_validate(i) for i in interactions],
        property_interests=[PropertyInterestResponse.model_validate(i) for i in interests]
    )


@router.put(
    "/{customer_id}",
    response_model=CustomerResponse,
    status_code=status.HTTP_200_OK,
    summary="Update customer",
    description="Partially update a customer; only the fields sent are changed",
    responses=get_crud_error_responses()
)
async def update_customer(
    customer_id: int = Path(..., gt=0, description="Customer ID"),
    customer_data: CustomerUpdate = ...,
    customer_service: CustomerService = Depends(get_customer_service)
) -> CustomerResponse:
    customer = await customer_service.update_customer(customer_id, customer_data)
    return CustomerResponse.model_validate(customer)


@router.delete(
    "/{customer_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete customer",
    description="Delete a customer with their visits, interactions and property interests",
    responses=get_common_error_responses()
)
async def delete_customer(
    customer_id: int = Path(..., gt=0, description="Customer ID"),
    customer_service: CustomerService = Depends(get_customer_service)
) -> None:
    await customer_service.delete_customer(customer_id)
