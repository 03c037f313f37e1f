"""
Pydantic schemas for request/response validation.
"""

# Customer schemas
from .customer import (
    CustomerBase,
    CustomerCreate,
    CustomerUpdate,
    CustomerResponse,
    CustomerDetailResponse,
)

# Property schemas
from .property import (
    PropertyBase,
    PropertyCreate,
    PropertyUpdate,
    PropertyResponse,
)

# Broker schemas
from .broker import (
    BrokerBase,
    BrokerCreate,
    BrokerUpdate,
    BrokerResponse,
    BrokerStatsResponse,
)

# Visit schemas
from .visit import VisitCreate, VisitUpdate, VisitResponse

# Interaction schemas
from .interaction import (
    InteractionCreate,
    InteractionUpdate,
    InteractionResponse,
    InteractionSummary,
    InteractionTransitionRequest,
)

# Property interest schemas
from .property_interest import PropertyInterestCreate, PropertyInterestResponse

# Category schemas
from .category import CategoryCreate, SubCategoryCreate, CategoryResponse, SubCategoryResponse

# Summaries and dashboard
from .summary import CustomerSummary, PropertySummary, BrokerSummary
from .dashboard import DashboardMetrics

__all__ = [
    # Customer
    "CustomerBase",
    "CustomerCreate",
    "CustomerUpdate",
    "CustomerResponse",
    "CustomerDetailResponse",

    # Property
    "PropertyBase",
    "PropertyCreate",
    "PropertyUpdate",
    "PropertyResponse",

    # Broker
    "BrokerBase",
    "BrokerCreate",
    "BrokerUpdate",
    "BrokerResponse",
    "BrokerStatsResponse",

    # Visit
    "VisitCreate",
    "VisitUpdate",
    "VisitResponse",

    # Interaction
    "InteractionCreate",
    "InteractionUpdate",
    "InteractionResponse",
    "InteractionSummary",
    "InteractionTransitionRequest",

    # Property interest
    "PropertyInterestCreate",
    "PropertyInterestResponse",

    # Category
    "CategoryCreate",
    "SubCategoryCreate",
    "CategoryResponse",
    "SubCategoryResponse",

    # Summaries and dashboard
    "CustomerSummary",
    "PropertySummary",
    "BrokerSummary",
    "DashboardMetrics",
]
