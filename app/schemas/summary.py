"""
Compact schemas embedded in other resources' responses.
"""

from pydantic import Field
from typing import Optional
from app.schemas.common import ORMResponse
from app.models.customer import CustomerStatus
from app.models.property import PropertyStatus
from app.models.broker import BrokerAffiliation, BrokerStatus
from app.models.enums import Priority, PropertyCategoryType


class CustomerSummary(ORMResponse):
    """Schema for customer summary (minimal information)."""

    id: int
    name: str
    email: str
    phone: str
    priority: Priority
    status: CustomerStatus


class PropertySummary(ORMResponse):
    """Schema for property summary (minimal information)."""

    id: int
    title: str
    category: PropertyCategoryType
    price: float = Field(..., description="Asking price")
    location: str
    city: Optional[str] = None
    status: PropertyStatus


class BrokerSummary(ORMResponse):
    """Schema for broker summary (minimal information)."""

    id: int
    name: str
    email: str
    phone: str
    affiliation: BrokerAffiliation
    company: Optional[str] = None
    status: BrokerStatus
