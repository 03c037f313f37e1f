"""
Pydantic schemas for customer requests and responses.
Handles customer CRUD payloads, requirement validation and the detail view.
"""

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator, model_validator
from typing import List, Optional
from decimal import Decimal
from app.models.customer import CustomerPurpose, CustomerStatus
from app.models.enums import Priority, PropertyCategoryType, Furnishing
from app.schemas.common import (
    ORMResponse,
    UTCDateTime,
    clean_required_text,
    clean_optional_text,
    clean_string_list,
    reject_null,
)
from app.schemas.summary import BrokerSummary
from app.schemas.interaction import InteractionSummary
from app.schemas.property_interest import PropertyInterestResponse


class CustomerBase(BaseModel):
    """Base customer schema with common fields."""

    name: str = Field(
        ...,
        min_length=1,
        max_length=255,
        description="Customer full name",
        examples=["Rajesh Kumar"]
    )

    email: EmailStr = Field(
        ...,
        description="Customer email address - must be unique",
        examples=["rajesh.kumar@email.com"]
    )

    phone: str = Field(
        ...,
        min_length=1,
        max_length=32,
        description="Primary contact number",
        examples=["+91 9876543210"]
    )

    alternate_phone: Optional[str] = Field(None, max_length=32)
    address: Optional[str] = None
    city: Optional[str] = Field(None, max_length=100)
    state: Optional[str] = Field(None, max_length=100)
    pincode: Optional[str] = Field(None, max_length=12)
    occupation: Optional[str] = Field(None, max_length=255)

    priority: Priority = Field(Priority.MEDIUM, description="Lead priority")
    purpose: CustomerPurpose = Field(CustomerPurpose.BUY, description="buy, rent or lease")

    budget_min: Optional[Decimal] = Field(None, ge=0, description="Minimum budget")
    budget_max: Optional[Decimal] = Field(None, ge=0, description="Maximum budget")

    property_type: Optional[PropertyCategoryType] = None

    preferred_locations: Optional[List[str]] = Field(
        None,
        description="Localities the customer is interested in",
        examples=[["Bandra West", "Andheri"]]
    )

    bedrooms: Optional[int] = Field(None, ge=0, le=50)
    bathrooms: Optional[int] = Field(None, ge=0, le=50)
    min_area: Optional[Decimal] = Field(None, gt=0)
    max_area: Optional[Decimal] = Field(None, gt=0)
    furnishing: Optional[Furnishing] = None
    parking: bool = False
    amenities: Optional[List[str]] = None
    notes: Optional[str] = None
    status: CustomerStatus = CustomerStatus.ACTIVE
    assigned_broker_id: Optional[int] = Field(None, gt=0, description="Broker responsible for this customer")

    @field_validator('name')
    @classmethod
    def validate_name(cls, v):
        """Validate and clean name."""
        return clean_required_text(v, "Name")

    @field_validator('phone')
    @classmethod
    def validate_phone(cls, v):
        return clean_required_text(v, "Phone")

    @field_validator('email')
    @classmethod
    def normalize_email(cls, v):
        return v.lower() if v else v

    @field_validator('alternate_phone', 'address', 'city', 'state', 'pincode', 'occupation', 'notes')
    @classmethod
    def validate_optional_text(cls, v):
        return clean_optional_text(v)

    @field_validator('preferred_locations', 'amenities')
    @classmethod
    def validate_lists(cls, v):
        return clean_string_list(v)

    @model_validator(mode='after')
    def validate_ranges(self):
        """Validate budget and area ranges."""
        if self.budget_min is not None and self.budget_max is not None:
            if self.budget_min > self.budget_max:
                raise ValueError("Minimum budget cannot be greater than maximum budget")

        if self.min_area is not None and self.max_area is not None:
            if self.min_area > self.max_area:
                raise ValueError("Minimum area cannot be greater than maximum area")

        return self


class CustomerCreate(CustomerBase):
    """Schema for creating a new customer."""

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "name": "Rajesh Kumar",
                "email": "rajesh.kumar@email.com",
                "phone": "+91 9876543210",
                "priority": "high",
                "purpose": "buy",
                "budget_min": 5000000,
                "budget_max": 8000000,
                "property_type": "flats",
                "preferred_locations": ["Bandra West", "Andheri"],
                "bedrooms": 2,
                "parking": True
            }
        }
    )


class CustomerUpdate(BaseModel):
    """
    Schema for updating an existing customer.
    Only the fields sent are changed; required fields cannot be set to null.
    """

    name: Optional[str] = Field(None, min_length=1, max_length=255)
    email: Optional[EmailStr] = None
    phone: Optional[str] = Field(None, min_length=1, max_length=32)
    alternate_phone: Optional[str] = Field(None, max_length=32)
    address: Optional[str] = None
    city: Optional[str] = Field(None, max_length=100)
    state: Optional[str] = Field(None, max_length=100)
    pincode: Optional[str] = Field(None, max_length=12)
    occupation: Optional[str] = Field(None, max_length=255)
    priority: Optional[Priority] = None
    purpose: Optional[CustomerPurpose] = None
    budget_min: Optional[Decimal] = Field(None, ge=0)
    budget_max: Optional[Decimal] = Field(None, ge=0)
    property_type: Optional[PropertyCategoryType] = None
    preferred_locations: Optional[List[str]] = None
    bedrooms: Optional[int] = Field(None, ge=0, le=50)
    bathrooms: Optional[int] = Field(None, ge=0, le=50)
    min_area: Optional[Decimal] = Field(None, gt=0)
    max_area: Optional[Decimal] = Field(None, gt=0)
    furnishing: Optional[Furnishing] = None
    parking: Optional[bool] = None
    amenities: Optional[List[str]] = None
    notes: Optional[str] = None
    status: Optional[CustomerStatus] = None
    assigned_broker_id: Optional[int] = Field(None, gt=0)

    @field_validator('name', 'email', 'phone', 'priority', 'purpose', 'parking', 'status')
    @classmethod
    def validate_not_null(cls, v, info):
        return reject_null(v, info.field_name)

    @field_validator('name', 'phone')
    @classmethod
    def validate_required_text(cls, v, info):
        return clean_required_text(v, info.field_name.capitalize())

    @field_validator('email')
    @classmethod
    def normalize_email(cls, v):
        return v.lower() if v else v

    @field_validator('preferred_locations', 'amenities')
    @classmethod
    def validate_lists(cls, v):
        return clean_string_list(v)

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "status": "follow-up",
                "priority": "high",
                "notes": "Wants to see sea-facing options"
            }
        }
    )


class CustomerResponse(ORMResponse):
    """Schema for customer response."""

    id: int
    name: str
    email: str
    phone: str
    alternate_phone: Optional[str] = None
    address: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    pincode: Optional[str] = None
    occupation: Optional[str] = None
    priority: Priority
    purpose: CustomerPurpose
    budget_min: Optional[float] = None
    budget_max: Optional[float] = None
    property_type: Optional[PropertyCategoryType] = None
    preferred_locations: Optional[List[str]] = None
    bedrooms: Optional[int] = None
    bathrooms: Optional[int] = None
    min_area: Optional[float] = None
    max_area: Optional[float] = None
    furnishing: Optional[Furnishing] = None
    parking: bool
    amenities: Optional[List[str]] = None
    notes: Optional[str] = None
    status: CustomerStatus
    assigned_broker_id: Optional[int] = None
    last_interaction_date: Optional[UTCDateTime] = None
    created_at: UTCDateTime

    assigned_broker: Optional[BrokerSummary] = Field(
        None,
        description="Assigned broker (if any)"
    )


class CustomerDetailResponse(CustomerResponse):
    """Customer with recent interactions and property interests."""

    recent_interactions: List[InteractionSummary] = Field(
        default_factory=list,
        description="Latest interactions, newest first"
    )

    property_interests: List[PropertyInterestResponse] = Field(default_factory=list)
