"""
Pydantic schemas for broker requests and responses.
"""

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator
from typing import List, Optional
from decimal import Decimal
from app.models.broker import BrokerAffiliation, BrokerStatus
from app.schemas.common import (
    ORMResponse,
    UTCDateTime,
    clean_required_text,
    clean_optional_text,
    clean_string_list,
    reject_null,
)
from app.schemas.summary import CustomerSummary
from app.schemas.interaction import InteractionSummary


class BrokerBase(BaseModel):
    """Base broker schema with common fields."""

    name: str = Field(
        ...,
        min_length=1,
        max_length=255,
        description="Broker full name",
        examples=["Amit Mehta"]
    )

    email: EmailStr = Field(
        ...,
        description="Broker email address - must be unique",
        examples=["amit@realestate.com"]
    )

    phone: str = Field(..., min_length=1, max_length=32, examples=["+91 9876543212"])
    alternate_phone: Optional[str] = Field(None, max_length=32)
    address: Optional[str] = None
    city: Optional[str] = Field(None, max_length=100)
    state: Optional[str] = Field(None, max_length=100)
    pincode: Optional[str] = Field(None, max_length=12)

    affiliation: BrokerAffiliation = Field(
        BrokerAffiliation.INTERNAL,
        description="internal for agency staff, external for independent brokers"
    )

    company: Optional[str] = Field(None, max_length=255)
    experience: Optional[int] = Field(None, ge=0, le=80, description="Years of experience")
    specialization: Optional[List[str]] = None
    territory: Optional[str] = Field(None, max_length=255)

    commission_rate: Decimal = Field(
        Decimal("2.5"),
        ge=0,
        le=100,
        description="Commission percentage"
    )

    total_commission: Decimal = Field(Decimal("0"), ge=0)
    total_deals: int = Field(0, ge=0)
    rating: Decimal = Field(Decimal("0"), ge=0, le=5)
    notes: Optional[str] = None
    status: BrokerStatus = BrokerStatus.ACTIVE
    joined_date: Optional[UTCDateTime] = None

    @field_validator('name', 'phone')
    @classmethod
    def validate_required_text(cls, v, info):
        return clean_required_text(v, info.field_name.capitalize())

    @field_validator('company', 'territory', 'notes', 'address', 'alternate_phone')
    @classmethod
    def validate_optional_text(cls, v):
        return clean_optional_text(v)

    @field_validator('specialization')
    @classmethod
    def validate_specialization(cls, v):
        return clean_string_list(v)


class BrokerCreate(BrokerBase):
    """Schema for creating a new broker."""

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "name": "Amit Mehta",
                "email": "amit@realestate.com",
                "phone": "+91 9876543212",
                "affiliation": "internal",
                "experience": 8,
                "specialization": ["residential", "luxury"],
                "territory": "Mumbai Western Suburbs",
                "commission_rate": 2.5
            }
        }
    )


class BrokerUpdate(BaseModel):
    """Schema for updating an existing broker. Only the fields sent are changed."""

    name: Optional[str] = Field(None, min_length=1, max_length=255)
    email: Optional[EmailStr] = None
    phone: Optional[str] = Field(None, min_length=1, max_length=32)
    alternate_phone: Optional[str] = Field(None, max_length=32)
    address: Optional[str] = None
    city: Optional[str] = Field(None, max_length=100)
    state: Optional[str] = Field(None, max_length=100)
    pincode: Optional[str] = Field(None, max_length=12)
    affiliation: Optional[BrokerAffiliation] = None
    company: Optional[str] = Field(None, max_length=255)
    experience: Optional[int] = Field(None, ge=0, le=80)
    specialization: Optional[List[str]] = None
    territory: Optional[str] = Field(None, max_length=255)
    commission_rate: Optional[Decimal] = Field(None, ge=0, le=100)
    total_commission: Optional[Decimal] = Field(None, ge=0)
    total_deals: Optional[int] = Field(None, ge=0)
    rating: Optional[Decimal] = Field(None, ge=0, le=5)
    notes: Optional[str] = None
    status: Optional[BrokerStatus] = None
    joined_date: Optional[UTCDateTime] = None

    @field_validator(
        'name', 'email', 'phone', 'affiliation', 'commission_rate',
        'total_commission', 'total_deals', 'rating', 'status'
    )
    @classmethod
    def validate_not_null(cls, v, info):
        return reject_null(v, info.field_name)

    @field_validator('name', 'phone')
    @classmethod
    def validate_required_text(cls, v, info):
        return clean_required_text(v, info.field_name.capitalize())

    @field_validator('specialization')
    @classmethod
    def validate_specialization(cls, v):
        return clean_string_list(v)


class BrokerResponse(ORMResponse):
    """Schema for broker response."""

    id: int
    name: str
    email: str
    phone: str
    alternate_phone: Optional[str] = None
    address: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    pincode: Optional[str] = None
    affiliation: BrokerAffiliation
    company: Optional[str] = None
    experience: Optional[int] = None
    specialization: Optional[List[str]] = None
    territory: Optional[str] = None
    commission_rate: float
    total_commission: float
    total_deals: int
    rating: float
    notes: Optional[str] = None
    status: BrokerStatus
    joined_date: Optional[UTCDateTime] = None
    created_at: UTCDateTime


class BrokerStatsResponse(BaseModel):
    """
    Broker with the customers assigned to them, their latest interactions
    and the number of deals closed this month.
    """

    broker: BrokerResponse
    assigned_customers: List[CustomerSummary] = Field(default_factory=list)
    recent_interactions: List[InteractionSummary] = Field(default_factory=list)
    monthly_deals: int = Field(..., ge=0, description="Interactions completed since the start of the month")
