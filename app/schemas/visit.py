"""
Pydantic schemas for visit requests and responses.
"""

from pydantic import BaseModel, Field, field_validator
from typing import Optional
from app.models.visit import VisitStatus
from app.schemas.common import ORMResponse, UTCDateTime, clean_optional_text, reject_null
from app.schemas.summary import CustomerSummary, PropertySummary, BrokerSummary


class VisitCreate(BaseModel):
    """Schema for recording a property visit."""

    customer_id: int = Field(..., gt=0, description="Visiting customer")
    property_id: int = Field(..., gt=0, description="Visited property")
    broker_id: Optional[int] = Field(None, gt=0, description="Accompanying broker")

    visit_date: UTCDateTime = Field(
        ...,
        description="When the visit took place or is scheduled",
        examples=["2024-01-15T10:30:00Z"]
    )

    feedback: Optional[str] = None
    rating: Optional[int] = Field(None, ge=1, le=5, description="Customer rating from 1 to 5")
    notes: Optional[str] = None
    status: VisitStatus = VisitStatus.COMPLETED

    @field_validator('feedback', 'notes')
    @classmethod
    def validate_text(cls, v):
        return clean_optional_text(v)


class VisitUpdate(BaseModel):
    """Schema for updating a visit. Only the fields sent are changed."""

    customer_id: Optional[int] = Field(None, gt=0)
    property_id: Optional[int] = Field(None, gt=0)
    broker_id: Optional[int] = Field(None, gt=0)
    visit_date: Optional[UTCDateTime] = None
    feedback: Optional[str] = None
    rating: Optional[int] = Field(None, ge=1, le=5)
    notes: Optional[str] = None
    status: Optional[VisitStatus] = None

    @field_validator('customer_id', 'property_id', 'visit_date', 'status')
    @classmethod
    def validate_not_null(cls, v, info):
        return reject_null(v, info.field_name)


class VisitResponse(ORMResponse):
    """Schema for visit response with customer, property and broker embedded."""

    id: int
    customer_id: int
    property_id: int
    broker_id: Optional[int] = None
    visit_date: UTCDateTime
    feedback: Optional[str] = None
    rating: Optional[int] = None
    notes: Optional[str] = None
    status: VisitStatus
    created_at: UTCDateTime

    customer: Optional[CustomerSummary] = None
    property: Optional[PropertySummary] = None
    broker: Optional[BrokerSummary] = None
