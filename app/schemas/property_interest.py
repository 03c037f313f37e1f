"""
Pydantic schemas for property interest requests and responses.
"""

from pydantic import BaseModel, Field, field_validator
from typing import Optional
from app.models.property_interest import InterestLevel, InterestSource
from app.schemas.common import ORMResponse, UTCDateTime, clean_optional_text
from app.schemas.summary import PropertySummary


class PropertyInterestCreate(BaseModel):
    """Schema for recording a customer's interest in a property."""

    customer_id: int = Field(..., gt=0)
    property_id: int = Field(..., gt=0)

    interest_level: InterestLevel = Field(
        ...,
        description="high, medium, low or rejected",
        examples=["high"]
    )

    source: Optional[InterestSource] = Field(None, description="Where the interest was captured")
    interaction_id: Optional[int] = Field(None, gt=0, description="Interaction that produced the interest")
    notes: Optional[str] = None

    @field_validator('notes')
    @classmethod
    def validate_notes(cls, v):
        return clean_optional_text(v)


class PropertyInterestResponse(ORMResponse):
    """Schema for property interest response with the property embedded."""

    id: int
    customer_id: int
    property_id: int
    interest_level: InterestLevel
    source: Optional[InterestSource] = None
    interaction_id: Optional[int] = None
    notes: Optional[str] = None
    created_at: UTCDateTime

    property: Optional[PropertySummary] = None
