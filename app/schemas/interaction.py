"""
Pydantic schemas for interaction requests and responses.
Covers CRUD payloads, lifecycle transition bodies and the overdue flag.
"""

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from typing import List, Optional
from app.models.interaction import Interaction, InteractionType, InteractionStatus
from app.models.enums import Priority
from app.schemas.common import ORMResponse, UTCDateTime, clean_required_text, reject_null
from app.schemas.summary import CustomerSummary, BrokerSummary, PropertySummary


def _unique_ids(values: Optional[List[int]]) -> Optional[List[int]]:
    if values is None:
        return values
    return list(dict.fromkeys(values))


class InteractionBase(BaseModel):
    """Base interaction schema with common fields."""

    customer_id: int = Field(..., gt=0, description="Customer the interaction is with")
    broker_id: int = Field(..., gt=0, description="Broker handling the interaction")

    type: InteractionType = Field(
        ...,
        description="digital_sharing, follow_up or property_visit",
        examples=["digital_sharing"]
    )

    title: str = Field(..., min_length=1, max_length=255, examples=["Shared 3 properties via WhatsApp"])
    description: Optional[str] = None

    shared_properties: Optional[List[int]] = Field(
        None,
        description="Property ids shared with the customer (digital sharing)"
    )

    shortlisted_properties: Optional[List[int]] = Field(
        None,
        description="Shared property ids the customer shortlisted"
    )

    property_id: Optional[int] = Field(None, gt=0, description="Visited property (property visit)")
    visit_date: Optional[UTCDateTime] = None
    customer_feedback: Optional[str] = None
    rating: Optional[int] = Field(None, ge=1, le=5)
    scheduled_date: Optional[UTCDateTime] = None
    next_follow_up_date: Optional[UTCDateTime] = None
    priority: Priority = Priority.MEDIUM
    notes: Optional[str] = None

    @field_validator('title')
    @classmethod
    def validate_title(cls, v):
        return clean_required_text(v, "Title")

    @field_validator('shared_properties', 'shortlisted_properties')
    @classmethod
    def validate_property_ids(cls, v):
        return _unique_ids(v)


class InteractionCreate(InteractionBase):
    """Schema for creating a new interaction."""

    status: InteractionStatus = Field(InteractionStatus.PENDING, description="Initial status")

    @model_validator(mode='after')
    def validate_type_requirements(self):
        """Check the property references each interaction type needs."""
        if self.type == InteractionType.PROPERTY_VISIT and self.property_id is None:
            raise ValueError("property_id is required for property_visit interactions")

        if self.type == InteractionType.DIGITAL_SHARING and not self.shared_properties:
            raise ValueError("shared_properties must contain at least one property for digital_sharing interactions")

        if self.shortlisted_properties:
            not_shared = set(self.shortlisted_properties) - set(self.shared_properties or [])
            if not_shared:
                raise ValueError("shortlisted_properties must be a subset of shared_properties")
        return self

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "customer_id": 1,
                "broker_id": 1,
                "type": "digital_sharing",
                "title": "Shared 2 properties via WhatsApp",
                "shared_properties": [1, 2],
                "shortlisted_properties": [1],
                "priority": "high"
            }
        }
    )


class InteractionUpdate(BaseModel):
    """
    Schema for updating an existing interaction. Only the fields sent are changed.
    A status change is checked against the lifecycle transitions.
    """

    customer_id: Optional[int] = Field(None, gt=0)
    broker_id: Optional[int] = Field(None, gt=0)
    type: Optional[InteractionType] = None
    title: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = None
    shared_properties: Optional[List[int]] = None
    shortlisted_properties: Optional[List[int]] = None
    property_id: Optional[int] = Field(None, gt=0)
    visit_date: Optional[UTCDateTime] = None
    customer_feedback: Optional[str] = None
    rating: Optional[int] = Field(None, ge=1, le=5)
    scheduled_date: Optional[UTCDateTime] = None
    completed_date: Optional[UTCDateTime] = None
    next_follow_up_date: Optional[UTCDateTime] = None
    priority: Optional[Priority] = None
    status: Optional[InteractionStatus] = None
    pause_reason: Optional[str] = None
    end_reason: Optional[str] = None
    reminder_sent: Optional[bool] = None
    last_reminder_date: Optional[UTCDateTime] = None
    notes: Optional[str] = None

    @field_validator('customer_id', 'broker_id', 'type', 'title', 'priority', 'status', 'reminder_sent')
    @classmethod
    def validate_not_null(cls, v, info):
        return reject_null(v, info.field_name)

    @field_validator('title')
    @classmethod
    def validate_title(cls, v):
        return clean_required_text(v, "Title")

    @field_validator('shared_properties', 'shortlisted_properties')
    @classmethod
    def validate_property_ids(cls, v):
        return _unique_ids(v)


class InteractionTransitionRequest(BaseModel):
    """Body for the pause and end lifecycle actions."""

    reason: str = Field(
        ...,
        min_length=1,
        max_length=2000,
        description="Why the interaction is being paused or ended",
        examples=["Customer travelling abroad until next month"]
    )

    @field_validator('reason')
    @classmethod
    def validate_reason(cls, v):
        return clean_required_text(v, "Reason")


class InteractionSummary(ORMResponse):
    """Schema for interaction summary (minimal information)."""

    id: int
    customer_id: int
    broker_id: int
    type: InteractionType
    title: str
    property_id: Optional[int] = None
    priority: Priority
    status: InteractionStatus
    completed_date: Optional[UTCDateTime] = None
    created_at: UTCDateTime
    updated_at: UTCDateTime


class InteractionResponse(ORMResponse):
    """Schema for interaction response with related records embedded."""

    id: int
    customer_id: int
    broker_id: int
    type: InteractionType
    title: str
    description: Optional[str] = None
    shared_properties: Optional[List[int]] = None
    shortlisted_properties: Optional[List[int]] = None
    property_id: Optional[int] = None
    visit_date: Optional[UTCDateTime] = None
    customer_feedback: Optional[str] = None
    rating: Optional[int] = None
    scheduled_date: Optional[UTCDateTime] = None
    completed_date: Optional[UTCDateTime] = None
    next_follow_up_date: Optional[UTCDateTime] = None
    priority: Priority
    status: InteractionStatus
    pause_reason: Optional[str] = None
    end_reason: Optional[str] = None
    reminder_sent: bool
    last_reminder_date: Optional[UTCDateTime] = None
    notes: Optional[str] = None
    created_at: UTCDateTime
    updated_at: UTCDateTime

    is_overdue: bool = Field(
        False,
        description="Pending or in progress with no update for the configured number of days"
    )

    customer: Optional[CustomerSummary] = None
    broker: Optional[BrokerSummary] = None
    property: Optional[PropertySummary] = None

    @classmethod
    def from_interaction(cls, interaction: Interaction, overdue_after_days: int) -> "InteractionResponse":
        """Build the response and compute the overdue flag."""
        response = cls.model_validate(interaction)
        response.is_overdue = interaction.check_overdue(overdue_after_days)
        return response
