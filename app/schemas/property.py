"""
Pydantic schemas for property requests and responses.
Handles property CRUD operations and validation.
"""

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from typing import Optional, List
from decimal import Decimal
from app.models.property import PropertyStatus, Facing
from app.models.enums import PropertyCategoryType, Furnishing
from app.schemas.common import (
    ORMResponse,
    UTCDateTime,
    clean_required_text,
    clean_optional_text,
    clean_string_list,
    reject_null,
)
from app.schemas.category import SubCategoryResponse


MAX_PRICE = Decimal('9999999999.99')


class PropertyBase(BaseModel):
    """Base property schema with common fields."""

    title: str = Field(
        ...,
        min_length=1,
        max_length=255,
        description="Property listing title",
        examples=["Sunrise Apartments 2BHK"]
    )

    description: Optional[str] = Field(
        None,
        max_length=5000,
        description="Detailed property description"
    )

    category: PropertyCategoryType = Field(
        ...,
        description="flats, tenement, bungalow or land",
        examples=["flats"]
    )

    sub_category_id: Optional[int] = Field(None, gt=0)

    price: Decimal = Field(
        ...,
        gt=0,
        description="Asking price in local currency",
        examples=[7500000]
    )

    location: str = Field(
        ...,
        min_length=1,
        max_length=255,
        description="Locality shown in listings",
        examples=["Bandra West"]
    )

    address: Optional[str] = None

    latitude: Optional[Decimal] = Field(
        None,
        ge=-90,
        le=90,
        description="Property latitude coordinate"
    )

    longitude: Optional[Decimal] = Field(
        None,
        ge=-180,
        le=180,
        description="Property longitude coordinate"
    )

    city: Optional[str] = Field(None, max_length=100)
    state: Optional[str] = Field(None, max_length=100)
    pincode: Optional[str] = Field(None, max_length=12)

    bedrooms: Optional[int] = Field(None, ge=0, le=50, description="Number of bedrooms")
    bathrooms: Optional[int] = Field(None, ge=0, le=50, description="Number of bathrooms")
    area: Optional[Decimal] = Field(None, gt=0, description="Built-up area in square feet")

    owner_name: Optional[str] = Field(None, max_length=255)
    owner_contact: Optional[str] = Field(None, max_length=64)

    images: Optional[List[str]] = Field(None, description="Image URLs")
    amenities: Optional[List[str]] = None

    furnishing: Optional[Furnishing] = None
    parking: bool = False
    facing: Optional[Facing] = None
    floor: Optional[int] = Field(None, ge=0)
    total_floors: Optional[int] = Field(None, ge=0)
    age: Optional[int] = Field(None, ge=0, description="Property age in years")
    status: PropertyStatus = PropertyStatus.AVAILABLE

    @field_validator('title')
    @classmethod
    def validate_title(cls, v):
        """Validate and clean title."""
        return clean_required_text(v, "Title")

    @field_validator('location')
    @classmethod
    def validate_location(cls, v):
        """Validate and clean location."""
        return clean_required_text(v, "Location")

    @field_validator('description', 'address', 'city', 'state', 'pincode', 'owner_name', 'owner_contact')
    @classmethod
    def validate_optional_text(cls, v):
        return clean_optional_text(v)

    @field_validator('images', 'amenities')
    @classmethod
    def validate_lists(cls, v):
        return clean_string_list(v)

    @field_validator('price')
    @classmethod
    def validate_price(cls, v):
        """Validate price value."""
        if v > MAX_PRICE:
            raise ValueError("Price exceeds maximum allowed value")
        return v

    @model_validator(mode='after')
    def validate_coordinates(self):
        """Validate that both coordinates are provided together or both are None."""
        if (self.latitude is None) != (self.longitude is None):
            raise ValueError("Both latitude and longitude must be provided together, or both must be None")
        return self

    @model_validator(mode='after')
    def validate_floors(self):
        if self.floor is not None and self.total_floors is not None:
            if self.floor > self.total_floors:
                raise ValueError("Floor cannot be higher than the total number of floors")
        return self


class PropertyCreate(PropertyBase):
    """Schema for creating a new property."""

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "title": "Sunrise Apartments 2BHK",
                "description": "Spacious 2BHK with sea view",
                "category": "flats",
                "price": 7500000,
                "location": "Bandra West",
                "city": "Mumbai",
                "bedrooms": 2,
                "bathrooms": 2,
                "area": 950,
                "amenities": ["gym", "swimming pool"],
                "furnishing": "semi-furnished",
                "parking": True,
                "facing": "west",
                "floor": 7,
                "total_floors": 14
            }
        }
    )


class PropertyUpdate(BaseModel):
    """Schema for updating an existing property. Only the fields sent are changed."""

    title: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = Field(None, max_length=5000)
    category: Optional[PropertyCategoryType] = None
    sub_category_id: Optional[int] = Field(None, gt=0)
    price: Optional[Decimal] = Field(None, gt=0)
    location: Optional[str] = Field(None, min_length=1, max_length=255)
    address: Optional[str] = None
    latitude: Optional[Decimal] = Field(None, ge=-90, le=90)
    longitude: Optional[Decimal] = Field(None, ge=-180, le=180)
    city: Optional[str] = Field(None, max_length=100)
    state: Optional[str] = Field(None, max_length=100)
    pincode: Optional[str] = Field(None, max_length=12)
    bedrooms: Optional[int] = Field(None, ge=0, le=50)
    bathrooms: Optional[int] = Field(None, ge=0, le=50)
    area: Optional[Decimal] = Field(None, gt=0)
    owner_name: Optional[str] = Field(None, max_length=255)
    owner_contact: Optional[str] = Field(None, max_length=64)
    images: Optional[List[str]] = None
    amenities: Optional[List[str]] = None
    furnishing: Optional[Furnishing] = None
    parking: Optional[bool] = None
    facing: Optional[Facing] = None
    floor: Optional[int] = Field(None, ge=0)
    total_floors: Optional[int] = Field(None, ge=0)
    age: Optional[int] = Field(None, ge=0)
    status: Optional[PropertyStatus] = None

    @field_validator('title', 'category', 'price', 'location', 'parking', 'status')
    @classmethod
    def validate_not_null(cls, v, info):
        return reject_null(v, info.field_name)

    @field_validator('title', 'location')
    @classmethod
    def validate_required_text(cls, v, info):
        return clean_required_text(v, info.field_name.capitalize())

    @field_validator('images', 'amenities')
    @classmethod
    def validate_lists(cls, v):
        return clean_string_list(v)

    @field_validator('price')
    @classmethod
    def validate_price(cls, v):
        if v is not None and v > MAX_PRICE:
            raise ValueError("Price exceeds maximum allowed value")
        return v

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "price": 7200000,
                "status": "sold"
            }
        }
    )


class PropertyResponse(ORMResponse):
    """Schema for property response."""

    id: int
    title: str
    description: Optional[str] = None
    category: PropertyCategoryType
    sub_category_id: Optional[int] = None
    price: float
    location: str
    address: Optional[str] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    city: Optional[str] = None
    state: Optional[str] = None
    pincode: Optional[str] = None
    bedrooms: Optional[int] = None
    bathrooms: Optional[int] = None
    area: Optional[float] = None
    owner_name: Optional[str] = None
    owner_contact: Optional[str] = None
    images: Optional[List[str]] = None
    amenities: Optional[List[str]] = None
    furnishing: Optional[Furnishing] = None
    parking: bool
    facing: Optional[Facing] = None
    floor: Optional[int] = None
    total_floors: Optional[int] = None
    age: Optional[int] = None
    status: PropertyStatus
    created_at: UTCDateTime

    sub_category: Optional[SubCategoryResponse] = None
