"""
Pydantic schemas for property categories and subcategories.
"""

from pydantic import BaseModel, Field, field_validator
from typing import Optional
from app.schemas.common import ORMResponse, UTCDateTime, clean_required_text, clean_optional_text


class CategoryCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=100, examples=["Residential"])
    description: Optional[str] = None

    @field_validator('name')
    @classmethod
    def validate_name(cls, v):
        return clean_required_text(v, "Name")

    @field_validator('description')
    @classmethod
    def validate_description(cls, v):
        return clean_optional_text(v)


class SubCategoryCreate(CategoryCreate):
    """Subcategory payload; the parent comes from the path."""


class CategoryResponse(ORMResponse):
    id: int
    name: str
    description: Optional[str] = None
    created_at: UTCDateTime


class SubCategoryResponse(ORMResponse):
    """Subcategory with its parent category."""

    id: int
    category_id: int
    name: str
    description: Optional[str] = None
    created_at: UTCDateTime
    category: Optional[CategoryResponse] = None
