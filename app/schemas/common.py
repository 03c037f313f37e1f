"""
Shared schema building blocks.
"""

from pydantic import BaseModel, ConfigDict, AfterValidator
from typing import Annotated, Optional
from datetime import datetime
from app.database import as_utc


# Naive datetimes are taken to be UTC; aware ones are converted to UTC.
UTCDateTime = Annotated[datetime, AfterValidator(as_utc)]


class ORMResponse(BaseModel):
    """Base for response schemas built from ORM objects."""

    model_config = ConfigDict(from_attributes=True)


def clean_required_text(value: Optional[str], label: str) -> Optional[str]:
    """Strip a text field that must not be blank when given."""
    if value is None:
        return value
    value = value.strip()
    if not value:
        raise ValueError(f"{label} cannot be empty")
    return value


def clean_optional_text(value: Optional[str]) -> Optional[str]:
    """Strip a free-text field, turning blank input into None."""
    if value is None:
        return value
    value = value.strip()
    return value or None


def clean_string_list(values):
    """Strip list entries and drop blanks and duplicates, keeping order."""
    if values is None:
        return values
    cleaned = []
    for item in values:
        item = item.strip()
        if item and item not in cleaned:
            cleaned.append(item)
    return cleaned


def reject_null(value, field_name: str):
    """Partial updates may omit a required field but may not null it."""
    if value is None:
        raise ValueError(f"{field_name} cannot be null")
    return value
