"""
Enumerations shared by several CRM models.
"""

import enum


class Priority(str, enum.Enum):
    """Priority scale for customers and interactions."""
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class PropertyCategoryType(str, enum.Enum):
    """Top-level kind of real-estate asset."""
    FLATS = "flats"
    TENEMENT = "tenement"
    BUNGALOW = "bungalow"
    LAND = "land"


class Furnishing(str, enum.Enum):
    """Furnishing level of a property or a customer's requirement."""
    FURNISHED = "furnished"
    SEMI_FURNISHED = "semi-furnished"
    UNFURNISHED = "unfurnished"
