"""
Database models for the Real Estate CRM API.
Includes Customer, Property, Broker, Visit, Interaction, PropertyInterest and
the property category tables.
"""

from app.models.enums import Priority, PropertyCategoryType, Furnishing
from app.models.broker import Broker, BrokerAffiliation, BrokerStatus
from app.models.customer import Customer, CustomerPurpose, CustomerStatus
from app.models.category import PropertyCategory, PropertySubCategory
from app.models.property import Property, PropertyStatus, Facing, PriceRange
from app.models.visit import Visit, VisitStatus
from app.models.interaction import (
    Interaction,
    InteractionType,
    InteractionStatus,
    ALLOWED_TRANSITIONS,
    can_transition,
)
from app.models.property_interest import PropertyInterest, InterestLevel, InterestSource

# Export all models for easy importing
__all__ = [
    "Priority",
    "PropertyCategoryType",
    "Furnishing",
    "Broker",
    "BrokerAffiliation",
    "BrokerStatus",
    "Customer",
    "CustomerPurpose",
    "CustomerStatus",
    "PropertyCategory",
    "PropertySubCategory",
    "Property",
    "PropertyStatus",
    "Facing",
    "PriceRange",
    "Visit",
    "VisitStatus",
    "Interaction",
    "InteractionType",
    "InteractionStatus",
    "ALLOWED_TRANSITIONS",
    "can_transition",
    "PropertyInterest",
    "InterestLevel",
    "InterestSource",
]
