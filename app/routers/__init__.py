"""
API route handlers for the Real Estate CRM API.
One router per resource.
"""

from .customers import router as customers_router
from .properties import router as properties_router
from .brokers import router as brokers_router
from .visits import router as visits_router
from .interactions import router as interactions_router
from .property_interests import router as property_interests_router
from .categories import router as categories_router
from .dashboard import router as dashboard_router

__all__ = [
    "customers_router",
    "properties_router",
    "brokers_router",
    "visits_router",
    "interactions_router",
    "property_interests_router",
    "categories_router",
    "dashboard_router",
]
