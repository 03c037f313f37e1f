"""
Repository layer for data access operations.
Wraps async SQLAlchemy queries with logging and consistent error handling.
"""

from app.repositories.base import BaseRepository
from app.repositories.customer import CustomerRepository
from app.repositories.property import PropertyRepository, PropertySearchFilters
from app.repositories.broker import BrokerRepository
from app.repositories.visit import VisitRepository
from app.repositories.interaction import InteractionRepository
from app.repositories.property_interest import PropertyInterestRepository
from app.repositories.category import CategoryRepository, SubCategoryRepository
from app.repositories.dashboard import DashboardRepository

__all__ = [
    "BaseRepository",
    "CustomerRepository",
    "PropertyRepository",
    "PropertySearchFilters",
    "BrokerRepository",
    "VisitRepository",
    "InteractionRepository",
    "PropertyInterestRepository",
    "CategoryRepository",
    "SubCategoryRepository",
    "DashboardRepository",
]
