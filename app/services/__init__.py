"""
Service layer for business logic implementation.
Contains one service per CRM resource plus error handling.
"""

from .customer import CustomerService
from .property import PropertyService
from .broker import BrokerService
from .visit import VisitService
from .interaction import InteractionService
from .property_interest import PropertyInterestService
from .category import CategoryService
from .dashboard import DashboardService
from .error_handler import ErrorHandlerService

__all__ = [
    "CustomerService",
    "PropertyService",
    "BrokerService",
    "VisitService",
    "InteractionService",
    "PropertyInterestService",
    "CategoryService",
    "DashboardService",
    "ErrorHandlerService"
]
