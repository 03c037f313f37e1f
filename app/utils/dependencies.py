"""
FastAPI dependency injection utilities.
Each provider builds a service bound to the request's database session.
"""

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession
from app.database import get_db
from app.services.customer import CustomerService
from app.services.property import PropertyService
from app.services.broker import BrokerService
from app.services.visit import VisitService
from app.services.interaction import InteractionService
from app.services.property_interest import PropertyInterestService
from app.services.category import CategoryService
from app.services.dashboard import DashboardService


async def get_customer_service(db: AsyncSession = Depends(get_db)) -> CustomerService:
    """
    Get customer service instance.

    Args:
        db: Database session

    Returns:
        CustomerService instance
    """
    return CustomerService(db)


async def get_property_service(db: AsyncSession = Depends(get_db)) -> PropertyService:
    """
    Get property service instance.

    Args:
        db: Database session

    Returns:
        PropertyService instance
    """
    return PropertyService(db)


async def get_broker_service(db: AsyncSession = Depends(get_db)) -> BrokerService:
    return BrokerService(db)


async def get_visit_service(db: AsyncSession = Depends(get_db)) -> VisitService:
    return VisitService(db)


async def get_interaction_service(db: AsyncSession = Depends(get_db)) -> InteractionService:
    return InteractionService(db)


async def get_property_interest_service(db: AsyncSession = Depends(get_db)) -> PropertyInterestService:
    return PropertyInterestService(db)


async def get_category_service(db: AsyncSession = Depends(get_db)) -> CategoryService:
    return CategoryService(db)


async def get_dashboard_service(db: AsyncSession = Depends(get_db)) -> DashboardService:
    return DashboardService(db)
