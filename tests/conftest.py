"""
Test configuration and fixtures for the Real Estate CRM API.
Provides database fixtures, test data factories, and common test utilities.
"""

import os

os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("ENVIRONMENT", "testing")

import uuid
from datetime import datetime
from decimal import Decimal
from typing import AsyncGenerator, List, Optional

import pytest
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine, async_sessionmaker
from sqlalchemy.pool import StaticPool

from app.main import app
from app.database import Base, get_db, create_tables, enable_sqlite_foreign_keys
from app.models import (
    Broker,
    Customer,
    Interaction,
    InteractionStatus,
    InteractionType,
    Priority,
    Property,
    PropertyCategoryType,
    PropertyStatus,
)
from app.repositories.broker import BrokerRepository
from app.repositories.customer import CustomerRepository
from app.repositories.interaction import InteractionRepository
from app.repositories.property import PropertyRepository


TEST_DATABASE_URL = "sqlite+aiosqlite://"


@pytest.fixture
async def test_engine():
    """In-memory SQLite engine shared by every session of a test."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        echo=False,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False}
    )
    enable_sqlite_foreign_keys(engine)
    await create_tables(engine)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
def session_factory(test_engine):
    return async_sessionmaker(bind=test_engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
async def db_session(session_factory) -> AsyncGenerator[AsyncSession, None]:
    """Create a test database session."""
    async with session_factory() as session:
        try:
            yield session
        finally:
            await session.close()


@pytest.fixture
async def async_client(session_factory) -> AsyncGenerator[AsyncClient, None]:
    """Create an async test client; each request gets its own session on the test database."""
    async def override_get_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client

    app.dependency_overrides.clear()


# Repository fixtures
@pytest.fixture
def customer_repository(db_session: AsyncSession) -> CustomerRepository:
    return CustomerRepository(db_session)


@pytest.fixture
def property_repository(db_session: AsyncSession) -> PropertyRepository:
    return PropertyRepository(db_session)


@pytest.fixture
def broker_repository(db_session: AsyncSession) -> BrokerRepository:
    return BrokerRepository(db_session)


@pytest.fixture
def interaction_repository(db_session: AsyncSession) -> InteractionRepository:
    return InteractionRepository(db_session)


# Test data factories
class BrokerFactory:
    """Factory for creating test brokers."""

    @staticmethod
    def create_broker_data(name: str = "Amit Mehta", email: Optional[str] = None, **overrides) -> dict:
        data = {
            "name": name,
            "email": email or f"broker{uuid.uuid4().hex[:8]}@example.com",
            "phone": "+91 99887 76655",
            "city": "Mumbai",
        }
        data.update(overrides)
        return data

    @staticmethod
    async def create_broker(broker_repo: BrokerRepository, **kwargs) -> Broker:
        return await broker_repo.create(BrokerFactory.create_broker_data(**kwargs))


class CustomerFactory:
    """Factory for creating test customers."""

    @staticmethod
    def create_customer_data(
        name: str = "Rajesh Kumar",
        email: Optional[str] = None,
        phone: str = "+91 98765 43210",
        **overrides
    ) -> dict:
        """Create customer data dictionary."""
        data = {
            "name": name,
            "email": email or f"customer{uuid.uuid4().hex[:8]}@example.com",
            "phone": phone,
            "city": "Mumbai",
        }
        data.update(overrides)
        return data

    @staticmethod
    async def create_customer(customer_repo: CustomerRepository, **kwargs) -> Customer:
        return await customer_repo.create(CustomerFactory.create_customer_data(**kwargs))


class PropertyFactory:
    """Factory for creating test properties."""

    @staticmethod
    def create_property_data(
        title: str = "Sunrise Apartments",
        category: PropertyCategoryType = PropertyCategoryType.FLATS,
        price: Decimal = Decimal("8500000"),
        location: str = "Andheri West",
        city: Optional[str] = "Mumbai",
        bedrooms: Optional[int] = 3,
        status: PropertyStatus = PropertyStatus.AVAILABLE,
        **overrides
    ) -> dict:
        """Create property data dictionary."""
        data = {
            "title": title,
            "category": category,
            "price": price,
            "location": location,
            "city": city,
            "bedrooms": bedrooms,
            "status": status,
        }
        data.update(overrides)
        return data

    @staticmethod
    async def create_property(property_repo: PropertyRepository, **kwargs) -> Property:
        """Create a test property in the database."""
        return await property_repo.create(PropertyFactory.create_property_data(**kwargs))


class InteractionFactory:
    """Factory for creating test interactions."""

    @staticmethod
    def create_interaction_data(
        customer_id: int,
        broker_id: int,
        type: InteractionType = InteractionType.FOLLOW_UP,
        title: str = "Follow-up call",
        status: InteractionStatus = InteractionStatus.PENDING,
        priority: Priority = Priority.MEDIUM,
        updated_at: Optional[datetime] = None,
        shared_properties: Optional[List[int]] = None,
        **overrides
    ) -> dict:
        data = {
            "customer_id": customer_id,
            "broker_id": broker_id,
            "type": type,
            "title": title,
            "status": status,
            "priority": priority,
            "shared_properties": shared_properties,
        }
        if updated_at is not None:
            data["updated_at"] = updated_at
        data.update(overrides)
        return data

    @staticmethod
    async def create_interaction(interaction_repo: InteractionRepository, **kwargs) -> Interaction:
        return await interaction_repo.create(InteractionFactory.create_interaction_data(**kwargs))


# Common test fixtures
@pytest.fixture
async def test_broker(broker_repository: BrokerRepository) -> Broker:
    return await BrokerFactory.create_broker(broker_repository, email="amit.mehta@example.com")


@pytest.fixture
async def test_customer(customer_repository: CustomerRepository, test_broker: Broker) -> Customer:
    return await CustomerFactory.create_customer(
        customer_repository,
        email="rajesh.kumar@example.com",
        assigned_broker_id=test_broker.id
    )


@pytest.fixture
async def test_property(property_repository: PropertyRepository) -> Property:
    return await PropertyFactory.create_property(property_repository)


@pytest.fixture
async def test_interaction(
    interaction_repository: InteractionRepository,
    test_customer: Customer,
    test_broker: Broker
) -> Interaction:
    return await InteractionFactory.create_interaction(
        interaction_repository,
        customer_id=test_customer.id,
        broker_id=test_broker.id
    )


# Utility functions for tests
def assert_error_response(response, status_code: int, error_code: str):
    """Assert that a response carries the structured error envelope."""
    assert response.status_code == status_code
    body = response.json()
    assert "error" in body
    assert body["error"]["code"] == error_code
    assert body["error"]["message"]
    assert body["error"]["request_id"]
    assert body["error"]["timestamp"]
    return body["error"]
