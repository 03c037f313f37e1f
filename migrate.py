#!/usr/bin/env python3
"""
Database management script.
Creates and drops tables, seeds sample CRM data and resets the database.
"""

import asyncio
import sys
import argparse
import logging
from datetime import timedelta
from decimal import Decimal
from pathlib import Path

# Add the app directory to the Python path
sys.path.insert(0, str(Path(__file__).parent))

from sqlalchemy import select

from app.config import settings
from app.database import AsyncSessionLocal, create_tables, drop_tables, close_db_connection, utc_now
from app.models import (
    Broker,
    BrokerAffiliation,
    Customer,
    CustomerPurpose,
    Furnishing,
    Facing,
    Interaction,
    InteractionStatus,
    InteractionType,
    InterestLevel,
    InterestSource,
    Priority,
    Property,
    PropertyCategory,
    PropertyCategoryType,
    PropertyInterest,
    PropertyStatus,
    PropertySubCategory,
    Visit,
    VisitStatus,
)

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


CATEGORY_TREE = {
    "Residential": ["Apartment", "Bungalow", "Row House", "Penthouse"],
    "Commercial": ["Office Space", "Shop", "Showroom"],
    "Land": ["Residential Plot", "Agricultural Land"],
}


class MigrationManager:
    """Manages table creation and sample data for the CRM database."""

    async def create_tables(self) -> None:
        logger.info("Creating database tables")
        await create_tables()

    async def drop_tables(self) -> None:
        logger.warning("Dropping database tables")
        await drop_tables()

    async def seed_database(self) -> None:
        """Seed the database with sample customers, listings and activity."""
        logger.info("Seeding database with sample data")

        async with AsyncSessionLocal() as session:
            try:
                existing = await session.execute(
                    select(Broker).where(Broker.email == "amit.mehta@email.com")
                )
                if existing.scalar_one_or_none():
                    logger.info("Sample data already present, skipping seed")
                    return

                now = utc_now()

                sub_categories = {}
                for category_name, children in CATEGORY_TREE.items():
                    category = PropertyCategory(name=category_name)
                    session.add(category)
                    await session.flush()
                    for child in children:
                        sub_category = PropertySubCategory(category_id=category.id, name=child)
                        session.add(sub_category)
                        sub_categories[child] = sub_category
                await session.flush()

                broker = Broker(
                    name="Amit Mehta",
                    email="amit.mehta@email.com",
                    phone="+91 99887 76655",
                    address="Powai, Mumbai",
                    city="Mumbai",
                    state="Maharashtra",
                    pincode="400076",
                    affiliation=BrokerAffiliation.INTERNAL,
                    experience=8,
                    specialization=["Luxury Apartments", "Commercial Properties"],
                    territory="Western Suburbs",
                    commission_rate=Decimal("2.5"),
                    total_commission=Decimal("240000"),
                    rating=Decimal("4.5"),
                    notes="Expert in luxury properties",
                )
                session.add(broker)
                await session.flush()

                rajesh = Customer(
                    name="Rajesh Kumar",
                    email="rajesh.kumar@email.com",
                    phone="+91 98765 43210",
                    address="Andheri West, Mumbai",
                    city="Mumbai",
                    state="Maharashtra",
                    pincode="400058",
                    occupation="Software Engineer",
                    priority=Priority.MEDIUM,
                    purpose=CustomerPurpose.BUY,
                    budget_min=Decimal("8000000"),
                    budget_max=Decimal("12000000"),
                    property_type=PropertyCategoryType.FLATS,
                    preferred_locations=["Andheri", "Bandra", "Juhu"],
                    bedrooms=3,
                    parking=True,
                    assigned_broker_id=broker.id,
                    notes="Looking for properties in Andheri area",
                    last_interaction_date=now - timedelta(days=1),
                )
                priya = Customer(
                    name="Priya Sharma",
                    email="priya.sharma@email.com",
                    phone="+91 87654 32109",
                    alternate_phone="+91 22345 67890",
                    address="Bandra East, Mumbai",
                    city="Mumbai",
                    state="Maharashtra",
                    pincode="400051",
                    occupation="Business Owner",
                    priority=Priority.HIGH,
                    purpose=CustomerPurpose.BUY,
                    budget_min=Decimal("15000000"),
                    budget_max=Decimal("20000000"),
                    property_type=PropertyCategoryType.BUNGALOW,
                    preferred_locations=["Bandra", "Khar", "Santacruz"],
                    parking=True,
                    amenities=["Garden"],
                    assigned_broker_id=broker.id,
                    notes="Prefers properties with garden space",
                    last_interaction_date=now - timedelta(days=2),
                )
                session.add_all([rajesh, priya])

                sunrise = Property(
                    title="Sunrise Apartments",
                    description="Modern residential complex with swimming pool and landscaped gardens",
                    category=PropertyCategoryType.FLATS,
                    sub_category_id=sub_categories["Apartment"].id,
                    price=Decimal("8500000"),
                    location="Andheri West, Mumbai",
                    address="Plot No. 123, Andheri West, Mumbai - 400058",
                    latitude=Decimal("19.1359"),
                    longitude=Decimal("72.8267"),
                    city="Mumbai",
                    state="Maharashtra",
                    pincode="400058",
                    bedrooms=3,
                    bathrooms=2,
                    area=Decimal("1200"),
                    owner_name="Sharma Builders",
                    owner_contact="+91 99887 76655",
                    images=[],
                    amenities=["Swimming Pool", "Gym", "Garden", "Parking"],
                    furnishing=Furnishing.SEMI_FURNISHED,
                    parking=True,
                    facing=Facing.EAST,
                    floor=5,
                    total_floors=12,
                    age=3,
                    status=PropertyStatus.AVAILABLE,
                )
                green_valley = Property(
                    title="Green Valley Bungalow",
                    description="Elegant single-family home with large windows and modern architecture",
                    category=PropertyCategoryType.BUNGALOW,
                    sub_category_id=sub_categories["Bungalow"].id,
                    price=Decimal("12000000"),
                    location="Bandra, Mumbai",
                    address="Bungalow No. 45, Bandra West, Mumbai - 400050",
                    latitude=Decimal("19.0596"),
                    longitude=Decimal("72.8295"),
                    city="Mumbai",
                    state="Maharashtra",
                    pincode="400050",
                    bedrooms=4,
                    bathrooms=3,
                    area=Decimal("2500"),
                    owner_name="Ravi Patel",
                    owner_contact="+91 88776 65544",
                    images=[],
                    amenities=["Garden", "Terrace", "Parking", "Security"],
                    furnishing=Furnishing.FURNISHED,
                    parking=True,
                    facing=Facing.NORTH,
                    age=5,
                    status=PropertyStatus.AVAILABLE,
                )
                session.add_all([sunrise, green_valley])
                await session.flush()

                session.add(Visit(
                    customer_id=rajesh.id,
                    property_id=sunrise.id,
                    broker_id=broker.id,
                    visit_date=now - timedelta(days=3),
                    feedback="Very impressed with the amenities and location. Considering making an offer.",
                    rating=5,
                    notes="Customer showed high interest",
                    status=VisitStatus.COMPLETED,
                ))

                sharing = Interaction(
                    customer_id=rajesh.id,
                    broker_id=broker.id,
                    property_id=sunrise.id,
                    type=InteractionType.DIGITAL_SHARING,
                    title="Shared Sunrise Apartments brochure",
                    description="Shared property details and virtual tour link",
                    shared_properties=[sunrise.id],
                    customer_feedback="Very interested, wants to schedule visit",
                    next_follow_up_date=now + timedelta(days=2),
                    priority=Priority.HIGH,
                    status=InteractionStatus.COMPLETED,
                    completed_date=now - timedelta(days=1),
                    notes="Customer loved the amenities and location",
                    created_at=now - timedelta(days=1),
                    updated_at=now - timedelta(days=1),
                )
                follow_up = Interaction(
                    customer_id=priya.id,
                    broker_id=broker.id,
                    type=InteractionType.FOLLOW_UP,
                    title="Requirement follow-up call",
                    description="Follow-up call to understand requirements better",
                    customer_feedback="Considering multiple options",
                    next_follow_up_date=now + timedelta(days=3),
                    priority=Priority.MEDIUM,
                    status=InteractionStatus.IN_PROGRESS,
                    notes="Needs properties with garden space",
                    created_at=now - timedelta(days=2),
                    updated_at=now - timedelta(days=2),
                )
                session.add_all([sharing, follow_up])
                await session.flush()

                session.add(PropertyInterest(
                    customer_id=rajesh.id,
                    property_id=sunrise.id,
                    interest_level=InterestLevel.HIGH,
                    source=InterestSource.DIGITAL_SHARING,
                    interaction_id=sharing.id,
                    notes="Primary choice for the customer",
                ))

                await session.commit()

                logger.info("Database seeded successfully")
                logger.info(f"  Categories: {len(CATEGORY_TREE)}, subcategories: {len(sub_categories)}")
                logger.info("  Customers: 2, properties: 2, brokers: 1, visits: 1, interactions: 2, interests: 1")

            except Exception as e:
                await session.rollback()
                logger.error(f"Failed to seed database: {e}")
                raise

    async def reset_database(self) -> None:
        """Reset the database by dropping, recreating and seeding all tables."""
        logger.warning("Resetting database - all data will be lost!")

        if not settings.is_testing and not settings.is_development:
            raise RuntimeError("Database reset is only allowed in development or test mode")

        await drop_tables()
        await create_tables()
        await self.seed_database()

        logger.info("Database reset completed")


async def _run(coro) -> None:
    try:
        await coro
    finally:
        await close_db_connection()


def main():
    """Main CLI interface for database management."""
    parser = argparse.ArgumentParser(description="Real Estate CRM database management")
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    subparsers.add_parser("create-tables", help="Create all tables")
    subparsers.add_parser("drop-tables", help="Drop all tables (development/testing only)")
    subparsers.add_parser("seed", help="Seed database with sample data")

    reset_parser = subparsers.add_parser("reset", help="Drop, recreate and seed (development only)")
    reset_parser.add_argument("--confirm", action="store_true", help="Confirm database reset")

    args = parser.parse_args()

    if not args.command:
        parser.print_help()
        return

    manager = MigrationManager()

    try:
        if args.command == "create-tables":
            asyncio.run(_run(manager.create_tables()))

        elif args.command == "drop-tables":
            asyncio.run(_run(manager.drop_tables()))

        elif args.command == "seed":
            asyncio.run(_run(manager.seed_database()))

        elif args.command == "reset":
            if not args.confirm:
                print("Database reset requires --confirm flag")
                return
            asyncio.run(_run(manager.reset_database()))

    except Exception as e:
        logger.error(f"Command failed: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
