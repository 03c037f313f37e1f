"""
Tests for service layer business logic.
Covers reference checks, duplicate detection, partial update validation and
the interaction lifecycle.
"""

import pytest
from datetime import datetime, timedelta, timezone
from decimal import Decimal

from app.database import utc_now, as_utc
from app.models import InteractionStatus, InteractionType, InterestLevel, PropertyStatus
from app.repositories.property import PropertySearchFilters
from app.schemas.category import CategoryCreate, SubCategoryCreate
from app.schemas.customer import CustomerCreate, CustomerUpdate
from app.schemas.broker import BrokerCreate, BrokerUpdate
from app.schemas.interaction import InteractionCreate, InteractionUpdate
from app.schemas.property import PropertyUpdate
from app.schemas.property_interest import PropertyInterestCreate
from app.schemas.visit import VisitCreate, VisitUpdate
from app.services.broker import BrokerService, start_of_month
from app.services.category import CategoryService
from app.services.customer import CustomerService
from app.services.dashboard import DashboardService
from app.services.interaction import InteractionService
from app.services.property import PropertyService
from app.services.property_interest import PropertyInterestService
from app.services.visit import VisitService
from app.utils.exceptions import (
    CustomerNotFoundError,
    DuplicateResourceError,
    InteractionNotFoundError,
    InvalidStatusTransitionError,
    MissingReferenceError,
    NotFoundError,
    PropertyNotFoundError,
    ValidationError,
)
from tests.conftest import CustomerFactory, PropertyFactory, InteractionFactory


class TestCustomerService:
    """Test customer business logic."""

    @pytest.fixture
    def service(self, db_session):
        return CustomerService(db_session)

    @pytest.mark.asyncio
    async def test_create_customer(self, service, test_broker):
        customer = await service.create_customer(CustomerCreate(
            name="  Priya Sharma ",
            email="Priya.Sharma@Example.com",
            phone="+91 87654 32109",
            assigned_broker_id=test_broker.id
        ))

        assert customer.id is not None
        assert customer.name == "Priya Sharma"
        assert customer.email == "priya.sharma@example.com"
        assert customer.assigned_broker.name == test_broker.name

    @pytest.mark.asyncio
    async def test_duplicate_email_rejected(self, service, test_customer):
        with pytest.raises(DuplicateResourceError):
            await service.create_customer(CustomerCreate(
                name="Someone Else",
                email="RAJESH.KUMAR@example.com",
                phone="1"
            ))

    @pytest.mark.asyncio
    async def test_unknown_broker_rejected(self, service):
        with pytest.raises(MissingReferenceError) as exc_info:
            await service.create_customer(CustomerCreate(
                name="Priya Sharma",
                email="priya@example.com",
                phone="1",
                assigned_broker_id=999
            ))
        assert exc_info.value.status_code == 422
        assert exc_info.value.field_errors[0]["field"] == "assigned_broker_id"

    @pytest.mark.asyncio
    async def test_get_missing_customer(self, service):
        with pytest.raises(CustomerNotFoundError):
            await service.get_customer(999)

    @pytest.mark.asyncio
    async def test_update_checks_merged_budget(self, service, customer_repository):
        customer = await CustomerFactory.create_customer(
            customer_repository, budget_min=Decimal("5000000"), budget_max=Decimal("8000000")
        )

        with pytest.raises(ValidationError, match="Minimum budget"):
            await service.update_customer(customer.id, CustomerUpdate(budget_min=Decimal("9000000")))

        updated = await service.update_customer(customer.id, CustomerUpdate(budget_max=Decimal("9500000")))
        assert updated.budget_max == Decimal("9500000")

    @pytest.mark.asyncio
    async def test_update_email_conflict(self, service, customer_repository, test_customer):
        other = await CustomerFactory.create_customer(customer_repository, email="priya@example.com")

        with pytest.raises(DuplicateResourceError):
            await service.update_customer(other.id, CustomerUpdate(email=test_customer.email))

        # Keeping one's own email is not a conflict
        updated = await service.update_customer(test_customer.id, CustomerUpdate(email=test_customer.email))
        assert updated.email == test_customer.email

    @pytest.mark.asyncio
    async def test_update_can_unassign_broker(self, service, test_customer):
        updated = await service.update_customer(test_customer.id, CustomerUpdate(assigned_broker_id=None))
        assert updated.assigned_broker_id is None

    @pytest.mark.asyncio
    async def test_delete_customer(self, service, test_customer):
        await service.delete_customer(test_customer.id)

        with pytest.raises(CustomerNotFoundError):
            await service.delete_customer(test_customer.id)

    @pytest.mark.asyncio
    async def test_customer_details(
        self, service, db_session, interaction_repository, test_customer, test_broker, test_property
    ):
        for i in range(7):
            await InteractionFactory.create_interaction(
                interaction_repository, customer_id=test_customer.id, broker_id=test_broker.id, title=f"Call {i}"
            )
        await PropertyInterestService(db_session).create_interest(PropertyInterestCreate(
            customer_id=test_customer.id,
            property_id=test_property.id,
            interest_level=InterestLevel.HIGH
        ))

        customer, recent, interests = await service.get_customer_details(test_customer.id)

        assert customer.id == test_customer.id
        assert len(recent) == 5
        assert recent[0].title == "Call 6"
        assert [i.property_id for i in interests] == [test_property.id]


class TestBrokerService:

    @pytest.fixture
    def service(self, db_session):
        return BrokerService(db_session)

    @pytest.mark.asyncio
    async def test_create_and_duplicate(self, service):
        broker = await service.create_broker(BrokerCreate(
            name="Sunita Rao",
            email="sunita@example.com",
            phone="+91 90000 11111",
            commission_rate=Decimal("2.0")
        ))
        assert broker.commission_rate == Decimal("2.0")

        with pytest.raises(DuplicateResourceError):
            await service.create_broker(BrokerCreate(name="Other", email="SUNITA@example.com", phone="1"))

    @pytest.mark.asyncio
    async def test_update_broker(self, service, test_broker):
        updated = await service.update_broker(test_broker.id, BrokerUpdate(territory="Western Suburbs"))
        assert updated.territory == "Western Suburbs"

    @pytest.mark.asyncio
    async def test_stats(self, service, interaction_repository, test_customer, test_broker):
        now = utc_now()
        await InteractionFactory.create_interaction(
            interaction_repository,
            customer_id=test_customer.id,
            broker_id=test_broker.id,
            status=InteractionStatus.COMPLETED,
            completed_date=now
        )
        await InteractionFactory.create_interaction(
            interaction_repository,
            customer_id=test_customer.id,
            broker_id=test_broker.id,
            status=InteractionStatus.COMPLETED,
            completed_date=start_of_month(now) - timedelta(days=1)
        )
        await InteractionFactory.create_interaction(
            interaction_repository, customer_id=test_customer.id, broker_id=test_broker.id
        )

        broker, customers, recent, monthly_deals = await service.get_broker_stats(test_broker.id)

        assert broker.id == test_broker.id
        assert [c.id for c in customers] == [test_customer.id]
        assert len(recent) == 3
        assert monthly_deals == 1

    def test_start_of_month(self):
        assert start_of_month(datetime(2024, 3, 17, 15, 45, 12, tzinfo=timezone.utc)) == datetime(
            2024, 3, 1, tzinfo=timezone.utc
        )


class TestPropertyService:

    @pytest.fixture
    def service(self, db_session):
        return PropertyService(db_session)

    @pytest.mark.asyncio
    async def test_inverted_price_filter_rejected(self, service):
        with pytest.raises(ValidationError):
            await service.search_properties(
                PropertySearchFilters(min_price=Decimal("9000000"), max_price=Decimal("1000000"))
            )

    @pytest.mark.asyncio
    async def test_update_checks_merged_floors(self, service, property_repository):
        prop = await PropertyFactory.create_property(property_repository, floor=5, total_floors=10)

        with pytest.raises(ValidationError, match="Floor"):
            await service.update_property(prop.id, PropertyUpdate(floor=12))

    @pytest.mark.asyncio
    async def test_update_requires_both_coordinates(self, service, test_property):
        with pytest.raises(ValidationError, match="latitude and longitude"):
            await service.update_property(test_property.id, PropertyUpdate(latitude=Decimal("19.13")))

    @pytest.mark.asyncio
    async def test_update_status(self, service, test_property):
        updated = await service.update_property(test_property.id, PropertyUpdate(status=PropertyStatus.SOLD))
        assert updated.status == PropertyStatus.SOLD

    @pytest.mark.asyncio
    async def test_unknown_subcategory_rejected(self, service, test_property):
        with pytest.raises(MissingReferenceError):
            await service.update_property(test_property.id, PropertyUpdate(sub_category_id=999))

    @pytest.mark.asyncio
    async def test_delete_missing(self, service):
        with pytest.raises(PropertyNotFoundError):
            await service.delete_property(999)


class TestVisitService:

    @pytest.fixture
    def service(self, db_session):
        return VisitService(db_session)

    @pytest.mark.asyncio
    async def test_create_and_update_visit(self, service, test_customer, test_property, test_broker):
        visit = await service.create_visit(VisitCreate(
            customer_id=test_customer.id,
            property_id=test_property.id,
            broker_id=test_broker.id,
            visit_date=utc_now(),
            rating=4
        ))
        assert visit.customer.id == test_customer.id
        assert visit.property.title == test_property.title

        updated = await service.update_visit(visit.id, VisitUpdate(feedback="Liked the view", rating=5))
        assert updated.rating == 5
        assert updated.feedback == "Liked the view"

    @pytest.mark.asyncio
    async def test_unknown_property_rejected(self, service, test_customer):
        with pytest.raises(MissingReferenceError):
            await service.create_visit(VisitCreate(
                customer_id=test_customer.id,
                property_id=999,
                visit_date=utc_now()
            ))


class TestInteractionService:
    """Test the interaction lifecycle and overdue handling."""

    @pytest.fixture
    def service(self, db_session):
        return InteractionService(db_session)

    @pytest.mark.asyncio
    async def test_create_updates_last_interaction_date(self, service, customer_repository, test_customer, test_broker):
        assert test_customer.last_interaction_date is None

        interaction = await service.create_interaction(InteractionCreate(
            customer_id=test_customer.id,
            broker_id=test_broker.id,
            type=InteractionType.FOLLOW_UP,
            title="Introductory call"
        ))

        assert interaction.status == InteractionStatus.PENDING
        customer = await customer_repository.get_by_id(test_customer.id, load_relationships=True)
        assert as_utc(customer.last_interaction_date) == as_utc(interaction.created_at)

    @pytest.mark.asyncio
    async def test_create_completed_stamps_completed_date(self, service, test_customer, test_broker):
        interaction = await service.create_interaction(InteractionCreate(
            customer_id=test_customer.id,
            broker_id=test_broker.id,
            type=InteractionType.FOLLOW_UP,
            title="Closed on the call",
            status=InteractionStatus.COMPLETED
        ))
        assert interaction.completed_date is not None

    @pytest.mark.asyncio
    async def test_unknown_shared_property_rejected(self, service, test_customer, test_broker, test_property):
        with pytest.raises(MissingReferenceError) as exc_info:
            await service.create_interaction(InteractionCreate(
                customer_id=test_customer.id,
                broker_id=test_broker.id,
                type=InteractionType.DIGITAL_SHARING,
                title="Shared listings",
                shared_properties=[test_property.id, 999]
            ))
        assert exc_info.value.field_errors[0]["input"] == [999]

    @pytest.mark.asyncio
    async def test_unknown_customer_rejected(self, service, test_broker):
        with pytest.raises(MissingReferenceError):
            await service.create_interaction(InteractionCreate(
                customer_id=999,
                broker_id=test_broker.id,
                type=InteractionType.FOLLOW_UP,
                title="Call"
            ))

    @pytest.mark.asyncio
    async def test_full_lifecycle(self, service, test_interaction):
        started = await service.start_interaction(test_interaction.id)
        assert started.status == InteractionStatus.IN_PROGRESS

        paused = await service.pause_interaction(test_interaction.id, "Customer travelling")
        assert paused.status == InteractionStatus.PAUSED
        assert paused.pause_reason == "Customer travelling"

        resumed = await service.resume_interaction(test_interaction.id)
        assert resumed.status == InteractionStatus.IN_PROGRESS
        assert resumed.pause_reason is None

        completed = await service.complete_interaction(test_interaction.id)
        assert completed.status == InteractionStatus.COMPLETED
        assert completed.completed_date is not None

    @pytest.mark.asyncio
    async def test_end_records_reason(self, service, test_interaction):
        ended = await service.end_interaction(test_interaction.id, "Bought elsewhere")
        assert ended.status == InteractionStatus.ENDED
        assert ended.end_reason == "Bought elsewhere"

    @pytest.mark.asyncio
    async def test_resume_requires_paused(self, service, test_interaction):
        with pytest.raises(InvalidStatusTransitionError) as exc_info:
            await service.resume_interaction(test_interaction.id)
        assert exc_info.value.status_code == 409
        assert exc_info.value.error_code == "INVALID_STATUS_TRANSITION"

    @pytest.mark.asyncio
    async def test_start_requires_pending(self, service, test_interaction):
        await service.pause_interaction(test_interaction.id, "On hold")

        with pytest.raises(InvalidStatusTransitionError) as exc_info:
            await service.start_interaction(test_interaction.id)
        assert exc_info.value.status_code == 409

        unchanged = await service.get_interaction(test_interaction.id)
        assert unchanged.status == InteractionStatus.PAUSED
        assert unchanged.pause_reason == "On hold"

    @pytest.mark.asyncio
    async def test_terminal_statuses_are_final(self, service, test_interaction):
        await service.complete_interaction(test_interaction.id)

        with pytest.raises(InvalidStatusTransitionError):
            await service.start_interaction(test_interaction.id)
        with pytest.raises(InvalidStatusTransitionError):
            await service.end_interaction(test_interaction.id, "Too late")

    @pytest.mark.asyncio
    async def test_complete_from_paused_rejected(self, service, test_interaction):
        await service.pause_interaction(test_interaction.id, "On hold")

        with pytest.raises(InvalidStatusTransitionError):
            await service.complete_interaction(test_interaction.id)

    @pytest.mark.asyncio
    async def test_transition_refreshes_updated_at(self, service, interaction_repository, test_customer, test_broker):
        stale = await InteractionFactory.create_interaction(
            interaction_repository,
            customer_id=test_customer.id,
            broker_id=test_broker.id,
            updated_at=utc_now() - timedelta(days=30)
        )
        assert stale.check_overdue(20)

        started = await service.start_interaction(stale.id)
        assert not started.check_overdue(20)

    @pytest.mark.asyncio
    async def test_update_with_same_status_is_noop(self, service, test_interaction):
        updated = await service.update_interaction(
            test_interaction.id, InteractionUpdate(status=InteractionStatus.PENDING, notes="Called twice")
        )
        assert updated.status == InteractionStatus.PENDING
        assert updated.notes == "Called twice"

    @pytest.mark.asyncio
    async def test_update_status_follows_lifecycle(self, service, test_interaction):
        await service.update_interaction(test_interaction.id, InteractionUpdate(status=InteractionStatus.IN_PROGRESS))

        with pytest.raises(InvalidStatusTransitionError):
            await service.update_interaction(test_interaction.id, InteractionUpdate(status=InteractionStatus.PENDING))

        completed = await service.update_interaction(
            test_interaction.id, InteractionUpdate(status=InteractionStatus.COMPLETED)
        )
        assert completed.completed_date is not None

    @pytest.mark.asyncio
    async def test_update_checks_merged_type_rules(self, service, test_interaction):
        with pytest.raises(ValidationError, match="property_id"):
            await service.update_interaction(
                test_interaction.id, InteractionUpdate(type=InteractionType.PROPERTY_VISIT)
            )

    @pytest.mark.asyncio
    async def test_overdue_listing(self, service, interaction_repository, test_customer, test_broker):
        now = utc_now()
        overdue = await InteractionFactory.create_interaction(
            interaction_repository,
            customer_id=test_customer.id,
            broker_id=test_broker.id,
            title="Forgotten",
            updated_at=now - timedelta(days=service.overdue_after_days + 1)
        )
        await InteractionFactory.create_interaction(
            interaction_repository, customer_id=test_customer.id, broker_id=test_broker.id, title="Current"
        )

        assert [i.id for i in await service.get_overdue_interactions()] == [overdue.id]
        assert [i.id for i in await service.list_interactions(overdue=True)] == [overdue.id]
        assert [i.title for i in await service.list_interactions(overdue=False)] == ["Current"]
        assert len(await service.list_interactions()) == 2

    @pytest.mark.asyncio
    async def test_missing_interaction(self, service):
        with pytest.raises(InteractionNotFoundError):
            await service.start_interaction(999)
        with pytest.raises(InteractionNotFoundError):
            await service.delete_interaction(999)


class TestPropertyInterestService:

    @pytest.fixture
    def service(self, db_session):
        return PropertyInterestService(db_session)

    @pytest.mark.asyncio
    async def test_one_interest_per_pair(self, service, test_customer, test_property):
        payload = PropertyInterestCreate(
            customer_id=test_customer.id,
            property_id=test_property.id,
            interest_level=InterestLevel.MEDIUM
        )
        interest = await service.create_interest(payload)
        assert interest.property.id == test_property.id

        with pytest.raises(DuplicateResourceError):
            await service.create_interest(payload)

    @pytest.mark.asyncio
    async def test_unknown_interaction_rejected(self, service, test_customer, test_property):
        with pytest.raises(MissingReferenceError):
            await service.create_interest(PropertyInterestCreate(
                customer_id=test_customer.id,
                property_id=test_property.id,
                interest_level=InterestLevel.LOW,
                interaction_id=999
            ))

    @pytest.mark.asyncio
    async def test_delete_by_pair(self, service, test_customer, test_property):
        await service.create_interest(PropertyInterestCreate(
            customer_id=test_customer.id,
            property_id=test_property.id,
            interest_level=InterestLevel.REJECTED
        ))

        await service.delete_interest(test_customer.id, test_property.id)
        assert await service.list_interests(customer_id=test_customer.id) == []

        with pytest.raises(NotFoundError, match="Property interest not found"):
            await service.delete_interest(test_customer.id, test_property.id)


class TestCategoryService:

    @pytest.fixture
    def service(self, db_session):
        return CategoryService(db_session)

    @pytest.mark.asyncio
    async def test_category_tree(self, service):
        residential = await service.create_category(CategoryCreate(name="Residential"))
        await service.create_subcategory(residential.id, SubCategoryCreate(name="Bungalow"))
        await service.create_subcategory(residential.id, SubCategoryCreate(name="Apartment"))

        assert [c.name for c in await service.list_categories()] == ["Residential"]
        assert [s.name for s in await service.list_subcategories(residential.id)] == ["Apartment", "Bungalow"]

    @pytest.mark.asyncio
    async def test_duplicates_rejected(self, service):
        land = await service.create_category(CategoryCreate(name="Land"))
        await service.create_subcategory(land.id, SubCategoryCreate(name="Plot"))

        with pytest.raises(DuplicateResourceError):
            await service.create_category(CategoryCreate(name="Land"))
        with pytest.raises(DuplicateResourceError):
            await service.create_subcategory(land.id, SubCategoryCreate(name="Plot"))

    @pytest.mark.asyncio
    async def test_missing_category(self, service):
        with pytest.raises(NotFoundError):
            await service.list_subcategories(999)
        with pytest.raises(NotFoundError):
            await service.create_subcategory(999, SubCategoryCreate(name="Orphan"))


class TestDashboardService:

    @pytest.mark.asyncio
    async def test_empty_database(self, db_session):
        metrics = await DashboardService(db_session).get_metrics()

        assert metrics.total_customers == 0
        assert metrics.total_revenue == 0.0
        assert metrics.overdue_interactions == 0

    @pytest.mark.asyncio
    async def test_revenue_counts_sold_only(self, db_session, property_repository):
        await PropertyFactory.create_property(property_repository, price=Decimal("8500000"))
        await PropertyFactory.create_property(
            property_repository, price=Decimal("12000000"), status=PropertyStatus.SOLD
        )

        metrics = await DashboardService(db_session).get_metrics()
        assert metrics.total_revenue == 12000000.0
        assert metrics.active_properties == 1
