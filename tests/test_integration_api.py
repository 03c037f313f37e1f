"""
Integration tests for the HTTP API.
Exercises every router through the ASGI app against an in-memory database.
"""

import pytest
from datetime import timedelta
from httpx import AsyncClient

from app.database import utc_now
from app.models import InteractionStatus, Priority, PropertyStatus
from tests.conftest import (
    CustomerFactory,
    PropertyFactory,
    InteractionFactory,
    assert_error_response,
)

API = "/api"


class TestHealthEndpoints:

    @pytest.mark.asyncio
    async def test_root(self, async_client: AsyncClient):
        response = await async_client.get("/")

        assert response.status_code == 200
        data = response.json()
        assert data["api_prefix"] == "/api"
        assert data["status"] == "healthy"

    @pytest.mark.asyncio
    async def test_health(self, async_client: AsyncClient):
        response = await async_client.get("/health")

        assert response.status_code == 200
        assert response.json()["database"] == "connected"
        assert "X-Request-ID" in response.headers
        assert "X-Processing-Time" in response.headers


class TestCustomerAPI:
    """Test customer endpoints."""

    @pytest.mark.asyncio
    async def test_customer_crud(self, async_client: AsyncClient, test_broker):
        payload = {
            "name": "Priya Sharma",
            "email": "priya.sharma@example.com",
            "phone": "+91 87654 32109",
            "priority": "high",
            "budget_min": 15000000,
            "budget_max": 20000000,
            "preferred_locations": ["Bandra", " Khar ", ""],
            "assigned_broker_id": test_broker.id
        }
        response = await async_client.post(f"{API}/customers", json=payload)
        assert response.status_code == 201
        created = response.json()
        assert created["preferred_locations"] == ["Bandra", "Khar"]
        assert created["assigned_broker"]["id"] == test_broker.id
        assert created["status"] == "active"

        customer_id = created["id"]
        response = await async_client.get(f"{API}/customers/{customer_id}")
        assert response.status_code == 200
        assert response.json()["email"] == "priya.sharma@example.com"

        response = await async_client.put(f"{API}/customers/{customer_id}", json={"notes": "Prefers garden"})
        assert response.status_code == 200
        assert response.json()["notes"] == "Prefers garden"
        assert response.json()["priority"] == "high"

        response = await async_client.delete(f"{API}/customers/{customer_id}")
        assert response.status_code == 204

        response = await async_client.get(f"{API}/customers/{customer_id}")
        assert_error_response(response, 404, "NOT_FOUND")

    @pytest.mark.asyncio
    async def test_list_filters(self, async_client: AsyncClient, customer_repository):
        await CustomerFactory.create_customer(customer_repository, name="Rajesh Kumar", priority=Priority.HIGH)
        await CustomerFactory.create_customer(customer_repository, name="Priya Sharma")

        response = await async_client.get(f"{API}/customers", params={"search": "priya"})
        assert [c["name"] for c in response.json()] == ["Priya Sharma"]

        response = await async_client.get(f"{API}/customers", params={"priority": "high"})
        assert [c["name"] for c in response.json()] == ["Rajesh Kumar"]

        response = await async_client.get(f"{API}/customers", params={"limit": 1})
        assert len(response.json()) == 1

    @pytest.mark.asyncio
    async def test_limit_above_maximum_rejected(self, async_client: AsyncClient):
        response = await async_client.get(f"{API}/customers", params={"limit": 100000})
        assert_error_response(response, 422, "VALIDATION_ERROR")

    @pytest.mark.asyncio
    async def test_duplicate_email(self, async_client: AsyncClient, test_customer):
        response = await async_client.post(f"{API}/customers", json={
            "name": "Another Rajesh",
            "email": test_customer.email,
            "phone": "1"
        })
        assert_error_response(response, 409, "CONFLICT")

    @pytest.mark.asyncio
    async def test_unknown_broker(self, async_client: AsyncClient):
        response = await async_client.post(f"{API}/customers", json={
            "name": "Priya Sharma",
            "email": "priya@example.com",
            "phone": "1",
            "assigned_broker_id": 999
        })
        error = assert_error_response(response, 422, "VALIDATION_ERROR")
        assert error["details"][0]["field"] == "assigned_broker_id"

    @pytest.mark.asyncio
    async def test_null_for_required_field_rejected(self, async_client: AsyncClient, test_customer):
        response = await async_client.put(f"{API}/customers/{test_customer.id}", json={"name": None})
        assert_error_response(response, 422, "VALIDATION_ERROR")

    @pytest.mark.asyncio
    async def test_customer_details(
        self, async_client: AsyncClient, interaction_repository, test_customer, test_broker, test_property
    ):
        for i in range(6):
            await InteractionFactory.create_interaction(
                interaction_repository, customer_id=test_customer.id, broker_id=test_broker.id, title=f"Call {i}"
            )
        response = await async_client.post(f"{API}/property-interests", json={
            "customer_id": test_customer.id,
            "property_id": test_property.id,
            "interest_level": "high"
        })
        assert response.status_code == 201

        response = await async_client.get(f"{API}/customers/{test_customer.id}/details")

        assert response.status_code == 200
        details = response.json()
        assert details["assigned_broker"]["name"] == test_broker.name
        assert len(details["recent_interactions"]) == 5
        assert details["recent_interactions"][0]["title"] == "Call 5"
        assert details["property_interests"][0]["property"]["title"] == test_property.title


class TestPropertyAPI:
    """Test property endpoints."""

    @pytest.mark.asyncio
    async def test_property_crud(self, async_client: AsyncClient):
        response = await async_client.post(f"{API}/properties", json={
            "title": "Sunrise Apartments",
            "category": "flats",
            "price": 8500000,
            "location": "Andheri West",
            "city": "Mumbai",
            "bedrooms": 3,
            "furnishing": "semi-furnished",
            "parking": True,
            "floor": 5,
            "total_floors": 12
        })
        assert response.status_code == 201
        created = response.json()
        assert created["price"] == 8500000
        assert created["status"] == "available"

        response = await async_client.put(f"{API}/properties/{created['id']}", json={"status": "sold"})
        assert response.status_code == 200
        assert response.json()["status"] == "sold"

        response = await async_client.delete(f"{API}/properties/{created['id']}")
        assert response.status_code == 204

        response = await async_client.delete(f"{API}/properties/{created['id']}")
        assert_error_response(response, 404, "NOT_FOUND")

    @pytest.mark.asyncio
    async def test_non_positive_price_rejected(self, async_client: AsyncClient):
        response = await async_client.post(f"{API}/properties", json={
            "title": "Free House",
            "category": "bungalow",
            "price": 0,
            "location": "Nowhere"
        })
        assert_error_response(response, 422, "VALIDATION_ERROR")

    @pytest.mark.asyncio
    async def test_price_range_filter(self, async_client: AsyncClient, property_repository):
        await PropertyFactory.create_property(property_repository, title="Budget Flat", price=4000000)
        await PropertyFactory.create_property(property_repository, title="Mid Flat", price=9000000)
        await PropertyFactory.create_property(property_repository, title="Villa", price=25000000)

        response = await async_client.get(f"{API}/properties", params={"price_range": "50L-1Cr"})
        assert [p["title"] for p in response.json()] == ["Mid Flat"]

        response = await async_client.get(f"{API}/properties", params={"price_range": "2Cr+"})
        assert [p["title"] for p in response.json()] == ["Villa"]

        response = await async_client.get(f"{API}/properties", params={"price_range": "cheap"})
        assert_error_response(response, 422, "VALIDATION_ERROR")

    @pytest.mark.asyncio
    async def test_inverted_price_filter(self, async_client: AsyncClient):
        response = await async_client.get(f"{API}/properties", params={"min_price": 9000000, "max_price": 100})
        assert_error_response(response, 422, "VALIDATION_ERROR")

    @pytest.mark.asyncio
    async def test_cities(self, async_client: AsyncClient, property_repository):
        await PropertyFactory.create_property(property_repository, city="Pune")
        await PropertyFactory.create_property(property_repository, city="Mumbai")
        await PropertyFactory.create_property(property_repository, city="Mumbai")
        await PropertyFactory.create_property(property_repository, city=None)

        response = await async_client.get(f"{API}/properties/cities")

        assert response.status_code == 200
        assert response.json() == ["Mumbai", "Pune"]


class TestBrokerAPI:

    @pytest.mark.asyncio
    async def test_broker_crud(self, async_client: AsyncClient):
        response = await async_client.post(f"{API}/brokers", json={
            "name": "Sunita Rao",
            "email": "sunita.rao@example.com",
            "phone": "+91 90000 11111",
            "affiliation": "external",
            "company": "Rao Realty",
            "commission_rate": 1.5
        })
        assert response.status_code == 201
        broker = response.json()
        assert broker["affiliation"] == "external"

        response = await async_client.get(f"{API}/brokers", params={"affiliation": "external"})
        assert [b["id"] for b in response.json()] == [broker["id"]]

        response = await async_client.put(f"{API}/brokers/{broker['id']}", json={"rating": 4.5})
        assert response.status_code == 200
        assert response.json()["rating"] == 4.5

        response = await async_client.delete(f"{API}/brokers/{broker['id']}")
        assert response.status_code == 204

    @pytest.mark.asyncio
    async def test_commission_rate_out_of_range(self, async_client: AsyncClient):
        response = await async_client.post(f"{API}/brokers", json={
            "name": "Sunita Rao",
            "email": "sunita.rao@example.com",
            "phone": "1",
            "commission_rate": 150
        })
        assert_error_response(response, 422, "VALIDATION_ERROR")

    @pytest.mark.asyncio
    async def test_broker_stats(
        self, async_client: AsyncClient, interaction_repository, test_customer, test_broker
    ):
        await InteractionFactory.create_interaction(
            interaction_repository,
            customer_id=test_customer.id,
            broker_id=test_broker.id,
            status=InteractionStatus.COMPLETED,
            completed_date=utc_now()
        )

        response = await async_client.get(f"{API}/brokers/{test_broker.id}/stats")

        assert response.status_code == 200
        stats = response.json()
        assert stats["broker"]["id"] == test_broker.id
        assert [c["id"] for c in stats["assigned_customers"]] == [test_customer.id]
        assert len(stats["recent_interactions"]) == 1
        assert stats["monthly_deals"] == 1

    @pytest.mark.asyncio
    async def test_stats_for_missing_broker(self, async_client: AsyncClient):
        response = await async_client.get(f"{API}/brokers/999/stats")
        assert_error_response(response, 404, "NOT_FOUND")


class TestVisitAPI:

    @pytest.mark.asyncio
    async def test_visit_crud(self, async_client: AsyncClient, test_customer, test_property, test_broker):
        response = await async_client.post(f"{API}/visits", json={
            "customer_id": test_customer.id,
            "property_id": test_property.id,
            "broker_id": test_broker.id,
            "visit_date": "2024-01-15T10:30:00Z",
            "feedback": "Impressed with the amenities",
            "rating": 5
        })
        assert response.status_code == 201
        visit = response.json()
        assert visit["customer"]["name"] == test_customer.name
        assert visit["property"]["title"] == test_property.title
        assert visit["status"] == "completed"

        response = await async_client.get(f"{API}/visits", params={"search": "sunrise"})
        assert [v["id"] for v in response.json()] == [visit["id"]]

        response = await async_client.put(f"{API}/visits/{visit['id']}", json={"rating": 4})
        assert response.json()["rating"] == 4

        response = await async_client.delete(f"{API}/visits/{visit['id']}")
        assert response.status_code == 204

    @pytest.mark.asyncio
    async def test_rating_out_of_range(self, async_client: AsyncClient, test_customer, test_property):
        response = await async_client.post(f"{API}/visits", json={
            "customer_id": test_customer.id,
            "property_id": test_property.id,
            "visit_date": "2024-01-15T10:30:00Z",
            "rating": 7
        })
        assert_error_response(response, 422, "VALIDATION_ERROR")


class TestInteractionAPI:
    """Test interaction endpoints and the lifecycle actions."""

    @pytest.mark.asyncio
    async def test_create_digital_sharing(self, async_client: AsyncClient, test_customer, test_broker, test_property):
        response = await async_client.post(f"{API}/interactions", json={
            "customer_id": test_customer.id,
            "broker_id": test_broker.id,
            "type": "digital_sharing",
            "title": "Shared listings on WhatsApp",
            "shared_properties": [test_property.id, test_property.id],
            "shortlisted_properties": [test_property.id],
            "priority": "high"
        })

        assert response.status_code == 201
        interaction = response.json()
        assert interaction["status"] == "pending"
        assert interaction["shared_properties"] == [test_property.id]
        assert interaction["is_overdue"] is False
        assert interaction["customer"]["id"] == test_customer.id

        response = await async_client.get(f"{API}/customers/{test_customer.id}")
        assert response.json()["last_interaction_date"] is not None

    @pytest.mark.asyncio
    async def test_digital_sharing_requires_shared_properties(
        self, async_client: AsyncClient, test_customer, test_broker
    ):
        response = await async_client.post(f"{API}/interactions", json={
            "customer_id": test_customer.id,
            "broker_id": test_broker.id,
            "type": "digital_sharing",
            "title": "Nothing shared"
        })
        assert_error_response(response, 422, "VALIDATION_ERROR")

    @pytest.mark.asyncio
    async def test_shortlist_outside_shared_rejected(
        self, async_client: AsyncClient, test_customer, test_broker, test_property
    ):
        response = await async_client.post(f"{API}/interactions", json={
            "customer_id": test_customer.id,
            "broker_id": test_broker.id,
            "type": "digital_sharing",
            "title": "Shared listings",
            "shared_properties": [test_property.id],
            "shortlisted_properties": [test_property.id + 1]
        })
        assert_error_response(response, 422, "VALIDATION_ERROR")

    @pytest.mark.asyncio
    async def test_lifecycle_actions(self, async_client: AsyncClient, test_interaction):
        base = f"{API}/interactions/{test_interaction.id}"

        response = await async_client.patch(f"{base}/start")
        assert response.status_code == 200
        assert response.json()["status"] == "in_progress"

        response = await async_client.patch(f"{base}/pause", json={"reason": "Customer travelling"})
        assert response.json()["status"] == "paused"
        assert response.json()["pause_reason"] == "Customer travelling"

        response = await async_client.patch(f"{base}/complete")
        assert_error_response(response, 409, "INVALID_STATUS_TRANSITION")

        response = await async_client.patch(f"{base}/resume")
        assert response.json()["status"] == "in_progress"
        assert response.json()["pause_reason"] is None

        response = await async_client.patch(f"{base}/complete")
        assert response.json()["status"] == "completed"
        assert response.json()["completed_date"] is not None

        response = await async_client.patch(f"{base}/end", json={"reason": "Too late"})
        assert_error_response(response, 409, "INVALID_STATUS_TRANSITION")

    @pytest.mark.asyncio
    async def test_start_rejected_when_paused(self, async_client: AsyncClient, test_interaction):
        base = f"{API}/interactions/{test_interaction.id}"

        response = await async_client.patch(f"{base}/pause", json={"reason": "On hold"})
        assert response.json()["status"] == "paused"

        response = await async_client.patch(f"{base}/start")
        assert_error_response(response, 409, "INVALID_STATUS_TRANSITION")

        response = await async_client.get(base)
        assert response.json()["status"] == "paused"
        assert response.json()["pause_reason"] == "On hold"

    @pytest.mark.asyncio
    async def test_pause_requires_reason(self, async_client: AsyncClient, test_interaction):
        response = await async_client.patch(
            f"{API}/interactions/{test_interaction.id}/pause", json={"reason": "   "}
        )
        assert_error_response(response, 422, "VALIDATION_ERROR")

    @pytest.mark.asyncio
    async def test_end_from_pending(self, async_client: AsyncClient, test_interaction):
        response = await async_client.patch(
            f"{API}/interactions/{test_interaction.id}/end", json={"reason": "Bought elsewhere"}
        )
        assert response.status_code == 200
        assert response.json()["status"] == "ended"
        assert response.json()["end_reason"] == "Bought elsewhere"

    @pytest.mark.asyncio
    async def test_put_status_transition(self, async_client: AsyncClient, test_interaction):
        url = f"{API}/interactions/{test_interaction.id}"

        response = await async_client.put(url, json={"status": "pending", "notes": "Left a voicemail"})
        assert response.status_code == 200
        assert response.json()["notes"] == "Left a voicemail"

        response = await async_client.put(url, json={"status": "completed"})
        assert response.json()["status"] == "completed"

        response = await async_client.put(url, json={"status": "in_progress"})
        assert_error_response(response, 409, "INVALID_STATUS_TRANSITION")

    @pytest.mark.asyncio
    async def test_overdue(self, async_client: AsyncClient, interaction_repository, test_customer, test_broker):
        stale = await InteractionFactory.create_interaction(
            interaction_repository,
            customer_id=test_customer.id,
            broker_id=test_broker.id,
            title="Forgotten follow-up",
            updated_at=utc_now() - timedelta(days=21)
        )
        await InteractionFactory.create_interaction(
            interaction_repository, customer_id=test_customer.id, broker_id=test_broker.id, title="Fresh"
        )

        response = await async_client.get(f"{API}/interactions/overdue")
        assert response.status_code == 200
        overdue = response.json()
        assert [i["id"] for i in overdue] == [stale.id]
        assert overdue[0]["is_overdue"] is True

        response = await async_client.get(f"{API}/interactions", params={"overdue": "false"})
        assert [i["title"] for i in response.json()] == ["Fresh"]

        # Any update refreshes updated_at and clears the flag
        response = await async_client.patch(f"{API}/interactions/{stale.id}/start")
        assert response.json()["is_overdue"] is False
        response = await async_client.get(f"{API}/interactions/overdue")
        assert response.json() == []

    @pytest.mark.asyncio
    async def test_list_filters(self, async_client: AsyncClient, interaction_repository, test_customer, test_broker):
        await InteractionFactory.create_interaction(
            interaction_repository, customer_id=test_customer.id, broker_id=test_broker.id, priority=Priority.HIGH
        )
        await InteractionFactory.create_interaction(
            interaction_repository,
            customer_id=test_customer.id,
            broker_id=test_broker.id,
            status=InteractionStatus.PAUSED
        )

        response = await async_client.get(f"{API}/interactions", params={"status": "paused"})
        assert len(response.json()) == 1
        response = await async_client.get(f"{API}/interactions", params={"type": "follow_up", "priority": "high"})
        assert len(response.json()) == 1
        response = await async_client.get(f"{API}/interactions", params={"search": "rajesh"})
        assert len(response.json()) == 2

    @pytest.mark.asyncio
    async def test_delete(self, async_client: AsyncClient, test_interaction):
        response = await async_client.delete(f"{API}/interactions/{test_interaction.id}")
        assert response.status_code == 204

        response = await async_client.get(f"{API}/interactions/{test_interaction.id}")
        assert_error_response(response, 404, "NOT_FOUND")


class TestPropertyInterestAPI:

    @pytest.mark.asyncio
    async def test_interest_lifecycle(self, async_client: AsyncClient, test_customer, test_property):
        payload = {
            "customer_id": test_customer.id,
            "property_id": test_property.id,
            "interest_level": "medium",
            "source": "direct_inquiry"
        }
        response = await async_client.post(f"{API}/property-interests", json=payload)
        assert response.status_code == 201

        response = await async_client.post(f"{API}/property-interests", json=payload)
        assert_error_response(response, 409, "CONFLICT")

        response = await async_client.get(f"{API}/property-interests", params={"customer_id": test_customer.id})
        assert [i["interest_level"] for i in response.json()] == ["medium"]

        response = await async_client.delete(f"{API}/property-interests/{test_customer.id}/{test_property.id}")
        assert response.status_code == 204

        response = await async_client.delete(f"{API}/property-interests/{test_customer.id}/{test_property.id}")
        assert_error_response(response, 404, "NOT_FOUND")


class TestCategoryAPI:

    @pytest.mark.asyncio
    async def test_category_tree(self, async_client: AsyncClient):
        response = await async_client.post(f"{API}/property-categories", json={"name": "Residential"})
        assert response.status_code == 201
        category_id = response.json()["id"]

        response = await async_client.post(
            f"{API}/property-categories/{category_id}/sub", json={"name": "Penthouse"}
        )
        assert response.status_code == 201
        sub_category = response.json()
        assert sub_category["category"]["name"] == "Residential"

        response = await async_client.get(f"{API}/property-categories")
        assert [c["name"] for c in response.json()] == ["Residential"]

        response = await async_client.get(f"{API}/property-categories/{category_id}")
        assert response.json()["name"] == "Residential"

        response = await async_client.get(f"{API}/property-categories/sub/{category_id}")
        assert [s["name"] for s in response.json()] == ["Penthouse"]

        response = await async_client.get(f"{API}/property-categories/subcategory/{sub_category['id']}")
        assert response.json()["category_id"] == category_id

        response = await async_client.post(f"{API}/property-categories", json={"name": "residential"})
        assert_error_response(response, 409, "CONFLICT")

    @pytest.mark.asyncio
    async def test_missing_category(self, async_client: AsyncClient):
        response = await async_client.get(f"{API}/property-categories/sub/999")
        assert_error_response(response, 404, "NOT_FOUND")


class TestDashboardAPI:

    @pytest.mark.asyncio
    async def test_metrics(
        self, async_client: AsyncClient, customer_repository, property_repository, interaction_repository, test_broker
    ):
        hot = await CustomerFactory.create_customer(customer_repository, priority=Priority.HIGH)
        await PropertyFactory.create_property(property_repository)
        await PropertyFactory.create_property(property_repository, price=12000000, status=PropertyStatus.SOLD)
        await InteractionFactory.create_interaction(
            interaction_repository,
            customer_id=hot.id,
            broker_id=test_broker.id,
            updated_at=utc_now() - timedelta(days=30)
        )

        response = await async_client.get(f"{API}/dashboard/metrics")

        assert response.status_code == 200
        metrics = response.json()
        assert metrics["total_customers"] == 1
        assert metrics["active_properties"] == 1
        assert metrics["total_revenue"] == 12000000
        assert metrics["hot_leads"] == 1
        assert metrics["interactions_this_month"] == 1
        assert metrics["overdue_interactions"] == 1
        assert metrics["visits_this_month"] == 0
