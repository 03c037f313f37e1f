"""
Tests for error handling.
Tests custom exceptions, the request context middleware and the structured
error envelope returned by every endpoint.
"""

import pytest
from fastapi.testclient import TestClient
from fastapi import FastAPI
from httpx import AsyncClient
from sqlalchemy.exc import IntegrityError, OperationalError
from unittest.mock import Mock
import json

from app.services.error_handler import ErrorHandlerService
from app.utils.exceptions import (
    APIException,
    ValidationError,
    NotFoundError,
    BadRequestError,
    ConflictError,
    CustomerNotFoundError,
    DuplicateResourceError,
    InvalidStatusTransitionError,
    MissingReferenceError,
    PayloadTooLargeError,
)
from app.middleware.validation import RequestContextMiddleware
from app.middleware.performance import RequestTimingMiddleware
from tests.conftest import assert_error_response


class TestErrorHandlerService:
    """Test error handler service functionality."""

    def test_format_error_response(self):
        """Test error response formatting."""
        response = ErrorHandlerService.format_error_response(
            error_code="TEST_ERROR",
            message="Test error message",
            details=[{"field": "test", "message": "Test field error"}],
            request_id="test123"
        )

        assert response["error"]["code"] == "TEST_ERROR"
        assert response["error"]["message"] == "Test error message"
        assert response["error"]["request_id"] == "test123"
        assert response["error"]["details"][0]["field"] == "test"
        assert response["error"]["timestamp"].endswith("Z")

    def test_details_omitted_when_empty(self):
        response = ErrorHandlerService.format_error_response("NOT_FOUND", "Customer not found")
        assert "details" not in response["error"]

    def test_handle_api_exception(self):
        """Test API exception handling."""
        response = ErrorHandlerService.handle_api_exception(CustomerNotFoundError(42))

        assert response.status_code == 404
        response_data = json.loads(response.body)
        assert response_data["error"]["code"] == "NOT_FOUND"
        assert response_data["error"]["message"] == "Customer not found with ID: 42"
        assert response_data["error"]["request_id"]

    def test_missing_reference_carries_field_details(self):
        response = ErrorHandlerService.handle_api_exception(MissingReferenceError("broker_id", "Broker", 7))

        assert response.status_code == 422
        details = json.loads(response.body)["error"]["details"]
        assert details == [{"field": "broker_id", "message": "Broker not found", "input": 7}]

    def test_handle_validation_error(self):
        """Test Pydantic validation error handling."""
        mock_error = Mock()
        mock_error.errors.return_value = [
            {
                "loc": ("body", "email"),
                "msg": "Field required",
                "type": "missing",
                "input": None
            },
            {
                "loc": ("query", "limit"),
                "msg": "Input should be less than or equal to 500",
                "type": "less_than_equal",
                "input": "1000"
            }
        ]

        response = ErrorHandlerService.handle_validation_error(mock_error)

        assert response.status_code == 422
        response_data = json.loads(response.body)
        assert response_data["error"]["code"] == "VALIDATION_ERROR"
        assert response_data["error"]["details"][0]["field"] == "body -> email"
        assert response_data["error"]["details"][1]["field"] == "query -> limit"

    def test_handle_database_error(self):
        """Test database error handling."""
        integrity_error = IntegrityError("statement", "params", Exception("UNIQUE constraint failed"))
        response = ErrorHandlerService.handle_database_error(integrity_error)

        assert response.status_code == 409
        response_data = json.loads(response.body)
        assert response_data["error"]["code"] == "INTEGRITY_ERROR"
        assert response_data["error"]["message"] == "Constraint violation: Duplicate value for unique field"

    def test_database_details_not_exposed(self):
        error = OperationalError("SELECT secret FROM vault", {}, Exception("connection refused"))
        response = ErrorHandlerService.handle_database_error(error)

        assert response.status_code == 500
        body = response.body.decode()
        assert "DATABASE_ERROR" in body
        assert "secret" not in body

    def test_handle_unexpected_error(self):
        """Test unexpected error handling."""
        response = ErrorHandlerService.handle_unexpected_error(Exception("Unexpected error"))

        assert response.status_code == 500
        response_data = json.loads(response.body)
        assert response_data["error"]["code"] == "INTERNAL_SERVER_ERROR"
        assert "unexpected error occurred" in response_data["error"]["message"].lower()


class TestCustomExceptions:

    @pytest.mark.parametrize("exception,status_code,error_code", [
        (ValidationError("bad"), 422, "VALIDATION_ERROR"),
        (NotFoundError("Visit", 3), 404, "NOT_FOUND"),
        (ConflictError("clash"), 409, "CONFLICT"),
        (BadRequestError("bad"), 400, "BAD_REQUEST"),
        (PayloadTooLargeError(1024), 413, "PAYLOAD_TOO_LARGE"),
        (DuplicateResourceError("Customer", "a@example.com"), 409, "CONFLICT"),
        (InvalidStatusTransitionError("completed", "in_progress"), 409, "INVALID_STATUS_TRANSITION"),
    ])
    def test_status_and_code(self, exception: APIException, status_code: int, error_code: str):
        assert exception.status_code == status_code
        assert exception.error_code == error_code

    def test_transition_error_message(self):
        error = InvalidStatusTransitionError("paused", "completed")
        assert error.detail == "Cannot change interaction status from 'paused' to 'completed'"
        assert error.current_status == "paused"


class TestRequestContextMiddleware:
    """Test the request context middleware on a minimal app."""

    @pytest.fixture
    def context_app(self):
        """Create test FastAPI app with middleware."""
        app = FastAPI()
        app.add_middleware(RequestTimingMiddleware, slow_request_threshold=0.0)
        app.add_middleware(RequestContextMiddleware, max_request_size=1024, enable_request_logging=True)

        @app.get("/test")
        async def test_endpoint():
            return {"message": "success"}

        @app.post("/test")
        async def test_post_endpoint(data: dict):
            return {"message": "success", "data": data}

        @app.get("/boom")
        async def boom_endpoint():
            raise RuntimeError("kaboom")

        return app

    def test_request_id_header(self, context_app):
        client = TestClient(context_app)

        response = client.get("/test")

        assert response.status_code == 200
        assert len(response.headers["X-Request-ID"]) == 8
        assert "X-Processing-Time" in response.headers

    def test_request_size_validation(self, context_app):
        """Test request size validation."""
        client = TestClient(context_app)

        response = client.post(
            "/test",
            json={"test": "data"},
            headers={"content-length": str(20 * 1024 * 1024)}
        )

        assert response.status_code == 413
        assert response.json()["error"]["code"] == "PAYLOAD_TOO_LARGE"
        assert response.json()["error"]["request_id"] == response.headers["X-Request-ID"]

    def test_small_body_passes(self, context_app):
        client = TestClient(context_app)

        response = client.post("/test", json={"test": "data"})

        assert response.status_code == 200
        assert response.json()["data"] == {"test": "data"}

    def test_unexpected_error_is_enveloped(self, context_app):
        client = TestClient(context_app, raise_server_exceptions=False)

        response = client.get("/boom")

        assert response.status_code == 500
        assert response.json()["error"]["code"] == "INTERNAL_SERVER_ERROR"
        assert "kaboom" not in response.text


class TestAPIErrorResponses:
    """Test API error responses through actual endpoints."""

    @pytest.mark.asyncio
    async def test_unknown_route(self, async_client: AsyncClient):
        response = await async_client.get("/api/nothing-here")
        assert_error_response(response, 404, "HTTP_404")

    @pytest.mark.asyncio
    async def test_method_not_allowed(self, async_client: AsyncClient):
        response = await async_client.patch("/api/customers")
        assert_error_response(response, 405, "HTTP_405")

    @pytest.mark.asyncio
    async def test_validation_error_response_format(self, async_client: AsyncClient):
        """Test validation error response format."""
        response = await async_client.post("/api/customers", json={"name": "Rajesh Kumar", "email": "not-an-email"})

        error = assert_error_response(response, 422, "VALIDATION_ERROR")
        fields = {detail["field"] for detail in error["details"]}
        assert "body -> email" in fields
        assert "body -> phone" in fields

    @pytest.mark.asyncio
    async def test_invalid_path_parameter(self, async_client: AsyncClient):
        response = await async_client.get("/api/customers/0")
        assert_error_response(response, 422, "VALIDATION_ERROR")

    @pytest.mark.asyncio
    async def test_invalid_enum_query_parameter(self, async_client: AsyncClient):
        response = await async_client.get("/api/interactions", params={"status": "archived"})
        assert_error_response(response, 422, "VALIDATION_ERROR")

    @pytest.mark.asyncio
    async def test_request_id_matches_header(self, async_client: AsyncClient):
        response = await async_client.get("/api/brokers/12345")

        error = assert_error_response(response, 404, "NOT_FOUND")
        assert error["request_id"] == response.headers["X-Request-ID"]

    @pytest.mark.asyncio
    async def test_health_reports_unreachable_database(self, async_client: AsyncClient, monkeypatch):
        async def database_down():
            return False

        monkeypatch.setattr("app.main.test_database_connection", database_down)

        response = await async_client.get("/health")

        error = assert_error_response(response, 503, "SERVICE_UNAVAILABLE")
        assert error["message"] == "Database connection failed"

    @pytest.mark.asyncio
    async def test_payload_too_large(self, async_client: AsyncClient):
        response = await async_client.post(
            "/api/customers",
            content=b"{}",
            headers={"content-type": "application/json", "content-length": str(10 * 1024 * 1024)}
        )
        assert_error_response(response, 413, "PAYLOAD_TOO_LARGE")
