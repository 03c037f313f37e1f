"""
Custom exception classes for the Real Estate CRM API.
Provides structured error handling with appropriate HTTP status codes.
"""

from typing import Any, Dict, Optional, List
from fastapi import HTTPException, status


class APIException(HTTPException):
    """Base API exception class."""

    def __init__(
        self,
        status_code: int,
        detail: str,
        error_code: Optional[str] = None,
        headers: Optional[Dict[str, Any]] = None
    ):
        super().__init__(status_code=status_code, detail=detail, headers=headers)
        self.error_code = error_code


class ValidationError(APIException):
    """Validation error exception."""

    def __init__(
        self,
        detail: str,
        field_errors: Optional[List[Dict[str, Any]]] = None
    ):
        super().__init__(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=detail,
            error_code="VALIDATION_ERROR"
        )
        self.field_errors = field_errors or []


class NotFoundError(APIException):
    """Resource not found exception."""

    def __init__(self, resource: str, resource_id: Optional[Any] = None):
        detail = f"{resource} not found"
        if resource_id is not None:
            detail += f" with ID: {resource_id}"

        super().__init__(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=detail,
            error_code="NOT_FOUND"
        )


class ConflictError(APIException):
    """Resource conflict exception."""

    def __init__(self, detail: str, error_code: str = "CONFLICT"):
        super().__init__(
            status_code=status.HTTP_409_CONFLICT,
            detail=detail,
            error_code=error_code
        )


class BadRequestError(APIException):
    """Bad request exception."""

    def __init__(self, detail: str):
        super().__init__(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=detail,
            error_code="BAD_REQUEST"
        )


class ServiceUnavailableError(APIException):
    """Service unavailable exception."""

    def __init__(self, detail: str = "Service temporarily unavailable"):
        super().__init__(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail=detail,
            error_code="SERVICE_UNAVAILABLE"
        )


class PayloadTooLargeError(APIException):
    """Request body exceeds the configured size limit."""

    def __init__(self, max_size: int):
        super().__init__(
            status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
            detail=f"Request body exceeds maximum allowed size of {max_size} bytes",
            error_code="PAYLOAD_TOO_LARGE"
        )


# Entity specific exceptions
class CustomerNotFoundError(NotFoundError):

    def __init__(self, customer_id: Any = None):
        super().__init__("Customer", customer_id)


class PropertyNotFoundError(NotFoundError):

    def __init__(self, property_id: Any = None):
        super().__init__("Property", property_id)


class BrokerNotFoundError(NotFoundError):

    def __init__(self, broker_id: Any = None):
        super().__init__("Broker", broker_id)


class VisitNotFoundError(NotFoundError):

    def __init__(self, visit_id: Any = None):
        super().__init__("Visit", visit_id)


class InteractionNotFoundError(NotFoundError):

    def __init__(self, interaction_id: Any = None):
        super().__init__("Interaction", interaction_id)


class DuplicateResourceError(ConflictError):
    """Duplicate resource exception."""

    def __init__(self, resource: str, identifier: str):
        super().__init__(f"{resource} with identifier '{identifier}' already exists")


class InvalidStatusTransitionError(ConflictError):
    """Interaction lifecycle transition that the current status does not allow."""

    def __init__(self, current_status: str, target_status: str):
        super().__init__(
            f"Cannot change interaction status from '{current_status}' to '{target_status}'",
            error_code="INVALID_STATUS_TRANSITION"
        )
        self.current_status = current_status
        self.target_status = target_status


class MissingReferenceError(ValidationError):
    """A payload refers to a related record that does not exist."""

    def __init__(self, field: str, resource: str, value: Any):
        super().__init__(
            f"{resource} referenced by '{field}' does not exist: {value}",
            field_errors=[{"field": field, "message": f"{resource} not found", "input": value}]
        )
