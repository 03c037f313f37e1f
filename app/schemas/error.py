"""
Error response schemas for API documentation and consistent error formatting.
Provides standardized error response models for OpenAPI documentation.
"""

from pydantic import BaseModel, Field
from typing import List, Optional, Any, Dict


class ErrorDetail(BaseModel):
    """Schema for individual error detail."""

    field: Optional[str] = Field(
        None,
        description="Field name that caused the error",
        examples=["email"]
    )

    message: str = Field(
        ...,
        description="Human-readable error message",
        examples=["value is not a valid email address"]
    )

    type: Optional[str] = Field(
        None,
        description="Error type identifier",
        examples=["value_error"]
    )

    input: Optional[Any] = Field(
        None,
        description="Input value that caused the error"
    )


class ErrorResponse(BaseModel):
    """Schema for standardized error responses."""

    code: str = Field(..., description="Error code identifier", examples=["VALIDATION_ERROR"])
    message: str = Field(..., description="Human-readable error message")
    timestamp: str = Field(..., description="Error timestamp in ISO format", examples=["2024-01-01T00:00:00Z"])

    request_id: Optional[str] = Field(
        None,
        description="Unique request identifier for tracking",
        examples=["abc12345"]
    )

    details: Optional[List[ErrorDetail]] = Field(
        None,
        description="Detailed error information for validation errors"
    )


class APIErrorResponse(BaseModel):
    """Schema for API error response wrapper."""

    error: ErrorResponse = Field(..., description="Error information")


def _example(code: str, message: str, **extra: Any) -> Dict[str, Any]:
    error = {
        "code": code,
        "message": message,
        "timestamp": "2024-01-01T00:00:00Z",
        "request_id": "abc12345",
    }
    error.update(extra)
    return {"error": error}


# Common error response examples for documentation
COMMON_ERROR_RESPONSES = {
    400: {
        "description": "Bad Request - Invalid request parameters",
        "model": APIErrorResponse,
        "content": {
            "application/json": {
                "example": _example("BAD_REQUEST", "Invalid request parameters")
            }
        }
    },
    404: {
        "description": "Not Found - Resource not found",
        "model": APIErrorResponse,
        "content": {
            "application/json": {
                "examples": {
                    "not_found": {
                        "summary": "Resource Not Found",
                        "value": _example("NOT_FOUND", "Customer not found with ID: 42")
                    }
                }
            }
        }
    },
    409: {
        "description": "Conflict - Resource conflict",
        "model": APIErrorResponse,
        "content": {
            "application/json": {
                "examples": {
                    "duplicate": {
                        "summary": "Duplicate Resource",
                        "value": _example(
                            "CONFLICT",
                            "Customer with identifier 'rajesh.kumar@email.com' already exists"
                        )
                    },
                    "invalid_transition": {
                        "summary": "Invalid Status Transition",
                        "value": _example(
                            "INVALID_STATUS_TRANSITION",
                            "Cannot change interaction status from 'completed' to 'paused'"
                        )
                    },
                    "integrity_error": {
                        "summary": "Database Integrity Error",
                        "value": _example(
                            "INTEGRITY_ERROR",
                            "Constraint violation: Duplicate value for unique field"
                        )
                    }
                }
            }
        }
    },
    413: {
        "description": "Payload Too Large - Request body exceeds the size limit",
        "model": APIErrorResponse,
        "content": {
            "application/json": {
                "example": _example(
                    "PAYLOAD_TOO_LARGE",
                    "Request body exceeds maximum allowed size of 1048576 bytes"
                )
            }
        }
    },
    422: {
        "description": "Unprocessable Entity - Validation error",
        "model": APIErrorResponse,
        "content": {
            "application/json": {
                "examples": {
                    "validation_error": {
                        "summary": "Validation Error",
                        "value": _example(
                            "VALIDATION_ERROR",
                            "Request validation failed",
                            details=[
                                {
                                    "field": "body -> email",
                                    "message": "value is not a valid email address",
                                    "type": "value_error",
                                    "input": "invalid-email"
                                }
                            ]
                        )
                    },
                    "missing_reference": {
                        "summary": "Missing Related Record",
                        "value": _example(
                            "VALIDATION_ERROR",
                            "Broker referenced by 'broker_id' does not exist: 99"
                        )
                    }
                }
            }
        }
    },
    500: {
        "description": "Internal Server Error - Unexpected error",
        "model": APIErrorResponse,
        "content": {
            "application/json": {
                "example": _example(
                    "INTERNAL_SERVER_ERROR",
                    "An unexpected error occurred. Please try again later."
                )
            }
        }
    },
    503: {
        "description": "Service Unavailable - Database unreachable",
        "model": APIErrorResponse,
        "content": {
            "application/json": {
                "example": _example("SERVICE_UNAVAILABLE", "Service temporarily unavailable")
            }
        }
    }
}


def get_error_responses(*status_codes: int) -> Dict[int, Dict[str, Any]]:
    """
    Get error response schemas for specific status codes.

    Args:
        status_codes: HTTP status codes to include

    Returns:
        Dictionary of error response schemas
    """
    return {
        code: COMMON_ERROR_RESPONSES[code]
        for code in status_codes
        if code in COMMON_ERROR_RESPONSES
    }


def get_common_error_responses() -> Dict[int, Dict[str, Any]]:
    """Get common error response schemas for most endpoints."""
    return get_error_responses(400, 404, 422, 500)


def get_crud_error_responses() -> Dict[int, Dict[str, Any]]:
    """Get error response schemas for CRUD operations."""
    return get_error_responses(400, 404, 409, 413, 422, 500)
