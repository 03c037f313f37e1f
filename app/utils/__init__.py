"""
Utility modules for the Real Estate CRM API.
"""

from .exceptions import (
    APIException,
    ValidationError,
    NotFoundError,
    ConflictError,
    BadRequestError,
    ServiceUnavailableError,
    PayloadTooLargeError,
    DuplicateResourceError,
    InvalidStatusTransitionError,
    MissingReferenceError,
)

# Dependencies are imported directly where needed to avoid circular imports

__all__ = [
    "APIException",
    "ValidationError",
    "NotFoundError",
    "ConflictError",
    "BadRequestError",
    "ServiceUnavailableError",
    "PayloadTooLargeError",
    "DuplicateResourceError",
    "InvalidStatusTransitionError",
    "MissingReferenceError",
]
