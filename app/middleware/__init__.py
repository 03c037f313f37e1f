"""
Middleware package for the Real Estate CRM API.
Provides request context and timing middleware.
"""

from .validation import RequestContextMiddleware
from .performance import RequestTimingMiddleware

__all__ = [
    "RequestContextMiddleware",
    "RequestTimingMiddleware"
]
