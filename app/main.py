"""
FastAPI application entry point.
Main application setup and configuration.
"""

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException
from contextlib import asynccontextmanager
from sqlalchemy.exc import SQLAlchemyError
from pydantic import ValidationError as PydanticValidationError
import logging

from app.config import settings
from app.database import test_database_connection, close_db_connection
from app.routers import (
    customers_router,
    properties_router,
    brokers_router,
    visits_router,
    interactions_router,
    property_interests_router,
    categories_router,
    dashboard_router,
)
from app.utils.exceptions import APIException, ServiceUnavailableError
from app.services.error_handler import ErrorHandlerService
from app.middleware.validation import RequestContextMiddleware
from app.middleware.performance import RequestTimingMiddleware

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.log_level),
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s"
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan manager.
    Handles startup and shutdown events.
    """
    logger.info(f"Starting {settings.app_name} v{settings.app_version}")
    logger.info(f"Environment: {settings.environment}")

    db_connected = await test_database_connection()
    if not db_connected:
        logger.error("Failed to connect to database on startup")

    yield

    logger.info("Shutting down application")
    await close_db_connection()


app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
    description="""
    REST backend for a real-estate sales CRM.

    ## Features

    * **Customers**: Lead records with requirements, priority and an assigned broker
    * **Properties**: Listings with a filter panel (price buckets, city, furnishing, parking)
    * **Brokers**: Agents with per-broker statistics
    * **Visits**: Site visits with feedback and ratings
    * **Interactions**: Follow-ups with a start/pause/resume/complete/end lifecycle and overdue tracking
    * **Property interests**: One interest level per customer and property
    * **Dashboard**: Aggregate metrics for the current month
    """,
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_tags=[
        {"name": "Customers", "description": "Customer lead management"},
        {"name": "Properties", "description": "Property listing management and search operations"},
        {"name": "Brokers", "description": "Broker management and statistics"},
        {"name": "Visits", "description": "Property visit records"},
        {"name": "Interactions", "description": "Customer interactions and their lifecycle"},
        {"name": "Property Interests", "description": "Customer interest in specific properties"},
        {"name": "Property Categories", "description": "Category and subcategory lookup tables"},
        {"name": "Dashboard", "description": "Aggregate CRM metrics"},
        {"name": "Health", "description": "System health endpoints"},
    ],
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
    allow_headers=["*"],
    expose_headers=["X-Request-ID", "X-Processing-Time"],
)

app.add_middleware(
    RequestTimingMiddleware,
    slow_request_threshold=settings.slow_request_threshold,
)

# Outermost middleware; request.state.request_id is set before the others run
app.add_middleware(
    RequestContextMiddleware,
    max_request_size=settings.max_request_size,
    enable_request_logging=settings.debug,
)

for router in (
    customers_router,
    properties_router,
    brokers_router,
    visits_router,
    interactions_router,
    property_interests_router,
    categories_router,
    dashboard_router,
):
    app.include_router(router, prefix=settings.api_prefix)


# Global exception handlers using ErrorHandlerService
@app.exception_handler(APIException)
async def api_exception_handler(request: Request, exc: APIException):
    """Handle custom API exceptions with structured error responses."""
    return ErrorHandlerService.handle_api_exception(exc, request)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Handle FastAPI request validation errors with detailed field information."""
    return ErrorHandlerService.handle_validation_error(exc, request)


@app.exception_handler(PydanticValidationError)
async def pydantic_validation_exception_handler(request: Request, exc: PydanticValidationError):
    return ErrorHandlerService.handle_validation_error(exc, request)


@app.exception_handler(SQLAlchemyError)
async def database_exception_handler(request: Request, exc: SQLAlchemyError):
    """Handle database errors with appropriate error responses."""
    return ErrorHandlerService.handle_database_error(exc, request)


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    """Handle HTTP exceptions (including unknown routes) with structured error responses."""
    return ErrorHandlerService.handle_http_exception(exc, request)


@app.exception_handler(Exception)
async def general_exception_handler(request: Request, exc: Exception):
    """Handle unexpected exceptions with secure error responses."""
    return ErrorHandlerService.handle_unexpected_error(exc, request)


@app.get("/", tags=["Health"])
async def root():
    """
    Root endpoint providing basic API information.
    """
    return {
        "message": f"Welcome to {settings.app_name}",
        "version": settings.app_version,
        "environment": settings.environment,
        "status": "healthy",
        "documentation": {
            "swagger_ui": "/docs",
            "redoc": "/redoc",
            "openapi_json": "/openapi.json"
        },
        "api_prefix": settings.api_prefix
    }


@app.get("/health", tags=["Health"])
async def health_check():
    """
    Health check endpoint with database connectivity test.
    Used by container health checks and load balancers.
    """
    db_healthy = await test_database_connection()
    if not db_healthy:
        logger.error("Health check failed: database unreachable")
        raise ServiceUnavailableError("Database connection failed")

    return {
        "status": "healthy",
        "service": settings.app_name,
        "version": settings.app_version,
        "environment": settings.environment,
        "database": "connected"
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "app.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug
    )
