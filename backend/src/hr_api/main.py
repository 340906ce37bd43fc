"""FastAPI application entry point."""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, Response
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.base import BaseHTTPMiddleware

from hr_api.config import get_settings
from hr_api.database import async_session_maker
from hr_api.exceptions import HRAPIError
from hr_api.middleware.error_handler import (
    generic_exception_handler,
    hr_api_exception_handler,
    http_exception_handler,
    sqlalchemy_exception_handler,
    validation_exception_handler,
)
from hr_api.routers import (
    contracts,
    departments,
    employees,
    leave_requests,
    notifications,
    positions,
)
from hr_api.services.notification_hub import NotificationHub
from hr_api.services.notification_service import NotificationService
from hr_api.tasks.scheduler import HrMonitor

logger = logging.getLogger(__name__)


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Middleware to add security headers to all responses."""

    async def dispatch(self, request: Request, call_next) -> Response:
        response = await call_next(request)
        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["X-Frame-Options"] = "DENY"
        response.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"
        if "Cache-Control" not in response.headers:
            response.headers["Cache-Control"] = "no-store, max-age=0"
        if not get_settings().debug:
            response.headers["Strict-Transport-Security"] = "max-age=31536000; includeSubDomains"
        return response


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan handler."""
    config = get_settings()

    # Startup
    monitor: HrMonitor | None = None
    if config.monitoring_enabled:
        monitor = HrMonitor(
            async_session_maker,
            app.state.notifications,
            interval_minutes=config.monitoring_interval_minutes,
            contract_expiry_window_days=config.contract_expiry_window_days,
            leave_notice_window_days=config.leave_notice_window_days,
        )
        monitor.start()
    else:
        logger.info("HR monitor disabled by configuration")
    app.state.monitor = monitor

    yield

    # Shutdown
    if monitor is not None:
        monitor.stop()
    await app.state.notifications.drain()


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    config = get_settings()

    app = FastAPI(
        title=config.app_name,
        version="0.1.0",
        description="HR Administration API",
        lifespan=lifespan,
        docs_url="/docs" if config.debug else None,
        redoc_url="/redoc" if config.debug else None,
    )

    # One hub per process; every publisher shares it
    app.state.hub = NotificationHub()
    app.state.notifications = NotificationService(app.state.hub)
    app.state.monitor = None

    # Domain errors first, then sanitized fallbacks
    app.add_exception_handler(HRAPIError, hr_api_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(SQLAlchemyError, sqlalchemy_exception_handler)
    app.add_exception_handler(Exception, generic_exception_handler)

    allowed_origins = config.cors_origins_list
    if "*" in allowed_origins:
        raise ValueError(
            "CORS_ORIGINS cannot contain '*' wildcard when allow_credentials=True. "
            "Specify explicit origins."
        )

    # Middleware runs in reverse order of addition, so CORS handles preflight first
    app.add_middleware(SecurityHeadersMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=allowed_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type", "X-Requested-With"],
    )

    # Include routers
    app.include_router(employees.router, prefix="/api/employees", tags=["Employees"])
    app.include_router(departments.router, prefix="/api/departments", tags=["Departments"])
    app.include_router(positions.router, prefix="/api/positions", tags=["Positions"])
    app.include_router(contracts.router, prefix="/api", tags=["Contracts"])
    app.include_router(leave_requests.router, prefix="/api", tags=["Leave Requests"])
    app.include_router(notifications.router, prefix="/hubs", tags=["Notifications"])

    @app.get("/health")
    async def health_check() -> dict[str, str]:
        """Health check endpoint."""
        return {"status": "healthy"}

    return app


app = create_app()
