"""
FastAPI application with assembled routers.

Initializes the FastAPI app with all API routers and configures the uvicorn server.

Dependencies: fastapi, backoffice.api.routers, uvicorn
System role: API entry point with router assembly and server launch
"""

import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from backoffice.boundary.db import Base, get_async_engine
from backoffice.configs import get_settings
from backoffice.observability.logger import configure_logging
from backoffice.observability.middleware import CorrelationMiddleware, RequestLoggingMiddleware

from .routers import (
    auth_router,
    client_overview_router,
    clients_router,
    contracts_router,
    dashboard_router,
    financials_router,
    hardware_assets_router,
    hardware_assignments_router,
    health_router,
    integrations_admin_router,
    integrations_data_router,
    service_scopes_router,
    services_router,
    team_assignments_router,
    users_router,
)

API_PREFIX = "/api/v1"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan context manager.

    Configures logging, optionally creates tables, and disposes the
    connection pool on shutdown.
    """
    settings = get_settings()
    configure_logging(settings.log_level)
    logger = logging.getLogger("uvicorn")

    # Startup
    if settings.create_tables_on_startup:
        async with get_async_engine().begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info("Database tables ensured")

    yield

    # Shutdown
    await get_async_engine().dispose()
    logger.info("Database connection pool disposed")


def create_app() -> FastAPI:
    """
    Create and configure FastAPI application with routers.

    Returns:
        FastAPI: Configured application instance with all routers registered
    """
    settings = get_settings()
    app = FastAPI(
        title="MSSP Back-Office API",
        description="Clients, contracts, services, hardware, finance and external data for a managed security provider",
        version="0.1.0",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Add observability middleware
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(CorrelationMiddleware)

    # Register all routers with /api/v1 prefix for versioning
    app.include_router(health_router, prefix=API_PREFIX)
    app.include_router(auth_router, prefix=API_PREFIX)
    app.include_router(users_router, prefix=API_PREFIX)
    app.include_router(clients_router, prefix=API_PREFIX)
    app.include_router(client_overview_router, prefix=API_PREFIX)
    app.include_router(services_router, prefix=API_PREFIX)
    app.include_router(contracts_router, prefix=API_PREFIX)
    app.include_router(service_scopes_router, prefix=API_PREFIX)
    app.include_router(hardware_assets_router, prefix=API_PREFIX)
    app.include_router(hardware_assignments_router, prefix=API_PREFIX)
    app.include_router(financials_router, prefix=API_PREFIX)
    app.include_router(team_assignments_router, prefix=API_PREFIX)
    app.include_router(dashboard_router, prefix=API_PREFIX)
    app.include_router(integrations_admin_router, prefix=API_PREFIX)
    app.include_router(integrations_data_router, prefix=API_PREFIX)

    return app


app = create_app()


if __name__ == "__main__":
    uvicorn.run(
        "backoffice.api.main:app",
        host="0.0.0.0",
        port=8000,
    )
