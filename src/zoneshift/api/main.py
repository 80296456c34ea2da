"""FastAPI application for zoneshift."""

from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from zoneshift import __version__
from zoneshift.api.dependencies import state
from zoneshift.api.routers import accounts, migrate, zones
from zoneshift.config import get_settings, load_accounts
from zoneshift.core.digitalocean.client import DigitalOceanClient
from zoneshift.core.exceptions import (
    MigrationStateError,
    MigrationValidationError,
    ProviderError,
)
from zoneshift.core.migrate.orchestrator import MigrationOrchestrator
from zoneshift.logging_config import setup_logging


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager."""
    # Startup
    settings = get_settings()
    setup_logging(settings.log_level.upper())

    state.accounts = await load_accounts(settings.accounts_file)
    state.client = DigitalOceanClient(
        api_url=settings.api_url, timeout=settings.request_timeout
    )
    await state.client.connect()
    state.orchestrator = MigrationOrchestrator(state.client)

    yield

    # Shutdown
    if state.client:
        await state.client.disconnect()
    state.client = None
    state.orchestrator = None


# Create FastAPI app
app = FastAPI(
    title="zoneshift API",
    description="DNS zone migration between DigitalOcean accounts and droplets",
    version=__version__,
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
)

# Include routers
app.include_router(accounts.router, prefix="/api/v1/accounts", tags=["Accounts"])
app.include_router(zones.router, prefix="/api/v1/zones", tags=["Zones"])
app.include_router(migrate.router, prefix="/api/v1/migrate", tags=["Migration"])


@app.exception_handler(MigrationValidationError)
async def validation_error_handler(request: Request, exc: MigrationValidationError):
    return JSONResponse(status_code=422, content={"detail": str(exc)})


@app.exception_handler(MigrationStateError)
async def state_error_handler(request: Request, exc: MigrationStateError):
    return JSONResponse(status_code=409, content={"detail": str(exc)})


@app.exception_handler(ProviderError)
async def provider_error_handler(request: Request, exc: ProviderError):
    return JSONResponse(
        status_code=502,
        content={"detail": exc.message, "provider_status": exc.status_code},
    )


@app.get("/")
async def root():
    """API root endpoint."""
    return {
        "name": "zoneshift API",
        "version": __version__,
        "docs": "/docs",
    }


def run():
    """Run the API server."""
    uvicorn.run(
        "zoneshift.api.main:app",
        host="127.0.0.1",
        port=8080,
    )


if __name__ == "__main__":
    run()
