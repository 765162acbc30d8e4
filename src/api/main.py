"""Main FastAPI application entry point."""

from contextlib import asynccontextmanager

from fastapi import FastAPI

from infrastructure.dynamodb import reset_dynamodb_table
from infrastructure.logging import configure_logging
from infrastructure.observability import DefaultStartupProbe
from infrastructure.settings import get_dynamodb_settings, get_settings
from infrastructure.version import __version__
from sites.dependencies import get_country_pack_registry
from sites.presentation import register_exception_handlers
from sites.presentation import router as sites_router


@asynccontextmanager
async def tenant_sites_lifespan(app: FastAPI):
    """Application lifespan context.

    Manages:
    - Logging configuration
    - Country pack registry validation (an unsupported default fails startup)
    - DynamoDB table handle cleanup on shutdown
    """
    configure_logging(get_settings().log_level)
    probe = DefaultStartupProbe()

    registry = get_country_pack_registry()
    probe.application_started(
        version=__version__,
        table_name=get_dynamodb_settings().table_name,
        default_country_code=registry.default_code,
        supported_country_codes=registry.supported_codes(),
    )

    yield

    reset_dynamodb_table()
    probe.application_stopped()


app = FastAPI(
    title="Tenant Sites API",
    description="Multi-tenant site configuration, context entries and derived artifacts",
    version=__version__,
    lifespan=tenant_sites_lifespan,
)

register_exception_handlers(app)

# Include sites bounded context routes
app.include_router(sites_router)


@app.get("/health")
def health():
    """Basic health check endpoint."""
    return {"status": "ok"}
