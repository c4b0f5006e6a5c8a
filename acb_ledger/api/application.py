"""FastAPI application factory for the capital-gains service."""

from fastapi import FastAPI

from acb_ledger.config import AppSettings

from .routers import api_create_capital_gains_router, api_create_health_router


def create_api_application(settings: AppSettings) -> FastAPI:
    """Create the FastAPI application instance for the service.

    Args:
        settings: Validated application settings used for run defaults and metadata.

    Returns:
        FastAPI: Framework application instance with all routers mounted.

    Raises:
        ValueError: Raised when settings is invalid.
    """
    application = FastAPI(title="Crypto ACB Ledger")

    @application.get("/", tags=["foundation"])
    def foundation_index() -> dict[str, str]:
        """Return a minimal service identification response.

        Returns:
            dict[str, str]: Service name, status and environment.

        Raises:
            RuntimeError: Raised if route handler cannot produce a response.
        """

        return {
            "service": "crypto-acb-ledger",
            "status": "ready",
            "environment": settings.environment_name,
        }

    application.include_router(api_create_health_router(settings=settings))
    application.include_router(api_create_capital_gains_router(settings=settings))

    return application
