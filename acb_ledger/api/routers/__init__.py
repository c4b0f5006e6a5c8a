"""API router package for endpoint composition."""

from .capital_gains import api_create_capital_gains_router
from .health import api_create_health_router

__all__ = ["api_create_capital_gains_router", "api_create_health_router"]
