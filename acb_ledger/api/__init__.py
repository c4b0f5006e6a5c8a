"""API layer package for FastAPI application and route composition."""

from .application import create_api_application
from .serialization import api_serialize_capital_gains, api_serialize_capital_gains_run

__all__ = ["create_api_application", "api_serialize_capital_gains", "api_serialize_capital_gains_run"]
