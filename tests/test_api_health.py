"""Tests for API health and service identification endpoints."""

from fastapi.testclient import TestClient

from acb_ledger.api.application import create_api_application
from acb_ledger.config import AppSettings


def test_health_endpoint_reports_ready_engine() -> None:
    """Return deterministic readiness payload for operational checks.

    Returns:
        None: Assertions validate status code and payload.

    Raises:
        AssertionError: Raised when response status or payload is unexpected.
    """

    client = TestClient(create_api_application(settings=AppSettings(environment_name="test")))

    response = client.get("/health")

    assert response.status_code == 200
    assert response.json() == {
        "status": "ok",
        "app": "up",
        "detail": "ledger engine ready",
        "environment": "test",
    }


def test_root_endpoint_identifies_service() -> None:
    """Return service name, readiness and environment at the root path."""

    client = TestClient(create_api_application(settings=AppSettings(environment_name="staging")))

    response = client.get("/")

    assert response.status_code == 200
    assert response.json() == {"service": "crypto-acb-ledger", "status": "ready", "environment": "staging"}
