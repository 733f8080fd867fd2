"""Tests for the health endpoints."""

from unittest.mock import AsyncMock

from sqlalchemy.exc import OperationalError

from backoffice.boundary.db import get_async_db


def test_health_returns_healthy(client):
    response = client.get("/api/v1/health")

    assert response.status_code == 200
    assert response.json() == {"status": "healthy", "message": "Server Healthy"}


def test_health_db_runs_select_one(app, client):
    session = AsyncMock()
    app.dependency_overrides[get_async_db] = lambda: session

    response = client.get("/api/v1/health/db")

    assert response.status_code == 200
    session.execute.assert_awaited_once()
    assert str(session.execute.await_args.args[0]) == "SELECT 1"


def test_health_db_reports_unavailable_database(app, client):
    session = AsyncMock()
    session.execute.side_effect = OperationalError("SELECT 1", {}, Exception("connection refused"))
    app.dependency_overrides[get_async_db] = lambda: session

    response = client.get("/api/v1/health/db")

    assert response.status_code == 503


def test_responses_carry_correlation_id(client):
    response = client.get("/api/v1/health", headers={"X-Correlation-ID": "abc-123"})

    assert response.headers["X-Correlation-ID"] == "abc-123"
