from unittest.mock import AsyncMock, patch

from fastapi.testclient import TestClient


def test_root(test_client: TestClient) -> None:
    response = test_client.get("/")

    assert response.status_code == 200
    assert response.json()["health"] == "/health"


def test_health_reports_degraded_database(test_client: TestClient) -> None:
    with patch(
        "admissions.core.database.db_client.health_check",
        new_callable=AsyncMock,
        return_value={"status": "unhealthy", "connected": False, "error": "refused"},
    ):
        response = test_client.get("/health")

    assert response.status_code == 200
    assert response.json()["status"] == "degraded"
    assert response.json()["database"] == "unhealthy"


def test_health_reports_healthy_database(test_client: TestClient) -> None:
    with patch(
        "admissions.core.database.db_client.health_check",
        new_callable=AsyncMock,
        return_value={"status": "healthy", "connected": True},
    ):
        response = test_client.get("/health")

    assert response.json()["status"] == "healthy"
