# =============================================================================
# tests/test_health.py - Health and Root Endpoint Tests
# =============================================================================

from app.dependencies import get_business_service
from tests.fakes import FakeBusinessService


def test_health_ok(client):
    response = client.get("/health")

    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "ok"
    assert body["database"] == "connected"
    assert body["environment"] == "test"
    assert body["timestamp"]


def test_health_reports_database_outage(app, client, store):
    app.dependency_overrides[get_business_service] = lambda: FakeBusinessService(store, healthy=False)

    response = client.get("/health")

    assert response.status_code == 503
    body = response.json()
    assert body["status"] == "error"
    assert body["database"] == "disconnected"


def test_root(client):
    response = client.get("/")

    assert response.status_code == 200
    assert response.json()["message"] == "OvaSight API is running"


def test_unknown_route_has_error_shape(client):
    response = client.get("/api/nowhere")

    assert response.status_code == 404
    assert response.json() == {"error": "Not Found", "code": "HTTP_404"}
