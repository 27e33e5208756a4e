"""
Integration tests for health, scheduler and authentication.
"""

from fastapi.testclient import TestClient


class TestHealth:

    def test_health_reports_database(self, client: TestClient):
        response = client.get("/api/health")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert data["checks"]["database"] == "connected"
        assert data["checks"]["scheduler"] == "stopped"

    def test_healthz(self, client: TestClient):
        assert client.get("/api/healthz").json() == {"status": "healthy"}


class TestScheduler:

    def test_status_lists_workflows(self, client: TestClient):
        response = client.get("/api/scheduler/status")

        assert response.status_code == 200
        data = response.json()
        assert "running" in data["scheduler"]
        assert data["workflows"]["memory_decay"]["workflow"] == "memory_decay"

    def test_unknown_workflow_returns_404(self, client: TestClient):
        response = client.post("/api/scheduler/workflows/light_sleep/trigger")

        assert response.status_code == 404


class TestAuthentication:

    def test_feed_requires_auth(self, anonymous_client: TestClient):
        response = anonymous_client.get("/api/feed")

        assert response.status_code == 401
        assert response.headers["www-authenticate"] == "Bearer"

    def test_decay_trigger_requires_secret_or_user(self, anonymous_client: TestClient):
        response = anonymous_client.post("/api/words/memory-decay", headers={"Authorization": "Bearer wrong"})

        assert response.status_code == 401

    def test_health_is_public(self, anonymous_client: TestClient):
        assert anonymous_client.get("/api/healthz").status_code == 200
