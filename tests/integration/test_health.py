"""
Integration Tests - Health and Info Endpoints
"""
from fastapi.testclient import TestClient

from demo_inventory.config.settings import MonitoringSettings
from demo_inventory.serving.api import create_app


class TestHealth:
    """Tests for the health probes in in-memory mode"""

    def test_health(self, client):
        response = client.get("/api/health")

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "healthy"
        assert body["environment"] == "testing"
        assert body["checks"]["database"]["backend"] == "in-memory"

    def test_live(self, client):
        assert client.get("/api/health/live").json() == {"status": "alive"}

    def test_ready(self, client):
        response = client.get("/api/health/ready")

        assert response.status_code == 200
        assert response.json() == {"status": "ready"}

    def test_routed_write_passes_through_middleware(self, client, auth_headers):
        """Test the request middleware does not turn routed requests into 500s"""
        response = client.post(
            "/api/categories", json={"name": "Middleware"}, headers=auth_headers
        )

        assert response.status_code == 201
        assert "X-Request-ID" in response.headers

    def test_request_headers(self, client):
        response = client.get("/api/health/live", headers={"X-Request-ID": "abc-123"})

        assert response.headers["X-Request-ID"] == "abc-123"
        assert response.headers["X-Response-Time"].endswith("ms")


class TestInfo:

    def test_info(self, client):
        body = client.get("/api/info").json()

        assert body["name"] == "Demo Inventory API"
        assert body["storage"] == "in-memory"


class TestMetrics:

    def test_request_metrics_exposed(self, client):
        client.get("/api/products")

        response = client.get("/metrics")

        assert response.status_code == 200
        assert "demo_inventory_http_requests_total" in response.text
        assert 'route="/api/products"' in response.text

    def test_path_parameters_use_route_template(self, client):
        """Test requests to /api/products/{id} share one route label"""
        client.get("/api/products/41")
        client.get("/api/products/42")

        body = client.get("/metrics").text

        assert 'route="/api/products/{product_id}"' in body
        assert 'route="/api/products/42"' not in body

    def test_unknown_path_is_labelled_unmatched(self, client):
        assert client.get("/no/such/path").status_code == 404

        assert 'route="unmatched"' in client.get("/metrics").text

    def test_metrics_can_be_disabled(self, test_settings):
        settings = test_settings.model_copy(
            update={"monitoring": MonitoringSettings(metrics_enabled=False)}
        )

        with TestClient(create_app(settings)) as client:
            assert client.get("/metrics").status_code == 404


class TestStartupSeeding:

    def test_seed_demo_data_on_startup(self, test_settings):
        settings = test_settings.model_copy(update={"seed_demo_data": True})

        with TestClient(create_app(settings)) as client:
            assert len(client.get("/api/categories").json()) == 6
            assert len(client.get("/api/products").json()) == 50

    def test_stores_are_per_app(self, test_settings, auth_headers):
        first = create_app(test_settings)
        second = create_app(test_settings)

        with TestClient(first) as client:
            client.post("/api/categories", json={"name": "Only Here"}, headers=auth_headers)
        with TestClient(second) as client:
            assert client.get("/api/categories").json() == []
