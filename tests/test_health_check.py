from modules.customers.models import Address, Customer


class TestHealthCheck:
    def test_health_check_returns_200(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert "timestamp" in data
        assert "services" in data

    def test_health_check_reports_store_status(self, client):
        response = client.get("/health")
        data = response.json()
        assert data["services"]["customer_store"]["status"] == "up"
        assert "response_time_ms" in data["services"]["customer_store"]

    def test_health_check_reports_customer_count(self, client, customer_repository):
        customer_repository.save(
            Customer(
                name="Amit Patel",
                email="amit@example.com",
                phone="+91-3322334455",
                address=Address(
                    street="7 Park Street",
                    city="Kolkata",
                    state="West Bengal",
                    zip_code="700016",
                    country="India",
                ),
            )
        )
        data = client.get("/health").json()
        assert data["services"]["customer_store"]["customers"] == 1

    def test_health_check_reports_missing_store(self, client, monkeypatch):
        from django.apps import apps

        monkeypatch.delattr(apps.get_app_config("customers"), "repository")
        response = client.get("/health")
        assert response.status_code == 503
        assert response.json()["services"]["customer_store"]["status"] == "down"
