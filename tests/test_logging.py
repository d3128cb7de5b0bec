import logging


def _messages(caplog):
    return [record.getMessage() for record in caplog.records]


class TestRequestLogging:
    def test_request_lifecycle_logged(self, client, caplog):
        with caplog.at_level(logging.INFO):
            client.get("/health")
        messages = " ".join(_messages(caplog))
        assert "request.started" in messages
        assert "request.finished" in messages

    def test_custom_correlation_header(self, client, settings):
        settings.CORRELATION_ID_HEADER = "X-Correlation-ID"
        response = client.get("/health", HTTP_X_CORRELATION_ID="abc-123")
        assert response["X-Correlation-ID"] == "abc-123"


class TestCustomerEventLogging:
    def test_customer_creation_logged(self, api_client, caplog):
        payload = {
            "name": "Priya Sharma",
            "email": "priya@example.com",
            "phone": "+91-8012345678",
            "address": {
                "street": "4 MG Road",
                "city": "Bangalore",
                "state": "Karnataka",
                "zipCode": "560001",
                "country": "India",
            },
        }
        with caplog.at_level(logging.INFO):
            api_client.post("/api/v1/customers/", payload, format="json")
        assert any("customer.created" in m for m in _messages(caplog))

    def test_search_execution_logged(self, api_client, caplog):
        with caplog.at_level(logging.INFO):
            api_client.get("/api/v1/customers/search/", {"search": "x"})
        assert any("customer.search.executed" in m for m in _messages(caplog))

    def test_domain_error_logged_as_warning(self, api_client, caplog):
        with caplog.at_level(logging.WARNING):
            api_client.get("/api/v1/customers/00000000-0000-0000-0000-000000000000/")
        assert any(
            "api.domain_error" in record.getMessage()
            for record in caplog.records
            if record.levelno == logging.WARNING
        )
