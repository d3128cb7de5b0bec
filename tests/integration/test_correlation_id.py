import logging
import uuid

import pytest

pytestmark = pytest.mark.integration


class TestCorrelationIdMiddleware:
    def test_returns_provided_request_id(self, client):
        custom_id = "customer-list-request-123"
        response = client.get("/api/v1/customers/", HTTP_X_REQUEST_ID=custom_id)
        assert response["X-Request-ID"] == custom_id

    def test_generates_uuid_when_no_request_id(self, client):
        response = client.get("/health")
        request_id = response["X-Request-ID"]
        parsed = uuid.UUID(request_id, version=4)
        assert str(parsed) == request_id

    def test_error_responses_carry_request_id(self, api_client_with_correlation):
        api_client, cid = api_client_with_correlation
        response = api_client.get(f"/api/v1/customers/{uuid.uuid4()}/")
        assert response.status_code == 404
        assert response["X-Request-ID"] == cid

    def test_correlation_id_in_search_logs(self, api_client_with_correlation, caplog):
        api_client, cid = api_client_with_correlation
        with caplog.at_level(logging.INFO):
            api_client.get("/api/v1/customers/search/", {"search": "mumbai"})
        search_records = [
            record.getMessage()
            for record in caplog.records
            if "customer.search.executed" in record.getMessage()
        ]
        assert search_records
        assert all(cid in message for message in search_records)
