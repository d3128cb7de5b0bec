import pytest

from django.apps import apps
from rest_framework.test import APIClient

from modules.customers.repositories.in_memory import InMemoryCustomerRepository


@pytest.fixture(autouse=True)
def customer_repository(monkeypatch):
    """Give every test an empty customer store."""
    repository = InMemoryCustomerRepository()
    monkeypatch.setattr(
        apps.get_app_config("customers"), "repository", repository
    )
    return repository


@pytest.fixture()
def api_client():
    """DRF APIClient for testing API endpoints."""
    return APIClient()


@pytest.fixture()
def api_client_with_correlation(api_client):
    """APIClient pre-configured with a known correlation ID header."""
    cid = "test-correlation-id-fixture"
    api_client.defaults["HTTP_X_REQUEST_ID"] = cid
    return api_client, cid
