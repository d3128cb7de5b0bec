"""Integration tests for Customer API endpoints.

Covers:
- CRUD operations via /api/v1/customers/.
- Domain exception mapping (400, 404).
- Open access: no credentials are required.
"""

from __future__ import annotations

import uuid

import pytest

pytestmark = pytest.mark.integration

URL = "/api/v1/customers/"


def _payload(**overrides) -> dict:
    data = {
        "name": "Rajesh Kumar",
        "email": "rajesh@example.com",
        "phone": "+91-9876543210",
        "address": {
            "street": "12 Marine Drive",
            "city": "Mumbai",
            "state": "Maharashtra",
            "zipCode": "400001",
            "country": "India",
        },
    }
    data.update(overrides)
    return data


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def sample_customer(api_client):
    """A customer created through the API."""
    response = api_client.post(URL, _payload(), format="json")
    assert response.status_code == 201
    return response.json()


# ===========================================================================
# Create
# ===========================================================================


class TestCreateCustomer:
    def test_create_returns_201(self, api_client, customer_repository):
        response = api_client.post(
            URL, _payload(email="  Rajesh@Example.COM "), format="json"
        )

        assert response.status_code == 201
        data = response.json()
        assert uuid.UUID(data["id"])
        assert data["email"] == "rajesh@example.com"
        assert data["address"]["zipCode"] == "400001"
        assert data["createdAt"] == data["updatedAt"]
        assert customer_repository.count() == 1

    def test_missing_field_returns_400(self, api_client, customer_repository):
        payload = _payload()
        del payload["phone"]
        response = api_client.post(URL, payload, format="json")

        assert response.status_code == 400
        assert response.json()["errors"][0]["attr"] == "phone"
        assert customer_repository.count() == 0

    def test_invalid_email_returns_400(self, api_client):
        response = api_client.post(URL, _payload(email="not-an-email"), format="json")
        assert response.status_code == 400
        assert response.json()["errors"][0]["attr"] == "email"

    def test_blank_address_component_returns_400(self, api_client):
        payload = _payload()
        payload["address"]["city"] = "   "
        response = api_client.post(URL, payload, format="json")
        assert response.status_code == 400
        assert response.json()["errors"][0]["attr"] == "address.city"

    def test_no_credentials_needed(self, api_client):
        assert api_client.get(URL).status_code == 200


# ===========================================================================
# Retrieve
# ===========================================================================


class TestRetrieveCustomer:
    def test_retrieve(self, api_client, sample_customer):
        response = api_client.get(f"{URL}{sample_customer['id']}/")
        assert response.status_code == 200
        assert response.json() == sample_customer

    def test_unknown_id_returns_404(self, api_client):
        response = api_client.get(f"{URL}{uuid.uuid4()}/")
        assert response.status_code == 404
        error = response.json()["errors"][0]
        assert error["code"] == "customer_not_found"

    def test_malformed_id_returns_404(self, api_client):
        response = api_client.get(f"{URL}not-a-uuid/")
        assert response.status_code == 404


# ===========================================================================
# Update (PUT)
# ===========================================================================


class TestUpdateCustomer:
    def test_put_replaces_customer(self, api_client, sample_customer):
        payload = _payload(name="Rajesh K.", phone="+91-1111111111")
        payload["address"]["city"] = "Pune"

        response = api_client.put(
            f"{URL}{sample_customer['id']}/", payload, format="json"
        )

        assert response.status_code == 200
        data = response.json()
        assert data["id"] == sample_customer["id"]
        assert data["name"] == "Rajesh K."
        assert data["address"]["city"] == "Pune"
        assert data["createdAt"] == sample_customer["createdAt"]
        assert data["updatedAt"] >= sample_customer["updatedAt"]

    def test_put_requires_full_payload(self, api_client, sample_customer):
        response = api_client.put(
            f"{URL}{sample_customer['id']}/", {"name": "Only"}, format="json"
        )
        assert response.status_code == 400

    def test_put_unknown_returns_404(self, api_client):
        response = api_client.put(f"{URL}{uuid.uuid4()}/", _payload(), format="json")
        assert response.status_code == 404


# ===========================================================================
# Partial update (PATCH)
# ===========================================================================


class TestPatchCustomer:
    def test_patch_changes_only_given_fields(self, api_client, sample_customer):
        response = api_client.patch(
            f"{URL}{sample_customer['id']}/",
            {"phone": "+91-2000000000"},
            format="json",
        )

        assert response.status_code == 200
        data = response.json()
        assert data["phone"] == "+91-2000000000"
        assert data["name"] == sample_customer["name"]
        assert data["address"] == sample_customer["address"]

    def test_empty_patch_returns_400(self, api_client, sample_customer):
        response = api_client.patch(
            f"{URL}{sample_customer['id']}/", {}, format="json"
        )
        assert response.status_code == 400
        assert response.json()["errors"][0]["attr"] == "patchRequest"

    def test_patch_unknown_returns_404(self, api_client):
        response = api_client.patch(
            f"{URL}{uuid.uuid4()}/", {"name": "X"}, format="json"
        )
        assert response.status_code == 404


# ===========================================================================
# Delete
# ===========================================================================


class TestDeleteCustomer:
    def test_delete(self, api_client, sample_customer, customer_repository):
        response = api_client.delete(f"{URL}{sample_customer['id']}/")

        assert response.status_code == 204
        assert customer_repository.count() == 0
        assert api_client.get(f"{URL}{sample_customer['id']}/").status_code == 404

    def test_delete_unknown_returns_404(self, api_client):
        response = api_client.delete(f"{URL}{uuid.uuid4()}/")
        assert response.status_code == 404
