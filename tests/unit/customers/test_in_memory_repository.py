"""Unit tests for InMemoryCustomerRepository.

Covers:
- Interface compliance.
- save / get_by_id / list / update / delete / exists / count.
- Unknown and missing IDs, snapshot isolation, concurrent writers.
"""

from __future__ import annotations

import threading
import uuid

import pytest
from freezegun import freeze_time

from modules.customers.exceptions import InvalidCustomerData
from modules.customers.models import Address, Customer
from modules.customers.repositories import (
    ICustomerRepository,
    InMemoryCustomerRepository,
)

pytestmark = pytest.mark.unit


def _make_customer(**overrides) -> Customer:
    defaults = {
        "name": "Priya Sharma",
        "email": f"{uuid.uuid4().hex[:8]}@example.com",
        "phone": "+91-8012345678",
        "address": Address(
            street="4 MG Road",
            city="Bangalore",
            state="Karnataka",
            zip_code="560001",
            country="India",
        ),
    }
    defaults.update(overrides)
    return Customer(**defaults)


@pytest.fixture()
def repo():
    return InMemoryCustomerRepository()


class TestInterface:
    def test_is_customer_repository(self, repo):
        assert isinstance(repo, ICustomerRepository)

    def test_starts_empty(self, repo):
        assert repo.count() == 0
        assert repo.list() == []


class TestSaveAndGet:
    def test_save_then_get(self, repo):
        customer = _make_customer()
        assert repo.save(customer) is customer
        assert repo.get_by_id(customer.id) is customer

    def test_save_none_rejected(self, repo):
        with pytest.raises(InvalidCustomerData) as exc_info:
            repo.save(None)
        assert exc_info.value.field == "customer"

    def test_save_same_id_overwrites(self, repo):
        customer = _make_customer()
        repo.save(customer)
        repo.save(_make_customer(id=customer.id, name="Other"))
        assert repo.count() == 1
        assert repo.get_by_id(customer.id).name == "Other"

    def test_get_unknown_returns_none(self, repo):
        assert repo.get_by_id(uuid.uuid4()) is None

    def test_get_none_returns_none(self, repo):
        assert repo.get_by_id(None) is None


class TestList:
    def test_list_returns_all(self, repo):
        customers = [repo.save(_make_customer()) for _ in range(3)]
        assert {c.id for c in repo.list()} == {c.id for c in customers}

    def test_list_is_a_snapshot(self, repo):
        repo.save(_make_customer())
        snapshot = repo.list()
        repo.save(_make_customer())
        snapshot.clear()
        assert repo.count() == 2


class TestUpdate:
    def test_update_replaces_and_touches(self, repo):
        with freeze_time("2025-01-01 10:00:00"):
            original = repo.save(_make_customer())
        replacement = _make_customer(name="Priya S.", created_at=original.created_at)

        with freeze_time("2025-01-05 10:00:00"):
            saved = repo.update(original.id, replacement)

        assert saved.id == original.id
        assert saved.name == "Priya S."
        assert saved.updated_at > saved.created_at
        assert repo.get_by_id(original.id) is saved

    def test_update_unknown_returns_none(self, repo):
        assert repo.update(uuid.uuid4(), _make_customer()) is None
        assert repo.count() == 0

    def test_update_none_id_returns_none(self, repo):
        assert repo.update(None, _make_customer()) is None


class TestDeleteExistsCount:
    def test_delete_existing(self, repo):
        customer = repo.save(_make_customer())
        assert repo.delete(customer.id) is True
        assert not repo.exists(customer.id)
        assert repo.count() == 0

    def test_delete_unknown(self, repo):
        assert repo.delete(uuid.uuid4()) is False

    def test_delete_none(self, repo):
        assert repo.delete(None) is False

    def test_exists(self, repo):
        customer = repo.save(_make_customer())
        assert repo.exists(customer.id)
        assert not repo.exists(uuid.uuid4())
        assert not repo.exists(None)


class TestConcurrency:
    def test_parallel_saves_are_all_kept(self, repo):
        customers = [_make_customer() for _ in range(200)]

        def worker(chunk):
            for customer in chunk:
                repo.save(customer)
                repo.list()

        threads = [
            threading.Thread(target=worker, args=(customers[i::4],))
            for i in range(4)
        ]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert repo.count() == 200
