"""In-memory implementation of the Customer repository.

Satisfies ``ICustomerRepository`` with a dict guarded by a re-entrant
lock, so concurrent readers and writers never corrupt iteration.
Error handling follows the Null Object pattern: look-ups return ``None``
or ``False`` for unknown IDs and the Service Layer decides how to
translate a missing entity into an error.
"""

from __future__ import annotations

import threading
from typing import Dict, List, Optional
from uuid import UUID

import structlog

from modules.customers.exceptions import InvalidCustomerData
from modules.customers.models import Customer
from modules.customers.repositories.interfaces import ICustomerRepository

logger = structlog.get_logger(__name__)


class InMemoryCustomerRepository(ICustomerRepository):
    """Concrete Customer repository backed by a process-local dict.

    One instance is created at application start-up
    (``CustomersConfig.ready``) and injected wherever it is needed.
    """

    def __init__(self) -> None:
        self._customers: Dict[UUID, Customer] = {}
        self._lock = threading.RLock()

    def get_by_id(self, id: Optional[UUID]) -> Optional[Customer]:
        if id is None:
            return None
        with self._lock:
            return self._customers.get(id)

    def list(self) -> List[Customer]:
        """Return a snapshot list in insertion order."""
        with self._lock:
            return list(self._customers.values())

    def save(self, entity: Customer) -> Customer:
        """Persist (create or overwrite) a customer."""
        if entity is None:
            raise InvalidCustomerData.null_customer()
        with self._lock:
            is_new = entity.id not in self._customers
            self._customers[entity.id] = entity
        logger.info("customer.saved", customer_id=str(entity.id), is_new=is_new)
        return entity

    def update(self, id: Optional[UUID], entity: Customer) -> Optional[Customer]:
        """Replace the customer stored under ``id``.

        The entity takes over ``id`` and its ``updated_at`` is advanced.
        """
        if id is None or entity is None:
            return None
        with self._lock:
            if id not in self._customers:
                return None
            entity.id = id
            entity.touch()
            self._customers[id] = entity
        return entity

    def delete(self, id: Optional[UUID]) -> bool:
        if id is None:
            return False
        with self._lock:
            removed = self._customers.pop(id, None)
        if removed is None:
            return False
        logger.info("customer.removed", customer_id=str(id))
        return True

    def exists(self, id: Optional[UUID]) -> bool:
        if id is None:
            return False
        with self._lock:
            return id in self._customers

    def count(self) -> int:
        with self._lock:
            return len(self._customers)
