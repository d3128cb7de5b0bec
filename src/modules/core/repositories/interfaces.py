"""Generic repository interface (Dependency Inversion Principle).

Provides ``IRepository[T]``, the base abstract class that all
domain-specific repository interfaces extend.  Service-layer code
depends on this abstraction, never on a concrete storage backend.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Generic, List, Optional, TypeVar
from uuid import UUID

T = TypeVar("T")


class IRepository(ABC, Generic[T]):
    """Base generic repository contract.

    Type parameter ``T`` represents the domain entity managed by the
    repository (e.g. ``Customer``).
    """

    @abstractmethod
    def get_by_id(self, id: Optional[UUID]) -> Optional[T]:
        """Retrieve an entity by its identifier, or ``None``."""

    @abstractmethod
    def list(self) -> List[T]:
        """Return a snapshot of every entity.

        The returned list is a copy: callers may sort or slice it freely.
        """

    @abstractmethod
    def save(self, entity: T) -> T:
        """Persist (create or overwrite) an entity."""

    @abstractmethod
    def update(self, id: Optional[UUID], entity: T) -> Optional[T]:
        """Replace the entity stored under ``id``.

        Returns ``None`` when ``id`` is unknown.
        """

    @abstractmethod
    def delete(self, id: Optional[UUID]) -> bool:
        """Remove an entity by ID.  ``False`` when it did not exist."""

    @abstractmethod
    def exists(self, id: Optional[UUID]) -> bool:
        """Whether an entity with ``id`` is stored."""

    @abstractmethod
    def count(self) -> int:
        """Number of stored entities."""
