"""Customer service layer (Use Cases).

Orchestrates business logic for the Customer aggregate, delegating
storage to the injected ``ICustomerRepository``.

- ``CustomerService``: create / get / update / patch / delete.
- ``CustomerSearchService``: listing and search.  Chooses, per request,
  between the cheap newest-first listing and the ``CustomerQueryEngine``.

Pagination strictness differs on purpose between the two listing paths:

=====================  =========================================
path                   invalid page / size
=====================  =========================================
simple page listing    rejected with ``InvalidPagination``
query engine           clamped (page >= 0, 1 <= size <= 100)
=====================  =========================================
"""

from __future__ import annotations

import copy
from typing import TYPE_CHECKING, Any, List, Optional, Union
from uuid import UUID

import structlog

from modules.customers.criteria import DEFAULT_PAGE, DEFAULT_PAGE_SIZE, PageResult
from modules.customers.exceptions import (
    CustomerNotFound,
    InvalidCustomerData,
    InvalidPagination,
    NullSearchCriteria,
)
from modules.customers.filters import build_search_criteria
from modules.customers.models import Customer
from modules.customers.query import CustomerQueryEngine

if TYPE_CHECKING:
    from modules.customers.criteria import SearchCriteria
    from modules.customers.dtos import CustomerPatchRequestDTO, CustomerRequestDTO
    from modules.customers.repositories.interfaces import ICustomerRepository

logger = structlog.get_logger(__name__)

CustomerId = Union[UUID, str]


def _newest_first(customers: List[Customer]) -> List[Customer]:
    return sorted(customers, key=lambda c: c.created_at, reverse=True)


class CustomerService:
    """Application service for Customer use-cases.

    Receives an ``ICustomerRepository`` via constructor injection (DIP).
    """

    def __init__(self, repository: ICustomerRepository) -> None:
        self._repo = repository

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    def create_customer(self, dto: Optional[CustomerRequestDTO]) -> Customer:
        """Create and store a new customer.

        Raises:
            InvalidCustomerData: if ``dto`` is missing or the data is invalid.
        """
        if dto is None:
            raise InvalidCustomerData.null_customer()

        customer = Customer(
            name=dto.name,
            email=dto.email,
            phone=dto.phone,
            address=dto.address.to_entity(),
        )
        customer = self._repo.save(customer)
        logger.info("customer.created", customer_id=str(customer.id))
        return customer

    def update_customer(
        self, id: Optional[CustomerId], dto: Optional[CustomerRequestDTO]
    ) -> Customer:
        """Replace every field of an existing customer.

        Works on a copy of the stored customer, which stays untouched until
        the repository accepts the replacement.  ``created_at`` is kept;
        ``updated_at`` is advanced.

        Raises:
            InvalidCustomerData: if ``id`` or ``dto`` is missing.
            CustomerNotFound: if the customer does not exist.
        """
        customer_id = self._require_id(id)
        if dto is None:
            raise InvalidCustomerData.null_customer()

        replacement = copy.copy(self._get_existing(customer_id))
        replacement.update_info(
            dto.name, dto.email, dto.phone, dto.address.to_entity()
        )
        return self._store_update(customer_id, replacement, "customer.updated")

    def patch_customer(
        self, id: Optional[CustomerId], dto: Optional[CustomerPatchRequestDTO]
    ) -> Customer:
        """Change only the fields supplied in ``dto``.

        Raises:
            InvalidCustomerData: if ``id`` or ``dto`` is missing, or the patch
                carries no field at all.
            CustomerNotFound: if the customer does not exist.
        """
        customer_id = self._require_id(id)
        if dto is None:
            raise InvalidCustomerData.null_customer()
        if not dto.has_any_field():
            raise InvalidCustomerData.empty_patch()

        existing = self._get_existing(customer_id)
        replacement = copy.copy(existing)
        replacement.update_info(
            dto.name if dto.name is not None else existing.name,
            dto.email if dto.email is not None else existing.email,
            dto.phone if dto.phone is not None else existing.phone,
            (
                dto.address.to_entity()
                if dto.address is not None
                else existing.address
            ),
        )
        return self._store_update(customer_id, replacement, "customer.patched")

    def delete_customer(self, id: Optional[CustomerId]) -> None:
        """Remove a customer.

        Raises:
            InvalidCustomerData: if ``id`` is missing.
            CustomerNotFound: if the customer does not exist.
        """
        customer_id = self._require_id(id)
        if not self._repo.exists(customer_id):
            raise CustomerNotFound(id)
        self._repo.delete(customer_id)
        logger.info("customer.deleted", customer_id=str(customer_id))

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def get_customer(self, id: Optional[CustomerId]) -> Customer:
        """Retrieve a single customer by ID.

        Raises:
            InvalidCustomerData: if ``id`` is missing.
            CustomerNotFound: if the customer does not exist.
        """
        customer = self._get_existing(self._require_id(id))
        logger.info("customer.retrieved", customer_id=str(customer.id))
        return customer

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _require_id(id: Optional[CustomerId]) -> UUID:
        """Coerce ``id`` to a UUID; a malformed string is an unknown customer."""
        if id is None:
            raise InvalidCustomerData.null_customer_id()
        if isinstance(id, UUID):
            return id
        try:
            return UUID(str(id))
        except ValueError:
            raise CustomerNotFound(id) from None

    def _get_existing(self, customer_id: UUID) -> Customer:
        customer = self._repo.get_by_id(customer_id)
        if not customer:
            raise CustomerNotFound(customer_id)
        return customer

    def _store_update(
        self, customer_id: UUID, replacement: Customer, event: str
    ) -> Customer:
        saved = self._repo.update(customer_id, replacement)
        if saved is None:
            raise CustomerNotFound(customer_id)
        logger.info(event, customer_id=str(customer_id))
        return saved


class CustomerSearchService:
    """Listing and search over the customer collection.

    All filtering goes through one ``CustomerQueryEngine``; the service
    only decides which path a request takes.
    """

    def __init__(
        self,
        repository: ICustomerRepository,
        engine: Optional[CustomerQueryEngine] = None,
    ) -> None:
        self._repo = repository
        self._engine = engine or CustomerQueryEngine()

    def list_customers(
        self,
        page: Optional[int] = None,
        size: Optional[int] = None,
        **inputs: Any,
    ) -> Union[List[Customer], PageResult[Customer]]:
        """List customers, choosing the path from the request shape.

        ``inputs`` are the raw filter/sort values accepted by
        ``build_search_criteria``.

        - no page/size, no filters: every customer, newest first (list);
        - no page/size, filters: first page of matches, default size (list);
        - page/size, no filters: strict newest-first page (``PageResult``);
        - page/size, filters: query engine page (``PageResult``).

        Raises:
            InvalidDateFormat: a date bound is malformed.
            InvalidPagination: negative page or non-positive size on the
                filter-free paginated path.
        """
        criteria = build_search_criteria(page=page, size=size, **inputs)

        if page is None and size is None:
            return self.execute_all_results(criteria)
        if criteria.has_any_filters:
            return self.execute(criteria)
        return self.list_page(
            DEFAULT_PAGE if page is None else page,
            DEFAULT_PAGE_SIZE if size is None else size,
        )

    def search(
        self, page: int = DEFAULT_PAGE, size: int = DEFAULT_PAGE_SIZE, **inputs: Any
    ) -> PageResult[Customer]:
        """Always run the query engine; page/size are clamped."""
        return self.execute(build_search_criteria(page=page, size=size, **inputs))

    # ------------------------------------------------------------------
    # Criteria entry points
    # ------------------------------------------------------------------

    def execute(self, criteria: Optional[SearchCriteria]) -> PageResult[Customer]:
        """Run the query engine against a fresh store snapshot."""
        if criteria is None:
            raise NullSearchCriteria()
        return self._engine.execute(criteria, self._repo.list())

    def execute_with_pagination(
        self, criteria: Optional[SearchCriteria]
    ) -> PageResult[Customer]:
        """Engine page when filtering, otherwise the newest-first page."""
        if criteria is None:
            raise NullSearchCriteria()
        if criteria.has_any_filters:
            return self.execute(criteria)
        return self.list_page(criteria.page, criteria.size)

    def execute_all_results(self, criteria: Optional[SearchCriteria]) -> List[Customer]:
        """Content of the criteria's page when filtering, else everyone.

        With filters, results stop at the criteria's page size; they are not
        every matching customer.
        """
        if criteria is None:
            raise NullSearchCriteria()
        if criteria.has_any_filters:
            return self.execute(criteria).content
        return self.list_all()

    # ------------------------------------------------------------------
    # Simple listings
    # ------------------------------------------------------------------

    def list_all(self) -> List[Customer]:
        """Every customer, newest first."""
        return _newest_first(self._repo.list())

    def list_page(self, page: int, size: int) -> PageResult[Customer]:
        """One newest-first page; ``total_elements`` is the store count.

        Raises:
            InvalidPagination: ``page < 0`` or ``size <= 0``.
        """
        if page < 0:
            raise InvalidPagination("Page number cannot be negative", "page", page)
        if size <= 0:
            raise InvalidPagination("Page size must be greater than 0", "size", size)

        start = page * size
        content = _newest_first(self._repo.list())[start : start + size]
        return PageResult(
            content=content,
            page=page,
            size=size,
            total_elements=self._repo.count(),
        )
