"""Customer query engine: match, sort and paginate a snapshot.

The single implementation of customer filtering used by every listing
and search path.  It reads a snapshot of customers (as returned by
``ICustomerRepository.list``) and never mutates it or the customers in it.

Matching rules (all must hold):

1. Free text: a case-insensitive substring of name, email, phone, city,
   state or country.
2. Per-field filters: each set filter must be a case-insensitive
   substring of its field (include-on-match).
3. Date bounds: ``created_at`` / ``updated_at`` inside the inclusive
   ``[after, before]`` range of their respective bounds.

Sorting is stable and multi-key; pagination slices the sorted matches.
"""

from __future__ import annotations

import time
from datetime import datetime
from typing import Callable, Dict, Iterable, List, Optional, Tuple

import structlog

from modules.customers.criteria import PageResult, SearchCriteria, SortField
from modules.customers.exceptions import NullSearchCriteria
from modules.customers.models import Customer

logger = structlog.get_logger(__name__)

# (criteria attribute, customer accessor) for each per-field filter.
FIELD_FILTER_ACCESSORS: Tuple[Tuple[str, Callable[[Customer], str]], ...] = (
    ("name", lambda c: c.name),
    ("email", lambda c: c.email),
    ("phone", lambda c: c.phone),
    ("city", lambda c: c.address.city),
    ("state", lambda c: c.address.state),
    ("country", lambda c: c.address.country),
    ("zip_code", lambda c: c.address.zip_code),
)

SORT_KEY_ACCESSORS: Dict[SortField, Callable[[Customer], object]] = {
    SortField.NAME: lambda c: c.name.lower(),
    SortField.EMAIL: lambda c: c.email.lower(),
    SortField.PHONE: lambda c: c.phone.lower(),
    SortField.CITY: lambda c: c.address.city.lower(),
    SortField.STATE: lambda c: c.address.state.lower(),
    SortField.COUNTRY: lambda c: c.address.country.lower(),
    SortField.ZIPCODE: lambda c: c.address.zip_code.lower(),
    SortField.CREATEDAT: lambda c: c.created_at,
    SortField.UPDATEDAT: lambda c: c.updated_at,
}


def _contains(value: Optional[str], term: str) -> bool:
    return value is not None and term.lower() in value.lower()


def _in_range(
    value: datetime, after: Optional[datetime], before: Optional[datetime]
) -> bool:
    if after is not None and value < after:
        return False
    return before is None or value <= before


class CustomerQueryEngine:
    """Stateless matcher/sorter/paginator over customer snapshots."""

    def execute(
        self, criteria: Optional[SearchCriteria], customers: Iterable[Customer]
    ) -> PageResult[Customer]:
        """Run *criteria* against *customers* and return the requested page.

        Raises:
            NullSearchCriteria: if ``criteria`` is ``None``.
        """
        if criteria is None:
            raise NullSearchCriteria()

        started = time.monotonic()
        matches = self.filter(criteria, customers)
        if criteria.has_sorting:
            matches = self.sort(criteria, matches)

        total = len(matches)
        start = criteria.page * criteria.size
        end = min(start + criteria.size, total)
        content = matches[start:end] if start < total else []

        logger.info(
            "customer.search.executed",
            total_elements=total,
            page=criteria.page,
            size=criteria.size,
            sort_keys=len(criteria.sort_keys),
            duration_ms=round((time.monotonic() - started) * 1000, 2),
        )
        return PageResult(
            content=content,
            page=criteria.page,
            size=criteria.size,
            total_elements=total,
        )

    # ------------------------------------------------------------------
    # Matching
    # ------------------------------------------------------------------

    def filter(
        self, criteria: SearchCriteria, customers: Iterable[Customer]
    ) -> List[Customer]:
        """Every customer that satisfies *criteria*, in input order."""
        return [c for c in customers if self.matches(c, criteria)]

    def matches(self, customer: Customer, criteria: SearchCriteria) -> bool:
        if criteria.has_search_text and not self._matches_text(
            customer, criteria.search_text
        ):
            return False

        for attr, accessor in FIELD_FILTER_ACCESSORS:
            term = getattr(criteria, attr)
            if term is not None and not _contains(accessor(customer), term):
                return False

        return _in_range(
            customer.created_at, criteria.created_after, criteria.created_before
        ) and _in_range(
            customer.updated_at, criteria.updated_after, criteria.updated_before
        )

    @staticmethod
    def _matches_text(customer: Customer, text: str) -> bool:
        address = customer.address
        return any(
            _contains(value, text)
            for value in (
                customer.name,
                customer.email,
                customer.phone,
                address.city,
                address.state,
                address.country,
            )
        )

    # ------------------------------------------------------------------
    # Sorting
    # ------------------------------------------------------------------

    def sort(
        self, criteria: SearchCriteria, customers: List[Customer]
    ) -> List[Customer]:
        """Order *customers* by the criteria's sort keys.

        Sorts once per key, last key first; Python's sort is stable, so the
        first key decides and ties fall through to the following keys.
        """
        ordered = list(customers)
        for key in reversed(criteria.sort_keys):
            ordered.sort(key=SORT_KEY_ACCESSORS[key.field], reverse=key.descending)
        return ordered
