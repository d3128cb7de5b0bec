"""Customer domain exceptions.

Raised by the domain, the query engine and the Service Layer when input
is rejected.  The API layer never catches these itself: the project-wide
exception handler (``modules.core.exceptions``) translates them into
structured HTTP error responses.
"""

from __future__ import annotations

from typing import Any, Optional


class CustomerError(Exception):
    """Base class for customer errors.

    ``field`` and ``value`` identify the offending input, when there is one.
    """

    def __init__(
        self, message: str, field: Optional[str] = None, value: Any = None
    ) -> None:
        super().__init__(message)
        self.field = field
        self.value = value


class CustomerNotFound(CustomerError):
    """The requested customer does not exist."""

    def __init__(self, customer_id: Any) -> None:
        super().__init__(
            f"Customer not found with ID: {customer_id}",
            field="id",
            value=customer_id,
        )
        self.customer_id = customer_id


class InvalidCustomerData(CustomerError):
    """Customer data or a service argument is missing or malformed."""

    @classmethod
    def null_or_empty(cls, field: str, value: Any = None) -> InvalidCustomerData:
        return cls(f"Customer {field} cannot be null or empty", field, value)

    @classmethod
    def null_customer(cls) -> InvalidCustomerData:
        return cls("Customer cannot be null", "customer")

    @classmethod
    def null_customer_id(cls) -> InvalidCustomerData:
        return cls("Customer ID cannot be null", "customerId")

    @classmethod
    def empty_patch(cls) -> InvalidCustomerData:
        return cls(
            "At least one field must be provided for PATCH operation",
            "patchRequest",
        )


class InvalidEmailFormat(InvalidCustomerData):
    """The email address is syntactically invalid."""

    def __init__(self, email: str, reason: str) -> None:
        super().__init__(f"Invalid email format: '{email}'. {reason}", "email", email)


class InvalidAddress(InvalidCustomerData):
    """An address component is missing or blank."""

    def __init__(self, field: str) -> None:
        super().__init__(
            f"Invalid address field '{field}': cannot be null or empty",
            f"address.{field}",
        )


class NullSearchCriteria(InvalidCustomerData):
    """A query was executed without search criteria."""

    def __init__(self) -> None:
        super().__init__("Search criteria cannot be null", "searchCriteria")


class InvalidPagination(InvalidCustomerData):
    """Negative page or non-positive size on the strict listing path."""


class InvalidDateFormat(CustomerError):
    """A date bound is not an ISO-8601 local date-time."""

    EXPECTED_FORMAT = "yyyy-MM-dd'T'HH:mm:ss"

    def __init__(self, field: str, value: str) -> None:
        super().__init__(
            f"Invalid date format: '{value}'. Expected format: {self.EXPECTED_FORMAT}",
            field,
            value,
        )
