"""Customer aggregate and Address value object.

Both validate and normalise on construction, so every instance held by the
store is already valid:

- Customer name/email/phone are required and non-blank; email is
  lower-cased and must be well formed.
- Address street/city/state/zip_code/country are required and non-blank.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional
from uuid import UUID

from modules.core.models import BaseEntity
from modules.customers.validators import validate_address_data, validate_customer_data


@dataclass(frozen=True)
class Address:
    """Postal address.  Value type: equal fields mean equal addresses."""

    street: str
    city: str
    state: str
    zip_code: str
    country: str

    def __post_init__(self) -> None:
        cleaned = validate_address_data(
            street=self.street,
            city=self.city,
            state=self.state,
            zip_code=self.zip_code,
            country=self.country,
        )
        for field, value in cleaned.items():
            object.__setattr__(self, field, value)


class Customer(BaseEntity):
    """Customer aggregate root."""

    def __init__(
        self,
        name: str,
        email: str,
        phone: str,
        address: Address,
        id: Optional[UUID] = None,
        created_at: Optional[datetime] = None,
        updated_at: Optional[datetime] = None,
    ) -> None:
        super().__init__(id=id, created_at=created_at, updated_at=updated_at)
        self._set_properties(name, email, phone, address)

    def _set_properties(
        self, name: str, email: str, phone: str, address: Address
    ) -> None:
        data = validate_customer_data(name, email, phone, address)
        self.name = data.name
        self.email = data.email
        self.phone = data.phone
        self.address = address

    def update_info(self, name: str, email: str, phone: str, address: Address) -> None:
        """Replace the customer's details and advance ``updated_at``."""
        self._set_properties(name, email, phone, address)
        self.touch()

    def __repr__(self) -> str:
        return f"<Customer {self.id} {self.name} <{self.email}>>"
