"""Customer DTOs for the Service Layer.

Framework-agnostic data transfer objects using Pydantic v2.
These are the contracts between the API layer (DRF views) and the
Service layer.  DTOs are immutable (``frozen=True``) and accept the
camelCase keys used on the wire (``zipCode``) as well as snake_case.

- ``AddressDTO``: a complete postal address.
- ``CustomerRequestDTO``: input for create and full update (PUT).
- ``CustomerPatchRequestDTO``: input for partial update (PATCH).
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator

from modules.customers.models import Address


def _not_blank(v: Optional[str]) -> Optional[str]:
    if v is not None and not v.strip():
        raise ValueError("must not be blank")
    return v


class AddressDTO(BaseModel):
    """Immutable DTO for a postal address; every component is required."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    street: str
    city: str
    state: str
    zip_code: str = Field(alias="zipCode")
    country: str

    @field_validator("street", "city", "state", "zip_code", "country")
    @classmethod
    def components_not_blank(cls, v: str) -> str:
        return _not_blank(v)

    def to_entity(self) -> Address:
        return Address(
            street=self.street,
            city=self.city,
            state=self.state,
            zip_code=self.zip_code,
            country=self.country,
        )


class CustomerRequestDTO(BaseModel):
    """Immutable DTO for customer create / replace requests.

    Validates:
    - ``name`` and ``phone`` are present and not blank.
    - ``email`` is a well-formed address (Pydantic ``EmailStr``).
    - ``address`` is a complete ``AddressDTO``.
    """

    model_config = ConfigDict(frozen=True)

    name: str
    email: EmailStr
    phone: str
    address: AddressDTO

    @field_validator("name", "phone")
    @classmethod
    def required_not_blank(cls, v: str) -> str:
        return _not_blank(v)


class CustomerPatchRequestDTO(BaseModel):
    """Immutable DTO for partial customer updates.

    All fields are optional; only supplied fields will be changed.  An
    address, when supplied, replaces the whole address.
    """

    model_config = ConfigDict(frozen=True)

    name: Optional[str] = None
    email: Optional[EmailStr] = None
    phone: Optional[str] = None
    address: Optional[AddressDTO] = None

    @field_validator("name", "phone")
    @classmethod
    def supplied_not_blank(cls, v: Optional[str]) -> Optional[str]:
        return _not_blank(v)

    def has_any_field(self) -> bool:
        return any(
            value is not None
            for value in (self.name, self.email, self.phone, self.address)
        )
