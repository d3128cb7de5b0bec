"""Validation and normalisation rules for Customer and Address data.

Email syntax is checked with *email-validator* (the library behind
Pydantic's ``EmailStr``); deliverability is never checked.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, NamedTuple, Optional

from email_validator import EmailNotValidError, validate_email

from modules.customers.exceptions import (
    InvalidAddress,
    InvalidCustomerData,
    InvalidEmailFormat,
)

if TYPE_CHECKING:
    from modules.customers.models import Address

ADDRESS_FIELDS = ("street", "city", "state", "zip_code", "country")

# Field names as exposed by the API.
_ADDRESS_FIELD_LABELS = {"zip_code": "zipCode"}


class CustomerData(NamedTuple):
    name: str
    email: str
    phone: str


def is_blank(value: Optional[str]) -> bool:
    return value is None or not value.strip()


def validate_email_format(email: str) -> None:
    """Raise ``InvalidEmailFormat`` unless *email* is a well-formed address."""
    try:
        validate_email(email.strip(), check_deliverability=False)
    except EmailNotValidError as exc:
        raise InvalidEmailFormat(email, str(exc)) from exc


def validate_customer_data(
    name: Optional[str],
    email: Optional[str],
    phone: Optional[str],
    address: Optional[Address],
) -> CustomerData:
    """Validate customer fields and return them normalised.

    Name and phone are trimmed, email is trimmed and lower-cased.

    Raises:
        InvalidCustomerData: a required field is missing or blank.
        InvalidEmailFormat: the email is malformed.
    """
    for field, value in (("name", name), ("email", email), ("phone", phone)):
        if is_blank(value):
            raise InvalidCustomerData.null_or_empty(field, value)
    validate_email_format(email)
    if address is None:
        raise InvalidCustomerData("Customer address cannot be null", "address")
    return CustomerData(name.strip(), email.strip().lower(), phone.strip())


def validate_address_data(**fields: Optional[str]) -> dict[str, str]:
    """Check every address component is present and return them trimmed.

    Raises:
        InvalidAddress: on the first missing or blank component.
    """
    cleaned = {}
    for field in ADDRESS_FIELDS:
        value = fields.get(field)
        if is_blank(value):
            raise InvalidAddress(_ADDRESS_FIELD_LABELS.get(field, field))
        cleaned[field] = value.strip()
    return cleaned
