"""Customer DRF serializers for API input/output.

The serializers operate at the Interface layer (API Views).  They handle
HTTP-level concerns only: rendering customers and page envelopes with the
camelCase keys of the public API, and coercing query-string parameters.
Business validation lives in the DTOs and the domain model.
"""

from __future__ import annotations

from typing import Any, Dict

from rest_framework import serializers


class AddressSerializer(serializers.Serializer):
    street = serializers.CharField()
    city = serializers.CharField()
    state = serializers.CharField()
    zipCode = serializers.CharField(source="zip_code")
    country = serializers.CharField()


class CustomerSerializer(serializers.Serializer):
    """Read-only representation of a Customer."""

    id = serializers.UUIDField(read_only=True)
    name = serializers.CharField()
    email = serializers.EmailField()
    phone = serializers.CharField()
    address = AddressSerializer()
    createdAt = serializers.DateTimeField(source="created_at", read_only=True)
    updatedAt = serializers.DateTimeField(source="updated_at", read_only=True)


class CustomerPageSerializer(serializers.Serializer):
    """Page envelope: ``{content, page, size, totalElements, totalPages}``."""

    content = CustomerSerializer(many=True)
    page = serializers.IntegerField()
    size = serializers.IntegerField()
    totalElements = serializers.IntegerField(source="total_elements")
    totalPages = serializers.IntegerField(source="total_pages")


def _optional_text(**kwargs: Any) -> serializers.CharField:
    # Trimming and blank handling belong to the criteria builder.
    return serializers.CharField(
        required=False, allow_blank=True, trim_whitespace=False, **kwargs
    )


class CustomerQuerySerializer(serializers.Serializer):
    """Query-string parameters of the listing and search endpoints.

    Only type coercion happens here: ``page``/``size`` must be integers.
    Their range is enforced by the service (strict or clamped, depending
    on the path).
    """

    page = serializers.IntegerField(required=False)
    size = serializers.IntegerField(required=False)
    search = _optional_text()
    name = _optional_text()
    email = _optional_text()
    phone = _optional_text()
    city = _optional_text()
    state = _optional_text()
    country = _optional_text()
    zipCode = _optional_text(source="zip_code")
    createdAfter = _optional_text(source="created_after")
    createdBefore = _optional_text(source="created_before")
    updatedAfter = _optional_text(source="updated_after")
    updatedBefore = _optional_text(source="updated_before")
    sort = serializers.ListField(
        child=serializers.CharField(allow_blank=True, trim_whitespace=False),
        required=False,
    )

    def criteria_inputs(self) -> Dict[str, Any]:
        """Validated values as keyword arguments for the search service."""
        return dict(self.validated_data)
