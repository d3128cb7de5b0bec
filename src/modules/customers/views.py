"""Customer API views.

Exposes ``CustomerService`` and ``CustomerSearchService`` via HTTP using a
DRF ViewSet.  Request bodies are validated into Pydantic DTOs; domain
exceptions propagate to the project exception handler
(``modules.core.exceptions``), which renders them as structured errors.
"""

from __future__ import annotations

from typing import Optional

from django.apps import apps
from drf_spectacular.utils import OpenApiResponse, extend_schema
from rest_framework import status
from rest_framework.decorators import action
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.viewsets import GenericViewSet

from modules.customers.criteria import PageResult
from modules.customers.dtos import CustomerPatchRequestDTO, CustomerRequestDTO
from modules.customers.repositories.interfaces import ICustomerRepository
from modules.customers.serializers import (
    CustomerPageSerializer,
    CustomerQuerySerializer,
    CustomerSerializer,
)
from modules.customers.services import CustomerSearchService, CustomerService


class CustomerViewSet(GenericViewSet):
    """ViewSet for Customer CRUD, listing and search.

    The repository is injected: pass ``repository=`` to ``as_view`` or let
    it default to the store created by ``CustomersConfig``.
    """

    serializer_class = CustomerSerializer
    repository: Optional[ICustomerRepository] = None

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        repository = self.repository
        if repository is None:
            repository = apps.get_app_config("customers").repository
        self._service = CustomerService(repository=repository)
        self._search = CustomerSearchService(repository=repository)

    def _query_inputs(self, request: Request) -> dict:
        query = CustomerQuerySerializer(data=request.query_params)
        query.is_valid(raise_exception=True)
        return query.criteria_inputs()

    # ------------------------------------------------------------------
    # List / Search / Retrieve
    # ------------------------------------------------------------------

    @extend_schema(
        parameters=[CustomerQuerySerializer],
        responses={
            200: OpenApiResponse(
                response=CustomerSerializer(many=True),
                description=(
                    "A bare list when neither page nor size is given, "
                    "otherwise a page envelope (see the search endpoint)."
                ),
            )
        },
    )
    def list(self, request: Request) -> Response:
        """GET /api/v1/customers/"""
        result = self._search.list_customers(**self._query_inputs(request))
        if isinstance(result, PageResult):
            return Response(CustomerPageSerializer(result).data)
        return Response(CustomerSerializer(result, many=True).data)

    @extend_schema(
        parameters=[CustomerQuerySerializer],
        responses={200: CustomerPageSerializer},
    )
    @action(detail=False, methods=["get"], url_path="search")
    def search(self, request: Request) -> Response:
        """GET /api/v1/customers/search/"""
        page = self._search.search(**self._query_inputs(request))
        return Response(CustomerPageSerializer(page).data)

    def retrieve(self, request: Request, pk: str | None = None) -> Response:
        """GET /api/v1/customers/{pk}/"""
        customer = self._service.get_customer(pk)
        return Response(CustomerSerializer(customer).data)

    # ------------------------------------------------------------------
    # Create / Update / Destroy
    # ------------------------------------------------------------------

    @extend_schema(request=CustomerRequestDTO, responses={201: CustomerSerializer})
    def create(self, request: Request) -> Response:
        """POST /api/v1/customers/"""
        dto = CustomerRequestDTO.model_validate(request.data)
        customer = self._service.create_customer(dto)
        return Response(
            CustomerSerializer(customer).data, status=status.HTTP_201_CREATED
        )

    @extend_schema(request=CustomerRequestDTO, responses={200: CustomerSerializer})
    def update(self, request: Request, pk: str | None = None) -> Response:
        """PUT /api/v1/customers/{pk}/"""
        dto = CustomerRequestDTO.model_validate(request.data)
        customer = self._service.update_customer(pk, dto)
        return Response(CustomerSerializer(customer).data)

    @extend_schema(
        request=CustomerPatchRequestDTO, responses={200: CustomerSerializer}
    )
    def partial_update(self, request: Request, pk: str | None = None) -> Response:
        """PATCH /api/v1/customers/{pk}/"""
        dto = CustomerPatchRequestDTO.model_validate(request.data)
        customer = self._service.patch_customer(pk, dto)
        return Response(CustomerSerializer(customer).data)

    def destroy(self, request: Request, pk: str | None = None) -> Response:
        """DELETE /api/v1/customers/{pk}/"""
        self._service.delete_customer(pk)
        return Response(status=status.HTTP_204_NO_CONTENT)
