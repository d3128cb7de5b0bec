"""Project-wide DRF exception handler.

Every error response shares one envelope::

    {
        "type": "validation_error" | "client_error" | "server_error",
        "errors": [{"code": "...", "detail": "...", "attr": "field" | None}]
    }

Domain exceptions (``CustomerError`` subclasses) and Pydantic validation
errors are translated here, so views never catch them themselves.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

import structlog
from pydantic import ValidationError as PydanticValidationError
from rest_framework import status
from rest_framework.exceptions import APIException, ValidationError
from rest_framework.response import Response
from rest_framework.views import exception_handler as drf_exception_handler

from modules.customers.exceptions import (
    CustomerError,
    CustomerNotFound,
    InvalidDateFormat,
    InvalidPagination,
)

logger = structlog.get_logger(__name__)

VALIDATION_ERROR = "validation_error"
CLIENT_ERROR = "client_error"
SERVER_ERROR = "server_error"


def _error(code: str, detail: Any, attr: Optional[str] = None) -> Dict[str, Any]:
    return {"code": code, "detail": str(detail), "attr": attr}


def _domain_code(exc: CustomerError) -> str:
    if isinstance(exc, CustomerNotFound):
        return "customer_not_found"
    if isinstance(exc, InvalidPagination):
        return "invalid_pagination"
    if isinstance(exc, InvalidDateFormat):
        return "invalid_date_format"
    return "invalid_customer_data"


def _flatten_drf_errors(detail: Any, prefix: Optional[str] = None) -> List[Dict[str, Any]]:
    """Flatten DRF's nested ``ErrorDetail`` structure into a list."""
    if isinstance(detail, dict):
        errors = []
        for key, value in detail.items():
            attr = key if key != "non_field_errors" else None
            if prefix and attr:
                attr = f"{prefix}.{attr}"
            errors.extend(_flatten_drf_errors(value, attr or prefix))
        return errors
    if isinstance(detail, list):
        errors = []
        for value in detail:
            errors.extend(_flatten_drf_errors(value, prefix))
        return errors
    return [_error(getattr(detail, "code", "invalid"), detail, prefix)]


def _envelope(error_type: str, errors: List[Dict[str, Any]], status_code: int) -> Response:
    return Response({"type": error_type, "errors": errors}, status=status_code)


def standardized_exception_handler(exc: Exception, context: Dict[str, Any]) -> Optional[Response]:
    """Translate exceptions into the standard error envelope.

    Returns ``None`` for anything it does not recognise, letting Django
    treat it as a server error.
    """
    if isinstance(exc, CustomerError):
        status_code = (
            status.HTTP_404_NOT_FOUND
            if isinstance(exc, CustomerNotFound)
            else status.HTTP_400_BAD_REQUEST
        )
        logger.warning(
            "api.domain_error",
            error=type(exc).__name__,
            field=exc.field,
            status_code=status_code,
        )
        error_type = CLIENT_ERROR if isinstance(exc, CustomerNotFound) else VALIDATION_ERROR
        return _envelope(
            error_type, [_error(_domain_code(exc), exc, exc.field)], status_code
        )

    if isinstance(exc, PydanticValidationError):
        errors = [
            _error(
                err["type"],
                err["msg"],
                ".".join(str(part) for part in err["loc"]) or None,
            )
            for err in exc.errors()
        ]
        logger.warning("api.request_invalid", error_count=len(errors))
        return _envelope(VALIDATION_ERROR, errors, status.HTTP_400_BAD_REQUEST)

    response = drf_exception_handler(exc, context)
    if response is None:
        return None

    if isinstance(exc, ValidationError):
        error_type = VALIDATION_ERROR
        errors = _flatten_drf_errors(exc.detail)
    else:
        error_type = SERVER_ERROR if response.status_code >= 500 else CLIENT_ERROR
        code = exc.default_code if isinstance(exc, APIException) else "error"
        detail = response.data.get("detail", exc) if isinstance(response.data, dict) else exc
        errors = [_error(code, detail)]

    response.data = {"type": error_type, "errors": errors}
    return response
