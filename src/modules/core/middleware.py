import time
import uuid
from contextvars import ContextVar
from typing import Callable

import structlog
from django.conf import settings
from django.http import HttpRequest, HttpResponse

correlation_id_var: ContextVar[str] = ContextVar("correlation_id", default="")

logger = structlog.get_logger(__name__)

DEFAULT_HEADER = "X-Request-ID"


def _meta_key(header: str) -> str:
    return "HTTP_" + header.upper().replace("-", "_")


class CorrelationIdMiddleware:
    """Tag every request with a correlation ID and log its lifecycle.

    The header name comes from ``settings.CORRELATION_ID_HEADER`` (default
    ``X-Request-ID``). An incoming value is reused; otherwise a new UUID4 is
    generated. The ID is bound into structlog's context variables so every
    log line of the request carries it, and it is echoed back on the
    response.
    """

    def __init__(self, get_response: Callable[[HttpRequest], HttpResponse]) -> None:
        self.get_response = get_response
        self.header = getattr(settings, "CORRELATION_ID_HEADER", DEFAULT_HEADER)
        self.meta_key = _meta_key(self.header)

    def __call__(self, request: HttpRequest) -> HttpResponse:
        cid = request.META.get(self.meta_key) or str(uuid.uuid4())
        correlation_id_var.set(cid)

        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(correlation_id=cid)

        started = time.monotonic()
        logger.info(
            "request.started",
            method=request.method,
            path=request.get_full_path(),
        )

        response = self.get_response(request)

        logger.info(
            "request.finished",
            method=request.method,
            path=request.get_full_path(),
            status_code=response.status_code,
            duration_ms=round((time.monotonic() - started) * 1000, 2),
        )

        response[self.header] = cid
        return response
