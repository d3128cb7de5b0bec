import time
from typing import Any, Dict

import structlog
from django.apps import apps
from django.http import HttpRequest, JsonResponse
from django.utils import timezone

logger = structlog.get_logger(__name__)


def health_check(request: HttpRequest) -> JsonResponse:
    """Report whether the customer store answers, with its size."""
    services: Dict[str, Dict[str, Any]] = {}
    overall_healthy = True

    try:
        start = time.monotonic()
        repository = apps.get_app_config("customers").repository
        services["customer_store"] = {
            "status": "up",
            "customers": repository.count(),
            "response_time_ms": round((time.monotonic() - start) * 1000, 2),
        }
    except (LookupError, AttributeError):
        services["customer_store"] = {"status": "down"}
        overall_healthy = False
        logger.error("health_check.store_unavailable")

    status_code = 200 if overall_healthy else 503

    logger.info(
        "health_check.completed",
        status="healthy" if overall_healthy else "unhealthy",
    )

    return JsonResponse(
        {
            "status": "healthy" if overall_healthy else "unhealthy",
            "timestamp": timezone.now().isoformat(),
            "services": services,
        },
        status=status_code,
    )
