"""Customer routes.

``customers/`` (list, create), ``customers/search/`` and
``customers/<id>/`` (retrieve, update, partial update, destroy).
"""

from __future__ import annotations

from rest_framework.routers import DefaultRouter

from modules.customers.views import CustomerViewSet

app_name = "customers"

router = DefaultRouter(trailing_slash=True)
router.register("customers", CustomerViewSet, basename="customer")

urlpatterns = router.urls
