"""Base entity for the in-memory domain model.

Provides ``BaseEntity``: UUIDv7 identity plus ``created_at`` /
``updated_at`` bookkeeping.  Timestamps come from ``django.utils.timezone``
so they follow the project's ``USE_TZ`` setting (naive local time here,
matching the offset-free date bounds accepted by the query API).
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional
from uuid import UUID

import uuid6
from django.utils import timezone


class BaseEntity:
    """Identity and timestamps shared by every stored entity.

    UUIDv7 keeps identifiers roughly time-ordered, like the primary keys
    of the rest of the platform.
    """

    def __init__(
        self,
        id: Optional[UUID] = None,
        created_at: Optional[datetime] = None,
        updated_at: Optional[datetime] = None,
    ) -> None:
        now = timezone.now()
        self.id = id if id is not None else uuid6.uuid7()
        self.created_at = created_at if created_at is not None else now
        self.updated_at = updated_at if updated_at is not None else self.created_at

    def touch(self) -> None:
        """Advance ``updated_at`` to now."""
        self.updated_at = timezone.now()
