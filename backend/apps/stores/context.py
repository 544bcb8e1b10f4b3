from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

from django.conf import settings


@dataclass
class WorkContext:
    """Request-scoped facts the cart rules consult: current store and impersonation."""

    current_store_id: int
    original_customer_if_impersonated: Optional[Any] = None
    language: Optional[str] = None

    @classmethod
    def default(cls, **overrides) -> "WorkContext":
        store_id = overrides.pop("current_store_id", None)
        if store_id is None:
            store_id = getattr(settings, "CURRENT_STORE_ID", 1)
        return cls(current_store_id=store_id, **overrides)
