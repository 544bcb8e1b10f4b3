"""In-process entity notifications.

Cart mutations announce inserted/updated/deleted entities through Django
signals so other apps (analytics, checkout attribute cleanup, cache busting)
can subscribe without the cart service importing them.
"""
from __future__ import annotations

from typing import Any, List, Tuple

from django.dispatch import Signal

from .logger import get_logger

entity_inserted = Signal()
entity_updated = Signal()
entity_deleted = Signal()

logger = get_logger(__name__).bind(component="common", layer="events")


class EventPublisher:
    def __init__(self, sender: Any = None):
        self.sender = sender or self.__class__
        self.logger = logger.bind(publisher=getattr(self.sender, "__name__", str(self.sender)))

    def _publish(self, signal: Signal, action: str, entity: Any) -> List[Tuple[Any, Any]]:
        self.logger.debug(
            "Publishing entity event",
            action=action,
            entity_type=entity.__class__.__name__,
            entity_id=getattr(entity, "pk", getattr(entity, "id", None)),
        )
        return signal.send(sender=self.sender, entity=entity, action=action)

    def entity_inserted(self, entity: Any):
        return self._publish(entity_inserted, "inserted", entity)

    def entity_updated(self, entity: Any):
        return self._publish(entity_updated, "updated", entity)

    def entity_deleted(self, entity: Any):
        return self._publish(entity_deleted, "deleted", entity)
