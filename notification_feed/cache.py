"""Id-keyed store of fetched notifications."""

import logging
from typing import Dict, Iterable, Optional

from .entities import NotificationEntity

logger = logging.getLogger(__name__)


class FeedPageCache:
    """Every notification fetched during a session, keyed by id.

    Entities are upserted as pages arrive and never evicted. Page order is
    carried by ``PageMeta.notification_ids``, not by this store.
    """

    def __init__(self, entities: Iterable[NotificationEntity] = None):
        self._entities: Dict[str, NotificationEntity] = {}
        if entities:
            self.merge(entities)

    def merge(self, entities: Iterable[NotificationEntity]) -> "FeedPageCache":
        """Upsert ``entities``; a repeated id replaces the stored entity."""
        merged = 0
        for entity in entities:
            self._entities[entity.id] = entity
            merged += 1
        logger.debug(f"Merged {merged} notifications, cache holds {len(self._entities)}")
        return self

    def get(self, notification_id) -> Optional[NotificationEntity]:
        return self._entities.get(str(notification_id))

    def as_dict(self) -> Dict[str, NotificationEntity]:
        return dict(self._entities)

    def __contains__(self, notification_id):
        return str(notification_id) in self._entities

    def __len__(self):
        return len(self._entities)
