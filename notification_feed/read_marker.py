"""Marks boundary pages of a feed as read."""

import logging
from typing import Callable, List, Optional, Set

from .cache import FeedPageCache
from .entities import FIRST, LAST, BoundaryState
from .tasks import mark_notification_delivered

logger = logging.getLogger(__name__)


def dispatch_delivered_write(notification_id: str, auth_token: str):
    """Queue a detached write; the caller never awaits it."""
    mark_notification_delivered.delay(notification_id, auth_token)


class ReadMarker:
    """Issues mark-as-read writes for the notifications on a boundary page.

    Writes are best-effort: one detached task per notification, no retry and
    no result. Ids are remembered once their write is dispatched, so a
    notification re-fetched with a stale undelivered flag is never written
    twice. Nothing happens for anonymous viewers.
    """

    def __init__(self, cache: FeedPageCache, auth_token: Optional[str] = None, dispatch: Callable[[str, str], None] = None):
        """Initialize the marker.

        Args:
            cache: Store holding the fetched notifications
            auth_token: Token of the current user; None means anonymous
            dispatch: Callable issuing one write, defaults to the Celery task
        """
        self.cache = cache
        self.auth_token = auth_token
        self.dispatch = dispatch or dispatch_delivered_write
        self.dispatched: Set[str] = set()

    def set_auth_token(self, auth_token: Optional[str]):
        """Switch viewer; writes sent for the previous viewer no longer count."""
        self.auth_token = auth_token
        self.dispatched = set()

    def mark_boundary(self, position: str, boundary: BoundaryState) -> List[str]:
        """Mark the undelivered notifications of one boundary page as read.

        Args:
            position: ``first`` or ``last``
            boundary: Current boundary state

        Returns:
            list: IDs a write was dispatched for
        """
        if not self.auth_token:
            logger.debug(f"Skipping {position} boundary: no user identity")
            return []

        unread = []
        for notification_id in boundary.get(position).notification_ids:
            entity = self.cache.get(notification_id)
            if entity is None:
                continue
            if entity.id in self.dispatched:
                # re-fetched before the server applied our write
                entity.delivered = True
                continue
            if not entity.delivered:
                unread.append(entity)

        if not unread:
            return []

        marked = []
        for entity in unread:
            entity.delivered = True
            self.dispatched.add(entity.id)
            marked.append(entity.id)
            try:
                self.dispatch(entity.id, self.auth_token)
            except Exception as e:
                logger.warning(f"Could not dispatch read-state write for {entity.id}: {e}")

        logger.info(f"Marked {len(marked)} notifications read on {position} boundary page {boundary.get(position).page}")
        return marked

    def flush(self, boundary: BoundaryState) -> List[str]:
        """Mark both the first and the last boundary pages."""
        return self.mark_boundary(FIRST, boundary) + self.mark_boundary(LAST, boundary)
