"""Unread badge count for a feed section."""

import logging

from .exceptions import TransportError

logger = logging.getLogger(__name__)


class UnreadCounter:
    """Asks the feed API how many undelivered notifications a section holds."""

    def __init__(self, client, section: str):
        """Initialize the counter.

        Args:
            client: TalkAPIClient used for the count query
            section: Section key the count is scoped to
        """
        self.client = client
        self.section = section
        self.count = 0

    def refresh(self) -> int:
        """Fetch the current unread count.

        A single-item page filtered to undelivered notifications is requested;
        its ``count`` meta is the answer. An empty page means zero.

        Returns:
            int: The server-reported unread count

        Raises:
            TransportError: If the request fails; ``count`` keeps its old value
        """
        try:
            entities, meta = self.client.list_notifications(self.section, page=1, page_size=1, delivered=False)
        except TransportError as e:
            logger.error(f"Unread count refresh failed for {self.section}: {e}")
            raise

        self.count = (meta.count or 0) if entities else 0
        logger.debug(f"Unread count for {self.section}: {self.count}")
        return self.count
