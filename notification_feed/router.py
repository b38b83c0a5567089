"""Page indicator collaborator backed by a query-parameter dict."""

import logging
from typing import Any, Callable, Dict, List, Optional

logger = logging.getLogger(__name__)


class QueryParamRouter:
    """Holds the current location's query parameters and announces page changes."""

    def __init__(self, query: Dict[str, Any] = None):
        self.query = dict(query or {})
        self._listeners: List[Callable[[Optional[int]], None]] = []

    @property
    def page(self) -> Optional[int]:
        value = self.query.get("page")
        if value in (None, ""):
            return None
        return int(value)

    def update_query_params(self, **params):
        """Merge ``params`` into the query; listeners hear about a new page."""
        previous = self.page
        self.query.update(params)
        if self.page != previous:
            logger.debug(f"Page indicator changed {previous} -> {self.page}")
            for listener in list(self._listeners):
                listener(self.page)

    def set_page(self, page: int):
        self.update_query_params(page=page)

    def subscribe(self, listener: Callable[[Optional[int]], None]):
        if listener not in self._listeners:
            self._listeners.append(listener)

    def unsubscribe(self, listener: Callable[[Optional[int]], None]):
        if listener in self._listeners:
            self._listeners.remove(listener)
