"""State machine for one collapsible notification feed section."""

import logging
from typing import Any, Callable, Dict, List, Optional

from .api_client import ProjectAPIClient, TalkAPIClient
from .cache import FeedPageCache
from .config import get_feed_config
from .entities import FIRST, BoundaryState, NotificationEntity, SectionIdentity
from .exceptions import SectionConfigError, TransportError
from .pagination import PaginationMetaTracker
from .read_marker import ReadMarker
from .router import QueryParamRouter
from .unread import UnreadCounter

logger = logging.getLogger(__name__)

COLLAPSED = "collapsed"
EXPANDED = "expanded"
UNMOUNTED = "unmounted"


class SectionController:
    """Drives a section through collapse, expand, paging and teardown.

    Each fetch runs as a fixed pipeline: fetch the page, reconcile the
    boundaries, merge the entities into the cache, then refresh the unread
    count. Responses are applied in the order they arrive.
    """

    def __init__(
        self,
        identity: SectionIdentity,
        router: QueryParamRouter,
        user_token: Optional[str] = None,
        on_toggle: Callable[[Optional[str]], None] = None,
        talk_client: TalkAPIClient = None,
        project_client: ProjectAPIClient = None,
        read_marker: ReadMarker = None,
        config: Dict[str, Any] = None,
    ):
        """Initialize the controller.

        Args:
            identity: Global or project scope, fixed for this controller
            router: Page indicator collaborator
            user_token: Token of the current user, None when anonymous
            on_toggle: Parent callback receiving the section key or None
            talk_client: Feed API client, built from settings when omitted
            project_client: Project metadata client, built from settings when omitted
            read_marker: Read marker, built over this controller's cache when omitted
            config: Overrides for the ``NOTIFICATION_FEED`` settings
        """
        if not identity.is_global and not identity.project_id:
            raise SectionConfigError("Project sections need a project id", details={"section": identity.section})

        self.identity = identity
        self.router = router
        self.user_token = user_token
        self.on_toggle = on_toggle
        self.config = get_feed_config(config)
        self.page_size = self.config["PAGE_SIZE"]

        self.talk_client = talk_client or TalkAPIClient.from_settings(auth_token=user_token, config=config)
        self.project_client = project_client or ProjectAPIClient.from_settings(config=config)

        self.state = COLLAPSED
        self.page: Optional[int] = None
        self.boundary = BoundaryState()
        self.cache = FeedPageCache()
        self.notifications: List[NotificationEntity] = []
        self.read_marker = read_marker or ReadMarker(self.cache, auth_token=user_token)
        self.unread_counter = UnreadCounter(self.talk_client, identity.section)
        self.error: Optional[Exception] = None

        self.name: Optional[str] = None
        self.avatar: Optional[str] = None
        self.slug: Optional[str] = None

    @property
    def section(self) -> str:
        return self.identity.section

    @property
    def expanded(self) -> bool:
        return self.state == EXPANDED

    @property
    def unread(self) -> int:
        return self.unread_counter.count

    def mount(self):
        """Resolve display metadata, start listening for page changes and count unread items."""
        if self.identity.is_global:
            self.name = self.config["GLOBAL_SECTION_NAME"]
        else:
            try:
                project = self.project_client.get_project(self.identity.project_id)
            except TransportError as e:
                self.error = e
            else:
                self.name = project["display_name"]
                self.avatar = project["avatar_src"]
                self.slug = project["slug"]

        self.router.subscribe(self._on_page_change)
        self.refresh_unread()
        logger.info(f"Mounted section {self.section}")

    def toggle(self):
        """Ask the parent to expand or collapse this section.

        Without a parent the section applies the change itself.
        """
        section_key = None if self.expanded else self.section
        if self.on_toggle is not None:
            self.on_toggle(section_key)
        elif section_key is None:
            self.collapse()
        else:
            self.expand()

    def expand(self):
        """Open the feed on page 1."""
        if self.state != COLLAPSED:
            return

        # Reset while still collapsed so the page listener stays quiet
        self.router.set_page(1)
        self.boundary = BoundaryState()
        self.state = EXPANDED
        logger.info(f"Expanded section {self.section}")
        self.load_page(1)

    def collapse(self) -> List[str]:
        """Close the feed, marking both boundary pages read.

        Returns:
            list: IDs of notifications marked read
        """
        if not self.expanded:
            return []

        marked = self.read_marker.flush(self.boundary)
        self.boundary = BoundaryState()
        self.notifications = []
        self.state = COLLAPSED
        logger.info(f"Collapsed section {self.section}, marked {len(marked)} read")
        return marked

    def change_page(self, page):
        """Show ``page``; ignored while collapsed."""
        if not self.expanded:
            return
        try:
            page = int(page)
        except (TypeError, ValueError):
            raise SectionConfigError(f"Invalid page: {page!r}", details={"section": self.section})
        if page < 1:
            raise SectionConfigError(f"Invalid page: {page}", details={"section": self.section})

        self.load_page(page)

    def next_page(self):
        """Page forward, marking the old first boundary before leaving it."""
        if not self.expanded or self.page is None:
            return
        page_count = self.boundary.last_meta.page_count
        if page_count is not None and self.page >= page_count:
            return

        self.read_marker.mark_boundary(FIRST, self.boundary)
        self.router.set_page(self.page + 1)

    def previous_page(self):
        if not self.expanded or self.page is None or self.page <= 1:
            return
        self.router.set_page(self.page - 1)

    def set_user(self, user_token: Optional[str]):
        """Switch identity; an expanded section re-fetches its page as the new user."""
        if user_token == self.user_token:
            return

        self.user_token = user_token
        self.talk_client.set_auth_token(user_token)
        self.read_marker.set_auth_token(user_token)
        if user_token and self.expanded:
            self.load_page(self.page or 1)

    def unmount(self) -> List[str]:
        """Tear the section down, marking both boundaries for signed-in users."""
        marked = []
        if self.user_token:
            marked = self.read_marker.flush(self.boundary)

        self.router.unsubscribe(self._on_page_change)
        self.boundary = BoundaryState()
        self.state = UNMOUNTED
        logger.info(f"Unmounted section {self.section}")
        return marked

    def load_page(self, page: int) -> bool:
        """Fetch ``page`` and fold it into the section state.

        Returns:
            bool: False if the fetch failed and state was left as it was
        """
        try:
            entities, meta = self.talk_client.list_notifications(self.section, page=page, page_size=self.page_size)
        except TransportError as e:
            self.error = e
            return False

        self.error = None
        self.boundary = PaginationMetaTracker.reconcile(self.boundary, meta)
        self.cache.merge(entities)
        self.notifications = entities
        self.page = page
        logger.debug(f"Section {self.section} now at {self.boundary}")

        self.refresh_unread()
        return True

    def refresh_unread(self) -> int:
        try:
            return self.unread_counter.refresh()
        except TransportError as e:
            self.error = e
            return self.unread_counter.count

    def _on_page_change(self, page: Optional[int]):
        if self.expanded and page is not None and page != self.page:
            self.change_page(page)
