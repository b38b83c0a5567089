"""API clients for the talk notification feed and project metadata."""

import logging
from typing import Any, Dict, List, Optional, Tuple

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from .config import get_feed_config
from .entities import NotificationEntity, PageMeta
from .exceptions import TransportError

logger = logging.getLogger(__name__)


class BaseAPIClient:
    """JSON-API style client with retrying reads and single-shot writes."""

    def __init__(self, base_url: str, auth_token: str | None = None, timeout: int = 30, user_agent: str = "NotificationFeed/1.0"):
        """Initialize the API client.

        Args:
            base_url: Base URL for the API
            auth_token: Bearer token of the current user, if any
            timeout: Request timeout in seconds
            user_agent: User-Agent header value
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout

        # Configure session with retries on reads only; writes are never retried
        self.session = requests.Session()
        retry_strategy = Retry(
            total=3,
            backoff_factor=1,
            status_forcelist=[429, 500, 502, 503, 504],
            allowed_methods=frozenset(["GET"]),
        )
        adapter = HTTPAdapter(max_retries=retry_strategy)
        self.session.mount("http://", adapter)
        self.session.mount("https://", adapter)

        self.session.headers.update(
            {
                "Accept": "application/vnd.api+json; version=1",
                "Content-Type": "application/json",
                "User-Agent": user_agent,
            }
        )
        self.auth_token = None
        self.set_auth_token(auth_token)

    def set_auth_token(self, auth_token: str | None):
        """Swap the bearer token used for subsequent requests."""
        self.auth_token = auth_token
        if auth_token:
            self.session.headers.update({"Authorization": f"Bearer {auth_token}"})
        else:
            self.session.headers.pop("Authorization", None)

    def _request(self, method: str, path: str, **kwargs) -> Dict[str, Any]:
        url = f"{self.base_url}/{path.lstrip('/')}"

        try:
            response = getattr(self.session, method)(url, timeout=self.timeout, **kwargs)
            response.raise_for_status()
            return response.json()

        except requests.exceptions.RequestException as e:
            status_code = e.response.status_code if getattr(e, "response", None) is not None else None
            logger.error(f"{method.upper()} {url} failed: {e}")
            raise TransportError(str(e), url=url, status_code=status_code) from e


class TalkAPIClient(BaseAPIClient):
    """Client for the paginated `notifications` resource."""

    resource = "notifications"

    @classmethod
    def from_settings(cls, auth_token: str | None = None, config: Dict[str, Any] = None) -> "TalkAPIClient":
        config = get_feed_config(config)
        return cls(config["TALK_API_URL"], auth_token=auth_token, timeout=config["TIMEOUT"], user_agent=config["USER_AGENT"])

    def list_notifications(
        self, section: str, page: int = 1, page_size: int = 5, delivered: Optional[bool] = None
    ) -> Tuple[List[NotificationEntity], PageMeta]:
        """Fetch one page of a section's notifications.

        Args:
            section: Section key (``zooniverse`` or ``project-<id>``)
            page: 1-based page number
            page_size: Items per page
            delivered: When given, only return notifications with this flag

        Returns:
            tuple: (entities in page order, page metadata)

        Raises:
            TransportError: If the API request fails
        """
        params = {"page": page, "page_size": page_size, "section": section}
        if delivered is not None:
            params["delivered"] = "true" if delivered else "false"

        logger.info(f"Fetching {self.resource} page {page} for section {section}")
        payload = self._request("get", self.resource, params=params)

        meta_block = (payload.get("meta") or {}).get(self.resource)
        items = payload.get(self.resource, [])
        meta = PageMeta.from_api(meta_block, notification_ids=[str(item["id"]) for item in items])
        entities = [NotificationEntity.from_api(item, source_page=meta.page) for item in items]
        return entities, meta

    def update_notification(self, notification_id: str, **changes) -> NotificationEntity:
        """Update and persist a notification.

        Args:
            notification_id: ID of the notification to update
            **changes: Attributes to change, e.g. ``delivered=True``

        Returns:
            NotificationEntity: The persisted entity as returned by the API

        Raises:
            TransportError: If the API request fails
        """
        logger.info(f"Updating notification {notification_id}: {changes}")
        payload = self._request("put", f"{self.resource}/{notification_id}", json={self.resource: changes})

        items = payload.get(self.resource, [])
        if isinstance(items, dict):
            items = [items]
        data = items[0] if items else {"id": notification_id, **changes}
        return NotificationEntity.from_api(data)


class ProjectAPIClient(BaseAPIClient):
    """Client for the `projects` resource, used for section display metadata."""

    @classmethod
    def from_settings(cls, auth_token: str | None = None, config: Dict[str, Any] = None) -> "ProjectAPIClient":
        config = get_feed_config(config)
        return cls(config["PANOPTES_API_URL"], auth_token=auth_token, timeout=config["TIMEOUT"], user_agent=config["USER_AGENT"])

    def get_project(self, project_id: str) -> Dict[str, Any]:
        """Get display metadata for a project.

        Args:
            project_id: ID of the project

        Returns:
            dict: ``display_name``, ``avatar_src`` and ``slug``

        Raises:
            TransportError: If the request fails or the project does not exist
        """
        payload = self._request("get", "projects", params={"id": project_id, "cards": "true"})

        projects = payload.get("projects", [])
        if not projects:
            raise TransportError(f"Project {project_id} not found", url=f"{self.base_url}/projects", status_code=404)

        project = projects[0]
        return {
            "display_name": project.get("display_name", ""),
            "avatar_src": project.get("avatar_src"),
            "slug": project.get("slug"),
        }
