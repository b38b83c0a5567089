"""In-memory types for notification feed state."""

from typing import Any, Dict, List, Optional

FIRST = "first"
LAST = "last"
CURRENT = "current"
POSITIONS = (FIRST, LAST, CURRENT)


class NotificationEntity:
    """A single notification as returned by the feed API."""

    def __init__(self, id: str, delivered: bool = False, source_page: Optional[int] = None, payload: Dict[str, Any] = None):
        self.id = str(id)
        self.delivered = bool(delivered)
        self.source_page = source_page
        self.payload = payload or {}

    @classmethod
    def from_api(cls, data: Dict[str, Any], source_page: Optional[int] = None) -> "NotificationEntity":
        """Build an entity from one item of a `notifications` resource list."""
        return cls(
            id=data["id"],
            delivered=data.get("delivered", False),
            source_page=source_page,
            payload=data,
        )

    def __eq__(self, other):
        if not isinstance(other, NotificationEntity):
            return NotImplemented
        return (self.id, self.delivered, self.source_page, self.payload) == (
            other.id,
            other.delivered,
            other.source_page,
            other.payload,
        )

    def __repr__(self):
        return f"NotificationEntity(id={self.id!r}, delivered={self.delivered}, source_page={self.source_page})"


def _as_int(value) -> Optional[int]:
    if value is None or value == "":
        return None
    return int(value)


class PageMeta:
    """Pagination metadata for one fetched page.

    A meta whose ``page`` is None is "unset": it stands for "no boundary yet"
    and never compares greater or smaller than another page.
    """

    def __init__(
        self,
        page: Optional[int] = None,
        page_size: Optional[int] = None,
        count: Optional[int] = None,
        page_count: Optional[int] = None,
        notification_ids: List[str] = None,
    ):
        self.page = page
        self.page_size = page_size
        self.count = count
        self.page_count = page_count
        self.notification_ids = list(notification_ids or [])

    @classmethod
    def from_api(cls, meta: Dict[str, Any], notification_ids: List[str] = None) -> "PageMeta":
        """Build page metadata from the resource's ``meta`` block."""
        meta = meta or {}
        return cls(
            page=_as_int(meta.get("page")),
            page_size=_as_int(meta.get("page_size")),
            count=_as_int(meta.get("count")),
            page_count=_as_int(meta.get("page_count")),
            notification_ids=notification_ids,
        )

    @property
    def is_set(self) -> bool:
        return self.page is not None

    def __eq__(self, other):
        if not isinstance(other, PageMeta):
            return NotImplemented
        return self.__dict__ == other.__dict__

    def __repr__(self):
        return f"PageMeta(page={self.page}, count={self.count}, page_count={self.page_count}, ids={len(self.notification_ids)})"


class BoundaryState:
    """Earliest, latest and most recent page metadata for one open feed."""

    def __init__(self, first_meta: PageMeta = None, last_meta: PageMeta = None, current_meta: PageMeta = None):
        self.first_meta = first_meta or PageMeta()
        self.last_meta = last_meta or PageMeta()
        self.current_meta = current_meta or PageMeta()

    def get(self, position: str) -> PageMeta:
        """Return the meta at ``first``, ``last`` or ``current``."""
        if position not in POSITIONS:
            raise KeyError(f"Unknown boundary position: {position}")
        return getattr(self, f"{position}_meta")

    @property
    def is_empty(self) -> bool:
        return not (self.first_meta.is_set or self.last_meta.is_set or self.current_meta.is_set)

    def __repr__(self):
        return f"BoundaryState(first={self.first_meta.page}, current={self.current_meta.page}, last={self.last_meta.page})"


class SectionIdentity:
    """Which feed a section shows: the global scope or a single project."""

    __slots__ = ("_section", "_project_id")

    def __init__(self, section: str, project_id: Optional[str] = None):
        object.__setattr__(self, "_section", section)
        object.__setattr__(self, "_project_id", str(project_id) if project_id is not None else None)

    @classmethod
    def global_scope(cls, section: str) -> "SectionIdentity":
        return cls(section)

    @classmethod
    def for_project(cls, project_id) -> "SectionIdentity":
        return cls(f"project-{project_id}", project_id)

    @property
    def section(self) -> str:
        return self._section

    @property
    def project_id(self) -> Optional[str]:
        return self._project_id

    @property
    def is_global(self) -> bool:
        return self._project_id is None

    def __setattr__(self, name, value):
        raise AttributeError("SectionIdentity is immutable")

    def __eq__(self, other):
        if not isinstance(other, SectionIdentity):
            return NotImplemented
        return (self._section, self._project_id) == (other._section, other._project_id)

    def __hash__(self):
        return hash((self._section, self._project_id))

    def __repr__(self):
        return f"SectionIdentity(section={self._section!r}, project_id={self._project_id!r})"
