"""View model for a section header and its paginator."""

from typing import Any, Dict, Optional

from .entities import PageMeta


def avatar_url(avatar_src: Optional[str], default_avatar: str) -> str:
    """Protocol-relative avatar URL, or the placeholder when there is none."""
    return f"//{avatar_src}" if avatar_src else default_avatar


def section_link(slug: Optional[str]) -> str:
    return f"/projects/{slug}" if slug else "/"


def unread_badge(unread: int) -> Optional[Dict[str, Any]]:
    """Badge shown in place of the avatar while there are unread notifications."""
    if unread <= 0:
        return None
    return {
        "count": unread,
        "title": f"{unread} Unread Notification(s)",
        "text_x": "30%" if unread > 9 else "40%",
    }


def item_range_label(meta: PageMeta) -> Optional[str]:
    """Label such as ``1 - 5 of 12`` for the page currently shown."""
    if not meta.is_set or meta.page_size is None or meta.count is None:
        return None
    start = (meta.page * meta.page_size) - (meta.page_size - 1)
    end = min(meta.page_size * meta.page, meta.count)
    return f"{start} - {end} of {meta.count}"


class SectionPresenter:
    """Turns a SectionController into plain data a template or CLI can render."""

    def __init__(self, controller):
        self.controller = controller

    def header(self) -> Dict[str, Any]:
        controller = self.controller
        return {
            "section": controller.section,
            "name": controller.name,
            "avatar": avatar_url(controller.avatar, controller.config["DEFAULT_AVATAR"]),
            "link": section_link(controller.slug),
            "unread": unread_badge(controller.unread),
            "toggle_icon": "fa fa-times fa-lg" if controller.expanded else "fa fa-chevron-down fa-lg",
        }

    def paginator(self) -> Optional[Dict[str, Any]]:
        controller = self.controller
        if not controller.expanded:
            return None
        current = controller.boundary.current_meta
        return {
            "page": current.page,
            "page_count": controller.boundary.last_meta.page_count,
            "item_range": item_range_label(current),
        }

    def as_dict(self) -> Dict[str, Any]:
        controller = self.controller
        return {
            "header": self.header(),
            "error": str(controller.error) if controller.error else None,
            "expanded": controller.expanded,
            "notifications": [
                {"id": entity.id, "delivered": entity.delivered, "message": entity.payload.get("message", "")}
                for entity in controller.notifications
            ] if controller.expanded else [],
            "paginator": self.paginator(),
        }
