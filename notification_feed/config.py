"""Settings access for the notification feed client."""

from typing import Any, Dict

from django.conf import settings

DEFAULT_CONFIG = {
    "TALK_API_URL": "https://talk.zooniverse.org",
    "PANOPTES_API_URL": "https://www.zooniverse.org/api",
    "PAGE_SIZE": 5,
    "TIMEOUT": 30,  # seconds
    "GLOBAL_SECTION": "zooniverse",
    "GLOBAL_SECTION_NAME": "Zooniverse",
    "DEFAULT_AVATAR": "/assets/simple-avatar.jpg",
    "USER_AGENT": "NotificationFeed/1.0",
}


def get_feed_config(config: Dict[str, Any] = None) -> Dict[str, Any]:
    """Merge defaults, Django settings and explicit overrides, in that order."""
    feed_settings = getattr(settings, "NOTIFICATION_FEED", {})
    return {**DEFAULT_CONFIG, **feed_settings, **(config or {})}
