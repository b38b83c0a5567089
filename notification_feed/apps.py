"""App configuration for the notification feed app."""

from django.apps import AppConfig


class NotificationFeedConfig(AppConfig):
    """Notification feed client configuration."""

    default_auto_field = "django.db.models.BigAutoField"
    name = "notification_feed"
    verbose_name = "Notification Feed"
