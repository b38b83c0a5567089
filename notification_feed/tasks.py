"""Celery tasks for best-effort read-state writes."""

import logging

from celery import shared_task

from .api_client import TalkAPIClient
from .exceptions import TransportError

logger = logging.getLogger(__name__)


@shared_task(ignore_result=True, max_retries=0)
def mark_notification_delivered(notification_id: str, auth_token: str = None) -> bool:
    """Persist ``delivered = true`` for one notification.

    Fire-and-forget: nobody awaits this task, it is never retried, and a
    failed write is logged and dropped.

    Args:
        notification_id: ID of the notification to mark read
        auth_token: Bearer token of the user who saw it

    Returns:
        bool: True if the write was accepted
    """
    client = TalkAPIClient.from_settings(auth_token=auth_token)

    try:
        client.update_notification(notification_id, delivered=True)
    except TransportError as e:
        logger.warning(f"Dropped read-state write for notification {notification_id}: {e}")
        return False

    logger.debug(f"Notification {notification_id} marked delivered")
    return True
