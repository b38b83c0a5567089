"""Django project package for the notification feed."""

import logging

logger = logging.getLogger(__name__)

from .celery import app as celery_app

logger.debug(f"CELERY_INIT: Celery app imported: {celery_app.main}")

__all__ = ("celery_app",)
