"""Celery configuration for the notification feed project."""

import os

from celery import Celery
from celery.signals import worker_process_init

# Set the default Django settings module for the 'celery' program.
os.environ.setdefault("DJANGO_SETTINGS_MODULE", "app.settings")

app = Celery("notification_feed")

# Using a string here means the worker doesn't have to serialize
# the configuration object to child processes.
app.config_from_object("django.conf:settings", namespace="CELERY")

# Load task modules from all registered Django app configs.
app.autodiscover_tasks()

# Read-state writes run on their own queue
app.conf.task_routes = {
    "notification_feed.tasks.mark_notification_delivered": {"queue": "read_state"},
}

app.conf.timezone = "UTC"


@worker_process_init.connect
def configure_django_logging(**kwargs):
    """Configure Django logging when each worker process initializes.

    This runs in each forked worker process, not just the main process.
    """
    import logging.config

    from app.settings.logging import LOGGING

    logging.config.dictConfig(LOGGING)
