"""Test-specific Django settings."""

from split_settings.tools import include

from .core import *  # noqa: F403, F401

include("logging.py")

DEBUG = False

# Run read-marker writes inline so tests never need a broker
CELERY_TASK_ALWAYS_EAGER = True
CELERY_TASK_EAGER_PROPAGATES = False
CELERY_BROKER_URL = "memory://"

NOTIFICATION_FEED = {
    "TALK_API_URL": "https://talk.example.com",
    "PANOPTES_API_URL": "https://api.example.com/api",
    "PAGE_SIZE": 5,
    "TIMEOUT": 30,
    "GLOBAL_SECTION": "zooniverse",
    "GLOBAL_SECTION_NAME": "Zooniverse",
}
