"""Django core settings."""

import os
import sys
from os import environ
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()  # load environment variables

ENV = environ.get("DJANGO_ENV") or "DEV"
TESTING = "test" in sys.argv or "pytest" in sys.modules

if ENV == "DEV":
    DEBUG = True
else:
    DEBUG = False

# Build paths inside the project like this: BASE_DIR / 'subdir'.
BASE_DIR = Path(__file__).resolve().parent.parent.parent

# SECURITY WARNING: keep the secret key used in production secret!
SECRET_KEY = os.getenv("DJANGO_SECRET_KEY", default="django-insecure-n0t1f1cat10n-f33d-k3y-ch4ng3-m3-1n-pr0duct10n")
ALLOWED_HOSTS = [h.strip() for h in os.getenv("ALLOWED_HOSTS", "localhost").split(",") if h.strip()]

# Application definition
INSTALLED_APPS = [
    # add local apps here
    "notification_feed",  # collapsible notification feed client
]

# Database
# https://docs.djangoproject.com/en/5.2/ref/settings/#databases

DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.sqlite3",
        "NAME": ":memory:" if TESTING else BASE_DIR / "db.sqlite3",
    }
}

# Internationalization
# https://docs.djangoproject.com/en/5.2/topics/i18n/

LANGUAGE_CODE = "en"
TIME_ZONE = "UTC"
USE_I18N = True
USE_TZ = True

# Default primary key field type
# https://docs.djangoproject.com/en/5.2/ref/settings/#default-auto-field

DEFAULT_AUTO_FIELD = "django.db.models.BigAutoField"

# Celery Configuration
CELERY_BROKER_URL = os.getenv("CELERY_BROKER_URL", "redis://localhost:6379/0")
CELERY_ACCEPT_CONTENT = ["json"]
CELERY_TASK_SERIALIZER = "json"
CELERY_TIMEZONE = TIME_ZONE
CELERY_TASK_IGNORE_RESULT = True

# Notification feed configuration
# Environment variables used:
#   - TALK_API_URL: Base URL of the talk API that serves notifications
#   - PANOPTES_API_URL: Base URL of the API that serves project metadata
NOTIFICATION_FEED = {
    "TALK_API_URL": os.getenv("TALK_API_URL", "https://talk.zooniverse.org"),
    "PANOPTES_API_URL": os.getenv("PANOPTES_API_URL", "https://www.zooniverse.org/api"),
    "PAGE_SIZE": int(os.getenv("NOTIFICATION_FEED_PAGE_SIZE", "5")),
    "TIMEOUT": int(os.getenv("NOTIFICATION_FEED_TIMEOUT", "30")),  # seconds
    "GLOBAL_SECTION": os.getenv("NOTIFICATION_FEED_GLOBAL_SECTION", "zooniverse"),
    "GLOBAL_SECTION_NAME": os.getenv("NOTIFICATION_FEED_GLOBAL_SECTION_NAME", "Zooniverse"),
}
