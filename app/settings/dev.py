"""Development environment specific settings."""

from .core import NOTIFICATION_FEED

# Fail fast when developing against a local talk API
NOTIFICATION_FEED["TIMEOUT"] = 10
