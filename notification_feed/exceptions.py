"""Custom exceptions for the notification feed client."""

from typing import Dict, Optional


class NotificationFeedError(Exception):
    """Base exception for notification feed errors."""

    def __init__(self, message: str, code: str = "FEED_ERROR", details: Optional[Dict] = None):
        """
        Initialize feed error.

        Args:
            message: Human-readable error message
            code: Error code for programmatic handling
            details: Additional error details
        """
        self.message = message
        self.code = code
        self.details = details or {}
        super().__init__(message)

    def __str__(self):
        return self.message


class TransportError(NotificationFeedError):
    """Raised when a remote list/get/update call fails."""

    def __init__(self, message: str, url: str = "", status_code: Optional[int] = None):
        super().__init__(
            message=message,
            code="TRANSPORT_ERROR",
            details={"url": url, "status_code": status_code},
        )
        self.url = url
        self.status_code = status_code


class SectionConfigError(NotificationFeedError):
    """Raised when a section is configured with an invalid scope or page."""

    def __init__(self, message: str, details: Optional[Dict] = None):
        super().__init__(message=message, code="SECTION_CONFIG_ERROR", details=details)
