"""
Shared error handling for the Storefront Access Client.

Transport failures never surface as exceptions from gateway operations; they
become result envelopes. The types below cover programmer and environment
errors that callers are expected to fix rather than branch on.
"""

from typing import Dict, Any, Optional


class StorefrontClientException(Exception):
    """Base exception for the Storefront Access Client."""

    def __init__(self, code: str, message: str, details: Optional[Dict[str, Any]] = None):
        self.code = code
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a plain error payload."""
        return {
            "code": self.code,
            "message": self.message,
            "details": self.details,
        }


class ConfigurationError(StorefrontClientException):
    """Invalid client configuration."""

    def __init__(self, message: str = "Invalid configuration", details: Optional[Dict[str, Any]] = None):
        super().__init__("CONFIGURATION_ERROR", message, details)


class RouteError(StorefrontClientException):
    """Unknown route or missing path parameters."""

    def __init__(self, message: str = "Route error", details: Optional[Dict[str, Any]] = None):
        super().__init__("ROUTE_ERROR", message, details)


class SessionStoreError(StorefrontClientException):
    """Credential store could not be read or written."""

    def __init__(self, message: str = "Session store error", details: Optional[Dict[str, Any]] = None):
        super().__init__("SESSION_STORE_ERROR", message, details)
