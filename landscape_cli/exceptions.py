"""
Custom exceptions for the Landscape API client.
"""

from typing import Optional


class LandscapeClientError(Exception):
    """Base exception for Landscape client errors."""
    pass


class ConfigurationError(LandscapeClientError):
    """Raised when credentials or client configuration are invalid."""
    pass


class ScriptNotFoundError(LandscapeClientError):
    """Raised when no script title starts with the requested name."""

    def __init__(self, title: str):
        super().__init__(f"Script not found: {title}")
        self.title = title


class HTTPError(LandscapeClientError):
    """Raised when the HTTP request fails or returns a non-success status."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class InvalidResponseError(HTTPError):
    """Raised when the response body cannot be decoded into the expected type."""
    pass


class AttachmentReadError(LandscapeClientError):
    """Raised when a local attachment file cannot be read."""
    pass
