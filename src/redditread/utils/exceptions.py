"""Error types raised by the Reddit client"""

from typing import Any


class RedditError(Exception):
    """Base exception for redditread errors."""
    pass


class InvalidArgumentError(RedditError, ValueError):
    """Raised when a required argument is missing or out of range."""
    pass


class RequestError(RedditError):
    """Raised when Reddit answers with a non-success status.

    ``details`` holds the parsed JSON body when the body is JSON, otherwise
    up to 500 characters of the raw text.
    """

    def __init__(self, message: str, status_code: int, details: Any = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.details = details

    def __str__(self) -> str:
        return self.message


class TransportError(RedditError):
    """Raised when the request could not be completed after retries."""
    pass


class RequestTimeout(TransportError):
    """Raised when the request timed out."""
    pass
