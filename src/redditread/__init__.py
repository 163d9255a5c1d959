"""redditread - read-only client for Reddit's public JSON endpoints"""

from .cli import cli
from .utils.exceptions import (
    RedditError,
    InvalidArgumentError,
    RequestError,
    TransportError,
    RequestTimeout,
)
from .utils.options import ClientConfig, SearchOptions, ListingOptions, SortMode, TimeFilter
from .utils.reddit_client import RedditClient, USER_AGENT
from .utils.transport import RetryingTransport

__version__ = "0.1.0"

__all__ = [
    "cli",
    "RedditClient",
    "RetryingTransport",
    "ClientConfig",
    "SearchOptions",
    "ListingOptions",
    "SortMode",
    "TimeFilter",
    "USER_AGENT",
    "RedditError",
    "InvalidArgumentError",
    "RequestError",
    "TransportError",
    "RequestTimeout",
]
