"""Client configuration and per-call options"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union

from .exceptions import InvalidArgumentError

DEFAULT_BASE_URL = "https://www.reddit.com"
DEFAULT_LIMIT = 25
MAX_LIMIT = 100


class SortMode(str, Enum):
    RELEVANCE = "relevance"
    HOT = "hot"
    TOP = "top"
    NEW = "new"
    COMMENTS = "comments"


class TimeFilter(str, Enum):
    HOUR = "hour"
    DAY = "day"
    WEEK = "week"
    MONTH = "month"
    YEAR = "year"
    ALL = "all"


def _check_limit(limit: Optional[int]) -> int:
    if limit is None:
        return DEFAULT_LIMIT
    if isinstance(limit, bool) or not isinstance(limit, int):
        raise InvalidArgumentError(f"limit must be an integer, got {limit!r}")
    if not 1 <= limit <= MAX_LIMIT:
        raise InvalidArgumentError(f"limit must be between 1 and {MAX_LIMIT}, got {limit}")
    return limit


def _coerce(enum_cls, value, field_name: str):
    try:
        return enum_cls(value)
    except ValueError:
        choices = ", ".join(member.value for member in enum_cls)
        raise InvalidArgumentError(
            f"{field_name} must be one of: {choices} (got {value!r})"
        ) from None


@dataclass(frozen=True)
class ClientConfig:
    """Configuration for RedditClient."""
    base_url: str = DEFAULT_BASE_URL

    def __post_init__(self):
        # frozen dataclass, so normalize through object.__setattr__
        object.__setattr__(self, "base_url", (self.base_url or DEFAULT_BASE_URL).rstrip("/"))


@dataclass(frozen=True)
class ListingOptions:
    """Options for subreddit listings (limit and pagination cursors)."""
    limit: Optional[int] = DEFAULT_LIMIT
    after: Optional[str] = None
    before: Optional[str] = None

    def __post_init__(self):
        object.__setattr__(self, "limit", _check_limit(self.limit))


@dataclass(frozen=True)
class SearchOptions:
    """Options for subreddit search."""
    limit: Optional[int] = DEFAULT_LIMIT
    sort: Union[SortMode, str, None] = SortMode.RELEVANCE
    time_range: Union[TimeFilter, str, None] = None
    after: Optional[str] = None
    before: Optional[str] = None

    def __post_init__(self):
        object.__setattr__(self, "limit", _check_limit(self.limit))
        sort = self.sort or SortMode.RELEVANCE
        object.__setattr__(self, "sort", _coerce(SortMode, sort, "sort"))
        time_range = _coerce(TimeFilter, self.time_range, "time_range") if self.time_range else None
        object.__setattr__(self, "time_range", time_range)
