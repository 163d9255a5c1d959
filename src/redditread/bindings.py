"""Script-facing functions that return JSON strings.

Listing results are cut down to their ``children`` so a script gets the
posts directly.
"""

import json
from typing import Any, Callable, Dict, Optional

from .utils.options import ListingOptions, SearchOptions
from .utils.reddit_client import RedditClient


def _client(client: Optional[RedditClient]) -> RedditClient:
    if client is not None:
        return client
    from .utils.config import get_reddit_client
    return get_reddit_client()


def _children(listing: Any) -> Any:
    if isinstance(listing, dict):
        return (listing.get("data") or {}).get("children", [])
    return listing


def search_subreddit(subreddit: str, query: str, limit: Optional[int] = None,
                     client: Optional[RedditClient] = None) -> str:
    result = _client(client).search_subreddit(subreddit, query, SearchOptions(limit=limit))
    return json.dumps(_children(result))


def get_reddit_post(url: str, client: Optional[RedditClient] = None) -> str:
    return json.dumps(_client(client).retrieve_post(url))


def get_latest_posts(subreddit: str, limit: Optional[int] = None,
                     client: Optional[RedditClient] = None) -> str:
    result = _client(client).get_latest_posts(subreddit, ListingOptions(limit=limit))
    return json.dumps(_children(result))


FUNCTIONS: Dict[str, Callable[..., str]] = {
    "searchSubreddit": search_subreddit,
    "getRedditPost": get_reddit_post,
    "getLatestPosts": get_latest_posts,
}
