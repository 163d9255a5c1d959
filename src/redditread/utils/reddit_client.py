"""Reddit client utilities for redditread.

Uses Reddit's public .json endpoints, no authentication required.
Appending .json to any Reddit URL returns structured JSON data.
"""

import json
import logging
from typing import Any, Optional, Tuple
from urllib.parse import quote, urlencode

import requests

from .exceptions import InvalidArgumentError, RequestError
from .options import ClientConfig, ListingOptions, SearchOptions
from .transport import Response, RetryingTransport, Transport

logger = logging.getLogger(__name__)

USER_AGENT = "redditread/1.0 (+https://github.com/redditread/redditread)"

MAX_DETAIL_CHARS = 500


class RedditClient:
    """Synchronous client for Reddit's .json endpoints.

    Holds only the config and the transport, so one instance can serve
    concurrent calls.
    """

    def __init__(self, config: Optional[ClientConfig] = None, transport: Optional[Transport] = None):
        self.config = config or ClientConfig()
        self.transport = transport or RetryingTransport()

    @property
    def base_url(self) -> str:
        return self.config.base_url

    def search_subreddit(self, subreddit: str, query: str, opts: Optional[SearchOptions] = None) -> Any:
        """Search posts within one subreddit.

        Args:
            subreddit: Subreddit name without the r/ prefix
            query: Search query
            opts: Limit, sort, time range and pagination cursors

        Returns:
            Reddit listing envelope ({"kind": ..., "data": {"children": [...]}})
        """
        if not subreddit:
            raise InvalidArgumentError("subreddit is required")
        if not query:
            raise InvalidArgumentError("query is required")
        opts = opts or SearchOptions()

        params = {
            "q": query,
            "restrict_sr": "true",
            "limit": opts.limit,
            "sort": opts.sort.value,
        }
        if opts.time_range:
            params["t"] = opts.time_range.value
        if opts.after:
            params["after"] = opts.after
        if opts.before:
            params["before"] = opts.before

        url = f"{self._subreddit_url(subreddit)}/search.json?{urlencode(params)}"
        return self._get(url, "Reddit search")

    def retrieve_post(self, post_url: str) -> Any:
        """Fetch a post and its comment tree from an absolute permalink.

        Returns:
            Two listings: the post, then the comments
        """
        if not post_url:
            raise InvalidArgumentError("postUrl is required")
        return self._get(self.post_json_url(post_url), "Reddit post retrieval")

    def get_latest_posts(self, subreddit: str, opts: Optional[ListingOptions] = None) -> Any:
        """Newest posts in a subreddit."""
        if not subreddit:
            raise InvalidArgumentError("subreddit is required")
        opts = opts or ListingOptions()

        params = {"limit": opts.limit}
        if opts.after:
            params["after"] = opts.after
        if opts.before:
            params["before"] = opts.before

        url = f"{self._subreddit_url(subreddit)}/new.json?{urlencode(params)}"
        return self._get(url, "Reddit latest posts")

    @staticmethod
    def post_json_url(post_url: str) -> str:
        """Append .json to a permalink unless it is already there."""
        return post_url if post_url.endswith(".json") else f"{post_url}.json"

    def _subreddit_url(self, subreddit: str) -> str:
        return f"{self.base_url}/r/{quote(subreddit, safe='+')}"

    def _get(self, url: str, context: str) -> Any:
        resp = self.transport.fetch("GET", url, {"User-Agent": USER_AGENT})
        return parse_json_or_raise(resp, context)


def _read_text(resp: Response) -> str:
    try:
        return resp.text or ""
    except requests.RequestException as exc:
        # A broken body must not hide the status code
        logger.warning("Could not read response body: %s", exc)
        return ""


def _decode(text: str) -> Tuple[bool, Any]:
    """Return (True, value) when text is JSON, else (False, None)."""
    if not text:
        return False, None
    try:
        return True, json.loads(text)
    except ValueError:
        return False, None


def parse_json_or_raise(resp: Response, context: str) -> Any:
    """Turn a transport response into parsed JSON, raw text or RequestError.

    The status code alone decides whether to raise. Whether the body parsed
    only decides if the result (or the error details) is structured.
    """
    status = resp.status_code
    try:
        text = _read_text(resp)
    finally:
        resp.close()
    is_json, value = _decode(text)

    if 200 <= status < 300:
        return value if is_json else text

    logger.warning("%s failed with status %s", context, status)
    details = value if is_json else text[:MAX_DETAIL_CHARS]
    raise RequestError(f"{context} failed ({status})", status_code=status, details=details)
