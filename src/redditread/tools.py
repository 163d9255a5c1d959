"""Named tools wrapping RedditClient for an agent host.

Each tool publishes a JSON schema for its input, validates the arguments it
is called with, and forwards to the client. Errors keep their type, status
and details; only the message gets the tool name as a prefix.
"""

import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional, Type

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .utils.exceptions import InvalidArgumentError, RedditError, RequestError
from .utils.options import ListingOptions, SearchOptions, SortMode, TimeFilter
from .utils.reddit_client import RedditClient

logger = logging.getLogger(__name__)

PAGINATION_HELP = "Fullname of a thing for pagination"


class SearchSubredditInput(BaseModel):
    model_config = ConfigDict(extra="forbid")

    subreddit: str = Field(min_length=1, description="Subreddit name (without r/ prefix)")
    query: str = Field(min_length=1, description="Search query")
    limit: Optional[int] = Field(default=None, ge=1, le=100, description="Number of results (1-100, default: 25)")
    sort: Optional[SortMode] = Field(default=None, description="Sort order (default: relevance)")
    t: Optional[TimeFilter] = Field(default=None, description="Time period for top/hot sorting")
    after: Optional[str] = Field(default=None, description=PAGINATION_HELP)
    before: Optional[str] = Field(default=None, description=PAGINATION_HELP)


class RetrievePostInput(BaseModel):
    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    post_url: str = Field(
        alias="postUrl",
        min_length=1,
        description="Reddit post URL (e.g., https://www.reddit.com/r/subreddit/comments/id/title/)",
    )

    @field_validator("post_url")
    @classmethod
    def _absolute_url(cls, v: str) -> str:
        if not v.startswith(("http://", "https://")):
            raise ValueError("postUrl must be an absolute http(s) URL")
        return v


class GetLatestPostsInput(BaseModel):
    model_config = ConfigDict(extra="forbid")

    subreddit: str = Field(min_length=1, description="Subreddit name (without r/ prefix)")
    limit: Optional[int] = Field(default=None, ge=1, le=100, description="Number of posts (1-100, default: 25)")
    after: Optional[str] = Field(default=None, description=PAGINATION_HELP)
    before: Optional[str] = Field(default=None, description=PAGINATION_HELP)


def _search(args: SearchSubredditInput, client: RedditClient) -> Dict[str, Any]:
    logger.info("[redditSearch] Searching r/%s for: %s", args.subreddit, args.query)
    opts = SearchOptions(limit=args.limit, sort=args.sort, time_range=args.t, after=args.after, before=args.before)
    return {"results": client.search_subreddit(args.subreddit, args.query, opts)}


def _retrieve(args: RetrievePostInput, client: RedditClient) -> Dict[str, Any]:
    logger.info("[redditRetrievePost] Retrieving: %s", args.post_url)
    return {"post": client.retrieve_post(args.post_url)}


def _latest(args: GetLatestPostsInput, client: RedditClient) -> Dict[str, Any]:
    logger.info("[redditLatestPosts] Getting latest posts from r/%s", args.subreddit)
    opts = ListingOptions(limit=args.limit, after=args.after, before=args.before)
    return {"posts": client.get_latest_posts(args.subreddit, opts)}


def _prefixed(exc: RedditError, name: str) -> RedditError:
    """Same error type and fields, message prefixed with the tool name."""
    message = f"[{name}] {exc}"
    if isinstance(exc, RequestError):
        return RequestError(message, status_code=exc.status_code, details=exc.details)
    return type(exc)(message)


@dataclass(frozen=True)
class Tool:
    """A named, independently invocable operation for the host."""
    name: str
    description: str
    input_model: Type[BaseModel]
    handler: Callable[[Any, RedditClient], Dict[str, Any]]

    def input_schema(self) -> Dict[str, Any]:
        return self.input_model.model_json_schema(by_alias=True)

    def validate(self, args: Dict[str, Any]) -> BaseModel:
        try:
            return self.input_model.model_validate(args or {})
        except ValidationError as exc:
            problems = "; ".join(
                f"{'.'.join(str(p) for p in err['loc']) or 'input'}: {err['msg']}" for err in exc.errors()
            )
            raise InvalidArgumentError(f"[{self.name}] {problems}") from None

    def execute(self, args: Dict[str, Any], client: RedditClient) -> Dict[str, Any]:
        parsed = self.validate(args)
        try:
            return self.handler(parsed, client)
        except RedditError as exc:
            raise _prefixed(exc, self.name) from exc


SEARCH_SUBREDDIT = Tool(
    name="reddit/searchSubreddit",
    description="Search posts in a specific subreddit. Returns structured JSON with search results.",
    input_model=SearchSubredditInput,
    handler=_search,
)

RETRIEVE_POST = Tool(
    name="reddit/retrievePost",
    description="Retrieve a Reddit post's content and comments by URL.",
    input_model=RetrievePostInput,
    handler=_retrieve,
)

GET_LATEST_POSTS = Tool(
    name="reddit/getLatestPosts",
    description="Get the latest posts from a subreddit. Returns newest posts in chronological order.",
    input_model=GetLatestPostsInput,
    handler=_latest,
)

TOOLS: Dict[str, Tool] = {tool.name: tool for tool in (SEARCH_SUBREDDIT, RETRIEVE_POST, GET_LATEST_POSTS)}


def get_tool(name: str) -> Tool:
    try:
        return TOOLS[name]
    except KeyError:
        raise KeyError(f"Unknown tool: {name}") from None


def run_tool(name: str, args: Dict[str, Any], client: Optional[RedditClient] = None) -> Dict[str, Any]:
    """Look up a tool by name and run it against ``client``."""
    tool = get_tool(name)
    if client is None:
        from .utils.config import get_reddit_client
        client = get_reddit_client()
    return tool.execute(args, client)
