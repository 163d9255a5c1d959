import logging

import pytest

from redditread import InvalidArgumentError, RequestError, TransportError
from redditread.tools import TOOLS, get_tool, run_tool
from tests.stubs import StubResponse, listing


def test_three_tools_are_registered():
    assert set(TOOLS) == {"reddit/searchSubreddit", "reddit/retrievePost", "reddit/getLatestPosts"}


def test_unknown_tool():
    with pytest.raises(KeyError, match="Unknown tool"):
        get_tool("reddit/vote")


def test_search_schema_declares_bounds_and_required_fields():
    schema = get_tool("reddit/searchSubreddit").input_schema()

    assert set(schema["required"]) == {"subreddit", "query"}
    limit = schema["properties"]["limit"]["anyOf"][0]
    assert limit["minimum"] == 1
    assert limit["maximum"] == 100


def test_retrieve_post_schema_uses_host_field_name():
    schema = get_tool("reddit/retrievePost").input_schema()
    assert schema["required"] == ["postUrl"]


def test_search_returns_results(client, transport):
    transport.response = StubResponse(200, listing("x"))

    out = run_tool("reddit/searchSubreddit", {"subreddit": "programming", "query": "javascript", "t": "week"}, client)

    assert out["results"]["data"]["children"][0]["data"]["title"] == "x"
    assert "t=week" in transport.last_url


def test_retrieve_post_accepts_host_field_name(client, transport):
    transport.response = StubResponse(200, [listing("post"), listing()])

    out = run_tool("reddit/retrievePost", {"postUrl": "https://www.reddit.com/comments/abc123/"}, client)

    assert out["post"][0]["data"]["children"][0]["data"]["title"] == "post"
    assert transport.last_url == "https://www.reddit.com/comments/abc123/.json"


def test_latest_posts_returns_posts(client, transport):
    out = run_tool("reddit/getLatestPosts", {"subreddit": "python", "limit": 3}, client)
    assert out == {"posts": {"kind": "Listing", "data": {"children": []}}}
    assert transport.last_url.endswith("/r/python/new.json?limit=3")


@pytest.mark.parametrize("name, args", [
    ("reddit/searchSubreddit", {"subreddit": "python"}),
    ("reddit/searchSubreddit", {"subreddit": "", "query": "x"}),
    ("reddit/searchSubreddit", {"subreddit": "python", "query": "x", "limit": 101}),
    ("reddit/searchSubreddit", {"subreddit": "python", "query": "x", "sort": "best"}),
    ("reddit/retrievePost", {}),
    ("reddit/retrievePost", {"postUrl": "not a url"}),
    ("reddit/getLatestPosts", {"subreddit": "python", "limit": 0}),
    ("reddit/getLatestPosts", {"subreddit": "python", "unknown": 1}),
])
def test_invalid_input_is_rejected_before_any_request(client, transport, name, args):
    with pytest.raises(InvalidArgumentError, match=rf"^\[{name}\] "):
        run_tool(name, args, client)
    assert transport.calls == []


def test_request_error_keeps_status_and_details(client, transport):
    transport.response = StubResponse(404, '{"error":"not found"}')

    with pytest.raises(RequestError) as excinfo:
        run_tool("reddit/getLatestPosts", {"subreddit": "python"}, client)

    assert str(excinfo.value) == "[reddit/getLatestPosts] Reddit latest posts failed (404)"
    assert excinfo.value.status_code == 404
    assert excinfo.value.details == {"error": "not found"}


def test_transport_error_keeps_its_type(client, transport):
    def responder(method, url, headers):
        raise TransportError("GET failed: unreachable")

    transport.responder = responder

    with pytest.raises(TransportError, match=r"^\[reddit/retrievePost\] GET failed"):
        run_tool("reddit/retrievePost", {"postUrl": "https://www.reddit.com/comments/abc"}, client)


def test_logs_an_info_line(client, caplog):
    with caplog.at_level(logging.INFO, logger="redditread.tools"):
        run_tool("reddit/searchSubreddit", {"subreddit": "python", "query": "asyncio"}, client)
    assert "[redditSearch] Searching r/python for: asyncio" in caplog.text
