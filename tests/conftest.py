import pytest

from redditread import ClientConfig, RedditClient
from tests.stubs import StubTransport


@pytest.fixture
def transport():
    return StubTransport()


@pytest.fixture
def client(transport):
    return RedditClient(ClientConfig(), transport=transport)
