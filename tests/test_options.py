import pytest

from redditread import ClientConfig, InvalidArgumentError, ListingOptions, SearchOptions, SortMode, TimeFilter


def test_client_config_defaults_and_strips_slash():
    assert ClientConfig().base_url == "https://www.reddit.com"
    assert ClientConfig(base_url="https://old.reddit.com/").base_url == "https://old.reddit.com"


def test_client_config_is_immutable():
    config = ClientConfig()
    with pytest.raises(AttributeError):
        config.base_url = "https://example.test"


def test_search_options_defaults():
    opts = SearchOptions()
    assert opts.limit == 25
    assert opts.sort is SortMode.RELEVANCE
    assert opts.time_range is None
    assert opts.after is None and opts.before is None


def test_search_options_coerce_strings():
    opts = SearchOptions(sort="comments", time_range="all")
    assert opts.sort is SortMode.COMMENTS
    assert opts.time_range is TimeFilter.ALL


def test_none_limit_falls_back_to_default():
    assert SearchOptions(limit=None, sort=None).limit == 25
    assert ListingOptions(limit=None).limit == 25


@pytest.mark.parametrize("limit", [0, 101, -1, "10", True])
def test_limit_out_of_range(limit):
    with pytest.raises(InvalidArgumentError):
        ListingOptions(limit=limit)


@pytest.mark.parametrize("kwargs", [{"sort": "best"}, {"time_range": "decade"}])
def test_unknown_enum_values(kwargs):
    with pytest.raises(InvalidArgumentError, match="must be one of"):
        SearchOptions(**kwargs)
