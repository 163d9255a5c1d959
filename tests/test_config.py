import json

import pytest

from redditread.utils import config as config_module
from redditread.utils.config import DEFAULT_CONFIG, get_reddit_client, load_config


@pytest.fixture(autouse=True)
def isolated(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("HOME", str(tmp_path / "home"))
    for name in config_module.ENV_OVERRIDES:
        monkeypatch.delenv(name, raising=False)


def test_defaults():
    assert load_config() == DEFAULT_CONFIG


def test_local_rc_file(tmp_path):
    (tmp_path / ".redditreadrc").write_text(json.dumps({"base_url": "https://old.reddit.com", "timeout": 5}))
    config = load_config()
    assert config["base_url"] == "https://old.reddit.com"
    assert config["timeout"] == 5
    assert config["max_retries"] == DEFAULT_CONFIG["max_retries"]


def test_invalid_rc_file_is_ignored(tmp_path, caplog):
    (tmp_path / ".redditreadrc").write_text("{not json")
    assert load_config() == DEFAULT_CONFIG
    assert "Ignoring invalid config file" in caplog.text


def test_environment_overrides_file(tmp_path, monkeypatch):
    (tmp_path / ".redditreadrc").write_text(json.dumps({"base_url": "https://old.reddit.com"}))
    monkeypatch.setenv("REDDITREAD_BASE_URL", "https://mirror.example")
    monkeypatch.setenv("REDDITREAD_MAX_RETRIES", "5")
    config = load_config()
    assert config["base_url"] == "https://mirror.example"
    assert config["max_retries"] == 5


def test_bad_environment_value_is_ignored(monkeypatch):
    monkeypatch.setenv("REDDITREAD_TIMEOUT", "soon")
    assert load_config()["timeout"] == DEFAULT_CONFIG["timeout"]


def test_get_reddit_client_uses_config():
    client = get_reddit_client({**DEFAULT_CONFIG, "base_url": "https://old.reddit.com/", "timeout": 3, "max_retries": 1})
    assert client.base_url == "https://old.reddit.com"
    assert client.transport.timeout == 3
    assert client.transport.session.get_adapter("https://old.reddit.com").max_retries.total == 1
