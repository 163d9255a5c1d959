"""Configuration management for redditread"""

import os
import json
import logging
from pathlib import Path
from typing import Dict, Any, Optional
from dotenv import load_dotenv

from .options import ClientConfig, DEFAULT_BASE_URL
from .reddit_client import RedditClient
from .transport import RetryingTransport

logger = logging.getLogger(__name__)

# Load environment variables
load_dotenv()

DEFAULT_CONFIG = {
    "base_url": DEFAULT_BASE_URL,
    "timeout": 15,
    "max_retries": 3,
    "backoff_factor": 1,
}

ENV_OVERRIDES = {
    "REDDITREAD_BASE_URL": ("base_url", str),
    "REDDITREAD_TIMEOUT": ("timeout", float),
    "REDDITREAD_MAX_RETRIES": ("max_retries", int),
}


def get_config_path() -> Path:
    """Get the configuration file path"""
    # Check for local config first
    local_config = Path(".redditreadrc")
    if local_config.exists():
        return local_config

    # Then check home directory
    home_config = Path.home() / ".redditreadrc"
    return home_config


def load_config() -> Dict[str, Any]:
    """Load configuration from file and environment"""
    config = DEFAULT_CONFIG.copy()

    # Load from config file if it exists
    config_path = get_config_path()
    if config_path.exists():
        try:
            with open(config_path, "r") as f:
                config.update(json.load(f))
        except (OSError, json.JSONDecodeError) as e:
            logger.warning("Ignoring invalid config file %s: %s", config_path, e)

    # Override with environment variables
    for env_name, (key, cast) in ENV_OVERRIDES.items():
        value = os.getenv(env_name)
        if not value:
            continue
        try:
            config[key] = cast(value)
        except ValueError:
            logger.warning("Ignoring %s=%r: expected %s", env_name, value, cast.__name__)

    return config


def get_reddit_client(config: Optional[Dict[str, Any]] = None) -> RedditClient:
    """Get a configured RedditClient"""
    config = config or load_config()
    transport = RetryingTransport(
        timeout=config["timeout"],
        max_retries=config["max_retries"],
        backoff_factor=config["backoff_factor"],
    )
    return RedditClient(ClientConfig(base_url=config["base_url"]), transport=transport)
