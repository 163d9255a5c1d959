"""HTTP transport with retry for redditread.

Retries 429 and 5xx responses and connection failures with exponential
backoff. Once retries run out the last response is handed back unchanged so
the caller decides how to report it.
"""

import logging
from http.cookiejar import DefaultCookiePolicy
from typing import Mapping, Optional, Protocol

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from .exceptions import RequestTimeout, TransportError

logger = logging.getLogger(__name__)

RETRY_STATUSES = [429, 500, 502, 503, 504]


class Response(Protocol):
    """What the client needs from a transport response."""

    status_code: int

    @property
    def text(self) -> str: ...

    def close(self) -> None: ...


class Transport(Protocol):
    """Anything that can fetch a URL with retry."""

    def fetch(self, method: str, url: str, headers: Mapping[str, str]) -> Response: ...


class RetryingTransport:
    """requests.Session with urllib3 retry mounted on both schemes."""

    def __init__(self, timeout: float = 15, max_retries: int = 3, backoff_factor: float = 1):
        self.timeout = timeout
        self.session = requests.Session()
        # Reddit sets tracking cookies; never send them back on later calls
        self.session.cookies.set_policy(DefaultCookiePolicy(allowed_domains=[]))
        retry = Retry(
            total=max_retries,
            backoff_factor=backoff_factor,
            status_forcelist=RETRY_STATUSES,
            allowed_methods=["GET"],
            raise_on_status=False,
        )
        adapter = HTTPAdapter(max_retries=retry)
        self.session.mount("https://", adapter)
        self.session.mount("http://", adapter)

    def fetch(self, method: str, url: str, headers: Optional[Mapping[str, str]] = None) -> requests.Response:
        """Send one request; retries happen inside the mounted adapter.

        The body is streamed, so reading it (and closing the response) is
        left to the caller.

        Raises:
            RequestTimeout: the request timed out
            TransportError: any other network failure once retries are spent
        """
        logger.debug("%s %s", method, url)
        try:
            return self.session.request(method, url, headers=dict(headers or {}), timeout=self.timeout, stream=True)
        except requests.Timeout as exc:
            raise RequestTimeout(f"{method} {url} timed out after {self.timeout}s") from exc
        except requests.RequestException as exc:
            raise TransportError(f"{method} {url} failed: {exc}") from exc

    def close(self):
        self.session.close()

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        self.close()
