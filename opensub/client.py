import time
from typing import Any
from urllib.parse import urlparse

import requests

from opensub.constants import (
    DEFAULT_BACKOFF_FACTOR,
    DEFAULT_RETRIES,
    DEFAULT_TIMEOUT,
    DEFAULT_USER_AGENT,
    OPENSUBTITLES_SEARCH_URL,
    USER_AGENT_HEADER,
)
from opensub.errors import HttpStatusError, ResponseFormatError, TransportError, UrlBuildError
from opensub.types import SearchResult
from opensub.utils import get_logger

logger = get_logger(__name__)


def _is_retryable(error: requests.exceptions.RequestException) -> bool:
    """Transport failures and 5xx answers are worth another attempt; 4xx are not."""
    if isinstance(error, requests.exceptions.HTTPError) and error.response is not None:
        return error.response.status_code >= 500
    return True


def get_with_retries(
    session: requests.Session,
    url: str,
    retries: int = DEFAULT_RETRIES,
    backoff_factor: int = DEFAULT_BACKOFF_FACTOR,
    timeout: int = DEFAULT_TIMEOUT,
    **kwargs: Any,
) -> requests.Response:
    """Wrapper for session.get with retries and exponential backoff."""
    attempts = max(1, retries)
    for attempt in range(attempts):
        try:
            response = session.get(url, timeout=timeout, **kwargs)
            response.raise_for_status()
            return response
        except requests.exceptions.RequestException as e:
            if attempt < attempts - 1 and _is_retryable(e):
                sleep_time = backoff_factor * (2**attempt)
                logger.warning("Request failed (%s), retrying in %s seconds...", e, sleep_time)
                time.sleep(sleep_time)
            else:
                raise
    # This line should never be reached due to the raise in the loop, but added for type checking
    raise RuntimeError("Unexpected flow in get_with_retries")


def build_search_url(query_path: str, base_url: str = OPENSUBTITLES_SEARCH_URL) -> str:
    """
    Join the rendered query path onto the search endpoint and check the result.

    Raises:
        UrlBuildError: If the URL is not a plain http(s) URL with a clean path.
    """
    url = f"{base_url.rstrip('/')}/{query_path}"
    parsed = urlparse(url)
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        raise UrlBuildError(f"Invalid search URL: {url}")
    if parsed.query or parsed.fragment or "?" in url or "#" in url:
        raise UrlBuildError(f"Search path must not contain '?' or '#': {query_path}")
    if any(ch.isspace() or not ch.isprintable() for ch in url):
        raise UrlBuildError(f"Search path contains unencoded characters: {query_path!r}")
    return url


class SearchClient:
    """Client for the OpenSubtitles REST search endpoint."""

    def __init__(
        self,
        user_agent: str = DEFAULT_USER_AGENT,
        timeout: int = DEFAULT_TIMEOUT,
        retries: int = DEFAULT_RETRIES,
        base_url: str = OPENSUBTITLES_SEARCH_URL,
    ):
        if not user_agent:
            raise ValueError("A non-empty user agent is required")
        self.timeout = timeout
        self.retries = retries
        self.base_url = base_url
        self.session = requests.Session()
        self.session.headers.update({USER_AGENT_HEADER: user_agent, "Accept": "application/json"})

    def __enter__(self) -> "SearchClient":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def close(self) -> None:
        self.session.close()

    def search(self, query_path: str) -> list[SearchResult]:
        """
        Run one search and return the listings in server order.

        Args:
            query_path: A rendered query path, e.g. `query-matrix/sublanguageid-eng`.

        Returns:
            The parsed search results.

        Raises:
            UrlBuildError: If the search URL is malformed.
            TransportError: If the request could not be completed.
            HttpStatusError: If the server answered with a non-2xx status.
            ResponseFormatError: If the body is not an array of subtitle records.
        """
        url = build_search_url(query_path, self.base_url)
        logger.debug("GET %s", url)

        try:
            response = get_with_retries(self.session, url, retries=self.retries, timeout=self.timeout)
        except requests.exceptions.HTTPError as e:
            response = e.response
            if response is None:
                raise TransportError(str(e)) from e
            raise HttpStatusError(response.status_code, url, response.reason or "") from e
        except requests.exceptions.RequestException as e:
            raise TransportError(f"Request to {url} failed: {e}") from e

        logger.debug("Response %s, %d bytes", response.status_code, len(response.content))
        return parse_results(response)


def parse_results(response: requests.Response) -> list[SearchResult]:
    """
    Deserialize a search response body.

    Raises:
        ResponseFormatError: If the body is not a JSON array of subtitle records.
    """
    try:
        data = response.json()
    except ValueError as e:
        raise ResponseFormatError(f"Response is not valid JSON: {e}") from e

    if not isinstance(data, list):
        raise ResponseFormatError(f"Expected a JSON array, got {type(data).__name__}")

    results: list[SearchResult] = []
    for index, item in enumerate(data):
        if not isinstance(item, dict):
            raise ResponseFormatError(f"Result #{index} is not an object: {item!r}")
        try:
            results.append(SearchResult.from_api(item))
        except KeyError as e:
            raise ResponseFormatError(f"Result #{index} is missing field {e}") from e
    return results
