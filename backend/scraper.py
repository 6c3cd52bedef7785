"""Page fetcher: normalize a user supplied URL and download its HTML.

This is the only network-facing piece of the audit; the extractor and
scorers work on the text it returns. Failures raise before any scoring runs.
"""

import logging
from dataclasses import dataclass
from urllib.parse import urlparse

import requests

import config

logger = logging.getLogger(__name__)

_REQUEST_HEADERS = {
    "Accept": "text/html",
}


class InvalidUrlError(ValueError):
    """The URL cannot be parsed into scheme + host even after normalization."""


class FetchError(Exception):
    """The page could not be retrieved (non-2xx, timeout, network error)."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


@dataclass(frozen=True)
class FetchedPage:
    requested_url: str
    final_url: str
    status_code: int
    html: str


def normalize_url(url: str) -> str:
    """Trim, prepend https:// when no http(s) scheme is given, and validate."""
    url = (url or "").strip()
    if not url:
        raise InvalidUrlError("URL is required")
    if not url.lower().startswith(("http://", "https://")):
        url = f"https://{url}"

    try:
        parsed = urlparse(url)
        host = parsed.hostname
    except ValueError as exc:
        raise InvalidUrlError(f"Invalid URL: {url}") from exc
    if not host or any(ch.isspace() for ch in parsed.netloc):
        raise InvalidUrlError(f"Invalid URL: {url}")
    return url


def fetch_page(url: str, timeout: float | None = None) -> FetchedPage:
    """
    GET the page with a bounded timeout and the audit bot user agent.
    Redirects are followed; `final_url` is where they ended.
    """
    url = normalize_url(url)
    headers = {"User-Agent": config.USER_AGENT, **_REQUEST_HEADERS}
    timeout = config.FETCH_TIMEOUT_SECONDS if timeout is None else timeout

    logger.info("Fetching %s (timeout=%ss)", url, timeout)
    try:
        response = requests.get(url, headers=headers, timeout=timeout, allow_redirects=True)
    except requests.Timeout as exc:
        logger.warning("Timed out fetching %s", url)
        raise FetchError(f"Timed out after {timeout:g}s") from exc
    except requests.RequestException as exc:
        logger.warning("Network error fetching %s: %s", url, exc)
        raise FetchError(str(exc)) from exc

    if not 200 <= response.status_code < 300:
        logger.warning("Fetching %s returned %s", url, response.status_code)
        raise FetchError(f"{response.status_code} {response.reason}".strip(), status_code=response.status_code)

    return FetchedPage(
        requested_url=url,
        final_url=response.url or url,
        status_code=response.status_code,
        html=response.text,
    )
