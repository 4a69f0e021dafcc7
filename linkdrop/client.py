"""
HTTP client for the third-party downloader APIs.
"""

import logging
from typing import Optional, Dict, Any

import httpx

from . import config
from .errors import (
    RequestTimeoutError, NetworkError, ServerError, InvalidResponseError,
)


# Platforms served by the /downloader/<platform>?link= API family
DOWNLOADER_ENDPOINTS = ('tiktok', 'instagram', 'douyin', 'facebook', 'terabox')


class DownloaderClient:
    """
    Thin wrapper around ``httpx.Client`` that issues one GET per call and
    turns transport and HTTP failures into :mod:`linkdrop.errors` exceptions.
    """

    def __init__(
        self,
        base_url: str = config.API_BASE_URL,
        youtube_api_url: str = config.YOUTUBE_API_URL,
        youtube_api_key: str = config.YOUTUBE_API_KEY,
        timeout: float = config.REQUEST_TIMEOUT,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        """
        Args:
            base_url: Root of the downloader API (without trailing slash)
            youtube_api_url: Full URL of the YouTube downloader endpoint
            youtube_api_key: API key sent to the YouTube endpoint
            timeout: Seconds before a request is abandoned
            transport: Optional httpx transport, used by tests
        """
        self.base_url = base_url.rstrip('/')
        self.youtube_api_url = youtube_api_url
        self.youtube_api_key = youtube_api_key
        self.timeout = timeout
        self._client = httpx.Client(
            headers=config.HTTP_HEADERS,
            timeout=timeout,
            follow_redirects=True,
            transport=transport,
        )

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        self.close()

    def close(self):
        self._client.close()

    def fetch(self, platform: str, url: str) -> Dict[str, Any]:
        """Call ``/downloader/<platform>?link=<url>`` and return the decoded JSON."""
        if platform not in DOWNLOADER_ENDPOINTS:
            raise ValueError(f"No downloader endpoint for platform: {platform}")
        return self._get(f"{self.base_url}/downloader/{platform}", {'link': url})

    def fetch_youtube(self, url: str, quality: str = config.DEFAULT_YOUTUBE_QUALITY,
                      relay_errors: bool = False) -> Dict[str, Any]:
        """
        Call the YouTube downloader API and return the decoded JSON.

        With ``relay_errors`` a non-2xx answer that carries a JSON body is
        returned as-is instead of raising ServerError.
        """
        params = {
            'url': url,
            'format': config.YOUTUBE_FORMAT,
            'quality': quality,
            'apikey': self.youtube_api_key,
        }
        return self._get(self.youtube_api_url, params, relay_errors)

    def _get(self, endpoint: str, params: Dict[str, str], relay_errors: bool = False) -> Dict[str, Any]:
        logging.info(f"Requesting {endpoint} ({params.get('link') or params.get('url')})")
        try:
            r = self._client.get(endpoint, params=params)
        except httpx.TimeoutException as e:
            logging.warning(f"Timed out after {self.timeout}s: {endpoint}")
            raise RequestTimeoutError(detail=str(e)) from e
        except httpx.TransportError as e:
            logging.warning(f"Network error calling {endpoint}: {e}")
            raise NetworkError(detail=str(e)) from e

        if not r.is_success:
            logging.warning(f"{endpoint} answered HTTP {r.status_code}")
            if not relay_errors:
                raise ServerError(r.status_code, detail=r.text[:500])

        try:
            return r.json()
        except ValueError as e:
            if not r.is_success:
                raise ServerError(r.status_code, detail=r.text[:500]) from e
            logging.error(f"Non-JSON response from {endpoint}: {r.text[:200]!r}")
            raise InvalidResponseError(detail=str(e)) from e
