"""
Core module: resolve a social media link into download links via the
downloader APIs.
"""

import logging
from typing import Optional, Dict, Any, List, Callable

from . import config
from .client import DownloaderClient
from .errors import LinkDropError, InvalidUrlError, user_message
from .extractors import extract
from .platforms import (
    PLATFORMS, get_platform, detect_platform, validate_url,
    normalize_youtube_url, api_quality,
)


class LinkDownloader:
    """
    Main entry point that validates a URL, calls the matching downloader
    API and returns the rendered-ready result.
    """

    # Supported platforms
    SUPPORTED_PLATFORMS = list(PLATFORMS)

    def __init__(self, client_factory: Optional[Callable[[], DownloaderClient]] = None):
        """
        Initialize the downloader.

        Args:
            client_factory: Callable returning a fresh DownloaderClient for
                each lookup; defaults to one built from ``linkdrop.config``
        """
        self.client_factory = client_factory or DownloaderClient

    def get_links(
        self,
        url: str,
        platform: Optional[str] = None,
        quality: Optional[str] = 'auto',
    ) -> Dict[str, Any]:
        """
        Get download links for a post without downloading anything.

        Args:
            url: The URL of the post, reel, video or shared file
            platform: Platform key; detected from the URL when omitted
            quality: YouTube quality ('auto', '1080p', ... '144p')

        Returns:
            Dictionary with 'success' and either 'result' or 'error'
        """
        platform = (platform or detect_platform(url or '') or '').lower()
        info = get_platform(platform)
        if info is None:
            return {
                'success': False,
                'platform': platform or None,
                'error': 'Unsupported URL',
                'error_type': InvalidUrlError.error_type,
                'url': url,
            }

        try:
            result = self._resolve(platform, url, quality)
            return {'success': True, 'platform': platform, 'result': result}
        except LinkDropError as e:
            if not isinstance(e, InvalidUrlError):
                logging.error(f"{info['name']} API Error: {e!r} {e.detail or ''}")
            return {
                'success': False,
                'platform': platform,
                'error': user_message(e, info),
                'error_type': e.error_type,
                'url': url,
            }

    def _resolve(self, platform: str, url: str, quality: Optional[str]) -> Dict[str, Any]:
        url = validate_url(platform, url)
        with self.client_factory() as client:
            if platform == 'youtube':
                url = normalize_youtube_url(url)
                q = api_quality(quality)
                logging.info(f"Requesting download: url={url} quality={q}")
                payload = client.fetch_youtube(url, q)
            else:
                payload = client.fetch(platform, url)
        return extract(platform, payload)

    def is_url_supported(self, url: str) -> bool:
        """
        Check if a URL is from a supported platform.

        Args:
            url: The URL to check

        Returns:
            True if supported, False otherwise
        """
        return detect_platform(url) is not None

    def platforms(self) -> List[Dict[str, str]]:
        return [
            {'key': key, 'name': p['name'], 'path': p['path'], 'example': p['example']}
            for key, p in PLATFORMS.items()
        ]


def youtube_proxy_payload(url: str, quality: Optional[str] = None,
                          client_factory: Optional[Callable[[], DownloaderClient]] = None) -> Dict[str, Any]:
    """
    Fetch the YouTube API response unchanged, including JSON error bodies
    sent with a non-2xx status. Transport failures and non-JSON bodies
    propagate to the caller.
    """
    factory = client_factory or DownloaderClient
    with factory() as client:
        return client.fetch_youtube(url, quality or config.DEFAULT_YOUTUBE_QUALITY, relay_errors=True)
