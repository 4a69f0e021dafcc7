"""
Supported platforms and URL helpers.
"""

import re
from typing import Optional, Dict, Any, List

from .config import DEFAULT_YOUTUBE_QUALITY
from .errors import InvalidUrlError


# Navigation order; TikTok is served at the site root
PLATFORMS = {
    'tiktok': {
        'name': 'TikTok', 'title': 'Tiktok Video Downloader', 'path': '/',
        'icon': 'fab fa-tiktok', 'color': '#ff0050',
        'must_contain': 'tiktok.com',
        'invalid_message': 'Please enter a valid TikTok URL',
        'unsuccessful_message': 'Failed to fetch video data. Please try again with a different video.',
        'fallback_message': 'An error occurred while fetching the video. Please try again.',
        'placeholder': 'Paste TikTok video URL here...',
        'hint': 'Enter a valid TikTok video URL to download videos without watermark',
        'example': 'https://www.tiktok.com/@username/video/1234567890123456789',
    },
    'instagram': {
        'name': 'Instagram', 'title': 'Instagram Content Downloader', 'path': '/instagram',
        'icon': 'fab fa-instagram', 'color': '#e4405f',
        'must_contain': 'instagram.com',
        'invalid_message': 'Please enter a valid Instagram URL',
        'unsuccessful_message': 'Failed to fetch Instagram content. Please try again with a different link.',
        'fallback_message': 'An error occurred while fetching the content. Please try again.',
        'placeholder': 'Paste Instagram post or reel URL here...',
        'hint': 'Enter a valid Instagram post or reel URL to download content',
        'example': 'https://www.instagram.com/reel/ABC123xyz/',
    },
    'douyin': {
        'name': 'Douyin', 'title': 'Douyin Video Downloader', 'path': '/douyin',
        'icon': 'fas fa-music', 'color': '#00f0ff',
        'must_contain': None,
        'invalid_message': 'Please enter a valid Douyin URL',
        'unsuccessful_message': 'Failed to fetch video data. Please try again with a different video.',
        'fallback_message': 'An error occurred while fetching the video. Please try again.',
        'placeholder': 'Paste Douyin video URL here...',
        'hint': 'Enter a valid Douyin video URL to download videos without watermark',
        'example': 'https://v.douyin.com/abc123/',
    },
    'facebook': {
        'name': 'Facebook', 'title': 'Facebook Video Downloader', 'path': '/facebook',
        'icon': 'fab fa-facebook', 'color': '#1877f2',
        'must_contain': None,
        'invalid_message': 'Please enter a Facebook video URL',
        'unsuccessful_message': 'Failed to download video. Please check the URL and try again.',
        'fallback_message': 'Failed to download video. Please check the URL and try again.',
        'placeholder': 'Paste Facebook video URL here...',
        'hint': 'Enter a valid Facebook video URL to download videos',
        'example': 'https://www.facebook.com/watch/?v=1234567890',
    },
    'terabox': {
        'name': 'Terabox', 'title': 'TeraBox File Downloader', 'path': '/terabox',
        'icon': 'fas fa-box', 'color': '#3b82f6',
        'must_contain': None,
        'invalid_message': 'Please enter a valid TeraBox URL',
        'unsuccessful_message': 'Unable to process this link. Please check the URL and try again.',
        'fallback_message': 'An error occurred. Please try again later.',
        'placeholder': 'Paste TeraBox share URL here...',
        'hint': 'Enter a valid TeraBox file URL to download your files',
        'example': 'https://www.terabox.com/s/1abcdefg',
    },
    'youtube': {
        'name': 'YouTube', 'title': 'YouTube Video Downloader', 'path': '/youtube',
        'icon': 'fab fa-youtube', 'color': '#ff0000',
        'must_contain': 'youtu',
        'invalid_message': 'Please enter a valid YouTube URL',
        'unsuccessful_message': 'Failed to get video download link',
        'fallback_message': 'Failed to get video download link',
        'message_prefix': 'Download failed: ',
        'placeholder': 'Paste YouTube video URL here...',
        'hint': 'Enter a valid YouTube video URL to download videos',
        'example': 'https://www.youtube.com/watch?v=dQw4w9WgXcQ',
    },
}

QUALITIES = ['1080p', '720p', '480p', '360p', '240p', '144p']


def get_platform(key: Optional[str]) -> Optional[Dict[str, Any]]:
    if not key:
        return None
    return PLATFORMS.get(key.lower())


def nav_items() -> List[Dict[str, str]]:
    """Navbar entries in display order."""
    return [{'key': k, 'name': p['name'], 'path': p['path']} for k, p in PLATFORMS.items()]


def detect_platform(url: str) -> Optional[str]:
    if not isinstance(url, str):
        return None
    url = url.lower()
    if 'tiktok.com' in url:      return 'tiktok'
    if 'douyin.com' in url or 'iesdouyin.com' in url: return 'douyin'
    if 'youtube.com' in url or 'youtu.be' in url: return 'youtube'
    if 'instagram.com' in url:   return 'instagram'
    if 'facebook.com' in url or 'fb.watch' in url or 'fb.com' in url: return 'facebook'
    if 'terabox' in url or '1024tera' in url or 'teraboxapp' in url: return 'terabox'
    return None


def validate_url(key: str, url: Optional[str]) -> str:
    """
    Check a submitted URL against the platform's input rule.

    Returns the trimmed URL. Raises InvalidUrlError with the platform's
    message when the input is empty or does not look like the platform.
    """
    platform = get_platform(key)
    if platform is None:
        raise InvalidUrlError('Unsupported platform')

    if url is not None and not isinstance(url, str):
        raise InvalidUrlError(platform['invalid_message'])
    url = (url or '').strip()
    if not url:
        raise InvalidUrlError(platform['invalid_message'])
    if platform['must_contain'] and platform['must_contain'] not in url:
        raise InvalidUrlError(platform['invalid_message'])
    return url


def normalize_youtube_url(url: str) -> str:
    """Drop playlist, timestamp and tracking parameters from a YouTube link."""
    url = url.strip()
    if 'youtube.com/watch' in url:
        m = re.search(r'v=([^&]+)', url)
        if m:
            return f"https://www.youtube.com/watch?v={m.group(1)}"
    elif 'youtu.be/' in url:
        m = re.search(r'youtu\.be/([^?&]+)', url)
        if m:
            return f"https://youtu.be/{m.group(1)}"
    return url


def api_quality(selected: Optional[str]) -> str:
    """'auto' or nothing means 720; '1080p' becomes '1080'."""
    if not isinstance(selected, str) or not selected or selected == 'auto':
        return DEFAULT_YOUTUBE_QUALITY
    return selected.replace('p', '')
