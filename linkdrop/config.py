"""
Settings read from the environment.
"""

import os

# ==================== Downloader APIs ====================
API_BASE_URL = os.environ.get('LINKDROP_API_BASE_URL', 'https://api.ferdev.my.id')
YOUTUBE_API_URL = os.environ.get('LINKDROP_YOUTUBE_API_URL', 'https://restapi.rizk.my.id/ytdown')
YOUTUBE_API_KEY = os.environ.get('LINKDROP_YOUTUBE_API_KEY', 'free')
YOUTUBE_FORMAT = 'mp4'
DEFAULT_YOUTUBE_QUALITY = '720'

REQUEST_TIMEOUT = float(os.environ.get('LINKDROP_TIMEOUT', '15'))

HTTP_HEADERS = {
    'User-Agent': 'Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/131.0.0.0 Safari/537.36',
    'Accept': 'application/json',
}

# ==================== Web server ====================
HOST = os.environ.get('LINKDROP_HOST', '0.0.0.0')
PORT = int(os.environ.get('LINKDROP_PORT', '5000'))
DEBUG = os.environ.get('LINKDROP_DEBUG', '').lower() in ('1', 'true', 'yes')
LOG_LEVEL = os.environ.get('LINKDROP_LOG_LEVEL', 'INFO').upper()
