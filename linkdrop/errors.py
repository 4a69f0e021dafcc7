"""
Failure taxonomy for downloader API calls.

Every failure a page can show is one of these exceptions. ``user_message``
turns an exception into the sentence displayed to the user, using the
per-platform wording from the registry in :mod:`linkdrop.platforms`.
"""

from typing import Optional, Dict, Any


TIMEOUT_MESSAGE = "Request timed out. The server might be busy, please try again later."
NETWORK_MESSAGE = "Network connection issue. Please check your internet connection and try again."
SERVER_MESSAGE = "Server error: {status}. Please try again later."


class LinkDropError(Exception):
    """Base class for all errors raised while resolving a link."""

    error_type = 'error'

    def __init__(self, message: str = '', detail: Optional[str] = None):
        super().__init__(message or self.error_type)
        self.message = message
        self.detail = detail


class InvalidUrlError(LinkDropError):
    """The submitted URL was rejected before any request was made."""

    error_type = 'invalid_url'


class RequestTimeoutError(LinkDropError):
    error_type = 'timeout'


class NetworkError(LinkDropError):
    error_type = 'network'


class ServerError(LinkDropError):
    """The downloader API answered with a non-2xx status."""

    error_type = 'server'

    def __init__(self, status_code: int, detail: Optional[str] = None):
        super().__init__(f"HTTP {status_code}", detail)
        self.status_code = status_code


class InvalidResponseError(LinkDropError):
    """The response body was not JSON."""

    error_type = 'invalid_response'


class UnsuccessfulResponseError(LinkDropError):
    """The API answered but its payload did not report success."""

    error_type = 'unsuccessful'


def user_message(exc: Exception, platform: Optional[Dict[str, Any]] = None) -> str:
    """
    Map an exception to the message shown on the platform's page.

    Args:
        exc: The exception raised while resolving the link
        platform: Registry entry of the platform (see ``platforms.PLATFORMS``)

    Returns:
        A user-facing message
    """
    platform = platform or {}
    if isinstance(exc, InvalidUrlError):
        return exc.message or platform.get('invalid_message', 'Please enter a valid URL')

    if isinstance(exc, RequestTimeoutError):
        message = TIMEOUT_MESSAGE
    elif isinstance(exc, NetworkError):
        message = NETWORK_MESSAGE
    elif isinstance(exc, ServerError):
        message = SERVER_MESSAGE.format(status=exc.status_code)
    elif isinstance(exc, UnsuccessfulResponseError):
        message = exc.message or platform.get('unsuccessful_message') or platform.get('fallback_message', '')
    else:
        message = platform.get('fallback_message', '')

    message = message or 'An error occurred. Please try again later.'
    prefix = platform.get('message_prefix', '')
    return f"{prefix}{message}"
