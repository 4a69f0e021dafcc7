"""
Social Link Downloader - render download links for social media posts
by delegating extraction to third-party downloader APIs.
"""

__version__ = "1.0.0"
