"""
Command-line interface for Social Link Downloader.
"""

import argparse
import sys
import json

from . import __version__
from .core import LinkDownloader
from .platforms import PLATFORMS, QUALITIES


def print_result(info: dict):
    """Print a lookup result in a readable format."""
    print("\n" + "="*60)
    if info.get('success'):
        result = info['result']
        print(f"Platform: {PLATFORMS[info['platform']]['name']}")
        if result.get('title'):
            title = result['title'][:200] + "..." if len(result['title']) > 200 else result['title']
            print(f"Title: {title}")
        for key, label in (('author', 'Author'), ('username', 'Username'),
                           ('duration', 'Duration'), ('size', 'Size')):
            if result.get(key):
                print(f"{label}: {result[key]}")
        if result.get('thumbnail'):
            print(f"Thumbnail: {result['thumbnail']}")
        print()
        for link in result.get('links', []):
            print(f"{link['label']}:\n  {link['url']}")
    else:
        print(f"Error: {info.get('error', 'Unknown error')}")
    print("="*60 + "\n")


def print_platforms():
    for key, p in PLATFORMS.items():
        print(f"  {key:<10} {p['name']:<10} e.g. {p['example']}")


def main(argv=None):
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Social Link Downloader - Get download links for social media posts",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Links for a TikTok video
  linkdrop https://www.tiktok.com/@username/video/1234567890123456789

  # Force the platform when the URL is a short link
  linkdrop --platform douyin https://v.douyin.com/abc123/

  # YouTube at a specific quality
  linkdrop -q 480p https://youtu.be/dQw4w9WgXcQ

  # Raw JSON output
  linkdrop --json https://www.instagram.com/reel/ABC123xyz/
        """
    )

    parser.add_argument(
        'url',
        nargs='?',
        help='URL of the post, video or shared file'
    )

    parser.add_argument(
        '-p', '--platform',
        choices=list(PLATFORMS),
        help='Platform to use (default: detected from the URL)'
    )

    parser.add_argument(
        '-q', '--quality',
        default='auto',
        choices=['auto'] + QUALITIES,
        help='YouTube quality (default: auto)'
    )

    parser.add_argument(
        '--json',
        action='store_true',
        help='Output results in JSON format'
    )

    parser.add_argument(
        '--list',
        action='store_true',
        help='List supported platforms and exit'
    )

    parser.add_argument(
        '-v', '--version',
        action='version',
        version=f'Social Link Downloader {__version__}'
    )

    args = parser.parse_args(argv)

    if args.list:
        print("Supported Platforms:")
        print_platforms()
        return 0

    if not args.url:
        parser.error('the following arguments are required: url')

    downloader = LinkDownloader()

    if not args.platform and not downloader.is_url_supported(args.url):
        print("Error: The URL does not appear to be from a supported platform.")
        print("Use --platform to choose one, or --list to see them.")
        return 1

    try:
        result = downloader.get_links(args.url, platform=args.platform, quality=args.quality)
    except KeyboardInterrupt:
        print("\n\nCancelled by user.")
        return 1

    if args.json:
        print(json.dumps(result, indent=2, ensure_ascii=False))
    else:
        print_result(result)

    return 0 if result.get('success') else 1


if __name__ == '__main__':
    sys.exit(main())
