"""
Turn downloader API payloads into the dicts rendered by the pages.

Each extractor checks the payload's success flag first and raises
UnsuccessfulResponseError when the API did not deliver a result.
"""

from .errors import UnsuccessfulResponseError
from .formatting import format_duration, format_bytes


def _dict(value):
    return value if isinstance(value, dict) else {}


def _is_web_url(value):
    return isinstance(value, str) and value.strip().lower().startswith(('http://', 'https://'))


def _links(*pairs):
    """Build the link list, keeping only http(s) URLs."""
    return [{'label': label, 'url': url.strip()} for label, url in pairs if _is_web_url(url)]


def _check_data(payload, flag='succes', key='data'):
    payload = _dict(payload)
    if payload.get(flag) and payload.get('status') == 200 and payload.get(key):
        return _dict(payload[key])
    raise UnsuccessfulResponseError()


# ==================== Per-platform extractors ====================
def extract_tiktok(payload):
    d = _check_data(payload)
    dlink = _dict(d.get('dlink'))
    stats = _dict(d.get('stats'))
    return {
        'platform': 'tiktok',
        'title': d.get('description', '') or '',
        'description': d.get('description', '') or '',
        'author': d.get('nickname') or d.get('username') or 'TikTok Creator',
        'avatar': dlink.get('profilePic', ''),
        'thumbnail': dlink.get('cover', ''),
        'music': d.get('songTitle', '') or '',
        'stats': {
            'plays': stats.get('plays', ''),
            'likes': stats.get('likes', ''),
            'comments': stats.get('comments', ''),
            'shares': stats.get('shares', ''),
        },
        'links': _links(
            ('Download Without Watermark', dlink.get('nowm')),
            ('Download With Watermark', dlink.get('wm')),
            ('Download Audio Only', dlink.get('audio')),
        ),
    }


def extract_douyin(payload):
    r = _check_data(payload, flag='success', key='result')
    dl = _dict(r.get('download'))
    return {
        'platform': 'douyin',
        'title': r.get('title', '') or '',
        'thumbnail': r.get('thumbnail', ''),
        'links': _links(
            ('Download Without Watermark', dl.get('no_watermark')),
            ('Download With Watermark', dl.get('with_watermark')),
            ('Download Audio Only', dl.get('mp3')),
        ),
    }


def extract_facebook(payload):
    d = _check_data(payload)
    return {
        'platform': 'facebook',
        'title': d.get('title', '') or '',
        'thumbnail': d.get('thumbnail', ''),
        'duration': format_duration(d.get('duration_ms')),
        'links': _links(
            ('Download HD Quality', d.get('hd')),
            ('Download SD Quality', d.get('sd')),
        ),
    }


def extract_instagram(payload):
    d = _check_data(payload)
    meta = _dict(d.get('metadata'))
    comments = []
    for c in (meta.get('comments') or [])[:5]:
        c = _dict(c)
        comments.append({'username': c.get('username', ''), 'text': c.get('text', '')})
    videos = [_dict(v) for v in (d.get('videoUrls') or [])]
    return {
        'platform': 'instagram',
        'title': meta.get('title', '') or '',
        'thumbnail': d.get('thumbnailUrl', ''),
        'type': d.get('type', ''),
        'username': meta.get('username', ''),
        'like_count': meta.get('likeCount', 0),
        'comment_count': meta.get('commentCount', 0),
        'comments': comments,
        'links': _links(*[(f"Download {v.get('name', '')} Video", v.get('url')) for v in videos]),
    }


def extract_terabox(payload):
    payload = _dict(payload)
    # this API reports success without a status field
    if not (payload.get('succes') and payload.get('data')):
        raise UnsuccessfulResponseError()
    d = _dict(payload['data'])
    return {
        'platform': 'terabox',
        'title': d.get('file_name', '') or '',
        'thumbnail': d.get('thumbnail', ''),
        'file_id': d.get('file_id', ''),
        'size': d.get('size') or format_bytes(d.get('bytes')),
        'links': _links(('Download File', d.get('download'))),
    }


def extract_youtube(payload):
    payload = _dict(payload)
    r = _dict(payload.get('result'))
    if payload.get('status') != 'success' or not r.get('media'):
        raise UnsuccessfulResponseError(payload.get('message') or '')
    meta = _dict(r.get('metadata'))
    author = _dict(r.get('author'))
    options = [_dict(o) for o in (r.get('qualityOptions') or [])]
    return {
        'platform': 'youtube',
        'title': r.get('title', '') or '',
        'thumbnail': meta.get('thumbnail', ''),
        'description': meta.get('description', '') or '',
        'duration': meta.get('duration', ''),
        'views': meta.get('views', ''),
        'author': author.get('name', ''),
        'avatar': author.get('image', ''),
        'quality': r.get('quality', ''),
        'format': r.get('format', ''),
        'media': r['media'],
        'links': _links(
            ('Download Video', r['media']),
            *[(f"Download {o.get('quality', '')}", o.get('url')) for o in options]
        ),
    }


EXTRACTORS = {
    'tiktok': extract_tiktok,
    'douyin': extract_douyin,
    'facebook': extract_facebook,
    'instagram': extract_instagram,
    'terabox': extract_terabox,
    'youtube': extract_youtube,
}


def extract(platform, payload):
    """Validate ``payload`` for ``platform`` and return its view model."""
    try:
        extractor = EXTRACTORS[platform]
    except KeyError:
        raise ValueError(f"Unknown platform: {platform}")
    return extractor(payload)
