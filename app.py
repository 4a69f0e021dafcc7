"""
Social Link Downloader — Web
============================
Pages: TikTok, Instagram, Douyin, Facebook, TeraBox, YouTube
Paste a link, get the download links back from the downloader APIs.
"""

import logging
from flask import Flask, render_template, request, jsonify, redirect

from linkdrop import config
from linkdrop.core import LinkDownloader, youtube_proxy_payload
from linkdrop.errors import LinkDropError, InvalidUrlError
from linkdrop.formatting import format_count
from linkdrop.platforms import PLATFORMS, QUALITIES, get_platform, nav_items

logging.basicConfig(
    level=config.LOG_LEVEL,
    format='%(asctime)s %(levelname)s %(name)s: %(message)s',
)

app = Flask(__name__)
app.jinja_env.filters['thousands'] = format_count

downloader = LinkDownloader()


# ==================== Helpers ====================
def render_platform(platform, url='', quality='auto', result=None, error=None, status=200):
    return render_template(
        'platform.html',
        platform=platform,
        info=PLATFORMS[platform],
        nav=nav_items(),
        active_path=PLATFORMS[platform]['path'],
        url=url,
        quality=quality,
        qualities=QUALITIES,
        result=result,
        error=error,
    ), status


def handle_page(platform):
    if request.method == 'GET':
        return render_platform(platform)

    url = request.form.get('url', '')
    quality = request.form.get('quality', 'auto')
    res = downloader.get_links(url, platform=platform, quality=quality)
    if res['success']:
        return render_platform(platform, url, quality, result=res['result'])
    return render_platform(platform, url, quality, error=res['error'])


# ==================== Flask Routes ====================

# Global error handlers — always return JSON for API routes
@app.errorhandler(404)
def not_found(e):
    if request.path.startswith('/api/'):
        return jsonify({'error': 'Route not found'}), 404
    return render_template('error.html', nav=nav_items(), active_path=None,
                           code=404, message='Page not found'), 404

@app.errorhandler(500)
def internal_error(e):
    if request.path.startswith('/api/'):
        return jsonify({'error': f'Server error: {e}'}), 500
    return render_template('error.html', nav=nav_items(), active_path=None,
                           code=500, message='Something went wrong'), 500

@app.errorhandler(405)
def method_not_allowed(e):
    if request.path.startswith('/api/'):
        return jsonify({'error': 'Method not allowed'}), 405
    return render_template('error.html', nav=nav_items(), active_path=None,
                           code=405, message='Method not allowed'), 405


@app.route('/', methods=['GET', 'POST'])
def index():
    return handle_page('tiktok')


@app.route('/tiktok')
def tiktok():
    return redirect('/')


@app.route('/<platform>', methods=['GET', 'POST'])
def platform_page(platform):
    platform = platform.lower()
    if platform == 'tiktok':
        return redirect('/')
    if platform not in PLATFORMS:
        return not_found(None)
    return handle_page(platform)


@app.route('/api/platforms')
def get_platforms():
    return jsonify(downloader.platforms())


@app.route('/api/youtube/proxy')
def youtube_proxy():
    url = request.args.get('url')
    quality = request.args.get('quality') or config.DEFAULT_YOUTUBE_QUALITY
    if not url:
        return jsonify({'status': 'error', 'message': 'URL parameter is required'}), 400

    logging.info(f"Proxying YouTube request: url={url} quality={quality}")
    try:
        data = youtube_proxy_payload(url, quality, client_factory=downloader.client_factory)
    except LinkDropError as e:
        logging.error(f"YouTube proxy error: {e!r} {e.detail or ''}")
        return jsonify({
            'status': 'error',
            'message': 'Failed to fetch video data',
            'error': e.detail or str(e),
        }), 500
    return jsonify(data)


@app.route('/api/<platform>', methods=['POST'])
def lookup(platform):
    if get_platform(platform) is None:
        return jsonify({'error': 'Route not found'}), 404

    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        data = request.form
    res = downloader.get_links(data.get('url', ''), platform=platform,
                               quality=data.get('quality', 'auto'))
    if res['success']:
        return jsonify(res['result'])
    status = 400 if res['error_type'] == InvalidUrlError.error_type else 502
    return jsonify({'error': res['error'], 'error_type': res['error_type']}), status


if __name__ == '__main__':
    print("=" * 60)
    print("  Social Link Downloader")
    print("  TikTok | Instagram | Douyin | Facebook | TeraBox | YouTube")
    print("=" * 60)
    print(f"  Browser: http://localhost:{config.PORT}")
    print("=" * 60)
    app.run(debug=config.DEBUG, host=config.HOST, port=config.PORT)
