"""
Tests for the Flask pages, JSON API and YouTube proxy route.
"""

import httpx
import pytest

from tests.payloads import (
    URLS, YOUTUBE_PAYLOAD, make_client_factory, respond_json, by_platform,
    raise_timeout, raise_connect_error,
)


PATHS = {
    'tiktok': '/', 'instagram': '/instagram', 'douyin': '/douyin',
    'facebook': '/facebook', 'terabox': '/terabox', 'youtube': '/youtube',
}


class TestPages:

    @pytest.mark.parametrize('platform,path', list(PATHS.items()))
    def test_form_renders(self, client, platform, path):
        response = client.get(path)

        assert response.status_code == 200
        assert b'<form method="post"' in response.data
        assert b'name="url"' in response.data

    def test_navbar_marks_active_page(self, client):
        html = client.get('/douyin').get_data(as_text=True)
        assert '<a href="/douyin" class="active">Douyin</a>' in html
        assert '<a href="/" class="">TikTok</a>' in html

    def test_youtube_has_quality_selector(self, client):
        html = client.get('/youtube').get_data(as_text=True)
        assert '<option value="auto" selected>Auto Quality</option>' in html
        assert '<option value="1080p" >1080p</option>' in html

    def test_tiktok_path_redirects_to_root(self, client):
        response = client.get('/tiktok')
        assert response.status_code == 302
        assert response.headers['Location'].endswith('/')

    def test_unknown_page(self, client):
        response = client.get('/myspace')
        assert response.status_code == 404
        assert b'Page not found' in response.data

    @pytest.mark.parametrize('platform', list(PATHS))
    def test_submit_renders_links(self, client, use_factory, platform):
        factory = use_factory(make_client_factory(by_platform))

        html = client.post(PATHS[platform], data={'url': URLS[platform]}).get_data(as_text=True)

        assert 'Download Options' in html
        assert len(factory.requests) == 1

    def test_tiktok_result_links(self, client, use_factory):
        use_factory(make_client_factory(by_platform))

        html = client.post('/', data={'url': URLS['tiktok']}).get_data(as_text=True)

        assert 'href="https://cdn.test/tt/nowm.mp4"' in html
        assert 'href="https://cdn.test/tt/wm.mp4"' in html
        assert 'href="https://cdn.test/tt/audio.mp3"' in html
        assert 'Download Without Watermark' in html

    def test_instagram_counts_and_comments(self, client, use_factory):
        use_factory(make_client_factory(by_platform))

        html = client.post('/instagram', data={'url': URLS['instagram']}).get_data(as_text=True)

        assert '12,345 likes' in html
        assert '@user4' in html
        assert '@user5' not in html

    def test_invalid_url_shows_message_without_request(self, client, use_factory):
        factory = use_factory(make_client_factory(by_platform))

        html = client.post('/', data={'url': 'https://www.instagram.com/p/x/'}).get_data(as_text=True)

        assert 'Please enter a valid TikTok URL' in html
        assert factory.requests == []

    def test_entered_url_kept_on_error(self, client, use_factory):
        use_factory(make_client_factory(raise_timeout))

        html = client.post('/facebook', data={'url': URLS['facebook']}).get_data(as_text=True)

        assert 'Request timed out.' in html
        assert 'value="https://www.facebook.com/watch/?v=1"' in html

    def test_youtube_selected_quality_sent(self, client, use_factory):
        factory = use_factory(make_client_factory(respond_json(YOUTUBE_PAYLOAD)))

        html = client.post('/youtube', data={'url': URLS['youtube'], 'quality': '360p'}).get_data(as_text=True)

        assert factory.requests[0].url.params['quality'] == '360'
        assert '<option value="360p" selected>360p</option>' in html
        assert 'href="https://cdn.test/yt/video.mp4"' in html


class TestLookupApi:

    def test_platform_list(self, client):
        data = client.get('/api/platforms').get_json()
        assert [p['key'] for p in data] == list(PATHS)

    def test_success(self, client, use_factory):
        use_factory(make_client_factory(by_platform))

        response = client.post('/api/douyin', json={'url': URLS['douyin']})

        assert response.status_code == 200
        assert response.get_json()['title'] == 'Douyin clip'

    def test_form_encoded_body(self, client, use_factory):
        use_factory(make_client_factory(by_platform))
        response = client.post('/api/terabox', data={'url': URLS['terabox']})
        assert response.get_json()['links'][0]['label'] == 'Download File'

    def test_invalid_url_is_400(self, client, use_factory):
        factory = use_factory(make_client_factory(by_platform))

        response = client.post('/api/instagram', json={'url': ''})

        assert response.status_code == 400
        assert response.get_json() == {
            'error': 'Please enter a valid Instagram URL', 'error_type': 'invalid_url',
        }
        assert factory.requests == []

    def test_network_error_is_502(self, client, use_factory):
        use_factory(make_client_factory(raise_connect_error))

        response = client.post('/api/tiktok', json={'url': URLS['tiktok']})

        assert response.status_code == 502
        assert response.get_json()['error_type'] == 'network'

    def test_unknown_platform(self, client):
        response = client.post('/api/myspace', json={'url': 'https://myspace.com'})
        assert response.status_code == 404
        assert response.get_json() == {'error': 'Route not found'}

    def test_wrong_method_is_json(self, client):
        response = client.get('/api/tiktok')
        assert response.status_code == 405
        assert response.get_json() == {'error': 'Method not allowed'}


class TestYoutubeProxy:

    def test_missing_url(self, client):
        response = client.get('/api/youtube/proxy')

        assert response.status_code == 400
        assert response.get_json() == {'status': 'error', 'message': 'URL parameter is required'}

    def test_relays_json_unchanged(self, client, use_factory):
        factory = use_factory(make_client_factory(respond_json(YOUTUBE_PAYLOAD)))

        response = client.get('/api/youtube/proxy', query_string={'url': 'https://youtu.be/dQw4w9WgXcQ'})

        assert response.status_code == 200
        assert response.get_json() == YOUTUBE_PAYLOAD
        params = factory.requests[0].url.params
        assert params['url'] == 'https://youtu.be/dQw4w9WgXcQ'
        assert params['quality'] == '720'
        assert params['format'] == 'mp4'

    def test_passes_quality(self, client, use_factory):
        factory = use_factory(make_client_factory(respond_json(YOUTUBE_PAYLOAD)))
        client.get('/api/youtube/proxy', query_string={'url': 'https://youtu.be/x', 'quality': '1080'})
        assert factory.requests[0].url.params['quality'] == '1080'

    def test_upstream_failure(self, client, use_factory):
        use_factory(make_client_factory(raise_connect_error))

        response = client.get('/api/youtube/proxy', query_string={'url': 'https://youtu.be/x'})

        assert response.status_code == 500
        body = response.get_json()
        assert body['status'] == 'error'
        assert body['message'] == 'Failed to fetch video data'
        assert 'connection refused' in body['error']

    def test_upstream_not_json(self, client, use_factory):
        use_factory(make_client_factory(lambda request: httpx.Response(200, text='oops')))
        response = client.get('/api/youtube/proxy', query_string={'url': 'https://youtu.be/x'})
        assert response.status_code == 500


class TestPathCase:

    @pytest.mark.parametrize('path,platform', [('/YouTube', 'youtube'), ('/INSTAGRAM', 'instagram'), ('/Douyin', 'douyin')])
    def test_mixed_case_page_renders(self, client, path, platform):
        response = client.get(path)

        assert response.status_code == 200
        assert f'action="/{platform}"'.encode() in response.data

    def test_mixed_case_tiktok_redirects_to_root(self, client):
        response = client.get('/TikTok')
        assert response.status_code == 302
        assert response.headers['Location'].endswith('/')

    def test_mixed_case_submit(self, client, use_factory):
        factory = use_factory(make_client_factory(by_platform))

        html = client.post('/Facebook', data={'url': URLS['facebook']}).get_data(as_text=True)

        assert 'Download HD Quality' in html
        assert factory.requests[0].url.path == '/downloader/facebook'


class TestLookupApiBodies:

    @pytest.mark.parametrize('body', [[URLS['tiktok']], 'https://www.tiktok.com/@a/video/1', 42])
    def test_non_object_json_is_400(self, client, use_factory, body):
        factory = use_factory(make_client_factory(by_platform))

        response = client.post('/api/tiktok', json=body)

        assert response.status_code == 400
        assert response.get_json()['error_type'] == 'invalid_url'
        assert factory.requests == []

    @pytest.mark.parametrize('url', [123, ['https://v.douyin.com/abc/'], {'href': 'x'}])
    def test_non_string_url_is_400(self, client, use_factory, url):
        factory = use_factory(make_client_factory(by_platform))

        response = client.post('/api/douyin', json={'url': url})

        assert response.status_code == 400
        assert response.get_json()['error'] == 'Please enter a valid Douyin URL'
        assert factory.requests == []

    def test_non_string_quality_uses_default(self, client, use_factory):
        factory = use_factory(make_client_factory(respond_json(YOUTUBE_PAYLOAD)))

        response = client.post('/api/youtube', json={'url': URLS['youtube'], 'quality': 1080})

        assert response.status_code == 200
        assert factory.requests[0].url.params['quality'] == '720'


class TestYoutubeProxyRelay:

    def test_json_error_body_relayed(self, client, use_factory):
        payload = {'status': 'error', 'message': 'Invalid API key'}
        use_factory(make_client_factory(respond_json(payload, status_code=403)))

        response = client.get('/api/youtube/proxy', query_string={'url': 'https://youtu.be/x'})

        assert response.status_code == 200
        assert response.get_json() == payload

    def test_non_json_error_body_is_500(self, client, use_factory):
        use_factory(make_client_factory(lambda request: httpx.Response(502, text='Bad Gateway')))

        response = client.get('/api/youtube/proxy', query_string={'url': 'https://youtu.be/x'})

        assert response.status_code == 500
        body = response.get_json()
        assert body['message'] == 'Failed to fetch video data'
        assert body['error'] == 'Bad Gateway'
