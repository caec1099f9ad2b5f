"""
Tests for the instagram-feed Lambda handler.
"""

import json
import requests
from unittest.mock import patch
import sys
import os

# Add src to path for imports
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '../src'))

import instagram_feed_handler
from conftest import mock_http_response


def _get_event(origin=None):
    headers = {'Origin': origin} if origin else {}
    return {
        'version': '2.0',
        'rawPath': '/instagram-feed',
        'requestContext': {'http': {'method': 'GET'}},
        'headers': headers
    }


def _body(response):
    return json.loads(response['body'])


class TestLambdaHandler:
    """Test the feed handler; failures must stay soft."""

    def test_not_configured(self, lambda_context):
        response = instagram_feed_handler.lambda_handler(_get_event(), lambda_context)

        assert response['statusCode'] == 200
        body = _body(response)
        assert body['ok'] is False
        assert body['feed'] == []
        assert body['message'].startswith('Instagram feed not configured')
        assert response['headers']['Access-Control-Allow-Origin'] == '*'

    @patch('integrations.instagram_graph.requests.get')
    def test_success(self, mock_get, instagram_env, lambda_context):
        mock_get.return_value = mock_http_response(200, {'data': [
            {
                'id': '1',
                'media_type': 'IMAGE',
                'media_url': 'https://cdn.example/1.jpg',
                'caption': 'Fine line rose',
                'permalink': 'https://www.instagram.com/p/abc/'
            },
            {'id': '2', 'media_type': 'VIDEO', 'media_url': 'https://cdn.example/2.mp4'},
        ]})

        response = instagram_feed_handler.lambda_handler(_get_event(), lambda_context)

        assert response['statusCode'] == 200
        assert _body(response) == {
            'ok': True,
            'feed': [{
                'id': '1',
                'url': 'https://cdn.example/1.jpg',
                'thumb': 'https://cdn.example/1.jpg',
                'caption': 'Fine line rose',
                'link': 'https://www.instagram.com/p/abc/'
            }]
        }
        assert 's-maxage=300' in response['headers']['Cache-Control']

    @patch('integrations.instagram_graph.requests.get')
    def test_provider_error_is_soft(self, mock_get, instagram_env, lambda_context):
        mock_get.return_value = mock_http_response(400, None, text='token expired')

        response = instagram_feed_handler.lambda_handler(_get_event(), lambda_context)

        assert response['statusCode'] == 200
        assert _body(response) == {'ok': False, 'feed': [], 'message': 'Unable to load Instagram feed.'}

    @patch('integrations.instagram_graph.requests.get')
    def test_timeout_is_soft(self, mock_get, instagram_env, lambda_context):
        mock_get.side_effect = requests.exceptions.Timeout()

        response = instagram_feed_handler.lambda_handler(_get_event(), lambda_context)

        assert response['statusCode'] == 200
        assert _body(response) == {'ok': False, 'feed': [], 'message': 'Request timeout.'}

    def test_post_not_allowed(self, make_event, valid_body, lambda_context):
        response = instagram_feed_handler.lambda_handler(make_event(body=valid_body), lambda_context)

        assert response['statusCode'] == 405
        assert 'error' in _body(response)
        assert 'Access-Control-Allow-Origin' in response['headers']

    def test_preflight(self, make_event, lambda_context):
        response = instagram_feed_handler.lambda_handler(make_event(method='OPTIONS'), lambda_context)

        assert response['statusCode'] == 200
        assert response['body'] == ''
        assert response['headers']['Access-Control-Allow-Methods'] == 'GET, OPTIONS'
