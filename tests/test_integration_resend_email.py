"""
Tests for Resend email integration.
"""

import pytest
import requests
from unittest.mock import patch
import sys
import os

# Add src to path for imports
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '../src'))

from conftest import mock_http_response
from domain.errors import ProviderError, ProviderTimeoutError
from domain.models import EmailConfig
from integrations import resend_email

CONFIG = EmailConfig(
    api_key='re_test_key',
    recipient='studio@example.com',
    from_address='Studio <onboarding@resend.dev>'
)


class TestSendEmail:
    """Test send_email function."""

    @patch('integrations.resend_email.requests.post')
    def test_send_email_success(self, mock_post):
        mock_post.return_value = mock_http_response(200, {'id': 'email-123'})

        result = resend_email.send_email(
            CONFIG,
            subject='Tattoo inquiry from Ana',
            html_body='<p>Hi</p>',
            reply_to='ana@example.com'
        )

        assert result.ok is True
        assert result.external_id == 'email-123'

        args, kwargs = mock_post.call_args
        assert args[0] == 'https://api.resend.com/emails'
        assert kwargs['headers']['Authorization'] == 'Bearer re_test_key'
        assert kwargs['json'] == {
            'from': 'Studio <onboarding@resend.dev>',
            'to': ['studio@example.com'],
            'subject': 'Tattoo inquiry from Ana',
            'html': '<p>Hi</p>',
            'reply_to': 'ana@example.com'
        }
        assert kwargs['timeout'] == 10

    @patch('integrations.resend_email.requests.post')
    def test_send_email_without_reply_to(self, mock_post):
        mock_post.return_value = mock_http_response(200, {'id': 'email-123'})

        resend_email.send_email(CONFIG, subject='s', html_body='h')

        assert 'reply_to' not in mock_post.call_args[1]['json']

    @patch('integrations.resend_email.requests.post')
    def test_send_email_provider_error(self, mock_post):
        mock_post.return_value = mock_http_response(422, {'message': 'Invalid `from` field'})

        with pytest.raises(ProviderError) as exc_info:
            resend_email.send_email(CONFIG, subject='s', html_body='h')

        assert exc_info.value.status_code == 422
        assert exc_info.value.public_message == 'Failed to send your message. Please try again later.'

    @patch('integrations.resend_email.requests.post')
    def test_send_email_provider_error_without_json(self, mock_post):
        mock_post.return_value = mock_http_response(502, None, text='Bad Gateway')

        with pytest.raises(ProviderError):
            resend_email.send_email(CONFIG, subject='s', html_body='h')

    @patch('integrations.resend_email.requests.post')
    def test_send_email_timeout(self, mock_post):
        mock_post.side_effect = requests.exceptions.ConnectTimeout("connect timed out")

        with pytest.raises(ProviderTimeoutError):
            resend_email.send_email(CONFIG, subject='s', html_body='h')

        assert mock_post.call_count == 1
