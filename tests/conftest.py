"""
Pytest configuration and fixtures for all tests.
"""

import json
import os
import sys
import pytest
from unittest.mock import Mock

# Add src and hooks to Python path before any imports
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '../src'))
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '../hooks'))

# Set up test environment variables before importing any modules
os.environ.setdefault('AWS_DEFAULT_REGION', 'us-east-1')
os.environ.setdefault('AWS_REGION', 'us-east-1')
os.environ.setdefault('ENVIRONMENT', 'test')
os.environ.setdefault('LOG_LEVEL', 'INFO')

PROVIDER_ENV_VARS = (
    'GITHUB_TOKEN', 'GITHUB_OWNER', 'GITHUB_REPO', 'GITHUB_LABELS',
    'RESEND_API_KEY', 'CONTACT_EMAIL', 'FROM_EMAIL', 'EMAIL_TRANSPORT', 'SITE_NAME',
    'INSTAGRAM_ACCESS_TOKEN', 'INSTAGRAM_USER_ID', 'INSTAGRAM_API_VERSION',
    'CORS_MODE', 'ALLOWED_ORIGINS',
)


@pytest.fixture(autouse=True)
def clean_provider_env(monkeypatch):
    """Every test starts with no provider or CORS configuration."""
    for name in PROVIDER_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    yield


@pytest.fixture
def github_env(monkeypatch):
    monkeypatch.setenv('GITHUB_TOKEN', 'ghp_test_token')
    monkeypatch.setenv('GITHUB_OWNER', 'studio')
    monkeypatch.setenv('GITHUB_REPO', 'inquiries')


@pytest.fixture
def resend_env(monkeypatch):
    monkeypatch.setenv('RESEND_API_KEY', 're_test_key')
    monkeypatch.setenv('CONTACT_EMAIL', 'studio@example.com')


@pytest.fixture
def instagram_env(monkeypatch):
    monkeypatch.setenv('INSTAGRAM_ACCESS_TOKEN', 'ig_test_token')
    monkeypatch.setenv('INSTAGRAM_USER_ID', '17841400000000000')


@pytest.fixture
def lambda_context():
    """Mock Lambda context."""
    context = Mock()
    context.request_id = "test-request-id"
    context.invoked_function_arn = "arn:aws:lambda:us-east-1:123456789012:function:test"
    return context


@pytest.fixture
def make_event():
    """Build an API Gateway (payload v1) proxy event."""
    def _make_event(method='POST', body=None, headers=None, path='/'):
        event_headers = {'Content-Type': 'application/json'}
        if headers is not None:
            event_headers = headers
        return {
            'httpMethod': method,
            'path': path,
            'headers': event_headers,
            'body': json.dumps(body) if isinstance(body, (dict, list)) else body,
            'isBase64Encoded': False,
        }
    return _make_event


@pytest.fixture
def valid_body():
    return {
        'name': 'Ana',
        'email': 'ana@example.com',
        'message': 'I want a sleeve tattoo design'
    }


def mock_http_response(status_code=200, json_data=None, text=None):
    """requests.Response stand-in."""
    response = Mock()
    response.status_code = status_code
    response.ok = 200 <= status_code < 300
    if json_data is None:
        response.json.side_effect = ValueError("No JSON object could be decoded")
    else:
        response.json.return_value = json_data
    response.text = text if text is not None else json.dumps(json_data or {})
    return response
