"""
Tests for domain models and the error taxonomy.
"""

import json
import pytest
import sys
import os

# Add src to path for imports
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '../src'))

from domain.errors import (
    ConfigurationError,
    ProviderError,
    ProviderTimeoutError,
    RequestValidationError,
    UnexpectedError,
)
from domain.models import (
    DispatchResult,
    FeedItem,
    FeedResult,
    HttpRequest,
    HttpResponse,
    NormalizedError,
    Submission,
)


class TestHttpRequest:
    """Test HttpRequest dataclass."""

    def test_header_lookup_is_case_insensitive(self):
        request = HttpRequest(method='POST', headers={'content-type': 'application/json'})

        assert request.header('Content-Type') == 'application/json'
        assert request.header('X-Missing') is None

    def test_origin(self):
        request = HttpRequest(method='GET', headers={'origin': 'https://studio.example'})

        assert request.origin == 'https://studio.example'


class TestHttpResponse:
    """Test HttpResponse rendering."""

    def test_to_lambda_with_body(self):
        response = HttpResponse(status_code=200, headers={'A': 'b'}, body={'success': True})

        rendered = response.to_lambda()

        assert rendered['statusCode'] == 200
        assert rendered['headers'] == {'A': 'b'}
        assert json.loads(rendered['body']) == {'success': True}

    def test_to_lambda_empty_body(self):
        rendered = HttpResponse(status_code=200).to_lambda()

        assert rendered['body'] == ''


class TestSubmission:
    """Test Submission dataclass."""

    def test_submission_is_immutable(self):
        submission = Submission(name='Ana', email='ana@example.com', message='A sleeve design')

        with pytest.raises(AttributeError):
            submission.name = 'Other'


class TestDispatchResult:
    """Test DispatchResult dataclass."""

    def test_success_repr(self):
        result = DispatchResult(ok=True, external_id=42, url='https://github.com/s/r/issues/42')

        assert repr(result) == "DispatchResult(ok=True, external_id=42)"

    def test_failure_repr(self):
        result = DispatchResult(ok=False, error_message='boom')

        assert repr(result) == "DispatchResult(ok=False, error=boom)"

    def test_from_provider_error_keeps_internal_detail(self):
        result = DispatchResult.from_error(ProviderError('GitHub API returned 502: upstream', status_code=502))

        assert result.ok is False
        assert result.external_id is None
        assert result.error_message == 'GitHub API returned 502: upstream'

    def test_from_unexpected_exception(self):
        result = DispatchResult.from_error(KeyError('number'))

        assert result.ok is False
        assert result.error_message == "KeyError: 'number'"


class TestFeedResult:
    """Test FeedResult serialization."""

    def test_to_body_with_items(self):
        item = FeedItem(id='1', url='https://cdn/1.jpg', thumb='https://cdn/1.jpg', caption='Rose', link='https://ig/p/1')

        body = FeedResult(ok=True, feed=[item]).to_body()

        assert body == {
            'ok': True,
            'feed': [{
                'id': '1',
                'url': 'https://cdn/1.jpg',
                'thumb': 'https://cdn/1.jpg',
                'caption': 'Rose',
                'link': 'https://ig/p/1'
            }]
        }

    def test_to_body_soft_failure(self):
        body = FeedResult(ok=False, message='Unable to load Instagram feed.').to_body()

        assert body == {'ok': False, 'feed': [], 'message': 'Unable to load Instagram feed.'}


class TestNormalizedError:
    """Test NormalizedError serialization."""

    def test_body_never_contains_internal_detail(self):
        error = NormalizedError(
            kind='provider',
            http_status=500,
            public_message='Failed',
            internal_detail='token ghp_secret rejected'
        )

        assert error.to_body() == {'error': 'Failed'}

    def test_body_includes_allowed_methods(self):
        error = NormalizedError(kind='client', http_status=405, public_message='Method not allowed', allowed_methods=['POST'])

        assert error.to_body() == {'error': 'Method not allowed', 'allowedMethods': ['POST']}


class TestErrorTaxonomy:
    """Test mapping of exceptions to normalized errors."""

    def test_validation_error_is_public(self):
        normalized = RequestValidationError('Invalid email format').to_normalized()

        assert normalized.kind == 'client'
        assert normalized.http_status == 400
        assert normalized.public_message == 'Invalid email format'

    def test_configuration_error_hides_variable_names(self):
        normalized = ConfigurationError('Missing environment variables: GITHUB_TOKEN').to_normalized()

        assert normalized.kind == 'configuration'
        assert normalized.http_status == 500
        assert normalized.public_message == 'Server configuration error. Please contact the administrator.'
        assert 'GITHUB_TOKEN' in normalized.internal_detail
        assert 'GITHUB_TOKEN' not in json.dumps(normalized.to_body())

    def test_provider_error(self):
        error = ProviderError('GitHub API returned 401: Bad credentials', status_code=401)
        normalized = error.to_normalized()

        assert error.status_code == 401
        assert normalized.http_status == 500
        assert normalized.public_message == 'Failed to process your inquiry. Please try again later.'

    def test_provider_error_custom_public_message(self):
        normalized = ProviderError('down', public_message='Failed to send your message.').to_normalized()

        assert normalized.public_message == 'Failed to send your message.'

    def test_timeout_error(self):
        normalized = ProviderTimeoutError('GitHub API timeout after 10s').to_normalized()

        assert normalized.kind == 'timeout'
        assert normalized.http_status == 504
        assert normalized.public_message == 'Request timeout. Please try again.'

    def test_unexpected_error_from_exception(self):
        normalized = UnexpectedError.from_exception(KeyError('number')).to_normalized()

        assert normalized.kind == 'unexpected'
        assert normalized.http_status == 500
        assert normalized.public_message == 'An unexpected error occurred. Please try again later.'
        assert normalized.internal_detail.startswith('KeyError')
