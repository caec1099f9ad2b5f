"""
Contact form request pipeline - core business logic.

This module drives one HTTP request end to end:
1. Compute CORS headers (attached to every response, early exits included)
2. Short-circuit OPTIONS preflight
3. Validate and sanitize the submission
4. Load provider configuration
5. Dispatch exactly one outbound call
6. Format the response

Every failure is normalized into a JSON error response.
No exceptions propagate out of the public methods.
"""

import logging
import time
from typing import Any, Callable, Dict, Optional

from .errors import ContactFormError, UnexpectedError
from .models import DispatchResult, HttpRequest, HttpResponse, Submission
from .validation import validate_method, validate_request
from services import config as config_service
from services import responses as response_service

logger = logging.getLogger(__name__)

FEED_ERROR_MESSAGE = 'Unable to load feed.'


class ContactProcessor:
    """
    Handles the write-path pipeline shared by every contact form endpoint.

    The provider-specific parts are injected:
        load_config: returns the provider config or raises ConfigurationError
        dispatcher: object with dispatch(submission, config) -> DispatchResult
        success_body: maps the DispatchResult to the success response fields
    """

    allowed_methods = ('POST',)

    def __init__(
        self,
        name: str,
        load_config: Callable[[], Any],
        dispatcher: Any,
        success_body: Callable[[DispatchResult], Dict[str, Any]],
        load_cors: Callable[[], config_service.CorsSettings] = config_service.load_cors_settings
    ):
        self.name = name
        self.load_config = load_config
        self.dispatcher = dispatcher
        self.success_body = success_body
        self.load_cors = load_cors

    def handle(self, request: HttpRequest) -> HttpResponse:
        """
        Process a single request.

        Args:
            request: Runtime-neutral request

        Returns:
            HttpResponse (always carries CORS headers)
        """
        headers = response_service.cors_headers(
            self.load_cors(),
            request.origin,
            self.allowed_methods,
            extra_headers=response_service.SECURITY_HEADERS
        )

        if request.method == 'OPTIONS':
            return response_service.preflight_response(headers)

        logger.info(f"[{self.name}] {request.method} {request.path or '/'}")

        try:
            submission = validate_request(request, self.allowed_methods)
            logger.info(
                f"[{self.name}] Validated: name_length={len(submission.name)}, "
                f"message_length={len(submission.message)}"
            )

            provider_config = self.load_config()

            result = self._dispatch(submission, provider_config)

            return response_service.success_response(self.success_body(result), headers)

        except ContactFormError as e:
            return response_service.error_response(e.to_normalized(), headers)

        except Exception as e:
            logger.error(f"[{self.name}] Unexpected error: {e}", exc_info=True)
            return response_service.error_response(
                UnexpectedError.from_exception(e).to_normalized(),
                headers
            )

    def _dispatch(self, submission: Submission, provider_config: Any) -> DispatchResult:
        """Make the single outbound call and time it."""
        start_time = time.time()
        try:
            return self.dispatcher.dispatch(submission, provider_config)
        except Exception as e:
            logger.warning(f"[{self.name}] Dispatch failed: {DispatchResult.from_error(e)!r}")
            raise
        finally:
            logger.info(f"[{self.name}] Dispatch took {time.time() - start_time:.3f}s")


class FeedProcessor:
    """
    Handles the read-only feed endpoint.

    Only a wrong method produces a non-200 status. Missing configuration,
    provider failures, timeouts and unexpected errors all degrade to
    200 {ok: false, feed: []}.
    """

    allowed_methods = ('GET',)

    def __init__(
        self,
        fetcher: Any,
        load_config: Callable[[], Any] = config_service.load_instagram_config,
        load_cors: Callable[[], config_service.CorsSettings] = config_service.load_cors_settings,
        extra_headers: Optional[Dict[str, str]] = None
    ):
        self.fetcher = fetcher
        self.load_config = load_config
        self.load_cors = load_cors
        self.extra_headers = response_service.FEED_HEADERS if extra_headers is None else extra_headers

    def handle(self, request: HttpRequest) -> HttpResponse:
        headers = response_service.cors_headers(
            self.load_cors(),
            request.origin,
            self.allowed_methods,
            extra_headers=self.extra_headers
        )

        if request.method == 'OPTIONS':
            return response_service.preflight_response(headers)

        try:
            validate_method(request.method, self.allowed_methods)
        except ContactFormError as e:
            return response_service.error_response(e.to_normalized(), headers)

        try:
            result = self.fetcher.fetch(self.load_config)
        except Exception as e:
            logger.error(f"Instagram feed error: {e}", exc_info=True)
            return response_service.json_response(
                200,
                {'ok': False, 'feed': [], 'message': FEED_ERROR_MESSAGE},
                headers
            )

        return response_service.json_response(200, result.to_body(), headers)
