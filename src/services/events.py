"""
Lambda event parsing utilities.

Converts the proxy events delivered by API Gateway (REST, payload v1),
HTTP APIs and Function URLs (payload v2), or a direct invocation into a
runtime-neutral HttpRequest.
"""

import base64
import binascii
import logging
from typing import Any, Dict

from domain.models import HttpRequest

logger = logging.getLogger(__name__)


def _normalize_headers(raw_headers: Any) -> Dict[str, str]:
    if not isinstance(raw_headers, dict):
        return {}
    return {
        str(key).lower(): str(value)
        for key, value in raw_headers.items()
        if value is not None
    }


def _extract_method(event: Dict[str, Any]) -> str:
    # Payload v1 carries httpMethod at the top level
    method = event.get('httpMethod')
    if not method:
        # Payload v2 (HTTP API, Function URL)
        request_context = event.get('requestContext') or {}
        http = request_context.get('http') if isinstance(request_context, dict) else None
        method = http.get('method') if isinstance(http, dict) else None
    if not method:
        # Direct invocation without a method is treated as a POST
        method = 'POST' if 'body' in event else 'GET'
    return str(method).upper()


def _extract_body(event: Dict[str, Any]) -> Any:
    body = event.get('body')

    if isinstance(body, str) and event.get('isBase64Encoded'):
        try:
            return base64.b64decode(body).decode('utf-8')
        except (binascii.Error, UnicodeDecodeError) as e:
            logger.warning(f"Failed to decode base64 request body: {e}")
            return None

    return body


def request_from_event(event: Dict[str, Any]) -> HttpRequest:
    """
    Build an HttpRequest from a Lambda proxy event.

    Args:
        event: Lambda event dict

    Returns:
        HttpRequest with upper-case method and lower-case header names

    Example:
        >>> request = request_from_event({'httpMethod': 'options', 'headers': {'Origin': 'https://a.test'}})
        >>> request.method, request.origin
        ('OPTIONS', 'https://a.test')
    """
    event = event or {}

    path = event.get('path') or event.get('rawPath') or ''

    return HttpRequest(
        method=_extract_method(event),
        headers=_normalize_headers(event.get('headers')),
        body=_extract_body(event),
        path=path
    )
