"""
Response formatting for Lambda handlers.

Builds the CORS and security headers that go on every response, and maps
results and normalized errors to HttpResponse objects.
"""

import logging
from typing import Any, Dict, Iterable, Optional

from domain.models import HttpResponse, NormalizedError
from services.config import CORS_MODE_ALLOW_LIST, CorsSettings

logger = logging.getLogger(__name__)

SECURITY_HEADERS = {
    'X-Content-Type-Options': 'nosniff',
    'X-Frame-Options': 'DENY',
    'X-XSS-Protection': '1; mode=block',
    'Referrer-Policy': 'strict-origin-when-cross-origin',
}

FEED_HEADERS = {
    'Cache-Control': 'public, s-maxage=300, stale-while-revalidate=600',
    'X-Content-Type-Options': 'nosniff',
}


def resolve_allowed_origin(settings: CorsSettings, origin: Optional[str]) -> str:
    """
    Pick the Access-Control-Allow-Origin value for a request.

    In allow-list mode a recognized origin is echoed back; an absent or
    unrecognized origin falls back to the wildcard.
    """
    if settings.mode == CORS_MODE_ALLOW_LIST and origin and origin in settings.allowed_origins:
        return origin
    return '*'


def cors_headers(
    settings: CorsSettings,
    origin: Optional[str],
    methods: Iterable[str],
    extra_headers: Optional[Dict[str, str]] = None
) -> Dict[str, str]:
    """
    Build the headers attached to every response of a handler.

    Args:
        settings: CORS policy
        origin: Request Origin header (may be None)
        methods: Methods the handler serves; OPTIONS is always added
        extra_headers: Security or caching headers for this handler

    Returns:
        Dict of header name to value
    """
    allowed_methods = [m for m in methods if m != 'OPTIONS'] + ['OPTIONS']
    allow_origin = resolve_allowed_origin(settings, origin)

    headers = {
        'Access-Control-Allow-Origin': allow_origin,
        'Access-Control-Allow-Methods': ', '.join(allowed_methods),
        'Access-Control-Allow-Headers': 'Content-Type',
        'Access-Control-Max-Age': '86400',
    }
    if settings.mode == CORS_MODE_ALLOW_LIST:
        headers['Vary'] = 'Origin'
    if extra_headers:
        headers.update(extra_headers)
    return headers


def preflight_response(headers: Dict[str, str]) -> HttpResponse:
    """OPTIONS short-circuit: 200, no body."""
    return HttpResponse(status_code=200, headers=dict(headers), body=None)


def json_response(status_code: int, body: Dict[str, Any], headers: Dict[str, str]) -> HttpResponse:
    response_headers = dict(headers)
    response_headers['Content-Type'] = 'application/json'
    return HttpResponse(status_code=status_code, headers=response_headers, body=body)


def success_response(body: Dict[str, Any], headers: Dict[str, str]) -> HttpResponse:
    """200 with the given body; "success": true is always set."""
    payload = {'success': True}
    payload.update(body)
    return json_response(200, payload, headers)


def error_response(error: NormalizedError, headers: Dict[str, str]) -> HttpResponse:
    """
    Map a normalized error to a response.

    The internal detail is logged here and never included in the body.
    """
    if error.internal_detail and error.kind != 'client':
        logger.error(
            f"Request failed: kind={error.kind}, status={error.http_status}, "
            f"detail={error.internal_detail}"
        )
    else:
        logger.info(f"Request rejected: status={error.http_status}, error={error.public_message}")

    return json_response(error.http_status, error.to_body(), headers)
