"""
Request validation and sanitization for contact form submissions.

Validation short-circuits on the first failing rule and raises
RequestValidationError with a message that is safe to return to the caller.
No external call is made for a request that fails here.
"""

import json
import logging
import re
from typing import Any, Dict, Iterable, List, Optional

from .errors import RequestValidationError
from .models import HttpRequest, Submission

logger = logging.getLogger(__name__)

MAX_NAME_LENGTH = 100
MAX_EMAIL_LENGTH = 255
MIN_MESSAGE_LENGTH = 10
MAX_MESSAGE_LENGTH = 5000

REQUIRED_FIELDS = ('name', 'email', 'message')

# Simplified RFC 5322: permissive local part, domain of 1-63 char labels
# without leading or trailing hyphens.
EMAIL_PATTERN = re.compile(
    r"[a-zA-Z0-9.!#$%&'*+/=?^_`{|}~-]+"
    r"@[a-zA-Z0-9](?:[a-zA-Z0-9-]{0,61}[a-zA-Z0-9])?"
    r"(?:\.[a-zA-Z0-9](?:[a-zA-Z0-9-]{0,61}[a-zA-Z0-9])?)*"
)

# Unrolled loop: consumes everything up to the first closing tag, even when
# the block contains things that look like nested tags.
SCRIPT_BLOCK_PATTERN = re.compile(
    r'<script\b[^<]*(?:(?!</script>)<[^<]*)*</script>',
    re.IGNORECASE
)
JAVASCRIPT_SCHEME_PATTERN = re.compile(r'javascript:', re.IGNORECASE)
EVENT_HANDLER_PATTERN = re.compile(r'on\w+\s*=', re.IGNORECASE | re.ASCII)


def sanitize_text(text: str) -> str:
    """
    Strip script injection patterns from free text.

    Removes <script> blocks, "javascript:" scheme occurrences and inline
    event-handler attributes ("onclick=", "onerror =", ...). This is a
    defense-in-depth filter, not an HTML sanitizer: other markup survives.

    Args:
        text: Untrusted input

    Returns:
        str: Input with the patterns above removed

    Example:
        >>> sanitize_text('Hi <script>alert(1)</script><b onclick="x()">there</b>')
        'Hi <b "x()">there</b>'
    """
    result = SCRIPT_BLOCK_PATTERN.sub('', str(text))
    result = JAVASCRIPT_SCHEME_PATTERN.sub('', result)
    result = EVENT_HANDLER_PATTERN.sub('', result)
    return result


def is_valid_email(email: str) -> bool:
    """Check an already-trimmed address against the simplified RFC 5322 pattern."""
    return EMAIL_PATTERN.fullmatch(email) is not None


def validate_method(method: str, allowed_methods: Iterable[str]) -> None:
    """
    Reject methods the handler does not serve.

    Raises:
        RequestValidationError: 405 with the allowed methods attached
    """
    allowed = list(allowed_methods)
    if method.upper() not in allowed:
        raise RequestValidationError(
            'Method not allowed',
            http_status=405,
            allowed_methods=allowed
        )


def validate_content_type(content_type: Optional[str]) -> None:
    """
    Reject bodies explicitly declared as something other than JSON.

    A missing Content-Type is tolerated; the body is still parsed as JSON.

    Raises:
        RequestValidationError: 415 for non-JSON media types
    """
    if not content_type:
        return

    media_type = content_type.split(';', 1)[0].strip().lower()
    if media_type != 'application/json' and not media_type.endswith('+json'):
        raise RequestValidationError('Unsupported media type', http_status=415)


def parse_body(raw_body: Any) -> Dict[str, Any]:
    """
    Decode the request body into a JSON object.

    Args:
        raw_body: Body string/bytes, or a dict for direct invocations

    Returns:
        Dict: Decoded JSON object

    Raises:
        RequestValidationError: 400 when the body is missing, not JSON,
            or not a JSON object
    """
    if isinstance(raw_body, dict):
        return raw_body

    if raw_body is None or raw_body == '' or raw_body == b'':
        raise RequestValidationError('Invalid request body')

    try:
        decoded = json.loads(raw_body)
    except (json.JSONDecodeError, UnicodeDecodeError, TypeError) as e:
        logger.info(f"Rejecting undecodable request body: {e}")
        raise RequestValidationError('Invalid request body')

    if not isinstance(decoded, dict):
        raise RequestValidationError('Invalid request body')

    return decoded


def _field_text(body: Dict[str, Any], name: str) -> str:
    value = body.get(name)
    if not isinstance(value, str):
        return ''
    return value.strip()


def validate_submission(body: Dict[str, Any]) -> Submission:
    """
    Validate and sanitize a decoded contact form body.

    Rules, in order: presence after trimming, name length, email length,
    email format, message length, presence after sanitizing. All bounds
    are inclusive.

    Args:
        body: Decoded JSON object

    Returns:
        Submission: Trimmed, sanitized submission (email lower-cased)

    Raises:
        RequestValidationError: 400 describing the first failing rule
    """
    name = _field_text(body, 'name')
    email = _field_text(body, 'email').lower()
    message = _field_text(body, 'message')

    missing: List[str] = [
        field_name for field_name, value in zip(REQUIRED_FIELDS, (name, email, message))
        if not value
    ]
    if missing:
        logger.info(f"Missing fields: {missing}")
        raise RequestValidationError('Missing required fields')

    if len(name) > MAX_NAME_LENGTH:
        raise RequestValidationError(f'Name must be 1-{MAX_NAME_LENGTH} characters')

    if len(email) > MAX_EMAIL_LENGTH:
        raise RequestValidationError(f'Email must be 1-{MAX_EMAIL_LENGTH} characters')

    if not is_valid_email(email):
        raise RequestValidationError('Invalid email format')

    if not MIN_MESSAGE_LENGTH <= len(message) <= MAX_MESSAGE_LENGTH:
        raise RequestValidationError(
            f'Message must be {MIN_MESSAGE_LENGTH}-{MAX_MESSAGE_LENGTH} characters'
        )

    submission = Submission(
        name=sanitize_text(name),
        email=sanitize_text(email),
        message=sanitize_text(message)
    )

    # A field made only of stripped patterns is as good as missing
    sanitized = (submission.name, submission.email, submission.message)
    emptied = [
        field_name for field_name, value in zip(REQUIRED_FIELDS, sanitized)
        if not value.strip()
    ]
    if emptied:
        logger.info(f"Fields empty after sanitizing: {emptied}")
        raise RequestValidationError('Missing required fields')

    return submission


def validate_request(request: HttpRequest, allowed_methods: Iterable[str] = ('POST',)) -> Submission:
    """
    Run every request-level check and return the sanitized submission.

    Raises:
        RequestValidationError: On the first failing check (405, 415 or 400)
    """
    validate_method(request.method, allowed_methods)
    validate_content_type(request.header('content-type'))
    body = parse_body(request.body)
    return validate_submission(body)
